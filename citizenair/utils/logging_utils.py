import logging
import logging.config
from pathlib import Path
from typing import Optional

import yaml

from ..config.settings import settings

DEFAULT_LOGGING_CONFIG_PATH = Path(settings.LOGGING_CONFIG_PATH)


def setup_logging(config_path: Path = DEFAULT_LOGGING_CONFIG_PATH, level: Optional[str] = None) -> None:
    """
    Set up logging configuration from a YAML file.

    Args:
        config_path (Path): Path to the logging configuration YAML file.
        level (str, optional): Overrides the level of the ``citizenair`` logger.
    """
    if config_path.exists():
        try:
            with open(config_path, 'rt', encoding='utf-8') as f:
                log_config = yaml.safe_load(f.read())
            logging.config.dictConfig(log_config)
            if level:
                logging.getLogger("citizenair").setLevel(level.upper())
            logging.getLogger(__name__).info("Logging configured successfully from %s", config_path)
        except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
            logging.basicConfig(level=logging.INFO)  # Basic config as fallback
            logging.error("Error loading logging configuration from %s: %s. Using basicConfig.", config_path, e)
    else:
        logging.basicConfig(level=logging.INFO)
        if level:
            logging.getLogger("citizenair").setLevel(level.upper())
        logging.warning("Logging configuration file not found at %s. Using basicConfig.", config_path)


# Call setup_logging() explicitly during application startup (api.main or the CLI),
# not on import.
