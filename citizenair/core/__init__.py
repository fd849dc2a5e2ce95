"""
Core components for the CitizenAIR service.
"""

from .vocabulary import (
    KeywordGroup,
    VocabularyError,
    WordCloudVocabulary,
    default_vocabulary,
    get_vocabulary,
    load_vocabulary,
)
from .word_frequency import WordFrequencyExtractor
from .idea_service import IdeaService, IdeaValidationError

__all__ = [
    "KeywordGroup",
    "VocabularyError",
    "WordCloudVocabulary",
    "default_vocabulary",
    "get_vocabulary",
    "load_vocabulary",
    "WordFrequencyExtractor",
    "IdeaService",
    "IdeaValidationError",
]
