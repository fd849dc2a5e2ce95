"""
Keyword groups and stopwords used to build district word clouds.

A ``WordCloudVocabulary`` is immutable. It is built once per process, either from
the built-in air-quality defaults or from a YAML file, and shared by reference
between extractor instances and concurrent requests.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

THAI_SCRIPT_RANGE = "\u0E00-\u0E7F"


class VocabularyError(Exception):
    """Raised when a vocabulary file cannot be read or has the wrong shape."""


class KeywordGroup(BaseModel):
    """
    A canonical display term and the surface forms that count towards it.
    """
    term: str = Field(..., min_length=1)
    variants: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @field_validator("variants", mode="before")
    @classmethod
    def drop_empty_variants(cls, v: Any) -> Any:
        # An empty variant would be a substring of every text
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(str(item) for item in v if item is not None and str(item) != "")
        return v


class WordCloudVocabulary(BaseModel):
    """
    Static configuration of the word-frequency extractor.

    Attributes:
        keyword_groups: Curated groups, matched in order.
        stopwords: Function words never counted as free tokens.
        script_range: Regex character-class body of the target script. Free tokens
                      must contain at least one character from it.
    """
    keyword_groups: tuple[KeywordGroup, ...] = ()
    stopwords: frozenset[str] = frozenset()
    script_range: str = THAI_SCRIPT_RANGE

    model_config = {"frozen": True}

    @field_validator("keyword_groups", mode="before")
    @classmethod
    def groups_from_mapping(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, Mapping):
            return tuple({"term": term, "variants": variants or ()} for term, variants in v.items())
        return v

    @field_validator("stopwords", mode="before")
    @classmethod
    def normalise_stopwords(cls, v: Any) -> Any:
        if v is None:
            return frozenset()
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(str(word).lower().strip() for word in v if word is not None)
        return v

    @field_validator("script_range", mode="before")
    @classmethod
    def default_script_range(cls, v: Any) -> Any:
        return THAI_SCRIPT_RANGE if v in (None, "") else v

    @property
    def variants(self) -> tuple[str, ...]:
        """All variants of all groups, in configuration order."""
        return tuple(variant for group in self.keyword_groups for variant in group.variants)


DEFAULT_KEYWORD_GROUPS: dict[str, tuple[str, ...]] = {
    "ปลูก": ("ปลูกต้นไม้", "ปลูกไผ่", "ปลูกพืช"),
    "กรอง": ("กรองอากาศ", "เครื่องกรอง", "กรองฝุ่น"),
    "ลด": ("ลดฝุ่น", "ลดมลพิษ", "ลดการเผา"),
    "เผา": ("ไม่เผา", "เผาใส", "เผาขยะ"),
    "รณรงค์": ("รณรงค์",),
    "DIY": ("DIY", "ทำเอง"),
    "HEPA": ("HEPA", "ไส้กรอง"),
    "พัดลม": ("พัดลม",),
    "ไผ่": ("ไผ่", "ต้นไผ่"),
    "ปุ่ย": ("ปุ่ยหมัก", "ปุ่ยชีวภาพ"),
    "หมัก": ("หมัก", "ย่อยสลาย"),
    "น้ำ": ("น้ำพ่น", "พ่นน้ำ"),
    "ถนน": ("ถนน", "ท้องถนน"),
}

DEFAULT_STOPWORDS: frozenset[str] = frozenset({
    "ที่", "และ", "ใน", "การ", "ของ", "จะ", "ให้", "มี", "เป็น", "ได้",
    "จาก", "กับ", "ไป", "มา", "ถึง", "ก็", "ไม่", "ใช้", "ทำ", "ดี",
    "เพื่อ", "หรือ", "แล้ว", "กัน", "ทุก", "เพิ่ม", "ลด", "นี้", "นั่น", "โดย",
    "เพราะ", "ถ้า", "แต่", "ซึ่ง", "ผู้", "คน", "ใคร", "อะไร", "ไหน", "เมื่อ",
    "ยัง", "แค่", "เพียง", "เรา", "ฉัน", "กิน", "ดู", "ฟัง", "อ่าน", "เขียน",
    "วิ่ง", "เดิน", "นั่ง", "ยืน", "นอน", "ตื่น", "เก็บ", "อยู่", "มาก", "น้อย",
    "บ้าง", "เท่านั้น", "เท่านี้", "อีก", "คือ", "แม้", "ขณะ", "เวลา", "หลัง", "ก่อน",
})


def default_vocabulary() -> WordCloudVocabulary:
    """Vocabulary tuned for community ideas about PM2.5 and air quality."""
    return WordCloudVocabulary(keyword_groups=DEFAULT_KEYWORD_GROUPS, stopwords=DEFAULT_STOPWORDS)


def load_vocabulary(path: Union[str, Path]) -> WordCloudVocabulary:
    """
    Loads a vocabulary from a YAML file.

    Expected layout::

        keyword_groups:
          ปลูก: [ปลูกต้นไม้, ปลูกไผ่]
        stopwords: [ที่, และ]
        script_range: "\\u0E00-\\u0E7F"   # optional

    Missing sections are treated as empty.

    Raises:
        VocabularyError: If the file is missing, is not valid YAML, or does not
                         describe a vocabulary.
    """
    config_path = Path(path)
    try:
        with open(config_path, "rt", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise VocabularyError(f"Cannot read vocabulary file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise VocabularyError(f"Invalid YAML in vocabulary file {config_path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise VocabularyError(f"Vocabulary file {config_path} must contain a mapping, got {type(raw).__name__}")

    try:
        vocabulary = WordCloudVocabulary(
            keyword_groups=raw.get("keyword_groups"),
            stopwords=raw.get("stopwords"),
            script_range=raw.get("script_range"),
        )
    except ValidationError as e:
        raise VocabularyError(f"Invalid vocabulary in {config_path}: {e}") from e

    logger.info(
        "Loaded vocabulary from %s: %d keyword groups, %d stopwords",
        config_path,
        len(vocabulary.keyword_groups),
        len(vocabulary.stopwords),
    )
    return vocabulary


@lru_cache
def get_vocabulary(path: Optional[str] = None) -> WordCloudVocabulary:
    """Returns the process-wide vocabulary for ``path`` (built-in defaults when None)."""
    if path:
        return load_vocabulary(path)
    return default_vocabulary()
