"""Shared fixtures for the CitizenAIR test-suite."""

from datetime import datetime, timezone

import pytest

from citizenair.core.vocabulary import WordCloudVocabulary
from citizenair.core.word_frequency import WordFrequencyExtractor
from citizenair.models import DistrictIdeaORM


@pytest.fixture
def test_vocabulary() -> WordCloudVocabulary:
    """Small vocabulary so expected counts can be worked out by hand."""
    return WordCloudVocabulary(
        keyword_groups={
            "ปลูก": ["ปลูกต้นไม้", "ปลูกไผ่", "ปลูกพืช"],
            "กรอง": ["กรองอากาศ", "เครื่องกรอง"],
            "DIY": ["DIY", "ทำเอง"],
        },
        stopwords=["ที่", "และ", "ช่วยกัน"],
    )


@pytest.fixture
def extractor(test_vocabulary) -> WordFrequencyExtractor:
    return WordFrequencyExtractor(vocabulary=test_vocabulary)


@pytest.fixture
def make_idea_orm():
    """Factory for DistrictIdeaORM rows as they would come back from the database."""
    def _make(idea_id: int, idea: str, district: str = "แม่ริม", **overrides) -> DistrictIdeaORM:
        fields = dict(
            id=idea_id,
            district=district,
            province="เชียงใหม่",
            idea=idea,
            author="ชุมชนแม่ริม",
            created_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
            approved=True,
        )
        fields.update(overrides)
        return DistrictIdeaORM(**fields)
    return _make
