"""
Models package for the CitizenAIR service.

This package contains SQLAlchemy ORM models and Pydantic DTOs.
"""

# Ensure all ORM models are registered with the Base metadata when this package is imported.
from . import base
from . import district_idea_orm

from .base import Base
from .district_idea_orm import DistrictIdeaORM

from .dtos import (
    DistrictIdeaDTO,
    DistrictIdeasResponse,
    DistrictListResponse,
    DistrictSummaryDTO,
    SubmitIdeaRequest,
    SubmitIdeaResponse,
    Submission,
    WordCloudRequest,
    WordCloudResponse,
    WordWeight,
)

__all__ = [
    # Base
    "Base",
    # ORMs
    "DistrictIdeaORM",
    # DTOs
    "DistrictIdeaDTO",
    "DistrictIdeasResponse",
    "DistrictListResponse",
    "DistrictSummaryDTO",
    "SubmitIdeaRequest",
    "SubmitIdeaResponse",
    "Submission",
    "WordCloudRequest",
    "WordCloudResponse",
    "WordWeight",
]
