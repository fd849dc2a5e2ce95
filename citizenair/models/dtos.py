"""
Pydantic Data Transfer Objects (DTOs) for the CitizenAIR service.

These models are used for API request/response validation and internal data transfer.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class Submission(BaseModel):
    """
    Read-only view of a crowdsourced idea as consumed by the word-frequency extractor.

    ``text`` is always a string: missing values become ``""`` and other scalars are
    coerced with ``str`` so the extractor never sees anything else.
    """
    text: str = ""
    district: str = ""
    timestamp: Optional[datetime] = None

    model_config = {"frozen": True, "from_attributes": True}

    @field_validator("text", "district", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class WordWeight(BaseModel):
    """
    One entry of a word cloud: a display term and its rescaled weight.
    """
    term: str
    weight: int

    model_config = {"frozen": True}


class SubmitIdeaRequest(BaseModel):
    """
    Request body for submitting an idea for a district.

    District and idea are required, but they are checked by the service after
    trimming so that missing and all-whitespace values are both rejected with a 400.
    """
    district: Optional[str] = Field(None, description="District the idea is about.")
    idea: Optional[str] = Field(None, description="The idea or comment.")
    province: Optional[str] = Field(None, description="Province of the district.")
    author: Optional[str] = Field(None, description="Optional display name of the submitter.")


class SubmitIdeaResponse(BaseModel):
    success: bool = True
    message: str
    id: int


class DistrictIdeaDTO(BaseModel):
    """
    DTO for a stored district idea.

    Mirrors DistrictIdeaORM.
    """
    id: int
    district: str
    province: str = ""
    idea: str
    author: str
    created_at: Optional[datetime] = None
    approved: bool = True

    model_config = {"from_attributes": True}

    def to_submission(self) -> Submission:
        return Submission(text=self.idea, district=self.district, timestamp=self.created_at)


class DistrictIdeasResponse(BaseModel):
    """
    Ideas of one district together with their word cloud.
    """
    success: bool = True
    district: str
    count: int
    ideas: List[DistrictIdeaDTO]
    word_cloud_data: List[WordWeight]


class DistrictSummaryDTO(BaseModel):
    """
    Per-district aggregate of approved ideas.
    """
    district: str
    province: str = ""
    idea_count: int
    last_updated: Optional[datetime] = None


class DistrictListResponse(BaseModel):
    success: bool = True
    count: int
    districts: List[DistrictSummaryDTO]


class WordCloudRequest(BaseModel):
    """
    Request model for computing a word cloud from ad-hoc texts.
    """
    texts: List[Optional[str]] = Field(default_factory=list, description="Idea texts to analyse.")


class WordCloudResponse(BaseModel):
    success: bool = True
    word_cloud_data: List[WordWeight]
