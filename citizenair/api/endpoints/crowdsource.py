"""
Crowdsourcing API endpoints.

Citizens submit ideas for improving air quality in their district; the map
sidebar lists a district's ideas and renders their word cloud.
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from citizenair.config.settings import settings
from citizenair.core.idea_service import IdeaService, IdeaValidationError
from citizenair.core.vocabulary import get_vocabulary
from citizenair.core.word_frequency import WordFrequencyExtractor
from citizenair.models.dtos import (
    DistrictIdeasResponse,
    DistrictListResponse,
    SubmitIdeaRequest,
    SubmitIdeaResponse,
    WordCloudRequest,
    WordCloudResponse,
)
from citizenair.utils.db_session import get_db_session

router = APIRouter()
logger = logging.getLogger(__name__)

SUBMIT_SUCCESS_MESSAGE = "ความคิดเห็นถูกส่งเรียบร้อยแล้ว"


@lru_cache
def get_word_frequency_extractor() -> WordFrequencyExtractor:
    """Process-wide extractor; its vocabulary is read-only and shared by all requests."""
    return WordFrequencyExtractor(vocabulary=get_vocabulary(settings.WORDCLOUD_VOCABULARY_PATH))


async def get_idea_service(
    session: AsyncSession = Depends(get_db_session),
    extractor: WordFrequencyExtractor = Depends(get_word_frequency_extractor),
) -> IdeaService:
    """Get an idea service bound to the request's database session."""
    return IdeaService(session=session, extractor=extractor)


@router.post("/ideas", response_model=SubmitIdeaResponse)
async def submit_idea(
    request: SubmitIdeaRequest,
    service: IdeaService = Depends(get_idea_service),
) -> SubmitIdeaResponse:
    """
    Submit a new idea for a district.

    Raises:
        HTTPException: 400 if district or idea is missing, 500 if storing fails.
    """
    try:
        idea = await service.submit_idea(request)
    except IdeaValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Error submitting idea: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to submit idea: {str(e)}")

    return SubmitIdeaResponse(message=SUBMIT_SUCCESS_MESSAGE, id=idea.id)


@router.get("/ideas/{district}", response_model=DistrictIdeasResponse)
async def get_district_ideas(
    district: str,
    service: IdeaService = Depends(get_idea_service),
) -> DistrictIdeasResponse:
    """
    Get the approved ideas of a district, newest first, with their word cloud.
    """
    try:
        return await service.get_district_ideas(district)
    except IdeaValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching ideas for district '{district}': {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch ideas: {str(e)}")


@router.get("/districts", response_model=DistrictListResponse)
async def list_districts(
    service: IdeaService = Depends(get_idea_service),
) -> DistrictListResponse:
    """
    Get all districts that have approved ideas, with idea counts.
    """
    try:
        districts = await service.list_districts()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching districts: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch districts: {str(e)}")

    return DistrictListResponse(count=len(districts), districts=districts)


@router.post("/wordcloud", response_model=WordCloudResponse)
async def build_word_cloud(
    request: WordCloudRequest,
    extractor: WordFrequencyExtractor = Depends(get_word_frequency_extractor),
) -> WordCloudResponse:
    """
    Build a word cloud from the posted texts without storing anything.
    """
    word_cloud = extractor.extract(request.texts)
    return WordCloudResponse(word_cloud_data=word_cloud)
