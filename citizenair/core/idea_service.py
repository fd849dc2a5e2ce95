"""
Idea Service for the CitizenAIR crowdsourcing feature.

Stores ideas submitted for a district, lists them back together with the
district word cloud, and summarises how many ideas each district received.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from citizenair.config.settings import settings
from citizenair.core.word_frequency import WordFrequencyExtractor
from citizenair.models import DistrictIdeaORM
from citizenair.models.dtos import (
    DistrictIdeaDTO,
    DistrictIdeasResponse,
    DistrictSummaryDTO,
    SubmitIdeaRequest,
)
from citizenair.utils.db_session import get_db_session_context_manager

logger = logging.getLogger(__name__)


class IdeaValidationError(ValueError):
    """Raised when a submission or query lacks a required field."""


class IdeaService:
    """
    Handles storing district ideas and building the per-district word cloud.
    """

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        extractor: Optional[WordFrequencyExtractor] = None,
    ):
        """
        Initializes the IdeaService.

        Args:
            session: An optional SQLAlchemy AsyncSession to use for database operations.
                     If None, a new session will be created for each operation.
            extractor: Word-frequency extractor used for the word cloud. A default
                       extractor is created when omitted.
        """
        self._shared_session = session
        self._extractor = extractor or WordFrequencyExtractor()

    async def submit_idea(self, request: SubmitIdeaRequest) -> DistrictIdeaDTO:
        """
        Stores a new idea.

        Fields are trimmed. The author falls back to the anonymous display name and
        the idea is approved straight away when auto-approval is enabled.

        Args:
            request: The submitted idea.

        Returns:
            DistrictIdeaDTO: The stored idea including its new id.

        Raises:
            IdeaValidationError: If district or idea is blank.
            SQLAlchemyError: If the idea could not be stored.
        """
        district = (request.district or "").strip()
        idea = (request.idea or "").strip()
        if not district or not idea:
            raise IdeaValidationError("District and idea are required")

        idea_orm = DistrictIdeaORM(
            district=district,
            province=(request.province or "").strip(),
            idea=idea,
            author=(request.author or "").strip() or settings.DEFAULT_AUTHOR_NAME,
            created_at=datetime.now(timezone.utc),
            approved=settings.AUTO_APPROVE_IDEAS,
        )

        async with get_db_session_context_manager(existing_session=self._shared_session) as session:
            try:
                session.add(idea_orm)
                await session.commit()
                await session.refresh(idea_orm)
            except SQLAlchemyError as e:
                logger.error("Database error saving idea for district '%s': %s", district, e, exc_info=True)
                await session.rollback()
                raise

        logger.info("Saved idea %s for district '%s'", idea_orm.id, district)
        return DistrictIdeaDTO.model_validate(idea_orm)

    async def list_ideas(self, district: str) -> list[DistrictIdeaDTO]:
        """
        Returns the approved ideas of a district, newest first.

        Raises:
            IdeaValidationError: If district is blank.
        """
        district = (district or "").strip()
        if not district:
            raise IdeaValidationError("District parameter is required")

        stmt = (
            select(DistrictIdeaORM)
            .where(DistrictIdeaORM.district == district, DistrictIdeaORM.approved.is_(True))
            .order_by(DistrictIdeaORM.created_at.desc(), DistrictIdeaORM.id.desc())
        )
        async with get_db_session_context_manager(existing_session=self._shared_session) as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        return [DistrictIdeaDTO.model_validate(row) for row in rows]

    async def get_district_ideas(self, district: str) -> DistrictIdeasResponse:
        """
        Returns the approved ideas of a district together with their word cloud.

        Args:
            district: District name as shown on the map.

        Returns:
            DistrictIdeasResponse: Ideas (newest first), their count and word cloud.
        """
        ideas = await self.list_ideas(district)
        word_cloud = self._extractor.extract_from_submissions([idea.to_submission() for idea in ideas])
        logger.info(
            "District '%s': %d ideas, %d word cloud terms", district.strip(), len(ideas), len(word_cloud)
        )
        return DistrictIdeasResponse(
            district=district.strip(),
            count=len(ideas),
            ideas=ideas,
            word_cloud_data=word_cloud,
        )

    async def list_districts(self) -> list[DistrictSummaryDTO]:
        """
        Summarises approved ideas per district, most active district first.

        Returns:
            list[DistrictSummaryDTO]: One entry per district with ideas. Ties in the
                                      idea count are ordered by district name.
        """
        idea_count = func.count(DistrictIdeaORM.id).label("idea_count")
        stmt = (
            select(
                DistrictIdeaORM.district,
                func.max(DistrictIdeaORM.province).label("province"),
                idea_count,
                func.max(DistrictIdeaORM.created_at).label("last_updated"),
            )
            .where(DistrictIdeaORM.approved.is_(True))
            .group_by(DistrictIdeaORM.district)
            .order_by(idea_count.desc(), DistrictIdeaORM.district)
        )
        async with get_db_session_context_manager(existing_session=self._shared_session) as session:
            result = await session.execute(stmt)
            rows = result.all()

        return [
            DistrictSummaryDTO(
                district=row.district,
                province=row.province or "",
                idea_count=row.idea_count,
                last_updated=row.last_updated,
            )
            for row in rows
        ]
