"""
SQLAlchemy ORM model for the 'district_ideas' table.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Index, Text, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression, func

from .base import Base


class DistrictIdeaORM(Base):
    """
    SQLAlchemy ORM model representing one crowdsourced idea for a district.

    Attributes:
        id (int): Primary key, auto-incrementing.
        district (str): District the idea was submitted for, as shown on the map.
        province (str): Province of the district; empty when the submitter left it out.
        idea (str): Free-text idea or comment. Feeds the district word cloud.
        author (str): Display name of the submitter.
        created_at (datetime): Submission time (defaults to NOW()).
        approved (bool): Only approved ideas are listed and counted.
    """
    __tablename__ = "district_ideas"

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
        comment="Unique identifier for the idea.",
    )
    district: Mapped[str] = mapped_column(Text, nullable=False, comment="District the idea belongs to.")
    province: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="", comment="Province of the district.")
    idea: Mapped[str] = mapped_column(Text, nullable=False, comment="The submitted idea text.")
    author: Mapped[str] = mapped_column(Text, nullable=False, comment="Display name of the submitter.")
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), comment="Submission timestamp."
    )
    approved: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=expression.true(), comment="Moderation flag."
    )

    __table_args__ = (
        Index("idx_district_ideas_district_created", "district", "created_at"),
        Index("idx_district_ideas_approved", "approved"),
    )

    def __repr__(self) -> str:
        return (
            f"<DistrictIdeaORM(id={self.id}, district='{self.district}', "
            f"created_at='{self.created_at}', approved={self.approved})>"
        )
