"""SQLAlchemy-backed storage for submitted translations."""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, Index, Integer, String, Text, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from ...errors import PersistenceError
from ...models.submission import SubmittedTranslation, TranslationFilters

logger = logging.getLogger(__name__)

Base = declarative_base()

REQUIRED_FIELDS = (
    "user_id",
    "project_slug",
    "locale",
    "original_id",
    "original_string",
    "translation",
)


class Translation(Base):
    __tablename__ = "translations"
    __table_args__ = (
        Index("idx_translations_user", "user_id"),
        Index("idx_translations_created", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    user_email = Column(String, nullable=True)
    project_slug = Column(String, nullable=False)
    project_name = Column(String, nullable=True)
    locale = Column(String(16), nullable=False)
    original_id = Column(String, nullable=False)
    original_string = Column(Text, nullable=False)
    translation = Column(Text, nullable=False)
    context = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    # ISO-8601 text so date filters compare as strings
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class TranslationStore:
    """Stores user translations in a local SQLite database."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create(self, payload: Dict[str, Any]) -> int:
        """
        Insert a translation.

        Args:
            payload: Store API body; REQUIRED_FIELDS must be present

        Returns:
            The new row id
        """
        timestamp = _now()
        row = Translation(
            user_id=payload["user_id"],
            user_email=payload.get("user_email") or None,
            project_slug=payload["project_slug"],
            project_name=payload.get("project_name") or None,
            locale=payload["locale"],
            original_id=str(payload["original_id"]),
            original_string=payload["original_string"],
            translation=payload["translation"],
            context=payload.get("context") or None,
            status=payload.get("status") or "pending",
            created_at=timestamp,
            updated_at=timestamp,
        )

        with self.Session.begin() as session:
            session.add(row)
            session.flush()
            row_id = row.id

        logger.debug("Stored translation %s for user %s", row_id, payload["user_id"])
        return row_id

    def list_translations(self, user_id: str, filters: Optional[TranslationFilters] = None) -> List[Dict[str, Any]]:
        """List a user's translations, newest first."""
        filters = filters or TranslationFilters()
        stmt = select(Translation).where(Translation.user_id == user_id)

        if filters.project:
            stmt = stmt.where(Translation.project_slug == filters.project)
        if filters.locale:
            stmt = stmt.where(Translation.locale == filters.locale)
        if filters.status:
            stmt = stmt.where(Translation.status == filters.status)
        if filters.date_from:
            stmt = stmt.where(Translation.created_at >= filters.date_from)
        if filters.date_to:
            stmt = stmt.where(Translation.created_at <= filters.date_to)

        stmt = (
            stmt.order_by(Translation.created_at.desc(), Translation.id.desc())
            .limit(filters.limit)
            .offset(filters.offset)
        )

        with self.Session() as session:
            return [row.to_dict() for row in session.scalars(stmt)]

    async def persist(self, translation: SubmittedTranslation) -> None:
        """Persister interface used by the session tracker."""
        try:
            await asyncio.to_thread(self.create, translation.to_payload())
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save translation: {e}") from e

    def close(self) -> None:
        self.engine.dispose()
