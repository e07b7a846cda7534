"""Data models for translations persisted to the store."""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


class TranslationStatus(str, Enum):
    """Review status of a submitted translation."""
    PENDING = "pending"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class SubmittedTranslation:
    """A user translation as sent to the store."""

    user_id: str
    project_slug: str
    locale: str
    original_id: str
    original_string: str
    translation: str
    context: Optional[str] = None
    user_email: Optional[str] = None
    project_name: Optional[str] = None
    status: TranslationStatus = TranslationStatus.PENDING
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds")
    )

    def to_payload(self) -> dict:
        """Build the JSON body for the store API."""
        payload = asdict(self)
        payload["status"] = self.status.value
        # The store stamps its own creation time
        payload.pop("created_at")
        return payload


@dataclass
class TranslationFilters:
    """Optional filters for listing a user's translations."""

    project: Optional[str] = None
    locale: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    limit: int = 50
    offset: int = 0

    def to_params(self) -> Dict[str, str]:
        """Convert to query parameters, dropping empty filters."""
        params = {}
        for key in ("project", "locale", "status", "date_from", "date_to"):
            value = getattr(self, key)
            if value:
                params[key] = value
        params["limit"] = str(self.limit)
        params["offset"] = str(self.offset)
        return params


@dataclass
class UserStats:
    """Aggregated counts over a user's translations."""

    total: int = 0
    by_project: Dict[str, int] = field(default_factory=dict)
    by_locale: Dict[str, int] = field(default_factory=dict)
    by_status: Dict[str, int] = field(default_factory=dict)
    by_date: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)
