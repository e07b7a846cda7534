"""Translation session state machine."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Set, Tuple

from ..errors import FetchError, PersistenceError
from ..models.session import (
    SessionState,
    SessionStats,
    StartSessionOptions,
    TranslationForPreview,
)
from ..models.submission import SubmittedTranslation, TranslationStatus
from ..models.translation_unit import TranslationUnit

logger = logging.getLogger(__name__)

# (project_slug, locale_slug, sample_size) -> sampled units
Fetcher = Callable[[str, str, int], Awaitable[List[TranslationUnit]]]
Persister = Callable[[SubmittedTranslation], Awaitable[None]]


@dataclass
class SubmissionReceipt:
    """
    Acknowledgement that a translation was accepted locally.

    ``task`` is the detached persistence attempt, or None when nothing was
    sent to the store. Acceptance never implies the store has the record.
    """
    accepted: bool
    unit: Optional[TranslationUnit] = None
    task: Optional["asyncio.Task[None]"] = None


class SessionTracker:
    """
    Drives a single user through a sampled list of strings.

    States: IDLE -> LOADING -> ACTIVE -> COMPLETE, with ERROR reachable from
    LOADING. Progress only moves forward; persisting a submission happens in
    a background task whose failure is logged and never rolls progress back.
    One writer at a time: concurrent submit/skip calls are not supported.
    """

    def __init__(self, fetcher: Fetcher, persister: Optional[Persister] = None):
        self._fetcher = fetcher
        self._persister = persister
        self._epoch = 0
        self._pending: Set[asyncio.Task] = set()
        self._clear()

    def _clear(self) -> None:
        self.state = SessionState.IDLE
        self.units: Tuple[TranslationUnit, ...] = ()
        self.current_index = 0
        self.stats = SessionStats()
        self.error: Optional[str] = None
        self.options: Optional[StartSessionOptions] = None
        self._translations: List[TranslationForPreview] = []

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def current_unit(self) -> Optional[TranslationUnit]:
        """The string to translate next, or None."""
        if self.state != SessionState.ACTIVE or self.current_index >= len(self.units):
            return None
        return self.units[self.current_index]

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETE

    @property
    def is_loading(self) -> bool:
        return self.state == SessionState.LOADING

    @property
    def progress_percent(self) -> int:
        if self.stats.total <= 0:
            return 0
        # Halves round up
        return int(self.current_index * 100 / self.stats.total + 0.5)

    @property
    def pending_tasks(self) -> int:
        return len(self._pending)

    async def start_session(self, options: StartSessionOptions) -> None:
        """
        Fetch and sample strings, then activate the session.

        Results arriving after a reset or a newer start are discarded.
        """
        self._clear()
        self._epoch += 1
        epoch = self._epoch
        self.options = options
        self.state = SessionState.LOADING

        try:
            units = await self._fetcher(
                options.project_slug, options.locale_slug, options.sample_size
            )
        except FetchError as e:
            if epoch == self._epoch:
                self._fail(e.message)
            else:
                logger.info("Ignoring failed fetch for a superseded session")
            return
        except Exception as e:
            if epoch == self._epoch:
                self._fail(str(e) or "Failed to load strings")
            raise

        if epoch != self._epoch:
            logger.info(
                "Discarding %d strings fetched for a superseded session", len(units)
            )
            return

        self.units = tuple(units)
        self.stats.total = len(self.units)
        self.current_index = 0
        self.state = SessionState.ACTIVE if self.units else SessionState.COMPLETE

        logger.info(
            "Session started for %s/%s with %d strings",
            options.project_slug, options.locale_slug, self.stats.total,
        )

    def _fail(self, message: str) -> None:
        logger.warning("Failed to load strings: %s", message)
        self.state = SessionState.ERROR
        self.error = message
        self.units = ()
        self.stats = SessionStats()

    def _advance(self) -> None:
        self.current_index += 1
        if self.current_index >= self.stats.total:
            self.state = SessionState.COMPLETE

    def submit(self, translation: str) -> SubmissionReceipt:
        """
        Accept a translation for the current string and move on.

        The store write is dispatched as a one-shot background task when the
        session knows who is translating what. It is not awaited here and is
        never retried.
        """
        unit = self.current_unit
        if unit is None:
            return SubmissionReceipt(accepted=False)

        task = None
        submission = self._build_submission(unit, translation)
        if submission is not None and self._persister is not None:
            task = asyncio.get_running_loop().create_task(self._persist(submission))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        self._translations.append(TranslationForPreview(
            original=unit.singular,
            translation=translation,
            context=unit.context,
            plural=unit.plural,
            references=unit.references,
        ))
        self.stats.completed += 1
        self._advance()

        return SubmissionReceipt(accepted=True, unit=unit, task=task)

    def skip(self) -> bool:
        """Skip the current string. Returns False if there was nothing to skip."""
        if self.current_unit is None:
            return False
        self.stats.skipped += 1
        self._advance()
        return True

    def reset_session(self) -> None:
        """Return to IDLE, dropping units, stats and any in-flight fetch."""
        self._epoch += 1
        self._clear()

    def translations_for_preview(self) -> List[TranslationForPreview]:
        """Translations submitted so far, in order."""
        return list(self._translations)

    async def drain(self) -> None:
        """Wait for outstanding persistence tasks to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _build_submission(
        self,
        unit: TranslationUnit,
        translation: str,
    ) -> Optional[SubmittedTranslation]:
        opts = self.options
        if not opts or not (opts.user_id and opts.project_slug and opts.locale_slug):
            return None
        return SubmittedTranslation(
            user_id=opts.user_id,
            user_email=opts.user_email,
            project_slug=opts.project_slug,
            project_name=opts.project_name,
            locale=opts.locale_slug,
            original_id=unit.id,
            original_string=unit.singular,
            translation=translation,
            context=unit.context,
            status=TranslationStatus.PENDING,
        )

    async def _persist(self, submission: SubmittedTranslation) -> None:
        try:
            await self._persister(submission)
        except PersistenceError as e:
            logger.warning(
                "Failed to persist translation for original %s: %s",
                submission.original_id, e.message,
            )
        except Exception:
            logger.exception(
                "Failed to persist translation for original %s", submission.original_id
            )

    def to_dict(self) -> dict:
        """Snapshot of the session for API responses."""
        unit = self.current_unit
        return {
            "state": self.state.value,
            "current_index": self.current_index,
            "progress_percent": self.progress_percent,
            "stats": self.stats.to_dict(),
            "error": self.error,
            "current_string": _unit_to_dict(unit) if unit else None,
        }


def _unit_to_dict(unit: TranslationUnit) -> dict:
    return {
        "id": unit.id,
        "singular": unit.singular,
        "plural": unit.plural,
        "context": unit.context,
        "references": list(unit.references),
        "priority": unit.priority,
        "project_id": unit.project_id,
    }
