"""Tests for the session state machine."""

import asyncio
import logging

import pytest

from lingo.errors import FetchError, PersistenceError
from lingo.models import SessionState, StartSessionOptions, TranslationUnit
from lingo.session import SessionTracker

UNITS = [
    TranslationUnit(id="1", singular="Hello", references=("a.php:1",)),
    TranslationUnit(id="2", singular="Save", context="button"),
    TranslationUnit(id="3", singular="%d item", plural="%d items"),
]

OPTIONS = StartSessionOptions(
    project_slug="wp-plugins/woocommerce/dev",
    locale_slug="it",
    sample_size=10,
    project_name="WooCommerce",
    user_id="user-1",
    user_email="user@example.com",
)


def fetcher_for(units):
    calls = []

    async def fetch(project_slug, locale_slug, sample_size):
        calls.append((project_slug, locale_slug, sample_size))
        return list(units)

    fetch.calls = calls
    return fetch


class RecordingPersister:
    def __init__(self, error=None):
        self.error = error
        self.saved = []

    async def __call__(self, submission):
        self.saved.append(submission)
        if self.error:
            raise self.error


def test_new_tracker_is_idle():
    tracker = SessionTracker(fetcher_for(UNITS))

    assert tracker.state == SessionState.IDLE
    assert tracker.current_unit is None
    assert tracker.progress_percent == 0
    assert tracker.skip() is False


def test_start_session_activates_first_unit():
    fetch = fetcher_for(UNITS)
    tracker = SessionTracker(fetch)

    asyncio.run(tracker.start_session(OPTIONS))

    assert fetch.calls == [("wp-plugins/woocommerce/dev", "it", 10)]
    assert tracker.state == SessionState.ACTIVE
    assert tracker.current_unit == UNITS[0]
    assert tracker.stats.total == 3
    assert tracker.current_index == 0


def test_submitting_every_string_completes_session():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS))
        await tracker.start_session(OPTIONS)

        states = [tracker.state]
        for text in ("Ciao", "Salva", "%d elemento"):
            assert tracker.submit(text).accepted
            states.append(tracker.state)
        return tracker, states

    tracker, states = asyncio.run(run())

    assert states == [
        SessionState.ACTIVE,
        SessionState.ACTIVE,
        SessionState.ACTIVE,
        SessionState.COMPLETE,
    ]
    assert tracker.stats.to_dict() == {"total": 3, "completed": 3, "skipped": 0}
    assert tracker.current_index == 3
    assert tracker.current_unit is None
    assert tracker.progress_percent == 100
    assert tracker.is_complete


def test_skip_and_submit_mix():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS))
        await tracker.start_session(OPTIONS)
        assert tracker.skip()
        assert tracker.submit("Salva").accepted
        assert tracker.skip()
        return tracker

    tracker = asyncio.run(run())

    assert tracker.state == SessionState.COMPLETE
    assert tracker.stats.completed == 1
    assert tracker.stats.skipped == 2
    assert [t.translation for t in tracker.translations_for_preview()] == ["Salva"]


def test_actions_after_completion_are_rejected():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS[:1]))
        await tracker.start_session(OPTIONS)
        tracker.submit("Ciao")
        return tracker, tracker.submit("again"), tracker.skip()

    tracker, receipt, skipped = asyncio.run(run())

    assert receipt.accepted is False
    assert receipt.task is None
    assert skipped is False
    assert tracker.stats.completed == 1


def test_progress_percent_rounds():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS))
        await tracker.start_session(OPTIONS)
        tracker.skip()
        return tracker

    tracker = asyncio.run(run())
    assert tracker.progress_percent == 33


def test_empty_fetch_completes_immediately():
    tracker = SessionTracker(fetcher_for([]))

    asyncio.run(tracker.start_session(OPTIONS))

    assert tracker.state == SessionState.COMPLETE
    assert tracker.stats.total == 0
    assert tracker.progress_percent == 0


def test_fetch_failure_moves_to_error():
    async def failing(project_slug, locale_slug, sample_size):
        raise FetchError("Failed to fetch strings: 500", status_code=500)

    tracker = SessionTracker(failing)
    asyncio.run(tracker.start_session(OPTIONS))

    assert tracker.state == SessionState.ERROR
    assert tracker.error == "Failed to fetch strings: 500"
    assert tracker.units == ()
    assert tracker.stats.total == 0


def test_unexpected_fetch_error_is_raised():
    async def broken(project_slug, locale_slug, sample_size):
        raise RuntimeError("boom")

    tracker = SessionTracker(broken)
    with pytest.raises(RuntimeError):
        asyncio.run(tracker.start_session(OPTIONS))

    assert tracker.state == SessionState.ERROR
    assert tracker.error == "boom"


def test_restart_from_error():
    async def run():
        attempts = []

        async def flaky(project_slug, locale_slug, sample_size):
            attempts.append(1)
            if len(attempts) == 1:
                raise FetchError("down")
            return list(UNITS)

        tracker = SessionTracker(flaky)
        await tracker.start_session(OPTIONS)
        assert tracker.state == SessionState.ERROR
        await tracker.start_session(OPTIONS)
        return tracker

    tracker = asyncio.run(run())
    assert tracker.state == SessionState.ACTIVE
    assert tracker.error is None


def test_reset_discards_in_flight_fetch():
    async def run():
        release = asyncio.Event()

        async def slow(project_slug, locale_slug, sample_size):
            await release.wait()
            return list(UNITS)

        tracker = SessionTracker(slow)
        task = asyncio.create_task(tracker.start_session(OPTIONS))
        await asyncio.sleep(0)
        assert tracker.is_loading

        tracker.reset_session()
        release.set()
        await task
        return tracker

    tracker = asyncio.run(run())

    assert tracker.state == SessionState.IDLE
    assert tracker.units == ()
    assert tracker.options is None


def test_newer_start_wins_over_older_one():
    async def run():
        gates = [asyncio.Event(), asyncio.Event()]
        results = [UNITS[:1], UNITS]
        calls = []

        async def fetch(project_slug, locale_slug, sample_size):
            index = len(calls)
            calls.append(index)
            await gates[index].wait()
            return list(results[index])

        tracker = SessionTracker(fetch)
        first = asyncio.create_task(tracker.start_session(OPTIONS))
        await asyncio.sleep(0)
        second = asyncio.create_task(tracker.start_session(OPTIONS))
        await asyncio.sleep(0)

        gates[1].set()
        await second
        gates[0].set()
        await first
        return tracker

    tracker = asyncio.run(run())
    assert tracker.stats.total == 3
    assert tracker.state == SessionState.ACTIVE


def test_submit_persists_in_background():
    async def run():
        persister = RecordingPersister()
        tracker = SessionTracker(fetcher_for(UNITS), persister)
        await tracker.start_session(OPTIONS)

        receipt = tracker.submit("Ciao")
        assert receipt.accepted
        assert receipt.unit == UNITS[0]
        assert receipt.task is not None
        # Not awaited by submit
        assert persister.saved == []

        await tracker.drain()
        return tracker, persister

    tracker, persister = asyncio.run(run())

    assert tracker.pending_tasks == 0
    [submission] = persister.saved
    assert submission.user_id == "user-1"
    assert submission.user_email == "user@example.com"
    assert submission.project_slug == "wp-plugins/woocommerce/dev"
    assert submission.project_name == "WooCommerce"
    assert submission.locale == "it"
    assert submission.original_id == "1"
    assert submission.original_string == "Hello"
    assert submission.translation == "Ciao"
    assert submission.to_payload()["status"] == "pending"


def test_persistence_failure_does_not_roll_back(caplog):
    async def run():
        persister = RecordingPersister(error=PersistenceError("Failed to save translation"))
        tracker = SessionTracker(fetcher_for(UNITS), persister)
        await tracker.start_session(OPTIONS)
        receipt = tracker.submit("Ciao")
        await receipt.task
        return tracker

    with caplog.at_level(logging.WARNING, logger="lingo.session.tracker"):
        tracker = asyncio.run(run())

    assert tracker.stats.completed == 1
    assert tracker.current_index == 1
    assert tracker.state == SessionState.ACTIVE
    assert "Failed to save translation" in caplog.text


def test_no_persistence_without_user():
    async def run():
        persister = RecordingPersister()
        tracker = SessionTracker(fetcher_for(UNITS), persister)
        await tracker.start_session(StartSessionOptions(project_slug="wp/dev", locale_slug="it"))
        receipt = tracker.submit("Ciao")
        await tracker.drain()
        return receipt, persister

    receipt, persister = asyncio.run(run())

    assert receipt.accepted
    assert receipt.task is None
    assert persister.saved == []


def test_translations_for_preview_carry_unit_details():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS))
        await tracker.start_session(OPTIONS)
        tracker.submit("Ciao")
        tracker.submit("Salva")
        tracker.submit("%d elemento")
        return tracker.translations_for_preview()

    first, second, third = asyncio.run(run())

    assert first.original == "Hello"
    assert first.references == ("a.php:1",)
    assert second.context == "button"
    assert third.plural == "%d items"


def test_reset_returns_to_idle():
    async def run():
        tracker = SessionTracker(fetcher_for(UNITS))
        await tracker.start_session(OPTIONS)
        tracker.submit("Ciao")
        tracker.reset_session()
        return tracker

    tracker = asyncio.run(run())

    assert tracker.state == SessionState.IDLE
    assert tracker.stats.to_dict() == {"total": 0, "completed": 0, "skipped": 0}
    assert tracker.translations_for_preview() == []
    assert tracker.current_index == 0


def test_to_dict_snapshot():
    tracker = SessionTracker(fetcher_for(UNITS))
    asyncio.run(tracker.start_session(OPTIONS))

    snapshot = tracker.to_dict()

    assert snapshot["state"] == "active"
    assert snapshot["current_string"]["id"] == "1"
    assert snapshot["current_string"]["references"] == ["a.php:1"]
    assert snapshot["stats"]["total"] == 3


def test_each_start_and_reset_bumps_epoch():
    tracker = SessionTracker(fetcher_for(UNITS))
    asyncio.run(tracker.start_session(OPTIONS))
    tracker.reset_session()
    assert tracker.epoch == 2


def test_progress_percent_rounds_halves_up():
    units = [TranslationUnit(id=str(i), singular=f"s{i}") for i in range(8)]

    async def run():
        tracker = SessionTracker(fetcher_for(units))
        await tracker.start_session(OPTIONS)
        tracker.skip()
        after_one = tracker.progress_percent
        for _ in range(4):
            tracker.skip()
        return after_one, tracker.progress_percent

    after_one, after_five = asyncio.run(run())

    assert after_one == 13
    assert after_five == 63
