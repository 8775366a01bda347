"""Tests for the transactional retry loop of the content store."""

import pytest
from sqlalchemy.exc import OperationalError

from app.application.use_cases.templates import list_templates_by_status
from app.config import Settings
from app.domain.errors import (
    ConcurrencyConflict,
    ConflictError,
    StoreUnavailable,
    ValidationError,
)
from app.infrastructure.models import TemplateModel
from app.infrastructure.store import ContentStore


def _store(session, attempts=3):
    settings = Settings(
        database_url="sqlite://",
        store_max_attempts=attempts,
        store_retry_initial_delay=0,
        store_retry_max_delay=0,
    )
    return ContentStore(session, settings=settings)


class FlakyOperation:
    """Raise ``error`` for the first ``failures`` calls, then return ``result``."""

    def __init__(self, error, failures, result="done"):
        self.error = error
        self.failures = failures
        self.result = result
        self.calls = 0

    def __call__(self, session):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return self.result


def _unavailable():
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_conflicts_are_replayed_until_success(session):
    operation = FlakyOperation(ConcurrencyConflict("lost race"), failures=2)

    assert _store(session).run(operation, name="flaky") == "done"
    assert operation.calls == 3


def test_persistent_conflicts_raise_conflict_error(session):
    operation = FlakyOperation(ConcurrencyConflict("lost race"), failures=10)

    with pytest.raises(ConflictError):
        _store(session, attempts=3).run(operation, name="hopeless")
    assert operation.calls == 3


def test_unavailable_store_is_retried(session):
    operation = FlakyOperation(_unavailable(), failures=1)

    assert _store(session).run(operation, name="transient") == "done"
    assert operation.calls == 2


def test_unavailable_store_gives_up_after_the_budget(session):
    operation = FlakyOperation(_unavailable(), failures=10)

    with pytest.raises(StoreUnavailable):
        _store(session, attempts=2).run(operation, name="down")
    assert operation.calls == 2


def test_non_idempotent_units_are_not_retried(session):
    operation = FlakyOperation(_unavailable(), failures=1)

    with pytest.raises(StoreUnavailable):
        _store(session).run(operation, name="delta", retry_unavailable=False)
    assert operation.calls == 1


def test_other_errors_propagate_and_roll_back(session, make_template):
    template = make_template(approve=False)

    def _rename_then_fail(tx):
        tx.get(TemplateModel, template.id).name = "Renamed"
        tx.flush()
        raise ValidationError("nope")

    with pytest.raises(ValidationError, match="nope"):
        _store(session).run(_rename_then_fail, name="failing")

    (stored,) = list_templates_by_status(session).items
    assert stored.name == template.name
