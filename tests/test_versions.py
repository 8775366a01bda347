"""Tests for the template version history."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.application.use_cases.templates import get_template
from app.application.use_cases.versions import (
    compare_versions,
    create_version,
    get_version,
    get_version_stats,
    list_versions,
    reconcile_current_version,
    record_version_download,
    rollback_version,
    update_template_content,
)
from app.application.use_cases.versions.get_version_stats import (
    classify_update_frequency,
)
from app.domain.entities import TemplateVersion
from app.domain.errors import (
    ConflictError,
    NotFoundError,
    StoreUnavailable,
    ValidationError,
)
from app.infrastructure.repositories import TemplateRepository


def _publish(session, template_id, snapshot, bump, author="editor"):
    return create_version(
        session,
        template_id=template_id,
        content=snapshot,
        version_type=bump,
        changelog=f"{bump} release",
        author_id=author,
    )


def test_submission_starts_at_initial_version_without_history(session, make_template):
    template = make_template(approve=False)

    assert template.current_version == "1.0.0"
    assert template.version_count == 0
    assert list_versions(session, template_id=template.id) == []


def test_bumps_follow_semantic_versioning(session, make_template, page_snapshot):
    template = make_template()
    published = [
        _publish(session, template.id, page_snapshot("Text", f"Widget{index}"), bump)
        for index, bump in enumerate(["minor", "patch", "major", "patch"])
    ]

    assert [version.version for version in published] == [
        "1.1.0",
        "1.1.1",
        "2.0.0",
        "2.0.1",
    ]
    assert [version.sequence for version in published] == [1, 2, 3, 4]
    refreshed = get_template(session, template.id)
    assert refreshed.current_version == "2.0.1"
    assert refreshed.version_count == 4
    assert refreshed.content == published[-1].content
    assert "Widget3" in refreshed.ai_metadata.component_types


def test_versions_are_listed_newest_first(session, make_template, page_snapshot):
    template = make_template()
    for bump in ("minor", "minor", "patch"):
        _publish(session, template.id, page_snapshot("Text"), bump)

    versions = list_versions(session, template_id=template.id)

    assert [version.version for version in versions] == ["1.2.1", "1.2.0", "1.1.0"]


def test_create_version_accepts_json_text(session, make_template, page_snapshot):
    template = make_template()
    snapshot = page_snapshot("Image")

    version = _publish(session, template.id, json.dumps(snapshot), "patch")

    assert version.content == snapshot
    assert version.ai_metadata.has_images is True


@pytest.mark.parametrize(
    "content, bump",
    [("{broken", "minor"), ("[]", "minor"), ({"ROOT": {}}, "hotfix")],
)
def test_invalid_versions_are_rejected(session, make_template, content, bump):
    template = make_template()

    with pytest.raises(ValidationError):
        _publish(session, template.id, content, bump)

    assert get_template(session, template.id).version_count == 0


def test_overlong_changelog_is_rejected(session, make_template, page_snapshot):
    template = make_template()

    with pytest.raises(ValidationError):
        create_version(
            session,
            template_id=template.id,
            content=page_snapshot("Text"),
            version_type="minor",
            changelog="x" * 2001,
            author_id="editor",
        )


def test_versioning_unknown_template_raises_not_found(session, page_snapshot):
    with pytest.raises(NotFoundError):
        _publish(session, 12345, page_snapshot("Text"), "minor")


def test_concurrent_versions_are_distinct_and_gapless(
    session, session_factory, make_template, page_snapshot
):
    template = make_template()
    session.close()
    writers = 8

    def _write(index: int) -> TemplateVersion:
        return _publish(
            session_factory(),
            template.id,
            page_snapshot("Text", f"Widget{index}"),
            "patch",
            author=f"editor-{index}",
        )

    with ThreadPoolExecutor(max_workers=4) as pool:
        created = list(pool.map(_write, range(writers)))

    assert sorted(version.sequence for version in created) == list(range(1, writers + 1))
    assert {version.version for version in created} == {
        f"1.0.{patch}" for patch in range(1, writers + 1)
    }
    refreshed = get_template(session, template.id)
    assert refreshed.version_count == writers
    assert refreshed.current_version == f"1.0.{writers}"


def test_stale_version_pointer_is_replayed_from_a_fresh_read(
    session, make_template, page_snapshot, monkeypatch: pytest.MonkeyPatch, caplog
):
    template = make_template()
    stale = get_template(session, template.id)
    _publish(session, template.id, page_snapshot("Text"), "minor")
    real_get = TemplateRepository.get
    calls = []

    def _stale_once(self, template_id):
        calls.append(template_id)
        if len(calls) == 1:
            return stale
        return real_get(self, template_id)

    monkeypatch.setattr(TemplateRepository, "get", _stale_once)
    with caplog.at_level("WARNING"):
        created = _publish(session, template.id, page_snapshot("Text", "Image"), "patch")
    monkeypatch.undo()

    assert len(calls) == 2
    assert "conflicted with a concurrent writer" in caplog.text
    assert created.version == "1.1.1"
    assert created.sequence == 2
    history = list_versions(session, template_id=template.id)
    assert [version.version for version in history] == ["1.1.1", "1.1.0"]
    refreshed = get_template(session, template.id)
    assert refreshed.current_version == "1.1.1"
    assert refreshed.version_count == 2


def test_version_pointer_that_never_settles_raises_conflict(
    session, make_template, page_snapshot, monkeypatch: pytest.MonkeyPatch
):
    template = make_template()
    stale = get_template(session, template.id)
    _publish(session, template.id, page_snapshot("Text"), "minor")
    monkeypatch.setattr(TemplateRepository, "get", lambda self, template_id: stale)

    with pytest.raises(ConflictError):
        _publish(session, template.id, page_snapshot("Text", "Image"), "patch")

    monkeypatch.undo()
    history = list_versions(session, template_id=template.id)
    assert [version.version for version in history] == ["1.1.0"]


def test_rollback_appends_a_patch_with_the_old_content(
    session, make_template, page_snapshot
):
    template = make_template()
    first = _publish(session, template.id, page_snapshot("Text"), "minor")
    _publish(session, template.id, page_snapshot("Text", "Image"), "minor")

    restored = rollback_version(
        session, template_id=template.id, version_id=first.id, author_id="editor"
    )

    assert restored.version == "1.2.1"
    assert restored.version_type == "patch"
    assert restored.content == first.content
    assert restored.changelog == "Rolled back to version 1.1.0"
    history = list_versions(session, template_id=template.id)
    assert [version.version for version in history] == ["1.2.1", "1.2.0", "1.1.0"]
    assert get_version(session, template_id=template.id, version_id=first.id) == first
    assert get_template(session, template.id).content == first.content


def test_rollback_to_another_templates_version_is_not_found(
    session, make_template, page_snapshot
):
    owner = make_template()
    other = make_template()
    foreign = _publish(session, owner.id, page_snapshot("Text"), "minor")

    with pytest.raises(NotFoundError):
        rollback_version(
            session, template_id=other.id, version_id=foreign.id, author_id="editor"
        )


def test_compare_versions(session, make_template, page_snapshot):
    template = make_template()
    before = _publish(session, template.id, page_snapshot("Text"), "minor")
    after = _publish(
        session, template.id, page_snapshot("Text", "Image", "CraftButton"), "minor"
    )

    diff = compare_versions(
        session, template_id=template.id, version_a_id=before.id, version_b_id=after.id
    )

    assert diff.version_a == "1.1.0"
    assert diff.version_b == "1.2.0"
    assert diff.changes == ("added 2 components", "layout structure modified")
    assert diff.root_structure_changed is True
    assert diff.components.added == ("Image", "CraftButton")
    assert diff.components.removed == ()
    assert diff.components.unchanged == ("Container", "Text")
    assert diff.size.difference == diff.size.size_b - diff.size.size_a > 0


def test_version_stats(session, make_template, page_snapshot):
    template = make_template()
    versions = [
        _publish(session, template.id, page_snapshot("Text"), bump)
        for bump in ("minor", "patch", "major", "patch")
    ]
    record_version_download(session, template_id=template.id, version_id=versions[0].id)
    record_version_download(session, template_id=template.id, version_id=versions[-1].id)

    stats = get_version_stats(session, template_id=template.id)

    assert stats.total_versions == 4
    assert stats.current_version == "2.0.1"
    assert stats.earliest_version == "1.1.0"
    assert stats.version_types == {"major": 1, "minor": 1, "patch": 2}
    assert stats.total_downloads == 2
    assert stats.last_update == versions[-1].created_at
    assert stats.update_frequency == "very frequent"


def test_version_stats_without_history(session, make_template):
    template = make_template()

    stats = get_version_stats(session, template_id=template.id)

    assert stats.total_versions == 0
    assert stats.current_version == "1.0.0"
    assert stats.update_frequency == "new"
    assert stats.last_update is None


def _versions_every(days: int, count: int = 3) -> list[TemplateVersion]:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    versions = [
        TemplateVersion(
            id=index + 1,
            template_id=1,
            sequence=index + 1,
            version=f"1.{index + 1}.0",
            version_type="minor",
            content={},
            changelog="",
            created_by="editor",
            created_at=start + timedelta(days=days * index),
        )
        for index in range(count)
    ]
    return list(reversed(versions))


@pytest.mark.parametrize(
    "gap_days, expected",
    [(1, "very frequent"), (10, "frequent"), (45, "regular"), (120, "occasional")],
)
def test_update_frequency_bands(gap_days, expected):
    assert classify_update_frequency(_versions_every(gap_days)) == expected


def test_single_version_is_new():
    assert classify_update_frequency(_versions_every(30, count=1)) == "new"


def test_record_download_of_foreign_version_is_not_found(
    session, make_template, page_snapshot
):
    owner = make_template()
    other = make_template()
    version = _publish(session, owner.id, page_snapshot("Text"), "minor")

    with pytest.raises(NotFoundError):
        record_version_download(session, template_id=other.id, version_id=version.id)


def test_update_content_defaults_to_a_minor_version(session, make_template, page_snapshot):
    template = make_template()

    version = update_template_content(
        session,
        template_id=template.id,
        content=page_snapshot("Text", "Image"),
        author_id="editor",
    )

    assert version.version == "1.1.0"
    assert version.changelog == "Template updated"
    assert get_template(session, template.id).ai_metadata.has_images is True


def test_reconcile_repairs_a_drifted_pointer(session, make_template, page_snapshot):
    template = make_template()
    _publish(session, template.id, page_snapshot("Text"), "minor")
    latest = _publish(session, template.id, page_snapshot("Text", "Image"), "patch")
    TemplateRepository(session).reset_version_pointer(
        template.id,
        current_version="9.9.9",
        version_count=0,
        content={"ROOT": {}},
        ai_metadata=None,
    )
    session.commit()

    repaired = reconcile_current_version(session, template_id=template.id)

    assert repaired.current_version == latest.version == "1.1.1"
    assert repaired.version_count == 2
    assert repaired.content == latest.content
    follow_up = _publish(session, template.id, page_snapshot("Text"), "patch")
    assert follow_up.version == "1.1.2"


def test_reconcile_without_history_returns_to_initial_version(session, make_template):
    template = make_template()
    TemplateRepository(session).reset_version_pointer(
        template.id,
        current_version="3.0.0",
        version_count=5,
        content=None,
        ai_metadata=None,
    )
    session.commit()

    repaired = reconcile_current_version(session, template_id=template.id)

    assert repaired.current_version == "1.0.0"
    assert repaired.version_count == 0
    assert repaired.content == template.content


def test_repeated_request_id_returns_the_existing_version(
    session, make_template, page_snapshot
):
    template = make_template()
    first = create_version(
        session,
        template_id=template.id,
        content=page_snapshot("Text"),
        version_type="minor",
        author_id="editor",
        request_id="publish-1",
    )

    again = create_version(
        session,
        template_id=template.id,
        content=page_snapshot("Text"),
        version_type="minor",
        author_id="editor",
        request_id=" publish-1 ",
    )

    assert again == first
    assert again.request_id == "publish-1"
    assert get_template(session, template.id).version_count == 1


def _commit_then_drop_connection(session, monkeypatch: pytest.MonkeyPatch):
    real_commit = session.commit
    commits = []

    def _commit():
        real_commit()
        commits.append(True)
        if len(commits) == 1:
            raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

    monkeypatch.setattr(session, "commit", _commit)
    return commits


def test_keyed_version_is_not_duplicated_when_a_landed_commit_reports_failure(
    session, make_template, page_snapshot, monkeypatch: pytest.MonkeyPatch
):
    template = make_template()
    commits = _commit_then_drop_connection(session, monkeypatch)

    version = create_version(
        session,
        template_id=template.id,
        content=page_snapshot("Text"),
        version_type="minor",
        author_id="editor",
        request_id="publish-1",
    )
    monkeypatch.undo()

    assert len(commits) == 2
    assert version.version == "1.1.0"
    history = list_versions(session, template_id=template.id)
    assert [item.version for item in history] == ["1.1.0"]


def test_unkeyed_version_is_not_retried_after_a_transient_failure(
    session, make_template, page_snapshot, monkeypatch: pytest.MonkeyPatch
):
    template = make_template()
    commits = _commit_then_drop_connection(session, monkeypatch)

    with pytest.raises(StoreUnavailable):
        _publish(session, template.id, page_snapshot("Text"), "minor")
    monkeypatch.undo()

    assert len(commits) == 1
    history = list_versions(session, template_id=template.id)
    assert [item.version for item in history] == ["1.1.0"]


def test_blank_request_id_is_rejected(session, make_template, page_snapshot):
    template = make_template()

    with pytest.raises(ValidationError):
        create_version(
            session,
            template_id=template.id,
            content=page_snapshot("Text"),
            version_type="minor",
            author_id="editor",
            request_id="   ",
        )
