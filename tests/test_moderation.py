"""Tests for the report queue, bulk moderation and the featured shelf."""

from datetime import timedelta

import pytest

from app.application.use_cases.moderation import (
    bulk_moderate,
    flag_template,
    get_moderation_stats,
    list_template_reports,
    resolve_template_report,
)
from app.application.use_cases.ratings import submit_rating
from app.application.use_cases.templates import (
    delete_template,
    get_featured_templates,
    get_marketplace_stats,
    get_template,
    moderate_template,
    set_template_featured,
)
from app.domain.entities import ModeratorActivity
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import ModerationLogRepository
from app.utils import now_in_app_timezone


def test_flagging_queues_a_report(session, make_template):
    template = make_template()

    report = flag_template(
        session, template_id=template.id, reporter_id=" ana ", reason="  Spam links  "
    )

    assert report.reporter_id == "ana"
    assert report.reason == "Spam links"
    assert report.is_open
    assert report.previous_status == "approved"
    assert get_template(session, template.id).status == "flagged"
    assert [r.id for r in list_template_reports(session).items] == [report.id]


def test_reporter_cannot_hold_two_open_reports_on_one_template(session, make_template):
    template = make_template()
    flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")

    with pytest.raises(ValidationError):
        flag_template(session, template_id=template.id, reporter_id="ana", reason="Again")

    second = flag_template(session, template_id=template.id, reporter_id="bob", reason="Copy")
    assert second.previous_status == "approved"


def test_flagging_rejects_bad_input(session, make_template):
    template = make_template()

    with pytest.raises(NotFoundError):
        flag_template(session, template_id=404, reporter_id="ana", reason="Spam")
    with pytest.raises(ValidationError):
        flag_template(session, template_id=template.id, reporter_id="ana", reason="   ")
    with pytest.raises(ValidationError):
        flag_template(session, template_id=template.id, reporter_id="", reason="Spam")
    with pytest.raises(ValidationError):
        flag_template(session, template_id=template.id, reporter_id="ana", reason="x" * 501)
    assert get_template(session, template.id).status == "approved"


def test_dismissing_the_last_open_report_restores_the_previous_status(
    session, make_template
):
    template = make_template()
    first = flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")
    second = flag_template(session, template_id=template.id, reporter_id="bob", reason="Copy")

    dismissed = resolve_template_report(
        session, report_id=first.id, resolution="dismiss", moderator_id="mod-1"
    )
    assert dismissed.status == "dismissed"
    assert dismissed.resolved_by == "mod-1"
    assert dismissed.resolved_at is not None
    assert get_template(session, template.id).status == "flagged"

    resolve_template_report(
        session,
        report_id=second.id,
        resolution="Dismiss",
        moderator_id="mod-1",
        notes="Original work",
    )

    restored = get_template(session, template.id)
    assert restored.status == "approved"
    assert restored.is_listed
    assert list_template_reports(session).items == ()
    assert [r.status for r in list_template_reports(session, status=None).items] == [
        "dismissed",
        "dismissed",
    ]


def test_upholding_a_report_rejects_the_template_and_closes_all_reports(
    session, make_template
):
    template = make_template()
    first = flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")
    flag_template(session, template_id=template.id, reporter_id="bob", reason="Copy")

    upheld = resolve_template_report(
        session, report_id=first.id, resolution="uphold", moderator_id="mod-1"
    )

    assert upheld.status == "upheld"
    rejected = get_template(session, template.id)
    assert rejected.status == "rejected"
    assert not rejected.is_active
    assert not rejected.is_listed
    assert rejected.moderated_by == "mod-1"
    assert list_template_reports(session).items == ()
    assert {r.status for r in list_template_reports(session, status="upheld").items} == {
        "upheld"
    }
    assert len(list_template_reports(session, status="upheld").items) == 2
    log = ModerationLogRepository(session).list_for_template(template.id)
    assert log[0].action == "reject"
    assert log[0].previous_status == "flagged"


def test_resolving_checks_the_report(session, make_template):
    template = make_template()
    report = flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")

    with pytest.raises(NotFoundError):
        resolve_template_report(
            session, report_id=404, resolution="dismiss", moderator_id="mod-1"
        )
    with pytest.raises(ValidationError):
        resolve_template_report(
            session, report_id=report.id, resolution="ignore", moderator_id="mod-1"
        )

    resolve_template_report(
        session, report_id=report.id, resolution="dismiss", moderator_id="mod-1"
    )
    with pytest.raises(ValidationError):
        resolve_template_report(
            session, report_id=report.id, resolution="uphold", moderator_id="mod-1"
        )
    assert get_template(session, template.id).status == "approved"


def test_report_listing_validates_status(session):
    with pytest.raises(ValidationError):
        list_template_reports(session, status="closed")


def test_bulk_moderation_reports_each_template(session, make_template, caplog):
    first = make_template(approve=False)
    second = make_template(approve=False)

    with caplog.at_level("WARNING"):
        results = bulk_moderate(
            session,
            template_ids=[first.id, 404, second.id, first.id],
            status="approved",
            moderator_id="mod-1",
            review_notes="Batch review",
        )

    assert [(r.template_id, r.success, r.status) for r in results] == [
        (first.id, True, "approved"),
        (404, False, None),
        (second.id, True, "approved"),
    ]
    assert results[1].error == "Template 404 not found"
    assert "Bulk moderation skipped template 404" in caplog.text
    assert get_template(session, first.id).review_notes == "Batch review"
    assert get_template(session, second.id).is_listed


def test_bulk_moderation_validates_before_writing(session, make_template):
    template = make_template(approve=False)

    with pytest.raises(ValidationError):
        bulk_moderate(session, template_ids=[], status="approved", moderator_id="mod-1")
    with pytest.raises(ValidationError):
        bulk_moderate(
            session, template_ids=[template.id], status="archived", moderator_id="mod-1"
        )
    with pytest.raises(ValidationError):
        bulk_moderate(
            session, template_ids=list(range(1, 102)), status="approved", moderator_id="mod-1"
        )
    assert get_template(session, template.id).status == "pending"


def test_moderation_stats_count_recent_activity(session, make_template):
    kept = make_template()
    dropped = make_template()
    moderate_template(session, template_id=dropped.id, status="rejected", moderator_id="mod-2")
    moderate_template(session, template_id=dropped.id, status="pending", moderator_id="mod-2")
    flag_template(session, template_id=kept.id, reporter_id="ana", reason="Spam")

    stats = get_moderation_stats(session, days=7)

    assert stats.total_actions == 4
    assert stats.approved == 2
    assert stats.rejected == 1
    assert stats.requeued == 1
    assert stats.flagged == 0
    assert stats.reports_opened == 1
    assert stats.top_moderators == (
        ModeratorActivity(moderator_id="mod-2", actions=2),
        ModeratorActivity(moderator_id="moderator-1", actions=2),
    )


def test_moderation_stats_ignore_activity_before_the_window(session, make_template):
    make_template()

    later = get_moderation_stats(session, days=30, now=now_in_app_timezone() + timedelta(days=60))

    assert later.total_actions == 0
    assert later.reports_opened == 0
    assert later.top_moderators == ()
    with pytest.raises(ValidationError):
        get_moderation_stats(session, days=0)


def test_featuring_templates_by_hand(session, make_template):
    low = make_template()
    high = make_template()
    make_template()
    pending = make_template(approve=False)
    submit_rating(session, template_id=high.id, user_id="ana", score=5)
    submit_rating(session, template_id=low.id, user_id="ana", score=2)

    featured = set_template_featured(session, template_id=low.id)
    assert featured.manually_featured
    assert featured.featured_at is not None
    set_template_featured(session, template_id=high.id)

    assert [t.id for t in get_featured_templates(session)] == [high.id, low.id]
    assert [t.id for t in get_featured_templates(session, limit=1)] == [high.id]

    with pytest.raises(ValidationError):
        set_template_featured(session, template_id=pending.id)
    with pytest.raises(NotFoundError):
        set_template_featured(session, template_id=404)
    with pytest.raises(ValidationError):
        get_featured_templates(session, limit=0)

    unfeatured = set_template_featured(session, template_id=low.id, featured=False)
    assert not unfeatured.manually_featured
    assert unfeatured.featured_at is None
    assert [t.id for t in get_featured_templates(session)] == [high.id]


def test_rejecting_a_template_withdraws_its_featuring(session, make_template):
    template = make_template()
    set_template_featured(session, template_id=template.id)

    moderate_template(session, template_id=template.id, status="rejected", moderator_id="mod-1")

    assert not get_template(session, template.id).manually_featured
    assert get_featured_templates(session) == []


def test_flagged_templates_leave_the_featured_shelf(session, make_template):
    template = make_template()
    set_template_featured(session, template_id=template.id)

    flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")

    assert get_featured_templates(session) == []
    assert get_marketplace_stats(session).flagged == 1


def test_deleting_a_template_removes_its_reports(session, make_template):
    template = make_template()
    flag_template(session, template_id=template.id, reporter_id="ana", reason="Spam")

    delete_template(session, template.id)

    assert list_template_reports(session, status=None).items == ()
