"""Tests for the template catalogue use cases."""

from decimal import Decimal

import pytest

from app.application.use_cases.collections import create_collection, get_collection
from app.application.use_cases.ratings import submit_rating
from app.application.use_cases.templates import (
    add_template_comment,
    delete_template,
    get_marketplace_stats,
    get_template,
    get_templates_by_ids,
    list_quality_templates_for_ai,
    list_template_comments,
    list_templates,
    list_templates_by_status,
    moderate_template,
    record_growth_rate,
    submit_template,
    track_template_usage,
    update_template_listing,
)
from app.application.use_cases.versions import create_version, list_versions
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import RatingRepository


def test_submission_awaits_moderation(session, page_snapshot):
    template = submit_template(
        session,
        name="  Bakery Landing  ",
        category="Landing",
        content=page_snapshot("Text", "Image"),
        created_by="creator-1",
        tags=["Food", "food", " bakery "],
        creator_display_name="Chef",
    )

    assert template.id is not None
    assert template.name == "Bakery Landing"
    assert template.category == "landing"
    assert template.status == "pending"
    assert template.visibility == "unlisted"
    assert template.tags == ("food", "bakery")
    assert template.current_version == "1.0.0"
    assert template.version_count == 0
    assert template.ai_metadata.has_images is True
    assert template.quality_score.total_ratings == 0
    assert template.price == Decimal("0.00")


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"category": "games"},
        {"content": "not json"},
        {"template_type": "free", "price": "5"},
        {"template_type": "paid", "price": "-1"},
        {"template_type": "rental"},
        {"tags": ["x" * 41]},
        {"created_by": ""},
    ],
)
def test_invalid_submissions_are_rejected(session, page_snapshot, overrides):
    payload = {
        "name": "Portfolio",
        "category": "portfolio",
        "content": page_snapshot("Text"),
        "created_by": "creator-1",
    }
    payload.update(overrides)

    with pytest.raises(ValidationError):
        submit_template(session, **payload)

    assert list_templates_by_status(session).items == ()


def test_paid_submission_keeps_its_price(session, page_snapshot):
    template = submit_template(
        session,
        name="Shop",
        category="ecommerce",
        content=page_snapshot("Text"),
        created_by="creator-1",
        template_type="paid",
        price="19.9",
    )

    assert template.template_type == "paid"
    assert template.price == Decimal("19.90")


def test_approval_lists_and_rejection_hides(session, make_template):
    template = make_template(approve=False)

    approved = moderate_template(
        session,
        template_id=template.id,
        status="approved",
        moderator_id="mod",
        review_notes="Looks great",
    )
    assert approved.status == "approved"
    assert approved.is_listed is True
    assert approved.is_active is True
    assert approved.moderated_by == "mod"
    assert approved.moderated_at is not None
    assert approved.review_notes == "Looks great"

    rejected = moderate_template(
        session, template_id=template.id, status="rejected", moderator_id="mod"
    )
    assert rejected.is_listed is False
    assert rejected.is_active is False
    assert rejected.review_notes == "Looks great"
    assert list_templates(session).items == ()


def test_moving_back_to_pending_keeps_visibility(session, make_template):
    template = make_template()

    pending = moderate_template(
        session, template_id=template.id, status="pending", moderator_id="mod"
    )

    assert pending.status == "pending"
    assert pending.is_listed is True
    assert pending.is_active is True


def test_moderation_rejects_unknown_status_and_template(session, make_template):
    template = make_template(approve=False)

    with pytest.raises(ValidationError):
        moderate_template(
            session, template_id=template.id, status="archived", moderator_id="mod"
        )
    with pytest.raises(NotFoundError):
        moderate_template(session, template_id=999, status="approved", moderator_id="mod")


def test_moderation_queue_filters_by_status(session, make_template):
    pending = make_template(approve=False)
    make_template()

    page = list_templates_by_status(session, status="pending")

    assert [template.id for template in page.items] == [pending.id]


def test_listing_update_changes_only_given_fields(session, make_template):
    template = make_template(tags=("food",))

    updated = update_template_listing(
        session,
        template_id=template.id,
        template_type="premium",
        price="49.5",
        tags=["Bakery"],
    )

    assert updated.template_type == "premium"
    assert updated.price == Decimal("49.50")
    assert updated.tags == ("bakery",)
    assert updated.description == template.description
    assert updated.is_listed is True

    unlisted = update_template_listing(session, template_id=template.id, is_listed=False)
    assert unlisted.is_listed is False
    assert unlisted.price == Decimal("49.50")


def test_listing_update_cannot_price_a_free_template(session, make_template):
    template = make_template()

    with pytest.raises(ValidationError):
        update_template_listing(session, template_id=template.id, price="10")


def test_usage_counters(session, make_template):
    template = make_template()

    track_template_usage(session, template_id=template.id)
    track_template_usage(session, template_id=template.id, action="download")
    track_template_usage(session, template_id=template.id, action="download")
    track_template_usage(session, template_id=template.id, action="view")

    refreshed = get_template(session, template.id)
    assert refreshed.usage_count == 1
    assert refreshed.download_count == 2
    assert refreshed.view_count == 1


def test_usage_tracking_rejects_unknown_action_and_template(session, make_template):
    template = make_template()

    with pytest.raises(ValidationError):
        track_template_usage(session, template_id=template.id, action="share")
    with pytest.raises(NotFoundError):
        track_template_usage(session, template_id=404)


def test_growth_rate(session, make_template):
    template = make_template()

    record_growth_rate(session, template_id=template.id, growth_rate=1.75)
    assert get_template(session, template.id).growth_rate == 1.75

    record_growth_rate(session, template_id=template.id, growth_rate=None)
    assert get_template(session, template.id).growth_rate is None

    with pytest.raises(ValidationError):
        record_growth_rate(session, template_id=template.id, growth_rate=float("nan"))


def test_list_templates_pages_with_a_cursor(session, make_template):
    created = [make_template() for _ in range(5)]

    first = list_templates(session, limit=2)
    second = list_templates(session, limit=2, cursor=first.next_cursor)
    third = list_templates(session, limit=2, cursor=second.next_cursor)

    seen = [template.id for page in (first, second, third) for template in page.items]
    assert seen == [template.id for template in reversed(created)]
    assert third.next_cursor is None


def test_list_templates_rejects_bad_arguments(session):
    with pytest.raises(ValidationError):
        list_templates(session, cursor="not-a-cursor")
    with pytest.raises(ValidationError):
        list_templates(session, sort_by="alphabetical")
    with pytest.raises(ValidationError):
        list_templates(session, limit=0)


def test_search_matches_name_description_and_tags(session, make_template):
    bakery = make_template(name="Bakery", tags=("food",))
    make_template(name="Portfolio", tags=("photo",))
    cafe = make_template(name="Corner", tags=("FOOD-truck",))

    found = list_templates(session, search="Food")

    assert {template.id for template in found.items} == {bakery.id, cafe.id}


def test_list_templates_filters_and_sorts(session, make_template):
    make_template(category="blog", downloads=3)
    popular = make_template(category="landing", downloads=9)
    make_template(category="landing", downloads=1)

    landing = list_templates(session, category="landing", sort_by="usage")

    assert landing.items[0].id == popular.id
    assert {template.category for template in landing.items} == {"landing"}


def test_quality_templates_for_ai(session, make_template):
    strong = make_template()
    weak = make_template()
    for index in range(10):
        submit_rating(session, template_id=strong.id, user_id=f"u{index}", score=4)
        submit_rating(session, template_id=weak.id, user_id=f"u{index}", score=3)

    eligible = list_quality_templates_for_ai(session)

    assert [template.id for template in eligible] == [strong.id]


def test_get_templates_by_ids_skips_missing_ids(session, make_template):
    first = make_template()
    second = make_template()

    found = get_templates_by_ids(session, [second.id, 999, first.id, second.id])

    assert [template.id for template in found] == [second.id, first.id]


def test_delete_cascades_and_reconciles_collections(
    session, make_template, page_snapshot
):
    kept_a, doomed, kept_b = (make_template() for _ in range(3))
    submit_rating(session, template_id=doomed.id, user_id="ana", score=5)
    add_template_comment(session, template_id=doomed.id, user_id="ana", comment="Nice")
    create_version(
        session,
        template_id=doomed.id,
        content=page_snapshot("Text"),
        version_type="minor",
        author_id="editor",
    )
    collection = create_collection(
        session,
        name="Favourites",
        collection_type="curated",
        template_ids=[kept_a.id, doomed.id, kept_b.id],
        created_by="curator",
    )

    delete_template(session, doomed.id)

    with pytest.raises(NotFoundError):
        get_template(session, doomed.id)
    with pytest.raises(NotFoundError):
        list_versions(session, template_id=doomed.id)
    assert RatingRepository(session).aggregate(doomed.id) == (0, 0)
    assert get_collection(session, collection.id).template_ids == (kept_a.id, kept_b.id)


def test_delete_unknown_template_raises_not_found(session):
    with pytest.raises(NotFoundError):
        delete_template(session, 404)


def test_marketplace_stats(session, make_template):
    make_template(approve=False)
    paid = make_template(template_type="paid", price="10.00", downloads=3)
    rejected = make_template()
    moderate_template(session, template_id=rejected.id, status="rejected", moderator_id="mod")
    submit_rating(session, template_id=paid.id, user_id="ana", score=4)
    submit_rating(session, template_id=paid.id, user_id="bob", score=5)

    stats = get_marketplace_stats(session)

    assert stats.total_templates == 3
    assert stats.pending_review == 1
    assert stats.approved == 1
    assert stats.rejected == 1
    assert stats.featured == 0
    assert stats.total_downloads == 3
    assert stats.total_revenue == Decimal("30.00")
    assert stats.average_rating == 4.5


def test_comments(session, make_template):
    template = make_template()
    add_template_comment(session, template_id=template.id, user_id="ana", comment="First!")
    latest = add_template_comment(
        session,
        template_id=template.id,
        user_id="bob",
        comment="  Love the layout ",
        display_name="Bob",
    )

    comments = list_template_comments(session, template.id)

    assert latest.comment == "Love the layout"
    assert [comment.user_id for comment in comments] == ["bob", "ana"]
    assert comments[0].display_name == "Bob"


@pytest.mark.parametrize("text", ["   ", "x" * 501])
def test_invalid_comments_are_rejected(session, make_template, text):
    template = make_template()

    with pytest.raises(ValidationError):
        add_template_comment(session, template_id=template.id, user_id="ana", comment=text)


def test_commenting_unknown_template_raises_not_found(session):
    with pytest.raises(NotFoundError):
        add_template_comment(session, template_id=404, user_id="ana", comment="Hi")
