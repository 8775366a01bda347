"""Tests for rating templates and keeping their quality score current."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from app.application.use_cases.ratings import (
    list_template_ratings,
    recompute_quality_score,
    submit_rating,
)
from app.application.use_cases.templates import get_template
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import RatingRepository


def test_first_rating_sets_the_quality_score(session, make_template):
    template = make_template()

    score = submit_rating(session, template_id=template.id, user_id="ana", score=4)

    assert score.total_ratings == 1
    assert score.average == 4.0
    assert get_template(session, template.id).quality_score == score


def test_rating_again_replaces_the_previous_rating(session, make_template):
    template = make_template()
    submit_rating(session, template_id=template.id, user_id="ana", score=2, comment="meh")

    score = submit_rating(
        session, template_id=template.id, user_id="ana", score=5, comment="  fixed it  "
    )

    assert score.total_ratings == 1
    assert score.average == 5.0
    (rating,) = list_template_ratings(session, template.id)
    assert rating.score == 5
    assert rating.comment == "fixed it"
    assert rating.updated_at is not None


@pytest.mark.parametrize("score", [0, 6, 3.5, "4", True])
def test_invalid_scores_are_rejected_without_writing(session, make_template, score):
    template = make_template()

    with pytest.raises(ValidationError):
        submit_rating(session, template_id=template.id, user_id="ana", score=score)

    assert list_template_ratings(session, template.id) == []
    assert get_template(session, template.id).quality_score.total_ratings == 0


def test_overlong_comment_is_rejected(session, make_template):
    template = make_template()

    with pytest.raises(ValidationError):
        submit_rating(
            session, template_id=template.id, user_id="ana", score=4, comment="x" * 501
        )


def test_blank_user_is_rejected(session, make_template):
    template = make_template()

    with pytest.raises(ValidationError):
        submit_rating(session, template_id=template.id, user_id="  ", score=4)


def test_rating_unknown_template_raises_not_found(session):
    with pytest.raises(NotFoundError):
        submit_rating(session, template_id=999, user_id="ana", score=4)


def test_cached_score_matches_a_full_recompute(session, make_template):
    template = make_template()
    for index, value in enumerate([5, 5, 5, 4, 5, 5, 5, 5, 4, 5]):
        cached = submit_rating(
            session, template_id=template.id, user_id=f"user-{index}", score=value
        )

    recomputed = recompute_quality_score(session, template_id=template.id)

    assert cached == recomputed
    assert recomputed.average == 4.8
    assert recomputed.wilson_lower_bound == 3.34
    assert recomputed.is_quality_for_ai is True


def test_recompute_unknown_template_raises_not_found(session):
    with pytest.raises(NotFoundError):
        recompute_quality_score(session, template_id=404)


def test_ratings_are_listed_newest_first(session, make_template):
    template = make_template()
    for user in ("first", "second", "third"):
        submit_rating(session, template_id=template.id, user_id=user, score=3)

    ratings = list_template_ratings(session, template.id)

    assert [rating.user_id for rating in ratings] == ["third", "second", "first"]


def test_concurrent_ratings_are_all_counted(session, session_factory, make_template):
    """Distinct users rating at once must all land in the aggregate."""

    template = make_template()
    session.close()
    scores = {f"user-{index}": 4 + index % 2 for index in range(12)}

    def _rate(user_id: str) -> None:
        submit_rating(
            session_factory(),
            template_id=template.id,
            user_id=user_id,
            score=scores[user_id],
        )

    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(_rate, scores))

    quality = get_template(session, template.id).quality_score
    assert quality.total_ratings == len(scores)
    assert quality.average == round(sum(scores.values()) / len(scores), 2)


def test_losing_the_first_insert_race_replays_as_an_update(
    session, make_template, monkeypatch: pytest.MonkeyPatch, caplog
):
    template = make_template()
    submit_rating(session, template_id=template.id, user_id="ana", score=2)
    real_get_model = RatingRepository._get_model
    lookups = []

    # The first lookup misses the row another writer already committed.
    def _miss_once(self, template_id, user_id):
        lookups.append(user_id)
        if len(lookups) == 1:
            return None
        return real_get_model(self, template_id, user_id)

    monkeypatch.setattr(RatingRepository, "_get_model", _miss_once)
    with caplog.at_level("WARNING"):
        score = submit_rating(session, template_id=template.id, user_id="ana", score=5)
    monkeypatch.undo()

    assert len(lookups) == 2
    assert "conflicted with a concurrent writer" in caplog.text
    assert score.total_ratings == 1
    assert score.average == 5.0
    (rating,) = list_template_ratings(session, template.id)
    assert rating.score == 5
    assert get_template(session, template.id).quality_score == score
