"""Seasonal calendar used to curate seasonal collections."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Season:
    key: str
    name: str
    months: tuple[int, ...]
    theme_color: str
    keywords: tuple[str, ...] = ()


SEASONS: tuple[Season, ...] = (
    Season(
        "spring",
        "Spring",
        (3, 4, 5),
        "#52c41a",
        ("spring", "flowers", "bloom", "fresh", "green", "nature"),
    ),
    Season(
        "summer",
        "Summer",
        (6, 7, 8),
        "#faad14",
        ("summer", "beach", "vacation", "sun", "bright", "tropical"),
    ),
    Season(
        "autumn",
        "Autumn",
        (9, 10, 11),
        "#d48806",
        ("autumn", "fall", "harvest", "orange", "leaves", "cozy"),
    ),
    Season(
        "winter",
        "Winter",
        (12, 1, 2),
        "#1677ff",
        ("winter", "snow", "holiday", "christmas", "cold", "festive"),
    ),
    Season(
        "holiday",
        "Holiday",
        (11, 12),
        "#722ed1",
        ("holiday", "christmas", "festive", "celebration", "gift"),
    ),
    Season(
        "valentine",
        "Valentine's",
        (2,),
        "#f5222d",
        ("valentine", "love", "heart", "romantic", "pink", "red"),
    ),
    # Promotional windows without a keyword list never yield candidates.
    Season("summer_sale", "Summer Sale", (7,), "#ff7a45"),
    Season("black_friday", "Black Friday", (11,), "#2f1b14"),
)


def active_seasons(month: int) -> list[Season]:
    """Return every season whose months include ``month``."""

    return [season for season in SEASONS if month in season.months]


def _last_day(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def season_window(season: Season, month: int, year: int) -> tuple[date, date]:
    """Return the first and last day of ``season`` around ``month``/``year``.

    Seasons that wrap the new year (winter) span December of one year through
    February of the next; ``month`` tells which side of the new year we are on.
    """

    first, last = season.months[0], season.months[-1]
    if first <= last:
        return date(year, first, 1), _last_day(year, last)
    if month >= first:
        return date(year, first, 1), _last_day(year + 1, last)
    return date(year - 1, first, 1), _last_day(year, last)


__all__ = ["SEASONS", "Season", "active_seasons", "season_window"]
