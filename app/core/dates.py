"""Helpers de calendrier: bornes de journée et fenêtres de dates"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

from dateutil.parser import parse as parse_date

DayLike = Union[date, datetime]


def to_local_day(value: DayLike) -> date:
    """Ramène un date/datetime au jour calendaire local."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value.date()
    return value


def format_day(value: DayLike) -> str:
    """Jour au format YYYY-MM-DD, année toujours sur quatre chiffres."""
    return to_local_day(value).isoformat()


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # le store travaille en heure locale naïve
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def day_bounds(value: DayLike) -> Tuple[datetime, datetime]:
    """Début et fin (inclus tous les deux) du jour qui contient `value`."""
    day = to_local_day(value)
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def resolve_range(
    start_date: Optional[str],
    end_date: Optional[str],
    default_days: int,
    today: Optional[date] = None,
) -> Tuple[datetime, datetime]:
    """
    Construit la fenêtre [start, end] d'une requête de lecture.

    Sans start_date: aujourd'hui - default_days à 00:00.
    Sans end_date: aujourd'hui à 23:59:59.999999.
    Lève ValueError si une des chaînes n'est pas une date.
    """
    if today is None:
        today = date.today()

    if start_date:
        start = day_bounds(parse_date(start_date))[0]
    else:
        start = day_bounds(today - timedelta(days=default_days))[0]

    if end_date:
        end = day_bounds(parse_date(end_date))[1]
    else:
        end = day_bounds(today)[1]

    return start, end
