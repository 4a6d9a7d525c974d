"""Timor-Leste public holiday calendar and pay-date adjustment.

The calendar holds the fixed national holidays plus the Easter-based
Catholic holidays observed in TL (Good Friday, Corpus Christi). Holidays
announced each year, such as Eid, are supplied by the caller as
``additional_holidays``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import Iterable

# (month, day, name, Tetun name)
_FIXED_HOLIDAYS = (
    (1, 1, "New Year's Day", "Loron Tinan Foun"),
    (3, 3, "Veterans Day", "Loron Veteranu"),
    (5, 1, "Labor Day", "Loron Trabalhador"),
    (5, 20, "Independence Restoration Day", "Loron Restaurasaun Independensia"),
    (8, 30, "Popular Consultation Day", "Loron Konsulta Popular"),
    (11, 1, "All Saints Day", "Loron Santu Hotu"),
    (11, 2, "All Souls Day", "Loron Finadu"),
    (11, 12, "National Youth Day", "Loron Juventude Nasional"),
    (11, 28, "Independence Proclamation Day", "Loron Proklamasaun Independensia"),
    (12, 7, "Memorial Day", "Loron Memoria"),
    (12, 8, "Immaculate Conception", "Loron Imakulada Konseisaun"),
    (12, 25, "Christmas Day", "Loron Natal"),
    (12, 31, "National Heroes Day", "Loron Heroi Nasional"),
)

# Offsets from Easter Sunday
_MOVABLE_HOLIDAYS = (
    (-2, "Good Friday", "Sesta-feira Santa"),
    (60, "Corpus Christi", "Corpus Christi"),
)


@dataclass(frozen=True)
class PublicHoliday:
    """A single public holiday."""

    day: date
    name: str
    name_tl: str
    is_movable: bool = False


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday (anonymous Gregorian / Meeus algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    shift = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * shift) // 451
    month, day = divmod(h + shift - 7 * m + 114, 31)
    return date(year, month, day + 1)


def public_holidays(year: int) -> list[PublicHoliday]:
    """All TL public holidays in a year, in date order."""
    holidays = [
        PublicHoliday(date(year, month, day), name, name_tl)
        for month, day, name, name_tl in _FIXED_HOLIDAYS
    ]
    easter = easter_sunday(year)
    holidays.extend(
        PublicHoliday(easter + timedelta(days=offset), name, name_tl, is_movable=True)
        for offset, name, name_tl in _MOVABLE_HOLIDAYS
    )
    return sorted(holidays, key=lambda holiday: holiday.day)


@lru_cache(maxsize=32)
def _holiday_dates(year: int) -> frozenset[date]:
    return frozenset(holiday.day for holiday in public_holidays(year))


def is_business_day(
    day: date,
    additional_holidays: Iterable[date] = (),
    removed_holidays: Iterable[date] = (),
) -> bool:
    """True for a weekday that is not a public holiday.

    ``removed_holidays`` drops calendar holidays (e.g. a holiday moved by
    decree) and ``additional_holidays`` adds one-off ones.
    """
    if day.weekday() >= 5:
        return False
    if day in set(additional_holidays):
        return False
    return day not in _holiday_dates(day.year) or day in set(removed_holidays)


def next_business_day(
    day: date,
    additional_holidays: Iterable[date] = (),
    removed_holidays: Iterable[date] = (),
) -> date:
    """Move a pay date forward to the first business day on or after it."""
    added = frozenset(additional_holidays)
    removed = frozenset(removed_holidays)

    cursor = day
    while not is_business_day(cursor, added, removed):
        cursor += timedelta(days=1)
    return cursor
