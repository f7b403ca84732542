"""
Display labels for the calendar grid (Spanish, as the client renders them).

Pure formatting: nothing here affects statuses or statistics.
"""
from datetime import date

from habitgrid.domain.period import Period, WEEK, MONTH, QUARTER, SEMESTER, YEAR, validate_granularity

# Above this many days the semester/year grid collapses into month columns
COMPACT_GRID_MIN_DAYS = 100

_MONTH_NAMES_ES: dict[int, str] = {
    1: "enero", 2: "febrero", 3: "marzo", 4: "abril",
    5: "mayo", 6: "junio", 7: "julio", 8: "agosto",
    9: "septiembre", 10: "octubre", 11: "noviembre", 12: "diciembre",
}

# Monday=0 .. Sunday=6; Wednesday is "X" to tell it apart from martes
_WEEKDAY_INITIALS_ES = ("L", "M", "X", "J", "V", "S", "D")

_PERIOD_CAPTIONS_ES: dict[str, str] = {
    WEEK: "Esta semana",
    MONTH: "Este mes",
    QUARTER: "Este trimestre",
    SEMESTER: "Este semestre",
    YEAR: "Este año",
}

_GRANULARITY_NAMES_ES: dict[str, str] = {
    WEEK: "Semana",
    MONTH: "Mes",
    QUARTER: "Trimestre",
    SEMESTER: "Semestre",
    YEAR: "Año",
}


def month_name(month: int) -> str:
    return _MONTH_NAMES_ES[month]


def long_date(day: date) -> str:
    """e.g. '14 de marzo de 2024'"""
    return f"{day.day} de {_MONTH_NAMES_ES[day.month]} de {day.year}"


def day_header(day: date, granularity: str) -> str:
    """Column header for a single day: 'J' for week, '14' for month, '14/3' otherwise."""
    validate_granularity(granularity)
    if granularity == WEEK:
        return _WEEKDAY_INITIALS_ES[day.weekday()]
    if granularity == MONTH:
        return str(day.day)
    return f"{day.day}/{day.month}"


def granularity_name(granularity: str) -> str:
    return _GRANULARITY_NAMES_ES[validate_granularity(granularity)]


def period_caption(granularity: str) -> str:
    return _PERIOD_CAPTIONS_ES[validate_granularity(granularity)]


def range_caption(period: Period) -> str:
    return f"{long_date(period.start)} - {long_date(period.end)}"


def is_compact(period: Period) -> bool:
    return period.granularity in (SEMESTER, YEAR) and len(period.days) > COMPACT_GRID_MIN_DAYS


def month_columns(period: Period) -> list[dict]:
    """
    Days grouped by month, each month split into chunks of at most 7 days.

    Only used for the compact semester/year layout; returns [] for any
    other period.
    """
    if not is_compact(period):
        return []

    by_month: dict[tuple[int, int], list[date]] = {}
    for d in period.days:
        by_month.setdefault((d.year, d.month), []).append(d)

    columns = []
    for (year, month), days in by_month.items():
        chunks = [days[i:i + 7] for i in range(0, len(days), 7)]
        columns.append({
            "year": year,
            "month": month,
            "label": month_name(month),
            "weeks": chunks,
        })
    return columns
