"""Resolution of named report periods into concrete date ranges."""

import calendar
from datetime import date, timedelta
from enum import Enum

from src.domain.errors import ValidationError
from src.domain.models.finance import DateRange
from src.domain.services.validation import parse_record_date


class RangePreset(str, Enum):
    """Named report periods offered to the presentation layer."""

    TODAY = "today"
    THIS_WEEK = "week"
    THIS_MONTH = "month"
    CUSTOM = "custom"


def parse_range_preset(value) -> RangePreset:
    """Return the preset matching a wire value or member name."""
    if isinstance(value, RangePreset):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        try:
            return RangePreset(candidate.lower())
        except ValueError:
            if candidate.upper() in RangePreset.__members__:
                return RangePreset[candidate.upper()]
    allowed = ", ".join(member.value for member in RangePreset)
    raise ValidationError("range", f"{value!r} is not one of {allowed}")


def week_range(today: date) -> DateRange:
    """Return the Monday-to-Sunday week containing ``today``."""
    start = today - timedelta(days=today.weekday())
    return DateRange(start_date=start, end_date=start + timedelta(days=6))


def month_range(today: date) -> DateRange:
    """Return the calendar month containing ``today``."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return DateRange(
        start_date=today.replace(day=1),
        end_date=today.replace(day=last_day),
    )


def resolve_date_range(
    preset,
    today: date,
    start=None,
    end=None,
) -> DateRange:
    """Resolve a named or custom period into an inclusive date range.

    Args:
        preset: ``RangePreset`` or its wire value.
        today: Reference day for named presets.
        start: Custom range start (date or ISO string), CUSTOM only.
        end: Custom range end (date or ISO string), CUSTOM only.

    Returns:
        DateRange: Concrete inclusive range.

    Raises:
        ValidationError: On unknown presets or incomplete/inverted custom
            ranges.
    """
    resolved = parse_range_preset(preset)
    if resolved is RangePreset.TODAY:
        return DateRange(start_date=today, end_date=today)
    if resolved is RangePreset.THIS_WEEK:
        return week_range(today)
    if resolved is RangePreset.THIS_MONTH:
        return month_range(today)

    if start is None:
        raise ValidationError("start_date", "custom range needs a start date")
    if end is None:
        raise ValidationError("end_date", "custom range needs an end date")
    start_date = parse_record_date(start, "start_date")
    end_date = parse_record_date(end, "end_date")
    if start_date > end_date:
        raise ValidationError("end_date", "end date is before start date")
    return DateRange(start_date=start_date, end_date=end_date)


__all__ = [
    "RangePreset",
    "parse_range_preset",
    "week_range",
    "month_range",
    "resolve_date_range",
]
