"""
Week identifier helpers.

Weeks start on Monday and follow ISO-8601 numbering; ids look like "2026-W05".
"""

from datetime import date, datetime


def week_id(value: date | datetime) -> str:
    """Return the ISO week id containing `value`."""
    year, week, _ = value.isocalendar()
    return f"{year}-W{week:02d}"


def parse_week_id(value: str) -> tuple[int, int]:
    """Split a week id into (year, week number)."""
    year_part, sep, week_part = value.partition("-W")
    if not sep or not year_part.isdigit() or not week_part.isdigit():
        raise ValueError(f"Invalid week id {value!r}, expected YYYY-Www")
    return int(year_part), int(week_part)


def week_start_from_id(value: str) -> date:
    """Return the Monday that starts the given week."""
    year, week = parse_week_id(value)
    return date.fromisocalendar(year, week, 1)
