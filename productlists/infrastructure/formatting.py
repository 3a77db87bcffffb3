"""Date formatting helpers."""

from datetime import datetime


def format_date(value: datetime | str | None, date_format: str) -> str:
    """Render a record timestamp with the configured display format.

    Args:
        value: Datetime or ISO-8601 string as returned by the record store.
        date_format: ``strftime`` pattern.

    Returns:
        Formatted date, or an empty string when there is no value.
    """
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.strftime(date_format)
