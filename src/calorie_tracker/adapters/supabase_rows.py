"""Row decoding helpers shared by the Supabase repositories."""

import json
import logging
from datetime import UTC, date, datetime

_logger = logging.getLogger(__name__)


def decode_json_field(value: object, field_name: str) -> object | None:
    """Return a JSON column as a Python value.

    JSONB columns usually arrive decoded, but rows written by older clients
    hold a JSON-encoded string instead. Structured values are returned as-is,
    strings are decoded once more; malformed strings are logged and dropped.
    """
    if value is None:
        return None
    if isinstance(value, dict | list):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            _logger.warning("Failed to decode %s column", field_name)
            return None
    _logger.warning(
        "Unexpected %s column type: %s", field_name, type(value).__name__
    )
    return None


def parse_datetime(value: object) -> datetime | None:
    """Parse a timestamp column; naive values are treated as UTC."""
    if not isinstance(value, str) or not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: object) -> date:
    """Parse a date column, tolerating a full timestamp."""
    text = str(value)
    return date.fromisoformat(text[:10])


def to_float(value: object, default: float = 0.0) -> float:
    """Coerce a numeric column to float."""
    if value is None:
        return default
    if isinstance(value, int | float):
        return float(value)
    try:
        return float(str(value))
    except ValueError:
        return default
