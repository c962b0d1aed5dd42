"""Calendar-day keys shared by both sides of the date match.

Every comparison between a source accounting date and a target calendar date goes
through one ``DayNormalizer`` so that both values are truncated under the same
time-zone policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo

type DateInput = date | datetime | str


class InvalidDateError(ValueError):
    """Raised when a value cannot be interpreted as a date or timestamp."""


@dataclass(frozen=True, slots=True)
class DayNormalizer:
    """Turn dates, timestamps and ISO strings into ``YYYY-MM-DD`` keys.

    Date-only values are their own key. Aware timestamps are converted to
    ``timezone`` before truncation; naive timestamps are read as ``timezone`` local.
    """

    timezone: tzinfo = UTC

    def __call__(self, value: DateInput) -> str:
        return self.to_date(value).isoformat()

    def to_date(self, value: DateInput) -> date:
        # datetime is a date subclass, so it must be checked first
        if isinstance(value, datetime):
            return self._truncate(value)
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return self._parse(value)
        raise InvalidDateError(f"Unsupported date value: {value!r}")

    def _truncate(self, value: datetime) -> date:
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.timezone)
        return value.astimezone(self.timezone).date()

    def _parse(self, raw: str) -> date:
        text = raw.strip()
        if not text:
            raise InvalidDateError("Empty date value")
        try:
            if "T" not in text and " " not in text:
                return date.fromisoformat(text)
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return self._truncate(datetime.fromisoformat(text))
        except ValueError as exc:
            raise InvalidDateError(f"Invalid ISO date: {raw}") from exc
