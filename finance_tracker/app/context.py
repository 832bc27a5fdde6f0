import hashlib
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from .config import ISO_DATE_FORMAT


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive pair of ISO calendar dates (YYYY-MM-DD) exchanged with the owner
    of a date picker. Values are kept as strings so whatever the owner hands
    over is preserved verbatim; parsing is left to the presentation layer.
    """

    date_from: str
    date_to: str

    @classmethod
    def from_dates(cls, start: date, end: date) -> "DateRange":
        return cls(date_from=start.isoformat(), date_to=end.isoformat())

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DateRange":
        return cls(date_from=payload["from"], date_to=payload["to"])

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.date_from, "to": self.date_to}

    def as_dates(self) -> tuple[date, date]:
        """Parse both bounds. Raises ValueError on malformed strings."""
        return (
            datetime.strptime(self.date_from, ISO_DATE_FORMAT).date(),
            datetime.strptime(self.date_to, ISO_DATE_FORMAT).date(),
        )


@dataclass(frozen=True)
class FilterState:
    """Canonical set of report filters shared between the page and the API client."""

    date_range: Optional[DateRange] = None
    category_id: Optional[str] = None
    source_type: Optional[str] = None
    source_id: Optional[str] = None

    def with_source_type(self, source_type: Optional[str]) -> "FilterState":
        # A source id only makes sense within its source type.
        return replace(self, source_type=source_type or None, source_id=None)

    def query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.date_range is not None:
            params["start_date"] = self.date_range.date_from
            params["end_date"] = self.date_range.date_to
        if self.category_id:
            params["category_id"] = str(self.category_id)
        if self.source_type:
            params["source_type"] = self.source_type
            if self.source_id:
                params["source_id"] = str(self.source_id)
        return params

    def cache_key(self) -> str:
        """Stable identifier for caching data derived from this filter set."""
        return hashlib.sha256(repr(self).encode("utf-8")).hexdigest()[:16]
