import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from .context import DateRange


class PresetLabel(str, Enum):
    TODAY = "Today"
    LAST_7_DAYS = "Last 7 Days"
    THIS_WEEK = "This Week"
    THIS_MONTH = "This Month"
    LAST_30_DAYS = "Last 30 Days"
    THIS_YEAR = "This Year"


def _single_day(today: date) -> Tuple[date, date]:
    return today, today


def _trailing_days(days: int) -> Callable[[date], Tuple[date, date]]:
    # Inclusive window of `days` calendar days ending today.
    def window(today: date) -> Tuple[date, date]:
        return today - timedelta(days=days - 1), today

    return window


def _this_week(today: date) -> Tuple[date, date]:
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def _this_month(today: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def _this_year(today: date) -> Tuple[date, date]:
    return date(today.year, 1, 1), date(today.year, 12, 31)


@dataclass(frozen=True)
class DatePreset:
    label: PresetLabel
    bounds: Callable[[date], Tuple[date, date]]

    def compute(self, today: Optional[date] = None) -> DateRange:
        """Evaluate the preset against `today` (defaults to the current date)."""
        start, end = self.bounds(today or date.today())
        return DateRange.from_dates(start, end)


# Display order of the quick-select buttons.
DATE_PRESETS: Tuple[DatePreset, ...] = (
    DatePreset(PresetLabel.TODAY, _single_day),
    DatePreset(PresetLabel.LAST_7_DAYS, _trailing_days(7)),
    DatePreset(PresetLabel.THIS_WEEK, _this_week),
    DatePreset(PresetLabel.THIS_MONTH, _this_month),
    DatePreset(PresetLabel.LAST_30_DAYS, _trailing_days(30)),
    DatePreset(PresetLabel.THIS_YEAR, _this_year),
)

_PRESETS_BY_LABEL: Dict[PresetLabel, DatePreset] = {preset.label: preset for preset in DATE_PRESETS}


def get_preset(label: Union[PresetLabel, str]) -> DatePreset:
    """
    Look up a preset by label. Unknown labels raise ValueError rather than
    falling back to a default preset.
    """
    return _PRESETS_BY_LABEL[PresetLabel(label)]


def compute_preset(label: Union[PresetLabel, str], today: Optional[date] = None) -> DateRange:
    return get_preset(label).compute(today)
