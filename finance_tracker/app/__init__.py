"""
Modular pieces of the finance tracker reports page.

The date-range engine (presets, picker state machine, presenter) has no
Streamlit dependency so it can be exercised on its own; layout and
data_loader bind it to the page and the reporting API.
"""

from .config import (
    CUSTOM_LABEL,
    DEFAULT_PRESET_LABEL,
    PLACEHOLDER_LABEL,
)
from .context import DateRange, FilterState
from .date_presets import DATE_PRESETS, DatePreset, PresetLabel, get_preset
from .date_range_picker import DateRangePicker, SelectionState
from .formatting import format_date_range

__all__ = [
    "CUSTOM_LABEL",
    "DEFAULT_PRESET_LABEL",
    "PLACEHOLDER_LABEL",
    "DATE_PRESETS",
    "DateRange",
    "DatePreset",
    "DateRangePicker",
    "FilterState",
    "PresetLabel",
    "SelectionState",
    "format_date_range",
    "get_preset",
]
