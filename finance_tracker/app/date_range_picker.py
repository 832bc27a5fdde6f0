import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Union

from .config import CUSTOM_LABEL, DEFAULT_PRESET_LABEL
from .context import DateRange
from .date_presets import PresetLabel, get_preset
from .formatting import format_date_range

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    committed_range: Optional[DateRange] = None
    active_label: Optional[str] = None
    is_custom_mode: bool = False
    draft_from: str = ""
    draft_to: str = ""
    is_open: bool = False


class DateRangePicker:
    """
    Controlled date-range selector.

    The owner supplies the current range (or nothing) and receives every
    user-driven commit through `on_change`. Presets and the custom from/to
    drafts are the only ways to commit; draft edits stay local until applied.
    Adopting a value from the owner never calls back, so the owner can feed
    the notified range straight back in without a loop.
    """

    def __init__(
        self,
        on_change: Callable[[DateRange], None],
        today: Optional[Callable[[], date]] = None,
    ):
        self.on_change = on_change
        self.today = today or date.today
        self.state = SelectionState()
        self.mounted = False
        # Last value received from the owner; drafts follow it one way.
        self.external_value: Optional[DateRange] = None
        # Bumped whenever drafts are overwritten from outside, so widgets
        # bound to the drafts know to drop their own state.
        self.revision = 0
        # Set by a commit until the owner next supplies a value.
        self.awaiting_echo = False

    # Owner-facing lifecycle

    def mount(self, value: Optional[DateRange] = None) -> None:
        if self.mounted:
            self.sync(value)
            return
        self.mounted = True
        if value is None:
            self._commit_preset(DEFAULT_PRESET_LABEL)
            logger.debug("Self-initialized date range to %s", self.state.committed_range)
            return
        self._adopt(value)

    def sync(self, value: Optional[DateRange]) -> None:
        """
        Follow the owner's range. Drafts are rewritten when the owner hands
        over a new value or echoes back a commit; otherwise only the committed
        range follows, so an owner that keeps its old range wins.
        """
        if value is None:
            return
        if value != self.external_value or (self.awaiting_echo and value == self.state.committed_range):
            self._adopt(value)
        elif value != self.state.committed_range:
            self.state.committed_range = value
        self.awaiting_echo = False

    def resync_drafts(self) -> None:
        committed = self.state.committed_range
        if committed is None:
            return
        if (self.state.draft_from, self.state.draft_to) != (committed.date_from, committed.date_to):
            self.state.draft_from = committed.date_from
            self.state.draft_to = committed.date_to
            self.revision += 1

    # Picker surface

    def open(self) -> None:
        self.state.is_open = True

    def close(self) -> None:
        self.state.is_open = False

    dismiss = close

    def toggle(self) -> None:
        self.state.is_open = not self.state.is_open

    def select_preset(self, label: Union[PresetLabel, str]) -> DateRange:
        committed = self._commit_preset(label)
        self.state.is_open = False
        return committed

    def set_draft_from(self, value: Optional[str]) -> None:
        self.state.draft_from = value or ""

    def set_draft_to(self, value: Optional[str]) -> None:
        self.state.draft_to = value or ""

    @property
    def can_apply(self) -> bool:
        return bool(self.state.draft_from) and bool(self.state.draft_to)

    def apply_custom(self) -> Optional[DateRange]:
        if not self.can_apply:
            logger.debug("Custom range apply rejected: incomplete drafts.")
            return None
        # Bounds pass through as typed; an inverted range is not swapped.
        committed = DateRange(date_from=self.state.draft_from, date_to=self.state.draft_to)
        self.state.committed_range = committed
        self.state.active_label = CUSTOM_LABEL
        self.state.is_custom_mode = True
        self.state.is_open = False
        self._notify(committed)
        return committed

    @property
    def can_clear(self) -> bool:
        return self.state.is_custom_mode

    def clear(self) -> Optional[DateRange]:
        if not self.can_clear:
            return None
        return self._commit_preset(DEFAULT_PRESET_LABEL)

    # Presentation helpers

    @property
    def label(self) -> str:
        return format_date_range(self.state.committed_range)

    def is_preset_active(self, label: Union[PresetLabel, str]) -> bool:
        return not self.state.is_custom_mode and self.state.active_label == PresetLabel(label).value

    # Internals

    def _adopt(self, value: DateRange) -> None:
        self.external_value = value
        self.state.committed_range = value
        self.resync_drafts()

    def _commit_preset(self, label: Union[PresetLabel, str]) -> DateRange:
        preset = get_preset(label)
        committed = preset.compute(self.today())
        self.state.committed_range = committed
        self.state.active_label = preset.label.value
        self.state.is_custom_mode = False
        self._notify(committed)
        return committed

    def _notify(self, value: DateRange) -> None:
        self.awaiting_echo = True
        logger.debug("Date range committed: %s (%s)", value, self.state.active_label)
        self.on_change(value)
