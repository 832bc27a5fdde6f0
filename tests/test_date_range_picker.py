from datetime import date

import pytest

from finance_tracker.app.context import DateRange
from finance_tracker.app.date_presets import PresetLabel, compute_preset
from finance_tracker.app.date_range_picker import DateRangePicker

MAR_05 = date(2024, 3, 5)
MARCH = DateRange("2024-03-01", "2024-03-31")


@pytest.fixture
def calls():
    return []


@pytest.fixture
def clock():
    current = {"today": MAR_05}
    return current


@pytest.fixture
def picker(calls, clock):
    return DateRangePicker(on_change=calls.append, today=lambda: clock["today"])


def test_mount_without_value_self_initializes_once(picker, calls):
    picker.mount()

    assert calls == [MARCH]
    assert picker.state.committed_range == MARCH
    assert picker.state.active_label == "This Month"
    assert picker.state.is_custom_mode is False
    assert picker.label == "Mar 01, 2024 - Mar 31, 2024"


def test_mount_is_only_initialized_once(picker, calls):
    picker.mount()
    picker.mount()
    assert len(calls) == 1


def test_mount_with_value_adopts_without_notifying(picker, calls):
    value = DateRange("2024-01-01", "2024-01-15")
    picker.mount(value)

    assert calls == []
    assert picker.state.committed_range == value
    assert (picker.state.draft_from, picker.state.draft_to) == ("2024-01-01", "2024-01-15")
    assert picker.state.active_label is None


def test_adopted_value_is_not_relabelled_as_matching_preset(picker):
    picker.mount(MARCH)
    assert picker.state.active_label is None
    assert not picker.is_preset_active("This Month")


def test_owner_echo_mirrors_drafts_without_notifying(picker, calls):
    picker.mount()
    assert (picker.state.draft_from, picker.state.draft_to) == ("", "")

    picker.sync(calls[-1])
    assert len(calls) == 1
    assert (picker.state.draft_from, picker.state.draft_to) == ("2024-03-01", "2024-03-31")


def test_open_changes_nothing_else(picker):
    picker.mount(MARCH)
    before = (picker.state.committed_range, picker.state.draft_from, picker.state.draft_to)
    picker.open()
    assert picker.state.is_open is True
    assert (picker.state.committed_range, picker.state.draft_from, picker.state.draft_to) == before


def test_toggle(picker):
    picker.toggle()
    assert picker.state.is_open
    picker.toggle()
    assert not picker.state.is_open


def test_select_today(picker, calls):
    picker.mount(MARCH)
    picker.open()
    result = picker.select_preset(PresetLabel.TODAY)

    assert result == DateRange("2024-03-05", "2024-03-05")
    assert calls == [result]
    assert picker.state.active_label == "Today"
    assert picker.state.is_custom_mode is False
    assert picker.state.is_open is False
    assert picker.label == "Mar 05, 2024"
    assert picker.is_preset_active("Today")
    assert not picker.is_preset_active("This Month")


def test_select_last_7_days(picker, calls, clock):
    clock["today"] = date(2024, 3, 10)
    picker.mount(MARCH)
    picker.select_preset("Last 7 Days")
    assert calls == [DateRange("2024-03-04", "2024-03-10")]


def test_preset_is_evaluated_at_selection_time(picker, calls, clock):
    picker.mount()
    clock["today"] = date(2024, 4, 2)
    picker.select_preset("This Month")
    assert calls[-1] == DateRange("2024-04-01", "2024-04-30")


def test_draft_edits_do_not_commit(picker, calls):
    picker.mount(MARCH)
    picker.open()
    picker.set_draft_from("2024-01-01")

    assert calls == []
    assert picker.state.committed_range == MARCH
    assert picker.state.draft_from == "2024-01-01"
    assert picker.state.is_open


def test_apply_with_only_from_is_rejected(picker, calls):
    picker.mount()
    calls.clear()
    picker.open()
    picker.set_draft_from("2024-01-01")
    picker.set_draft_to("")

    assert picker.can_apply is False
    assert picker.apply_custom() is None
    assert calls == []
    assert picker.state.committed_range == MARCH
    assert picker.state.is_custom_mode is False
    assert picker.state.is_open


def test_apply_custom_range(picker, calls):
    picker.mount(MARCH)
    picker.open()
    picker.set_draft_from("2024-01-01")
    picker.set_draft_to("2024-01-15")
    result = picker.apply_custom()

    assert result == DateRange("2024-01-01", "2024-01-15")
    assert calls == [result]
    assert picker.state.active_label == "Custom"
    assert picker.state.is_custom_mode is True
    assert picker.state.is_open is False
    assert picker.label == "Jan 01, 2024 - Jan 15, 2024"
    assert not picker.is_preset_active("This Month")


def test_inverted_custom_range_passes_through(picker, calls):
    picker.mount(MARCH)
    picker.set_draft_from("2024-02-10")
    picker.set_draft_to("2024-02-01")
    assert picker.apply_custom() == DateRange("2024-02-10", "2024-02-01")
    assert calls == [DateRange("2024-02-10", "2024-02-01")]


def test_clear_restores_this_month(picker, calls):
    picker.mount(MARCH)
    picker.set_draft_from("2024-01-01")
    picker.set_draft_to("2024-01-15")
    picker.apply_custom()
    assert picker.can_clear

    result = picker.clear()

    assert result == MARCH
    assert calls[-1] == MARCH
    assert len(calls) == 2
    assert picker.state.active_label == "This Month"
    assert picker.state.is_custom_mode is False
    assert not picker.can_clear


def test_clear_outside_custom_mode_is_noop(picker, calls):
    picker.mount()
    assert picker.clear() is None
    assert len(calls) == 1


def test_dismiss_keeps_unapplied_drafts(picker, calls):
    picker.mount(MARCH)
    picker.open()
    picker.set_draft_from("2024-01-01")
    picker.dismiss()
    picker.open()

    assert picker.state.draft_from == "2024-01-01"
    assert picker.state.committed_range == MARCH
    assert calls == []


def test_same_external_value_does_not_reset_drafts(picker):
    picker.mount(MARCH)
    picker.set_draft_from("2024-01-01")
    picker.sync(DateRange("2024-03-01", "2024-03-31"))
    assert picker.state.draft_from == "2024-01-01"


def test_changed_external_value_resets_drafts(picker, calls):
    picker.mount(MARCH)
    picker.set_draft_from("2024-01-01")
    revision = picker.revision

    picker.sync(DateRange("2024-05-01", "2024-05-31"))

    assert (picker.state.draft_from, picker.state.draft_to) == ("2024-05-01", "2024-05-31")
    assert picker.state.committed_range == DateRange("2024-05-01", "2024-05-31")
    assert picker.revision == revision + 1
    assert calls == []


def test_owner_rejecting_a_commit_keeps_its_range(picker, calls):
    picker.mount(MARCH)
    picker.select_preset("Today")
    assert calls == [DateRange("2024-03-05", "2024-03-05")]

    # The owner ignores the notification and hands its old range back.
    picker.mount(MARCH)

    assert picker.state.committed_range == MARCH
    assert picker.label == "Mar 01, 2024 - Mar 31, 2024"
    assert (picker.state.draft_from, picker.state.draft_to) == ("2024-03-01", "2024-03-31")
    assert len(calls) == 1


def test_echo_equal_to_previous_value_resyncs_drafts(picker, calls):
    picker.mount(MARCH)
    picker.set_draft_from("2024-01-01")
    picker.select_preset("This Month")
    assert calls == [MARCH]

    picker.mount(calls[-1])

    assert (picker.state.draft_from, picker.state.draft_to) == ("2024-03-01", "2024-03-31")
    assert picker.is_preset_active("This Month")
    assert len(calls) == 1


def test_resync_is_idempotent(picker):
    picker.mount(MARCH)
    picker.set_draft_to("")
    picker.resync_drafts()
    first = (picker.state.draft_from, picker.state.draft_to, picker.revision)
    picker.resync_drafts()
    assert (picker.state.draft_from, picker.state.draft_to, picker.revision) == first


def test_sync_none_keeps_state(picker):
    picker.mount(MARCH)
    picker.sync(None)
    assert picker.state.committed_range == MARCH


def test_malformed_external_value_renders_placeholder(picker, calls):
    picker.mount(DateRange("yesterday", "tomorrow"))
    assert picker.label == "Select date range"
    assert calls == []


def test_unmounted_label_is_placeholder(picker):
    assert picker.label == "Select date range"


def test_notifications_match_this_month_preset(picker, calls):
    picker.mount()
    assert calls == [compute_preset("This Month", MAR_05)]
