from dataclasses import replace
from typing import Callable, Dict, Optional

import pandas as pd
import streamlit as st

from .catalogs import SOURCE_TYPE_LABELS, SourceType, icon_emoji
from .context import DateRange, FilterState
from .date_presets import DATE_PRESETS
from .date_range_picker import DateRangePicker
from .formatting import parse_iso_date


def _date_input_to_iso(widget_key: str) -> str:
    value = st.session_state.get(widget_key)
    return value.isoformat() if value else ""


def render_date_range_picker(
    value: Optional[DateRange],
    on_change: Callable[[DateRange], None],
    key: str = "date_range_picker",
) -> DateRangePicker:
    """
    Render the date range picker bound to a DateRangePicker kept in session
    state. All state changes happen in widget callbacks, before the rerun.
    """
    picker: Optional[DateRangePicker] = st.session_state.get(key)
    if picker is None:
        picker = DateRangePicker(on_change=on_change)
        st.session_state[key] = picker
    picker.on_change = on_change
    picker.mount(value)

    trigger_col, clear_col = st.columns([6, 1])
    with trigger_col:
        st.button(
            f"📅 {picker.label}",
            key=f"{key}_trigger",
            on_click=picker.toggle,
            width="stretch",
        )
    with clear_col:
        if picker.can_clear:
            st.button("✕", key=f"{key}_clear", on_click=picker.clear, help="Reset to This Month")

    if not picker.state.is_open:
        return picker

    with st.container(border=True):
        st.caption("Quick Select")
        cols = st.columns(2)
        for idx, preset in enumerate(DATE_PRESETS):
            with cols[idx % 2]:
                st.button(
                    preset.label.value,
                    key=f"{key}_preset_{preset.label.name.lower()}",
                    on_click=picker.select_preset,
                    args=(preset.label,),
                    type="primary" if picker.is_preset_active(preset.label) else "secondary",
                    width="stretch",
                )

        st.caption("Custom Range")
        # Widget keys carry the draft revision so an external range change
        # resets the inputs while unapplied edits survive reruns.
        from_key = f"{key}_from_{picker.revision}"
        to_key = f"{key}_to_{picker.revision}"
        st.date_input(
            "From",
            value=parse_iso_date(picker.state.draft_from),
            key=from_key,
            on_change=lambda: picker.set_draft_from(_date_input_to_iso(from_key)),
        )
        st.date_input(
            "To",
            value=parse_iso_date(picker.state.draft_to),
            key=to_key,
            on_change=lambda: picker.set_draft_to(_date_input_to_iso(to_key)),
        )
        apply_col, close_col = st.columns(2)
        with apply_col:
            st.button(
                "Apply Custom Range",
                key=f"{key}_apply",
                on_click=picker.apply_custom,
                disabled=not picker.can_apply,
                type="primary",
                width="stretch",
            )
        with close_col:
            st.button("Close", key=f"{key}_close", on_click=picker.dismiss, width="stretch")
    return picker


def _category_label(row: pd.Series) -> str:
    icon = row.get("icon")
    # Missing icons come back as None or NaN.
    if isinstance(icon, str) and icon:
        return f"{icon_emoji(icon)} {row['name']}"
    return str(row["name"])


def render_filter_bar(
    date_range: Optional[DateRange],
    options: Dict[str, pd.DataFrame],
    key: str = "report_filters",
) -> FilterState:
    """
    Category and payment-source filters shown next to the date picker.
    Returns a FilterState carrying the committed date range.
    """
    categories = options.get("categories", pd.DataFrame(columns=["id", "name", "icon"]))
    category_labels = {row["id"]: _category_label(row) for _, row in categories.iterrows()}

    col_cat, col_type, col_source = st.columns(3)
    with col_cat:
        category_id = st.selectbox(
            "Category",
            [""] + list(category_labels),
            format_func=lambda cid: category_labels.get(cid, "All categories"),
            key=f"{key}_category",
        )
    with col_type:
        source_type = st.selectbox(
            "Source type",
            [""] + [source.value for source in SourceType],
            format_func=lambda value: SOURCE_TYPE_LABELS[SourceType(value)] if value else "All sources",
            key=f"{key}_source_type",
        )

    filters = FilterState(date_range=date_range, category_id=category_id or None).with_source_type(source_type)

    source_id = None
    with col_source:
        if filters.source_type:
            sources = options.get(filters.source_type, pd.DataFrame(columns=["id", "name"]))
            source_labels = dict(zip(sources["id"], sources["name"]))
            # Keyed per type so switching types starts from "All".
            source_id = st.selectbox(
                SOURCE_TYPE_LABELS[SourceType(filters.source_type)],
                [""] + list(source_labels),
                format_func=lambda sid: source_labels.get(sid, "All"),
                key=f"{key}_source_{filters.source_type}",
            )
    if source_id:
        filters = replace(filters, source_id=source_id)
    return filters


def export_report_csv(by_category: pd.DataFrame, date_range: Optional[DateRange]) -> None:
    stem = "expenses-by-category"
    if date_range is not None:
        stem = f"{stem}_{date_range.date_from}_{date_range.date_to}"
    st.download_button(
        label="Download CSV",
        data=by_category[["category", "amount"]].to_csv(index=False),
        file_name=f"{stem}.csv",
        mime="text/csv",
    )
