import logging

import pandas as pd
import streamlit as st

from app.charts import category_bars, category_donut
from app.config import LOG_LEVEL, PLOTLY_CONFIG
from app.context import DateRange
from app.data_loader import (
    CATEGORY_COLUMNS,
    ReportsApiError,
    empty_filter_options,
    load_expenses_by_category,
    load_filter_options,
    resolve_api_url,
)
from app.formatting import format_compact_currency, format_currency
from app.layout import export_report_csv, render_date_range_picker, render_filter_bar
from app.metrics import average_daily_spend, category_concentration, top_category, total_spend

# =========================================================
# CONFIG
# =========================================================
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("finance_tracker")

RANGE_KEY = "report_date_range"

st.set_page_config(page_title="Financial Reports", page_icon="📊", layout="wide")


def _on_range_change(value: DateRange) -> None:
    # The page owns the range; the picker only reports commits.
    st.session_state[RANGE_KEY] = value


# =========================================================
# HEADER + FILTERS
# =========================================================
st.title("Financial Reports")
st.caption("Spending by category for the selected date range.")

api_url = resolve_api_url()
if not api_url:
    st.warning("Set FINANCE_API_URL to the reporting API base URL to load data.")

render_date_range_picker(st.session_state.get(RANGE_KEY), _on_range_change, key="report_range_picker")
# Self-initialization may have just stored a range, so read it back.
date_range = st.session_state.get(RANGE_KEY)

filter_options = empty_filter_options()
if api_url:
    try:
        filter_options = load_filter_options(api_url)
    except ReportsApiError as exc:
        logger.warning("Filter options unavailable: %s", exc)
        st.info("Category and source filters are unavailable right now.")

filters = render_filter_bar(date_range, filter_options)

# =========================================================
# REPORT
# =========================================================
by_category = pd.DataFrame(columns=CATEGORY_COLUMNS)
if api_url:
    try:
        by_category = load_expenses_by_category(filters.cache_key(), filters, api_url)
    except ReportsApiError as exc:
        logger.exception("Failed to load expenses by category")
        st.error(f"Failed to load financial report: {exc}")

spend = total_spend(by_category)
top = top_category(by_category)
daily = average_daily_spend(by_category, date_range)
concentration = category_concentration(by_category)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Spent", format_currency(spend.value) if spend.value is not None else "n/a")
col2.metric(
    "Top Category",
    top.extra.get("category", "n/a"),
    delta=f"{top.value:.0%} of spend" if top.value is not None else None,
    delta_color="off",
)
col3.metric(
    "Avg / Day",
    format_compact_currency(daily.value) if daily.value is not None else "n/a",
    help=f"Over {daily.extra['days']} days." if "days" in daily.extra else None,
)
col4.metric(
    "Concentration",
    f"{concentration.value:.2f}" if concentration.value is not None else "n/a",
    help=concentration.notes or None,
)

if by_category.empty:
    st.info("No expenses found for the selected filters.")
else:
    left, right = st.columns([1, 1])
    with left:
        st.plotly_chart(category_donut(by_category), config=PLOTLY_CONFIG, width="stretch")
    with right:
        st.plotly_chart(category_bars(by_category), config=PLOTLY_CONFIG, width="stretch")

    table = by_category[["category", "amount"]].copy()
    table["amount"] = table["amount"].map(format_currency)
    st.dataframe(table, hide_index=True, width="stretch")
    export_report_csv(by_category, date_range)
