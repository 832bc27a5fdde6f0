import http.client
import json
import logging
import os
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

from .catalogs import SourceType, color_for_index, parse_icon
from .config import DEFAULT_API_TIMEOUT, ENV_API_TIMEOUT, ENV_API_TOKEN, ENV_API_URL
from .context import FilterState

logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = ["category", "amount", "fill"]
CATEGORY_OPTION_COLUMNS = ["id", "name", "icon"]
SOURCE_OPTION_COLUMNS = ["id", "name"]

# Endpoint and display-name field per source type.
SOURCE_ENDPOINTS = {
    SourceType.BANK: ("/bank-accounts", "bank_name"),
    SourceType.FUND: ("/fund-sources", "source_name"),
    SourceType.LOAN: ("/loans", "lender_name"),
}


class ReportsApiError(RuntimeError):
    """Raised when the reporting API cannot be reached or returns bad data."""


def resolve_api_url() -> str:
    """
    Resolve the reporting API base URL from the environment.
    Returns an empty string if unset so callers can handle it gracefully.
    """
    return os.getenv(ENV_API_URL, "").strip().rstrip("/")


def resolve_api_timeout() -> float:
    raw = os.getenv(ENV_API_TIMEOUT, "").strip()
    if not raw:
        return DEFAULT_API_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", ENV_API_TIMEOUT, raw)
        return DEFAULT_API_TIMEOUT


def request_json(
    api_url: str,
    path: str,
    params: Optional[Dict[str, str]] = None,
    token: Optional[str] = None,
    timeout: float = DEFAULT_API_TIMEOUT,
) -> Any:
    if not api_url:
        raise ReportsApiError(f"API URL is empty. Set {ENV_API_URL} to the reporting API base URL.")
    target = f"{api_url}{path}"
    if params:
        target = f"{target}?{urllib.parse.urlencode(params)}"
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    req = urllib.request.Request(target, headers=headers)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))
    except (OSError, http.client.HTTPException) as exc:
        # URLError, timeouts and resets mid-read are all OSErrors.
        raise ReportsApiError(f"Request to {path} failed: {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReportsApiError(f"Response from {path} is not valid JSON.") from exc


def _unwrap_rows(payload: Any) -> list:
    # Paginated endpoints nest the rows under "data".
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    return payload if isinstance(payload, list) else []


def expenses_by_category_frame(payload: Any) -> pd.DataFrame:
    """Normalize category aggregates into category/amount/fill, largest first."""
    rows = []
    for item in _unwrap_rows(payload):
        if not isinstance(item, dict):
            continue
        try:
            amount = float(item.get("amount"))
        except (TypeError, ValueError):
            continue
        if pd.isna(amount):
            continue
        rows.append({"category": str(item.get("category") or "Uncategorized"), "amount": amount})
    if not rows:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    df = pd.DataFrame(rows).groupby("category", as_index=False, sort=False)["amount"].sum()
    df = df.sort_values("amount", ascending=False, kind="stable").reset_index(drop=True)
    df["fill"] = [color_for_index(i) for i in range(len(df))]
    return df[CATEGORY_COLUMNS]


def fetch_expenses_by_category(
    filters: FilterState,
    api_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> pd.DataFrame:
    payload = request_json(
        api_url if api_url is not None else resolve_api_url(),
        "/reports/expenses-by-category",
        params=filters.query_params(),
        token=token if token is not None else os.getenv(ENV_API_TOKEN),
        timeout=timeout or resolve_api_timeout(),
    )
    df = expenses_by_category_frame(payload)
    logger.info("Loaded %d expense categories for %s", len(df), filters.query_params())
    return df


def category_options_frame(payload: Any) -> pd.DataFrame:
    """Expense categories only, with icons mapped onto the catalog."""
    rows = []
    for item in _unwrap_rows(payload):
        if not isinstance(item, dict) or item.get("type") != "expense":
            continue
        try:
            icon = parse_icon(item.get("icon"))
        except ValueError:
            logger.warning("Unknown category icon %r for %r", item.get("icon"), item.get("name"))
            icon = None
        rows.append({"id": str(item.get("id")), "name": str(item.get("name") or ""), "icon": icon.value if icon else None})
    return pd.DataFrame(rows, columns=CATEGORY_OPTION_COLUMNS)


def source_options_frame(payload: Any, name_field: str) -> pd.DataFrame:
    rows = [
        {"id": str(item.get("id")), "name": str(item.get(name_field) or "")}
        for item in _unwrap_rows(payload)
        if isinstance(item, dict)
    ]
    return pd.DataFrame(rows, columns=SOURCE_OPTION_COLUMNS)


def fetch_filter_options(
    api_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Dict[str, pd.DataFrame]:
    api_url = api_url if api_url is not None else resolve_api_url()
    token = token if token is not None else os.getenv(ENV_API_TOKEN)
    timeout = timeout or resolve_api_timeout()

    options = {
        "categories": category_options_frame(
            request_json(api_url, "/categories", token=token, timeout=timeout)
        )
    }
    for source_type, (path, name_field) in SOURCE_ENDPOINTS.items():
        options[source_type.value] = source_options_frame(
            request_json(api_url, path, token=token, timeout=timeout), name_field
        )
    return options


@st.cache_data(show_spinner=False, ttl=300, max_entries=32)
def load_expenses_by_category(cache_key: str, _filters: FilterState, api_url: str) -> pd.DataFrame:
    """
    Cached wrapper for the page, keyed on FilterState.cache_key().
    ReportsApiError propagates (and is not cached) so the page can report it.
    """
    return fetch_expenses_by_category(_filters, api_url=api_url)


@st.cache_data(show_spinner=False, ttl=3600, max_entries=4)
def load_filter_options(api_url: str) -> Dict[str, pd.DataFrame]:
    return fetch_filter_options(api_url=api_url)


def empty_filter_options() -> Dict[str, pd.DataFrame]:
    options = {"categories": pd.DataFrame(columns=CATEGORY_OPTION_COLUMNS)}
    for source_type in SourceType:
        options[source_type.value] = pd.DataFrame(columns=SOURCE_OPTION_COLUMNS)
    return options
