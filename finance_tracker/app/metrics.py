from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

from .context import DateRange


@dataclass
class MetricResult:
    value: Optional[float]
    notes: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


def total_spend(by_category: pd.DataFrame) -> MetricResult:
    if by_category.empty:
        return MetricResult(value=None, notes="No expenses in the selected range.")
    total = float(pd.to_numeric(by_category["amount"], errors="coerce").fillna(0).sum())
    return MetricResult(value=round(total, 2), extra={"categories": len(by_category)})


def top_category(by_category: pd.DataFrame) -> MetricResult:
    """Largest category and its share of total spend."""
    if by_category.empty:
        return MetricResult(value=None, notes="No expenses in the selected range.")

    amounts = pd.to_numeric(by_category["amount"], errors="coerce").fillna(0)
    total = amounts.sum()
    if total <= 0:
        return MetricResult(value=None, notes="Category amounts sum to zero.")

    idx = amounts.idxmax()
    return MetricResult(
        value=round(float(amounts[idx] / total), 4),
        notes="Share of total spend.",
        extra={"category": str(by_category.loc[idx, "category"]), "amount": float(amounts[idx])},
    )


def category_concentration(by_category: pd.DataFrame) -> MetricResult:
    """
    Concentration index (HHI) across expense categories. 1.0 means all spend
    sits in a single category.
    """
    if by_category.empty:
        return MetricResult(value=None, notes="No category rows.")

    amounts = pd.to_numeric(by_category["amount"], errors="coerce").fillna(0).clip(lower=0)
    total = amounts.sum()
    if total == 0:
        return MetricResult(value=None, notes="Category amounts sum to zero.")

    shares = amounts / total
    hhi = float((shares**2).sum())
    return MetricResult(
        value=round(hhi, 4),
        notes="Higher is more concentrated. Uses share of spend per category.",
        extra={"categories": len(shares)},
    )


def average_daily_spend(by_category: pd.DataFrame, date_range: Optional[DateRange]) -> MetricResult:
    if date_range is None:
        return MetricResult(value=None, notes="No date range selected.")
    try:
        start, end = date_range.as_dates()
    except (TypeError, ValueError):
        return MetricResult(value=None, notes="Date range is not a valid pair of ISO dates.")

    # Inverted custom ranges still cover the days between the two bounds.
    days = abs((end - start).days) + 1
    total = total_spend(by_category)
    if total.value is None:
        return MetricResult(value=None, notes=total.notes, extra={"days": days})
    return MetricResult(value=round(total.value / days, 2), extra={"days": days})
