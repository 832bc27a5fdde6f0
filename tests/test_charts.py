import pandas as pd

from finance_tracker.app.charts import category_bars, category_donut


def _frame():
    return pd.DataFrame(
        {"category": ["Rent", "Food"], "amount": [600.0, 300.0], "fill": ["#6366f1", "#8b5cf6"]}
    )


def test_donut_keeps_category_colors():
    fig = category_donut(_frame())
    trace = fig.data[0]
    assert list(trace.labels) == ["Rent", "Food"]
    assert list(trace.marker.colors) == ["#6366f1", "#8b5cf6"]
    assert fig.layout.showlegend is True


def test_bars_are_horizontal_largest_first():
    fig = category_bars(_frame())
    trace = fig.data[0]
    assert trace.orientation == "h"
    assert list(trace.y) == ["Rent", "Food"]
    assert fig.layout.yaxis.autorange == "reversed"
