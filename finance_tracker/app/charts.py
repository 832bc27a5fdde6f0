import pandas as pd
import plotly.graph_objects as go

from .config import CURRENCY_CODE


def apply_layout(fig: go.Figure, height: int = 320, showlegend: bool = False) -> go.Figure:
    """Centralize layout tweaks for consistent styling across the reports page."""
    fig.update_layout(
        height=height,
        margin=dict(l=24, r=24, t=24, b=24),
        showlegend=showlegend,
        template="plotly_white",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def category_donut(by_category: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Pie(
            labels=by_category["category"],
            values=by_category["amount"],
            hole=0.55,
            marker=dict(colors=list(by_category["fill"])),
            textinfo="percent",
            hovertemplate=f"%{{label}}<br>{CURRENCY_CODE} %{{value:,.0f}}<extra></extra>",
            sort=False,
        )
    )
    return apply_layout(fig, height=360, showlegend=True)


def category_bars(by_category: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=by_category["amount"],
            y=by_category["category"],
            orientation="h",
            marker=dict(color=list(by_category["fill"])),
            hovertemplate=f"%{{y}}: {CURRENCY_CODE} %{{x:,.0f}}<extra></extra>",
        )
    )
    fig.update_yaxes(autorange="reversed")
    return apply_layout(fig, height=max(240, 36 * len(by_category) + 60))
