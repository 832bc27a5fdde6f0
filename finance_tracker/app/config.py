import os

# Reporting API location and credentials. The page falls back to an empty
# report when the URL is unset.
ENV_API_URL = "FINANCE_API_URL"
ENV_API_TOKEN = "FINANCE_API_TOKEN"
ENV_API_TIMEOUT = "FINANCE_API_TIMEOUT"
DEFAULT_API_TIMEOUT = 30

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CURRENCY_CODE = os.getenv("CURRENCY_CODE", "LKR")

# Date handling at the boundary and on screen.
ISO_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%b %d, %Y"

DEFAULT_PRESET_LABEL = "This Month"
CUSTOM_LABEL = "Custom"
PLACEHOLDER_LABEL = "Select date range"

# Shared Plotly defaults so charts look consistent across the reports page.
PLOTLY_CONFIG = {
    "displaylogo": False,
    "modeBarButtonsToRemove": [
        "lasso2d",
        "select2d",
        "autoScale2d",
        "resetScale2d",
        "toImage",
    ],
}
