"""Fixed settings for chart rendering and the docs build. CLI options override the directory defaults."""

# Charting engine (plotly.js), fetched once per page process
ENGINE_VERSION = "2.26.0"
ENGINE_URL = f"https://cdn.plot.ly/plotly-{ENGINE_VERSION}.min.js"

DEFAULT_CHART_HEIGHT = 500

# Merged over every chart layout by the host page
LAYOUT_DEFAULTS = {
    "paper_bgcolor": "rgba(0,0,0,0)",
    "plot_bgcolor": "rgba(0,0,0,0)",
    "font": {"family": "inherit"},
    "margin": {"t": 80, "r": 20, "b": 50, "l": 20},
}

PLOT_CONFIG = {"responsive": True, "displayModeBar": True}

DOCS_DIR = "docs"
OUTPUT_DIR = "output"
LOG_LEVEL = "INFO"
