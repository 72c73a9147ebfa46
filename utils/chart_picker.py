from typing import List

from InquirerPy import inquirer

from plot.registry import CHARTS

# Labels for the interactive picker, grouped by topic
CHART_LABELS = {
    "riemann-sum": "[Integrals]: Riemann Sum",
    "surface-revolution": "[Integrals]: Surface of Revolution",
    "double-integral": "[Integrals]: Double Integral Volume",
    "3d-coordinates": "[Space]: 3D Coordinate System",
    "coordinate-systems": "[Space]: Cylindrical + Spherical Coordinates",
    "helix-tangent": "[Curves]: Helix with Tangent Vector",
    "vector-field-3d": "[Fields]: 3D Vector Field",
    "multivariable-surface": "[Multivariable]: Surface + Level Curves",
    "partial-derivatives": "[Multivariable]: Partial Derivatives",
    "tangent-plane": "[Multivariable]: Tangent Plane",
    "gradient-vectors": "[Multivariable]: Gradient Vectors",
    "critical-points": "[Multivariable]: Critical Points",
    "black-scholes": "[Finance]: Black-Scholes Price + Delta",
}


def chart_choices() -> List[dict]:
    return [{"name": CHART_LABELS.get(chart_id, chart_id), "value": chart_id} for chart_id in CHARTS]


def pick_chart() -> str:
    chart_choice = inquirer.fuzzy(  # type: ignore[reportPrivateImportUsage]
        message="Select which chart you want to visualize:",
        choices=chart_choices(),
    ).execute()
    return chart_choice
