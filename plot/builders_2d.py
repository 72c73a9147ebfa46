# =========================
# 2D Builders
# =========================

from __future__ import annotations
from typing import Callable, Tuple
import numpy as np
import plotly.graph_objects as go

from plot.chart_spec import ChartDescriptor
from plot.numeric import linspace, meshgrid


def _arrow_field(
    grad: Callable[[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]],
    gx: np.ndarray,
    gy: np.ndarray,
    *,
    scale: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Unit gradient arrows on the (gx, gy) grid, scaled to `scale`.

    Returns (line_x, line_y, tip_x, tip_y, tip_angle). Line arrays hold one
    segment per arrow separated by NaN, which Plotly draws as gaps. Tip angles
    are in degrees, clockwise from north, for rotating triangle markers.
    """
    CX, CY = meshgrid(gx, gy)
    cx, cy = CX.ravel(), CY.ravel()
    dx, dy = grad(cx, cy)
    mag = np.sqrt(dx * dx + dy * dy) + 1e-8
    nx = dx / mag * scale
    ny = dy / mag * scale

    gap = np.full_like(cx, np.nan)
    line_x = np.column_stack([cx, cx + nx, gap]).ravel()
    line_y = np.column_stack([cy, cy + ny, gap]).ravel()
    tip_angle = -np.degrees(np.arctan2(ny, nx)) + 90
    return line_x, line_y, cx + nx, cy + ny, tip_angle


def build_gradient_vectors() -> ChartDescriptor:
    n = 120
    x = linspace(-3, 3, n)
    y = linspace(-3, 3, n)
    X, Y = meshgrid(x, y)
    Z = X * X + 2 * Y * Y

    gn = 10
    line_x, line_y, tip_x, tip_y, tip_angle = _arrow_field(
        lambda cx, cy: (2 * cx, 4 * cy),
        linspace(-2.5, 2.5, gn),
        linspace(-2.5, 2.5, gn),
        scale=0.28,
    )

    return ChartDescriptor(
        data=(
            go.Contour(
                x=x,
                y=y,
                z=Z,
                colorscale="RdYlGn",
                ncontours=18,
                showscale=True,
                colorbar=dict(title="f(x,y)"),
                name="f(x,y) = x² + 2y²",
            ),
            go.Scatter(
                x=line_x,
                y=line_y,
                mode="lines",
                line=dict(color="black", width=1.5),
                showlegend=False,
                hoverinfo="none",
            ),
            go.Scatter(
                x=tip_x,
                y=tip_y,
                mode="markers",
                marker=dict(symbol="triangle-up", size=8, color="black", angle=tip_angle),
                showlegend=False,
                hoverinfo="none",
            ),
        ),
        layout=dict(
            title="∇f = ⟨2x, 4y⟩ — arrows point toward STEEPEST ASCENT (⊥ to level curves)",
            xaxis=dict(title="X", scaleanchor="y"),
            yaxis=dict(title="Y"),
            height=550,
        ),
    )
