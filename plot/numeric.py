# =========================
# Numeric helpers shared by the chart producers
# =========================
from __future__ import annotations
from typing import Tuple, Union
import numpy as np
import plotly.graph_objects as go

ArrayLike = Union[float, np.ndarray]

# Abramowitz & Stegun 26.2.17 coefficients
_AS_P = 0.2316419
_AS_B = (0.3193815300, -0.3565637820, 1.7814779370, -1.8212559780, 1.3302744290)
_INV_SQRT_2PI = 0.3989422820


def linspace(start: float, end: float, count: int) -> np.ndarray:
    """`count` evenly spaced float64 values from `start` to `end`, both ends included."""
    return np.linspace(start, end, count, dtype=np.float64)


def meshgrid(xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Broadcast `xs` and `ys` over a 2D domain.

    Both returned grids have shape (len(ys), len(xs)): rows are indexed by `ys`,
    which is the layout Plotly expects for `Surface.z` / `Contour.z`.
    """
    X, Y = np.meshgrid(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64), indexing="xy")
    return X, Y


def norm_cdf(x: ArrayLike) -> ArrayLike:
    """
    Standard normal CDF via the Abramowitz & Stegun rational approximation.

    Absolute error is below 1e-7. Accepts scalars or numpy arrays.
    """
    xa = np.asarray(x, dtype=np.float64)
    t = 1.0 / (1.0 + _AS_P * np.abs(xa))
    d = _INV_SQRT_2PI * np.exp(-xa * xa / 2.0)
    b1, b2, b3, b4, b5 = _AS_B
    p = d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))
    out = np.where(xa > 0, 1.0 - p, p)
    if out.ndim == 0:
        return float(out)
    return out


def box_mesh(x0: float, x1: float, y0: float, y1: float, z0: float, z1: float, color: str) -> go.Mesh3d:
    """Rectangular prism as a Mesh3d: 8 vertices, 12 triangular faces (two per side)."""
    return go.Mesh3d(
        x=[x0, x1, x1, x0, x0, x1, x1, x0],
        y=[y0, y0, y1, y1, y0, y0, y1, y1],
        z=[z0, z0, z0, z0, z1, z1, z1, z1],
        i=[0, 0, 4, 4, 0, 0, 1, 1, 2, 2, 3, 3],
        j=[1, 2, 5, 6, 1, 5, 2, 6, 3, 7, 0, 4],
        k=[2, 3, 6, 7, 5, 4, 6, 5, 7, 6, 4, 7],
        color=color,
        opacity=0.78,
        showscale=False,
        hoverinfo="none",
    )
