# =========================
# Quant finance charts
# =========================
from __future__ import annotations
from typing import Tuple
import numpy as np
import plotly.graph_objects as go

from plot.chart_spec import ChartDescriptor
from plot.numeric import ArrayLike, linspace, meshgrid, norm_cdf

STRIKE = 100.0
RATE = 0.05
SIGMA = 0.20
MIN_MATURITY = 1e-6


def _d1_d2(s: ArrayLike, t: ArrayLike, k: float, r: float, sigma: float) -> Tuple[ArrayLike, ArrayLike]:
    tt = np.maximum(t, MIN_MATURITY)
    vol_sqrt_t = sigma * np.sqrt(tt)
    d1 = (np.log(np.divide(s, k)) + (r + 0.5 * sigma * sigma) * tt) / vol_sqrt_t
    return d1, d1 - vol_sqrt_t


def bs_call(s: ArrayLike, t: ArrayLike, *, k: float = STRIKE, r: float = RATE, sigma: float = SIGMA) -> ArrayLike:
    """Black-Scholes European call price. Time to maturity is clamped to 1e-6."""
    d1, d2 = _d1_d2(s, t, k, r, sigma)
    tt = np.maximum(t, MIN_MATURITY)
    price = s * norm_cdf(d1) - k * np.exp(-r * tt) * norm_cdf(d2)
    return float(price) if np.ndim(price) == 0 else price


def bs_delta(s: ArrayLike, t: ArrayLike, *, k: float = STRIKE, r: float = RATE, sigma: float = SIGMA) -> ArrayLike:
    """Call delta ∂V/∂S = N(d1)."""
    d1, _ = _d1_d2(s, t, k, r, sigma)
    return norm_cdf(d1)


def build_black_scholes() -> ChartDescriptor:
    n_s, n_t = 60, 60
    S = linspace(60, 150, n_s)
    T = linspace(0.02, 2.0, n_t)
    SS, TT = meshgrid(S, T)  # rows indexed by maturity

    V = bs_call(SS, TT)
    D = bs_delta(SS, TT)

    return ChartDescriptor(
        data=(
            go.Surface(
                x=S,
                y=T,
                z=V,
                colorscale="RdYlGn",
                opacity=0.90,
                scene="scene",
                name="Call Price V",
                colorbar=dict(title="V ($)", x=0.45, len=0.8),
            ),
            go.Surface(
                x=S,
                y=T,
                z=D,
                colorscale="RdBu",
                opacity=0.90,
                scene="scene2",
                name="Delta Δ",
                colorbar=dict(title="Δ", x=1.00, len=0.8),
            ),
        ),
        layout=dict(
            title="Quant Finance — Option Greeks as Partial Derivatives",
            scene=dict(
                domain=dict(x=[0.00, 0.48], y=[0, 1]),
                xaxis=dict(title="Stock Price S"),
                yaxis=dict(title="Time T"),
                zaxis=dict(title="V ($)"),
            ),
            scene2=dict(
                domain=dict(x=[0.52, 1.00], y=[0, 1]),
                xaxis=dict(title="Stock Price S"),
                yaxis=dict(title="Time T"),
                zaxis=dict(title="Δ = ∂V/∂S"),
            ),
            height=520,
            annotations=[
                dict(
                    x=0.24,
                    y=1.04,
                    xref="paper",
                    yref="paper",
                    text="Call Price V(S,T)  —  slope ∂V/∂S = Delta",
                    showarrow=False,
                    font=dict(size=12),
                ),
                dict(
                    x=0.76,
                    y=1.04,
                    xref="paper",
                    yref="paper",
                    text="Delta Δ(S,T) = ∂V/∂S  —  curvature = Gamma",
                    showarrow=False,
                    font=dict(size=12),
                ),
            ],
        ),
    )
