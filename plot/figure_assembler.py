from __future__ import annotations
import copy
from typing import Any, Dict, Mapping, Optional
import plotly.graph_objects as go

import config
from plot.chart_spec import ChartDescriptor


def merge_layout(layout: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Overlay host-page defaults on a chart layout.

    Defaults win for background, font and margins (the host page owns those);
    the chart keeps its own height when it sets one, otherwise the default
    height applies. The input layout is not modified.
    """
    merged = copy.deepcopy(dict(layout))
    merged.update(copy.deepcopy(dict(config.LAYOUT_DEFAULTS if defaults is None else defaults)))
    merged["height"] = layout.get("height") or config.DEFAULT_CHART_HEIGHT
    return merged


def assemble_figure(
    descriptor: ChartDescriptor,
    *,
    defaults: Optional[Mapping[str, Any]] = None,
    width: Optional[int] = None,
) -> go.Figure:
    """
    Compose a Plotly figure from a descriptor with the host layout applied.

    The figure holds its own copies of the traces; the descriptor is left untouched.
    """
    fig = go.Figure(
        data=list(descriptor.data),
        layout=merge_layout(descriptor.layout, defaults),
    )
    if width is not None:
        fig.update_layout(width=width)
    return fig
