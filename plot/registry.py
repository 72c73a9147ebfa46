"""Chart identifier -> producer dispatch table."""

from __future__ import annotations
from typing import Callable, Dict, List

from plot.builders_2d import build_gradient_vectors
from plot.builders_3d import (
    build_3d_coordinates,
    build_coordinate_systems,
    build_critical_points,
    build_double_integral,
    build_helix_tangent,
    build_multivariable_surface,
    build_partial_derivatives,
    build_riemann_sum,
    build_surface_revolution,
    build_tangent_plane,
    build_vector_field_3d,
)
from plot.chart_spec import ChartDescriptor
from plot.finance import build_black_scholes

ChartProducer = Callable[[], ChartDescriptor]


class ChartNotFoundError(LookupError):
    def __init__(self, chart_id: str) -> None:
        super().__init__(chart_id)
        self.chart_id = chart_id

    def __str__(self) -> str:
        return f'Chart "{self.chart_id}" not found.'


CHARTS: Dict[str, ChartProducer] = {
    "riemann-sum": build_riemann_sum,
    "surface-revolution": build_surface_revolution,
    "3d-coordinates": build_3d_coordinates,
    "helix-tangent": build_helix_tangent,
    "multivariable-surface": build_multivariable_surface,
    "partial-derivatives": build_partial_derivatives,
    "tangent-plane": build_tangent_plane,
    "gradient-vectors": build_gradient_vectors,
    "critical-points": build_critical_points,
    "double-integral": build_double_integral,
    "coordinate-systems": build_coordinate_systems,
    "vector-field-3d": build_vector_field_3d,
    "black-scholes": build_black_scholes,
}


def chart_ids() -> List[str]:
    return list(CHARTS)


def produce(chart_id: str) -> ChartDescriptor:
    """
    Build a fresh descriptor for `chart_id`.

    Raises
    ------
    ChartNotFoundError
        If `chart_id` is not registered. Callers rendering into a page report
        it inline instead of failing.
    """
    producer = CHARTS.get(chart_id)
    if producer is None:
        raise ChartNotFoundError(chart_id)
    return producer()
