from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import config
from chart_renderers.container import Container
from chart_renderers.engine import EngineLoader, EngineLoadError, default_loader
from plot.chart_spec import ChartDescriptor
from plot.figure_assembler import merge_layout

logger = logging.getLogger(__name__)


class PlotMount:
    """
    Binds one container to the shared engine for the lifetime of a chart.

    Use as an async context manager so the container is released on every exit
    path::

        async with PlotMount(Container()) as pm:
            await pm.mount(descriptor)
            html = pm.container.html
    """

    container: Container
    loader: EngineLoader
    ready: bool

    def __init__(
        self,
        container: Container,
        loader: Optional[EngineLoader] = None,
        *,
        layout_defaults: Optional[Mapping[str, Any]] = None,
        plot_config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.container = container
        self.loader = loader or default_loader()
        self.layout_defaults = layout_defaults
        self.plot_config = plot_config or config.PLOT_CONFIG
        self.ready = False

    async def mount(self, descriptor: ChartDescriptor) -> bool:
        """
        Draw `descriptor` once the engine is loaded.

        Returns True when something was drawn. Returns False, without raising,
        when the engine failed to load (the chart stays in its loading state) or
        when the container was unmounted while the load was pending.
        """
        try:
            engine = await self.loader.ensure_loaded()
        except EngineLoadError:
            logger.debug("Engine unavailable; %s stays in loading state", self.container.element_id)
            return False

        if not self.container.attached:
            logger.debug("Dropping deferred mount on %s", self.container.element_id)
            return False

        layout = merge_layout(descriptor.layout, self.layout_defaults)
        engine.new_plot(self.container, descriptor.data, layout, self.plot_config)
        self.ready = True
        return True

    def unmount(self) -> None:
        """Release the engine binding and detach. Safe if no mount ever completed."""
        try:
            engine = self.loader.engine
            if engine is not None and self.container.attached:
                engine.purge(self.container)
        finally:
            self.container.detach()
            self.ready = False

    async def __aenter__(self) -> "PlotMount":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unmount()
