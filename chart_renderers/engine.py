"""Plotly engine handle and its one-time loader.

The engine is plotly.js. It is loaded at most once per page process: every
caller of `EngineLoader.ensure_loaded` before the load resolves awaits the same
in-flight task, so the asset is fetched exactly once no matter how many charts
mount at the same time.

States
------
UNLOADED -> LOADING -> READY. There is no way back. A failed load is kept
(not retried) and the loader stays in LOADING, so charts on the page keep
showing their loading placeholder.
"""

from __future__ import annotations

import asyncio
import html
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence

import plotly.graph_objects as go
import plotly.io as pio
import plotly.offline
from plotly.basedatatypes import BaseTraceType

import config
from chart_renderers.container import Container

logger = logging.getLogger(__name__)

EngineFetcher = Callable[[str], Awaitable[str]]


class EngineState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"


class EngineLoadError(RuntimeError):
    pass


async def read_bundled_plotlyjs(url: str) -> str:
    """Default fetcher: the plotly.js bundle shipped with the plotly package, read off the event loop."""
    logger.debug("Reading bundled plotly.js in place of %s", url)
    return await asyncio.to_thread(plotly.offline.get_plotlyjs)


class PlotlyEngine:
    """Draw / purge entry points bound to one loaded plotly.js asset."""

    url: str
    source: Optional[str]

    def __init__(self, url: str = config.ENGINE_URL, source: Optional[str] = None) -> None:
        self.url = url
        self.source = source
        self._figures: Dict[str, go.Figure] = {}

    def script_tag(self, *, inline: bool = False) -> str:
        if inline and self.source is not None:
            return f'<script type="text/javascript">{self.source}</script>'
        return f'<script src="{html.escape(self.url)}" charset="utf-8"></script>'

    def new_plot(
        self,
        container: Container,
        data: Sequence[BaseTraceType],
        layout: Mapping[str, Any],
        plot_config: Optional[Mapping[str, Any]] = None,
    ) -> go.Figure:
        """Draw into `container`, replacing whatever was drawn there before."""
        fig = go.Figure(data=list(data), layout=dict(layout))
        fragment = pio.to_html(
            fig,
            config=dict(config.PLOT_CONFIG if plot_config is None else plot_config),
            include_plotlyjs=False,
            full_html=False,
            div_id=container.element_id,
            default_height=f"{fig.layout.height or config.DEFAULT_CHART_HEIGHT}px",
        )
        container.write(fragment)
        self._figures[container.element_id] = fig
        return fig

    def figure_for(self, container: Container) -> Optional[go.Figure]:
        return self._figures.get(container.element_id)

    def purge(self, container: Container) -> None:
        self._figures.pop(container.element_id, None)
        container.clear()


class EngineLoader:
    url: str
    state: EngineState
    fetch_count: int

    def __init__(
        self,
        url: str = config.ENGINE_URL,
        *,
        fetcher: Optional[EngineFetcher] = None,
        preloaded: Optional[PlotlyEngine] = None,
    ) -> None:
        self.url = url
        self._fetcher = fetcher or read_bundled_plotlyjs
        self._task: Optional[asyncio.Future] = None
        self._engine = preloaded
        self.state = EngineState.READY if preloaded is not None else EngineState.UNLOADED
        self.fetch_count = 0
        self._cancel_reported = False

    @property
    def engine(self) -> Optional[PlotlyEngine]:
        return self._engine

    async def ensure_loaded(self) -> PlotlyEngine:
        if self._engine is not None:
            return self._engine
        if self._task is None:
            self.state = EngineState.LOADING
            self._task = asyncio.ensure_future(self._load())
        if self._task.done() and self._task.cancelled():
            # e.g. the loop that owned the load shut down mid-fetch; never retried
            if not self._cancel_reported:
                logger.error("Plotly load was cancelled before it finished")
                self._cancel_reported = True
            raise EngineLoadError(f"Loading plotly.js from {self.url} was cancelled")
        # shield: a cancelled waiter must not cancel the shared load
        return await asyncio.shield(self._task)

    async def _load(self) -> PlotlyEngine:
        self.fetch_count += 1
        logger.info("Loading plotly.js engine from %s", self.url)
        try:
            source = await self._fetcher(self.url)
        except Exception as exc:
            logger.error("Plotly load failed: %s", exc)
            raise EngineLoadError(f"Could not load plotly.js from {self.url}") from exc
        self._engine = PlotlyEngine(self.url, source)
        self.state = EngineState.READY
        return self._engine


_default_loader: Optional[EngineLoader] = None


def default_loader() -> EngineLoader:
    """The process-wide loader shared by every chart on the page."""
    global _default_loader
    if _default_loader is None:
        _default_loader = EngineLoader()
    return _default_loader
