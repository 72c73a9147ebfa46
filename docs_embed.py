"""Embed charts into documentation pages.

`calc_plot(name)` is the single entry point a page uses: it renders one chart
into an HTML fragment at the call site. `embed_page(markdown)` expands every
`<CalcPlot name="..." />` tag in a content page; all tags on a page share one
engine load.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re
from typing import List, Optional

from chart_renderers import Container, EngineLoader, PlotMount, default_loader
from plot.registry import ChartNotFoundError, produce

logger = logging.getLogger(__name__)

CALCPLOT_TAG = re.compile(r"""<CalcPlot\s+name=(["'])(?P<name>[^"']+)\1\s*/>""")

_PLACEHOLDER_STYLE = (
    "height:{height}px;display:flex;align-items:center;justify-content:center;"
    "background:var(--ifm-color-emphasis-100, #f5f5f5);border-radius:8px;"
    "border:1px solid var(--ifm-color-emphasis-300, #ddd);color:#666;font-size:15px"
)


def not_found_html(name: str) -> str:
    return f'<div class="calcplot-error" style="color:red;padding:1rem">Chart "{html.escape(name)}" not found.</div>'


def loading_html(height: int = 500, text: str = "Loading 3D visualization…") -> str:
    return f'<div class="calcplot-loading" style="{_PLACEHOLDER_STYLE.format(height=height)}">{text}</div>'


def _wrap(inner: str) -> str:
    return f'<div class="calcplot" style="position:relative;margin-bottom:1.5rem">{inner}</div>'


async def calc_plot(name: str, loader: Optional[EngineLoader] = None) -> str:
    """
    Render chart `name` to an HTML fragment.

    Never raises for an unknown name or an engine that failed to load: the
    former renders an inline error, the latter the loading placeholder.
    """
    try:
        descriptor = produce(name)
    except ChartNotFoundError as err:
        logger.warning("%s", err)
        return not_found_html(name)

    async with PlotMount(Container(), loader) as pm:
        if not await pm.mount(descriptor):
            return _wrap(loading_html(descriptor.height))
        drawn = pm.container.html or ""
    return _wrap(f'<div style="width:100%;height:{descriptor.height}px">{drawn}</div>')


async def embed_page(markdown: str, loader: Optional[EngineLoader] = None, *, inline_engine: bool = False) -> str:
    """Expand every CalcPlot tag in `markdown`; prose and <details> blocks pass through untouched."""
    loader = loader or default_loader()
    matches = list(CALCPLOT_TAG.finditer(markdown))
    if not matches:
        return markdown

    fragments: List[str] = await asyncio.gather(*(calc_plot(m.group("name"), loader) for m in matches))

    out: List[str] = []
    pos = 0
    for m, fragment in zip(matches, fragments):
        out.append(markdown[pos : m.start()])
        out.append(fragment)
        pos = m.end()
    out.append(markdown[pos:])
    page = "".join(out)

    if loader.engine is not None:
        page = loader.engine.script_tag(inline=inline_engine) + "\n\n" + page
    return page
