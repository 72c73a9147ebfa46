import asyncio

import pytest

from chart_renderers import Container, EngineLoader, PlotlyEngine, PlotMount
from plot.registry import produce


async def _js(url):
    return "/* plotly.js */"


def _gated_loader():
    gate = asyncio.Event()

    async def fetch(url):
        await gate.wait()
        return "/* plotly.js */"

    return EngineLoader(fetcher=fetch), gate


def test_unmount_without_mount_is_noop():
    container = Container()
    pm = PlotMount(container, EngineLoader(fetcher=_js))
    pm.unmount()
    assert container.attached is False
    assert pm.ready is False
    # second unmount is also harmless
    pm.unmount()


def test_mount_merges_host_layout_defaults():
    loader = EngineLoader(preloaded=PlotlyEngine())
    container = Container()

    async def run():
        pm = PlotMount(container, loader)
        ok = await pm.mount(produce("helix-tangent"))
        return pm, ok

    pm, ok = asyncio.run(run())
    assert ok and pm.ready
    fig = loader.engine.figure_for(container)
    assert fig.layout.paper_bgcolor == "rgba(0,0,0,0)"
    assert fig.layout.plot_bgcolor == "rgba(0,0,0,0)"
    assert fig.layout.margin.t == 80 and fig.layout.margin.l == 20
    assert fig.layout.height == 500
    assert container.element_id in container.html


def test_deferred_mounts_apply_in_call_order():
    async def run():
        loader, gate = _gated_loader()
        container = Container()
        pm = PlotMount(container, loader)
        first = asyncio.ensure_future(pm.mount(produce("tangent-plane")))
        second = asyncio.ensure_future(pm.mount(produce("double-integral")))
        await asyncio.sleep(0)
        assert container.html is None
        gate.set()
        await asyncio.gather(first, second)
        return loader.engine.figure_for(container)

    fig = asyncio.run(run())
    assert fig.layout.title.text == produce("double-integral").title


def test_unmount_before_load_completes_drops_the_mount():
    async def run():
        loader, gate = _gated_loader()
        container = Container()
        pm = PlotMount(container, loader)
        pending = asyncio.ensure_future(pm.mount(produce("black-scholes")))
        await asyncio.sleep(0)
        pm.unmount()
        gate.set()
        return await pending, container, loader

    drawn, container, loader = asyncio.run(run())
    assert drawn is False
    assert container.html is None
    assert loader.engine.figure_for(container) is None


def test_failed_engine_load_keeps_mount_loading():
    async def broken(url):
        raise ConnectionError("blocked")

    async def run():
        pm = PlotMount(Container(), EngineLoader(fetcher=broken))
        return pm, await pm.mount(produce("riemann-sum"))

    pm, drawn = asyncio.run(run())
    assert drawn is False
    assert pm.ready is False


def test_context_manager_releases_on_error():
    loader = EngineLoader(preloaded=PlotlyEngine())
    container = Container()

    async def run():
        async with PlotMount(container, loader) as pm:
            await pm.mount(produce("partial-derivatives"))
            assert loader.engine.figure_for(container) is not None
            raise ValueError("host removed the component")

    with pytest.raises(ValueError):
        asyncio.run(run())
    assert container.attached is False
    assert loader.engine.figure_for(container) is None
