import asyncio

import pytest

import config
from chart_renderers import Container, EngineLoader, EngineLoadError, EngineState, PlotlyEngine
from plot.figure_assembler import merge_layout
from plot.registry import produce


def _counting_fetcher(calls, gate=None):
    async def fetch(url):
        calls.append(url)
        if gate is not None:
            await gate.wait()
        await asyncio.sleep(0)
        return "/* plotly.js */"

    return fetch


def test_concurrent_loads_share_one_fetch():
    calls = []

    async def run():
        loader = EngineLoader(fetcher=_counting_fetcher(calls))
        assert loader.state is EngineState.UNLOADED
        engines = await asyncio.gather(*(loader.ensure_loaded() for _ in range(12)))
        return loader, engines

    loader, engines = asyncio.run(run())
    assert calls == [config.ENGINE_URL]
    assert loader.fetch_count == 1
    assert all(e is engines[0] for e in engines)
    assert loader.state is EngineState.READY
    assert loader.engine is engines[0]


def test_state_is_loading_while_fetch_in_flight():
    calls = []

    async def run():
        gate = asyncio.Event()
        loader = EngineLoader(fetcher=_counting_fetcher(calls, gate))
        pending = asyncio.ensure_future(loader.ensure_loaded())
        await asyncio.sleep(0)
        in_flight = loader.state
        gate.set()
        await pending
        return in_flight, loader.state

    in_flight, final = asyncio.run(run())
    assert in_flight is EngineState.LOADING
    assert final is EngineState.READY


def test_loads_after_ready_do_not_refetch():
    calls = []

    async def run():
        loader = EngineLoader(fetcher=_counting_fetcher(calls))
        first = await loader.ensure_loaded()
        second = await loader.ensure_loaded()
        return first, second

    first, second = asyncio.run(run())
    assert first is second
    assert len(calls) == 1


def test_failed_load_is_not_retried():
    calls = []

    async def broken(url):
        calls.append(url)
        raise OSError("network unreachable")

    async def run():
        loader = EngineLoader(fetcher=broken)
        results = await asyncio.gather(*(loader.ensure_loaded() for _ in range(3)), return_exceptions=True)
        with pytest.raises(EngineLoadError):
            await loader.ensure_loaded()
        return loader, results

    loader, results = asyncio.run(run())
    assert len(calls) == 1
    assert all(isinstance(r, EngineLoadError) for r in results)
    assert isinstance(results[0].__cause__, OSError)
    assert loader.state is EngineState.LOADING
    assert loader.engine is None


def test_preloaded_engine_skips_fetch():
    calls = []
    engine = PlotlyEngine()
    loader = EngineLoader(fetcher=_counting_fetcher(calls), preloaded=engine)
    assert loader.state is EngineState.READY
    assert asyncio.run(loader.ensure_loaded()) is engine
    assert calls == []


def test_new_plot_replaces_previous_drawing():
    engine = PlotlyEngine()
    container = Container("chart-a")
    first = produce("riemann-sum")
    second = produce("gradient-vectors")

    engine.new_plot(container, first.data, merge_layout(first.layout))
    engine.new_plot(container, second.data, merge_layout(second.layout))

    assert 'id="chart-a"' in container.html
    assert "Plotly.newPlot" in container.html
    fig = engine.figure_for(container)
    assert fig.layout.title.text == second.title
    assert fig.layout.height == 550


def test_purge_releases_figure():
    engine = PlotlyEngine()
    container = Container()
    desc = produce("3d-coordinates")
    engine.new_plot(container, desc.data, merge_layout(desc.layout))
    engine.purge(container)
    assert engine.figure_for(container) is None
    assert container.html is None


def test_script_tag_uses_versioned_url():
    assert config.ENGINE_URL in PlotlyEngine().script_tag()
    assert "plotly-2.26.0" in config.ENGINE_URL
    inline = PlotlyEngine(source="/* js */").script_tag(inline=True)
    assert "/* js */" in inline


def _slow_fetcher(calls):
    async def fetch(url):
        calls.append(url)
        await asyncio.sleep(10)
        return "/* plotly.js */"

    return fetch


def test_load_cancelled_by_loop_shutdown_becomes_load_error():
    calls = []
    loader = EngineLoader(fetcher=_slow_fetcher(calls))

    async def start():
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(loader.ensure_loaded(), 0.01)

    # asyncio.run cancels the still-pending load task on exit
    asyncio.run(start())

    async def retry():
        with pytest.raises(EngineLoadError):
            await loader.ensure_loaded()
        with pytest.raises(EngineLoadError):
            await loader.ensure_loaded()

    asyncio.run(retry())
    assert len(calls) == 1
    assert loader.state is EngineState.LOADING
    assert loader.engine is None


def test_failed_load_logs_one_error(caplog):
    async def broken(url):
        raise OSError("network unreachable")

    async def run():
        loader = EngineLoader(fetcher=broken)
        await asyncio.gather(*(loader.ensure_loaded() for _ in range(4)), return_exceptions=True)

    with caplog.at_level("DEBUG", logger="chart_renderers"):
        asyncio.run(run())
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert "Plotly load failed" in errors[0].getMessage()
