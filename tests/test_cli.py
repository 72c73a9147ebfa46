import pytest
from typer.testing import CliRunner

import chart_saver
import main
from chart_renderers import EngineLoader
from plot.registry import produce

runner = CliRunner()


@pytest.fixture
def counting_loaders(monkeypatch):
    """Replace the build's loader with one whose fetches are recorded."""
    loaders = []
    fetches = []

    async def fetch(url):
        fetches.append(url)
        return "/* plotly.js */"

    def make_loader():
        loader = EngineLoader(fetcher=fetch)
        loaders.append(loader)
        return loader

    monkeypatch.setattr(main, "EngineLoader", make_loader)
    return loaders, fetches


def _docs_tree(root):
    docs = root / "docs"
    (docs / "finance").mkdir(parents=True)
    (docs / "calculus.md").write_text('# Calculus\n\n<CalcPlot name="riemann-sum" />\n', encoding="utf-8")
    (docs / "finance" / "options.mdx").write_text(
        '# Options\n\n<CalcPlot name="black-scholes" />\n\n<CalcPlot name="no-such-chart" />\n', encoding="utf-8"
    )
    (docs / "notes.txt").write_text('<CalcPlot name="riemann-sum" />', encoding="utf-8")
    return docs


def test_build_docs_mirrors_markdown_tree(tmp_path, counting_loaders):
    docs = _docs_tree(tmp_path)
    out = tmp_path / "site"

    result = runner.invoke(main.app, ["build-docs", "--docs-dir", str(docs), "--output-dir", str(out)])

    assert result.exit_code == 0, result.output
    assert "Rendered 2 page(s)" in result.output
    calculus = (out / "calculus.md").read_text(encoding="utf-8")
    options = (out / "finance" / "options.mdx").read_text(encoding="utf-8")
    assert "Plotly.newPlot" in calculus and "<CalcPlot" not in calculus
    assert "Plotly.newPlot" in options
    assert 'Chart "no-such-chart" not found.' in options
    assert not (out / "notes.txt").exists()


def test_build_docs_loads_engine_once_per_build(tmp_path, counting_loaders):
    loaders, fetches = counting_loaders
    docs = _docs_tree(tmp_path)

    result = runner.invoke(main.app, ["build-docs", "--docs-dir", str(docs), "--output-dir", str(tmp_path / "site")])

    assert result.exit_code == 0, result.output
    assert len(loaders) == 1
    assert len(fetches) == 1


def test_build_docs_without_pages_exits_nonzero(tmp_path, counting_loaders):
    empty = tmp_path / "empty"
    empty.mkdir()

    result = runner.invoke(main.app, ["build-docs", "--docs-dir", str(empty), "--output-dir", str(tmp_path / "site")])

    assert result.exit_code == 1
    assert "No markdown pages found" in result.output


def test_list_prints_chart_table():
    result = runner.invoke(main.app, ["list"])
    assert result.exit_code == 0
    assert "Charts" in result.output


def test_save_figure_html_appends_extension_and_creates_dirs(tmp_path):
    fig = produce("3d-coordinates").to_figure()

    saved = chart_saver.save_figure(fig, str(tmp_path / "nested" / "x"), "html")

    assert saved == str(tmp_path / "nested" / "x.html")
    text = (tmp_path / "nested" / "x.html").read_text(encoding="utf-8")
    assert "cdn.plot.ly" in text


def test_save_figure_keeps_existing_extension(tmp_path):
    fig = produce("3d-coordinates").to_figure()
    saved = chart_saver.save_figure(fig, str(tmp_path / "chart.html"), "html")
    assert saved == str(tmp_path / "chart.html")


def test_save_figure_rejects_unknown_format(tmp_path):
    fig = produce("3d-coordinates").to_figure()
    with pytest.raises(ValueError):
        chart_saver.save_figure(fig, str(tmp_path / "x"), "bmp")
