import asyncio
import os
from typing import List, Optional, Tuple

import typer
from InquirerPy import inquirer
from rich.console import Console
from rich.table import Table

import config
from chart_renderers import EngineLoader
from chart_saver import get_save_choice, save_figure
from docs_embed import embed_page
from plot.registry import ChartNotFoundError, chart_ids, produce
from plot.rich_plot_progress import ProgressRunner, show_with_progress
from utils.chart_picker import CHART_LABELS, pick_chart
from utils.logger import setup_logging

app = typer.Typer()
console = Console()


@app.callback()
def main(log_level: str = config.LOG_LEVEL):
    setup_logging(log_level)


@app.command("list")
def list_charts():
    table = Table(title="Charts")
    table.add_column("Identifier", style="bold")
    table.add_column("Topic")
    table.add_column("Height", justify="right")
    for chart_id in chart_ids():
        descriptor = produce(chart_id)
        table.add_row(chart_id, CHART_LABELS.get(chart_id, ""), str(descriptor.height))
    console.print(table)


@app.command()
def show(name: Optional[str] = typer.Argument(None), output_dir: str = config.OUTPUT_DIR, show_fig: bool = True):
    if name is None:
        name = pick_chart()

    try:
        descriptor = produce(name)
    except ChartNotFoundError as err:
        print(f"[❌] {err}")
        raise typer.Exit(code=1)

    fig = descriptor.to_figure()
    if show_fig:
        show_with_progress(fig)

    save_choice = get_save_choice()
    if save_choice != "":
        default_save_name = os.path.join(output_dir, f"{name}.{save_choice}")
        save_name: str = inquirer.text(  # type: ignore[reportPrivateImportUsage]
            message="Enter the filename to save as:", default=default_save_name
        ).execute()
        saved = save_figure(fig, save_name, save_choice)
        print(f"[✅] Saved {name} to {saved}")


def _collect_pages(docs_dir: str) -> List[Tuple[str, str]]:
    pages: List[Tuple[str, str]] = []
    for root, _dirs, files in os.walk(docs_dir):
        for fname in sorted(files):
            if fname.lower().endswith((".md", ".mdx")):
                path = os.path.join(root, fname)
                pages.append((path, os.path.relpath(path, docs_dir)))
    return pages


async def _build_pages(pages: List[Tuple[str, str]], output_dir: str, inline_engine: bool) -> int:
    # One loader for the whole build: plotly.js is loaded once for every page
    loader = EngineLoader()
    with ProgressRunner("Building docs", total=len(pages)) as pr:
        for path, rel in pages:
            with open(path, encoding="utf-8") as f:
                source = f.read()
            rendered = await embed_page(source, loader, inline_engine=inline_engine)
            target = os.path.join(output_dir, rel)
            os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
            with open(target, "w", encoding="utf-8") as f:
                f.write(rendered)
            pr.step(rel)
    return len(pages)


@app.command("build-docs")
def build_docs(docs_dir: str = config.DOCS_DIR, output_dir: str = config.OUTPUT_DIR, inline_engine: bool = False):
    pages = _collect_pages(docs_dir)
    if not pages:
        print(f"[❌] Error: No markdown pages found in {docs_dir}")
        raise typer.Exit(code=1)

    count = asyncio.run(_build_pages(pages, output_dir, inline_engine))
    print(f"[✅] Rendered {count} page(s) into {output_dir}")


if __name__ == "__main__":
    app()
