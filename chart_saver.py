import os
from typing import Dict, List

import plotly.graph_objects as go
from InquirerPy import inquirer

from plot.rich_plot_progress import run_with_progress

STATIC_FORMATS = ("png", "jpg", "svg", "pdf")


def get_save_choice(filetypes: List[str] = ["html", "png", "svg", "pdf"]) -> str:
    # Building save choice
    save_choices: List[Dict[str, str]] = []
    for filetype in filetypes:
        save_choices.append({"name": filetype.upper(), "value": filetype})
    save_choices.append({"name": "Don't Save", "value": ""})

    save_choice: str = inquirer.select(  # type: ignore[reportPrivateImportUsage]
        message="Select which format you want to store your chart in:",
        choices=save_choices,
        default="",
    ).execute()

    return save_choice


def save_figure(fig: go.Figure, save_name: str, filetype: str) -> str:
    """Write `fig` as html or a static image; static export goes through kaleido."""
    if not save_name.lower().endswith(f".{filetype}"):
        save_name = f"{save_name}.{filetype}"
    parent = os.path.dirname(save_name)
    if parent:
        os.makedirs(parent, exist_ok=True)

    if filetype == "html":
        fig.write_html(save_name, include_plotlyjs="cdn")
    elif filetype in STATIC_FORMATS:
        run_with_progress(lambda: fig.write_image(save_name), description=f"Exporting {filetype.upper()}…")
    else:
        raise ValueError(f"Unsupported format: {filetype}")
    return save_name
