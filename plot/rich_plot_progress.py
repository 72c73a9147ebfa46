"""Rich progress indicators for the slow, blocking parts of the CLI.

Opening a figure in the browser or exporting it through kaleido blocks for a
few seconds; building the docs walks every page. Both get a Rich indicator.

- `run_with_progress(fn, ...)`: run a zero-argument callable in a worker thread
  while a spinner or pulsing bar is shown.
- `show_with_progress(fig, ...)`: `fig.show()` with an indicator.
- `ProgressRunner`: determinate bar for a known number of steps (pages).
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Literal, Optional, TypeVar

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

T = TypeVar("T")
UIKind = Literal["spinner", "bar"]


def run_with_progress(
    blocking_fn: Callable[[], T],
    *,
    description: str = "Working…",
    ui: UIKind = "spinner",
    refresh_interval: float = 0.05,
    bar_steps: int = 100,
) -> T:
    """Run `blocking_fn` in a worker thread while an indicator is displayed.

    Parameters
    ----------
    blocking_fn : Callable[[], T]
        Zero-argument callable; bind arguments with a closure or ``functools.partial``.
    description : str, optional
        Text shown next to the indicator.
    ui : {"spinner", "bar"}, optional
        ``"spinner"`` shows a spinner with elapsed time; ``"bar"`` an indeterminate pulsing bar.
    refresh_interval : float, optional
        Seconds between indicator updates.
    bar_steps : int, optional
        Width of one bar sweep, in steps.

    Returns
    -------
    T
        Whatever ``blocking_fn`` returned.

    Raises
    ------
    BaseException
        Any exception raised by ``blocking_fn`` is re-raised in the calling thread.
    """
    holder: Dict[str, Any] = {"res": None, "exc": None}

    def worker() -> None:
        try:
            holder["res"] = blocking_fn()
        except BaseException as e:  # noqa: BLE001 - re-raised below in the caller's thread
            holder["exc"] = e

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()

    if ui == "spinner":
        columns = (SpinnerColumn(), TextColumn("[progress.description]{task.description}"), TimeElapsedColumn())
        total = None
    else:
        columns = (TextColumn("[progress.description]{task.description}"), BarColumn(), TimeElapsedColumn())
        total = bar_steps

    with Progress(*columns, transient=True) as progress:
        task_id = progress.add_task(description, total=total)
        while thread.is_alive():
            if total is not None:
                progress.advance(task_id, max(1.0, bar_steps * refresh_interval / 2.0))
                if progress.tasks[0].completed >= bar_steps:
                    progress.reset(task_id)
            time.sleep(refresh_interval)
        thread.join()

    if holder["exc"] is not None:
        raise holder["exc"]
    return holder["res"]  # type: ignore[return-value]


def show_with_progress(fig: Any, *, description: str = "Opening Plotly figure…", renderer: Optional[str] = None) -> Any:
    """Drop-in replacement for ``fig.show()`` with a pulsing bar."""

    def _call() -> Any:
        if renderer is None:
            return fig.show()
        return fig.show(renderer=renderer)

    return run_with_progress(_call, description=description, ui="bar")


class ProgressRunner:
    """Determinate progress bar used as a context manager::

        with ProgressRunner("Building docs", total=len(pages)) as pr:
            for page in pages:
                ...
                pr.step(page.name)
    """

    def __init__(self, description: str, *, total: int) -> None:
        self.description = description
        self.total = total
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ProgressRunner":
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            transient=True,
        )
        self._progress.__enter__()
        self._task_id = self._progress.add_task(self.description, total=self.total)
        return self

    def step(self, label: Optional[str] = None) -> None:
        assert self._progress is not None and self._task_id is not None
        if label is not None:
            self._progress.update(self._task_id, description=f"{self.description}: {label}")
        self._progress.advance(self._task_id)

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._progress is not None
        self._progress.__exit__(exc_type, exc, tb)
