import logging

from rich.logging import RichHandler

_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Route all log records through a single Rich console handler.

    Safe to call more than once; later calls only change the level.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not _configured:
        handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
        _configured = True
    return root
