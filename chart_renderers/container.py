from __future__ import annotations
from typing import Optional
from uuid import uuid4


class Container:
    """
    DOM-like drawing target owned by one mounted chart.

    The engine writes an HTML fragment into `html`; the host page reads it
    back. Once detached the container refuses further drawing.
    """

    element_id: str
    html: Optional[str]
    attached: bool

    def __init__(self, element_id: Optional[str] = None) -> None:
        self.element_id = element_id or f"calcplot-{uuid4().hex[:12]}"
        self.html = None
        self.attached = True

    def write(self, html: str) -> None:
        if not self.attached:
            raise RuntimeError(f"Container {self.element_id} is detached")
        self.html = html

    def clear(self) -> None:
        self.html = None

    def detach(self) -> None:
        self.html = None
        self.attached = False

    def __repr__(self) -> str:
        state = "attached" if self.attached else "detached"
        return f"Container({self.element_id!r}, {state})"
