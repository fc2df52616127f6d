"""Renderer selection.

Output backends differ in what they can show (plain text, full Unicode,
colour, markup). Callers state the capabilities they need and the
registry picks a renderer deterministically: highest priority first, then
name. The library only guarantees the text it hands over; pixels are the
renderer's business.

Usage:
    registry = default_registry(console=Console())
    handle = registry.select_renderer(RendererCapabilities.UNICODE | RendererCapabilities.COLOR)
    handle.draw_text("Straße")
"""

from __future__ import annotations

import sys
import unicodedata
from dataclasses import dataclass
from enum import Flag, auto
from typing import Any, Protocol, TextIO, runtime_checkable

from rich.console import Console
from rich.text import Text

from placeless.errors import RendererUnavailable


class RendererCapabilities(Flag):
    """What a renderer can display."""

    NONE = 0
    TEXT = auto()
    UNICODE = auto()
    COLOR = auto()
    MARKUP = auto()


@runtime_checkable
class Renderer(Protocol):
    """Protocol for output backends."""

    @property
    def name(self) -> str:
        ...

    @property
    def capabilities(self) -> RendererCapabilities:
        ...

    @property
    def priority(self) -> int:
        ...

    def draw_text(self, text: str, style: str | None = None) -> Any:
        """Display NFC-normalized text."""
        ...


@dataclass(frozen=True)
class RendererHandle:
    """Selected renderer; normalizes text to NFC before drawing it."""

    renderer: Renderer

    @property
    def name(self) -> str:
        return self.renderer.name

    def draw_text(self, text: str, style: str | None = None) -> Any:
        return self.renderer.draw_text(unicodedata.normalize("NFC", text), style)


class RendererRegistry:
    """Registry of output renderers."""

    def __init__(self) -> None:
        self._renderers: dict[str, Renderer] = {}

    def register(self, renderer: Renderer) -> Renderer:
        """Register a renderer.

        Raises:
            ValueError: If a renderer with the same name is registered
        """
        if renderer.name in self._renderers:
            raise ValueError(f"Renderer {renderer.name!r} is already registered")
        self._renderers[renderer.name] = renderer
        return renderer

    def unregister(self, name: str) -> None:
        self._renderers.pop(name, None)

    def list_renderers(self) -> list[str]:
        return sorted(self._renderers)

    def select_renderer(
        self,
        capabilities: RendererCapabilities = RendererCapabilities.TEXT,
    ) -> RendererHandle:
        """Pick the renderer for the requested capabilities.

        Raises:
            RendererUnavailable: If no registered renderer provides them all
        """
        candidates = [
            renderer
            for renderer in self._renderers.values()
            if (renderer.capabilities & capabilities) == capabilities
        ]
        if not candidates:
            raise RendererUnavailable(capabilities)
        candidates.sort(key=lambda renderer: (-renderer.priority, renderer.name))
        return RendererHandle(candidates[0])


# ==============================================================================
# Built-in Renderers
# ==============================================================================


class PlainTextRenderer:
    """Writes text lines to a stream, ignoring styles."""

    name = "plain"
    capabilities = RendererCapabilities.TEXT | RendererCapabilities.UNICODE
    priority = 0

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def draw_text(self, text: str, style: str | None = None) -> None:
        stream = self.stream or sys.stdout
        stream.write(text + "\n")


class RichConsoleRenderer:
    """Draws text through a rich Console."""

    name = "rich"
    capabilities = (
        RendererCapabilities.TEXT
        | RendererCapabilities.UNICODE
        | RendererCapabilities.COLOR
        | RendererCapabilities.MARKUP
    )
    priority = 10

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def draw_text(self, text: str, style: str | None = None) -> None:
        self.console.print(Text(text, style=style or ""))


def default_registry(
    console: Console | None = None,
    stream: TextIO | None = None,
) -> RendererRegistry:
    """Registry with the plain-text and rich console renderers."""
    registry = RendererRegistry()
    registry.register(PlainTextRenderer(stream))
    registry.register(RichConsoleRenderer(console))
    return registry
