"""Tests for renderer selection."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from placeless.errors import RendererUnavailable
from placeless.rendering import (
    PlainTextRenderer,
    Renderer,
    RendererCapabilities,
    RendererRegistry,
    RichConsoleRenderer,
    default_registry,
)

Caps = RendererCapabilities


class RecordingRenderer:
    """Renderer that keeps what it was asked to draw."""

    def __init__(self, name: str, capabilities: RendererCapabilities, priority: int = 0) -> None:
        self.name = name
        self.capabilities = capabilities
        self.priority = priority
        self.drawn: list[tuple[str, str | None]] = []

    def draw_text(self, text: str, style: str | None = None) -> None:
        self.drawn.append((text, style))


class TestRegistry:
    def test_protocol(self):
        assert isinstance(RecordingRenderer("r", Caps.TEXT), Renderer)
        assert isinstance(PlainTextRenderer(), Renderer)

    def test_register_and_list(self):
        registry = RendererRegistry()
        registry.register(RecordingRenderer("b", Caps.TEXT))
        registry.register(RecordingRenderer("a", Caps.TEXT))
        assert registry.list_renderers() == ["a", "b"]
        registry.unregister("a")
        registry.unregister("missing")
        assert registry.list_renderers() == ["b"]

    def test_duplicate_name(self):
        registry = RendererRegistry()
        registry.register(RecordingRenderer("x", Caps.TEXT))
        with pytest.raises(ValueError):
            registry.register(RecordingRenderer("x", Caps.TEXT | Caps.COLOR))


class TestSelect:
    def test_highest_priority_wins(self):
        registry = RendererRegistry()
        registry.register(RecordingRenderer("low", Caps.TEXT, priority=1))
        registry.register(RecordingRenderer("high", Caps.TEXT, priority=5))
        assert registry.select_renderer(Caps.TEXT).name == "high"

    def test_ties_break_by_name(self):
        for order in (("beta", "alpha"), ("alpha", "beta")):
            registry = RendererRegistry()
            for name in order:
                registry.register(RecordingRenderer(name, Caps.TEXT, priority=3))
            assert registry.select_renderer().name == "alpha"

    def test_requires_every_capability(self):
        registry = RendererRegistry()
        registry.register(RecordingRenderer("colour", Caps.TEXT | Caps.COLOR, priority=9))
        registry.register(RecordingRenderer("unicode", Caps.TEXT | Caps.UNICODE, priority=1))
        assert registry.select_renderer(Caps.TEXT | Caps.UNICODE).name == "unicode"
        with pytest.raises(RendererUnavailable):
            registry.select_renderer(Caps.COLOR | Caps.UNICODE)

    def test_empty_registry(self):
        with pytest.raises(RendererUnavailable):
            RendererRegistry().select_renderer()

    def test_handle_normalizes_to_nfc(self):
        registry = RendererRegistry()
        recorder = registry.register(RecordingRenderer("r", Caps.TEXT))
        registry.select_renderer().draw_text("Cafe\u0301", style="bold")
        assert recorder.drawn == [("Caf\u00e9", "bold")]


class TestBuiltinRenderers:
    def test_default_registry_prefers_rich(self):
        registry = default_registry(console=Console(file=io.StringIO()))
        assert registry.select_renderer(Caps.TEXT).name == "rich"
        assert registry.list_renderers() == ["plain", "rich"]

    def test_plain_renderer(self):
        stream = io.StringIO()
        registry = RendererRegistry()
        registry.register(PlainTextRenderer(stream))
        registry.select_renderer(Caps.UNICODE).draw_text("Straße", style="red")
        assert stream.getvalue() == "Straße\n"

    def test_rich_renderer(self):
        buffer = io.StringIO()
        renderer = RichConsoleRenderer(Console(file=buffer, color_system=None, width=80))
        renderer.draw_text("İstanbul", style="bold")
        assert buffer.getvalue() == "İstanbul\n"
