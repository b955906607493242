"""
Pytest configuration for the figma-blueprint test suite.

Provides:
- Machine-mode logging (suppresses console output)
- Raw node factories in both the plugin and the REST shape
- Host fixtures backed by InMemoryHost
"""

import os

import pytest

from figma_blueprint.host import ComponentInfo, InMemoryHost, StyleInfo
from figma_blueprint.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    os.environ.setdefault("FIGMA_BLUEPRINT_MACHINE_MODE", "1")


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Machine mode by default - suppress console logs for clean test output."""
    setup_logging(level="DEBUG", suppress_console=True, force=True)


# ============================================================================
# RAW NODE FACTORIES
# ============================================================================

def raw_node(node_type, node_id="1:1", name=None, **fields):
    node = {"id": node_id, "name": name or node_type.title(), "type": node_type}
    node.update(fields)
    return node


def solid(r, g, b, a=1.0, **extra):
    paint = {"type": "SOLID", "visible": True, "color": {"r": r, "g": g, "b": b, "a": a}}
    paint.update(extra)
    return paint


@pytest.fixture
def make_raw():
    """Factory for arbitrary raw nodes: make_raw("FRAME", "1:2", x=0, ...)."""
    return raw_node


@pytest.fixture
def rect_raw():
    return raw_node(
        "RECTANGLE",
        "1:2",
        "Card Background",
        x=10,
        y=20,
        width=100,
        height=50,
        fills=[solid(1, 0, 0)],
        strokes=[solid(0, 0, 1)],
        strokeWeight=2,
        cornerRadius=8,
    )


@pytest.fixture
def text_raw():
    return raw_node(
        "TEXT",
        "1:3",
        "Title",
        x=0,
        y=0,
        width=200,
        height=24,
        characters="Hello world",
        fontName={"family": "Inter", "style": "Bold"},
        fontSize=16,
        lineHeight={"value": 24, "unit": "PIXELS"},
        letterSpacing={"value": 0, "unit": "PIXELS"},
        textAlignHorizontal="LEFT",
        fills=[solid(0, 0, 0)],
    )


@pytest.fixture
def frame_raw(rect_raw, text_raw):
    return raw_node(
        "FRAME",
        "1:1",
        "Header",
        x=0,
        y=0,
        width=400,
        height=100,
        layoutMode="HORIZONTAL",
        primaryAxisSizingMode="AUTO",
        counterAxisSizingMode="FIXED",
        primaryAxisAlignItems="SPACE_BETWEEN",
        counterAxisAlignItems="CENTER",
        itemSpacing=8,
        paddingLeft=16,
        paddingRight=16,
        paddingTop=12,
        paddingBottom=12,
        fills=[solid(1, 1, 1)],
        children=[rect_raw, text_raw],
    )


@pytest.fixture
def group_raw():
    children = [
        raw_node("RECTANGLE", f"2:{i}", f"Dot {i}", x=x, y=5, width=10, height=10)
        for i, x in enumerate((10, 30, 50))
    ]
    return raw_node("GROUP", "2:0", "Dots", x=10, y=5, width=50, height=10, children=children)


@pytest.fixture
def component_set_raw():
    return raw_node(
        "COMPONENT_SET",
        "10:0",
        "Button",
        x=0,
        y=0,
        width=200,
        height=100,
        description="Primary action",
        children=[
            raw_node("COMPONENT", "10:1", "Button, State=Default", x=0, y=0, width=80, height=32, key="k-default"),
            raw_node("COMPONENT", "10:2", "Button, State=Hover", x=100, y=0, width=80, height=32, key="k-hover"),
        ],
    )


@pytest.fixture
def instance_raw():
    return raw_node(
        "INSTANCE",
        "20:1",
        "Buy Button",
        x=0,
        y=0,
        width=80,
        height=32,
        componentId="10:2",
        componentProperties={
            "State": {"type": "VARIANT", "value": "Hover", "defaultValue": "Default"},
            "Label#1:0": {"type": "TEXT", "value": "Buy", "defaultValue": "Button"},
        },
        reactions=[
            {
                "trigger": {"type": "ON_CLICK"},
                "action": {"type": "NODE", "destinationId": "30:1", "navigation": "NAVIGATE"},
            }
        ],
    )


# ============================================================================
# HOST FIXTURES
# ============================================================================

@pytest.fixture
def styles():
    return {
        "S:fill": StyleInfo(id="S:fill", name="Brand/Primary", style_type="FILL"),
        "S:text": StyleInfo(id="S:text", name="Heading/H1", style_type="TEXT"),
    }


@pytest.fixture
def components():
    return {
        "10:2": ComponentInfo(id="10:2", name="Button, State=Hover", key="k-hover", description="Hover state"),
    }


@pytest.fixture
def host(styles, components):
    return InMemoryHost(styles=styles, components=components)
