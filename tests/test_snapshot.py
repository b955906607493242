"""Tests for the host port and snapshot prefetch."""

import asyncio

import pytest

from figma_blueprint.config import Settings
from figma_blueprint.diagnostics import Diagnostics
from figma_blueprint.host import HostResult, InMemoryHost
from figma_blueprint.scene import decode_node
from figma_blueprint.snapshot import prefetch_snapshot


class SlowHost(InMemoryHost):
    async def get_style(self, style_id):
        await asyncio.sleep(1)
        return HostResult.success(None)


class BrokenHost(InMemoryHost):
    async def get_main_component(self, node):
        raise RuntimeError("plugin crashed")


def _styled_tree(make_raw):
    return decode_node(make_raw("FRAME", "1:1", fillStyleId="S:fill", fills=[{"type": "SOLID"}], children=[
        make_raw("RECTANGLE", "1:2", fillStyleId="S:fill", fills=[{"type": "SOLID"}]),
        make_raw("RECTANGLE", "1:3", fillStyleId="S:missing", fills=[{"type": "SOLID"}]),
    ]))


class TestInMemoryHost:
    @pytest.mark.asyncio
    async def test_lookups_return_results(self, host, styles):
        assert (await host.get_style("S:fill")).value == styles["S:fill"]
        assert not (await host.get_style("nope")).ok

    @pytest.mark.asyncio
    async def test_font_set(self):
        host = InMemoryHost(fonts=[("Inter", "Bold")])

        assert (await host.load_font("Inter", "Bold")).ok
        assert not (await host.load_font("Inter", "Thin")).ok

    def test_from_file(self):
        host = InMemoryHost.from_file({
            "styles": {"S:1": {"name": "Brand", "styleType": "FILL"}},
            "components": {"C:1": {"name": "Button", "key": "abc"}},
            "componentSets": {"CS:1": {"name": "Buttons"}},
        })

        assert host.styles["S:1"].style_type == "FILL"
        assert host.components["C:1"].key == "abc"
        assert host.components["CS:1"].type == "COMPONENT_SET"


class TestPrefetch:
    @pytest.mark.asyncio
    async def test_styles_are_deduplicated(self, make_raw, host):
        diagnostics = Diagnostics()

        snapshot = await prefetch_snapshot(_styled_tree(make_raw), host, Settings(export_svg=False), diagnostics)

        style_calls = [c for c in host.calls if c[0] == "get_style"]
        assert style_calls == [("get_style", "S:fill"), ("get_style", "S:missing")]
        assert snapshot.style_name("S:fill") == "Brand/Primary"
        assert "style:S:missing" in snapshot.failures
        assert [d.stage for d in diagnostics] == ["host.get_style"]

    @pytest.mark.asyncio
    async def test_snapshot_is_read_only(self, make_raw, host):
        snapshot = await prefetch_snapshot(_styled_tree(make_raw), host, Settings(export_svg=False))

        with pytest.raises(TypeError):
            snapshot.styles["S:new"] = None

    @pytest.mark.asyncio
    async def test_main_component_and_font(self, instance_raw, text_raw, make_raw, host):
        root = decode_node(make_raw("FRAME", children=[instance_raw, text_raw]))

        snapshot = await prefetch_snapshot(root, host, Settings(export_svg=False))

        assert snapshot.main_component("20:1").name == "Button, State=Hover"
        assert snapshot.font_state("Inter", "Bold") == "loaded"

    @pytest.mark.asyncio
    async def test_svg_export_is_gated(self, make_raw):
        host = InMemoryHost(svgs={"1:2": "<svg/>"})
        root = decode_node(make_raw("FRAME", children=[
            make_raw("VECTOR", "1:2", width=10, height=10),
            make_raw("VECTOR", "1:3", width=0.5, height=10),
        ]))

        snapshot = await prefetch_snapshot(root, host, Settings())
        disabled = await prefetch_snapshot(root, InMemoryHost(), Settings(export_svg=False))

        assert [c for c in host.calls if c[0] == "export_svg"] == [("export_svg", "1:2")]
        assert snapshot.svgs == {"1:2": "<svg/>"}
        assert disabled.svgs == {}

    @pytest.mark.asyncio
    async def test_timeout_becomes_failure(self, make_raw):
        diagnostics = Diagnostics()

        snapshot = await prefetch_snapshot(
            _styled_tree(make_raw), SlowHost(), Settings(host_timeout=0.01, export_svg=False), diagnostics
        )

        assert "no answer after" in snapshot.failures["style:S:fill"]
        assert len(diagnostics) == 2

    @pytest.mark.asyncio
    async def test_raising_host_becomes_failure(self, instance_raw):
        diagnostics = Diagnostics()

        snapshot = await prefetch_snapshot(decode_node(instance_raw), BrokenHost(), Settings(), diagnostics)

        assert "plugin crashed" in snapshot.failures["component:20:1"]
        assert diagnostics.entries[0].stage == "host.get_main_component"
