"""Tests for the Figma REST client and host. HTTP is always mocked."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from figma_blueprint.config import Settings
from figma_blueprint.exceptions import ConfigError, ExportError, HostLookupError
from figma_blueprint.figma_api import (
    FigmaRestHost,
    fetch_document,
    figma_api_get,
    get_node_image_url,
    normalize_node_id,
)
from figma_blueprint.scene import decode_node


def _response(json_data=None, text=""):
    response = MagicMock()
    response.json.return_value = json_data
    response.text = text
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def settings():
    return Settings(figma_api_key="secret", host_timeout=5)


def test_normalize_node_id():
    assert normalize_node_id("12-34") == "12:34"
    assert normalize_node_id("12:34") == "12:34"


class TestApiGet:
    def test_sends_token_header(self, settings):
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response({"ok": True})) as get:
            assert figma_api_get("/files/F", settings, params={"depth": 1}) == {"ok": True}

        get.assert_called_once_with(
            "https://api.figma.com/v1/files/F",
            headers={"X-Figma-Token": "secret"},
            params={"depth": 1},
            timeout=5,
        )

    def test_missing_key(self):
        with pytest.raises(ConfigError):
            figma_api_get("/files/F", Settings())

    def test_http_error_propagates(self, settings):
        response = _response()
        response.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")
        with patch("figma_blueprint.figma_api.requests.get", return_value=response):
            with pytest.raises(requests.HTTPError):
                figma_api_get("/files/F", settings)


class TestImageUrl:
    def test_returns_url(self, settings):
        payload = {"err": None, "images": {"1:2": "https://cdn.example/1.png"}}
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response(payload)):
            assert get_node_image_url("F", "1:2", settings) == "https://cdn.example/1.png"

    def test_render_error(self, settings):
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response({"err": "render timeout"})):
            with pytest.raises(ExportError):
                get_node_image_url("F", "1:2", settings)


class TestFetchDocument:
    def test_node_lookup(self, settings, frame_raw):
        payload = {"nodes": {"1:1": {"document": frame_raw, "styles": {"S:1": {"name": "Brand"}}}}}
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response(payload)) as get:
            document, registries = fetch_document("F", settings, nodeId="1-1", depth=2)

        assert document["id"] == "1:1"
        assert registries["styles"] == {"S:1": {"name": "Brand"}}
        assert registries["components"] == {}
        assert get.call_args.kwargs["params"] == {"ids": "1:1", "depth": 2}

    def test_missing_node(self, settings):
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response({"nodes": {"9:9": None}})):
            with pytest.raises(HostLookupError):
                fetch_document("F", settings, nodeId="1:1")

    def test_whole_file(self, settings, frame_raw):
        payload = {"document": frame_raw, "components": {"C:1": {"name": "Button"}}}
        with patch("figma_blueprint.figma_api.requests.get", return_value=_response(payload)):
            document, registries = fetch_document("F", settings)

        assert document is frame_raw
        assert registries["components"] == {"C:1": {"name": "Button"}}


class TestFigmaRestHost:
    @pytest.fixture
    def rest_host(self, settings):
        return FigmaRestHost("F", settings, {
            "styles": {"S:1": {"name": "Brand", "styleType": "FILL"}},
            "components": {"10:2": {"name": "Button, State=Hover"}},
        })

    @pytest.mark.asyncio
    async def test_registry_lookups(self, rest_host, instance_raw):
        assert (await rest_host.get_style("S:1")).value.name == "Brand"
        assert not (await rest_host.get_style("S:2")).ok
        assert (await rest_host.get_main_component(decode_node(instance_raw))).value.id == "10:2"

    @pytest.mark.asyncio
    async def test_export_svg(self, rest_host, make_raw):
        responses = [
            _response({"images": {"1:5": "https://cdn.example/1.svg"}}),
            _response(text="<svg></svg>"),
        ]
        with patch("figma_blueprint.figma_api.requests.get", side_effect=responses):
            result = await rest_host.export_svg(decode_node(make_raw("VECTOR", "1:5")))

        assert result.ok
        assert result.value == "<svg></svg>"

    @pytest.mark.asyncio
    async def test_export_failure_is_a_result(self, rest_host, make_raw):
        with patch("figma_blueprint.figma_api.requests.get", side_effect=requests.ConnectionError("offline")):
            result = await rest_host.export_svg(decode_node(make_raw("VECTOR", "1:5")))

        assert not result.ok
        assert "offline" in result.error

    @pytest.mark.asyncio
    async def test_fonts_are_never_loaded(self, rest_host):
        result = await rest_host.load_font("Inter", "Bold")
        assert result.ok
        assert result.value is False
