"""Tests for the FlagApiClient (requests is mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from flagshell.api import client as client_mod
from flagshell.api.client import FlagApiClient
from flagshell.editing.patch import PatchComment, PatchOperation
from flagshell.errors import ApiError


def _response(status=200, content=b"{}", json_data=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.content = content
    resp.text = content.decode()
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


@pytest.fixture
def fake_request(monkeypatch):
    mock = MagicMock()
    monkeypatch.setattr(client_mod.requests, "request", mock)
    return mock


class TestGetResource:
    def test_returns_raw_bytes(self, fake_request):
        fake_request.return_value = _response(content=b'{"key": "p"}')
        client = FlagApiClient("https://api.example.com/v2/", "api-123", timeout=5)

        assert client.get_resource("/projects/p") == b'{"key": "p"}'

        args, kwargs = fake_request.call_args
        assert args == ("GET", "https://api.example.com/v2/projects/p")
        assert kwargs["headers"]["Authorization"] == "api-123"
        assert kwargs["timeout"] == 5

    def test_no_token_no_auth_header(self, fake_request):
        fake_request.return_value = _response()
        FlagApiClient("https://api.example.com").get_resource("projects")
        assert "Authorization" not in fake_request.call_args.kwargs["headers"]

    def test_http_error(self, fake_request):
        fake_request.return_value = _response(status=404, content=b"not found")
        with pytest.raises(ApiError) as info:
            FlagApiClient("https://api.example.com").get_resource("projects/x")
        assert info.value.status_code == 404

    def test_transport_error(self, fake_request):
        fake_request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ApiError):
            FlagApiClient("https://api.example.com").get_resource("projects/x")


class TestPatchResource:
    def test_sends_wire_shape(self, fake_request):
        fake_request.return_value = _response(content=b'{"key": "p"}',
                                              json_data={"key": "p"})
        patch = PatchComment(
            patch=[PatchOperation("replace", "/name", "New"),
                   PatchOperation("remove", "/tags/0")],
            comment="rename",
        )

        result = FlagApiClient("https://api.example.com").patch_resource("projects/p", patch)

        assert result == {"key": "p"}
        args, kwargs = fake_request.call_args
        assert args == ("PATCH", "https://api.example.com/projects/p")
        assert kwargs["json"] == {
            "comment": "rename",
            "patch": [
                {"op": "replace", "path": "/name", "value": "New"},
                {"op": "remove", "path": "/tags/0"},
            ],
        }

    def test_empty_body(self, fake_request):
        fake_request.return_value = _response(status=204, content=b"")
        patch = PatchComment(patch=[PatchOperation("add", "/a", 1)], comment="")
        assert FlagApiClient("https://api.example.com").patch_resource("x", patch) == {}
