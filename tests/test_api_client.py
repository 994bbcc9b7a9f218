"""Tests for the control-plane roster client."""

import io
import json
import urllib.error

import pytest

from workflowlens.agent.api_client import APIClient, APIError


class _Response(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _fake_urlopen(payload, seen):
    def urlopen(req, timeout=None):
        seen.append(req)
        return _Response(payload.encode("utf-8"))

    return urlopen


def test_list_agents(monkeypatch):
    seen = []
    body = json.dumps({"agents": [{"name": "r1", "labels": ["linux"]}, {"name": "r2", "available": False}]})
    monkeypatch.setattr("urllib.request.urlopen", _fake_urlopen(body, seen))

    agents = APIClient("http://ci.local/").list_agents("org/repo")

    assert [a.name for a in agents] == ["r1", "r2"]
    assert agents[1].available is False
    assert seen[0].full_url == "http://ci.local/agents?repo=org%2Frepo"
    assert seen[0].get_method() == "GET"


def test_invalid_roster_payload(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", _fake_urlopen('{"agents": [{"labels": []}]}', []))
    with pytest.raises(APIError, match="Invalid agent roster"):
        APIClient("http://ci.local").list_agents()


def test_non_object_payload(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", _fake_urlopen("[1, 2]", []))
    with pytest.raises(APIError, match="expected a JSON object"):
        APIClient("http://ci.local").list_agents()


def test_bad_json(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", _fake_urlopen("not json", []))
    with pytest.raises(APIError, match="Invalid JSON"):
        APIClient("http://ci.local").list_agents()


def test_network_error(monkeypatch):
    def urlopen(req, timeout=None):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr("urllib.request.urlopen", urlopen)
    with pytest.raises(APIError, match="Network error"):
        APIClient("http://ci.local").list_agents()
