"""Shared test fixtures for marketguard tests."""

import copy
import hashlib
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from marketguard.errors import ArtifactFetchError
from marketguard.integrity import ArtifactSource

BASE_URL = "https://plugins.example.com"

# Type aliases for factory fixtures
VersionFactory = Callable[..., dict[str, Any]]
PluginFactory = Callable[..., dict[str, Any]]
IndexFactory = Callable[..., dict[str, Any]]


def artifact_bytes(plugin_id: str, version: str) -> bytes:
    """Deterministic archive content for a plugin version."""
    return f"{plugin_id}-{version}.tgz contents".encode()


def artifact_url(plugin_id: str, version: str) -> str:
    """Download URL for a plugin version's archive."""
    return f"{BASE_URL}/{plugin_id}/{plugin_id}-{version}.tgz"


def digest(data: bytes) -> str:
    """Hex SHA-256 of data."""
    return hashlib.sha256(data).hexdigest()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_version() -> VersionFactory:
    """Factory for well-formed version objects whose artifact is served."""

    def _make(plugin_id: str = "a", version: str = "1.0.0", **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": version,
            "entry": {"type": "file", "path": f"dist/{plugin_id}.js"},
            "dist": {
                "type": "tgz",
                "url": artifact_url(plugin_id, version),
                "sha256": digest(artifact_bytes(plugin_id, version)),
            },
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_plugin(make_version: VersionFactory) -> PluginFactory:
    """Factory for well-formed plugin objects."""

    def _make(
        plugin_id: str = "a",
        versions: list[dict[str, Any]] | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": plugin_id,
            "name": plugin_id.upper(),
            "versions": versions if versions is not None else [make_version(plugin_id)],
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_index() -> IndexFactory:
    """Factory for index documents."""

    def _make(plugins: list[Any] | None = None, name: str = "m") -> dict[str, Any]:
        return {
            "schemaVersion": 1,
            "name": name,
            "plugins": plugins if plugins is not None else [],
        }

    return _make


@pytest.fixture
def base_index(make_index: IndexFactory, make_plugin: PluginFactory) -> dict[str, Any]:
    """A valid base index with plugin 'a' at version 1.0.0."""
    return make_index([make_plugin("a")])


@pytest.fixture
def pr_index(base_index: dict[str, Any]) -> dict[str, Any]:
    """An independent copy of base_index to modify in tests."""
    return copy.deepcopy(base_index)


@pytest.fixture
def served() -> dict[str, bytes]:
    """URL to content mapping served by the artifact_source fixture."""
    return {}


@pytest.fixture
def artifact_source(served: dict[str, bytes]) -> Mock:
    """Mock ArtifactSource serving the served mapping, 404 for anything else."""

    def _fetch(url: str) -> bytes:
        if url not in served:
            msg = "404 Not Found"
            raise ArtifactFetchError(msg)
        return served[url]

    source = Mock(spec=ArtifactSource)
    source.fetch.side_effect = _fetch
    return source


@pytest.fixture
def serve(served: dict[str, bytes]) -> Callable[[str, str], None]:
    """Serve the deterministic archive of a plugin version."""

    def _serve(plugin_id: str, version: str) -> None:
        served[artifact_url(plugin_id, version)] = artifact_bytes(plugin_id, version)

    return _serve


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON document under tmp_path and return its path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
