"""Shared pytest fixtures for npm-bridge tests."""

from __future__ import annotations

import pytest

from npm_bridge.models.project import Project


@pytest.fixture
def make_project(tmp_path):
    """Build a Project rooted at tmp_path; keyword args become host keys."""

    def _make(npm: dict | None = None, **data) -> Project:
        base = {"name": "foo", "version": "1.0.0", "description": "d"}
        base.update(data)
        if npm is not None:
            base["npm"] = npm
        return Project(root=tmp_path, data=base)

    return _make


@pytest.fixture
def project_file(tmp_path):
    """Write a project.toml into tmp_path and return its path."""

    def _write(content: str):
        path = tmp_path / "project.toml"
        path.write_text(content)
        return path

    return _write
