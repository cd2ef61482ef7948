"""Data models for npm-bridge."""

from npm_bridge.models.project import Project, load_project

__all__ = ["Project", "load_project"]
