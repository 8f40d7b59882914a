"""Persistence for the project roster and language statistics."""

from .project_store import ProjectStore

__all__ = ["ProjectStore"]
