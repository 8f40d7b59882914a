"""Git helpers for fetching tracked projects."""

from .clone import CloneError, Cloner, repo_url

__all__ = ["CloneError", "Cloner", "repo_url"]
