"""Language statistics cards for tracked repositories."""

from .card import render_card
from .models import ClocData, LanguageStats, Project

__all__ = ["ClocData", "LanguageStats", "Project", "render_card"]
