from __future__ import annotations

import pytest

from pstatool.card import CardTemplate, ColorRegistry


@pytest.fixture
def registry() -> ColorRegistry:
    """A small registry so tests do not depend on the bundled table."""
    return ColorRegistry(colors={"Go": "#00ADD8", "TS": "#3178c6", "Rust": "#dea584"})


@pytest.fixture
def template() -> CardTemplate:
    return CardTemplate(
        "<svg>#header#|#subheader#|#bar_rects#|#left_block#|#right_block#</svg>"
    )
