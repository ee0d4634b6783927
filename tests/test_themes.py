from __future__ import annotations

import plotly.express as px
import plotly.io as pio
import pytest

from workshop.themes import (
    LEGEND_POSITIONS,
    WORKSHOP_COLORWAY,
    make_theme,
    register_theme,
    register_workshop_themes,
)


def test_make_theme_sets_layout_defaults() -> None:
    theme = make_theme(font_family="Georgia", font_size=11, show_grid=False, legend_position="top")
    assert theme.layout.font.family == "Georgia"
    assert theme.layout.title.font.size == 16
    assert theme.layout.xaxis.showgrid is False
    assert theme.layout.legend.orientation == "h"
    assert list(theme.layout.colorway) == WORKSHOP_COLORWAY


def test_make_theme_unknown_legend_position() -> None:
    with pytest.raises(KeyError):
        make_theme(legend_position="nowhere")


def test_register_theme_usable_by_name() -> None:
    name = register_theme("test_georgia", make_theme(font_family="Georgia"))
    assert name in pio.templates
    fig = px.scatter(x=[1, 2], y=[3, 4], template=name)
    assert fig.layout.template.layout.font.family == "Georgia"


def test_register_workshop_themes_idempotent() -> None:
    first = register_workshop_themes()
    count = len(list(pio.templates))
    second = register_workshop_themes()
    assert first == second == ["workshop_minimal", "workshop_dark", "workshop_economist"]
    assert len(list(pio.templates)) == count
    assert pio.templates["workshop_dark"].layout.paper_bgcolor == "#1C2833"


def test_legend_positions_cover_page_choices() -> None:
    assert set(LEGEND_POSITIONS) == {"right", "top", "bottom", "inside"}
