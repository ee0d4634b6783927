from __future__ import annotations

import base64
import os
from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from workshop import config, plotting

ROOT = Path(__file__).resolve().parent.parent
PAGES = sorted((ROOT / "pages").glob("*.py"))

# 1x1 transparent PNG
TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def no_page_links(monkeypatch) -> None:
    # page links need the multipage runtime, which AppTest does not start
    monkeypatch.setattr(st, "page_link", lambda *args, **kwargs: None)


def test_landing_page_runs() -> None:
    at = AppTest.from_file(str(ROOT / "app.py")).run(timeout=60)
    assert not at.exception
    assert at.title[0].value == "Plotting Grammar Workshop"
    assert [m.value for m in at.metric] == ["344", "142", "60", "96"]


@pytest.mark.parametrize("page", PAGES, ids=[p.stem for p in PAGES])
def test_chapter_page_runs(page) -> None:
    at = AppTest.from_file(str(page)).run(timeout=60)
    assert not at.exception, [e.message for e in at.exception]
    assert at.title[0].value.startswith("Chapter ")


def test_every_chapter_has_a_page() -> None:
    from workshop.constants import CHAPTERS

    assert sorted(filename for _, _, filename in CHAPTERS.values()) == [p.name for p in PAGES]


def test_quiz_feedback() -> None:
    at = AppTest.from_file(str(ROOT / "pages" / "08_Line_Charts.py")).run(timeout=60)
    at.radio(key="ch8_quiz1").set_value("To compare relative growth regardless of price level").run(timeout=60)
    assert at.success[0].value == "Correct!"


def test_empty_ticker_selection_shows_message() -> None:
    at = AppTest.from_file(str(ROOT / "pages" / "08_Line_Charts.py")).run(timeout=60)
    at.multiselect(key="line_tickers").set_value([]).run(timeout=60)
    assert not at.exception
    assert any("Select at least one ticker" in i.value for i in at.info)


def test_export_buttons_render_and_save(monkeypatch) -> None:
    # Arrange
    rendered, saved = [], []

    def fake_png_bytes(fig, width=None, height=None, scale=1):
        rendered.append((width, height, scale))
        return TINY_PNG

    def fake_save_png(fig, path, width=None, height=None, scale=1):
        saved.append((path, width, height, scale))
        return path

    monkeypatch.setattr(plotting, "png_bytes", fake_png_bytes)
    monkeypatch.setattr(plotting, "save_png", fake_save_png)
    at = AppTest.from_file(str(ROOT / "pages" / "11_Arranging_and_Exporting.py")).run(timeout=60)

    # Act
    at.button(key="exp_render").click().run(timeout=60)
    at.button(key="exp_save").click().run(timeout=60)

    # Assert
    assert not at.exception
    assert rendered == [(1000, 700, 2)]
    assert saved == [(os.path.join(config.EXPORT_DIR, "penguins_overview.png"), 1000, 700, 2)]


FILTERED_PAGES = [
    "02_Grammar_of_Graphics.py",
    "03_Bar_and_Dot_Charts.py",
    "05_Histograms_and_Density.py",
    "06_Box_Plots.py",
    "07_Scatter_and_Bubble.py",
]


def _filtered_penguin_count() -> None:
    import streamlit as st

    from workshop.data_loader import load_penguins, sidebar_filters

    st.metric("Penguins shown", len(sidebar_filters(load_penguins())))


@pytest.mark.parametrize(
    "species, islands, expected",
    [
        (None, None, "344"),
        (["Gentoo"], None, "124"),
        (["Adelie"], ["Torgersen"], "52"),
        (["Chinstrap"], ["Torgersen"], "0"),
        ([], None, "0"),
    ],
)
def test_sidebar_filters_row_counts(species, islands, expected) -> None:
    # Arrange
    at = AppTest.from_function(_filtered_penguin_count).run(timeout=60)

    # Act
    if species is not None:
        at.multiselect(key="species_filter").set_value(species)
    if islands is not None:
        at.multiselect(key="island_filter").set_value(islands)
    at.run(timeout=60)

    # Assert
    assert not at.exception
    assert at.metric[0].value == expected


def test_sidebar_filters_remember_both_selections() -> None:
    at = AppTest.from_function(_filtered_penguin_count).run(timeout=60)
    at.multiselect(key="species_filter").set_value(["Gentoo"])
    at.multiselect(key="island_filter").set_value(["Biscoe"])
    at.run(timeout=60)

    assert at.session_state["selected_species"] == ["Gentoo"]
    assert at.session_state["selected_islands"] == ["Biscoe"]


@pytest.mark.parametrize("page", FILTERED_PAGES)
@pytest.mark.parametrize(
    "species, islands",
    [([], None), (["Chinstrap"], ["Torgersen"])],
    ids=["no-species", "chinstrap-on-torgersen"],
)
def test_empty_penguin_filter_shows_message(page, species, islands) -> None:
    at = AppTest.from_file(str(ROOT / "pages" / page)).run(timeout=60)
    at.multiselect(key="species_filter").set_value(species)
    if islands is not None:
        at.multiselect(key="island_filter").set_value(islands)
    at.run(timeout=60)

    assert not at.exception, [e.message for e in at.exception]
    assert any("penguins match the sidebar filters" in i.value for i in at.info)


@pytest.mark.parametrize("page", FILTERED_PAGES)
def test_single_species_filter_runs(page) -> None:
    at = AppTest.from_file(str(ROOT / "pages" / page)).run(timeout=60)
    at.multiselect(key="species_filter").set_value(["Gentoo"]).run(timeout=60)

    assert not at.exception, [e.message for e in at.exception]
    assert at.session_state["selected_species"] == ["Gentoo"]
