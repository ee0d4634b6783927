from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import pytest
from scipy.integrate import trapezoid

from workshop.plotting import (
    arrange_figures,
    axis_labels,
    bar_chart,
    box_chart,
    bubble_chart,
    bubble_map,
    choropleth_map,
    coefficient_chart,
    density_chart,
    dot_chart,
    dumbbell_chart,
    heatmap_chart,
    histogram_chart,
    kde_curve,
    line_chart,
    png_bytes,
    ridgeline_chart,
    save_png,
    scatter_chart,
    violin_chart,
)


@pytest.fixture
def birds() -> pd.DataFrame:
    rng = np.random.default_rng(0)
    n = 30
    return pd.DataFrame({
        "species": np.repeat(["Adelie", "Chinstrap", "Gentoo"], n),
        "flipper_length_mm": np.concatenate([rng.normal(m, 5, n) for m in (190, 196, 217)]),
        "body_mass_g": np.concatenate([rng.normal(m, 300, n) for m in (3700, 3730, 5080)]),
    })


def test_axis_labels_caller_entries_win() -> None:
    lab = axis_labels({"body_mass_g": "Mass"})
    assert lab["body_mass_g"] == "Mass"
    assert lab["flipper_length_mm"] == "Flipper length (mm)"


def test_bar_chart_one_trace_per_colour() -> None:
    df = pd.DataFrame({"island": ["A", "A", "B"], "species": ["x", "y", "x"], "n": [3, 4, 5]})
    fig = bar_chart(df, x="island", y="n", color="species", barmode="stack", title="Counts")
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 2
    assert fig.layout.barmode == "stack"
    assert fig.layout.title.text == "Counts"


def test_dot_chart_orders_categories_by_value() -> None:
    df = pd.DataFrame({"country": ["a", "b", "c"], "lifeExp": [70.0, 50.0, 60.0]})
    fig = dot_chart(df, "country", "lifeExp")
    assert list(fig.layout.yaxis.categoryarray) == ["b", "c", "a"]


def test_dumbbell_chart_segments_and_two_endpoints() -> None:
    df = pd.DataFrame({"continent": ["Africa", "Europe"], "y1952": [39.1, 64.4], "y2007": [54.8, 77.6]})
    fig = dumbbell_chart(df, "continent", "y1952", "y2007", start_label="1952", end_label="2007")
    assert len(fig.data) == 3
    # two segments, each closed by a None gap
    assert len(fig.data[0].x) == 6
    assert [t.name for t in fig.data[1:]] == ["1952", "2007"]


def test_heatmap_chart_from_pivot_table() -> None:
    grid = pd.DataFrame([[1.0, 2.0], [3.0, 4.0]], index=["r1", "r2"], columns=[1952, 2007])
    fig = heatmap_chart(grid, annotate=True)
    assert fig.data[0].type == "heatmap"
    assert list(fig.data[0].x) == ["1952", "2007"]
    assert fig.data[0].texttemplate == "%{z:.1f}"


def test_histogram_bin_width_overrides_nbins(birds) -> None:
    fig = histogram_chart(birds, "flipper_length_mm", color="species", bin_width=5)
    assert len(fig.data) == 3
    assert all(t.xbins.size == 5 for t in fig.data)


def test_kde_curve_integrates_to_about_one() -> None:
    values = np.random.default_rng(1).normal(0, 1, 500)
    grid = np.linspace(-6, 6, 400)
    g, density = kde_curve(values, grid=grid)
    assert len(g) == len(density) == 400
    assert trapezoid(density, g) == pytest.approx(1.0, abs=0.01)


def test_kde_curve_wider_bandwidth_flattens_peak() -> None:
    values = np.random.default_rng(2).normal(0, 1, 300)
    _, narrow = kde_curve(values, bw_factor=0.5, grid=np.array([0.0]))
    _, wide = kde_curve(values, bw_factor=3.0, grid=np.array([0.0]))
    assert wide[0] < narrow[0]


def test_density_chart_skips_groups_too_small_to_smooth(birds) -> None:
    single = pd.DataFrame({"species": ["Lonely"], "flipper_length_mm": [200.0], "body_mass_g": [4000.0]})
    df = pd.concat([birds, single], ignore_index=True)
    fig = density_chart(df, "flipper_length_mm", group="species")
    assert [t.name for t in fig.data] == ["Adelie", "Chinstrap", "Gentoo"]


def test_density_chart_skips_groups_without_spread(birds) -> None:
    flat = pd.DataFrame({"species": ["Flat"] * 3, "flipper_length_mm": [200.0] * 3, "body_mass_g": [4000.0] * 3})
    df = pd.concat([birds, flat], ignore_index=True)
    fig = density_chart(df, "flipper_length_mm", group="species")
    assert "Flat" not in [t.name for t in fig.data]
    assert len(fig.data) == 3


def test_ridgeline_one_half_violin_per_group(birds) -> None:
    fig = ridgeline_chart(birds, "body_mass_g", "species", order=["Gentoo", "Adelie"])
    assert [t.name for t in fig.data] == ["Gentoo", "Adelie"]
    assert all(t.side == "positive" and t.orientation == "h" for t in fig.data)


def test_box_and_violin(birds) -> None:
    box = box_chart(birds, "species", "body_mass_g", points=True)
    assert all(t.boxpoints == "all" for t in box.data)
    violin = violin_chart(birds, "species", "body_mass_g")
    assert len(violin.data) == 3
    assert all(t.box.visible for t in violin.data)


def test_scatter_trendline_per_group(birds) -> None:
    fig = scatter_chart(birds, "flipper_length_mm", "body_mass_g", color="species", trendline="ols")
    # three point clouds plus three fitted lines
    assert len(fig.data) == 6


def test_bubble_chart_animation_frames() -> None:
    df = pd.DataFrame({
        "gdpPercap": [1000, 2000, 1500, 2500],
        "lifeExp": [50, 60, 55, 65],
        "pop": [10, 20, 12, 22],
        "year": [1952, 1952, 2007, 2007],
        "continent": ["Africa", "Europe", "Africa", "Europe"],
    })
    fig = bubble_chart(df, "gdpPercap", "lifeExp", size="pop", color="continent",
                       log_x=True, animation_frame="year")
    assert len(fig.frames) == 2
    assert fig.layout.xaxis.type == "log"


def test_line_chart_facets() -> None:
    df = pd.DataFrame({
        "date": pd.to_datetime(["2023-01-31", "2023-02-28"] * 2),
        "ticker": ["A", "A", "B", "B"],
        "sector": ["Tech", "Tech", "Health", "Health"],
        "close": [1.0, 2.0, 3.0, 4.0],
    })
    fig = line_chart(df, "date", "close", color="ticker", facet_col="sector")
    assert len(fig.data) == 2
    assert fig.layout.xaxis2 is not None


def test_coefficient_chart_drops_intercept() -> None:
    tidy = pd.DataFrame({
        "term": ["Intercept", "x"],
        "estimate": [1.0, 2.0],
        "conf_low": [0.5, 1.5],
        "conf_high": [1.5, 3.0],
    })
    fig = coefficient_chart(tidy)
    assert list(fig.data[0].y) == ["x"]
    assert list(fig.data[0].error_x.array) == [1.0]
    assert list(fig.data[0].error_x.arrayminus) == [0.5]
    assert fig.layout.shapes[0].x0 == 0


def test_maps_build_geo_traces() -> None:
    df = pd.DataFrame({
        "country": ["Norway", "Japan"],
        "iso_alpha": ["NOR", "JPN"],
        "lifeExp": [80.2, 82.6],
        "pop": [4.6e6, 127e6],
        "continent": ["Europe", "Asia"],
    })
    choro = choropleth_map(df, "lifeExp", projection="robinson")
    assert choro.data[0].type == "choropleth"
    assert choro.layout.geo.projection.type == "robinson"
    bubbles = bubble_map(df, size="pop", color="continent")
    assert {t.type for t in bubbles.data} == {"scattergeo"}


def test_arrange_figures_copies_traces_into_grid(birds) -> None:
    # Arrange
    a = scatter_chart(birds, "flipper_length_mm", "body_mass_g", color="species")
    b = box_chart(birds, "species", "body_mass_g")

    # Act
    grid = arrange_figures([a, b], rows=1, cols=2, titles=["A", "B"])

    # Assert
    assert len(grid.data) == len(a.data) + len(b.data)
    assert grid.data[-1].xaxis == "x2"
    shown = [t.name for t in grid.data if t.showlegend is not False]
    assert sorted(shown) == ["Adelie", "Chinstrap", "Gentoo"]
    # source figures untouched
    assert all(t.showlegend is not False for t in b.data)
    assert grid.layout.height == 350


def test_arrange_figures_rejects_overflow(birds) -> None:
    fig = box_chart(birds, "species", "body_mass_g")
    with pytest.raises(ValueError):
        arrange_figures([fig, fig, fig], rows=1, cols=2)


def test_save_png_creates_folder_and_passes_size(tmp_path, monkeypatch) -> None:
    # Arrange
    calls = []
    monkeypatch.setattr(go.Figure, "write_image", lambda self, *a, **kw: calls.append((a, kw)))
    path = tmp_path / "out" / "chart.png"

    # Act
    result = save_png(go.Figure(), str(path), width=800, height=500, scale=3)

    # Assert
    assert result == str(path)
    assert (tmp_path / "out").is_dir()
    assert calls == [((str(path),), {"format": "png", "width": 800, "height": 500, "scale": 3})]


def test_png_bytes_returns_rendered_image(monkeypatch) -> None:
    monkeypatch.setattr(go.Figure, "to_image", lambda self, **kw: b"\x89PNG" + repr(sorted(kw.items())).encode())
    data = png_bytes(go.Figure(), width=100, height=50, scale=2)
    assert data.startswith(b"\x89PNG")
    assert b"'scale', 2" in data


def test_common_layout_centres_title() -> None:
    fig = bar_chart(pd.DataFrame({"x": ["a"], "y": [1]}), "x", "y")
    assert fig.layout.title.x == 0.5
    assert fig.layout.height == 500
    assert fig.layout.margin.t == 60
