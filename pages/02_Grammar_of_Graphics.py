"""Chapter 2: The Grammar of Graphics -- Building one chart layer by layer."""
import streamlit as st
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from workshop.data_loader import load_penguins, sidebar_filters, drop_incomplete
from workshop.plotting import apply_common_layout, axis_labels
from workshop.constants import LABELS, PENGUIN_MEASURES, SPECIES_COLORS
from workshop.themes import BUILTIN_THEMES
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box, grammar_step,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(2, "The Grammar of Graphics", part="I")
st.markdown(
    "A chart is not a single thing. It is a stack of decisions: which table, which "
    "columns go where, what shapes to draw, how values turn into positions and colours, "
    "whether to split into panels, and how the whole thing should look. The **grammar of "
    "graphics** gives each of those decisions a name. In this chapter we build one chart "
    "-- penguin flipper length against body mass -- one decision at a time."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = load_penguins()
fpen = drop_incomplete(sidebar_filters(penguins), ["flipper_length_mm", "body_mass_g"])
if fpen.empty:
    st.info("No penguins match the sidebar filters. Select at least one species and island.")
    st.stop()

# ── 2.1 The components ───────────────────────────────────────────────────────
st.header("2.1  The Parts of a Chart")

concept_box(
    "Seven Components",
    "<b>Data</b>: the table being drawn.<br>"
    "<b>Aesthetic mappings</b>: which column drives x, y, colour, size, shape.<br>"
    "<b>Geometries</b>: the marks -- points, lines, bars, tiles.<br>"
    "<b>Statistics</b>: transformations computed on the way (counts, bins, smoothers).<br>"
    "<b>Scales</b>: how data values become visual values (linear vs log axis, which palette).<br>"
    "<b>Facets</b>: splitting into small multiples.<br>"
    "<b>Theme</b>: everything that isn't data -- fonts, backgrounds, gridlines, legend placement."
)

# ── 2.2 Building step by step ────────────────────────────────────────────────
st.header("2.2  Building It Step by Step")

st.markdown(
    "Plotly offers two levels. `plotly.graph_objects` lets us add each layer by hand, "
    "which is perfect for seeing the grammar. Move the slider to add one component at a time."
)

STEPS = [
    "Data + axes",
    "Geometry: points",
    "Aesthetic: colour by species",
    "Second geometry: trend lines",
    "Scales: palette and log axis",
    "Theme",
]
step = st.select_slider("Build up to step", options=list(range(1, len(STEPS) + 1)),
                        value=len(STEPS), format_func=lambda i: f"{i}. {STEPS[i - 1]}",
                        key="gg_step")

col_a, col_b = st.columns(2)
with col_a:
    palette_sel = st.selectbox("Palette (step 5)", ["Workshop", "Set2", "Dark2", "Pastel"],
                               key="gg_palette")
with col_b:
    theme_sel = st.selectbox("Theme (step 6)", BUILTIN_THEMES, index=BUILTIN_THEMES.index("simple_white"),
                             key="gg_theme")

palettes = {
    "Workshop": SPECIES_COLORS,
    "Set2": dict(zip(SPECIES_COLORS, px.colors.qualitative.Set2)),
    "Dark2": dict(zip(SPECIES_COLORS, px.colors.qualitative.Dark2)),
    "Pastel": dict(zip(SPECIES_COLORS, px.colors.qualitative.Pastel)),
}

x_col, y_col = "flipper_length_mm", "body_mass_g"
fig = go.Figure()

# Step 1: data + axes, nothing drawn yet
fig.update_xaxes(title=LABELS[x_col], range=[fpen[x_col].min() - 5, fpen[x_col].max() + 5])
fig.update_yaxes(title=LABELS[y_col], range=[fpen[y_col].min() - 300, fpen[y_col].max() + 300])

if step >= 2:
    if step == 2:
        fig.add_trace(go.Scatter(x=fpen[x_col], y=fpen[y_col], mode="markers",
                                 marker=dict(color="#555555", size=7), name="penguins"))
    else:
        colors = palettes[palette_sel] if step >= 5 else SPECIES_COLORS
        for species, sub in fpen.groupby("species", observed=True):
            fig.add_trace(go.Scatter(
                x=sub[x_col], y=sub[y_col], mode="markers", name=species,
                marker=dict(color=colors[species], size=7, opacity=0.75),
                legendgroup=species,
            ))
            if step >= 4 and len(sub) > 1:
                slope, intercept = np.polyfit(sub[x_col], sub[y_col], 1)
                xs = np.array([sub[x_col].min(), sub[x_col].max()])
                fig.add_trace(go.Scatter(
                    x=xs, y=intercept + slope * xs, mode="lines",
                    line=dict(color=colors[species], width=3),
                    name=f"{species} trend", legendgroup=species, showlegend=False,
                ))

if step >= 5:
    fig.update_yaxes(type="log", range=None)

template = theme_sel if step >= 6 else "none"
fig.update_layout(template=template, height=520,
                  title=f"Step {step}: {STEPS[step - 1]}", title_x=0.5)
st.plotly_chart(fig, use_container_width=True)

grammar_step(1, "Data and axes",
             "A figure with axes and titles but no marks. The coordinate system exists; "
             "nothing is mapped into it yet.",
             """
fig = go.Figure()
fig.update_xaxes(title="Flipper length (mm)", range=[167, 236])
fig.update_yaxes(title="Body mass (g)", range=[2400, 6600])
""")
grammar_step(2, "A geometry",
             "Points are the geometry. Each row becomes one mark at (x, y).",
             """
fig.add_trace(go.Scatter(x=penguins["flipper_length_mm"], y=penguins["body_mass_g"],
                         mode="markers"))
""")
grammar_step(3, "An aesthetic mapping",
             "Colour is now *mapped* to species. In graph_objects that means one trace per "
             "group; the legend comes for free.",
             """
for species, sub in penguins.groupby("species", observed=True):
    fig.add_trace(go.Scatter(x=sub["flipper_length_mm"], y=sub["body_mass_g"],
                             mode="markers", name=species,
                             marker=dict(color=SPECIES_COLORS[species])))
""")
grammar_step(4, "A second geometry",
             "Layers stack: a least-squares line per species is another geometry, drawn "
             "from a *statistic* (the fitted line) rather than the raw rows.")
grammar_step(5, "Scales",
             "Scales decide how data becomes ink: which colour each species gets, and "
             "whether the y axis is linear or logarithmic.",
             'fig.update_yaxes(type="log")')
grammar_step(6, "Theme",
             "Finally the non-data styling. A template restyles everything at once.",
             'fig.update_layout(template="simple_white")')

# ── 2.3 The one-call version ─────────────────────────────────────────────────
st.header("2.3  The Declarative Shortcut")

st.markdown(
    "`plotly.express` accepts the whole grammar in one call: the table, the mappings as "
    "column names, and a few keywords for statistics, scales and facets."
)

col_a, col_b, col_c = st.columns(3)
with col_a:
    px_x = st.selectbox("x", PENGUIN_MEASURES, index=2, format_func=lambda c: LABELS[c], key="gg_px_x")
with col_b:
    px_y = st.selectbox("y", PENGUIN_MEASURES, index=3, format_func=lambda c: LABELS[c], key="gg_px_y")
with col_c:
    facet_sel = st.selectbox("Facet by", ["(none)", "island", "sex"], key="gg_facet")

px_data = drop_incomplete(fpen, [px_x, px_y])
if len(px_data) > 0:
    fig_px = px.scatter(
        px_data, x=px_x, y=px_y, color="species",
        facet_col=None if facet_sel == "(none)" else facet_sel,
        trendline="ols",
        color_discrete_map=SPECIES_COLORS,
        labels=axis_labels(),
    )
    apply_common_layout(fig_px, title="The same grammar in one call", height=480)
    st.plotly_chart(fig_px, use_container_width=True)
else:
    st.info("No penguins match the sidebar filters.")

code_example("""
fig = px.scatter(
    penguins,
    x="flipper_length_mm", y="body_mass_g",   # position aesthetics
    color="species",                          # colour aesthetic
    facet_col="island",                       # facets
    trendline="ols",                          # statistic + second geometry
    color_discrete_map=SPECIES_COLORS,        # colour scale
    template="simple_white",                  # theme
)
""", expanded=True)

insight_box(
    "Facet by island and something jumps out: Gentoo penguins only live on Biscoe, and "
    "Torgersen only has Adelies. A single unfaceted scatter hides that entirely."
)

warning_box(
    "Mapping versus setting. `color=\"species\"` *maps* a column to colour. Setting a fixed "
    "colour for every point is a styling choice, made with `marker_color=\"teal\"` or "
    "`color_discrete_sequence=[\"teal\"]`. Passing a literal colour name as `color=` looks "
    "for a column of that name and fails."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Which grammar component does `facet_col=\"island\"` set?",
    ["Aesthetic mapping", "Geometry", "Facets", "Theme"],
    correct_idx=2,
    explanation="Facets split the data into small multiples, one panel per island.",
    key="ch2_quiz1",
)

quiz(
    "Changing the background colour and gridlines changes which component?",
    ["Scale", "Theme", "Statistic", "Geometry"],
    correct_idx=1,
    explanation="Anything that does not depend on the data belongs to the theme.",
    key="ch2_quiz2",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Every chart is data + mappings + geometries, optionally with statistics, scales, facets and a theme.",
    "Layers stack: a scatter plus a trend line is two geometries over one set of mappings.",
    "`plotly.graph_objects` exposes each layer; `plotly.express` takes the whole grammar in one call.",
    "Mapping a column to an aesthetic is different from setting a fixed visual value.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 1: Loading Tabular Data",
    prev_page="01_Loading_Tabular_Data.py",
    next_label="Ch 3: Bar & Dot Charts",
    next_page="03_Bar_and_Dot_Charts.py",
)
