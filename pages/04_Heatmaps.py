"""Chapter 4: Heatmaps -- Tiles for two categorical axes, colour scales, annotated cross-tabs."""
import streamlit as st
import pandas as pd
import plotly.express as px

from workshop.data_loader import load_gapminder, load_survey, load_penguins, drop_incomplete
from workshop.plotting import heatmap_chart, apply_common_layout
from workshop.constants import CONTINENT_LIST, LABELS, PENGUIN_MEASURES
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(4, "Heatmaps", part="II")
st.markdown(
    "A heatmap swaps bar length for colour. Each cell of a grid is one combination of two "
    "categories, and its colour encodes a value. It trades precision -- nobody reads exact "
    "numbers off a colour -- for the ability to show hundreds of values at once and let "
    "patterns jump out."
)

# ── Load data ────────────────────────────────────────────────────────────────
gapminder = load_gapminder()
survey = load_survey()
penguins = load_penguins()

# ── 4.1 Continent x year ─────────────────────────────────────────────────────
st.header("4.1  Life Expectancy by Continent and Year")

concept_box(
    "The Tile Geometry",
    "A heatmap is a grid of tiles. The data usually arrives long (one row per continent-year), "
    "gets summarised to one value per cell, then pivoted wide: rows become one axis, columns "
    "the other, and the values fill the tiles."
)

metric_sel = st.selectbox("Value", ["lifeExp", "gdpPercap"], format_func=lambda c: LABELS[c],
                          key="heat_metric")
stat_sel = st.radio("Summary", ["median", "mean"], horizontal=True, key="heat_stat")

grid = (
    gapminder.groupby(["continent", "year"])[metric_sel]
    .agg(stat_sel)
    .unstack("year")
    .reindex(CONTINENT_LIST)
)

fig_cy = heatmap_chart(grid, x_label="Year", y_label="Continent",
                       title=f"{stat_sel.title()} {LABELS[metric_sel].lower()}",
                       annotate=True, value_format=".0f", height=420)
st.plotly_chart(fig_cy, use_container_width=True)

code_example("""
grid = (
    gapminder.groupby(["continent", "year"])["lifeExp"]
    .median()
    .unstack("year")          # long -> wide: continents x years
)
fig = go.Figure(go.Heatmap(z=grid.values, x=grid.columns, y=grid.index,
                           colorscale="Viridis", texttemplate="%{z:.0f}"))
""")

insight_box(
    "Read along a row to see one continent's trajectory, down a column to compare continents "
    "in one year. Africa's row brightens more slowly from the 1980s onward -- the HIV epidemic "
    "shows up as a stall you can see without a single line chart."
)

# ── 4.2 Colour scales ────────────────────────────────────────────────────────
st.header("4.2  Choosing a Colour Scale")

st.markdown(
    "The colour scale *is* the y axis of a heatmap, so choosing it matters. **Sequential** "
    "scales (light to dark) suit values that run from low to high. **Diverging** scales (two "
    "hues meeting at a neutral middle) suit values with a meaningful centre, such as a "
    "correlation of zero or a change of zero."
)

scale_sel = st.selectbox(
    "Colour scale",
    ["Viridis", "Cividis", "Blues", "YlOrRd", "RdBu", "Rainbow"],
    key="heat_scale",
)
fig_scale = heatmap_chart(grid, x_label="Year", y_label="Continent", color_scale=scale_sel,
                          title=f"Same data, {scale_sel} scale", height=380)
st.plotly_chart(fig_scale, use_container_width=True)

warning_box(
    "Rainbow scales look lively but are perceptually uneven: some hue steps look like big "
    "jumps, others vanish. They also fail for colour-blind readers. Viridis and Cividis were "
    "designed to be even and colour-blind safe."
)

# ── 4.3 Correlation matrix ───────────────────────────────────────────────────
st.header("4.3  Correlation Matrix")

st.markdown(
    "A classic heatmap: the pairwise correlations between the penguin measurements. Here a "
    "diverging scale fixed to [-1, 1] is the right choice, because zero is meaningful."
)

corr = drop_incomplete(penguins, PENGUIN_MEASURES)[PENGUIN_MEASURES].corr().rename(
    index=LABELS, columns=LABELS,
)
fig_corr = px.imshow(corr, text_auto=".2f", color_continuous_scale="RdBu_r",
                     zmin=-1, zmax=1, aspect="auto")
apply_common_layout(fig_corr, title="Correlation between penguin measurements", height=480)
st.plotly_chart(fig_corr, use_container_width=True)

code_example("""
corr = penguins[["bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g"]].corr()
fig = px.imshow(corr, text_auto=".2f", color_continuous_scale="RdBu_r", zmin=-1, zmax=1)
""")

# ── 4.4 Cross-tab of survey answers ──────────────────────────────────────────
st.header("4.4  Cross-Tabulating the Survey")

normalise = st.checkbox("Show row percentages instead of counts", key="heat_norm")
xtab = pd.crosstab(survey["role"], survey["primary_tool"],
                   normalize="index" if normalise else False)
if normalise:
    xtab = xtab * 100

fig_x = heatmap_chart(xtab, x_label=LABELS["primary_tool"], y_label=LABELS["role"],
                      color_scale="Blues", annotate=True,
                      value_format=".0f", height=400,
                      title="Primary tool by role" + (" (% of role)" if normalise else " (respondents)"))
st.plotly_chart(fig_x, use_container_width=True)

sat = survey.groupby(["age_group", "primary_tool"], observed=False)["hours_per_week"].mean().unstack()
fig_sat = heatmap_chart(sat.round(1), x_label=LABELS["primary_tool"], y_label=LABELS["age_group"],
                        color_scale="YlOrRd", annotate=True, height=400,
                        title="Mean hours per week charting")
st.plotly_chart(fig_sat, use_container_width=True)

st.caption("Blank tiles are combinations with no respondents -- a missing value, not a zero.")

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Which colour scale suits a correlation matrix?",
    ["A sequential scale from white to dark blue",
     "A diverging scale centred on zero",
     "A rainbow scale",
     "Any scale, as long as there is a legend"],
    correct_idx=1,
    explanation="Correlations run from -1 to 1 with a meaningful middle at 0. A diverging "
                "scale gives each direction its own hue.",
    key="ch4_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Summarise to one value per cell, then pivot long data wide for the tile grid.",
    "Sequential scales for low-to-high values, diverging scales for values with a meaningful centre.",
    "Annotate cells when exact values matter; colour alone is read only approximately.",
    "Avoid rainbow scales: uneven and unfriendly to colour-blind readers.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 3: Bar & Dot Charts",
    prev_page="03_Bar_and_Dot_Charts.py",
    next_label="Ch 5: Histograms, Density & Ridgelines",
    next_page="05_Histograms_and_Density.py",
)
