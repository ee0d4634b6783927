"""Chapter 7: Scatter & Bubble Charts -- Relationships, trend lines, Simpson's paradox, bubbles."""
import streamlit as st
import numpy as np

from workshop.data_loader import load_penguins, load_gapminder, sidebar_filters, drop_incomplete, latest_year
from workshop.plotting import scatter_chart, bubble_chart
from workshop.constants import CONTINENT_COLORS, GAPMINDER_YEARS, LABELS, PENGUIN_MEASURES, SPECIES_COLORS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(7, "Scatter & Bubble Charts", part="II")
st.markdown(
    "Scatter plots show how two numeric variables move together. Add a colour for a group, "
    "a size for a third variable, and time as an animation, and one chart carries four or "
    "five variables without getting crowded."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = load_penguins()
fpen = sidebar_filters(penguins)
gapminder = load_gapminder()

# ── 7.1 Scatter and trend ────────────────────────────────────────────────────
st.header("7.1  Two Measures, One Cloud")

col_a, col_b = st.columns(2)
with col_a:
    x_sel = st.selectbox("x", PENGUIN_MEASURES, index=0, format_func=lambda c: LABELS[c], key="sc_x")
with col_b:
    y_sel = st.selectbox("y", [m for m in PENGUIN_MEASURES if m != x_sel], index=0, format_func=lambda c: LABELS[c], key="sc_y")

sc_data = drop_incomplete(fpen, [x_sel, y_sel])
by_species = st.checkbox("Colour by species", value=False, key="sc_species")

if len(sc_data) > 2:
    fig_sc = scatter_chart(sc_data, x=x_sel, y=y_sel,
                           color="species" if by_species else None,
                           color_map=SPECIES_COLORS, trendline="ols",
                           title=f"{LABELS[y_sel]} vs {LABELS[x_sel]}")
    st.plotly_chart(fig_sc, use_container_width=True)

    overall_r = sc_data[[x_sel, y_sel]].corr().iloc[0, 1]
    per_species = (
        sc_data.groupby("species", observed=True)[[x_sel, y_sel]]
        .corr().xs(x_sel, level=1)[y_sel]
        .rename("r")
    )
    col1, col2 = st.columns([1, 2])
    col1.metric("Overall correlation", f"{overall_r:.2f}")
    with col2:
        st.dataframe(per_species.round(2).to_frame().T, use_container_width=True)
else:
    st.info("Not enough penguins match the sidebar filters.")

code_example("""
fig = px.scatter(penguins, x="bill_length_mm", y="bill_depth_mm",
                 color="species", trendline="ols")
""")

insight_box(
    "Bill length vs bill depth is the textbook case of **Simpson's paradox**. Pooled, the "
    "trend slopes *down*: longer bills, shallower bills. Colour by species and every species "
    "slopes *up*. The pooled trend was an artefact of mixing groups with different averages."
)

warning_box(
    "A trend line fitted to everything can point the opposite way from the trend within "
    "every group. Before trusting a pooled fit, check whether a grouping variable is hiding."
)

# ── 7.2 Overplotting ─────────────────────────────────────────────────────────
st.header("7.2  Overplotting")

st.markdown(
    "Penguin measurements are recorded to the millimetre, so many birds share the exact "
    "same coordinates and their points sit on top of each other. Transparency and a little "
    "jitter reveal the pile-ups."
)

opacity = st.slider("Opacity", 0.1, 1.0, 0.5, step=0.1, key="sc_alpha")
jitter = st.slider("Jitter (mm)", 0.0, 2.0, 0.0, step=0.25, key="sc_jitter")

if len(sc_data) > 2:
    jittered = sc_data.copy()
    rng = np.random.default_rng(42)
    jittered["flipper_jit"] = jittered["flipper_length_mm"] + rng.uniform(-jitter, jitter, len(jittered))
    fig_op = scatter_chart(jittered, x="flipper_jit", y="body_mass_g", color="species",
                           color_map=SPECIES_COLORS, opacity=opacity,
                           labels={"flipper_jit": LABELS["flipper_length_mm"]},
                           title="Flipper length vs body mass")
    st.plotly_chart(fig_op, use_container_width=True)

# ── 7.3 Bubbles ──────────────────────────────────────────────────────────────
st.header("7.3  Bubble Charts")

concept_box(
    "Size as a Third Variable",
    "Map a third numeric column to marker <b>area</b> and the scatter becomes a bubble chart. "
    "Plotly scales area, not radius, to the value -- so a country with four times the "
    "population gets a bubble with twice the diameter, which is what the eye reads correctly."
)

year_sel = st.select_slider("Year", options=GAPMINDER_YEARS, value=2007, key="bub_year")
log_x = st.checkbox("Log scale for GDP", value=True, key="bub_log")

year_data = gapminder[gapminder["year"] == year_sel]
fig_bub = bubble_chart(year_data, x="gdpPercap", y="lifeExp", size="pop", color="continent",
                       hover_name="country", log_x=log_x, color_map=CONTINENT_COLORS,
                       title=f"Wealth and health, {year_sel}")
st.plotly_chart(fig_bub, use_container_width=True)

code_example("""
fig = px.scatter(gapminder.query("year == 2007"), x="gdpPercap", y="lifeExp",
                 size="pop", color="continent", hover_name="country",
                 log_x=True, size_max=60)
""")

insight_box(
    "Turn the log scale off and almost every country piles up against the left edge, with a "
    "few oil-rich outliers stretching the axis. GDP is multiplicative -- a log scale spaces "
    "equal *ratios* equally, which is how income differences actually behave."
)

# ── 7.4 Animation ────────────────────────────────────────────────────────────
st.header("7.4  Adding Time: Animation Frames")

st.markdown(
    "Map `year` to `animation_frame` and Plotly adds a play button. Fixing the axis ranges "
    "keeps the frame still so the bubbles, not the axes, do the moving."
)

fig_anim = bubble_chart(gapminder, x="gdpPercap", y="lifeExp", size="pop", color="continent",
                        hover_name="country", log_x=True, size_max=55,
                        animation_frame="year", range_x=[100, 100000], range_y=[25, 90],
                        color_map=CONTINENT_COLORS, title="Wealth and health, 1952-2007",
                        height=600)
st.plotly_chart(fig_anim, use_container_width=True)

latest = latest_year(gapminder)
st.caption(f"{len(latest)} countries in the final frame ({latest['year'].iloc[0]}).")

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Pooled over all penguins, bill depth falls as bill length rises; within each species it rises. "
    "What is this called?",
    ["Overplotting", "Simpson's paradox", "Regression to the mean", "Heteroscedasticity"],
    correct_idx=1,
    key="ch7_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Scatter plots show relationships; a colour aesthetic can reveal group structure the pooled trend hides.",
    "Use transparency and jitter against overplotting.",
    "Bubble charts map a third variable to area; log scales suit multiplicative quantities like income.",
    "`animation_frame` adds time as a fourth dimension -- fix the axis ranges.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 6: Box & Violin Plots",
    prev_page="06_Box_Plots.py",
    next_label="Ch 8: Line Charts",
    next_page="08_Line_Charts.py",
)
