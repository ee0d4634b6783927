"""Chapter 6: Box & Violin Plots -- Five-number summaries, jittered points, violins."""
import streamlit as st
import plotly.express as px

from workshop.data_loader import load_penguins, load_survey, sidebar_filters, drop_incomplete
from workshop.plotting import box_chart, violin_chart, apply_common_layout
from workshop.constants import LABELS, PENGUIN_MEASURES, SPECIES_COLORS, AGE_GROUP_ORDER
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(6, "Box & Violin Plots", part="II")
st.markdown(
    "Histograms show one distribution in detail. When we need to compare *several* "
    "distributions side by side, box plots compress each one into a compact glyph, and "
    "violins add back some of the shape the box throws away."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = load_penguins()
fpen = sidebar_filters(penguins)
survey = load_survey()

# ── 6.1 Anatomy ──────────────────────────────────────────────────────────────
st.header("6.1  Anatomy of a Box Plot")

concept_box(
    "Five Numbers in One Glyph",
    "The box runs from the first quartile (Q1) to the third (Q3), so it holds the middle half "
    "of the data. The line inside is the median. Whiskers reach to the most extreme points "
    "within 1.5 x IQR of the box; anything further out is drawn as an individual point."
)

measure_sel = st.selectbox("Measure", PENGUIN_MEASURES, index=3,
                           format_func=lambda c: LABELS[c], key="box_measure")
box_data = drop_incomplete(fpen, [measure_sel])

if len(box_data) > 0:
    fig_box = box_chart(box_data, x="species", y=measure_sel, color_map=SPECIES_COLORS,
                        title=f"{LABELS[measure_sel]} by species")
    st.plotly_chart(fig_box, use_container_width=True)

    five = (
        box_data.groupby("species", observed=True)[measure_sel]
        .describe()[["min", "25%", "50%", "75%", "max", "count"]]
        .rename(columns={"25%": "Q1", "50%": "median", "75%": "Q3"})
    )
    st.dataframe(five.round(1), use_container_width=True)
else:
    st.info("No penguins match the sidebar filters.")

code_example("""
fig = px.box(penguins, x="species", y="body_mass_g", color="species")
""")

# ── 6.2 Show the points ──────────────────────────────────────────────────────
st.header("6.2  Show the Data, Too")

st.markdown(
    "A box summarises, and summaries can hide things: a tiny sample, a gap, two clusters. "
    "With a few hundred points there is no reason not to show them all, jittered sideways "
    "so they don't pile on top of each other."
)

show_points = st.checkbox("Overlay jittered points", value=True, key="box_points")
split_sex = st.checkbox("Split by sex", key="box_sex")

if len(box_data) > 0:
    plot_data = drop_incomplete(box_data, ["sex"]) if split_sex else box_data
    fig_pts = px.box(plot_data, x="species", y=measure_sel,
                     color="sex" if split_sex else "species",
                     color_discrete_map=None if split_sex else SPECIES_COLORS,
                     points="all" if show_points else "outliers",
                     labels=LABELS)
    if show_points:
        fig_pts.update_traces(jitter=0.4, pointpos=0, marker=dict(size=4, opacity=0.5))
    apply_common_layout(fig_pts, title="Box plus points", height=500)
    st.plotly_chart(fig_pts, use_container_width=True)

code_example("""
fig = px.box(penguins, x="species", y="body_mass_g", color="sex", points="all")
fig.update_traces(jitter=0.4, pointpos=0)
""")

insight_box(
    "Split by sex and every species turns out to have two overlapping humps. The single box "
    "per species was averaging over a difference of roughly 500-700 g between males and females."
)

# ── 6.3 Violins ──────────────────────────────────────────────────────────────
st.header("6.3  Violin Plots")

concept_box(
    "Density, Mirrored",
    "A violin is a density curve (Chapter 5) drawn symmetrically around a centre line. It "
    "shows the full shape, bumps and all, which a box cannot. An inner box keeps the "
    "quartiles visible."
)

inner_box = st.checkbox("Inner box", value=True, key="violin_box")
if len(box_data) > 0:
    fig_v = violin_chart(box_data, x="species", y=measure_sel, box=inner_box,
                         color_map=SPECIES_COLORS, title=f"{LABELS[measure_sel]}: violins")
    st.plotly_chart(fig_v, use_container_width=True)

warning_box(
    "Violins smooth the data, so they can suggest values that never occurred -- the tails "
    "extend past the minimum and maximum. With small groups (fewer than ~20) stick to points."
)

# ── 6.4 Survey: ordered categories ───────────────────────────────────────────
st.header("6.4  Ordered Categories on the Axis")

st.markdown(
    "Age groups have a natural order. Declaring them as an *ordered categorical* keeps "
    "`55+` last instead of wherever the alphabet puts it."
)

fig_age = px.box(survey, x="age_group", y="hours_per_week", points="all",
                 category_orders={"age_group": AGE_GROUP_ORDER}, labels=LABELS)
fig_age.update_traces(marker_color="#1B4F72")
apply_common_layout(fig_age, title="Hours per week charting, by age group", height=450)
st.plotly_chart(fig_age, use_container_width=True)

summary = survey.groupby("age_group", observed=False)["hours_per_week"].agg(["count", "median"])
st.dataframe(summary.round(1).T, use_container_width=True)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "What fraction of the data lies inside the box of a box plot?",
    ["25%", "50%", "75%", "95%"],
    correct_idx=1,
    explanation="From Q1 to Q3: the middle half.",
    key="ch6_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Box plots give a compact five-number summary that is easy to compare across groups.",
    "With small or moderate data, overlay the jittered points.",
    "Violins show shape, including multiple modes; an inner box keeps the quartiles.",
    "Use ordered categoricals (or `category_orders`) to control axis order.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 5: Histograms, Density & Ridgelines",
    prev_page="05_Histograms_and_Density.py",
    next_label="Ch 7: Scatter & Bubble Charts",
    next_page="07_Scatter_and_Bubble.py",
)
