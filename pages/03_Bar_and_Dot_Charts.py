"""Chapter 3: Bar & Dot Charts -- Counts, stacked vs dodged bars, Cleveland dots, dumbbells."""
import streamlit as st
import plotly.express as px

from workshop.data_loader import load_penguins, load_gapminder, load_survey, sidebar_filters, summarise_by
from workshop.plotting import bar_chart, dot_chart, dumbbell_chart, apply_common_layout
from workshop.constants import CONTINENT_COLORS, CONTINENT_LIST, SPECIES_COLORS, LABELS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(3, "Bar & Dot Charts", part="II")
st.markdown(
    "Bars are the workhorse for amounts: how many, how much, per category. They are also "
    "easy to get subtly wrong. This chapter covers counting bars, the stacked-versus-dodged "
    "decision, and the **dot plot** -- the bar chart's leaner cousin that often does the "
    "same job with less ink."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = load_penguins()
fpen = sidebar_filters(penguins)
gapminder = load_gapminder()
survey = load_survey()

# ── 3.1 Counting ─────────────────────────────────────────────────────────────
st.header("3.1  Counting Things")

concept_box(
    "Two Routes to a Count",
    "Either let the chart do the counting (a <i>statistic</i>: <code>px.histogram</code> on a "
    "categorical column counts rows), or count first and hand the chart a small summary "
    "table (<code>px.bar</code> with an explicit y). The second route is more typing but "
    "the numbers are right there in a DataFrame you can check."
)

tool_counts = survey.groupby("primary_tool").size().reset_index(name="respondents")
tool_order = st.radio("Order bars by", ["count", "alphabet"], horizontal=True, key="bar_order")
tool_counts = tool_counts.sort_values("respondents" if tool_order == "count" else "primary_tool",
                                      ascending=tool_order != "count")

fig_tools = bar_chart(tool_counts, x="primary_tool", y="respondents",
                      title="Survey: primary charting tool")
fig_tools.update_xaxes(categoryorder="array", categoryarray=tool_counts["primary_tool"].tolist())
fig_tools.update_traces(marker_color="#1B4F72", text=tool_counts["respondents"], textposition="outside")
st.plotly_chart(fig_tools, use_container_width=True)

code_example("""
tool_counts = survey.groupby("primary_tool").size().reset_index(name="respondents")
fig = px.bar(tool_counts, x="primary_tool", y="respondents", text="respondents")

# or let Plotly count the rows itself
fig = px.histogram(survey, x="primary_tool")
""")

insight_box(
    "Ordering bars by count makes the ranking readable at a glance. Alphabetical order is "
    "only useful when readers need to *look up* a category."
)

# ── 3.2 Stacked vs dodged ────────────────────────────────────────────────────
st.header("3.2  Stacked, Dodged, or Filled?")

st.markdown(
    "With two categorical variables -- penguins by island *and* species -- the bars have "
    "to share space somehow."
)

island_species = fpen.groupby(["island", "species"], observed=True).size().reset_index(name="n")
mode_sel = st.radio("Bar mode", ["group (dodged)", "stack", "fill (proportions)"],
                    horizontal=True, key="bar_mode")

if len(island_species) > 0:
    if mode_sel.startswith("fill"):
        island_species["share"] = island_species["n"] / island_species.groupby("island", observed=True)["n"].transform("sum")
        fig_is = bar_chart(island_species, x="island", y="share", color="species", barmode="stack",
                           color_map=SPECIES_COLORS, labels={"share": "Share of island's penguins"},
                           title="Penguins per island (proportions)")
        fig_is.update_yaxes(tickformat=".0%")
    else:
        fig_is = bar_chart(island_species, x="island", y="n", color="species",
                           barmode=mode_sel.split()[0], color_map=SPECIES_COLORS,
                           labels={"n": "Penguins"}, title="Penguins per island")
    st.plotly_chart(fig_is, use_container_width=True)
else:
    st.info("No penguins match the sidebar filters.")

code_example("""
counts = penguins.groupby(["island", "species"], observed=True).size().reset_index(name="n")
px.bar(counts, x="island", y="n", color="species", barmode="group")   # side by side
px.bar(counts, x="island", y="n", color="species", barmode="stack")   # on top of each other
""")

warning_box(
    "In a stacked bar only the bottom segment shares a common baseline. Comparing the "
    "middle segments across bars means comparing lengths that start at different heights -- "
    "something people are bad at. Dodge when the within-group comparison matters."
)

# ── 3.3 Summaries as bars ────────────────────────────────────────────────────
st.header("3.3  Bars for Summaries (and Their Limits)")

mass = summarise_by(fpen.dropna(subset=["body_mass_g"]), "species", "body_mass_g",
                    stats=("mean", "std", "count"))
if len(mass) > 0:
    fig_mass = px.bar(mass, x="species", y="body_mass_g_mean", error_y="body_mass_g_std",
                      color="species", color_discrete_map=SPECIES_COLORS,
                      labels={"body_mass_g_mean": "Mean body mass (g)", "species": "Species"})
    apply_common_layout(fig_mass, title="Mean body mass (+/- 1 SD)", height=420)
    st.plotly_chart(fig_mass, use_container_width=True)

st.markdown(
    "A bar for a mean hides the spread behind a solid block of ink that suggests every value "
    "sits between zero and the top. Chapter 6 shows box plots, which do this job better."
)

# ── 3.4 Cleveland dot plots ──────────────────────────────────────────────────
st.header("3.4  Cleveland Dot Plots")

concept_box(
    "Dots Instead of Bars",
    "A dot plot puts a single point at each value, with categories sorted. It needs no zero "
    "baseline, so the axis can zoom in on the range where the differences are. With many "
    "categories it is far less cluttered than a forest of bars."
)

continent_sel = st.selectbox("Continent", CONTINENT_LIST, index=CONTINENT_LIST.index("Americas"),
                             key="dot_continent")
year_2007 = gapminder[(gapminder["year"] == 2007) & (gapminder["continent"] == continent_sel)]

fig_dot = dot_chart(year_2007, category="country", value="lifeExp",
                    title=f"Life expectancy in 2007: {continent_sel}",
                    height=max(400, 18 * len(year_2007)))
fig_dot.update_traces(marker_color=CONTINENT_COLORS[continent_sel])
st.plotly_chart(fig_dot, use_container_width=True)

code_example("""
data = gapminder.query("year == 2007 and continent == 'Americas'").sort_values("lifeExp")
fig = px.scatter(data, x="lifeExp", y="country")
fig.update_yaxes(categoryorder="array", categoryarray=data["country"].tolist())
""")

# ── 3.5 Dumbbells ────────────────────────────────────────────────────────────
st.header("3.5  Dumbbell Charts: Two Dots and a Line")

st.markdown(
    "Join two dots per category and you have a **dumbbell**: a before-and-after chart that "
    "shows both levels and the size of the change."
)

span = gapminder[(gapminder["continent"] == continent_sel) & gapminder["year"].isin([1952, 2007])]
wide = span.pivot(index="country", columns="year", values="lifeExp").reset_index()
wide.columns = ["country", "y1952", "y2007"]

fig_db = dumbbell_chart(wide, category="country", start="y1952", end="y2007",
                        start_label="1952", end_label="2007",
                        title=f"Life expectancy, 1952 vs 2007: {continent_sel}",
                        height=max(400, 18 * len(wide)))
fig_db.update_xaxes(title=LABELS["lifeExp"])
st.plotly_chart(fig_db, use_container_width=True)

biggest = (wide["y2007"] - wide["y1952"]).idxmax()
insight_box(
    f"The longest bar belongs to {wide.loc[biggest, 'country']}: "
    f"+{wide.loc[biggest, 'y2007'] - wide.loc[biggest, 'y1952']:.1f} years over 55 years."
)

# ── 3.6 Horizontal bars ──────────────────────────────────────────────────────
st.header("3.6  Long Labels? Go Horizontal")

role_tool = survey.groupby(["role", "primary_tool"]).size().reset_index(name="n")
fig_h = bar_chart(role_tool, x="n", y="role", color="primary_tool", barmode="stack",
                  orientation="h", labels={"n": "Respondents"}, title="Tools by role")
st.plotly_chart(fig_h, use_container_width=True)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Why can a dot plot's value axis start somewhere other than zero, while a bar chart's should not?",
    [
        "Dot plots are always log-scaled",
        "A bar's length encodes the value, so truncating the axis distorts it; a dot only encodes position",
        "Plotly does not allow it for bars",
        "Dots are smaller",
    ],
    correct_idx=1,
    explanation="Bars are read by length from the baseline. Cut the baseline and the lengths lie.",
    key="ch3_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Count first into a small table, then draw: the numbers stay checkable.",
    "Dodge to compare within groups, stack to show totals, fill to show proportions.",
    "Sort categories by value unless readers need to look something up.",
    "Dot plots and dumbbells show amounts and changes with less ink than bars.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 2: The Grammar of Graphics",
    prev_page="02_Grammar_of_Graphics.py",
    next_label="Ch 4: Heatmaps",
    next_page="04_Heatmaps.py",
)
