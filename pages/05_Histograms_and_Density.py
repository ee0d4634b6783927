"""Chapter 5: Histograms, Density & Ridgelines -- Bins, kernel density, stacked distributions."""
import streamlit as st
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from workshop.data_loader import load_penguins, load_gapminder, sidebar_filters, drop_incomplete
from workshop.plotting import (
    histogram_chart, density_chart, ridgeline_chart, kde_curve, apply_common_layout,
)
from workshop.constants import (
    CONTINENT_COLORS, CONTINENT_LIST, GAPMINDER_YEARS, LABELS, PENGUIN_MEASURES, SPECIES_COLORS,
)
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(5, "Histograms, Density & Ridgelines", part="II")
st.markdown(
    "Bars and dots show one number per category. To see how *all* the values of a variable "
    "are spread out, we need a distribution chart. Histograms count values in bins, density "
    "plots smooth those counts into a curve, and ridgelines stack many densities so we can "
    "compare dozens of groups at once."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = load_penguins()
fpen = sidebar_filters(penguins)
gapminder = load_gapminder()

# ── 5.1 Histograms ───────────────────────────────────────────────────────────
st.header("5.1  Histograms and the Binning Problem")

concept_box(
    "A Histogram Is a Statistic Plus a Geometry",
    "The statistic chops the x range into equal-width <b>bins</b> and counts the rows in "
    "each. The geometry draws one bar per bin. Change the bins and you change the picture, "
    "even though the data hasn't moved."
)

col_a, col_b = st.columns(2)
with col_a:
    measure_sel = st.selectbox("Measure", PENGUIN_MEASURES, index=2,
                               format_func=lambda c: LABELS[c], key="hist_measure")
with col_b:
    bin_mode = st.radio("Bins by", ["count", "width"], horizontal=True, key="hist_bin_mode")

values = fpen[measure_sel].dropna()
if bin_mode == "count":
    nbins = st.slider("Number of bins", 3, 100, 30, key="hist_nbins")
    bin_width = None
else:
    nbins = None
    default_width = {"bill_length_mm": 1.0, "bill_depth_mm": 0.5,
                     "flipper_length_mm": 3.0, "body_mass_g": 200.0}[measure_sel]
    bin_width = st.number_input("Bin width", min_value=default_width / 10,
                                value=default_width, step=default_width / 2, key="hist_width")

if len(values) > 0:
    fig_hist = histogram_chart(fpen, x=measure_sel, nbins=nbins, bin_width=bin_width,
                               title=f"{LABELS[measure_sel]}: all selected penguins")
    fig_hist.update_traces(marker_color="#1B4F72", marker_line_color="white", marker_line_width=1)
    st.plotly_chart(fig_hist, use_container_width=True)

    n = len(values)
    iqr = values.quantile(0.75) - values.quantile(0.25)
    sturges = int(np.ceil(np.log2(n) + 1))
    fd_width = 2 * iqr / n ** (1 / 3)
    col1, col2 = st.columns(2)
    col1.metric("Sturges' rule", f"{sturges} bins")
    col2.metric("Freedman-Diaconis width", f"{fd_width:.2f}")
else:
    st.info("No penguins match the sidebar filters.")

code_example("""
fig = px.histogram(penguins, x="flipper_length_mm", nbins=30)

# or fix the bin width instead of the count
fig.update_traces(xbins=dict(size=3))
""")

warning_box(
    "`nbins` in Plotly is a *maximum*: Plotly rounds to a 'nice' bin width, so you may get "
    "fewer bins than you asked for. Set `xbins.size` when the width needs to be exact."
)

# ── 5.2 Overlapping groups ───────────────────────────────────────────────────
st.header("5.2  Comparing Groups")

overlay_mode = st.radio("Layout", ["overlay", "facet"], horizontal=True, key="hist_overlay")
if len(values) > 0:
    if overlay_mode == "overlay":
        fig_grp = histogram_chart(fpen, x=measure_sel, color="species", nbins=40,
                                  color_map=SPECIES_COLORS,
                                  title=f"{LABELS[measure_sel]} by species")
    else:
        fig_grp = px.histogram(fpen, x=measure_sel, color="species", facet_row="species",
                               nbins=40, color_discrete_map=SPECIES_COLORS,
                               labels=LABELS)
        apply_common_layout(fig_grp, title=f"{LABELS[measure_sel]} by species", height=600)
    st.plotly_chart(fig_grp, use_container_width=True)

insight_box(
    "The single histogram of flipper length looked lumpy with two humps. Split by species "
    "and the humps resolve into groups: Adelie and Chinstrap overlap, Gentoo stands apart."
)

# ── 5.3 Density ──────────────────────────────────────────────────────────────
st.header("5.3  Density Plots")

concept_box(
    "Kernel Density Estimation",
    "Instead of bins, place a small bell curve on every observation and add them up. The "
    "<b>bandwidth</b> sets how wide each bell is: narrow bells give a wiggly curve that chases "
    "noise, wide bells smooth away real structure. The area under the curve is 1, so groups "
    "of different sizes can be compared directly."
)

bw_factor = st.slider("Bandwidth multiplier", 0.2, 3.0, 1.0, step=0.1, key="dens_bw")
dens_data = drop_incomplete(fpen, [measure_sel])

if dens_data[measure_sel].nunique() > 1:
    fig_dens = density_chart(dens_data, x=measure_sel, group="species", bw_factor=bw_factor,
                             color_map=SPECIES_COLORS,
                             title=f"Density of {LABELS[measure_sel].lower()} (bandwidth x{bw_factor:.1f})")
    st.plotly_chart(fig_dens, use_container_width=True)

    # histogram + density on the same density scale
    grid, density = kde_curve(dens_data[measure_sel], bw_factor=bw_factor)
    fig_both = go.Figure()
    fig_both.add_trace(go.Histogram(x=dens_data[measure_sel], histnorm="probability density",
                                    nbinsx=30, marker_color="#AEB6BF", name="Histogram"))
    fig_both.add_trace(go.Scatter(x=grid, y=density, mode="lines", name="Density",
                                  line=dict(color="#C0392B", width=3)))
    fig_both.update_layout(xaxis_title=LABELS[measure_sel], yaxis_title="Density")
    apply_common_layout(fig_both, title="Histogram and density on one scale", height=420)
    st.plotly_chart(fig_both, use_container_width=True)

code_example("""
from scipy import stats

kde = stats.gaussian_kde(values)
kde.set_bandwidth(kde.factor * 1.0)     # scale Scott's rule up or down
grid = np.linspace(values.min(), values.max(), 200)
fig = go.Figure(go.Scatter(x=grid, y=kde(grid), fill="tozeroy"))
""")

# ── 5.4 Ridgelines ───────────────────────────────────────────────────────────
st.header("5.4  Ridgeline Plots")

st.markdown(
    "With two or three groups, overlapping densities work. With twelve they turn to soup. "
    "A **ridgeline** gives each group its own baseline, stacked vertically with a little "
    "overlap, like a mountain range seen from the side."
)

ridge_by = st.radio("One ridge per", ["year", "continent"], horizontal=True, key="ridge_by")
ridge_var = st.selectbox("Variable", ["lifeExp", "gdpPercap"], format_func=lambda c: LABELS[c],
                         key="ridge_var")
overlap = st.slider("Overlap", 1.0, 4.0, 2.5, step=0.5, key="ridge_overlap")

ridge_data = gapminder.copy()
if ridge_var == "gdpPercap":
    ridge_data["log10_gdpPercap"] = np.log10(ridge_data["gdpPercap"])
    ridge_var = "log10_gdpPercap"

if ridge_by == "year":
    fig_ridge = ridgeline_chart(ridge_data, x=ridge_var, group="year", order=GAPMINDER_YEARS,
                                overlap=overlap, labels={"log10_gdpPercap": "log10 GDP per capita"},
                                title="Distribution across countries, by year", height=650)
else:
    fig_ridge = ridgeline_chart(ridge_data[ridge_data["year"] == 2007], x=ridge_var,
                                group="continent", order=CONTINENT_LIST, overlap=overlap,
                                color_map=CONTINENT_COLORS,
                                labels={"log10_gdpPercap": "log10 GDP per capita"},
                                title="Distribution across countries in 2007, by continent",
                                height=500)
st.plotly_chart(fig_ridge, use_container_width=True)

code_example("""
fig = go.Figure()
for year in sorted(gapminder["year"].unique()):
    fig.add_trace(go.Violin(x=gapminder.loc[gapminder["year"] == year, "lifeExp"],
                            name=str(year)))
fig.update_traces(orientation="h", side="positive", width=2.5, points=False)
fig.update_layout(showlegend=False, xaxis_zeroline=False)
""")

insight_box(
    "Life expectancy in 1952 has two peaks -- a cluster of poor countries around 40 and a "
    "cluster of rich ones around 65. Watch the lower peak drift right and flatten year by "
    "year: the world converging, unevenly."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "What happens to a kernel density curve as the bandwidth increases?",
    ["It becomes wigglier", "It becomes smoother", "Its area grows", "Nothing"],
    correct_idx=1,
    explanation="Wider kernels average over more neighbours. The area stays at 1.",
    key="ch5_quiz1",
)

quiz(
    "When does a ridgeline beat overlapping density curves?",
    ["With two groups", "When exact values matter", "With many groups", "Never"],
    correct_idx=2,
    explanation="Giving each group its own baseline keeps many distributions readable.",
    key="ch5_quiz2",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "A histogram's shape depends on its bins: try several counts or widths before concluding anything.",
    "Density curves smooth the histogram; the bandwidth plays the role of bin width.",
    "Density is normalised to area 1, so groups of different sizes compare fairly.",
    "Ridgelines stack many distributions for comparison across groups or time.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 4: Heatmaps",
    prev_page="04_Heatmaps.py",
    next_label="Ch 6: Box & Violin Plots",
    next_page="06_Box_Plots.py",
)
