"""Chapter 1: Loading Tabular Data -- Reading files, filtering, grouping, summarising, joining."""
import streamlit as st
import pandas as pd

from workshop.data_loader import (
    load_penguins, load_gapminder, load_survey, load_stocks, load_companies,
    drop_incomplete, summarise_by, latest_year, join_stocks_companies,
)
from workshop.constants import GAPMINDER_YEARS, LABELS, PENGUIN_MEASURES, SPECIES_LIST
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(1, "Loading Tabular Data", part="I")
st.markdown(
    "Every chart starts life as a table. Before we draw anything we need to get data "
    "into a DataFrame, check that it looks the way we expect, and usually trim or reshape "
    "it a little. This chapter covers the handful of table operations that the rest of the "
    "workshop leans on: **filter**, **group-and-summarise**, and **join**."
)

# ── 1.1 Loading ──────────────────────────────────────────────────────────────
st.header("1.1  Loading the Data")

concept_box(
    "Two Ways In",
    "Some datasets come bundled with a library -- the penguins ship with the "
    "<code>palmerpenguins</code> package and gapminder ships with Plotly. Others are "
    "flat files on disk: the survey and the stock prices are plain CSV files in the "
    "<code>data/</code> folder, read with <code>pd.read_csv</code>."
)

penguins = load_penguins()
gapminder = load_gapminder()
survey = load_survey()
stocks = load_stocks()
companies = load_companies()

shapes = pd.DataFrame({
    "dataset": ["penguins", "gapminder", "survey", "stocks", "companies"],
    "rows": [len(penguins), len(gapminder), len(survey), len(stocks), len(companies)],
    "columns": [penguins.shape[1], gapminder.shape[1], survey.shape[1],
                stocks.shape[1], companies.shape[1]],
})
st.dataframe(shapes, use_container_width=True, hide_index=True)

code_example("""
import pandas as pd
import plotly.express as px
from palmerpenguins import load_penguins

penguins = load_penguins()                 # 344 rows x 8 columns
gapminder = px.data.gapminder()            # 1704 rows x 8 columns
survey = pd.read_csv("data/survey.csv")    # 60 rows x 8 columns
stocks = pd.read_csv("data/stocks.csv", parse_dates=["date"])
""")

dataset_sel = st.selectbox(
    "Peek at a dataset", ["penguins", "gapminder", "survey", "stocks"], key="load_peek",
)
peek = {"penguins": penguins, "gapminder": gapminder, "survey": survey, "stocks": stocks}[dataset_sel]
st.dataframe(peek.head(15), use_container_width=True)

with st.expander("Column types"):
    st.dataframe(peek.dtypes.astype(str).rename("dtype"), use_container_width=True)

# ── 1.2 Missing values ───────────────────────────────────────────────────────
st.header("1.2  Missing Values")

st.markdown(
    "Real data has holes. A handful of penguins were never weighed or sexed. Plotting "
    "libraries mostly skip missing values silently, which is convenient right up until "
    "your counts don't match. It is worth knowing how many rows you lose."
)

missing = penguins.isna().sum().rename("missing").to_frame()
st.dataframe(missing.T, use_container_width=True)

complete = drop_incomplete(penguins)
col1, col2, col3 = st.columns(3)
col1.metric("All penguins", len(penguins))
col2.metric("Complete rows", len(complete))
col3.metric("Dropped", len(penguins) - len(complete))

code_example("""
penguins.isna().sum()
complete = penguins.dropna()    # 333 rows remain
""")

warning_box(
    "Dropping every row with *any* missing value can throw away more than you need. If "
    "your chart only uses flipper length and body mass, drop rows missing *those* columns: "
    "`penguins.dropna(subset=[\"flipper_length_mm\", \"body_mass_g\"])` keeps 342 birds."
)

# ── 1.3 Filtering ────────────────────────────────────────────────────────────
st.header("1.3  Filtering Rows")

st.markdown(
    "Filtering keeps the rows that satisfy a condition. Below, pick a gapminder year and "
    "a minimum life expectancy."
)

col_a, col_b = st.columns(2)
with col_a:
    year_sel = st.select_slider(
        "Year", options=GAPMINDER_YEARS, value=2007, key="load_year",
    )
with col_b:
    min_life = st.slider("Minimum life expectancy", 20, 80, 60, key="load_minlife")

filtered = gapminder[(gapminder["year"] == year_sel) & (gapminder["lifeExp"] >= min_life)]
st.markdown(f"**{len(filtered)}** of {(gapminder['year'] == year_sel).sum()} countries in {year_sel} "
            f"had a life expectancy of at least {min_life} years.")
st.dataframe(filtered.sort_values("lifeExp", ascending=False).head(20),
             use_container_width=True, hide_index=True)

code_example("""
filtered = gapminder[(gapminder["year"] == 2007) & (gapminder["lifeExp"] >= 60)]
# or, equivalently
filtered = gapminder.query("year == 2007 and lifeExp >= 60")
""")

latest = latest_year(gapminder)
insight_box(
    f"Gapminder is a *panel*: every country appears once per survey year. Filtering to "
    f"the latest year ({latest['year'].iloc[0]}) leaves exactly one row per country -- "
    f"{len(latest)} rows. Most one-year charts in this workshop start from that slice."
)

# ── 1.4 Group and summarise ──────────────────────────────────────────────────
st.header("1.4  Group and Summarise")

concept_box(
    "Split, Apply, Combine",
    "Grouping splits a table into pieces (one per species, one per continent), applies a "
    "summary to each piece (mean, count, maximum) and glues the results back into a new, "
    "smaller table with one row per group. Many charts -- bars, dots, heatmaps -- are "
    "drawn from a summary table rather than from the raw rows."
)

col_a, col_b = st.columns(2)
with col_a:
    by_sel = st.multiselect("Group by", ["species", "island", "sex"], default=["species"],
                            key="load_by")
with col_b:
    measure_sel = st.selectbox("Measure", PENGUIN_MEASURES,
                               format_func=lambda c: LABELS.get(c, c), key="load_measure")

if by_sel:
    summary = summarise_by(penguins, by_sel, measure_sel, stats=("mean", "std", "count"))
    st.dataframe(summary.round(1), use_container_width=True, hide_index=True)
    st.caption(f"{len(summary)} groups. Groups with no penguins (e.g. Gentoo on Dream) are left out.")
else:
    st.info("Pick at least one grouping column.")

code_example("""
summary = (
    penguins
    .groupby(["species"], observed=True)["body_mass_g"]
    .agg(["mean", "std", "count"])
    .reset_index()
)
""")

# ── 1.5 Joining ──────────────────────────────────────────────────────────────
st.header("1.5  Joining Tables")

st.markdown(
    "The stock prices only know each company's ticker. The company names and sectors "
    "live in a second, tiny table. A **left join** on `ticker` copies the matching "
    "company details onto every price row."
)

col1, col2 = st.columns([1, 2])
with col1:
    st.dataframe(companies, use_container_width=True, hide_index=True)
joined = join_stocks_companies(stocks, companies)
with col2:
    st.dataframe(joined.head(8), use_container_width=True, hide_index=True)

st.markdown(
    f"Before the join: **{len(stocks)}** rows x {stocks.shape[1]} columns. "
    f"After: **{len(joined)}** rows x {joined.shape[1]} columns."
)

code_example("""
companies = pd.read_csv("data/companies.csv")
joined = stocks.merge(companies, on="ticker", how="left", validate="many_to_one")
""")

insight_box(
    "A left join against a lookup table should never change the row count. If it does, "
    "the lookup has duplicate keys. `validate=\"many_to_one\"` turns that mistake into an "
    "error instead of a silently doubled dataset."
)

# ── 1.6 Survey counts ────────────────────────────────────────────────────────
st.header("1.6  Counting Categories")

tool_counts = survey["primary_tool"].value_counts().rename_axis("primary_tool").reset_index(name="n")
st.dataframe(tool_counts, use_container_width=True, hide_index=True)

code_example("""
survey["primary_tool"].value_counts()
# or as a tidy table, ready for a bar chart
survey.groupby("primary_tool").size().reset_index(name="n")
""")

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "You left-join a 96-row price table onto a 4-row company table by ticker and get "
    "192 rows back. What happened?",
    [
        "The join dropped rows with missing tickers",
        "The company table has a duplicated ticker",
        "Left joins always double the row count",
        "The price table was sorted incorrectly",
    ],
    correct_idx=1,
    explanation="Each price row picks up every matching company row. A duplicate key in the "
                "lookup table multiplies the matches.",
    key="ch1_quiz1",
)

quiz(
    "How many penguin species are in the data?",
    ["2", "3", "4", "5"],
    correct_idx=1,
    explanation=f"{', '.join(SPECIES_LIST)}.",
    key="ch1_quiz2",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Check shape, column types and missing values before drawing anything.",
    "Filter with boolean masks or `query`; drop missing values only in the columns you use.",
    "Group-and-summarise turns raw rows into the small tables most charts are drawn from.",
    "Left joins against lookup tables should preserve the row count -- validate it.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Home",
    prev_page="app.py",
    next_label="Ch 2: The Grammar of Graphics",
    next_page="02_Grammar_of_Graphics.py",
)
