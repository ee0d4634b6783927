"""Plotting Grammar Workshop -- Main Entry Point."""
import streamlit as st

from workshop.config import configure_logging
from workshop.constants import CHAPTERS, PART_TITLES
from workshop.data_loader import load_gapminder, load_penguins, load_stocks, load_survey

st.set_page_config(
    page_title="Plotting Grammar Workshop",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)
configure_logging()

st.title("Plotting Grammar Workshop")
st.subheader("Building charts one layer at a time, from a blank canvas to a publication-ready figure")

st.markdown("""
Most people learn charting by memorising recipes: *this* function makes a bar chart, *that* one
makes a scatter plot. That works until you want something slightly different, and then you are
stuck searching for a recipe that doesn't exist.

This workshop takes the other route. Every chart is built from the same handful of parts -- **data**,
**aesthetic mappings**, **geometries**, **scales**, **facets** and a **theme** -- and once you can see
those parts you can assemble almost any chart you like. We use Plotly for the drawing: `plotly.express`
for the one-call declarative form and `plotly.graph_objects` when we want to add layers by hand.

### The Datasets

- **Palmer penguins** -- 344 penguins from three islands in the Palmer Archipelago, Antarctica, with
  bill, flipper and body-mass measurements.
- **Gapminder** -- life expectancy, population and GDP per capita for 142 countries, every five
  years from 1952 to 2007.
- **Workshop survey** -- 60 (made-up) responses from people who chart for a living: role, favourite
  tool, hours per week, satisfaction.
- **Stock prices** -- month-end closing prices for four fictional companies over 2023-2024.

### How to Use This Workshop

1. **Read top to bottom.** Each chapter is a narrated script: explanation, code, chart.
2. **Open the code.** Every chart has a "Show Code" box with the exact call that drew it.
3. **Fiddle.** Sliders and dropdowns change the chart in place, so you can see what each parameter does.
4. **Check yourself** with the short quiz at the end of each chapter.

### Chapters
""")

for part, part_title in PART_TITLES.items():
    st.markdown(f"**Part {part}: {part_title}**")
    for number, (title, chapter_part, _) in CHAPTERS.items():
        if chapter_part == part:
            st.markdown(f"- Chapter {number}: {title}")

st.divider()
st.markdown("**Pick a chapter from the sidebar and let's start drawing.**")

# Dataset preview
st.subheader("Dataset Preview")
penguins = load_penguins()
gapminder = load_gapminder()
survey = load_survey()
stocks = load_stocks()

tab_p, tab_g, tab_s, tab_k = st.tabs(["Penguins", "Gapminder", "Survey", "Stocks"])
with tab_p:
    st.dataframe(penguins.head(10), use_container_width=True)
with tab_g:
    st.dataframe(gapminder.head(10), use_container_width=True)
with tab_s:
    st.dataframe(survey.head(10), use_container_width=True)
with tab_k:
    st.dataframe(stocks.head(10), use_container_width=True)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Penguins", f"{len(penguins):,}")
col2.metric("Countries", gapminder["country"].nunique())
col3.metric("Survey responses", len(survey))
col4.metric("Price rows", len(stocks))
