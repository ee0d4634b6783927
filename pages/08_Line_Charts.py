"""Chapter 8: Line Charts -- Closing prices over time, indexing to a common start, facets."""
import streamlit as st
import plotly.express as px

from workshop.data_loader import (
    load_stocks, load_companies, load_gapminder, join_stocks_companies, index_to_first,
)
from workshop.plotting import line_chart, apply_common_layout
from workshop.constants import CONTINENT_COLORS, TICKER_COLORS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(8, "Line Charts", part="II")
st.markdown(
    "When the x axis is time, connecting the points tells the reader that the values in "
    "between exist too -- that this is one thing changing, not a set of separate categories. "
    "That is what a line is for. This chapter draws two years of month-end closing prices."
)

# ── Load data ────────────────────────────────────────────────────────────────
stocks = join_stocks_companies(load_stocks(), load_companies())
gapminder = load_gapminder()

# ── 8.1 Raw prices ───────────────────────────────────────────────────────────
st.header("8.1  Closing Prices")

tickers = sorted(stocks["ticker"].unique())
ticker_sel = st.multiselect("Tickers", tickers, default=tickers, key="line_tickers")
show_markers = st.checkbox("Show a marker per month", key="line_markers")

sel = stocks[stocks["ticker"].isin(ticker_sel)]
if len(sel) > 0:
    fig_raw = line_chart(sel, x="date", y="close", color="ticker", markers=show_markers,
                         color_map=TICKER_COLORS, title="Month-end closing price")
    st.plotly_chart(fig_raw, use_container_width=True)
else:
    st.info("Select at least one ticker.")

code_example("""
stocks = pd.read_csv("data/stocks.csv", parse_dates=["date"])
fig = px.line(stocks, x="date", y="close", color="ticker")
""")

warning_box(
    "Dates must be real datetimes, not strings. Read the CSV with `parse_dates=[\"date\"]`; "
    "otherwise the axis is categorical, gaps between months are ignored, and unsorted rows "
    "draw a zigzag."
)

# ── 8.2 Indexing ─────────────────────────────────────────────────────────────
st.header("8.2  Comparing Growth: Index to 100")

concept_box(
    "Same Start, Fair Race",
    "Raw prices mix two things: how big the number is and how fast it changes. A $200 stock "
    "and a $30 stock on one axis make the cheaper one look flat. Dividing each series by its "
    "first value (x 100) puts every line at 100 on day one, so the chart shows <b>relative</b> "
    "growth only."
)

indexed = index_to_first(sel, "close", by="ticker", order="date")
if len(indexed) > 0:
    fig_idx = line_chart(indexed, x="date", y="close_index", color="ticker",
                         color_map=TICKER_COLORS, title="Closing price, first month = 100")
    fig_idx.add_hline(y=100, line_dash="dot", line_color="#888888")
    st.plotly_chart(fig_idx, use_container_width=True)

    final = indexed.groupby("ticker").tail(1).set_index("ticker")["close_index"].sort_values()
    st.dataframe(final.round(1).rename("index at last month").to_frame().T, use_container_width=True)

code_example("""
stocks = stocks.sort_values(["ticker", "date"])
first = stocks.groupby("ticker")["close"].transform("first")
stocks["close_index"] = stocks["close"] / first * 100
""")

log_y = st.checkbox("Log scale", key="line_log")
if len(indexed) > 0 and log_y:
    fig_log = line_chart(indexed, x="date", y="close_index", color="ticker",
                         color_map=TICKER_COLORS, title="Indexed price, log scale")
    fig_log.update_yaxes(type="log")
    st.plotly_chart(fig_log, use_container_width=True)
    st.caption("On a log axis equal vertical distances mean equal percentage changes.")

# ── 8.3 Facets ───────────────────────────────────────────────────────────────
st.header("8.3  Small Multiples by Sector")

st.markdown(
    "The join from Chapter 1 gave every row a sector. Faceting by sector puts each sector in "
    "its own panel with a shared y axis, so both within- and across-panel comparisons work."
)

if len(indexed) > 0:
    fig_fac = line_chart(indexed, x="date", y="close_index", color="ticker",
                         facet_col="sector", color_map=TICKER_COLORS,
                         title="Indexed price by sector", height=420)
    fig_fac.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))
    st.plotly_chart(fig_fac, use_container_width=True)

code_example("""
joined = stocks.merge(companies, on="ticker")
fig = px.line(joined, x="date", y="close_index", color="ticker", facet_col="sector")
fig.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))  # "sector=Tech" -> "Tech"
""")

# ── 8.4 Many lines ───────────────────────────────────────────────────────────
st.header("8.4  Many Lines: Highlight, Don't Rainbow")

st.markdown(
    "With 142 countries a line each, colour stops working. Grey everything out and "
    "highlight the few lines the story is about."
)

highlight = st.multiselect(
    "Highlight countries", sorted(gapminder["country"].unique()),
    default=["Rwanda", "Botswana", "China", "Korea, Rep."], key="line_highlight",
)
fig_many = px.line(gapminder, x="year", y="lifeExp", line_group="country",
                   labels={"lifeExp": "Life expectancy (years)", "year": "Year"})
fig_many.update_traces(line=dict(color="rgba(150,150,150,0.25)", width=1), showlegend=False,
                       hoverinfo="skip")
for country in highlight:
    sub = gapminder[gapminder["country"] == country]
    fig_many.add_scatter(x=sub["year"], y=sub["lifeExp"], mode="lines+markers", name=country,
                         line=dict(width=3,
                                   color=CONTINENT_COLORS.get(sub["continent"].iloc[0])))
apply_common_layout(fig_many, title="Life expectancy, every country", height=520)
st.plotly_chart(fig_many, use_container_width=True)

insight_box(
    "Rwanda's line drops off a cliff in 1992 -- the genocide -- and Botswana's sags through "
    "the 1990s with the HIV epidemic. Among 142 grey lines, colour finds them instantly."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Why index prices to 100 at the first date?",
    ["To remove missing months", "To compare relative growth regardless of price level",
     "To make the axis start at zero", "Plotly requires it for multiple lines"],
    correct_idx=1,
    key="ch8_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Use lines when the x axis is continuous time; parse dates as datetimes and sort.",
    "Index series to a common start to compare growth rather than levels.",
    "Log axes show percentage changes as equal distances.",
    "With many series, grey out the background and highlight the story.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 7: Scatter & Bubble Charts",
    prev_page="07_Scatter_and_Bubble.py",
    next_label="Ch 9: Visualizing Regression",
    next_page="09_Visualizing_Regression.py",
)
