"""Chapter 12: Maps -- Choropleths, proportional symbols, projections."""
import streamlit as st
import numpy as np

from workshop.data_loader import load_gapminder, latest_year
from workshop.plotting import choropleth_map, bubble_map
from workshop.constants import CONTINENT_COLORS, CONTINENT_LIST, GAPMINDER_YEARS, LABELS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

PROJECTIONS = ["natural earth", "equirectangular", "robinson", "mercator", "orthographic"]
MAP_MEASURES = ["lifeExp", "gdpPercap", "pop"]

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(12, "Maps", part="III")
st.markdown(
    "A map is a chart whose x and y are longitude and latitude. Gapminder rows carry an "
    "ISO-3 country code, and Plotly ships the country outlines, so no shapefiles are needed."
)

# ── Load data ────────────────────────────────────────────────────────────────
gapminder = load_gapminder()
latest = latest_year(gapminder)

# ── 12.1 Choropleth ──────────────────────────────────────────────────────────
st.header("12.1  Choropleth Maps")

concept_box(
    "Fill Each Region by a Value",
    "A <b>choropleth</b> colours each country by a number. The <code>locations</code> column "
    "holds ISO-3 codes (<code>iso_alpha</code>); the <code>color</code> column holds the value. "
    "Countries with no row stay blank."
)

col_a, col_b = st.columns(2)
with col_a:
    measure = st.selectbox("Measure", MAP_MEASURES, format_func=lambda c: LABELS[c], key="map_measure")
with col_b:
    projection = st.selectbox("Projection", PROJECTIONS, key="map_projection")

fig_ch = choropleth_map(latest, color=measure, projection=projection,
                        title=f"{LABELS[measure]}, {latest['year'].iloc[0]}")
st.plotly_chart(fig_ch, use_container_width=True)

code_example(f"""
fig = px.choropleth(gapminder.query("year == 2007"), locations="iso_alpha",
                    color="{measure}", hover_name="country",
                    projection="{projection}")
""")

warning_box(
    "Big countries dominate a choropleth. Russia and Canada cover more pixels than all of "
    "Western Europe, so a map of population or total GDP shows land area as much as the "
    "measure. Choropleths work best for rates and averages -- life expectancy, GDP per head."
)

# ── 12.2 Colour scale ────────────────────────────────────────────────────────
st.header("12.2  Colour Scales on Maps")

log_gdp = st.checkbox("Log colour scale for GDP per capita", value=True, key="map_log")
gdp = latest.assign(log_gdp=np.log10(latest["gdpPercap"]).round(2))
if log_gdp:
    fig_gdp = choropleth_map(gdp, color="log_gdp", color_scale="Cividis",
                             labels={"log_gdp": "log10 GDP per capita"},
                             title="GDP per capita (log10), 2007")
else:
    fig_gdp = choropleth_map(gdp, color="gdpPercap", color_scale="Cividis",
                             title="GDP per capita, 2007")
st.plotly_chart(fig_gdp, use_container_width=True)

insight_box(
    "On a linear scale a handful of rich countries take the bright end and everything else is "
    "one colour. Taking logs spreads the middle out -- the same fix as the log axis in Chapter 7."
)

# ── 12.3 Over time ───────────────────────────────────────────────────────────
st.header("12.3  Animating Over Time")

st.markdown(
    "Adding `animation_frame=\"year\"` plays the map through every survey year. Fix "
    "`range_color` so the same colour means the same value in every frame."
)

animate = st.checkbox("Animate 1952-2007", value=False, key="map_animate")
if animate:
    fig_anim = choropleth_map(gapminder, color="lifeExp", animation_frame="year",
                              range_color=[25, 85], title="Life expectancy, 1952-2007")
else:
    year_sel = st.select_slider("Year", options=GAPMINDER_YEARS, value=1952, key="map_year")
    fig_anim = choropleth_map(gapminder[gapminder["year"] == year_sel], color="lifeExp",
                              range_color=[25, 85], title=f"Life expectancy, {year_sel}")
st.plotly_chart(fig_anim, use_container_width=True)

# ── 12.4 Proportional symbols ────────────────────────────────────────────────
st.header("12.4  Proportional Symbol Maps")

st.markdown(
    "For totals like population, put a circle on each country sized by the value. Area now "
    "encodes the number, independent of how much land the country covers."
)

continents = st.multiselect("Continents", CONTINENT_LIST, default=CONTINENT_LIST, key="map_continents")
sym = latest[latest["continent"].isin(continents)]
if len(sym) > 0:
    fig_sym = bubble_map(sym, size="pop", color="continent", projection=projection,
                         color_map=CONTINENT_COLORS, title=f"Population, {latest['year'].iloc[0]}")
    st.plotly_chart(fig_sym, use_container_width=True)
else:
    st.info("Select at least one continent.")

code_example("""
fig = px.scatter_geo(gapminder.query("year == 2007"), locations="iso_alpha",
                     size="pop", color="continent", hover_name="country",
                     projection="natural earth", size_max=45)
""")

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "You want to map total population by country. Which map is least misleading?",
    ["A choropleth of population", "A proportional symbol map of population",
     "A choropleth of land area", "A line chart"],
    correct_idx=1,
    explanation="Choropleths give large countries large areas of colour regardless of the value.",
    key="ch12_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Choropleths fill regions by a value; match rows to shapes with ISO-3 codes.",
    "Map rates and averages with colour, totals with sized symbols.",
    "Projections trade off area, shape and distance; Mercator inflates the poles.",
    "Fix `range_color` when animating so colours stay comparable across frames.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 11: Arranging & Exporting",
    prev_page="11_Arranging_and_Exporting.py",
)
