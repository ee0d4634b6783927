"""Shared constants: palettes, column labels, dataset metadata, chapter list."""

SPECIES_COLORS = {
    "Adelie": "#FF8C00",
    "Chinstrap": "#A034F0",
    "Gentoo": "#159090",
}

SPECIES_LIST = list(SPECIES_COLORS.keys())
ISLAND_LIST = ["Biscoe", "Dream", "Torgersen"]
SEX_LIST = ["female", "male"]

CONTINENT_COLORS = {
    "Africa": "#E63946",
    "Americas": "#F4A261",
    "Asia": "#2A9D8F",
    "Europe": "#264653",
    "Oceania": "#7209B7",
}

CONTINENT_LIST = list(CONTINENT_COLORS.keys())

TICKER_COLORS = {
    "ACME": "#1B4F72",
    "GLBX": "#C0392B",
    "INIT": "#27AE60",
    "UMBR": "#8E44AD",
}

PENGUIN_MEASURES = ["bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g"]

AGE_GROUP_ORDER = ["18-24", "25-34", "35-44", "45-54", "55+"]
SATISFACTION_LEVELS = [1, 2, 3, 4, 5]

LABELS = {
    "species": "Species",
    "island": "Island",
    "sex": "Sex",
    "bill_length_mm": "Bill length (mm)",
    "bill_depth_mm": "Bill depth (mm)",
    "flipper_length_mm": "Flipper length (mm)",
    "body_mass_g": "Body mass (g)",
    "country": "Country",
    "continent": "Continent",
    "year": "Year",
    "lifeExp": "Life expectancy (years)",
    "pop": "Population",
    "gdpPercap": "GDP per capita (US$, inflation-adjusted)",
    "age_group": "Age group",
    "role": "Role",
    "primary_tool": "Primary tool",
    "years_experience": "Years of experience",
    "hours_per_week": "Hours charting per week",
    "satisfaction": "Satisfaction (1-5)",
    "region": "Region",
    "date": "Date",
    "ticker": "Ticker",
    "close": "Closing price (US$)",
    "close_index": "Closing price (first month = 100)",
    "sector": "Sector",
}

# Gapminder survey years, every five years from 1952 to 2007
GAPMINDER_YEARS = list(range(1952, 2008, 5))

PART_TITLES = {
    "I": "Getting Started",
    "II": "The Chart Gallery",
    "III": "Models, Themes & Layout",
}

CHAPTERS = {
    1: ("Loading Tabular Data", "I", "01_Loading_Tabular_Data.py"),
    2: ("The Grammar of Graphics", "I", "02_Grammar_of_Graphics.py"),
    3: ("Bar & Dot Charts", "II", "03_Bar_and_Dot_Charts.py"),
    4: ("Heatmaps", "II", "04_Heatmaps.py"),
    5: ("Histograms, Density & Ridgelines", "II", "05_Histograms_and_Density.py"),
    6: ("Box & Violin Plots", "II", "06_Box_Plots.py"),
    7: ("Scatter & Bubble Charts", "II", "07_Scatter_and_Bubble.py"),
    8: ("Line Charts", "II", "08_Line_Charts.py"),
    9: ("Visualizing Regression", "III", "09_Visualizing_Regression.py"),
    10: ("Custom Themes", "III", "10_Custom_Themes.py"),
    11: ("Arranging & Exporting", "III", "11_Arranging_and_Exporting.py"),
    12: ("Maps", "III", "12_Maps.py"),
}
