"""Cached dataset loading plus the filter / summarise / join helpers used in the chapters."""
import logging
import os

import pandas as pd
import plotly.express as px
import streamlit as st
from palmerpenguins import load_penguins as _load_palmer_penguins

from workshop import config
from workshop.constants import AGE_GROUP_ORDER, ISLAND_LIST, SATISFACTION_LEVELS, SEX_LIST, SPECIES_LIST

logger = logging.getLogger(__name__)

DATA_DIR = config.DATA_DIR


def read_table(name, **kwargs):
    """Read ``<DATA_DIR>/<name>.csv``. A missing file raises FileNotFoundError."""
    path = os.path.join(DATA_DIR, f"{name}.csv")
    df = pd.read_csv(path, **kwargs)
    logger.info("Loaded %s: %d rows x %d columns", path, len(df), df.shape[1])
    return df


@st.cache_data
def load_penguins():
    """Palmer penguins (344 birds) with species, island and sex as categoricals."""
    df = _load_palmer_penguins()
    df["species"] = pd.Categorical(df["species"], categories=SPECIES_LIST)
    df["island"] = pd.Categorical(df["island"], categories=ISLAND_LIST)
    df["sex"] = pd.Categorical(df["sex"], categories=SEX_LIST)
    logger.info("Loaded penguins: %d rows", len(df))
    return df


@st.cache_data
def load_gapminder():
    """Gapminder country-year panel bundled with Plotly (142 countries x 12 years)."""
    df = px.data.gapminder()
    logger.info("Loaded gapminder: %d rows", len(df))
    return df


@st.cache_data
def load_survey():
    """Workshop survey responses with ordered age groups and satisfaction scores."""
    df = read_table("survey")
    df["age_group"] = pd.Categorical(df["age_group"], categories=AGE_GROUP_ORDER, ordered=True)
    df["satisfaction"] = pd.Categorical(df["satisfaction"], categories=SATISFACTION_LEVELS, ordered=True)
    return df


@st.cache_data
def load_stocks():
    """Month-end closing prices, sorted by ticker then date."""
    df = read_table("stocks", parse_dates=["date"])
    return df.sort_values(["ticker", "date"]).reset_index(drop=True)


@st.cache_data
def load_companies():
    """Ticker metadata: company name and sector."""
    return read_table("companies")


def drop_incomplete(df, columns=None):
    """Drop rows with a missing value in any of ``columns`` (all columns by default)."""
    return df.dropna(subset=columns).reset_index(drop=True)


def summarise_by(df, by, value, stats=("mean", "count")):
    """Group ``df`` by ``by`` and summarise ``value``; one row per group.

    Output columns are the group keys followed by ``<value>_<stat>`` for each stat.
    Empty categories are left out.
    """
    out = df.groupby(by, observed=True)[value].agg(list(stats))
    out.columns = [f"{value}_{stat}" for stat in out.columns]
    return out.reset_index()


def latest_year(df, year_col="year"):
    """Rows belonging to the most recent year in a panel."""
    return df[df[year_col] == df[year_col].max()].reset_index(drop=True)


def join_stocks_companies(stocks, companies):
    """Attach company name and sector to every price row (left join on ticker)."""
    return stocks.merge(companies, on="ticker", how="left", validate="many_to_one")


def index_to_first(df, value, by, order):
    """Add ``<value>_index``: ``value`` rescaled so each group starts at 100."""
    out = df.sort_values([by, order]).copy()
    first = out.groupby(by)[value].transform("first")
    out[f"{value}_index"] = out[value] / first * 100
    return out.reset_index(drop=True)


def sidebar_filters(df):
    """Render sidebar species and island filters; return the filtered penguins."""
    st.sidebar.header("Filters")
    if "selected_species" not in st.session_state:
        st.session_state.selected_species = SPECIES_LIST.copy()
    species = st.sidebar.multiselect(
        "Species", SPECIES_LIST,
        default=st.session_state.selected_species,
        key="species_filter",
    )
    st.session_state.selected_species = species

    if "selected_islands" not in st.session_state:
        st.session_state.selected_islands = ISLAND_LIST.copy()
    islands = st.sidebar.multiselect(
        "Islands", ISLAND_LIST,
        default=st.session_state.selected_islands,
        key="island_filter",
    )
    st.session_state.selected_islands = islands

    mask = df["species"].isin(species) & df["island"].isin(islands)
    return df[mask].copy()
