from __future__ import annotations

import pandas as pd
import pytest

from workshop import data_loader
from workshop.data_loader import (
    drop_incomplete,
    index_to_first,
    join_stocks_companies,
    latest_year,
    load_companies,
    load_gapminder,
    load_penguins,
    load_stocks,
    load_survey,
    read_table,
    summarise_by,
)


def test_bundled_datasets_have_documented_shapes() -> None:
    assert load_penguins().shape == (344, 8)
    assert load_gapminder().shape[0] == 1704
    assert load_survey().shape == (60, 8)
    assert load_stocks().shape == (96, 3)
    assert load_companies().shape == (4, 3)


def test_penguin_categoricals_use_fixed_levels() -> None:
    penguins = load_penguins()
    assert list(penguins["species"].cat.categories) == ["Adelie", "Chinstrap", "Gentoo"]
    assert list(penguins["island"].cat.categories) == ["Biscoe", "Dream", "Torgersen"]
    assert penguins["sex"].isna().sum() == 11


def test_survey_orderings() -> None:
    survey = load_survey()
    assert survey["age_group"].cat.ordered
    assert list(survey["satisfaction"].cat.categories) == [1, 2, 3, 4, 5]
    assert survey["respondent_id"].is_unique
    assert survey["role"].value_counts().to_dict() == {
        "Student": 16, "Engineer": 15, "Researcher": 15, "Analyst": 14,
    }


def test_stocks_sorted_with_datetime_dates() -> None:
    stocks = load_stocks()
    assert pd.api.types.is_datetime64_any_dtype(stocks["date"])
    assert stocks.groupby("ticker").size().to_dict() == {"ACME": 24, "GLBX": 24, "INIT": 24, "UMBR": 24}
    assert stocks.equals(stocks.sort_values(["ticker", "date"]).reset_index(drop=True))


def test_drop_incomplete_counts() -> None:
    penguins = load_penguins()
    assert len(drop_incomplete(penguins)) == 333
    assert len(drop_incomplete(penguins, ["flipper_length_mm", "body_mass_g"])) == 342


def test_latest_year_keeps_one_row_per_country() -> None:
    latest = latest_year(load_gapminder())
    assert len(latest) == 142
    assert set(latest["year"]) == {2007}


def test_summarise_by_names_columns_after_value_and_stat() -> None:
    # Arrange
    df = pd.DataFrame({"g": ["a", "a", "b", "b", "b"], "v": [1.0, 3.0, 2.0, 4.0, 6.0]})

    # Act
    out = summarise_by(df, "g", "v", stats=("mean", "count", "max"))

    # Assert
    assert list(out.columns) == ["g", "v_mean", "v_count", "v_max"]
    assert out["v_mean"].tolist() == [2.0, 4.0]
    assert out["v_count"].tolist() == [2, 3]


def test_summarise_by_drops_unobserved_categories() -> None:
    df = pd.DataFrame({
        "g": pd.Categorical(["a", "a"], categories=["a", "b"]),
        "v": [1.0, 2.0],
    })
    assert len(summarise_by(df, "g", "v")) == 1


def test_join_keeps_every_price_row() -> None:
    joined = join_stocks_companies(load_stocks(), load_companies())
    assert len(joined) == 96
    assert {"company", "sector"} <= set(joined.columns)
    assert joined["sector"].notna().all()
    assert (joined["sector"] == "Technology").sum() == 48


def test_join_unknown_ticker_gets_missing_metadata() -> None:
    stocks = pd.DataFrame({"ticker": ["ACME", "ZZZZ"], "close": [1.0, 2.0]})
    companies = pd.DataFrame({"ticker": ["ACME"], "company": ["Acme"], "sector": ["Industrials"]})
    joined = join_stocks_companies(stocks, companies)
    assert len(joined) == 2
    assert joined["sector"].isna().sum() == 1


def test_index_to_first_starts_each_group_at_100() -> None:
    # Arrange: rows deliberately out of order
    df = pd.DataFrame({
        "t": [2, 1, 1, 2, 3],
        "k": ["x", "x", "y", "y", "y"],
        "p": [30.0, 20.0, 5.0, 10.0, 2.5],
    })

    # Act
    out = index_to_first(df, "p", by="k", order="t")

    # Assert
    assert out["p_index"].tolist() == [100.0, 150.0, 100.0, 200.0, 50.0]
    assert out.groupby("k")["p_index"].first().eq(100).all()


def test_read_table_missing_file_raises(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(data_loader, "DATA_DIR", str(tmp_path))
    with pytest.raises(FileNotFoundError):
        read_table("survey")


def test_read_table_reads_from_data_dir(tmp_path, monkeypatch) -> None:
    (tmp_path / "tiny.csv").write_text("a,b\n1,2\n3,4\n")
    monkeypatch.setattr(data_loader, "DATA_DIR", str(tmp_path))
    df = read_table("tiny")
    assert df.shape == (2, 2)
    assert df["b"].sum() == 6
