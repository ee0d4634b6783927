from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from workshop.stats_helpers import augment_model, fit_by_group, fit_ols, glance_model, tidy_model


@pytest.fixture
def linear() -> pd.DataFrame:
    rng = np.random.default_rng(3)
    x = np.arange(40, dtype=float)
    return pd.DataFrame({
        "x": x,
        "y": 2.0 + 0.5 * x + rng.normal(0, 0.1, len(x)),
        "g": np.where(x < 20, "low", "high"),
    })


def test_tidy_model_one_row_per_term(linear) -> None:
    tidy = tidy_model(fit_ols(linear, "y ~ x"))
    assert list(tidy.columns) == [
        "term", "estimate", "std_error", "statistic", "p_value", "conf_low", "conf_high",
    ]
    assert tidy["term"].tolist() == ["Intercept", "x"]
    assert tidy.loc[1, "estimate"] == pytest.approx(0.5, abs=0.01)
    assert (tidy["conf_low"] < tidy["estimate"]).all()
    assert (tidy["estimate"] < tidy["conf_high"]).all()


def test_tidy_model_wider_interval_at_higher_confidence(linear) -> None:
    results = fit_ols(linear, "y ~ x")
    narrow = tidy_model(results, conf_level=0.80)
    wide = tidy_model(results, conf_level=0.99)
    assert ((wide["conf_high"] - wide["conf_low"]) > (narrow["conf_high"] - narrow["conf_low"])).all()


def test_categorical_terms_expand_against_baseline(linear) -> None:
    tidy = tidy_model(fit_ols(linear, "y ~ x + g"))
    assert tidy["term"].tolist() == ["Intercept", "g[T.low]", "x"]


def test_glance_model_single_row(linear) -> None:
    glance = glance_model(fit_ols(linear, "y ~ x"))
    assert len(glance) == 1
    assert glance.loc[0, "nobs"] == 40
    assert glance.loc[0, "r_squared"] > 0.99
    assert glance.loc[0, "df_resid"] == 38


def test_missing_rows_dropped_before_fit(linear) -> None:
    # Arrange
    holey = linear.copy()
    holey.loc[[0, 5, 9], "y"] = np.nan

    # Act
    results = fit_ols(holey, "y ~ x")
    aug = augment_model(results, holey)

    # Assert
    assert glance_model(results).loc[0, "nobs"] == 37
    assert len(aug) == 37
    assert {".fitted", ".resid"} <= set(aug.columns)
    assert np.allclose(aug["y"], aug[".fitted"] + aug[".resid"])


def test_fit_by_group_stacks_tidy_tables(linear) -> None:
    out = fit_by_group(linear, "y ~ x", by="g")
    assert list(out.columns)[0] == "g"
    assert len(out) == 4
    assert set(out["g"]) == {"low", "high"}
    slopes = out[out["term"] == "x"]["estimate"]
    assert np.allclose(slopes, 0.5, atol=0.02)
