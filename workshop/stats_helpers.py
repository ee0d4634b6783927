"""Regression fitting and tidying: model summaries as data frames."""
import numpy as np
import pandas as pd
import statsmodels.formula.api as smf


def fit_ols(df, formula):
    """Fit an ordinary least squares model from an R-style formula.

    Rows with a missing value in any model variable are dropped before fitting.
    """
    return smf.ols(formula, data=df, missing="drop").fit()


def tidy_model(results, conf_level=0.95):
    """One row per model term: estimate, standard error, t statistic, p-value and CI."""
    ci = results.conf_int(alpha=1 - conf_level)
    return pd.DataFrame({
        "term": results.params.index,
        "estimate": results.params.values,
        "std_error": results.bse.values,
        "statistic": results.tvalues.values,
        "p_value": results.pvalues.values,
        "conf_low": ci[0].values,
        "conf_high": ci[1].values,
    })


def glance_model(results):
    """One-row summary of model fit."""
    return pd.DataFrame([{
        "r_squared": results.rsquared,
        "adj_r_squared": results.rsquared_adj,
        "sigma": np.sqrt(results.scale),
        "statistic": results.fvalue,
        "p_value": results.f_pvalue,
        "df_model": results.df_model,
        "df_resid": results.df_resid,
        "nobs": int(results.nobs),
        "aic": results.aic,
        "bic": results.bic,
    }])


def augment_model(results, df):
    """The rows the model was fitted on, with ``.fitted`` and ``.resid`` appended."""
    out = df.loc[results.fittedvalues.index].copy()
    out[".fitted"] = results.fittedvalues
    out[".resid"] = results.resid
    return out


def fit_by_group(df, formula, by, conf_level=0.95):
    """Fit the same formula within each group and stack the tidy tables."""
    frames = []
    for name, sub in df.groupby(by, observed=True):
        tidy = tidy_model(fit_ols(sub, formula), conf_level=conf_level)
        tidy.insert(0, by, name)
        frames.append(tidy)
    return pd.concat(frames, ignore_index=True)
