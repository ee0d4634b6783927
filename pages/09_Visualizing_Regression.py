"""Chapter 9: Visualizing Regression -- Fitting models, tidy tables, coefficient and residual plots."""
import streamlit as st
import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from workshop.data_loader import load_penguins, load_gapminder, drop_incomplete
from workshop.stats_helpers import fit_ols, tidy_model, glance_model, augment_model, fit_by_group
from workshop.plotting import coefficient_chart, scatter_chart, apply_common_layout
from workshop.constants import CONTINENT_COLORS, SPECIES_COLORS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(9, "Visualizing Regression", part="III")
st.markdown(
    "A fitted model is another dataset waiting to be plotted. The trick is getting the model "
    "output out of its printed summary and into a DataFrame -- one row per coefficient, or one "
    "row per observation -- so the same charting tools apply."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = drop_incomplete(load_penguins(), ["body_mass_g", "flipper_length_mm", "bill_length_mm",
                                             "bill_depth_mm", "sex"])
gapminder = load_gapminder()

# ── 9.1 Fit ──────────────────────────────────────────────────────────────────
st.header("9.1  Fitting a Model")

concept_box(
    "Formulas",
    "statsmodels accepts R-style formulas: <code>body_mass_g ~ flipper_length_mm + species</code> "
    "reads 'body mass explained by flipper length plus a separate offset per species'. "
    "Categorical columns are expanded into indicator terms automatically; the first level "
    "(Adelie) becomes the baseline."
)

FORMULAS = {
    "Flipper length only": "body_mass_g ~ flipper_length_mm",
    "+ species": "body_mass_g ~ flipper_length_mm + species",
    "+ species + sex": "body_mass_g ~ flipper_length_mm + species + sex",
    "All measurements + species + sex": "body_mass_g ~ flipper_length_mm + bill_length_mm + bill_depth_mm + species + sex",
}
model_sel = st.selectbox("Model", list(FORMULAS), index=2, key="reg_model")
formula = FORMULAS[model_sel]
st.code(formula, language="text")

results = fit_ols(penguins, formula)

with st.expander("The printed summary (hard to plot)"):
    st.text(results.summary().as_text())

# ── 9.2 Tidy ─────────────────────────────────────────────────────────────────
st.header("9.2  Tidy, Glance, Augment")

st.markdown(
    "Three reshapes cover almost everything:\n"
    "- **tidy**: one row per term -- estimate, standard error, statistic, p-value, confidence interval.\n"
    "- **glance**: one row per model -- R-squared, AIC, number of observations.\n"
    "- **augment**: one row per observation -- the data plus fitted values and residuals."
)

conf_level = st.slider("Confidence level", 0.80, 0.99, 0.95, step=0.01, key="reg_conf")
tidy = tidy_model(results, conf_level=conf_level)
st.markdown("**tidy**")
st.dataframe(tidy.round(3), use_container_width=True, hide_index=True)
st.markdown("**glance**")
st.dataframe(glance_model(results).round(3), use_container_width=True, hide_index=True)

code_example("""
import statsmodels.formula.api as smf

results = smf.ols("body_mass_g ~ flipper_length_mm + species + sex", data=penguins).fit()
ci = results.conf_int(alpha=0.05)
tidy = pd.DataFrame({
    "term": results.params.index,
    "estimate": results.params.values,
    "std_error": results.bse.values,
    "p_value": results.pvalues.values,
    "conf_low": ci[0].values,
    "conf_high": ci[1].values,
})
""")

# ── 9.3 Coefficient plot ─────────────────────────────────────────────────────
st.header("9.3  Coefficient Plots")

st.markdown(
    "Once coefficients are rows in a table, a **dot-and-whisker** chart is just a scatter with "
    "horizontal error bars. A dashed line at zero shows at a glance which intervals exclude 'no effect'."
)

fig_coef = coefficient_chart(tidy, title=f"Coefficients with {conf_level:.0%} intervals")
st.plotly_chart(fig_coef, use_container_width=True)

warning_box(
    "Coefficients on different scales don't compare. The flipper coefficient is grams *per "
    "millimetre*; the sex coefficient is grams for the whole male-vs-female difference. A short "
    "whisker near zero is not necessarily a small effect."
)

# ── 9.4 Model comparison ─────────────────────────────────────────────────────
st.header("9.4  Comparing Models")

glances = []
tidies = []
for label, f in FORMULAS.items():
    r = fit_ols(penguins, f)
    glances.append(glance_model(r).assign(model=label))
    tidies.append(tidy_model(r).assign(model=label))

glance_all = pd.concat(glances, ignore_index=True)
fig_r2 = px.bar(glance_all, x="adj_r_squared", y="model", orientation="h", text_auto=".3f",
                labels={"adj_r_squared": "Adjusted R-squared", "model": ""})
fig_r2.update_traces(marker_color="#1B4F72")
apply_common_layout(fig_r2, title="Fit of each model", height=350)
st.plotly_chart(fig_r2, use_container_width=True)

tidy_all = pd.concat(tidies, ignore_index=True)
flipper = tidy_all[tidy_all["term"] == "flipper_length_mm"]
fig_fl = coefficient_chart(flipper.assign(term=flipper["model"]), drop_intercept=False,
                           title="Flipper-length coefficient across models (g per mm)", height=350)
st.plotly_chart(fig_fl, use_container_width=True)

insight_box(
    "The flipper coefficient shrinks as species and sex enter the model. Part of what looked "
    "like 'longer flippers, heavier bird' was really 'Gentoos have long flippers *and* are heavy'."
)

# ── 9.5 Augment: fitted vs actual, residuals ─────────────────────────────────
st.header("9.5  Looking at Residuals")

aug = augment_model(results, penguins)
col1, col2 = st.columns(2)
with col1:
    fig_fit = px.scatter(aug, x=".fitted", y="body_mass_g", color="species",
                         color_discrete_map=SPECIES_COLORS,
                         labels={".fitted": "Fitted body mass (g)", "body_mass_g": "Observed body mass (g)"})
    lo, hi = aug["body_mass_g"].min(), aug["body_mass_g"].max()
    fig_fit.add_trace(go.Scatter(x=[lo, hi], y=[lo, hi], mode="lines", name="perfect fit",
                                 line=dict(color="#888888", dash="dash")))
    apply_common_layout(fig_fit, title="Observed vs fitted", height=420)
    st.plotly_chart(fig_fit, use_container_width=True)
with col2:
    fig_res = px.scatter(aug, x=".fitted", y=".resid", color="species",
                         color_discrete_map=SPECIES_COLORS,
                         labels={".fitted": "Fitted body mass (g)", ".resid": "Residual (g)"})
    fig_res.add_hline(y=0, line_dash="dash", line_color="#888888")
    apply_common_layout(fig_res, title="Residuals vs fitted", height=420)
    st.plotly_chart(fig_res, use_container_width=True)

st.caption(
    f"Residual standard deviation: {np.sqrt(results.scale):.0f} g across {int(results.nobs)} penguins."
)

# ── 9.6 One model per group ──────────────────────────────────────────────────
st.header("9.6  One Model per Group")

st.markdown(
    "Fit the same formula within each continent -- life expectancy against log GDP per capita "
    "in 2007 -- and stack the tidy tables. Now a coefficient chart compares *groups*."
)

gap07 = gapminder[gapminder["year"] == 2007]
per_continent = fit_by_group(gap07, "lifeExp ~ np.log10(gdpPercap)", by="continent")
slopes = per_continent[per_continent["term"] != "Intercept"]
fig_grp = coefficient_chart(slopes.assign(term=slopes["continent"]), color="continent",
                            title="Years of life expectancy per tenfold rise in GDP per capita, 2007")
fig_grp.for_each_trace(lambda t: t.update(marker_color=CONTINENT_COLORS.get(t.name)))
st.plotly_chart(fig_grp, use_container_width=True)

fig_lines = scatter_chart(gap07, x="gdpPercap", y="lifeExp", color="continent",
                          trendline="ols", color_map=CONTINENT_COLORS,
                          title="The fits behind the coefficients")
fig_lines.update_xaxes(type="log")
st.plotly_chart(fig_lines, use_container_width=True)

st.dataframe(per_continent.round(3), use_container_width=True, hide_index=True)

insight_box(
    "Oceania has two countries. Its interval is either enormous or missing entirely -- with "
    "two points a line fits perfectly and there are no residual degrees of freedom left."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "Which reshaped output gives one row per observation with fitted values and residuals?",
    ["tidy", "glance", "augment", "summary"],
    correct_idx=2,
    key="ch9_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Turn model output into DataFrames: tidy (per term), glance (per model), augment (per row).",
    "Coefficient plots are scatter plots with error bars and a zero reference line.",
    "Residual plots reveal what the model misses.",
    "Fitting one model per group and stacking the tidy tables makes groups comparable.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 8: Line Charts",
    prev_page="08_Line_Charts.py",
    next_label="Ch 10: Custom Themes",
    next_page="10_Custom_Themes.py",
)
