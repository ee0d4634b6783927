"""Chapter 10: Custom Themes -- Built-in templates, theme elements, building and registering a theme."""
import streamlit as st
import plotly.express as px
import plotly.io as pio

from workshop.data_loader import load_penguins, drop_incomplete
from workshop.plotting import axis_labels
from workshop.themes import BUILTIN_THEMES, LEGEND_POSITIONS, make_theme, register_theme, register_workshop_themes
from workshop.constants import SPECIES_COLORS
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(10, "Custom Themes", part="III")
st.markdown(
    "Everything so far has been about the data layers. The **theme** is the rest: fonts, "
    "background, gridlines, axis lines, legend placement, the default palette. Getting it "
    "right is what makes a chart look like it belongs in *your* report rather than in a "
    "library's documentation."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = drop_incomplete(load_penguins(), ["flipper_length_mm", "body_mass_g"])
workshop_themes = register_workshop_themes()


def demo_chart(template, color_map=None, title=None):
    fig = px.scatter(penguins, x="flipper_length_mm", y="body_mass_g", color="species",
                     color_discrete_map=color_map, labels=axis_labels(), title=title,
                     template=template)
    fig.update_layout(height=420, title_x=0.5)
    return fig


# ── 10.1 Built-in templates ──────────────────────────────────────────────────
st.header("10.1  Built-In Templates")

concept_box(
    "Templates Are Themes",
    "Plotly calls its themes <b>templates</b>. A template is a partial figure -- layout "
    "defaults plus per-trace-type defaults -- that is merged underneath every figure that "
    "names it. Only what the figure itself leaves unset comes from the template."
)

col_a, col_b = st.columns(2)
with col_a:
    left_theme = st.selectbox("Left", BUILTIN_THEMES, index=BUILTIN_THEMES.index("ggplot2"), key="theme_left")
with col_b:
    right_theme = st.selectbox("Right", BUILTIN_THEMES, index=BUILTIN_THEMES.index("simple_white"), key="theme_right")

col1, col2 = st.columns(2)
with col1:
    st.plotly_chart(demo_chart(left_theme, title=left_theme), use_container_width=True,
                    key="theme_left_chart")
with col2:
    st.plotly_chart(demo_chart(right_theme, title=right_theme), use_container_width=True,
                    key="theme_right_chart")

code_example("""
import plotly.io as pio

fig = px.scatter(penguins, x="flipper_length_mm", y="body_mass_g", color="species",
                 template="ggplot2")
pio.templates.default = "simple_white"     # or change the default for every figure
""")

insight_box(
    "The palette changes too. A template carries a default `colorway`, used whenever the "
    "figure doesn't supply its own colours. Pass `color_discrete_map` and the data colours "
    "stay fixed no matter which theme is on."
)

# ── 10.2 Element by element ──────────────────────────────────────────────────
st.header("10.2  Tweaking Individual Elements")

st.markdown(
    "Before building a whole theme, it helps to see the individual knobs. Each of these is a "
    "`update_layout` or `update_xaxes` call on an ordinary figure."
)

col_a, col_b, col_c = st.columns(3)
with col_a:
    font_family = st.selectbox("Font", ["Arial", "Georgia", "Courier New", "Verdana"], key="el_font")
    font_size = st.slider("Font size", 9, 20, 13, key="el_size")
with col_b:
    bg = st.color_picker("Plot background", "#FFFFFF", key="el_bg")
    show_grid = st.checkbox("Gridlines", value=True, key="el_grid")
with col_c:
    legend_pos = st.selectbox("Legend", list(LEGEND_POSITIONS), key="el_legend")
    axis_lines = st.checkbox("Axis lines", value=True, key="el_axes")

fig_el = demo_chart("none", color_map=SPECIES_COLORS, title="Element by element")
fig_el.update_layout(
    font=dict(family=font_family, size=font_size),
    plot_bgcolor=bg,
    legend=LEGEND_POSITIONS[legend_pos],
)
fig_el.update_xaxes(showgrid=show_grid, gridcolor="#E5E5E5", showline=axis_lines, linecolor="#333333")
fig_el.update_yaxes(showgrid=show_grid, gridcolor="#E5E5E5", showline=axis_lines, linecolor="#333333")
st.plotly_chart(fig_el, use_container_width=True)

code_example(f"""
fig.update_layout(
    font=dict(family="{font_family}", size={font_size}),
    plot_bgcolor="{bg}",
    legend={LEGEND_POSITIONS[legend_pos]!r},
)
fig.update_xaxes(showgrid={show_grid}, showline={axis_lines})
fig.update_yaxes(showgrid={show_grid}, showline={axis_lines})
""")

warning_box(
    "Styling figure by figure doesn't scale. Ten charts means ten copies of the same "
    "`update_layout` call, and they drift apart the first time someone edits only one. "
    "Put the styling in a template once."
)

# ── 10.3 Build your own ──────────────────────────────────────────────────────
st.header("10.3  Building a Theme")

st.markdown(
    "The same choices, packaged. `make_theme` takes a handful of high-level options and "
    "returns a `go.layout.Template`; registering it under a name makes it available to every "
    "Plotly call as `template=\"my_theme\"`."
)

my_theme = make_theme(
    font_family=font_family,
    font_size=font_size,
    plot_bgcolor=bg,
    show_grid=show_grid,
    axis_line_color="#333333" if axis_lines else bg,
    legend_position=legend_pos,
)
register_theme("my_theme", my_theme)
st.plotly_chart(demo_chart("my_theme", title="template=\"my_theme\""), use_container_width=True)

code_example("""
import plotly.graph_objects as go
import plotly.io as pio

my_theme = go.layout.Template(layout=go.Layout(
    font=dict(family="Georgia", size=13, color="#2C3E50"),
    plot_bgcolor="white",
    xaxis=dict(showgrid=True, gridcolor="#E5E5E5", showline=True, ticks="outside"),
    yaxis=dict(showgrid=True, gridcolor="#E5E5E5", showline=True, ticks="outside"),
    legend=dict(orientation="h", x=0.5, xanchor="center", y=1.02, yanchor="bottom"),
    colorway=["#1B4F72", "#E67E22", "#27AE60"],
))
pio.templates["my_theme"] = my_theme
fig = px.scatter(..., template="my_theme")
""")

with st.expander("The template as JSON"):
    st.json(my_theme.to_plotly_json())

# ── 10.4 Workshop themes ─────────────────────────────────────────────────────
st.header("10.4  Themes That Ship With This Workshop")

st.markdown(
    f"Three ready-made themes are registered on every page run: "
    f"{', '.join(f'`{name}`' for name in workshop_themes)}."
)

tabs = st.tabs(workshop_themes)
for tab, name in zip(tabs, workshop_themes):
    with tab:
        st.plotly_chart(demo_chart(name, title=name), use_container_width=True)

st.markdown(
    "Templates also combine: `template=\"plotly_white+workshop_minimal\"` layers the second "
    "on top of the first, later entries winning."
)
fig_combo = demo_chart("plotly_dark+workshop_minimal", title="plotly_dark+workshop_minimal")
st.plotly_chart(fig_combo, use_container_width=True)

st.caption(f"Currently registered templates: {len(list(pio.templates))}")

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "A figure sets `plot_bgcolor=\"black\"` and uses a template whose plot background is white. "
    "What colour is the plot background?",
    ["White -- the template wins", "Black -- the figure's own setting wins",
     "Grey -- they are blended", "It raises an error"],
    correct_idx=1,
    explanation="A template only fills in what the figure leaves unset.",
    key="ch10_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "A theme styles everything that isn't data; in Plotly it is a template.",
    "Individual elements can be tweaked with `update_layout` / `update_xaxes`.",
    "Package repeated styling as a template and register it in `plotly.io.templates` once.",
    "Templates combine with `+`, and a figure's own settings always win.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 9: Visualizing Regression",
    prev_page="09_Visualizing_Regression.py",
    next_label="Ch 11: Arranging & Exporting",
    next_page="11_Arranging_and_Exporting.py",
)
