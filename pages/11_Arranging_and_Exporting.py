"""Chapter 11: Arranging & Exporting -- Subplot grids, shared axes, saving PNG files."""
import os

import streamlit as st
import plotly.express as px
import plotly.graph_objects as go

from workshop.config import EXPORT_DIR
from workshop.data_loader import load_penguins, drop_incomplete
from workshop.plotting import (
    arrange_figures, multi_subplot, apply_common_layout, png_bytes, save_png, axis_labels,
)
from workshop.constants import LABELS, SPECIES_COLORS
from workshop.themes import register_workshop_themes
from workshop.ui_components import (
    chapter_header, concept_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(11, "Arranging & Exporting", part="III")
st.markdown(
    "Reports rarely show one chart alone. This chapter puts several charts into one figure "
    "-- a dashboard panel, a multi-part journal figure -- and then writes the result to a PNG "
    "file at a chosen size and resolution."
)

# ── Load data ────────────────────────────────────────────────────────────────
penguins = drop_incomplete(load_penguins(), ["flipper_length_mm", "body_mass_g", "bill_length_mm",
                                             "bill_depth_mm"])
register_workshop_themes()

# ── 11.1 Facets vs subplots ──────────────────────────────────────────────────
st.header("11.1  Facets Are Not Subplots")

concept_box(
    "Same Chart, Many Panels vs Different Charts, One Figure",
    "Facets (Chapter 2) repeat <i>one</i> chart for each level of a variable. Arranging is "
    "different: the panels can be <i>different</i> chart types -- a bar chart next to a "
    "scatter next to a box plot. In Plotly that is <code>make_subplots</code>: an empty grid "
    "of axes that traces are added to one cell at a time."
)

counts = penguins.groupby("species", observed=True).size().reset_index(name="n")
panels = {
    "A. Penguins per species": px.bar(counts, x="species", y="n", color="species",
                                      color_discrete_map=SPECIES_COLORS),
    "B. Flipper length": px.histogram(penguins, x="flipper_length_mm", color="species",
                                      color_discrete_map=SPECIES_COLORS, nbins=30),
    "C. Flipper vs body mass": px.scatter(penguins, x="flipper_length_mm", y="body_mass_g",
                                          color="species", color_discrete_map=SPECIES_COLORS),
    "D. Bill depth": px.box(penguins, x="species", y="bill_depth_mm", color="species",
                            color_discrete_map=SPECIES_COLORS),
}

layout_sel = st.radio("Layout", ["2 x 2", "1 x 4", "4 x 1"], horizontal=True, key="arr_layout")
rows, cols = {"2 x 2": (2, 2), "1 x 4": (1, 4), "4 x 1": (4, 1)}[layout_sel]

fig_grid = arrange_figures(list(panels.values()), rows=rows, cols=cols, titles=list(panels),
                           title="Palmer penguins at a glance", height=320 * rows)
fig_grid.update_layout(barmode="overlay")
st.plotly_chart(fig_grid, use_container_width=True)

code_example("""
from plotly.subplots import make_subplots

grid = make_subplots(rows=2, cols=2, subplot_titles=["A", "B", "C", "D"])
for i, fig in enumerate([bar_fig, hist_fig, scatter_fig, box_fig]):
    row, col = divmod(i, 2)
    for trace in fig.data:
        grid.add_trace(trace, row=row + 1, col=col + 1)
""")

insight_box(
    "Each species appears in all four panels but only once in the legend. Copying traces "
    "would otherwise repeat every legend entry four times -- the arrangement helper hides "
    "the duplicates."
)

# ── 11.2 Shared axes ─────────────────────────────────────────────────────────
st.header("11.2  Sharing Axes")

st.markdown(
    "When panels show the same variable, share the axis. Zooming one panel then zooms its "
    "neighbours, and readers can compare positions across panels without re-reading tick labels."
)

share_y = st.checkbox("Share the y axis", value=True, key="arr_share")
measures = ["bill_length_mm", "bill_depth_mm", "flipper_length_mm"]
fig_shared = multi_subplot(1, len(measures), subplot_titles=[LABELS[m] for m in measures],
                           shared_yaxes=share_y)
for i, m in enumerate(measures, start=1):
    for species, sub in penguins.groupby("species", observed=True):
        fig_shared.add_trace(
            go.Scatter(x=sub[m], y=sub["body_mass_g"], mode="markers", name=species,
                       marker=dict(color=SPECIES_COLORS[species], size=5, opacity=0.6),
                       legendgroup=species, showlegend=i == 1),
            row=1, col=i,
        )
fig_shared.update_yaxes(title_text=LABELS["body_mass_g"], row=1, col=1)
apply_common_layout(fig_shared, title="Body mass against three measurements", height=420)
st.plotly_chart(fig_shared, use_container_width=True)

warning_box(
    "Sharing an axis across panels with very different ranges squashes the small ones flat. "
    "Share when the panels measure the same thing on the same scale; otherwise let each "
    "panel have its own axis and say so in the caption."
)

# ── 11.3 Export ──────────────────────────────────────────────────────────────
st.header("11.3  Exporting to PNG")

concept_box(
    "Size and Resolution Are Separate",
    "<code>width</code> and <code>height</code> set the layout size in CSS pixels -- how big "
    "the fonts and markers are <i>relative</i> to the canvas. <code>scale</code> multiplies the "
    "pixel count without changing the layout. A 800 x 500 figure at scale 3 is a 2400 x 1500 "
    "image that looks exactly like the 800 x 500 one, only sharper. Static export uses the "
    "<code>kaleido</code> package."
)

col_a, col_b, col_c = st.columns(3)
with col_a:
    width = st.number_input("Width (px)", 300, 3000, 1000, step=50, key="exp_w")
with col_b:
    height = st.number_input("Height (px)", 200, 3000, 700, step=50, key="exp_h")
with col_c:
    scale = st.select_slider("Scale", options=[1, 2, 3, 4], value=2, key="exp_scale")

template_sel = st.selectbox("Theme for export", ["plotly_white", "workshop_minimal",
                                                  "workshop_economist", "simple_white"],
                            key="exp_theme")
filename = st.text_input("File name", "penguins_overview.png", key="exp_name")

export_fig = arrange_figures(list(panels.values()), rows=2, cols=2, titles=list(panels),
                             title="Palmer penguins at a glance")
export_fig.update_layout(template=template_sel, barmode="overlay", width=width, height=height)
st.markdown(f"Output image: **{width * scale} x {height * scale}** pixels.")

if st.button("Render PNG", key="exp_render"):
    data = png_bytes(export_fig, width=width, height=height, scale=scale)
    st.image(data, caption=f"{filename} ({width * scale} x {height * scale})")
    st.download_button("Download PNG", data=data, file_name=filename, mime="image/png",
                       key="exp_download")

if st.button(f"Save to {EXPORT_DIR}", key="exp_save"):
    path = save_png(export_fig, os.path.join(EXPORT_DIR, filename), width=width,
                    height=height, scale=scale)
    st.success(f"Wrote {path}")

code_example("""
fig.write_image("figures/penguins_overview.png", width=1000, height=700, scale=2)
# or keep the bytes in memory
png = fig.to_image(format="png", width=1000, height=700, scale=2)
""")

st.caption(
    "Axis labels in the export come from the same label mapping used everywhere else: "
    f"{len(axis_labels())} columns have display names."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "You export at width=800, height=500, scale=2. What changes compared with scale=1?",
    ["The fonts get twice as big relative to the plot",
     "The image has twice as many pixels in each direction but looks the same",
     "The plot area gets twice as wide",
     "Nothing"],
    correct_idx=1,
    key="ch11_quiz1",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Facets repeat one chart; subplot grids combine different charts.",
    "Copy traces into `make_subplots` cells; hide duplicate legend entries.",
    "Share axes only between panels measuring the same thing.",
    "Export with `write_image`: width/height fix the layout, scale fixes the resolution.",
])

# ── Navigation ───────────────────────────────────────────────────────────────
st.divider()
navigation(
    prev_label="Ch 10: Custom Themes",
    prev_page="10_Custom_Themes.py",
    next_label="Ch 12: Maps",
    next_page="12_Maps.py",
)
