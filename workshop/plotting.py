"""Shared Plotly chart builders, subplot arrangement and PNG export."""
import logging
import os

import numpy as np
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots
from scipy import stats

from workshop.constants import LABELS

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "plotly_white"


def apply_common_layout(fig, title=None, height=500, template=DEFAULT_TEMPLATE):
    """Apply the workshop's common layout settings to a Plotly figure."""
    fig.update_layout(
        template=template,
        height=height,
        title=title,
        title_x=0.5,
        margin=dict(t=60, b=40, l=60, r=40),
    )
    return fig


def axis_labels(labels=None):
    """Column -> display label mapping, caller entries winning over the defaults."""
    lab = {**(labels or {})}
    for k, v in LABELS.items():
        lab.setdefault(k, v)
    return lab


# ── Amounts ──────────────────────────────────────────────────────────────────

def bar_chart(df, x, y, color=None, barmode="group", orientation="v", color_map=None,
              title=None, labels=None, height=500):
    """Bar chart of pre-aggregated values; ``barmode`` is "group", "stack" or "relative"."""
    fig = px.bar(df, x=x, y=y, color=color, barmode=barmode, orientation=orientation,
                 color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


def dot_chart(df, category, value, color=None, color_map=None, title=None, labels=None,
              height=500, ascending=True):
    """Cleveland dot plot: one point per category, categories ordered by value."""
    ordered = df.sort_values(value, ascending=ascending)
    fig = px.scatter(ordered, x=value, y=category, color=color,
                     color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    fig.update_traces(marker=dict(size=10))
    fig.update_yaxes(categoryorder="array", categoryarray=ordered[category].tolist(),
                     showgrid=True, gridcolor="#E5E5E5")
    return apply_common_layout(fig, title, height)


def dumbbell_chart(df, category, start, end, start_label=None, end_label=None,
                   colors=("#A6A6A6", "#1B4F72"), title=None, height=500):
    """Two values per category joined by a segment, ordered by the end value."""
    ordered = df.sort_values(end)
    seg_x, seg_y = [], []
    for _, row in ordered.iterrows():
        seg_x += [row[start], row[end], None]
        seg_y += [row[category], row[category], None]

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=seg_x, y=seg_y, mode="lines",
                             line=dict(color="#CCCCCC", width=3), showlegend=False,
                             hoverinfo="skip"))
    fig.add_trace(go.Scatter(x=ordered[start], y=ordered[category], mode="markers",
                             marker=dict(color=colors[0], size=10),
                             name=start_label or str(start)))
    fig.add_trace(go.Scatter(x=ordered[end], y=ordered[category], mode="markers",
                             marker=dict(color=colors[1], size=10),
                             name=end_label or str(end)))
    return apply_common_layout(fig, title, height)


def heatmap_chart(data, x_label="", y_label="", title=None, height=500,
                  color_scale="Viridis", annotate=False, value_format=".1f"):
    """Create a heatmap from a 2D array or DataFrame (index -> rows, columns -> x)."""
    heatmap = go.Heatmap(
        z=data.values if hasattr(data, "values") else data,
        x=[str(c) for c in data.columns] if hasattr(data, "columns") else None,
        y=[str(i) for i in data.index] if hasattr(data, "index") else None,
        colorscale=color_scale,
    )
    if annotate:
        heatmap.update(texttemplate=f"%{{z:{value_format}}}")
    fig = go.Figure(data=heatmap)
    fig.update_layout(xaxis_title=x_label, yaxis_title=y_label)
    return apply_common_layout(fig, title, height)


# ── Distributions ────────────────────────────────────────────────────────────

def histogram_chart(df, x, color=None, nbins=30, bin_width=None, histnorm=None,
                    color_map=None, title=None, labels=None, height=500):
    """Overlaid histogram; ``bin_width`` overrides ``nbins`` when given."""
    fig = px.histogram(df, x=x, color=color, nbins=nbins, histnorm=histnorm,
                       color_discrete_map=color_map, barmode="overlay", opacity=0.7,
                       labels=axis_labels(labels), title=title)
    if bin_width:
        fig.update_traces(xbins=dict(size=bin_width))
    return apply_common_layout(fig, title, height)


def kde_curve(values, bw_factor=1.0, grid=None, points=200):
    """Gaussian KDE of ``values`` evaluated on ``grid``; returns (grid, density)."""
    values = np.asarray(values, dtype=float)
    values = values[~np.isnan(values)]
    kde = stats.gaussian_kde(values)
    kde.set_bandwidth(kde.factor * bw_factor)
    if grid is None:
        grid = np.linspace(values.min(), values.max(), points)
    return grid, kde(grid)


def density_chart(df, x, group=None, bw_factor=1.0, color_map=None, title=None,
                  labels=None, height=500, points=200):
    """Smoothed density curves, one per group, sharing a common x grid."""
    values = df[x].dropna()
    grid = np.linspace(values.min(), values.max(), points)
    groups = [(None, df)] if group is None else df.groupby(group, observed=True)

    fig = go.Figure()
    for name, sub in groups:
        sub_values = sub[x].dropna()
        # a single distinct value has no spread to smooth
        if sub_values.nunique() < 2:
            continue
        _, density = kde_curve(sub_values, bw_factor=bw_factor, grid=grid)
        fig.add_trace(go.Scatter(
            x=grid, y=density, mode="lines", fill="tozeroy", opacity=0.5,
            name=str(name) if name is not None else x,
            line=dict(color=(color_map or {}).get(name)),
        ))
    lab = axis_labels(labels)
    fig.update_layout(xaxis_title=lab.get(x, x), yaxis_title="Density")
    return apply_common_layout(fig, title, height)


def ridgeline_chart(df, x, group, order=None, color_map=None, title=None, labels=None,
                    height=600, overlap=3):
    """Ridgeline plot: one half-violin per group, stacked from bottom to top."""
    order = order or list(df[group].dropna().unique())
    fig = go.Figure()
    for name in order:
        fig.add_trace(go.Violin(
            x=df.loc[df[group] == name, x], name=str(name),
            line_color=(color_map or {}).get(name),
        ))
    fig.update_traces(orientation="h", side="positive", width=overlap, points=False,
                      meanline_visible=False)
    lab = axis_labels(labels)
    fig.update_layout(xaxis_title=lab.get(x, x), yaxis_title=lab.get(group, group),
                      xaxis_showgrid=False, xaxis_zeroline=False, showlegend=False)
    return apply_common_layout(fig, title, height)


def box_chart(df, x, y, color=None, points=False, color_map=None, title=None,
              labels=None, height=500):
    """Box plot; ``points=True`` overlays every observation as jittered dots."""
    fig = px.box(df, x=x, y=y, color=color or x, points="all" if points else "outliers",
                 color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


def violin_chart(df, x, y, color=None, box=True, color_map=None, title=None,
                 labels=None, height=500):
    """Create a violin plot with an optional inner box."""
    fig = px.violin(df, x=x, y=y, color=color or x, box=box,
                    color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


# ── Relationships & trends ───────────────────────────────────────────────────

def scatter_chart(df, x, y, color=None, trendline=None, trendline_scope="trace",
                  color_map=None, title=None, labels=None, height=500, opacity=0.8):
    """Scatter plot; ``trendline="ols"`` adds a least-squares line per colour group."""
    fig = px.scatter(df, x=x, y=y, color=color, trendline=trendline,
                     trendline_scope=trendline_scope, color_discrete_map=color_map,
                     labels=axis_labels(labels), title=title, opacity=opacity)
    return apply_common_layout(fig, title, height)


def bubble_chart(df, x, y, size, color=None, hover_name=None, log_x=False, size_max=60,
                 animation_frame=None, range_x=None, range_y=None, color_map=None,
                 title=None, labels=None, height=550):
    """Scatter plot with a third variable mapped to marker area."""
    fig = px.scatter(df, x=x, y=y, size=size, color=color, hover_name=hover_name,
                     log_x=log_x, size_max=size_max, animation_frame=animation_frame,
                     range_x=range_x, range_y=range_y, color_discrete_map=color_map,
                     labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


def line_chart(df, x, y, color=None, facet_col=None, facet_col_wrap=0, markers=False,
               color_map=None, title=None, labels=None, height=500):
    """Line chart, optionally faceted into small multiples."""
    fig = px.line(df, x=x, y=y, color=color, facet_col=facet_col,
                  facet_col_wrap=facet_col_wrap, markers=markers,
                  color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


def coefficient_chart(tidy, color=None, drop_intercept=True, title=None, height=450):
    """Dot-and-whisker plot of a tidy coefficient table with a zero reference line."""
    data = tidy
    if drop_intercept:
        data = data[data["term"] != "Intercept"]
    data = data.assign(
        err_plus=data["conf_high"] - data["estimate"],
        err_minus=data["estimate"] - data["conf_low"],
    )
    fig = px.scatter(data, x="estimate", y="term", color=color,
                     error_x="err_plus", error_x_minus="err_minus",
                     labels={"estimate": "Estimate (with confidence interval)", "term": "Term"},
                     title=title)
    fig.update_traces(marker=dict(size=10))
    fig.add_vline(x=0, line_dash="dash", line_color="#888888")
    return apply_common_layout(fig, title, height)


# ── Maps ─────────────────────────────────────────────────────────────────────

def choropleth_map(df, color, locations="iso_alpha", hover_name="country",
                   projection="natural earth", color_scale="Viridis", range_color=None,
                   animation_frame=None, title=None, labels=None, height=550):
    """Countries filled by ``color``, matched on ISO-3 codes."""
    fig = px.choropleth(df, locations=locations, color=color, hover_name=hover_name,
                        projection=projection, color_continuous_scale=color_scale,
                        range_color=range_color, animation_frame=animation_frame,
                        labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


def bubble_map(df, size, color=None, locations="iso_alpha", hover_name="country",
               projection="natural earth", size_max=45, color_map=None, title=None,
               labels=None, height=550):
    """Proportional symbols placed on each country's centroid."""
    fig = px.scatter_geo(df, locations=locations, size=size, color=color,
                         hover_name=hover_name, projection=projection, size_max=size_max,
                         color_discrete_map=color_map, labels=axis_labels(labels), title=title)
    return apply_common_layout(fig, title, height)


# ── Layout & export ──────────────────────────────────────────────────────────

def multi_subplot(rows, cols, subplot_titles=None, shared_xaxes=False, shared_yaxes=False):
    """Create an empty subplot grid."""
    return make_subplots(rows=rows, cols=cols, subplot_titles=subplot_titles,
                         shared_xaxes=shared_xaxes, shared_yaxes=shared_yaxes)


def arrange_figures(figures, rows, cols, titles=None, shared_xaxes=False,
                    shared_yaxes=False, height=None, title=None):
    """Copy the traces of several figures into one grid, filled row by row."""
    if len(figures) > rows * cols:
        raise ValueError(f"{len(figures)} figures do not fit a {rows}x{cols} grid")
    grid = multi_subplot(rows, cols, subplot_titles=titles,
                         shared_xaxes=shared_xaxes, shared_yaxes=shared_yaxes)
    seen = set()
    for i, fig in enumerate(figures):
        row, col = divmod(i, cols)
        for trace in fig.data:
            grid.add_trace(trace, row=row + 1, col=col + 1)
            # one legend entry per name across the grid
            if trace.name in seen:
                grid.data[-1].showlegend = False
            elif trace.name:
                seen.add(trace.name)
    return apply_common_layout(grid, title, height or 350 * rows)


def save_png(fig, path, width=None, height=None, scale=1):
    """Write ``fig`` to ``path`` as PNG; pixel size is ``width * scale`` by ``height * scale``."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    fig.write_image(path, format="png", width=width, height=height, scale=scale)
    logger.info("Wrote %s (%sx%s, scale %s)", path, width, height, scale)
    return path


def png_bytes(fig, width=None, height=None, scale=1):
    """Render ``fig`` to PNG bytes for a download button."""
    return fig.to_image(format="png", width=width, height=height, scale=scale)
