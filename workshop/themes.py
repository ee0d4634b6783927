"""Custom themes built as Plotly templates and registered by name."""
import plotly.graph_objects as go
import plotly.io as pio

BUILTIN_THEMES = [
    "plotly", "plotly_white", "plotly_dark", "ggplot2", "seaborn", "simple_white", "none",
]

WORKSHOP_COLORWAY = ["#1B4F72", "#E67E22", "#27AE60", "#C0392B", "#8E44AD", "#7F8C8D"]

LEGEND_POSITIONS = {
    "right": dict(orientation="v", x=1.02, xanchor="left", y=1, yanchor="top"),
    "top": dict(orientation="h", x=0.5, xanchor="center", y=1.02, yanchor="bottom"),
    "bottom": dict(orientation="h", x=0.5, xanchor="center", y=-0.2, yanchor="top"),
    "inside": dict(orientation="v", x=0.98, xanchor="right", y=0.98, yanchor="top",
                   bgcolor="rgba(255,255,255,0.7)"),
}


def make_theme(font_family="Arial", font_size=13, font_color="#2C3E50",
               paper_bgcolor="white", plot_bgcolor="white", show_grid=True,
               grid_color="#E5E5E5", axis_line_color="#2C3E50", legend_position="right",
               colorway=None, title_size=None):
    """Build a Plotly template from a few high-level styling choices.

    Only non-data styling goes into the template: fonts, backgrounds, grid,
    axis lines, legend placement and the default discrete palette.
    """
    axis = dict(
        showgrid=show_grid,
        gridcolor=grid_color,
        zeroline=False,
        showline=True,
        linecolor=axis_line_color,
        ticks="outside",
        tickcolor=axis_line_color,
        title=dict(standoff=10),
    )
    layout = go.Layout(
        font=dict(family=font_family, size=font_size, color=font_color),
        title=dict(font=dict(size=title_size or font_size + 5), x=0.5),
        paper_bgcolor=paper_bgcolor,
        plot_bgcolor=plot_bgcolor,
        xaxis=axis,
        yaxis=axis,
        legend=LEGEND_POSITIONS[legend_position],
        colorway=colorway or WORKSHOP_COLORWAY,
        hoverlabel=dict(font=dict(family=font_family)),
    )
    return go.layout.Template(layout=layout)


def register_theme(name, template):
    """Make ``template`` available as ``template=name`` in every Plotly call."""
    pio.templates[name] = template
    return name


def register_workshop_themes():
    """Register the workshop's own themes; safe to call on every page run."""
    themes = {
        "workshop_minimal": make_theme(show_grid=False, axis_line_color="#555555",
                                       legend_position="top"),
        "workshop_dark": make_theme(font_color="#ECF0F1", paper_bgcolor="#1C2833",
                                    plot_bgcolor="#212F3D", grid_color="#34495E",
                                    axis_line_color="#ECF0F1",
                                    colorway=["#F4D03F", "#5DADE2", "#EC7063", "#58D68D",
                                              "#AF7AC5", "#F0B27A"]),
        "workshop_economist": make_theme(font_family="Georgia", paper_bgcolor="#D5E4EB",
                                         plot_bgcolor="#D5E4EB", grid_color="#FFFFFF",
                                         axis_line_color="#D5E4EB", legend_position="top",
                                         colorway=["#01A2D9", "#014D64", "#6794A7",
                                                   "#7AD2F6", "#00887D", "#ADADAD"]),
    }
    for name, template in themes.items():
        register_theme(name, template)
    return list(themes)
