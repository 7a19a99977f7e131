"""Plotly Dash application: incentive calculator front end."""

import sys
from pathlib import Path

# Ensure project root is on sys.path so `incentive_calc.*` imports work
# even when Dash's reloader spawns a child process.
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from dash import Dash, html, page_container

from incentive_calc.config import settings
from incentive_calc.logging_config import setup_logging

setup_logging(settings.log_level)

app = Dash(
    __name__,
    use_pages=True,
    suppress_callback_exceptions=True,
    title=settings.app_title,
)

app.layout = html.Div([
    html.Nav([
        html.Div([
            html.H1(settings.app_title, style={"fontSize": "1.5rem", "margin": "0"}),
            html.P(
                "Show buyers how builder incentives reduce the cost of a new construction home.",
                style={"margin": "0", "fontSize": "0.9rem", "opacity": "0.8"},
            ),
        ], style={
            "maxWidth": "1100px",
            "margin": "0 auto",
            "padding": "0 1rem",
        }),
    ], style={
        "backgroundColor": "#1e293b",
        "color": "white",
        "padding": "1rem 0",
        "marginBottom": "2rem",
    }),

    html.Div(
        page_container,
        style={"maxWidth": "1100px", "margin": "0 auto", "padding": "0 1rem"},
    ),
])


if __name__ == "__main__":
    app.run(debug=settings.debug, port=settings.dashboard_port)
