"""Calculator page: property/loan form, incentive elections, side-by-side results.

Features:
  - Incentive toggles reveal their own amount fields
  - Results cards without / with incentives
  - Incentive impact table and monthly cost chart
  - Collapsible step-by-step math breakdown
"""

import dash
from dash import html, dcc, callback, Input, Output, State, no_update
import plotly.graph_objects as go

from incentive_calc.api.schemas import parse_request
from incentive_calc.config import settings
from incentive_calc.engine.breakdown import (
    format_currency,
    format_percent,
    incentive_impacts,
    math_breakdown,
)
from incentive_calc.engine.incentives import compare
from incentive_calc.models.inputs import InvalidInput

dash.register_page(__name__, path="/", name="Calculator")

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1e293b",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

CARD_STYLE = {
    "flex": "1",
    "border": "1px solid #e2e8f0",
    "borderRadius": "8px",
    "padding": "1rem 1.25rem",
    "backgroundColor": "white",
}

SAVINGS_COLOR = "#16a34a"

HOME_TYPES = [
    {"label": "Single Family", "value": "single_family"},
    {"label": "Townhouse", "value": "townhouse"},
    {"label": "Condo", "value": "condo"},
    {"label": "Villa", "value": "villa"},
]

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component, hint=None):
    children = [
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ]
    if hint:
        children.append(html.Small(hint, style={"color": "#64748b"}))
    return html.Div(children, style={"flex": "1", "minWidth": "160px"})


def _toggle(id_, label, checked):
    return dcc.Checklist(
        id=id_,
        options=[{"label": f" {label}", "value": "on"}],
        value=["on"] if checked else [],
        style={"fontWeight": "bold", "marginBottom": "0.5rem"},
    )


def _row(*children):
    return html.Div(list(children), style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"})


layout = html.Div([
    html.H2("Home & Loan Details"),

    _row(
        _field("Home Price ($)", dcc.Input(
            id="home-price", type="number", value=float(settings.default_home_price), step=1000, style=FIELD_STYLE,
        )),
        _field("Home Type", dcc.Dropdown(
            id="home-type", options=HOME_TYPES, value=settings.default_home_type, clearable=False,
        )),
    ),
    _row(
        _field("Monthly HOA Fee ($)", dcc.Input(
            id="hoa-fee", type="number", value=float(settings.default_hoa_fee), style=FIELD_STYLE,
        )),
        _field("Monthly CDD/Other Fees ($)", dcc.Input(
            id="cdd-fee", type="number", value=float(settings.default_cdd_fee), style=FIELD_STYLE,
        )),
    ),
    _row(
        _field("Interest Rate (%)", dcc.Input(
            id="interest-rate", type="number", value=float(settings.default_interest_rate), step=0.125,
            style=FIELD_STYLE,
        )),
        _field("Loan Term (years)", dcc.Dropdown(
            id="loan-term",
            options=[{"label": f"{y} years", "value": y} for y in (5, 10, 15, 20, 25, 30)],
            value=settings.default_loan_term_years,
            clearable=False,
        )),
    ),
    _row(
        _field("Down Payment (%)", dcc.Slider(
            id="down-payment-pct", min=0, max=30, step=1,
            value=float(settings.default_down_payment_percent),
            marks={p: f"{p}%" for p in range(0, 31, 5)},
        )),
    ),
    html.Div(id="down-payment-amount", style={"fontSize": "0.85rem", "color": "#64748b", "marginBottom": "1rem"}),

    _toggle("include-tax", "Include Property Tax", settings.default_include_tax),
    html.Div(id="tax-section", children=[
        _row(_field("Annual Property Tax Rate (%)", dcc.Input(
            id="tax-rate", type="number", value=float(settings.default_tax_rate), step=0.1, style=FIELD_STYLE,
        ))),
    ]),

    html.H2("Builder Incentives", style={"marginTop": "1.5rem"}),

    _toggle("use-flex-cash", "Flex Cash", False),
    html.Div(id="flex-cash-section", children=[
        html.P("Builder offers cash that can reduce the price or buy down the rate.",
               style={"fontSize": "0.85rem", "color": "#64748b"}),
        _row(
            _field("Flex Cash Amount ($)", dcc.Input(
                id="flex-cash-amount", type="number", value=float(settings.default_flex_cash_amount),
                step=500, style=FIELD_STYLE,
            )),
            _field("Apply Flex Cash To", dcc.RadioItems(
                id="flex-cash-target",
                options=[
                    {"label": " Price Reduction", "value": "price_reduction"},
                    {"label": " Rate Buy Down", "value": "rate_buy_down"},
                ],
                value=settings.default_flex_cash_target,
                inline=True,
            )),
        ),
    ]),

    _toggle("use-rate-buy-down", "Interest Rate Buy Down", False),
    html.Div(id="rate-buy-down-section", children=[
        _row(_field("Rate Reduction (percentage points)", dcc.Input(
            id="rate-buy-down-amount", type="number", value=float(settings.default_rate_buy_down),
            step=0.125, style=FIELD_STYLE,
        ))),
    ]),

    _toggle("builder-pays-hoa", "Builder Pays HOA", False),
    html.Div(id="hoa-section", children=[
        _row(_field("Years Covered", dcc.Input(
            id="hoa-years", type="number", value=settings.default_hoa_years, min=1, max=10, step=1,
            style=FIELD_STYLE,
        ))),
    ]),

    _toggle("use-other-incentives", "Other Incentives", False),
    html.Div(id="other-section", children=[
        _row(_field("Other Incentive Amount ($)", dcc.Input(
            id="other-amount", type="number", value=float(settings.default_other_incentive_amount),
            step=500, style=FIELD_STYLE,
        ), hint="Applied directly to the loan amount")),
    ]),

    html.Button("Calculate Savings", id="calculate-btn", n_clicks=0, style={**BTN_STYLE, "marginTop": "1rem"}),

    html.Div(id="results-container", style={"marginTop": "2rem", "marginBottom": "3rem"}),
])


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _shown(toggle_value):
    return {"display": "block"} if toggle_value else {"display": "none"}


@callback(
    [
        Output("tax-section", "style"),
        Output("flex-cash-section", "style"),
        Output("rate-buy-down-section", "style"),
        Output("hoa-section", "style"),
        Output("other-section", "style"),
    ],
    [
        Input("include-tax", "value"),
        Input("use-flex-cash", "value"),
        Input("use-rate-buy-down", "value"),
        Input("builder-pays-hoa", "value"),
        Input("use-other-incentives", "value"),
    ],
)
def toggle_sections(include_tax, use_flex, use_buy_down, pays_hoa, use_other):
    return tuple(_shown(v) for v in (include_tax, use_flex, use_buy_down, pays_hoa, use_other))


@callback(
    Output("down-payment-amount", "children"),
    [Input("home-price", "value"), Input("down-payment-pct", "value")],
)
def show_down_payment(price, pct):
    if not price or pct is None:
        return ""
    return f"Down payment: ${price * pct / 100:,.0f}"


@callback(
    Output("results-container", "children"),
    Input("calculate-btn", "n_clicks"),
    [
        State("home-price", "value"),
        State("home-type", "value"),
        State("hoa-fee", "value"),
        State("cdd-fee", "value"),
        State("interest-rate", "value"),
        State("loan-term", "value"),
        State("down-payment-pct", "value"),
        State("include-tax", "value"),
        State("tax-rate", "value"),
        State("use-flex-cash", "value"),
        State("flex-cash-amount", "value"),
        State("flex-cash-target", "value"),
        State("use-rate-buy-down", "value"),
        State("rate-buy-down-amount", "value"),
        State("builder-pays-hoa", "value"),
        State("hoa-years", "value"),
        State("use-other-incentives", "value"),
        State("other-amount", "value"),
    ],
    prevent_initial_call=True,
)
def run_comparison(
    n_clicks,
    price, home_type, hoa_fee, cdd_fee, rate, term, down_pct,
    include_tax, tax_rate,
    use_flex, flex_amount, flex_target,
    use_buy_down, buy_down_amount,
    pays_hoa, hoa_years,
    use_other, other_amount,
):
    if not n_clicks:
        return no_update

    payload = {
        "home_price": price,
        "home_type": home_type,
        "hoa_fee": hoa_fee or 0,
        "cdd_fee": cdd_fee or 0,
        "interest_rate": rate,
        "loan_term_years": term,
        "down_payment_percent": down_pct,
        "include_tax": bool(include_tax),
        "tax_rate": tax_rate if tax_rate is not None else 0,
        "use_flex_cash": bool(use_flex),
        "flex_cash_amount": flex_amount if use_flex else None,
        "flex_cash_target": flex_target,
        "use_rate_buy_down": bool(use_buy_down),
        "rate_buy_down_amount": buy_down_amount if use_buy_down else None,
        "builder_pays_hoa": bool(pays_hoa),
        "hoa_payment_years": hoa_years if pays_hoa else None,
        "use_other_incentives": bool(use_other),
        "other_incentives_amount": other_amount if use_other else None,
    }

    try:
        inputs = parse_request(payload).to_calculation_input()
    except InvalidInput as e:
        return html.Div([
            html.Strong("Please fix the following:"),
            html.Ul([html.Li(f"{name}: {msg}") for name, msg in e.errors]),
        ], style={"color": "#dc2626", "padding": "1rem", "border": "1px solid #fecaca", "borderRadius": "8px"})

    result = compare(inputs)
    return html.Div([
        _build_savings_banner(result),
        html.Div([
            _build_scenario_card("Without Incentives", result.baseline, inputs, covered_years=0),
            _build_scenario_card("With Incentives", result.adjusted, inputs,
                                 covered_years=result.adjusted.hoa_years_covered),
        ], style={"display": "flex", "gap": "1rem", "marginBottom": "1.5rem"}),
        dcc.Graph(figure=_build_cost_chart(result)),
        _build_incentive_table(result),
        _build_breakdown(inputs, result),
    ])


# ---------------------------------------------------------------------------
# Result builders
# ---------------------------------------------------------------------------


def _line(label, value, bold=False):
    style = {"display": "flex", "justifyContent": "space-between", "padding": "0.25rem 0"}
    if bold:
        style["fontWeight"] = "bold"
    return html.Div([html.Span(label), html.Span(value)], style=style)


def _build_savings_banner(result):
    s = result.savings

    def _stat(label, value):
        return html.Div([
            html.Div(label, style={"fontSize": "0.85rem", "color": "#64748b"}),
            html.Div(value, style={"fontSize": "1.5rem", "fontWeight": "bold", "color": SAVINGS_COLOR}),
        ], style={"flex": "1", "textAlign": "center"})

    return html.Div([
        _stat("Monthly Savings", format_currency(s.monthly, cents=True)),
        _stat("Yearly Savings", format_currency(s.yearly)),
        _stat(f"Lifetime Savings ({result.loan_term_years} yrs)", format_currency(s.lifetime)),
    ], style={**CARD_STYLE, "display": "flex", "marginBottom": "1.5rem", "backgroundColor": "#f0fdf4"})


def _build_scenario_card(title, figures, inputs, covered_years):
    hoa = (
        f"$0 (covered for {covered_years} years)" if covered_years > 0
        else format_currency(inputs.hoa_fee_monthly, cents=True)
    )
    lines = [
        html.H3(title, style={"marginTop": "0"}),
        _line("Home Price", format_currency(figures.home_price)),
        _line("Down Payment", format_currency(figures.down_payment)),
        _line("Loan Amount", format_currency(figures.loan_amount)),
        _line("Interest Rate", format_percent(figures.interest_rate)),
        html.Hr(),
        _line("Mortgage Payment", format_currency(figures.monthly_mortgage_payment, cents=True)),
    ]
    if inputs.include_tax:
        lines.append(_line("Property Tax", format_currency(figures.monthly_tax, cents=True)))
    lines += [
        _line("HOA Fee", hoa),
        _line("CDD/Other Fees", format_currency(figures.monthly_cdd, cents=True)),
        html.Hr(),
        _line("Total Monthly", format_currency(figures.total_monthly, cents=True), bold=True),
    ]
    return html.Div(lines, style=CARD_STYLE)


def _build_cost_chart(result):
    scenarios = ["Without Incentives", "With Incentives"]
    base, adj = result.baseline, result.adjusted
    components = [
        ("Mortgage", "#1e293b", base.monthly_mortgage_payment, adj.monthly_mortgage_payment),
        ("Property Tax", "#64748b", base.monthly_tax, adj.monthly_tax),
        ("HOA", "#f59e0b", base.monthly_hoa, adj.monthly_hoa),
        ("CDD/Other", "#94a3b8", base.monthly_cdd, adj.monthly_cdd),
    ]

    fig = go.Figure()
    for name, color, without, with_ in components:
        fig.add_trace(go.Bar(
            name=name, x=scenarios, y=[float(without), float(with_)], marker_color=color,
        ))
    fig.update_layout(
        barmode="stack",
        title="Monthly Cost Breakdown",
        yaxis_title="Monthly Cost ($)",
        height=380,
        margin=dict(t=50, b=30),
    )
    return fig


def _build_incentive_table(result):
    rows = incentive_impacts(result)
    header = html.Tr([html.Th("Incentive Type"), html.Th("Value"), html.Th("Impact")])
    if rows:
        body = [html.Tr([html.Td(r.incentive), html.Td(r.value), html.Td(r.impact)]) for r in rows]
    else:
        body = [html.Tr([html.Td("No incentives applied", colSpan=3, style={"textAlign": "center"})])]
    return html.Div([
        html.H3("Incentives Applied"),
        html.Table([html.Thead(header), html.Tbody(body)],
                   style={"width": "100%", "borderCollapse": "collapse", "marginBottom": "1.5rem"}),
    ])


def _build_breakdown(inputs, result):
    sections = []
    for section in math_breakdown(inputs, result):
        steps = []
        for step in section.steps:
            children = [
                html.H5(f"Step {step.number}: {step.title}", style={"marginBottom": "0.25rem"}),
                html.Code(step.formula),
                html.P(step.detail, style={"margin": "0.25rem 0"}),
            ]
            if step.notes:
                children.append(html.Ul([html.Li(note) for note in step.notes]))
            steps.append(html.Div(children, style={"marginBottom": "0.75rem"}))
        sections.append(html.Div([html.H4(section.title)] + steps))

    return html.Details([
        html.Summary("Show the Math", style={"cursor": "pointer", "fontWeight": "bold"}),
        html.Div(sections, style={"marginTop": "0.75rem"}),
    ])
