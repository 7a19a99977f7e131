"""CLI client for the incentive calculator API: posts a scenario and prints a terminal report.

Usage:
    python incentive-cli/compare_incentives.py --price 350000 --rate 6.5 --flex-cash 10000
    python incentive-cli/compare_incentives.py --price 420000 --flex-cash 8000 --flex-target rate_buy_down --buy-down 1.0
    python incentive-cli/compare_incentives.py --price 300000 --hoa 175 --hoa-years 2 --other 5000 --show-math
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v, cents: bool = False) -> str:
    return f"${float(v):,.2f}" if cents else f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_side_by_side(data: dict) -> None:
    base, adj = data["baseline"], data["adjusted"]
    _header("Monthly Cost Comparison")
    print(f"  {'':<20} {'Without':>14}  {'With':>14}")
    print(f"  {'':<20} {'-' * 14}  {'-' * 14}")
    rows = [
        ("Home Price", "home_price", False),
        ("Down Payment", "down_payment", False),
        ("Loan Amount", "loan_amount", False),
        ("Mortgage Payment", "monthly_mortgage_payment", True),
        ("Property Tax", "monthly_tax", True),
        ("HOA Fee", "monthly_hoa", True),
        ("CDD/Other Fees", "monthly_cdd", True),
        ("Total Monthly", "total_monthly", True),
    ]
    for label, key, cents in rows:
        print(f"  {label:<20} {_dollar(base[key], cents):>14}  {_dollar(adj[key], cents):>14}")
    print(f"  {'Interest Rate':<20} {base['interest_rate']:>13.3f}%  {adj['interest_rate']:>13.3f}%")


def print_savings(data: dict) -> None:
    s = data["savings"]
    _header("Savings")
    print(f"  Monthly:          {_dollar(s['monthly'], cents=True)}")
    print(f"  Yearly:           {_dollar(s['yearly'])}")
    print(f"  Lifetime ({data['loan_term_years']} yr): {_dollar(s['lifetime'])}")


def print_incentives(data: dict) -> None:
    _header("Incentives Applied")
    rows = data.get("incentives", [])
    if not rows:
        print("  No incentives applied")
        return
    for row in rows:
        print(f"  {row['incentive']:<30} {row['value']:>12}  {row['impact']}")


def print_breakdown(data: dict) -> None:
    for section in data.get("breakdown") or []:
        _header(f"Math: {section['title']}")
        for step in section["steps"]:
            print(f"  Step {step['number']}: {step['title']}")
            print(f"    {step['formula']}")
            for note in step.get("notes", []):
                print(f"      {note}")
            print(f"    {step['detail']}")


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare home costs with and without builder incentives"
    )
    parser.add_argument("--price", type=Decimal, required=True, help="Home price")
    parser.add_argument("--rate", type=Decimal, default=Decimal("6.5"), help="Annual interest rate (%%)")
    parser.add_argument("--term", type=int, default=30, help="Loan term in years")
    parser.add_argument("--down", type=Decimal, default=Decimal("20"), help="Down payment (%%)")
    parser.add_argument("--hoa", type=Decimal, default=Decimal("0"), help="Monthly HOA fee")
    parser.add_argument("--cdd", type=Decimal, default=Decimal("0"), help="Monthly CDD/other fees")
    parser.add_argument("--tax-rate", type=Decimal, help="Annual property tax rate (%%); omit to exclude tax")
    parser.add_argument("--flex-cash", type=Decimal, help="Builder flex cash amount")
    parser.add_argument(
        "--flex-target",
        choices=["price_reduction", "rate_buy_down"],
        default="price_reduction",
        help="Where flex cash is applied (default: price_reduction)",
    )
    parser.add_argument("--buy-down", type=Decimal, help="Rate buy-down in percentage points")
    parser.add_argument("--hoa-years", type=int, help="Years of HOA paid by the builder")
    parser.add_argument("--other", type=Decimal, help="Other incentives applied to the loan amount")
    parser.add_argument("--show-math", action="store_true", help="Print the step-by-step breakdown")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    payload: dict = {
        "home_price": str(args.price),
        "interest_rate": str(args.rate),
        "loan_term_years": args.term,
        "down_payment_percent": str(args.down),
        "hoa_fee": str(args.hoa),
        "cdd_fee": str(args.cdd),
        "include_tax": args.tax_rate is not None,
        "include_breakdown": args.show_math,
    }
    if args.tax_rate is not None:
        payload["tax_rate"] = str(args.tax_rate)
    if args.flex_cash is not None:
        payload.update(use_flex_cash=True, flex_cash_amount=str(args.flex_cash), flex_cash_target=args.flex_target)
    if args.buy_down is not None:
        payload.update(use_rate_buy_down=True, rate_buy_down_amount=str(args.buy_down))
    if args.hoa_years is not None:
        payload.update(builder_pays_hoa=True, hoa_payment_years=args.hoa_years)
    if args.other is not None:
        payload.update(use_other_incentives=True, other_incentives_amount=str(args.other))

    url = f"{args.api_url}/api/v1/incentives/compare"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn incentive_calc.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_side_by_side(data)
    print_savings(data)
    print_incentives(data)
    if args.show_math:
        print_breakdown(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
