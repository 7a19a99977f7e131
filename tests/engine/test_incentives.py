from dataclasses import replace
from decimal import Decimal

from incentive_calc.engine.incentives import (
    adjusted_scenario,
    baseline_scenario,
    compare,
    savings_summary,
)
from incentive_calc.engine.mortgage import monthly_payment
from incentive_calc.models.inputs import (
    BuilderPaidHoa,
    FlexCash,
    FlexCashTarget,
    OtherIncentive,
    RateBuyDown,
)

CENT = Decimal("0.01")


class TestBaseline:
    def test_loan_amount(self, canonical_input):
        base = baseline_scenario(canonical_input)
        assert base.down_payment == Decimal("70000")
        assert base.loan_amount == Decimal("280000")

    def test_monthly_figures(self, canonical_input):
        base = baseline_scenario(canonical_input)
        assert base.monthly_tax == Decimal("350")
        assert abs(base.monthly_mortgage_payment - Decimal("1769.79")) < CENT
        assert base.total_monthly == base.monthly_mortgage_payment + Decimal("550")

    def test_tax_excluded(self, canonical_input):
        base = baseline_scenario(replace(canonical_input, include_tax=False))
        assert base.monthly_tax == Decimal("0")
        assert base.total_monthly == base.monthly_mortgage_payment + Decimal("200")

    def test_no_incentives_means_no_savings(self, canonical_input):
        result = compare(canonical_input)
        assert result.adjusted.total_monthly == result.baseline.total_monthly
        assert result.adjusted.loan_amount == result.baseline.loan_amount
        assert result.savings.monthly == 0
        assert result.savings.lifetime == 0


class TestFlexCashPriceReduction:
    def test_price_and_loan_reduced(self, with_incentives):
        inputs = with_incentives(flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION))
        adj = compare(inputs).adjusted
        assert adj.home_price == Decimal("340000")
        assert adj.price_reduction == Decimal("10000")
        assert adj.flex_cash_used == Decimal("10000")
        assert adj.flex_cash_target == FlexCashTarget.PRICE_REDUCTION

    def test_down_payment_recomputed_on_reduced_price(self, with_incentives):
        inputs = with_incentives(flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION))
        adj = compare(inputs).adjusted
        assert adj.down_payment == Decimal("68000")
        assert adj.loan_amount == Decimal("272000")

    def test_tax_uses_reduced_price(self, with_incentives):
        inputs = with_incentives(flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION))
        adj = compare(inputs).adjusted
        assert adj.monthly_tax == Decimal("340")

    def test_rate_unchanged(self, with_incentives):
        inputs = with_incentives(flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION))
        adj = compare(inputs).adjusted
        assert adj.interest_rate == Decimal("6.5")
        assert adj.rate_buy_down_applied == 0

    def test_zero_amount_is_not_applied(self, with_incentives):
        inputs = with_incentives(flex_cash=FlexCash(Decimal("0"), FlexCashTarget.PRICE_REDUCTION))
        adj = compare(inputs).adjusted
        assert adj.flex_cash_used == 0
        assert adj.flex_cash_target is None
        assert adj.home_price == Decimal("350000")


class TestRateBuyDown:
    def test_rate_lowered_loan_unchanged(self, with_incentives):
        result = compare(with_incentives(rate_buy_down=RateBuyDown(Decimal("1.0"))))
        assert result.adjusted.interest_rate == Decimal("5.5")
        assert result.adjusted.rate_buy_down_applied == Decimal("1.0")
        assert result.adjusted.loan_amount == result.baseline.loan_amount
        assert result.savings.monthly > 0

    def test_monthly_payment_at_bought_down_rate(self, with_incentives):
        result = compare(with_incentives(rate_buy_down=RateBuyDown(Decimal("1.0"))))
        expected = monthly_payment(Decimal("280000"), Decimal("5.5"), 30)
        assert result.adjusted.monthly_mortgage_payment == expected

    def test_flex_cash_funding_buy_down_leaves_principal(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.RATE_BUY_DOWN),
            rate_buy_down=RateBuyDown(Decimal("1.0")),
        )
        adj = compare(inputs).adjusted
        assert adj.interest_rate == Decimal("5.5")
        assert adj.loan_amount == Decimal("280000")
        assert adj.home_price == Decimal("350000")
        assert adj.price_reduction == 0
        assert adj.flex_cash_used == Decimal("10000")
        assert adj.flex_cash_target == FlexCashTarget.RATE_BUY_DOWN

    def test_flex_cash_routed_to_buy_down_alone_changes_nothing(self, with_incentives):
        result = compare(with_incentives(flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.RATE_BUY_DOWN)))
        assert result.adjusted.interest_rate == result.baseline.interest_rate
        assert result.adjusted.loan_amount == result.baseline.loan_amount
        assert result.savings.monthly == 0

    def test_rate_never_raised(self, with_incentives):
        for amount in ("0.1", "1.0", "5"):
            result = compare(with_incentives(rate_buy_down=RateBuyDown(Decimal(amount))))
            assert result.adjusted.interest_rate <= result.baseline.interest_rate


class TestBuilderPaysHoa:
    def test_hoa_savings_total(self, with_incentives):
        adj = compare(with_incentives(builder_pays_hoa=BuilderPaidHoa(2))).adjusted
        assert adj.hoa_years_covered == 2
        assert adj.hoa_savings_total == Decimal("3600")

    def test_savings_total_for_every_valid_year(self, with_incentives):
        for years in range(1, 11):
            adj = compare(with_incentives(builder_pays_hoa=BuilderPaidHoa(years))).adjusted
            assert adj.hoa_savings_total == Decimal("150") * 12 * years

    def test_monthly_hoa_zeroed(self, with_incentives):
        result = compare(with_incentives(builder_pays_hoa=BuilderPaidHoa(1)))
        assert result.adjusted.monthly_hoa == 0
        assert result.savings.monthly == Decimal("150")

    def test_lifetime_adds_hoa_once(self, with_incentives):
        result = compare(with_incentives(builder_pays_hoa=BuilderPaidHoa(2)))
        # 150/mo over 360 months + 3,600 coverage total
        assert result.savings.yearly == Decimal("1800")
        assert result.savings.lifetime == Decimal("150") * 360 + Decimal("3600")

    def test_independent_of_loan_term(self, with_incentives):
        short = compare(replace(with_incentives(builder_pays_hoa=BuilderPaidHoa(3)), loan_term_years=15))
        long = compare(with_incentives(builder_pays_hoa=BuilderPaidHoa(3)))
        assert short.adjusted.hoa_savings_total == long.adjusted.hoa_savings_total


class TestOtherIncentive:
    def test_reduces_principal(self, with_incentives):
        result = compare(with_incentives(other_incentive=OtherIncentive(Decimal("5000"))))
        assert result.adjusted.loan_amount == Decimal("275000")
        assert result.adjusted.other_incentive_amount == Decimal("5000")
        assert result.adjusted.home_price == result.baseline.home_price

    def test_applied_after_price_reduction(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION),
            other_incentive=OtherIncentive(Decimal("5000")),
        )
        assert compare(inputs).adjusted.loan_amount == Decimal("267000")

    def test_applied_regardless_of_buy_down_routing(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.RATE_BUY_DOWN),
            rate_buy_down=RateBuyDown(Decimal("1.0")),
            other_incentive=OtherIncentive(Decimal("5000")),
        )
        assert compare(inputs).adjusted.loan_amount == Decimal("275000")

    def test_loan_amount_invariant(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("12500"), FlexCashTarget.PRICE_REDUCTION),
            other_incentive=OtherIncentive(Decimal("3000")),
        )
        adj = compare(inputs).adjusted
        assert adj.loan_amount == adj.home_price - adj.down_payment - adj.other_incentive_amount


class TestNegativePrincipal:
    def test_loan_amount_clamped_to_zero(self, with_incentives):
        inputs = with_incentives(
            home_price=Decimal("50000"),
            down_payment_percent=Decimal("0"),
            flex_cash=FlexCash(Decimal("40000"), FlexCashTarget.PRICE_REDUCTION),
            other_incentive=OtherIncentive(Decimal("20000")),
        )
        adj = compare(inputs).adjusted
        assert adj.loan_amount == 0
        assert adj.monthly_mortgage_payment == 0

    def test_clamp_logged(self, with_incentives, caplog):
        inputs = with_incentives(
            home_price=Decimal("50000"),
            down_payment_percent=Decimal("100"),
            other_incentive=OtherIncentive(Decimal("1000")),
        )
        with caplog.at_level("WARNING", logger="incentive_calc.engine.incentives"):
            compare(inputs)
        assert "clamping loan amount" in caplog.text


class TestSavings:
    def test_yearly_is_twelve_months(self, with_incentives):
        result = compare(with_incentives(rate_buy_down=RateBuyDown(Decimal("0.5"))))
        assert result.savings.yearly == result.savings.monthly * 12

    def test_lifetime_over_full_term(self, with_incentives):
        result = compare(with_incentives(other_incentive=OtherIncentive(Decimal("5000"))))
        assert result.savings.lifetime == result.savings.monthly * 30 * 12

    def test_summary_from_scenarios(self, canonical_input):
        base = baseline_scenario(canonical_input)
        adj = adjusted_scenario(replace(canonical_input, builder_pays_hoa=BuilderPaidHoa(1)), base)
        summary = savings_summary(base, adj, 30)
        assert summary.monthly == Decimal("150")
        assert summary.lifetime == Decimal("150") * 360 + Decimal("1800")

    def test_all_incentives_stack(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION),
            rate_buy_down=RateBuyDown(Decimal("1.0")),
            builder_pays_hoa=BuilderPaidHoa(2),
            other_incentive=OtherIncentive(Decimal("5000")),
        )
        result = compare(inputs)
        adj = result.adjusted
        assert adj.loan_amount == Decimal("267000")
        assert adj.interest_rate == Decimal("5.5")
        assert adj.total_monthly == adj.monthly_mortgage_payment + Decimal("50") + Decimal("340")
        assert result.savings.monthly > Decimal("150")


class TestDeterminism:
    def test_idempotent(self, with_incentives):
        inputs = with_incentives(
            flex_cash=FlexCash(Decimal("10000"), FlexCashTarget.PRICE_REDUCTION),
            rate_buy_down=RateBuyDown(Decimal("0.75")),
            builder_pays_hoa=BuilderPaidHoa(3),
        )
        assert compare(inputs) == compare(inputs)

    def test_input_not_mutated(self, canonical_input):
        before = replace(canonical_input)
        compare(canonical_input)
        assert canonical_input == before
