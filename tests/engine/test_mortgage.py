from decimal import Decimal

from incentive_calc.engine.mortgage import monthly_payment, monthly_rate

CENT = Decimal("0.01")


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        pmt = monthly_payment(Decimal("400000"), Decimal("7"), 30)
        # Expected: ~$2,661.21
        assert pmt.quantize(CENT) == Decimal("2661.21")

    def test_canonical_loan(self):
        """$280K at 6.5% for 30 years."""
        pmt = monthly_payment(Decimal("280000"), Decimal("6.5"), 30)
        assert abs(pmt - Decimal("1769.79")) < CENT

    def test_zero_rate(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"), 30)
        assert pmt == Decimal("1000")

    def test_zero_rate_is_exact_division(self):
        principal = Decimal("250000")
        for years in (5, 15, 30):
            assert monthly_payment(principal, Decimal("0"), years) == principal / (years * 12)

    def test_zero_principal(self):
        pmt = monthly_payment(Decimal("0"), Decimal("6.5"), 30)
        assert pmt == Decimal("0")

    def test_negative_principal_pays_nothing(self):
        pmt = monthly_payment(Decimal("-5000"), Decimal("6.5"), 30)
        assert pmt == Decimal("0")

    def test_not_rounded(self):
        pmt = monthly_payment(Decimal("280000"), Decimal("6.5"), 30)
        assert pmt != pmt.quantize(CENT)

    def test_lower_rate_lowers_payment(self):
        high = monthly_payment(Decimal("280000"), Decimal("6.5"), 30)
        low = monthly_payment(Decimal("280000"), Decimal("5.5"), 30)
        assert low < high

    def test_shorter_term_raises_payment(self):
        thirty = monthly_payment(Decimal("280000"), Decimal("6.5"), 30)
        fifteen = monthly_payment(Decimal("280000"), Decimal("6.5"), 15)
        assert fifteen > thirty


class TestMonthlyRate:
    def test_percent_units(self):
        assert monthly_rate(Decimal("6")) == Decimal("0.005")

    def test_zero(self):
        assert monthly_rate(Decimal("0")) == 0
