from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    app_title: str = "New Construction Incentive Calculator"
    debug: bool = False
    log_level: str = "INFO"

    # Services
    api_base_url: str = "http://localhost:8000"
    api_port: int = 8000
    dashboard_port: int = 8050
    cors_origins: list[str] = ["*"]

    # Form defaults (what a sales agent sees before typing anything)
    default_home_price: Decimal = Decimal("350000")
    default_home_type: str = "single_family"
    default_hoa_fee: Decimal = Decimal("150")
    default_cdd_fee: Decimal = Decimal("50")
    default_interest_rate: Decimal = Decimal("6.5")
    default_loan_term_years: int = 30
    default_down_payment_percent: Decimal = Decimal("20")
    default_include_tax: bool = True
    default_tax_rate: Decimal = Decimal("1.2")
    default_flex_cash_amount: Decimal = Decimal("10000")
    default_flex_cash_target: str = "price_reduction"
    default_rate_buy_down: Decimal = Decimal("1.0")
    default_hoa_years: int = 1
    default_other_incentive_amount: Decimal = Decimal("5000")


settings = Settings()
