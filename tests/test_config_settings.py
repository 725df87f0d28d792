from swapform.config import Settings
from swapform.core.swap.synchronizer import SwapFormOptions


def test_defaults(monkeypatch):
    """Defaults match the public price list and the ETH -> SWTH pair."""

    for name in ("PRICES_URL", "PREFERRED_FROM_SYMBOL", "PREFERRED_TO_SYMBOL", "SEARCH_RESULT_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.prices_url == "https://interview.switcheo.com/prices.json"
    assert settings.preferred_from_symbol == "ETH"
    assert settings.preferred_to_symbol == "SWTH"
    assert settings.max_amount_input_length == 24
    assert settings.search_result_limit == 8
    assert settings.has_prices_source is True
    assert settings.log_format == "auto"


def test_environment_overrides(monkeypatch):
    """Environment variables are read case-insensitively."""

    monkeypatch.setenv("PREFERRED_FROM_SYMBOL", "USDC")
    monkeypatch.setenv("submit_delay_seconds", "0")
    monkeypatch.setenv("ENABLE_PRICES", "false")

    settings = Settings(_env_file=None)

    assert settings.preferred_from_symbol == "USDC"
    assert settings.submit_delay_seconds == 0
    assert settings.has_prices_source is False


def test_options_from_settings(monkeypatch):
    monkeypatch.setenv("AMOUNT_FRACTION_DIGITS", "4")
    monkeypatch.setenv("PREFERRED_TO_SYMBOL", "ATOM")

    options = SwapFormOptions.from_settings(Settings(_env_file=None))

    assert options.amount_fraction_digits == 4
    assert options.preferred_to_symbol == "ATOM"
