from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="auto",
        description="Log renderer: json, console, or auto (console at DEBUG, json otherwise)",
    )

    # Price Source
    prices_url: str = Field(
        default="https://interview.switcheo.com/prices.json",
        description="URL returning the raw price records as a JSON array",
    )
    token_icon_base_url: str = Field(
        default="https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens",
        description="Base URL for token icons, keyed by normalized symbol",
    )
    request_timeout_seconds: float = Field(default=15.0, gt=0, description="Request timeout")
    enable_prices: bool = Field(default=True, description="Enable the price source provider")

    # Swap Form Defaults
    preferred_from_symbol: str = Field(default="ETH", description="Preferred initial send token")
    preferred_to_symbol: str = Field(default="SWTH", description="Preferred initial receive token")
    max_amount_input_length: int = Field(
        default=24,
        ge=1,
        description="Maximum number of characters accepted in an amount field",
    )
    amount_fraction_digits: int = Field(default=6, ge=0, le=20, description="Fraction digits for amounts")
    rate_fraction_digits: int = Field(default=8, ge=0, le=20, description="Fraction digits for exchange rates")
    search_result_limit: int = Field(default=8, ge=1, description="Maximum quick-search results")
    submit_delay_seconds: float = Field(
        default=1.5,
        ge=0,
        description="Delay before the simulated swap submission settles",
    )

    @property
    def has_prices_source(self) -> bool:
        return self.enable_prices and bool(self.prices_url)


# Global settings instance
settings = Settings()
