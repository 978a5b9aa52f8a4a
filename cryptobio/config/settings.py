from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    profiles_table: str = "profiles"

    # Platform fee
    platform_fee_percent: int = 1
    platform_fee_address: Optional[str] = None  # Not used by the transfer path yet

    # Chain (Base mainnet)
    chain_id: int = 8453
    chain_name: str = "Base"
    rpc_url: str = "https://mainnet.base.org"
    usdc_address: str = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
    usdc_decimals: int = 6

    # Flow timings
    chain_switch_delay_seconds: float = 1.0
    username_check_debounce_seconds: float = 0.5
    receipt_timeout_seconds: float = 120.0

    # App
    app_name: str = "cryptobio"
    public_base_url: str = "http://localhost:3000"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @field_validator("platform_fee_percent")
    @classmethod
    def fee_in_range(cls, value: int) -> int:
        if not 0 <= value <= 100:
            raise ValueError("platform_fee_percent must be between 0 and 100")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def creator_percent(self) -> int:
        return 100 - self.platform_fee_percent

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def profile_url(self, username: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{username}"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
