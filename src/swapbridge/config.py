"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # HTTP
    # ======================
    http_timeout_seconds: float = Field(
        default=10.0, description="Timeout for upstream provider requests"
    )
    integrator_id: str = Field(
        default="swapbridge", description="Integrator / partner id sent to aggregators"
    )

    # ======================
    # Swap providers
    # ======================
    evm_swap_provider: str = Field(
        default="paraswap", description="EVM swap adapter: paraswap or oneinch"
    )
    paraswap_api_url: str = Field(
        default="https://apiv5.paraswap.io", description="ParaSwap API URL"
    )
    oneinch_api_url: str = Field(
        default="https://api.1inch.dev/swap/v6.0", description="1inch swap API URL"
    )
    oneinch_api_key: Optional[str] = Field(default=None, description="1inch API key")
    jupiter_api_url: str = Field(
        default="https://public.jupiterapi.com", description="Jupiter swap API URL"
    )
    cetus_api_url: str = Field(
        default="https://api-sui.cetus.zone/router_v2", description="Cetus aggregator URL"
    )
    aftermath_api_url: str = Field(
        default="https://aftermath.finance/api", description="Aftermath Finance API URL"
    )
    coingecko_api_url: str = Field(
        default="https://api.coingecko.com/api/v3", description="CoinGecko API URL"
    )

    # ======================
    # Bridge providers
    # ======================
    bridge_provider: str = Field(
        default="lifi", description="Default bridge adapter: lifi or debridge"
    )
    lifi_api_url: str = Field(default="https://li.quest/v1", description="LI.FI API URL")
    lifi_api_key: Optional[str] = Field(default=None, description="LI.FI API key")
    debridge_api_url: str = Field(
        default="https://dln.debridge.finance/v1.0", description="deBridge DLN API URL"
    )
    debridge_sui_api_url: str = Field(
        default="https://deswap.dln.trade/v1.0", description="deBridge DLN API URL used for Sui"
    )
    wormhole_api_url: str = Field(
        default="https://api.wormholescan.io/api/v1", description="Wormholescan API URL"
    )

    # ======================
    # Canton
    # ======================
    canton_network: str = Field(default="mainnet", description="xReserve network: mainnet or sepolia")
    canton_fallback_price_usd: float = Field(
        default=0.166, description="CC/USD price used when CoinGecko is unreachable"
    )

    # ======================
    # Quote defaults
    # ======================
    default_slippage_bps: int = Field(default=50, description="Default slippage (0.5%)")
    max_slippage_bps: int = Field(default=10000, description="Maximum accepted slippage")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "providers": {
                "evm_swap": self.evm_swap_provider,
                "bridge": self.bridge_provider,
                "oneinch_api_key": "***" if self.oneinch_api_key else "(not set)",
                "lifi_api_key": "***" if self.lifi_api_key else "(not set)",
            },
            "canton": {
                "network": self.canton_network,
                "fallback_price_usd": self.canton_fallback_price_usd,
            },
            "quotes": {
                "default_slippage_bps": self.default_slippage_bps,
                "max_slippage_bps": self.max_slippage_bps,
                "timeout_seconds": self.http_timeout_seconds,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
