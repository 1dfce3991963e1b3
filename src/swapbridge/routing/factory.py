"""Factory for creating adapters and the routing engine from settings."""

import logging
from typing import Optional

from swapbridge.config import Settings, get_settings
from swapbridge.routing.base import BridgeAdapter, SwapAdapter
from swapbridge.routing.canton import CantonSwapAdapter
from swapbridge.routing.cetus import CetusSwapAdapter
from swapbridge.routing.debridge import DeBridgeAdapter
from swapbridge.routing.engine import RouterDependencies, RoutingEngine
from swapbridge.routing.jupiter import JupiterAdapter
from swapbridge.routing.lifi import LiFiBridgeAdapter
from swapbridge.routing.oneinch import OneInchAdapter
from swapbridge.routing.paraswap import ParaSwapAdapter
from swapbridge.routing.sui_bridge import SuiBridgeAdapter
from swapbridge.routing.xreserve import CantonXReserveAdapter

logger = logging.getLogger(__name__)


def create_evm_swap_adapter(settings: Settings) -> SwapAdapter:
    """Create the EVM swap adapter.

    1inch needs an API key; without one ParaSwap is used instead.
    """
    timeout = settings.http_timeout_seconds
    provider = settings.evm_swap_provider.lower()

    if provider == "oneinch":
        if settings.oneinch_api_key:
            return OneInchAdapter(
                api_key=settings.oneinch_api_key,
                base_url=settings.oneinch_api_url,
                timeout=timeout,
            )
        logger.warning("EVM_SWAP_PROVIDER=oneinch but ONEINCH_API_KEY is not set, using ParaSwap")
    elif provider != "paraswap":
        logger.warning(f"Unknown EVM swap provider '{provider}', using ParaSwap")

    return ParaSwapAdapter(
        base_url=settings.paraswap_api_url,
        partner=settings.integrator_id,
        timeout=timeout,
    )


def create_bridge_adapter(settings: Settings) -> BridgeAdapter:
    """Create the default bridge adapter (LI.FI or deBridge)."""
    provider = settings.bridge_provider.lower()

    if provider == "debridge":
        return DeBridgeAdapter(
            base_url=settings.debridge_api_url,
            timeout=settings.http_timeout_seconds,
        )
    if provider != "lifi":
        logger.warning(f"Unknown bridge provider '{provider}', using LI.FI")

    return create_lifi_adapter(settings)


def create_lifi_adapter(settings: Settings) -> LiFiBridgeAdapter:
    return LiFiBridgeAdapter(
        api_key=settings.lifi_api_key,
        base_url=settings.lifi_api_url,
        integrator=settings.integrator_id,
        timeout=settings.http_timeout_seconds,
    )


def create_default_dependencies(settings: Optional[Settings] = None) -> RouterDependencies:
    """Register one adapter per slot, as done once at application startup."""
    settings = settings or get_settings()
    timeout = settings.http_timeout_seconds
    deps = RouterDependencies()

    deps.register_evm_swap_adapter(create_evm_swap_adapter(settings))
    deps.register_solana_swap_adapter(
        JupiterAdapter(base_url=settings.jupiter_api_url, timeout=timeout)
    )
    deps.register_sui_swap_adapter(
        CetusSwapAdapter(
            cetus_url=settings.cetus_api_url,
            aftermath_url=settings.aftermath_api_url,
            timeout=timeout,
        )
    )
    deps.register_canton_swap_adapter(
        CantonSwapAdapter(
            coingecko_url=settings.coingecko_api_url,
            fallback_price_usd=settings.canton_fallback_price_usd,
            timeout=timeout,
        )
    )
    deps.register_bridge_adapter(create_bridge_adapter(settings))
    deps.register_canton_bridge_adapter(CantonXReserveAdapter(network=settings.canton_network))
    deps.register_sui_bridge_adapter(
        SuiBridgeAdapter(
            debridge_url=settings.debridge_sui_api_url,
            wormhole_url=settings.wormhole_api_url,
            timeout=timeout,
        )
    )

    for slot, name in deps.summary().items():
        logger.info(f"Registered {slot} adapter: {name}")

    return deps


def create_routing_engine(settings: Optional[Settings] = None) -> RoutingEngine:
    """Create a routing engine with all default adapters registered."""
    return RoutingEngine(create_default_dependencies(settings))
