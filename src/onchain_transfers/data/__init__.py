"""Packaged settings and configuration helpers."""

from onchain_transfers.data.loader import (
    get_api_config,
    get_retry_config,
    get_supported_networks,
    get_wait_defaults,
    load_settings,
    normalize_network_id,
)

__all__ = [
    "get_api_config",
    "get_retry_config",
    "get_supported_networks",
    "get_wait_defaults",
    "load_settings",
    "normalize_network_id",
]
