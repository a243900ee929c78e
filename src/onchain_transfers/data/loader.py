"""Settings loader for packaged defaults and environment overrides."""

import os
from pathlib import Path
from typing import Any

import yaml

API_URL_ENV = "CDP_API_URL"
API_KEY_ENV = "CDP_API_KEY"


def load_settings() -> dict[str, Any]:
    """
    Load packaged defaults from settings.yaml.

    Returns
    -------
    dict[str, Any]
        Settings including api, retry, wait, and network sections

    """
    path = Path(__file__).parent / "settings.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_api_config() -> dict[str, Any]:
    """
    Get API client settings with environment overrides applied.

    Returns
    -------
    dict[str, Any]
        ``base_url``, ``timeout`` and ``api_key`` (None when unset)

    """
    config = dict(load_settings()["api"])
    config["base_url"] = os.environ.get(API_URL_ENV, config["base_url"])
    config["api_key"] = os.environ.get(API_KEY_ENV)
    return config


def get_retry_config() -> dict[str, Any]:
    """
    Get retry settings for idempotent API reads.

    Returns
    -------
    dict[str, Any]
        Keyword arguments for ``RetryConfig``

    """
    return dict(load_settings()["retry"])


def get_wait_defaults() -> tuple[float, float]:
    """
    Get default polling settings for waiting on a transfer.

    Returns
    -------
    tuple[float, float]
        Poll interval and timeout, in seconds

    """
    wait = load_settings()["wait"]
    return float(wait["interval_seconds"]), float(wait["timeout_seconds"])


def get_supported_networks() -> list[str]:
    """
    Get list of all supported network ids.

    Returns
    -------
    list[str]
        Network ids (e.g., 'base-sepolia')

    """
    return list(load_settings()["networks"].keys())


def normalize_network_id(network_id: str) -> str:
    """
    Convert a network id to the form used in API paths.

    Parameters
    ----------
    network_id : str
        Network id, e.g. 'base_sepolia'

    Returns
    -------
    str
        Normalized id, e.g. 'base-sepolia'

    """
    return network_id.replace("_", "-")
