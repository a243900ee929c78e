"""Coinbase Developer Platform API client for transfers, assets, and staking."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from onchain_transfers.core.errors import APIError, TransportError
from onchain_transfers.core.models import AssetModel, Page, StakingBalanceModel, TransferModel
from onchain_transfers.data.loader import get_api_config, get_retry_config
from onchain_transfers.integrations.retry import RetryConfig, retry_call

M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


class CDPClient:
    """
    Async client for the Coinbase Developer Platform REST API.

    Implements the ``TransferAPI``, ``AssetAPI`` and ``StakeAPI`` interfaces.
    Reads are retried on transient failures; broadcasts are sent exactly once.

    Parameters
    ----------
    api_key : str | None
        Bearer token sent with every request
    base_url : str
        API base URL
    timeout : float
        Request timeout in seconds
    retry_config : RetryConfig | None
        Retry policy for reads
    transport : httpx.AsyncBaseTransport | None
        Custom transport (e.g., ``httpx.MockTransport`` in tests)
    sleep : Callable[[float], Awaitable[None]]
        Coroutine used to wait between retries

    """

    BASE_URL = "https://api.cdp.coinbase.com/platform"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.base_url = base_url
        self.retry_config = retry_config or RetryConfig()
        self._sleep = sleep

        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "CDPClient":
        """
        Build a client from packaged settings and environment overrides.

        Keyword arguments override the loaded settings.

        """
        api = get_api_config()
        options: dict[str, Any] = {
            "api_key": api["api_key"],
            "base_url": api["base_url"],
            "timeout": float(api["timeout"]),
            "retry_config": RetryConfig(**get_retry_config()),
        }
        options.update(kwargs)
        return cls(**options)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request and decode its JSON body.

        Raises
        ------
        APIError
            If the API answers with an error status
        TransportError
            If the request fails or the body is not JSON

        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self.client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            msg = f"Request timeout: {e}"
            raise TransportError(msg) from e
        except httpx.HTTPStatusError as e:
            raise self._api_error(e.response) from e
        except httpx.HTTPError as e:
            msg = f"HTTP request failed: {e}"
            raise TransportError(msg) from e

        try:
            return response.json()
        except ValueError as e:
            msg = f"Malformed response body from {method} {path}: {e}"
            raise TransportError(msg) from e

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await retry_call(
            self._request,
            "GET",
            path,
            params,
            config=self.retry_config,
            sleep=self._sleep,
        )

    @staticmethod
    def _api_error(response: httpx.Response) -> APIError:
        api_code = None
        api_message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            api_code = body.get("code")
            api_message = body.get("message")

        msg = f"HTTP error {response.status_code}: {api_message or response.reason_phrase}"
        return APIError(msg, response.status_code, api_code=api_code, api_message=api_message)

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            msg = f"Malformed {model.__name__} response: {e}"
            raise TransportError(msg) from e

    async def get_transfer(self, wallet_id: str, address_id: str, transfer_id: str) -> TransferModel:
        """
        Fetch a transfer.

        Parameters
        ----------
        wallet_id : str
            Wallet owning the source address
        address_id : str
            Source address
        transfer_id : str
            Transfer identifier

        Returns
        -------
        TransferModel
            Latest transfer snapshot

        """
        path = f"/v1/wallets/{wallet_id}/addresses/{address_id}/transfers/{transfer_id}"
        return self._parse(TransferModel, await self._get(path))

    async def broadcast_transfer(
        self,
        wallet_id: str,
        address_id: str,
        transfer_id: str,
        signed_payload: str,
    ) -> TransferModel:
        """
        Broadcast a signed transfer. Never retried.

        Parameters
        ----------
        wallet_id : str
            Wallet owning the source address
        address_id : str
            Source address
        transfer_id : str
            Transfer identifier
        signed_payload : str
            Hex-encoded signed transaction or typed data signature

        Returns
        -------
        TransferModel
            Post-broadcast transfer snapshot

        """
        path = f"/v1/wallets/{wallet_id}/addresses/{address_id}/transfers/{transfer_id}/broadcast"
        data = await self._request("POST", path, json={"signed_payload": signed_payload})
        return self._parse(TransferModel, data)

    async def get_asset(self, network_id: str, asset_id: str) -> AssetModel:
        """Fetch an asset, including its decimal precision."""
        path = f"/v1/networks/{network_id}/assets/{asset_id}"
        return self._parse(AssetModel, await self._get(path))

    async def fetch_staking_balances(
        self,
        network_id: str,
        asset_id: str,
        address_id: str,
        start_time: str,
        end_time: str,
        limit: int,
        page: str | None = None,
    ) -> Page[StakingBalanceModel]:
        """
        Fetch one page of historical staking balances.

        Parameters
        ----------
        network_id : str
            Network identifier
        asset_id : str
            Staked asset
        address_id : str
            Onchain address
        start_time : str
            ISO 8601 start of the interval
        end_time : str
            ISO 8601 end of the interval
        limit : int
            Page size
        page : str | None
            Cursor; omitted from the request when None

        Returns
        -------
        Page[StakingBalanceModel]
            Balances with the next page cursor

        """
        params: dict[str, Any] = {
            "asset_id": asset_id,
            "start_time": start_time,
            "end_time": end_time,
            "limit": limit,
        }
        if page:
            params["page"] = page

        path = f"/v1/networks/{network_id}/addresses/{address_id}/stake/balances"
        return self._parse(Page[StakingBalanceModel], await self._get(path, params))

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "CDPClient":
        """Context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: object | None,
    ) -> None:
        """Context manager exit."""
        await self.aclose()
