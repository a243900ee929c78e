"""Interfaces of the collaborators transfers and listings depend on."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from onchain_transfers.core.models import AssetModel, Page, StakingBalanceModel, TransferModel

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class TransferAPI(Protocol):
    """
    Remote operations on transfers.

    Methods
    -------
    get_transfer(wallet_id, address_id, transfer_id)
        Fetch the latest transfer snapshot
    broadcast_transfer(wallet_id, address_id, transfer_id, signed_payload)
        Submit a signed payload and return the post-broadcast snapshot

    """

    async def get_transfer(self, wallet_id: str, address_id: str, transfer_id: str) -> TransferModel: ...

    async def broadcast_transfer(
        self,
        wallet_id: str,
        address_id: str,
        transfer_id: str,
        signed_payload: str,
    ) -> TransferModel: ...


class AssetAPI(Protocol):
    """Lookup of asset decimal precision."""

    async def get_asset(self, network_id: str, asset_id: str) -> AssetModel: ...


class StakeAPI(AssetAPI, Protocol):
    """
    Remote listing of historical staking balances.

    ``page`` is None for the first page; implementations must then omit the
    cursor parameter from the request entirely.

    """

    async def fetch_staking_balances(
        self,
        network_id: str,
        asset_id: str,
        address_id: str,
        start_time: str,
        end_time: str,
        limit: int,
        page: str | None = None,
    ) -> Page[StakingBalanceModel]: ...


class Signer(Protocol):
    """
    Opaque signing capability.

    Both methods return the signature hex-encoded. Implementations raise on refusal.

    """

    def sign_transaction(self, transaction: dict[str, Any]) -> str: ...

    def sign_hash(self, message_hash: str) -> str: ...
