"""Shared fixtures and fakes for onchain-transfers tests."""

import json
from typing import Any

import pytest

from onchain_transfers.core.models import (
    AssetModel,
    Page,
    StakingBalanceModel,
    TransferModel,
)

WALLET_ID = "wallet-1"
ADDRESS_ID = "0x1111111111111111111111111111111111111111"
DESTINATION = "0x2222222222222222222222222222222222222222"
TRANSFER_ID = "transfer-1"

# Well-known test key (hardhat account #0), never used on a real network
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


def unsigned_payload(**overrides: Any) -> str:
    """Hex encoding of a JSON EIP-1559 transaction as served by the API."""
    payload = {
        "chainId": "0x14a34",
        "nonce": "0x0",
        "maxPriorityFeePerGas": "0x59682f00",
        "maxFeePerGas": "0x59682f72",
        "gas": "0x5208",
        "to": DESTINATION,
        "value": "0x5af3107a4000",
        "input": "0x",
    }
    payload.update(overrides)
    return json.dumps(payload).encode("utf-8").hex()


def make_transfer_model(
    transaction: dict[str, Any] | None = None,
    sponsored_send: dict[str, Any] | None = None,
    **overrides: Any,
) -> TransferModel:
    """Build a transfer snapshot, optionally embedding a delegate record."""
    data: dict[str, Any] = {
        "transfer_id": TRANSFER_ID,
        "network_id": "base-sepolia",
        "wallet_id": WALLET_ID,
        "address_id": ADDRESS_ID,
        "destination": DESTINATION,
        "asset_id": "eth",
        "amount": "100000000000000",
        "asset": {"network_id": "base-sepolia", "asset_id": "eth", "decimals": 18},
        "gasless": sponsored_send is not None,
    }
    if transaction is not None:
        data["transaction"] = {
            "network_id": "base-sepolia",
            "from_address_id": ADDRESS_ID,
            "unsigned_payload": unsigned_payload(),
            "status": "pending",
            **transaction,
        }
    if sponsored_send is not None:
        data["sponsored_send"] = {
            "to_address_id": DESTINATION,
            "raw_typed_data": "{}",
            "typed_data_hash": "0x" + "ab" * 32,
            "status": "pending",
            **sponsored_send,
        }
    data.update(overrides)
    return TransferModel.model_validate(data)


def make_staking_balance_model(day: int, address_id: str = "addr1") -> StakingBalanceModel:
    """Build a staking balance record for the given day of January 2024."""
    asset = {"network_id": "ethereum-mainnet", "asset_id": "eth", "decimals": 18}
    return StakingBalanceModel.model_validate(
        {
            "address_id": address_id,
            "date": f"2024-01-{(day % 28) + 1:02d}T00:00:00Z",
            "participate_type": "delegator",
            "bonded_stake": {"amount": str(32 * 10**18 + day), "asset": asset},
            "unbonded_stake": {"amount": "0", "asset": asset},
            "total_delegation_received": {"amount": str(10**18), "asset": asset},
        }
    )


class FakeTransferAPI:
    """
    In-memory ``TransferAPI``.

    ``get_transfer`` returns the queued snapshots in order and keeps returning
    the last one once the queue is down to a single entry.

    """

    def __init__(
        self,
        snapshots: list[TransferModel] | None = None,
        broadcast_result: TransferModel | Exception | None = None,
    ) -> None:
        self.snapshots = list(snapshots or [])
        self.broadcast_result = broadcast_result
        self.get_calls: list[tuple[str, str, str]] = []
        self.broadcast_calls: list[tuple[str, str, str, str]] = []

    async def get_transfer(self, wallet_id: str, address_id: str, transfer_id: str) -> TransferModel:
        self.get_calls.append((wallet_id, address_id, transfer_id))
        snapshot = self.snapshots[0]
        if len(self.snapshots) > 1:
            self.snapshots.pop(0)
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot

    async def broadcast_transfer(
        self,
        wallet_id: str,
        address_id: str,
        transfer_id: str,
        signed_payload: str,
    ) -> TransferModel:
        self.broadcast_calls.append((wallet_id, address_id, transfer_id, signed_payload))
        if isinstance(self.broadcast_result, Exception):
            raise self.broadcast_result
        return self.broadcast_result


class FakeStakeAPI:
    """In-memory ``StakeAPI`` serving a fixed sequence of pages."""

    def __init__(self, pages: list[Page[StakingBalanceModel] | Exception], decimals: int | None = 18) -> None:
        self.pages = list(pages)
        self.decimals = decimals
        self.page_calls: list[dict[str, Any]] = []
        self.asset_calls: list[tuple[str, str]] = []

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
        self.page_calls.append(
            {
                "network_id": network_id,
                "asset_id": asset_id,
                "address_id": address_id,
                "start_time": start_time,
                "end_time": end_time,
                "limit": limit,
                "page": page,
            }
        )
        result = self.pages.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def get_asset(self, network_id: str, asset_id: str) -> AssetModel:
        self.asset_calls.append((network_id, asset_id))
        return AssetModel(network_id=network_id, asset_id=asset_id, decimals=self.decimals)


class FakeClock:
    """Deterministic clock whose ``sleep`` advances time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def signer():
    from onchain_transfers.signing import LocalAccountSigner

    return LocalAccountSigner.from_key(PRIVATE_KEY)
