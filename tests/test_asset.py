"""Tests for assets, asset amounts, and balance maps."""

import json
from decimal import Decimal

import pytest

from onchain_transfers.core.asset import Asset, AssetAmount, BalanceMap, to_whole_units
from onchain_transfers.core.models import AssetModel, BalanceModel

ETH = AssetModel(network_id="base-sepolia", asset_id="eth", decimals=18)
USDC = AssetModel(network_id="base-sepolia", asset_id="usdc", decimals=6)


def test_to_whole_units():
    """Test base-unit amounts are scaled by the asset precision."""
    assert to_whole_units(10**18, 18) == Decimal(1)
    assert to_whole_units(1_500_000, 6) == Decimal("1.5")
    assert to_whole_units(0, 18) == Decimal(0)


def test_asset_from_model_requires_decimals():
    """Test an asset without precision cannot convert amounts."""
    with pytest.raises(ValueError, match="no decimals"):
        Asset.from_model(AssetModel(network_id="base-sepolia", asset_id="eth"))


@pytest.mark.asyncio
async def test_asset_fetch():
    """Test the asset is looked up through the API client."""

    class Client:
        async def get_asset(self, network_id, asset_id):
            return USDC

    asset = await Asset.fetch(Client(), "base-sepolia", "usdc")

    assert asset.decimals == 6
    assert asset.from_atomic_amount(2_500_000) == Decimal("2.5")


def test_asset_amount_prefers_balance_precision():
    """Test a balance's own asset precision wins over the listing asset."""
    balance = BalanceModel(amount=1_000_000, asset=USDC)

    amount = AssetAmount.from_balance(balance, Asset.from_model(ETH))

    assert amount.amount == Decimal(1)
    assert amount.asset_id == "usdc"


def test_asset_amount_falls_back_to_asset():
    """Test a bare balance uses the given asset."""
    amount = AssetAmount.from_balance(BalanceModel(amount=3 * 10**17), Asset.from_model(ETH))

    assert amount.amount == Decimal("0.3")
    assert amount.asset_id == "eth"
    assert amount.network_id == "base-sepolia"
    assert str(amount) == "AssetAmount{amount: '0.3', asset_id: 'eth'}"


def test_balance_map_from_balances():
    """Test balances are keyed by asset id."""
    balance_map = BalanceMap.from_balances(
        [
            BalanceModel(amount=2 * 10**18, asset=ETH),
            BalanceModel(amount=1_250_000, asset=USDC),
        ]
    )

    assert balance_map == {"eth": Decimal(2), "usdc": Decimal("1.25")}
    assert json.loads(str(balance_map)) == {"eth": "2", "usdc": "1.25"}


def test_balance_map_add_replaces():
    """Test adding an amount for an existing asset replaces it."""
    balance_map = BalanceMap()
    balance_map.add(AssetAmount(amount=Decimal(1), asset_id="eth", network_id="base-sepolia"))
    balance_map.add(AssetAmount(amount=Decimal(5), asset_id="eth", network_id="base-sepolia"))

    assert balance_map == {"eth": Decimal(5)}


def test_balance_map_never_prints_exponents():
    """Test tiny and large balances print as plain decimals."""
    balance_map = BalanceMap({"wei": Decimal("0.000000000000000001"), "big": Decimal("1E+3")})

    assert json.loads(str(balance_map)) == {"wei": "0.000000000000000001", "big": "1000"}


def test_balance_map_requires_asset():
    """Test a balance without its asset is rejected."""
    with pytest.raises(ValueError, match="no asset"):
        BalanceMap.from_balances([BalanceModel(amount=1)])
