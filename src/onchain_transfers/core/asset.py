"""Assets and conversion of base-unit amounts to decimal amounts."""

import json
from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel

from onchain_transfers.core.interfaces import AssetAPI
from onchain_transfers.core.models import AssetModel, BalanceModel


def to_whole_units(atomic_amount: int, decimals: int) -> Decimal:
    """
    Convert an amount in base units to whole units.

    Parameters
    ----------
    atomic_amount : int
        Amount in base units (e.g., wei)
    decimals : int
        Decimal precision of the asset

    Returns
    -------
    Decimal
        Amount in whole units (e.g., ETH)

    """
    return Decimal(atomic_amount) / Decimal(10**decimals)


class Asset(BaseModel):
    """
    Asset with a known decimal precision.

    Attributes
    ----------
    network_id : str
        Network the asset lives on
    asset_id : str
        Asset identifier
    decimals : int
        Number of decimal places of the base unit
    contract_address : str | None
        Token contract address, absent for native assets

    """

    network_id: str
    asset_id: str
    decimals: int
    contract_address: str | None = None

    @classmethod
    def from_model(cls, model: AssetModel) -> "Asset":
        if model.decimals is None:
            msg = f"Asset {model.asset_id} on {model.network_id} has no decimals"
            raise ValueError(msg)
        return cls(
            network_id=model.network_id,
            asset_id=model.asset_id,
            decimals=model.decimals,
            contract_address=model.contract_address,
        )

    @classmethod
    async def fetch(cls, client: AssetAPI, network_id: str, asset_id: str) -> "Asset":
        """
        Look up an asset's precision from the API.

        Parameters
        ----------
        client : AssetAPI
            API client
        network_id : str
            Network identifier
        asset_id : str
            Asset identifier

        Returns
        -------
        Asset
            The fetched asset

        """
        return cls.from_model(await client.get_asset(network_id, asset_id))

    def from_atomic_amount(self, atomic_amount: int) -> Decimal:
        """Convert base units of this asset to whole units."""
        return to_whole_units(atomic_amount, self.decimals)


class AssetAmount(BaseModel):
    """
    Decimal amount of an asset.

    Attributes
    ----------
    amount : Decimal
        Amount in whole units
    asset_id : str
        Asset identifier
    network_id : str
        Network identifier

    """

    amount: Decimal
    asset_id: str
    network_id: str

    @classmethod
    def from_balance(cls, balance: BalanceModel, asset: Asset) -> "AssetAmount":
        """
        Build an amount from a base-unit balance.

        The balance's own asset precision wins over ``asset`` when both are known.

        """
        decimals = asset.decimals
        if balance.asset is not None and balance.asset.decimals is not None:
            decimals = balance.asset.decimals
        return cls(
            amount=to_whole_units(balance.amount, decimals),
            asset_id=balance.asset.asset_id if balance.asset else asset.asset_id,
            network_id=balance.asset.network_id if balance.asset else asset.network_id,
        )

    def __str__(self) -> str:
        return f"AssetAmount{{amount: '{self.amount}', asset_id: '{self.asset_id}'}}"


class BalanceMap(dict[str, Decimal]):
    """Mapping of asset id to decimal balance."""

    @classmethod
    def from_balances(cls, balances: Iterable[BalanceModel]) -> "BalanceMap":
        """
        Build a map from base-unit balances.

        Parameters
        ----------
        balances : Iterable[BalanceModel]
            Balances fetched from the API; each must carry its asset

        Returns
        -------
        BalanceMap
            Decimal balance per asset id

        """
        balance_map = cls()
        for balance in balances:
            if balance.asset is None:
                msg = "Balance has no asset"
                raise ValueError(msg)
            balance_map.add(AssetAmount.from_balance(balance, Asset.from_model(balance.asset)))
        return balance_map

    def add(self, amount: AssetAmount) -> None:
        """Set the balance for the amount's asset, replacing any previous value."""
        self[amount.asset_id] = amount.amount

    def __str__(self) -> str:
        result = {}
        for asset_id, value in self.items():
            # Integral values print without a fractional part
            if value == value.to_integral_value():
                result[asset_id] = str(int(value))
            else:
                result[asset_id] = format(value.normalize(), "f")
        return json.dumps(result)
