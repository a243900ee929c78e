"""Historical staking balances of an address."""

from datetime import datetime

from onchain_transfers.core.asset import Asset, AssetAmount
from onchain_transfers.core.interfaces import StakeAPI
from onchain_transfers.core.models import Page, StakingBalanceModel
from onchain_transfers.core.pagination import iter_pages
from onchain_transfers.data.loader import normalize_network_id

STAKING_BALANCES_PAGE_SIZE = 100


def _format_time(value: datetime | str) -> str:
    return value.isoformat() if isinstance(value, datetime) else value


class StakingBalance:
    """
    Staking balance of an address on a given day.

    Parameters
    ----------
    model : StakingBalanceModel
        Balance record from the API
    asset : Asset
        Staked asset, used to convert base-unit amounts

    """

    def __init__(self, model: StakingBalanceModel, asset: Asset) -> None:
        self._model = model
        self._asset = asset

    @classmethod
    async def list(
        cls,
        client: StakeAPI,
        network_id: str,
        asset_id: str,
        address_id: str,
        start_time: datetime | str,
        end_time: datetime | str,
    ) -> list["StakingBalance"]:
        """
        Fetch every staking balance of an address between two times.

        Pages are requested until the API reports no more. The asset is looked
        up once per page. If any request fails the error propagates and no
        balances are returned.

        Parameters
        ----------
        client : StakeAPI
            API client
        network_id : str
            Network identifier
        asset_id : str
            Staked asset identifier
        address_id : str
            Onchain address
        start_time : datetime | str
            Start of the interval (inclusive)
        end_time : datetime | str
            End of the interval (inclusive)

        Returns
        -------
        list[StakingBalance]
            Balances in server order

        Raises
        ------
        ValueError
            If start_time is after end_time
        ProtocolViolationError
            If the API reports more pages without a cursor
        TransportError
            If any request fails

        """
        if isinstance(start_time, datetime) and isinstance(end_time, datetime) and start_time > end_time:
            msg = f"start_time {start_time} is after end_time {end_time}"
            raise ValueError(msg)

        async def fetch_page(page: str | None) -> Page[StakingBalanceModel]:
            return await client.fetch_staking_balances(
                normalize_network_id(network_id),
                asset_id,
                address_id,
                _format_time(start_time),
                _format_time(end_time),
                STAKING_BALANCES_PAGE_SIZE,
                page,
            )

        staking_balances = []
        async for page in iter_pages(fetch_page):
            asset = await Asset.fetch(client, network_id, asset_id)
            staking_balances.extend(cls(model, asset) for model in page.data)

        return staking_balances

    @property
    def model(self) -> StakingBalanceModel:
        return self._model

    @property
    def asset(self) -> Asset:
        return self._asset

    @property
    def bonded_stake(self) -> AssetAmount:
        return AssetAmount.from_balance(self._model.bonded_stake, self._asset)

    @property
    def unbonded_stake(self) -> AssetAmount:
        return AssetAmount.from_balance(self._model.unbonded_stake, self._asset)

    @property
    def total_delegation(self) -> AssetAmount:
        return AssetAmount.from_balance(self._model.total_delegation_received, self._asset)

    @property
    def participate_type(self) -> str:
        return self._model.participate_type

    @property
    def date(self) -> datetime:
        return self._model.date

    @property
    def address_id(self) -> str:
        return self._model.address_id

    @property
    def network_id(self) -> str:
        return self._asset.network_id

    def __str__(self) -> str:
        return (
            f"StakingBalance {{ date: '{self.date.isoformat()}' address: '{self.address_id}' "
            f"bonded_stake: '{self.bonded_stake}' unbonded_stake: '{self.unbonded_stake}' "
            f"total_delegation: '{self.total_delegation}' participate_type: '{self.participate_type}' }}"
        )
