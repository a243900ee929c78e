"""Transfers of an asset from a wallet address to another address."""

import asyncio
import logging
import time
from decimal import Decimal

from onchain_transfers.core.asset import to_whole_units
from onchain_transfers.core.delegates import OnchainTransaction, SendDelegate, SponsoredSend
from onchain_transfers.core.errors import InvalidStateError, TransferTimeoutError
from onchain_transfers.core.interfaces import Clock, Signer, Sleep, TransferAPI
from onchain_transfers.core.models import TransferModel, TransferStatus

logger = logging.getLogger(__name__)

DEFAULT_WAIT_INTERVAL_SECONDS = 0.2
DEFAULT_WAIT_TIMEOUT_SECONDS = 10.0


def select_delegate(model: TransferModel) -> SendDelegate | None:
    """
    Pick the delegate that moves funds for a transfer snapshot.

    Prefers the on-chain transaction, then the sponsored send.

    Parameters
    ----------
    model : TransferModel
        Transfer snapshot

    Returns
    -------
    SendDelegate | None
        Active delegate, or None if the transfer has no on-chain activity yet

    """
    if model.transaction is not None:
        return OnchainTransaction(model.transaction)
    if model.sponsored_send is not None:
        return SponsoredSend(model.sponsored_send)
    return None


class Transfer:
    """
    A movement of an amount of an asset from a wallet address to another address.

    The transfer holds the latest snapshot fetched from the API. Reloading or
    broadcasting replaces the snapshot as a whole; it is never merged field by
    field.

    Parameters
    ----------
    model : TransferModel
        Transfer snapshot
    client : TransferAPI
        API client used to reload and broadcast
    clock : Clock
        Monotonic time source in seconds
    sleep : Sleep
        Coroutine suspending for a number of seconds

    """

    def __init__(
        self,
        model: TransferModel,
        client: TransferAPI,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._clock = clock
        self._sleep = sleep
        self._replace(model)

    @classmethod
    async def fetch(
        cls,
        client: TransferAPI,
        wallet_id: str,
        address_id: str,
        transfer_id: str,
    ) -> "Transfer":
        """Fetch a transfer by id."""
        return cls(await client.get_transfer(wallet_id, address_id, transfer_id), client)

    def _replace(self, model: TransferModel) -> None:
        # Snapshot and its delegate are swapped together
        self._state = (model, select_delegate(model))

    @property
    def model(self) -> TransferModel:
        return self._state[0]

    @property
    def id(self) -> str:
        return self.model.transfer_id

    @property
    def network_id(self) -> str:
        return self.model.network_id

    @property
    def wallet_id(self) -> str:
        return self.model.wallet_id

    @property
    def from_address_id(self) -> str:
        return self.model.address_id

    @property
    def destination_address_id(self) -> str:
        return self.model.destination

    @property
    def asset_id(self) -> str:
        return self.model.asset_id

    @property
    def atomic_amount(self) -> int:
        return self.model.amount

    @property
    def amount(self) -> Decimal:
        """Amount in whole units of the asset."""
        decimals = self.model.asset.decimals
        if decimals is None:
            msg = f"Transfer {self.id} asset {self.asset_id} has no decimals"
            raise InvalidStateError(msg)
        return to_whole_units(self.model.amount, decimals)

    @property
    def transaction(self) -> OnchainTransaction | None:
        """On-chain transaction of the snapshot, whether or not it is the active delegate."""
        delegate = self.send_transaction_delegate
        if isinstance(delegate, OnchainTransaction):
            return delegate
        if self.model.transaction is not None:
            return OnchainTransaction(self.model.transaction)
        return None

    @property
    def sponsored_send(self) -> SponsoredSend | None:
        """Sponsored send of the snapshot, whether or not it is the active delegate."""
        delegate = self.send_transaction_delegate
        if isinstance(delegate, SponsoredSend):
            return delegate
        if self.model.sponsored_send is not None:
            return SponsoredSend(self.model.sponsored_send)
        return None

    @property
    def send_transaction_delegate(self) -> SendDelegate | None:
        return self._state[1]

    @property
    def transaction_hash(self) -> str | None:
        delegate = self.send_transaction_delegate
        return delegate.transaction_hash if delegate else None

    @property
    def transaction_link(self) -> str | None:
        delegate = self.send_transaction_delegate
        return delegate.transaction_link if delegate else None

    @property
    def status(self) -> TransferStatus | None:
        """Unified status; None when there is no delegate or its raw status is unknown."""
        delegate = self.send_transaction_delegate
        return delegate.transfer_status if delegate else None

    def sign(self, signer: Signer) -> str:
        """
        Sign the transfer's delegate.

        Parameters
        ----------
        signer : Signer
            Signing capability

        Returns
        -------
        str
            Hex-encoded signed payload required for broadcasting

        Raises
        ------
        InvalidStateError
            If the transfer has nothing to sign yet
        SigningError
            If the payload cannot be signed

        """
        delegate = self.send_transaction_delegate
        if delegate is None:
            msg = "cannot sign transfer without a transaction"
            raise InvalidStateError(msg)
        return delegate.sign(signer)

    async def broadcast(self) -> "Transfer":
        """
        Submit the signed transfer to the network.

        Returns
        -------
        Transfer
            This transfer, holding the post-broadcast snapshot

        Raises
        ------
        InvalidStateError
            If the transfer is not signed; no request is made
        TransportError
            If the broadcast request fails; the prior snapshot is kept

        """
        delegate = self.send_transaction_delegate
        if delegate is None or not delegate.is_signed():
            msg = "cannot broadcast unsigned transfer"
            raise InvalidStateError(msg)

        model = await self._client.broadcast_transfer(
            self.wallet_id,
            self.from_address_id,
            self.id,
            delegate.signature,
        )
        self._replace(model)
        return self

    async def reload(self) -> "Transfer":
        """Replace the snapshot with the latest one from the API."""
        model = await self._client.get_transfer(self.wallet_id, self.from_address_id, self.id)
        self._replace(model)
        return self

    async def wait(
        self,
        interval_seconds: float = DEFAULT_WAIT_INTERVAL_SECONDS,
        timeout_seconds: float = DEFAULT_WAIT_TIMEOUT_SECONDS,
    ) -> "Transfer":
        """
        Poll until the transfer completes or fails on-chain.

        An unrecognized status is not terminal and keeps the loop polling.

        Parameters
        ----------
        interval_seconds : float
            Seconds to sleep between polls
        timeout_seconds : float
            Maximum seconds to wait

        Returns
        -------
        Transfer
            This transfer, in a terminal status

        Raises
        ------
        TransferTimeoutError
            If no terminal status is observed before the timeout
        TransportError
            If a reload fails

        """
        start_time = self._clock()

        while self._clock() - start_time < timeout_seconds:
            await self.reload()

            status = self.status
            logger.debug("Transfer %s status: %s", self.id, status)
            if status is not None and status.is_terminal:
                return self

            await self._sleep(interval_seconds)

        msg = "transfer timed out"
        raise TransferTimeoutError(msg)

    def __str__(self) -> str:
        # Base units are shown only when the asset precision is unknown
        amount = self.amount if self.model.asset.decimals is not None else self.atomic_amount
        return (
            f"Transfer{{transfer_id: '{self.id}', network_id: '{self.network_id}', "
            f"from_address_id: '{self.from_address_id}', "
            f"destination_address_id: '{self.destination_address_id}', "
            f"asset_id: '{self.asset_id}', amount: '{amount}', "
            f"transaction_hash: '{self.transaction_hash}', "
            f"transaction_link: '{self.transaction_link}', status: '{self.status}'}}"
        )

    def __repr__(self) -> str:
        return str(self)
