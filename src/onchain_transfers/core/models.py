"""API record models for transfers, assets, and staking balances."""

from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class TransferStatus(StrEnum):
    """Unified lifecycle status of a transfer."""

    PENDING = "pending"
    BROADCAST = "broadcast"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition can occur."""
        return self in (TransferStatus.COMPLETE, TransferStatus.FAILED)


class TransactionStatus(StrEnum):
    """Raw status of an on-chain transaction."""

    PENDING = "pending"
    BROADCAST = "broadcast"
    COMPLETE = "complete"
    FAILED = "failed"


class SponsoredSendStatus(StrEnum):
    """Raw status of a sponsored (gasless) send."""

    PENDING = "pending"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    COMPLETE = "complete"
    FAILED = "failed"


class Record(BaseModel):
    """Immutable snapshot of an API object. Unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class AssetModel(Record):
    """
    Asset as returned by the API.

    Attributes
    ----------
    network_id : str
        Network the asset lives on
    asset_id : str
        Asset identifier (e.g., 'eth', 'usdc')
    decimals : int | None
        Number of decimal places of the base unit
    contract_address : str | None
        Token contract address, absent for native assets

    """

    network_id: str
    asset_id: str
    decimals: int | None = None
    contract_address: str | None = None


class TransactionModel(Record):
    """
    On-chain transaction embedded in a transfer.

    Attributes
    ----------
    network_id : str
        Network identifier
    from_address_id : str
        Sending address
    to_address_id : str | None
        Receiving address
    unsigned_payload : str
        Hex encoding of the JSON transaction to sign
    signed_payload : str | None
        Signed wire-format transaction, once signed
    transaction_hash : str | None
        Hash, once broadcast
    transaction_link : str | None
        Block explorer URL, once broadcast
    status : str | None
        Raw transaction status

    """

    network_id: str
    from_address_id: str
    to_address_id: str | None = None
    unsigned_payload: str = ""
    signed_payload: str | None = None
    transaction_hash: str | None = None
    transaction_link: str | None = None
    status: str | None = None


class SponsoredSendModel(Record):
    """
    Sponsored send embedded in a gasless transfer.

    Attributes
    ----------
    to_address_id : str
        Receiving address
    raw_typed_data : str
        EIP-712 typed data being authorized
    typed_data_hash : str
        Hash of the typed data, the value that gets signed
    signature : str | None
        Signature over the typed data hash, once signed
    transaction_hash : str | None
        Hash of the relayed transaction, once submitted
    transaction_link : str | None
        Block explorer URL, once submitted
    status : str | None
        Raw sponsored send status

    """

    to_address_id: str
    raw_typed_data: str = ""
    typed_data_hash: str = ""
    signature: str | None = None
    transaction_hash: str | None = None
    transaction_link: str | None = None
    status: str | None = None


class TransferModel(Record):
    """
    Transfer snapshot as returned by the API.

    Attributes
    ----------
    transfer_id : str
        Transfer identifier
    network_id : str
        Network identifier
    wallet_id : str
        Owning wallet
    address_id : str
        Source address
    destination : str
        Destination address
    asset_id : str
        Asset being moved
    amount : int
        Amount in base units
    asset : AssetModel
        Asset details, including its decimal precision
    transaction : TransactionModel | None
        On-chain transaction backing the transfer
    sponsored_send : SponsoredSendModel | None
        Sponsored send backing a gasless transfer
    gasless : bool
        Whether fees are paid by a sponsor

    """

    transfer_id: str
    network_id: str
    wallet_id: str
    address_id: str
    destination: str
    asset_id: str
    amount: int
    asset: AssetModel
    transaction: TransactionModel | None = None
    sponsored_send: SponsoredSendModel | None = None
    gasless: bool = False


class BalanceModel(Record):
    """Amount of an asset in base units."""

    amount: int
    asset: AssetModel | None = None


class StakingBalanceModel(Record):
    """
    Daily staking balance of an address.

    Attributes
    ----------
    address_id : str
        Onchain address
    date : datetime
        Day the balance was taken
    participate_type : str
        Staking role (e.g., 'delegator', 'validator')
    bonded_stake : BalanceModel
        Stake currently bonded
    unbonded_stake : BalanceModel
        Stake currently unbonded
    total_delegation_received : BalanceModel
        Total delegation received by the address

    """

    address_id: str
    date: datetime
    participate_type: str
    bonded_stake: BalanceModel
    unbonded_stake: BalanceModel
    total_delegation_received: BalanceModel


class Page(Record, Generic[T]):
    """
    One page of a cursor-paginated listing.

    Attributes
    ----------
    data : list[T]
        Records in server order
    has_more : bool
        Whether more pages follow
    next_page : str | None
        Cursor for the next page

    """

    data: list[T] = Field(default_factory=list)
    has_more: bool = False
    next_page: str | None = None
