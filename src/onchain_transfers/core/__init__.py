"""Core functionality including models, delegates, transfers, and staking balances."""

from onchain_transfers.core.asset import Asset, AssetAmount, BalanceMap, to_whole_units
from onchain_transfers.core.delegates import OnchainTransaction, SendDelegate, SponsoredSend
from onchain_transfers.core.errors import (
    APIError,
    InvalidStateError,
    OnchainTransfersError,
    ProtocolViolationError,
    SigningError,
    TransferTimeoutError,
    TransportError,
)
from onchain_transfers.core.models import (
    AssetModel,
    BalanceModel,
    Page,
    SponsoredSendModel,
    SponsoredSendStatus,
    StakingBalanceModel,
    TransactionModel,
    TransactionStatus,
    TransferModel,
    TransferStatus,
)
from onchain_transfers.core.pagination import collect_pages, iter_pages
from onchain_transfers.core.staking_balance import STAKING_BALANCES_PAGE_SIZE, StakingBalance
from onchain_transfers.core.transfer import Transfer, select_delegate

__all__ = [
    "STAKING_BALANCES_PAGE_SIZE",
    "APIError",
    "Asset",
    "AssetAmount",
    "AssetModel",
    "BalanceMap",
    "BalanceModel",
    "InvalidStateError",
    "OnchainTransaction",
    "OnchainTransfersError",
    "Page",
    "ProtocolViolationError",
    "SendDelegate",
    "SigningError",
    "SponsoredSend",
    "SponsoredSendModel",
    "SponsoredSendStatus",
    "StakingBalance",
    "StakingBalanceModel",
    "TransactionModel",
    "TransactionStatus",
    "Transfer",
    "TransferModel",
    "TransferStatus",
    "TransferTimeoutError",
    "TransportError",
    "collect_pages",
    "iter_pages",
    "select_delegate",
    "to_whole_units",
]
