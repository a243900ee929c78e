"""Asset transfers with confirmation polling, and paginated staking balance history."""

from onchain_transfers.core import (
    Asset,
    AssetAmount,
    BalanceMap,
    StakingBalance,
    Transfer,
    TransferStatus,
)
from onchain_transfers.integrations import CDPClient
from onchain_transfers.signing import LocalAccountSigner

__version__ = "0.1.0"

__all__ = [
    "Asset",
    "AssetAmount",
    "BalanceMap",
    "CDPClient",
    "LocalAccountSigner",
    "StakingBalance",
    "Transfer",
    "TransferStatus",
]
