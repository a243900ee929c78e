"""Signing capabilities for transfers."""

from onchain_transfers.signing.local import LocalAccountSigner

__all__ = [
    "LocalAccountSigner",
]
