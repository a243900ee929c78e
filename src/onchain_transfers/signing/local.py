"""Signer backed by a local private key."""

from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount


def _hex(value: bytes) -> str:
    return bytes(value).hex()


class LocalAccountSigner:
    """
    Signs transactions and typed-data hashes with an in-memory key.

    Implements the ``Signer`` interface. Signatures are returned as hex without
    a 0x prefix.

    Parameters
    ----------
    account : LocalAccount
        eth-account local account holding the private key

    """

    def __init__(self, account: LocalAccount) -> None:
        self.account = account

    @classmethod
    def from_key(cls, private_key: str) -> "LocalAccountSigner":
        """Create a signer from a hex-encoded private key."""
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        return self.account.address

    def sign_transaction(self, transaction: dict[str, Any]) -> str:
        """
        Sign a transaction dict.

        Parameters
        ----------
        transaction : dict[str, Any]
            Transaction fields as accepted by eth-account

        Returns
        -------
        str
            RLP-encoded signed transaction, hex

        """
        signed = self.account.sign_transaction(transaction)
        return _hex(signed.raw_transaction)

    def sign_hash(self, message_hash: str) -> str:
        """
        Sign a 32-byte hash, such as an EIP-712 typed data hash.

        Parameters
        ----------
        message_hash : str
            Hex-encoded hash, with or without a 0x prefix

        Returns
        -------
        str
            65-byte signature, hex

        """
        digest = bytes.fromhex(message_hash.removeprefix("0x"))
        signed = self.account.unsafe_sign_hash(digest)
        return _hex(signed.signature)

    def __repr__(self) -> str:
        return f"LocalAccountSigner(address={self.address!r})"
