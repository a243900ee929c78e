"""Send delegates: the mechanisms that actually move funds for a transfer."""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import StrEnum
from typing import Any, ClassVar

from onchain_transfers.core.errors import SigningError
from onchain_transfers.core.interfaces import Signer
from onchain_transfers.core.models import (
    SponsoredSendModel,
    SponsoredSendStatus,
    TransactionModel,
    TransactionStatus,
    TransferStatus,
)

# EIP-1559 dynamic fee transaction
EIP1559_TRANSACTION_TYPE = 2


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def _to_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value[:2].lower() == "0x" else int(value)
    return int(value)


class SendDelegate(ABC):
    """
    Uniform capability surface over the record that backs a transfer.

    Subclasses wrap one embedded API record and map its raw status vocabulary
    onto ``TransferStatus`` through ``STATUS_MAP``. A delegate is a view over a
    single snapshot; a signature produced by ``sign`` lives on the delegate until
    the owning transfer swaps in a new snapshot.

    """

    STATUS_MAP: ClassVar[dict[str, TransferStatus]] = {}
    RAW_STATUS: ClassVar[type[StrEnum]]

    def __init__(self, model: TransactionModel | SponsoredSendModel) -> None:
        self._model = model
        self._signature: str | None = None

    @property
    def model(self) -> TransactionModel | SponsoredSendModel:
        return self._model

    @property
    @abstractmethod
    def signature(self) -> str | None:
        """Signed payload hex, if signed."""

    @abstractmethod
    def sign(self, signer: Signer) -> str:
        """
        Sign the delegate's payload.

        Parameters
        ----------
        signer : Signer
            Signing capability

        Returns
        -------
        str
            Hex-encoded signed payload, without a 0x prefix

        Raises
        ------
        SigningError
            If there is nothing to sign or the signer refuses

        """

    def is_signed(self) -> bool:
        return self.signature is not None

    @property
    def status(self) -> StrEnum | str | None:
        """Raw status; unrecognized values are returned as plain strings."""
        raw = self._model.status
        if raw is None:
            return None
        try:
            return self.RAW_STATUS(raw)
        except ValueError:
            return raw

    @property
    def transfer_status(self) -> TransferStatus | None:
        """Unified status, or None when the raw status is not recognized."""
        if self._model.status is None:
            return None
        return self.STATUS_MAP.get(self._model.status)

    @property
    def transaction_hash(self) -> str | None:
        return self._model.transaction_hash

    @property
    def transaction_link(self) -> str | None:
        """Block explorer link; only available once a hash exists."""
        if not self.transaction_hash:
            return None
        return self._model.transaction_link

    @property
    def to_address_id(self) -> str | None:
        return self._model.to_address_id

    def _sign_with(self, sign: Callable[[Any], str], payload: Any) -> str:
        try:
            signed = sign(payload)
        except SigningError:
            raise
        except Exception as e:
            msg = f"Signer rejected {type(self).__name__}: {e}"
            raise SigningError(msg) from e
        self._signature = _strip_hex_prefix(signed)
        return self._signature


class OnchainTransaction(SendDelegate):
    """
    Conventional transaction signed by the sender and broadcast by the API.

    Parameters
    ----------
    model : TransactionModel
        Transaction record embedded in the transfer

    """

    STATUS_MAP = {
        TransactionStatus.PENDING: TransferStatus.PENDING,
        TransactionStatus.BROADCAST: TransferStatus.BROADCAST,
        TransactionStatus.COMPLETE: TransferStatus.COMPLETE,
        TransactionStatus.FAILED: TransferStatus.FAILED,
    }
    RAW_STATUS = TransactionStatus

    _model: TransactionModel

    def __init__(self, model: TransactionModel) -> None:
        super().__init__(model)

    @property
    def signature(self) -> str | None:
        return self._signature or self._model.signed_payload

    @property
    def unsigned_payload(self) -> str:
        return self._model.unsigned_payload

    @property
    def from_address_id(self) -> str:
        return self._model.from_address_id

    @property
    def raw(self) -> dict[str, Any]:
        """
        Decode the unsigned payload into a transaction dict ready for signing.

        The payload is the hex encoding of a JSON object whose numeric fields are
        0x-prefixed hex strings.

        Raises
        ------
        SigningError
            If there is no payload or it cannot be decoded

        """
        if not self.unsigned_payload:
            msg = "Transaction has no unsigned payload to sign"
            raise SigningError(msg)

        try:
            parsed = json.loads(bytes.fromhex(_strip_hex_prefix(self.unsigned_payload)).decode("utf-8"))
            return {
                "type": EIP1559_TRANSACTION_TYPE,
                "chainId": _to_int(parsed["chainId"]),
                "nonce": _to_int(parsed["nonce"]),
                "maxPriorityFeePerGas": _to_int(parsed["maxPriorityFeePerGas"]),
                "maxFeePerGas": _to_int(parsed["maxFeePerGas"]),
                "gas": _to_int(parsed["gas"]),
                "to": parsed["to"],
                "value": _to_int(parsed["value"]),
                "data": parsed.get("input") or "0x",
            }
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Malformed unsigned payload: {e}"
            raise SigningError(msg) from e

    def sign(self, signer: Signer) -> str:
        return self._sign_with(signer.sign_transaction, self.raw)

    def __str__(self) -> str:
        return (
            f"Transaction{{transaction_hash: '{self.transaction_hash}', "
            f"status: '{self.status}', transaction_link: '{self.transaction_link}'}}"
        )


class SponsoredSend(SendDelegate):
    """
    Gasless send: the sender signs typed data and a sponsor relays it on-chain.

    Parameters
    ----------
    model : SponsoredSendModel
        Sponsored send record embedded in the transfer

    """

    # "signed" is still pre-broadcast, like a pending transaction
    STATUS_MAP = {
        SponsoredSendStatus.PENDING: TransferStatus.PENDING,
        SponsoredSendStatus.SIGNED: TransferStatus.PENDING,
        SponsoredSendStatus.SUBMITTED: TransferStatus.BROADCAST,
        SponsoredSendStatus.COMPLETE: TransferStatus.COMPLETE,
        SponsoredSendStatus.FAILED: TransferStatus.FAILED,
    }
    RAW_STATUS = SponsoredSendStatus

    _model: SponsoredSendModel

    def __init__(self, model: SponsoredSendModel) -> None:
        super().__init__(model)

    @property
    def signature(self) -> str | None:
        return self._signature or self._model.signature

    @property
    def typed_data_hash(self) -> str:
        return self._model.typed_data_hash

    def sign(self, signer: Signer) -> str:
        if not self.typed_data_hash:
            msg = "Sponsored send has no typed data hash to sign"
            raise SigningError(msg)
        return self._sign_with(signer.sign_hash, self.typed_data_hash)

    def __str__(self) -> str:
        return (
            f"SponsoredSend{{transaction_hash: '{self.transaction_hash}', "
            f"status: '{self.status}', transaction_link: '{self.transaction_link}'}}"
        )
