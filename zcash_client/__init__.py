"""
Zcash RPC Client

A typed client for the zcashd JSON-RPC interface, with transaction shielding
classification and ZEC/zatoshi amount conversion.
"""

__version__ = "1.0.0"
__description__ = "Typed zcashd JSON-RPC client and transaction classifier"

from zcash_client.core.rpc_client import ZcashRPCClient
from zcash_client.core.classifier import TransactionKind, classify_transaction, summarize_block
from zcash_client.core.exceptions import (
    ZcashClientError,
    ConversionError,
    SerializationError,
    NotFoundError,
    RPCError,
    TransportError,
    DecodeError,
    RPCServerError,
)
from zcash_client.models.config import ClientConfig, ConnectionConfig
from zcash_client.utils.zcash import ZATOSHI_PER_ZEC, amount_from_zec

__all__ = [
    "ZcashRPCClient",
    "TransactionKind",
    "classify_transaction",
    "summarize_block",
    "ZcashClientError",
    "ConversionError",
    "SerializationError",
    "NotFoundError",
    "RPCError",
    "TransportError",
    "DecodeError",
    "RPCServerError",
    "ClientConfig",
    "ConnectionConfig",
    "ZATOSHI_PER_ZEC",
    "amount_from_zec",
]
