"""Core RPC and classification components."""

from zcash_client.core.rpc_client import ZcashRPCClient
from zcash_client.core.classifier import BlockSummary, TransactionKind, classify_transaction, summarize_block

__all__ = [
    "ZcashRPCClient",
    "BlockSummary",
    "TransactionKind",
    "classify_transaction",
    "summarize_block",
]
