"""Utility functions and helpers."""

from zcash_client.utils.logging import setup_logging
from zcash_client.utils.zcash import (
    ZATOSHI_PER_ZEC,
    amount_from_zec,
    zatoshi_to_zec,
    format_zec,
    is_valid_txid,
    is_valid_transparent_address,
    serialize_transaction_hex,
    block_time,
)

__all__ = [
    "setup_logging",
    "ZATOSHI_PER_ZEC",
    "amount_from_zec",
    "zatoshi_to_zec",
    "format_zec",
    "is_valid_txid",
    "is_valid_transparent_address",
    "serialize_transaction_hex",
    "block_time",
]
