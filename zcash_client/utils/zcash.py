"""Zcash-specific utility functions."""

import re
import math
import hashlib
import base58
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union
import structlog

from zcash_client.core.exceptions import ConversionError, SerializationError

logger = structlog.get_logger(__name__)

# Zatoshi per ZEC
ZATOSHI_PER_ZEC = 100000000

TXID_PATTERN = re.compile(r'^[0-9a-fA-F]{64}$')

# Two-byte base58check version prefixes for transparent addresses
TRANSPARENT_ADDRESS_PREFIXES = {
    b'\x1c\xb8': "t1",  # mainnet P2PKH
    b'\x1c\xbd': "t3",  # mainnet P2SH
    b'\x1d\x25': "tm",  # testnet P2PKH
    b'\x1c\xba': "t2",  # testnet P2SH
}


def _round_half_away(f: float) -> int:
    if f < 0:
        return int(f - 0.5)
    return int(f + 0.5)


def amount_from_zec(f: float) -> int:
    """
    Convert a floating point ZEC value to an integer zatoshi amount.

    Rounds to the nearest zatoshi, halves away from zero. Fails only when the
    value cannot be represented as an integer at all (NaN or +-Infinity); no
    check against the total supply is made since ``f`` need not describe the
    chain at a single moment in time.

    Raises:
        ConversionError: if ``f`` is NaN or infinite
    """
    if math.isnan(f) or math.isinf(f):
        raise ConversionError(f"invalid zcash amount: {f}")

    scaled = f * ZATOSHI_PER_ZEC
    if math.isinf(scaled):
        # finite input too large for float scaling
        exact = Decimal(f) * ZATOSHI_PER_ZEC
        return int(exact.to_integral_value(rounding=ROUND_HALF_UP))

    return _round_half_away(scaled)


def zatoshi_to_zec(zatoshis: int) -> Decimal:
    """Convert zatoshis to ZEC."""
    return Decimal(zatoshis) / Decimal(ZATOSHI_PER_ZEC)


def format_zec(zatoshis: int) -> str:
    """Format a zatoshi amount for display, e.g. ``1.50000000 ZEC``."""
    return f"{zatoshi_to_zec(zatoshis):.8f} ZEC"


def block_time(timestamp: int) -> datetime:
    """Convert a block header ``time`` (unix seconds) to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def is_valid_txid(value: str) -> bool:
    """Check that a transaction or block id is 64 hex characters."""
    return bool(value) and bool(TXID_PATTERN.match(value))


def is_valid_transparent_address(address: str) -> bool:
    """Validate a transparent (t-) address: base58check, 2-byte prefix, 20-byte hash."""
    if not address:
        return False

    try:
        decoded = base58.b58decode(address)
    except ValueError:
        return False

    if len(decoded) != 26:
        return False

    payload = decoded[:-4]
    checksum = decoded[-4:]
    hash_result = hashlib.sha256(hashlib.sha256(payload).digest()).digest()
    if hash_result[:4] != checksum:
        return False

    return payload[:2] in TRANSPARENT_ADDRESS_PREFIXES


def serialize_transaction_hex(tx: Optional[Union[bytes, bytearray, Any]]) -> str:
    """
    Hex-encode a transaction for ``sendrawtransaction``.

    Accepts raw bytes or any object exposing ``serialize() -> bytes``.
    ``None`` serializes to the empty string.

    Raises:
        SerializationError: if the value cannot be serialized
    """
    if tx is None:
        return ""

    if isinstance(tx, (bytes, bytearray)):
        return bytes(tx).hex()

    serialize = getattr(tx, "serialize", None)
    if serialize is None:
        raise SerializationError(
            f"cannot serialize transaction of type {type(tx).__name__}")

    try:
        raw = serialize()
    except Exception as e:
        logger.warning("Failed to serialize transaction", error=str(e))
        raise SerializationError(f"failed to serialize transaction: {e}") from e

    if not isinstance(raw, (bytes, bytearray)):
        raise SerializationError(
            f"serialize() returned {type(raw).__name__}, expected bytes")

    return bytes(raw).hex()
