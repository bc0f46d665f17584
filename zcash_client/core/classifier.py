"""Transaction classification and block-level shielding statistics."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict
import structlog

from zcash_client.models.blockchain import Block, Transaction

logger = structlog.get_logger(__name__)


class TransactionKind(str, Enum):
    """Shielding status of a transaction."""
    TRANSPARENT = "transparent"
    SHIELDED = "shielded"
    MIXED = "mixed"
    NONE = "none"


def classify_transaction(tx: Transaction) -> TransactionKind:
    """
    Reduce the transaction predicates to a single kind.

    ``is_shielded`` and ``is_mixed`` can both hold when a transaction has
    transparent inputs but no transparent outputs (or the reverse); any
    transparent part wins, so such a transaction is MIXED.
    """
    if tx.is_transparent():
        return TransactionKind.TRANSPARENT
    if tx.is_mixed():
        return TransactionKind.MIXED
    if tx.is_shielded():
        return TransactionKind.SHIELDED
    return TransactionKind.NONE


@dataclass
class BlockSummary:
    """Shielding statistics for one block."""
    height: int
    block_hash: str
    tx_count: int
    transparent_count: int
    shielded_count: int
    kinds: Dict[TransactionKind, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "height": self.height,
            "hash": self.block_hash,
            "tx_count": self.tx_count,
            "transparent_count": self.transparent_count,
            "shielded_count": self.shielded_count,
            "kinds": {kind.value: count for kind, count in self.kinds.items()},
        }


def summarize_block(block: Block) -> BlockSummary:
    """
    Summarize a block.

    ``transparent_count``/``shielded_count`` use the descriptor-only rule of
    ``Block.transaction_types``; ``kinds`` uses ``classify_transaction``.
    The two are reported side by side and may disagree.
    """
    transparent, shielded = block.transaction_types()

    kinds = {kind: 0 for kind in TransactionKind}
    for tx in block.tx:
        kinds[classify_transaction(tx)] += 1

    summary = BlockSummary(
        height=block.height,
        block_hash=block.hash,
        tx_count=block.number_of_transactions(),
        transparent_count=transparent,
        shielded_count=shielded,
        kinds=kinds,
    )

    logger.debug("Summarized block",
                 height=block.height,
                 tx_count=summary.tx_count,
                 transparent=transparent,
                 shielded=shielded)

    return summary
