"""Data models and configuration."""

from zcash_client.models.config import ClientConfig, ConnectionConfig
from zcash_client.models.blockchain import (
    Block,
    BlockchainInfo,
    ChainTip,
    DeprecationInfo,
    JoinSplit,
    LocalAddress,
    MempoolInfo,
    Network,
    NetworkInfo,
    NodeInfo,
    PeerInfo,
    ScriptPublicKey,
    ScriptSignature,
    Transaction,
    TxInput,
    TxOutput,
    UnspentOutput,
    UTXOSetInfo,
    ValuePool,
    WalletBalance,
)

__all__ = [
    "ClientConfig",
    "ConnectionConfig",
    "Block",
    "BlockchainInfo",
    "ChainTip",
    "DeprecationInfo",
    "JoinSplit",
    "LocalAddress",
    "MempoolInfo",
    "Network",
    "NetworkInfo",
    "NodeInfo",
    "PeerInfo",
    "ScriptPublicKey",
    "ScriptSignature",
    "Transaction",
    "TxInput",
    "TxOutput",
    "UnspentOutput",
    "UTXOSetInfo",
    "ValuePool",
    "WalletBalance",
]
