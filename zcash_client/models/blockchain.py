"""Blockchain data models for zcashd RPC results.

Field aliases are the exact (case-sensitive) JSON keys returned by zcashd.
Models are frozen and sequences are decoded into tuples, so a record never
changes after it has been built from a response.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

from zcash_client.utils.zcash import amount_from_zec, block_time as to_block_time


class RPCModel(BaseModel):
    """Base for all decoded RPC records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null decodes the same as an absent key
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class BlockchainInfo(RPCModel):
    """``getblockchaininfo`` result."""
    chain: str
    blocks: int
    headers: Optional[int] = None
    best_block_hash: Optional[str] = Field(default=None, alias="bestblockhash")
    difficulty: float = 0.0
    verification_progress: float = Field(default=0.0, alias="verificationprogress")
    size_on_disk: float = 0.0
    value_pools: Tuple["ValuePool", ...] = Field(default=(), alias="valuePools")


class NodeInfo(RPCModel):
    """``getinfo`` result."""
    version: int
    protocol_version: Optional[int] = Field(default=None, alias="protocolversion")
    blocks: Optional[int] = None
    connections: Optional[int] = None
    testnet: Optional[bool] = None
    errors: str = ""


class MempoolInfo(RPCModel):
    """``getmempoolinfo`` result."""
    size: float
    bytes: float
    usage: float


class Network(RPCModel):
    name: str
    limited: bool = False
    reachable: bool = False
    proxy: str = ""
    proxy_randomize_credentials: bool = False


class LocalAddress(RPCModel):
    address: str
    port: int
    score: int


class NetworkInfo(RPCModel):
    """``getnetworkinfo`` result."""
    version: int
    subversion: str
    protocol_version: int = Field(alias="protocolversion")
    local_services: str = Field(default="", alias="localservices")
    time_offset: int = Field(default=0, alias="timeoffset")
    connections: int = 0
    networks: Tuple[Network, ...] = ()
    relay_fee: float = Field(default=0.0, alias="relayfee")
    local_addresses: Tuple[LocalAddress, ...] = Field(default=(), alias="localaddresses")
    warnings: str = ""


class UnspentOutput(RPCModel):
    """One entry of ``listunspent``."""
    txid: str
    vout: int
    generated: bool = False
    address: Optional[str] = None
    script_pub_key: str = Field(default="", alias="scriptPubKey")
    amount: float
    amount_zat: Optional[int] = Field(default=None, alias="amountZat")
    confirmations: int = 0
    redeem_script: Optional[str] = Field(default=None, alias="redeemScript")
    spendable: bool = False

    @property
    def zatoshis(self) -> int:
        """Output amount in zatoshi."""
        if self.amount_zat is not None:
            return self.amount_zat
        return amount_from_zec(self.amount)


class WalletBalance(RPCModel):
    """``z_gettotalbalance`` result. zcashd reports these as decimal strings."""
    transparent: str
    private: str
    total: str


class PeerInfo(RPCModel):
    """One entry of ``getpeerinfo``."""
    id: int
    addr: str
    addr_local: Optional[str] = Field(default=None, alias="addrlocal")
    services: str = ""
    last_send: int = Field(default=0, alias="lastsend")
    last_recv: int = Field(default=0, alias="lastrecv")
    bytes_sent: int = Field(default=0, alias="bytessent")
    bytes_recv: int = Field(default=0, alias="bytesrecv")
    conn_time: int = Field(default=0, alias="conntime")
    time_offset: int = Field(default=0, alias="timeoffset")
    ping_time: float = Field(default=0.0, alias="pingtime")
    ping_wait: float = Field(default=0.0, alias="pingwait")
    version: int = 0
    subver: str = ""
    inbound: bool = False
    starting_height: int = Field(default=0, alias="startingheight")
    ban_score: int = Field(default=0, alias="banscore")
    synced_headers: int = 0
    synced_blocks: int = 0


class ChainTip(RPCModel):
    """One entry of ``getchaintips``."""
    hash: str
    height: int
    branch_len: int = Field(alias="branchlen")
    status: str


class DeprecationInfo(RPCModel):
    """``getdeprecationinfo`` result (mainnet only)."""
    version: int
    subversion: str
    deprecation_height: int = Field(alias="deprecationheight")


class ValuePool(RPCModel):
    id: str
    monitored: bool = False
    chain_value: Optional[float] = Field(default=None, alias="chainValue")
    chain_value_zat: Optional[int] = Field(default=None, alias="chainValueZat")
    value_delta: Optional[float] = Field(default=None, alias="valueDelta")
    value_delta_zat: Optional[int] = Field(default=None, alias="valueDeltaZat")


class UTXOSetInfo(RPCModel):
    """``gettxoutsetinfo`` result."""
    height: int
    best_block: str = Field(alias="bestblock")
    transactions: int
    txouts: int
    total_amount: float


class ScriptSignature(RPCModel):
    asm: str = ""
    hex: str = ""


class ScriptPublicKey(RPCModel):
    asm: str = ""
    hex: str = ""
    req_sigs: int = Field(default=0, alias="reqSigs")
    type: str = ""
    addresses: Tuple[str, ...] = ()


class TxInput(RPCModel):
    """A transparent input (``vin`` entry)."""
    coinbase: str = ""
    txid: str = ""
    vout: int = 0
    script_sig: ScriptSignature = Field(default_factory=ScriptSignature, alias="scriptSig")
    sequence: int = 0

    def is_coinbase(self) -> bool:
        return len(self.coinbase) > 0


class TxOutput(RPCModel):
    """A transparent output (``vout`` entry)."""
    value: float
    value_zat: Optional[int] = Field(default=None, alias="valueZat")
    n: int
    script_pub_key: ScriptPublicKey = Field(default_factory=ScriptPublicKey, alias="scriptPubKey")

    @property
    def zatoshis(self) -> int:
        """Output value in zatoshi."""
        if self.value_zat is not None:
            return self.value_zat
        return amount_from_zec(self.value)


class JoinSplit(RPCModel):
    """A Sprout JoinSplit description (``vjoinsplit`` entry)."""
    vpub_old: float = 0.0
    vpub_new: float = 0.0


class Transaction(RPCModel):
    """A verbose zcashd transaction."""
    hex: str = ""
    txid: str
    version: int = 0
    locktime: int = 0
    expiry_height: int = Field(default=0, alias="expiryheight")
    vin: Tuple[TxInput, ...] = ()
    vout: Tuple[TxOutput, ...] = ()
    vjoinsplit: Tuple[JoinSplit, ...] = ()
    value_balance: float = Field(default=0.0, alias="valueBalance")
    shielded_spends: Tuple[Dict[str, Any], ...] = Field(default=(), alias="vShieldedSpend")
    shielded_outputs: Tuple[Dict[str, Any], ...] = Field(default=(), alias="vShieldedOutput")

    def has_transparent_in_and_out(self) -> bool:
        """At least one transparent input and at least one transparent output."""
        return len(self.vin) > 0 and len(self.vout) > 0

    def contains_sprout(self) -> bool:
        """Carries Sprout (legacy) shielded data."""
        return len(self.vjoinsplit) > 0

    def contains_sapling(self) -> bool:
        """
        Carries Sapling shielded data.

        A non-zero value balance only counts together with at least one
        shielded spend or output description.
        """
        return self.value_balance != 0 and (
            len(self.shielded_spends) > 0 or len(self.shielded_outputs) > 0
        )

    def has_shielded_descriptors(self) -> bool:
        """Any JoinSplit, shielded spend or shielded output is present."""
        return (len(self.vjoinsplit) > 0 or
                len(self.shielded_spends) > 0 or
                len(self.shielded_outputs) > 0)

    def is_transparent(self) -> bool:
        """Transparent inputs and outputs only."""
        return (self.has_transparent_in_and_out() and
                len(self.vjoinsplit) == 0 and
                self.value_balance == 0 and
                len(self.shielded_spends) == 0)

    def is_shielded(self) -> bool:
        """Shielded data and no transparent input/output pair."""
        return (not self.has_transparent_in_and_out() and
                (self.contains_sprout() or self.contains_sapling()))

    def is_mixed(self) -> bool:
        """Some transparent input or output together with shielded data."""
        t_in_or_out = len(self.vin) > 0 or len(self.vout) > 0
        return t_in_or_out and (self.contains_sprout() or self.contains_sapling())


class Block(RPCModel):
    """A ``getblock`` result at verbosity 2 (transactions inline)."""
    hash: str
    confirmations: int = 0
    size: int = 0
    height: int
    version: int = 0
    merkle_root: str = Field(default="", alias="merkleroot")
    final_sapling_root: str = Field(default="", alias="finalsaplingroot")
    final_orchard_root: Optional[str] = Field(default=None, alias="finalorchardroot")
    tx: Tuple[Transaction, ...] = ()
    time: int = 0
    nonce: str = ""
    bits: str = ""
    difficulty: float = 0.0
    previous_block_hash: Optional[str] = Field(default=None, alias="previousblockhash")
    next_block_hash: Optional[str] = Field(default=None, alias="nextblockhash")
    value_pools: Tuple[ValuePool, ...] = Field(default=(), alias="valuePools")

    @property
    def block_time(self) -> datetime:
        """Header time as a UTC datetime."""
        return to_block_time(self.time)

    def number_of_transactions(self) -> int:
        return len(self.tx)

    def transaction_types(self) -> Tuple[int, int]:
        """
        Count (transparent, shielded) transactions in the block.

        A transaction is counted as transparent when it carries no shielded
        descriptor at all. This looks at descriptors only, so it does not
        always agree with ``Transaction.is_transparent``.
        """
        transparent = 0
        shielded = 0
        for tx in self.tx:
            if tx.has_shielded_descriptors():
                shielded += 1
            else:
                transparent += 1
        return transparent, shielded


BlockchainInfo.model_rebuild()
