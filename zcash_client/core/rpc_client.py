"""zcashd JSON-RPC client for blockchain data access."""

import itertools
from typing import Any, List, Optional, Sequence, Type, TypeVar
import requests
from requests.auth import HTTPBasicAuth
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from zcash_client.core.exceptions import (
    DecodeError, NotFoundError, RPCError, RPCServerError, TransportError
)
from zcash_client.models.blockchain import (
    Block, BlockchainInfo, ChainTip, DeprecationInfo, MempoolInfo,
    NetworkInfo, NodeInfo, PeerInfo, Transaction, UnspentOutput,
    UTXOSetInfo, WalletBalance
)
from zcash_client.models.config import ClientConfig, ConnectionConfig
from zcash_client.utils.zcash import is_valid_txid, serialize_transaction_hex

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

# listunspent defaults used by zcashd when the bounds are omitted
DEFAULT_MIN_CONF = 1
DEFAULT_MAX_CONF = 9999999

_INT = TypeAdapter(int)
_STR = TypeAdapter(str)
_STR_LIST = TypeAdapter(List[str])
_UNSPENT_LIST = TypeAdapter(List[UnspentOutput])
_PEER_LIST = TypeAdapter(List[PeerInfo])
_TIP_LIST = TypeAdapter(List[ChainTip])


class ZcashRPCClient:
    """
    zcashd JSON-RPC client.

    Every call blocks for a single response and either returns a decoded
    record or raises an ``RPCError`` subclass. Nothing is retried here;
    retry policy belongs to the caller.

    Example:
        >>> conn = ConnectionConfig(host="127.0.0.1:8232", user="u", password="p")
        >>> with ZcashRPCClient(conn) as client:
        ...     print(client.get_block_count())
    """

    def __init__(self, connection: ConnectionConfig, timeout: Optional[float] = 30,
                 session: Optional[requests.Session] = None):
        self.connection = connection
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'User-Agent': 'zcash-client/1.0.0',
        })
        self.session.auth = HTTPBasicAuth(connection.user, connection.password)

        self.rpc_url = f"http://{connection.host}"
        self._ids = itertools.count(1)
        self.logger = logger.bind(component="rpc_client", host=connection.host)

        self.logger.info("Zcash RPC client initialized")

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ZcashRPCClient":
        """Create a client from loaded settings."""
        return cls(config.connection, timeout=config.zcash_rpc_timeout)

    def _make_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send one RPC call and return the raw ``result`` member."""
        if params is None:
            params = []

        payload = {
            "jsonrpc": "1.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        self.logger.debug("RPC request", method=method, params=params)

        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.warning("RPC request failed", method=method, error=str(e))
            raise TransportError(f"RPC request {method} failed: {e}",
                                 method=method, cause=e) from e

        if response.status_code in (401, 403):
            self.logger.warning("RPC authentication rejected", method=method,
                                status=response.status_code)
            raise TransportError(
                f"RPC authentication rejected (HTTP {response.status_code})",
                method=method, status_code=response.status_code)

        # zcashd reports RPC errors with HTTP 500 and a JSON body, so the body
        # has to be read before the status code is judged.
        try:
            data = response.json()
        except ValueError as e:
            if not response.ok:
                self.logger.warning("RPC HTTP error", method=method,
                                    status=response.status_code)
                raise TransportError(
                    f"RPC request {method} failed with HTTP {response.status_code}",
                    method=method, cause=e, status_code=response.status_code) from e
            self.logger.warning("RPC response is not JSON", method=method, error=str(e))
            raise DecodeError(f"RPC response for {method} is not valid JSON: {e}",
                              method=method, cause=e) from e

        if not isinstance(data, dict):
            self.logger.warning("RPC response is not a JSON object", method=method)
            raise DecodeError(f"RPC response for {method} is not a JSON object",
                              method=method)

        error = data.get('error')
        if error is not None:
            if isinstance(error, dict):
                error_msg = error.get('message', 'Unknown RPC error')
                error_code = error.get('code', -1)
            else:
                error_msg = str(error)
                error_code = -1
            self.logger.warning("RPC error response", method=method,
                                code=error_code, message=error_msg)
            raise RPCServerError(f"RPC Error {error_code}: {error_msg}",
                                 method=method, code=error_code)

        if not response.ok:
            self.logger.warning("RPC HTTP error", method=method,
                                status=response.status_code)
            raise TransportError(
                f"RPC request {method} failed with HTTP {response.status_code}",
                method=method, status_code=response.status_code)

        if 'result' not in data:
            self.logger.warning("RPC response has no result", method=method)
            raise DecodeError(f"RPC response for {method} has no result", method=method)

        return data['result']

    def _decode(self, method: str, result: Any, adapter: TypeAdapter) -> Any:
        try:
            return adapter.validate_python(result)
        except ValidationError as e:
            self.logger.warning("RPC result does not match expected shape",
                                method=method, error=str(e))
            raise DecodeError(f"Unexpected result for {method}: {e}",
                              method=method, cause=e) from e

    def _decode_model(self, method: str, result: Any, model: Type[M]) -> M:
        try:
            return model.model_validate(result)
        except ValidationError as e:
            self.logger.warning("RPC result does not match expected shape",
                                method=method, model=model.__name__, error=str(e))
            raise DecodeError(f"Unexpected result for {method}: {e}",
                              method=method, cause=e) from e

    def _call_model(self, method: str, model: Type[M],
                    params: Optional[List[Any]] = None) -> M:
        return self._decode_model(method, self._make_request(method, params), model)

    def _call(self, method: str, adapter: TypeAdapter,
              params: Optional[List[Any]] = None) -> Any:
        return self._decode(method, self._make_request(method, params), adapter)

    # Node and chain state

    def get_info(self) -> NodeInfo:
        """Get general node state."""
        return self._call_model("getinfo", NodeInfo)

    def get_blockchain_info(self) -> BlockchainInfo:
        """Get blockchain information."""
        return self._call_model("getblockchaininfo", BlockchainInfo)

    def get_block_count(self) -> int:
        """Get the current block height."""
        return self._call("getblockcount", _INT)

    def get_block_hash(self, height: int) -> str:
        """Get block hash by height."""
        return self._call("getblockhash", _STR, [height])

    def get_best_block_hash(self) -> str:
        """Get the hash of the best (tip) block."""
        return self._call("getbestblockhash", _STR)

    def get_network_info(self) -> NetworkInfo:
        """Get P2P networking state."""
        return self._call_model("getnetworkinfo", NetworkInfo)

    def get_peer_info(self) -> List[PeerInfo]:
        """Get data about each connected peer."""
        return self._call("getpeerinfo", _PEER_LIST)

    def get_chain_tips(self) -> List[ChainTip]:
        """Get all known tips in the block tree."""
        return self._call("getchaintips", _TIP_LIST)

    def get_deprecation_info(self) -> DeprecationInfo:
        """Get the node version and its deprecation height."""
        return self._call_model("getdeprecationinfo", DeprecationInfo)

    def get_txout_set_info(self) -> UTXOSetInfo:
        """Get statistics about the unspent transaction output set."""
        return self._call_model("gettxoutsetinfo", UTXOSetInfo)

    # Wallet

    def list_unspent(self, minconf: Optional[int] = None, maxconf: Optional[int] = None,
                     addresses: Optional[Sequence[str]] = None) -> List[UnspentOutput]:
        """
        List unspent wallet outputs.

        Args:
            minconf: Minimum confirmations to filter
            maxconf: Maximum confirmations to filter
            addresses: Only outputs paying to these transparent addresses
        """
        params: List[Any] = []
        if addresses is not None:
            params = [
                DEFAULT_MIN_CONF if minconf is None else minconf,
                DEFAULT_MAX_CONF if maxconf is None else maxconf,
                list(addresses),
            ]
        elif maxconf is not None:
            params = [DEFAULT_MIN_CONF if minconf is None else minconf, maxconf]
        elif minconf is not None:
            params = [minconf]

        return self._call("listunspent", _UNSPENT_LIST, params)

    def get_total_balance(self, minconf: Optional[int] = None) -> WalletBalance:
        """Get transparent, private and total wallet balances."""
        params = [] if minconf is None else [minconf]
        return self._call_model("z_gettotalbalance", WalletBalance, params)

    # Transactions and blocks

    def get_raw_transaction(self, txid: str) -> str:
        """Get a transaction as serialized hex."""
        return self._call("getrawtransaction", _STR, [txid])

    def get_raw_transaction_verbose(self, txid: str) -> Transaction:
        """Get a transaction decoded by the node."""
        return self._call_model("getrawtransaction", Transaction, [txid, 1])

    def get_block_verbose_tx(self, block_hash: str) -> Block:
        """
        Get block data with every transaction decoded inline.

        Args:
            block_hash: Block hash (zcashd also accepts a height as a string)
        """
        return self._call_model("getblock", Block, [block_hash, 2])

    def get_block_range(self, start_height: int, end_height: int) -> List[Block]:
        """Get multiple blocks in range, inclusive."""
        blocks = []

        for height in range(start_height, end_height + 1):
            block_hash = self.get_block_hash(height)
            blocks.append(self.get_block_verbose_tx(block_hash))

        return blocks

    def send_raw_transaction_hex(self, hex_string: str, allow_high_fees: bool = False) -> str:
        """Submit a hex encoded transaction; returns its txid."""
        return self._call("sendrawtransaction", _STR, [hex_string, allow_high_fees])

    def send_raw_transaction(self, tx: Any, allow_high_fees: bool = False) -> str:
        """
        Serialize and submit a transaction.

        Args:
            tx: Raw bytes, an object with ``serialize() -> bytes``, or None
                (sent as an empty string)
            allow_high_fees: Bypass the node's absurd-fee check
        """
        return self.send_raw_transaction_hex(serialize_transaction_hex(tx), allow_high_fees)

    # Mempool

    def get_mempool_info(self) -> MempoolInfo:
        """Get mempool information."""
        return self._call_model("getmempoolinfo", MempoolInfo)

    def get_raw_mempool(self) -> List[str]:
        """Get the ids of all mempool transactions."""
        txids = self._call("getrawmempool", _STR_LIST, [False])
        for txid in txids:
            if not is_valid_txid(txid):
                raise DecodeError(f"Invalid transaction id in mempool: {txid!r}",
                                  method="getrawmempool")
        return txids

    def get_mempool_entry(self, txid: str) -> str:
        """
        Return ``txid`` if the transaction is in the mempool.

        Raises:
            NotFoundError: the mempool was read and does not contain ``txid``
            RPCError: the mempool could not be read
        """
        if txid in self.get_raw_mempool():
            return txid
        raise NotFoundError(f"Transaction {txid} not found in mempool")

    def is_in_mempool(self, txid: str) -> bool:
        """Check mempool membership; RPC failures still raise."""
        try:
            self.get_mempool_entry(txid)
        except NotFoundError:
            return False
        return True

    # Lifecycle

    def test_connection(self) -> bool:
        """Test RPC connection."""
        try:
            info = self.get_blockchain_info()
        except RPCError as e:
            self.logger.error("RPC connection failed", error=str(e))
            return False

        self.logger.info("RPC connection successful",
                         chain=info.chain,
                         blocks=info.blocks)
        return True

    def close(self):
        """Close the RPC session."""
        self.session.close()
        self.logger.info("RPC client session closed")

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
