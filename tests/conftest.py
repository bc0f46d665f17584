"""Pytest configuration and fixtures for zcash_client tests."""

import pytest
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

from requests.structures import CaseInsensitiveDict

from zcash_client.core.rpc_client import ZcashRPCClient
from zcash_client.models.config import ConnectionConfig


TXID_A = "a" * 64
TXID_B = "b" * 64
BLOCK_HASH = "0000000000b7f1e1f3c6d2b3c8a9f0e1d2c3b4a5968778695a4b3c2d1e0f1a2b"


# ============================================================================
# HTTP FIXTURES
# ============================================================================

def make_response(result: Any = None, error: Optional[Dict[str, Any]] = None,
                  status_code: int = 200, body: Any = ...) -> MagicMock:
    """Build a fake ``requests.Response`` carrying a JSON-RPC reply."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400

    if body is ...:
        body = {"result": result, "error": error, "id": 1}

    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def connection():
    """Connection config fixture."""
    return ConnectionConfig(host="127.0.0.1:8232", user="rpcuser", password="rpcpass")


@pytest.fixture
def mock_session():
    """Session double with a real header mapping."""
    session = MagicMock()
    session.headers = CaseInsensitiveDict()
    return session


@pytest.fixture
def client(connection, mock_session):
    """RPC client wired to the mocked session."""
    return ZcashRPCClient(connection, timeout=5, session=mock_session)


def sent_payload(session: MagicMock) -> Dict[str, Any]:
    """JSON body of the last request posted through ``session``."""
    return session.post.call_args.kwargs["json"]


# ============================================================================
# SAMPLE DATA FIXTURES
# ============================================================================

def make_vin(txid: str = TXID_B, vout: int = 0) -> Dict[str, Any]:
    return {
        "txid": txid,
        "vout": vout,
        "scriptSig": {"asm": "3044...", "hex": "473044"},
        "sequence": 4294967295,
    }


def make_vout(value: float = 1.5, n: int = 0) -> Dict[str, Any]:
    return {
        "value": value,
        "valueZat": int(round(value * 100000000)),
        "n": n,
        "scriptPubKey": {
            "asm": "OP_DUP OP_HASH160 ... OP_EQUALVERIFY OP_CHECKSIG",
            "hex": "76a914" + "00" * 20 + "88ac",
            "reqSigs": 1,
            "type": "pubkeyhash",
            "addresses": ["t1KzZ5n2TPEGYXTZ3WYGL1AYEumEQaRoHaL"],
        },
    }


def make_tx(txid: str = TXID_A, vin=None, vout=None, vjoinsplit=None,
            value_balance: float = 0.0, spends=None, outputs=None) -> Dict[str, Any]:
    return {
        "hex": "0400008085202f89",
        "txid": txid,
        "version": 4,
        "locktime": 0,
        "expiryheight": 1000040,
        "vin": vin if vin is not None else [],
        "vout": vout if vout is not None else [],
        "vjoinsplit": vjoinsplit if vjoinsplit is not None else [],
        "valueBalance": value_balance,
        "vShieldedSpend": spends if spends is not None else [],
        "vShieldedOutput": outputs if outputs is not None else [],
    }


@pytest.fixture
def transparent_tx():
    """One transparent input, one transparent output, no shielded data."""
    return make_tx(vin=[make_vin()], vout=[make_vout()])


@pytest.fixture
def shielded_tx():
    """Fully shielded Sapling transaction."""
    return make_tx(value_balance=-0.0001, outputs=[{"cv": "ab", "cmu": "cd"}])


@pytest.fixture
def mixed_tx():
    """Transparent pair plus a Sprout JoinSplit."""
    return make_tx(vin=[make_vin()], vout=[make_vout()],
                   vjoinsplit=[{"vpub_old": 0.5, "vpub_new": 0.0}])


@pytest.fixture
def sample_block(transparent_tx, shielded_tx, mixed_tx):
    """Verbose block with three transactions."""
    return {
        "hash": BLOCK_HASH,
        "confirmations": 3,
        "size": 4521,
        "height": 1000000,
        "version": 4,
        "merkleroot": "c" * 64,
        "finalsaplingroot": "d" * 64,
        "tx": [transparent_tx, shielded_tx, mixed_tx],
        "time": 1600000000,
        "nonce": "e" * 64,
        "bits": "1c01d3c1",
        "difficulty": 5104.5,
        "previousblockhash": "f" * 64,
        "nextblockhash": None,
        "valuePools": [
            {"id": "sprout", "monitored": True, "chainValue": 100.5,
             "chainValueZat": 10050000000, "valueDelta": 0.0, "valueDeltaZat": 0},
        ],
    }
