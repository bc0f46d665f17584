"""Command-line interface for the Zcash RPC client."""

import sys
import json
from typing import Any, Optional, Tuple
import click

from zcash_client.core.classifier import classify_transaction, summarize_block
from zcash_client.core.exceptions import NotFoundError, ZcashClientError
from zcash_client.core.rpc_client import ZcashRPCClient
from zcash_client.models.config import ClientConfig
from zcash_client.utils.logging import get_logger, setup_logging
from zcash_client.utils.zcash import format_zec, is_valid_transparent_address

logger = get_logger(__name__)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _fail(message: str) -> None:
    click.echo(f"❌ {message}", err=True)
    sys.exit(1)


def _client(ctx) -> ZcashRPCClient:
    return ZcashRPCClient.from_config(ctx.obj['config'])


@click.group()
@click.option('--config-file', '-c', type=click.Path(exists=True),
              help='Path to configuration file')
@click.option('--log-level', '-l', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Logging level (overrides LOG_LEVEL)')
@click.pass_context
def cli(ctx, config_file: Optional[str], log_level: Optional[str]):
    """Zcash node RPC client CLI."""
    ctx.ensure_object(dict)

    try:
        if config_file:
            config = ClientConfig(_env_file=config_file)
        else:
            config = ClientConfig()

        if log_level:
            config.log_level = log_level
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(config)
    ctx.obj['config'] = config


@cli.command()
@click.pass_context
def info(ctx):
    """Show node state (getinfo)."""
    try:
        with _client(ctx) as client:
            _echo_json(client.get_info().model_dump(by_alias=True))
    except ZcashClientError as e:
        _fail(f"getinfo failed: {e}")


@cli.command('chain-info')
@click.pass_context
def chain_info(ctx):
    """Show blockchain state (getblockchaininfo)."""
    try:
        with _client(ctx) as client:
            _echo_json(client.get_blockchain_info().model_dump(by_alias=True))
    except ZcashClientError as e:
        _fail(f"getblockchaininfo failed: {e}")


@cli.command('block-count')
@click.pass_context
def block_count(ctx):
    """Print the current block height."""
    try:
        with _client(ctx) as client:
            click.echo(client.get_block_count())
    except ZcashClientError as e:
        _fail(f"getblockcount failed: {e}")


@cli.command('best-block-hash')
@click.pass_context
def best_block_hash(ctx):
    """Print the tip block hash."""
    try:
        with _client(ctx) as client:
            click.echo(client.get_best_block_hash())
    except ZcashClientError as e:
        _fail(f"getbestblockhash failed: {e}")


@cli.command()
@click.argument('height_or_hash')
@click.pass_context
def block(ctx, height_or_hash: str):
    """Summarize the shielding status of a block's transactions."""
    try:
        with _client(ctx) as client:
            if height_or_hash.isdigit():
                block_hash = client.get_block_hash(int(height_or_hash))
            else:
                block_hash = height_or_hash
            summary = summarize_block(client.get_block_verbose_tx(block_hash))
    except ZcashClientError as e:
        _fail(f"Failed to fetch block {height_or_hash}: {e}")

    _echo_json(summary.to_dict())


@cli.command()
@click.argument('txid')
@click.pass_context
def tx(ctx, txid: str):
    """Classify a transaction as transparent, shielded or mixed."""
    try:
        with _client(ctx) as client:
            transaction = client.get_raw_transaction_verbose(txid)
    except ZcashClientError as e:
        _fail(f"Failed to fetch transaction {txid}: {e}")

    _echo_json({
        "txid": transaction.txid,
        "kind": classify_transaction(transaction).value,
        "inputs": len(transaction.vin),
        "outputs": len(transaction.vout),
        "joinsplits": len(transaction.vjoinsplit),
        "shielded_spends": len(transaction.shielded_spends),
        "shielded_outputs": len(transaction.shielded_outputs),
        "value_balance": transaction.value_balance,
    })


@cli.command('mempool-check')
@click.argument('txid')
@click.pass_context
def mempool_check(ctx, txid: str):
    """Check whether a transaction is waiting in the mempool."""
    try:
        with _client(ctx) as client:
            client.get_mempool_entry(txid)
    except NotFoundError:
        click.echo(f"🔍 {txid} is not in the mempool")
        sys.exit(2)
    except ZcashClientError as e:
        _fail(f"getrawmempool failed: {e}")

    click.echo(f"✅ {txid} is in the mempool")


@cli.command()
@click.option('--minconf', type=int, default=None, help='Minimum confirmations')
@click.option('--maxconf', type=int, default=None, help='Maximum confirmations')
@click.option('--address', '-a', 'addresses', multiple=True,
              help='Transparent address to filter on (repeatable)')
@click.pass_context
def unspent(ctx, minconf: Optional[int], maxconf: Optional[int], addresses: Tuple[str, ...]):
    """List unspent wallet outputs."""
    for address in addresses:
        if not is_valid_transparent_address(address):
            raise click.BadParameter(f"not a transparent address: {address}",
                                     param_hint='--address')

    try:
        with _client(ctx) as client:
            outputs = client.list_unspent(minconf, maxconf, list(addresses) or None)
    except ZcashClientError as e:
        _fail(f"listunspent failed: {e}")

    total = sum(output.zatoshis for output in outputs)
    _echo_json({
        "count": len(outputs),
        "total": format_zec(total),
        "outputs": [output.model_dump(by_alias=True) for output in outputs],
    })


@cli.command('send-raw')
@click.argument('hex_string')
@click.option('--allow-high-fees', is_flag=True, help='Bypass the absurd fee check')
@click.pass_context
def send_raw(ctx, hex_string: str, allow_high_fees: bool):
    """Submit a hex encoded signed transaction."""
    try:
        with _client(ctx) as client:
            txid = client.send_raw_transaction_hex(hex_string, allow_high_fees)
    except ZcashClientError as e:
        _fail(f"sendrawtransaction failed: {e}")

    logger.info("Transaction submitted", txid=txid)
    click.echo(txid)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
