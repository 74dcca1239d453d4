# walletview/cli.py
import argparse
import json
import sys

from walletview import __version__
from walletview.core.chain import ChainSnapshot
from walletview.core.remote import RemoteChainIndex
from walletview.core.transaction import WalletTransaction
from walletview.core.wallet import InMemoryWallet
from walletview.errors import WalletViewError
from walletview.transactions.book import TransactionBook
from walletview.utils.console import print_error, print_info
from walletview.utils.formatting import format_amount


def load_fixture(path: str, endpoint: str = None) -> TransactionBook:
    """Build a TransactionBook from a JSON file with wallet, chain and transactions"""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    if endpoint:
        chain = RemoteChainIndex(endpoint)
    else:
        chain = ChainSnapshot.from_dict(data.get("chain") or {})
    wallet = InMemoryWallet.from_dict(data.get("wallet") or {}, chain=chain)
    transactions = [WalletTransaction.from_dict(raw) for raw in data.get("transactions", [])]
    for tx in transactions:
        wallet.add_transaction(tx)

    book = TransactionBook(wallet, chain)
    book.load(transactions)
    return book


def format_row(record, settings=None) -> str:
    status = record.status
    maturity = "" if status.maturity.value == "not_applicable" else f" [{status.maturity.value}]"
    return (f"{record.display_id()}  {record.type.value:<17} {record.address or '-':<36} "
            f"{format_amount(record.net, plus=True, settings=settings):>20}  {status.lifecycle.value}"
            f" ({status.depth}){maturity}")


def main(argv=None):
    """Command line interface for walletview"""
    parser = argparse.ArgumentParser(description="Wallet transaction list viewer")
    parser.add_argument('--version', action='store_true', help='Show version')
    subparsers = parser.add_subparsers(dest='command')

    show = subparsers.add_parser('show', help='Decompose transactions from a JSON fixture')
    show.add_argument('fixture', help='JSON file with wallet, chain and transactions')
    show.add_argument('--json', action='store_true', help='Print records as JSON')
    show.add_argument('--endpoint', help='Use a remote chain index instead of the fixture chain')

    args = parser.parse_args(argv)

    if args.version:
        print(f"walletview v{__version__}")
        return 0

    if args.command != 'show':
        parser.print_help()
        return 0

    try:
        book = load_fixture(args.fixture, endpoint=args.endpoint)
    except (OSError, ValueError, WalletViewError) as e:
        print_error(f"❌ Cannot load {args.fixture}: {e}")
        return 1

    records = book.records()
    if not records and not args.json:
        print_info("No transactions to show")
        return 0
    if args.json:
        print(json.dumps([record.to_dict(book.chain.settings) for record in records], indent=2))
    else:
        for record in records:
            print(format_row(record, book.chain.settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
