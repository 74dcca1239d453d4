# walletview/core/wallet.py
"""
Wallet ownership oracle

The decomposer and status engine only ever ask the wallet read-only
questions: does it own an input or output, which of its addresses an output
pays, and the aggregate credit/debit/change of a transaction.
"""

from typing import Dict, Iterable, Optional, Set

from walletview.core.chain import ChainIndex
from walletview.core.transaction import OutPoint, TxIn, TxOut, WalletTransaction


class WalletOracle:
    """
    Read-only wallet queries used by decomposition and status.

    Implementations backed by a store that can be locked or remote
    raise WalletUnavailable when they cannot answer; the book then skips the
    transaction and the status engine reports an indeterminate status.
    Methods left unimplemented raise NotImplementedError, which is a
    programming error and propagates.
    """

    def is_mine_output(self, txout: TxOut) -> bool:
        raise NotImplementedError

    def is_mine_input(self, txin: TxIn) -> bool:
        raise NotImplementedError

    def known_address(self, txout: TxOut) -> Optional[str]:
        """Destination address if the wallet holds its key"""
        raise NotImplementedError

    def credit(self, tx: WalletTransaction) -> int:
        raise NotImplementedError

    def debit(self, tx: WalletTransaction) -> int:
        raise NotImplementedError

    def change(self, tx: WalletTransaction) -> int:
        raise NotImplementedError

    def value_out(self, tx: WalletTransaction) -> int:
        return sum(txout.value for txout in tx.vout)

    def request_count(self, tx: WalletTransaction) -> int:
        """Peer requests seen for tx; -1 when the wallet does not track it"""
        return -1


class InMemoryWallet(WalletOracle):
    """
    Wallet oracle over plain in-memory sets.

    Parameters:
        addresses: addresses the wallet holds keys for
        address_book: labelled receive addresses; owned outputs to any other
            owned address count as change
        coins: owned outputs of earlier transactions, used to value inputs
        chain: optional chain index; immature rewards credit nothing
    """

    def __init__(self, addresses: Iterable[str] = (), address_book: Optional[Dict[str, str]] = None,
                 coins: Optional[Dict[OutPoint, TxOut]] = None, chain: Optional[ChainIndex] = None):
        self.addresses: Set[str] = set(addresses)
        self.address_book: Dict[str, str] = dict(address_book or {})
        self.coins: Dict[OutPoint, TxOut] = dict(coins or {})
        self.chain = chain
        self.request_counts: Dict[str, int] = {}

    def add_transaction(self, tx: WalletTransaction) -> None:
        """Record owned outputs of tx so later spends of them count as debit"""
        for n, txout in enumerate(tx.vout):
            if self.is_mine_output(txout):
                self.coins[OutPoint(tx.hash, n)] = txout

    def set_request_count(self, tx_hash: str, count: int) -> None:
        self.request_counts[tx_hash] = count

    def is_mine_output(self, txout: TxOut) -> bool:
        return txout.address is not None and txout.address in self.addresses

    def is_mine_input(self, txin: TxIn) -> bool:
        return txin.prevout in self.coins

    def known_address(self, txout: TxOut) -> Optional[str]:
        if self.is_mine_output(txout):
            return txout.address
        return None

    def is_change(self, txout: TxOut) -> bool:
        return self.is_mine_output(txout) and txout.address not in self.address_book

    def credit(self, tx: WalletTransaction) -> int:
        # Rewards must mature before they are spendable
        if tx.is_reward() and self.chain is not None and self.chain.blocks_to_maturity(tx) > 0:
            return 0
        return sum(txout.value for txout in tx.vout if self.is_mine_output(txout))

    def debit(self, tx: WalletTransaction) -> int:
        return sum(self.coins[txin.prevout].value for txin in tx.vin if txin.prevout in self.coins)

    def change(self, tx: WalletTransaction) -> int:
        return sum(txout.value for txout in tx.vout if self.is_change(txout))

    def request_count(self, tx: WalletTransaction) -> int:
        return self.request_counts.get(tx.hash, -1)

    @classmethod
    def from_dict(cls, data: Dict, chain: Optional[ChainIndex] = None) -> "InMemoryWallet":
        coins = {}
        for coin in data.get("coins", []):
            coins[OutPoint(coin["hash"].lower(), int(coin["n"]))] = TxOut(
                value=int(coin["value"]), address=coin.get("address"))
        wallet = cls(
            addresses=data.get("addresses", []),
            address_book=data.get("address_book", {}),
            coins=coins,
            chain=chain,
        )
        for tx_hash, count in (data.get("request_counts") or {}).items():
            wallet.set_request_count(tx_hash.lower(), int(count))
        return wallet
