# walletview/transactions/book.py
"""
Transaction book

Presentation-facing façade binding one wallet oracle and one chain index.
Keeps the records decomposed from every loaded transaction, keyed by display
id, and refreshes their statuses whenever the chain tip moves.
"""

import threading
from typing import Callable, Dict, Iterable, List, Optional

from walletview.core.chain import ChainIndex
from walletview.core.transaction import WalletTransaction
from walletview.core.wallet import WalletOracle
from walletview.errors import CollaboratorUnavailable, WalletViewError
from walletview.transactions.decomposer import decompose
from walletview.transactions.record import TransactionRecord
from walletview.transactions.status import TransactionStatus, compute_status, needs_status_refresh
from walletview.utils.console import print_debug, print_warn


class TransactionBook:
    """Records and statuses for one wallet against one chain view"""

    def __init__(self, wallet: WalletOracle, chain: ChainIndex):
        self.wallet = wallet
        self.chain = chain
        self.state_lock = threading.RLock()
        self.status_callbacks: List[Callable] = []
        self._transactions: Dict[str, WalletTransaction] = {}
        self._records: Dict[str, TransactionRecord] = {}

    # =========================================================================
    # Single-transaction operations
    # =========================================================================

    def decompose(self, tx: WalletTransaction) -> List[TransactionRecord]:
        return decompose(tx, self.wallet, self.chain)

    def compute_status(self, record: TransactionRecord) -> TransactionStatus:
        tx = self._transactions.get(record.hash)
        if tx is None:
            raise KeyError(f"Unknown transaction {record.hash}")
        return compute_status(record, tx, self.wallet, self.chain)

    def needs_status_refresh(self, status: TransactionStatus) -> bool:
        return needs_status_refresh(status, self.chain)

    @staticmethod
    def display_id(record: TransactionRecord) -> str:
        return record.display_id()

    # =========================================================================
    # Book keeping
    # =========================================================================

    def load(self, transactions: Iterable[WalletTransaction]) -> List[TransactionRecord]:
        """
        Decompose and add transactions, replacing earlier records of the same hash.

        A transaction whose decomposition fails is skipped; the rest still load.
        """
        loaded = []
        with self.state_lock:
            for tx in transactions:
                try:
                    records = self.decompose(tx)
                except WalletViewError as e:
                    print_warn(f"⚠️  Skipping transaction {tx.hash}: {e}")
                    continue

                self._drop(tx.hash)
                self._transactions[tx.hash] = tx
                for record in records:
                    compute_status(record, tx, self.wallet, self.chain)
                    self._records[record.display_id()] = record
                loaded.extend(records)
            print_debug(f"📒 Loaded {len(loaded)} records")
        return loaded

    def _drop(self, tx_hash: str) -> None:
        for key in [k for k, r in self._records.items() if r.hash == tx_hash]:
            del self._records[key]
        self._transactions.pop(tx_hash, None)

    def remove(self, tx_hash: str) -> None:
        with self.state_lock:
            self._drop(tx_hash)

    def get(self, display_id: str) -> Optional[TransactionRecord]:
        with self.state_lock:
            return self._records.get(display_id)

    def records(self) -> List[TransactionRecord]:
        """All records in display order"""
        with self.state_lock:
            return sorted(self._records.values(), key=lambda r: r.status.sort_key)

    def update_chain(self, chain: ChainIndex) -> None:
        """Swap in a newer chain view; statuses go stale if the tip moved"""
        with self.state_lock:
            self.chain = chain
            if getattr(self.wallet, "chain", None) is not None:
                self.wallet.chain = chain

    def refresh(self) -> List[TransactionRecord]:
        """Recompute stale statuses; returns the records that were refreshed"""
        with self.state_lock:
            try:
                tip = self.chain.current_height()
            except CollaboratorUnavailable as e:
                print_warn(f"⚠️  Chain tip unknown, refreshing every status: {e}")
                tip = None
            stale = [r for r in self._records.values() if tip is None or r.status.chain_height != tip]
            for record in stale:
                compute_status(record, self._transactions[record.hash], self.wallet, self.chain)
            print_debug(f"🔄 Refreshed {len(stale)} of {len(self._records)} statuses")

        if stale:
            self._trigger_status_updates(stale)
        return stale

    # =========================================================================
    # Callbacks for UI updates
    # =========================================================================

    def on_status_update(self, callback: Callable):
        """Register callback for refreshed records"""
        self.status_callbacks.append(callback)

    def _trigger_status_updates(self, records: List[TransactionRecord]):
        payload = [record.to_dict(self.chain.settings) for record in records]
        for callback in self.status_callbacks:
            try:
                callback(payload)
            except Exception as e:
                print_warn(f"⚠️  Status callback error: {e}")
