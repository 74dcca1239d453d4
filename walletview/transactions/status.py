# walletview/transactions/status.py
"""
Transaction status engine

Computes a point-in-time status for a display record: where it sorts, how
deep it is buried, whether it is still time-locked or looks offline, and for
reward records whether the payout has matured. The result depends only on the
record, its transaction and the wallet/chain snapshot passed in, so it is
recomputed whenever the chain tip moves.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Dict, Tuple

from walletview.core.chain import UNCONFIRMED_HEIGHT, ChainIndex
from walletview.core.transaction import WalletTransaction
from walletview.core.wallet import WalletOracle
from walletview.errors import CollaboratorUnavailable
from walletview.utils.console import print_warn


class LifecycleState(Enum):
    OPEN_UNTIL_BLOCK = "open_until_block"
    OPEN_UNTIL_DATE = "open_until_date"
    OFFLINE = "offline"
    UNCONFIRMED = "unconfirmed"
    HAVE_CONFIRMATIONS = "have_confirmations"


class MaturityState(Enum):
    NOT_APPLICABLE = "not_applicable"
    IMMATURE = "immature"
    MATURES_WARNING = "matures_warning"
    NOT_ACCEPTED = "not_accepted"
    MATURE = "mature"


@total_ordering
@dataclass(frozen=True)
class SortKey:
    """
    Structured sort key of a record.

    Keys order in display order: a smaller key is listed first. Unconfirmed
    records carry UNCONFIRMED_HEIGHT and so come before every confirmed one;
    confirmed records list newest block first, then by receive time and split
    index, latest first.
    """
    height: int = UNCONFIRMED_HEIGHT
    coinbase: int = 0
    time_received: int = 0
    idx: int = 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.height, self.coinbase, self.time_received, self.idx)

    def __lt__(self, other: "SortKey") -> bool:
        if not isinstance(other, SortKey):
            return NotImplemented
        return self.as_tuple() > other.as_tuple()

    def format(self) -> str:
        """Fixed-width string form; sorting these strings descending gives display order"""
        return f"{self.height:010d}-{self.coinbase:01d}-{self.time_received:010d}-{self.idx:03d}"


@dataclass
class TransactionStatus:
    """Status snapshot of one record at chain height `chain_height`"""
    sort_key: SortKey = field(default_factory=SortKey)
    confirmed: bool = False
    depth: int = 0
    chain_height: int = -1
    lifecycle: LifecycleState = LifecycleState.UNCONFIRMED
    maturity: MaturityState = MaturityState.NOT_APPLICABLE
    open_for: int = 0
    matures_in: int = 0
    indeterminate: bool = False

    def to_dict(self) -> Dict:
        """Plain dict; `sort_key` is the fixed-width string, listed in display order when sorted descending"""
        data = asdict(self)
        data.update({
            "sort_key": self.sort_key.format(),
            "lifecycle": self.lifecycle.value,
            "maturity": self.maturity.value,
        })
        return data


def _looks_offline(tx: WalletTransaction, wallet: WalletOracle, chain: ChainIndex, now: int) -> bool:
    # Nobody asked for it within the grace period after we received it
    return now - tx.time_received > chain.settings.offline_grace and wallet.request_count(tx) == 0


def _indeterminate_status(record, tx: WalletTransaction) -> TransactionStatus:
    return TransactionStatus(
        sort_key=SortKey(UNCONFIRMED_HEIGHT, 1 if tx.is_coinbase() else 0, tx.time_received, record.idx),
        lifecycle=LifecycleState.UNCONFIRMED,
        indeterminate=True,
    )


def _compute(record, tx: WalletTransaction, wallet: WalletOracle, chain: ChainIndex) -> TransactionStatus:
    settings = chain.settings
    best = chain.current_height()
    now = chain.adjusted_time()

    height = chain.confirming_block_height(tx.block_hash)
    status = TransactionStatus(
        sort_key=SortKey(
            UNCONFIRMED_HEIGHT if height is None else height,
            1 if tx.is_coinbase() else 0,
            tx.time_received,
            record.idx,
        ),
        confirmed=chain.is_confirmed(tx),
        depth=chain.depth_in_main_chain(tx),
        chain_height=best,
    )

    if not chain.is_final(tx):
        if tx.lock_time < settings.locktime_threshold:
            status.lifecycle = LifecycleState.OPEN_UNTIL_BLOCK
            status.open_for = best - tx.lock_time
        else:
            status.lifecycle = LifecycleState.OPEN_UNTIL_DATE
            status.open_for = tx.lock_time
    elif _looks_offline(tx, wallet, chain, now):
        status.lifecycle = LifecycleState.OFFLINE
    elif status.depth < settings.num_confirmations:
        status.lifecycle = LifecycleState.UNCONFIRMED
    else:
        status.lifecycle = LifecycleState.HAVE_CONFIRMATIONS

    if record.type.is_reward():
        if wallet.credit(tx) == 0:
            status.maturity = MaturityState.IMMATURE
            if chain.is_in_main_chain(tx):
                status.matures_in = chain.blocks_to_maturity(tx)
                if _looks_offline(tx, wallet, chain, now):
                    status.maturity = MaturityState.MATURES_WARNING
            else:
                status.maturity = MaturityState.NOT_ACCEPTED
        else:
            status.maturity = MaturityState.MATURE

    return status


def compute_status(record, tx: WalletTransaction, wallet: WalletOracle, chain: ChainIndex) -> TransactionStatus:
    """
    Recompute and attach the status of `record`.

    Collaborator failures produce an indeterminate status (shown as
    unconfirmed, always stale) instead of raising.
    """
    try:
        status = _compute(record, tx, wallet, chain)
    except CollaboratorUnavailable as e:
        print_warn(f"⚠️  Status for {record.display_id()} is indeterminate: {e}")
        status = _indeterminate_status(record, tx)
    record.status = status
    return status


def needs_status_refresh(status: TransactionStatus, chain: ChainIndex) -> bool:
    """True when the status was computed at a different chain height"""
    try:
        return status.chain_height != chain.current_height()
    except CollaboratorUnavailable:
        return True
