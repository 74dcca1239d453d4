"""
walletview - wallet transaction list records and status
"""

__version__ = "1.0.0"

from .core.chain import ChainIndex, ChainSnapshot
from .core.transaction import OutPoint, TxIn, TxOut, WalletTransaction
from .core.wallet import InMemoryWallet, WalletOracle
from .transactions.book import TransactionBook
from .transactions.decomposer import decompose, is_visible
from .transactions.record import RecordType, TransactionRecord
from .transactions.status import (
    LifecycleState,
    MaturityState,
    SortKey,
    TransactionStatus,
    compute_status,
    needs_status_refresh,
)

__all__ = [
    'ChainIndex',
    'ChainSnapshot',
    'OutPoint',
    'TxIn',
    'TxOut',
    'WalletTransaction',
    'InMemoryWallet',
    'WalletOracle',
    'TransactionBook',
    'decompose',
    'is_visible',
    'RecordType',
    'TransactionRecord',
    'LifecycleState',
    'MaturityState',
    'SortKey',
    'TransactionStatus',
    'compute_status',
    'needs_status_refresh',
]
