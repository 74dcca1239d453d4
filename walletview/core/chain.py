# walletview/core/chain.py
"""
Chain index queries

ChainIndex answers the read-only questions the status engine asks about the
best chain. Subclasses provide three primitives (block height lookup, best
height, adjusted time); depth, finality and maturity are derived here once.
"""

import time
from typing import Dict, Optional

from walletview.config import Settings, load_settings
from walletview.core.transaction import WalletTransaction, is_final_tx

# Sort sentinel for transactions that are not in any block
UNCONFIRMED_HEIGHT = 2 ** 31 - 1


class ChainIndex:
    """Read-only view of the best chain"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()

    # =========================================================================
    # Primitives
    # =========================================================================

    def confirming_block_height(self, block_hash: Optional[str]) -> Optional[int]:
        """Height of the block in the main chain, or None"""
        raise NotImplementedError

    def best_height(self) -> int:
        raise NotImplementedError

    def adjusted_time(self) -> int:
        raise NotImplementedError

    def current_height(self) -> int:
        """Best height re-read from the source; snapshots just return best_height()"""
        return self.best_height()

    # =========================================================================
    # Derived queries
    # =========================================================================

    def depth_in_main_chain(self, tx: WalletTransaction) -> int:
        height = self.confirming_block_height(tx.block_hash)
        if height is None:
            return 0
        return max(0, self.best_height() - height + 1)

    def is_in_main_chain(self, tx: WalletTransaction) -> bool:
        return self.depth_in_main_chain(tx) > 0

    def is_confirmed(self, tx: WalletTransaction) -> bool:
        return self.is_in_main_chain(tx)

    def is_final(self, tx: WalletTransaction) -> bool:
        return is_final_tx(tx, self.best_height() + 1, self.adjusted_time(),
                           self.settings.locktime_threshold)

    def blocks_to_maturity(self, tx: WalletTransaction) -> int:
        if not tx.is_reward():
            return 0
        return max(0, (self.settings.coinbase_maturity + 1) - self.depth_in_main_chain(tx))


class ChainSnapshot(ChainIndex):
    """
    Immutable in-memory snapshot of chain state.

    Parameters:
        block_heights: block hash -> height for blocks in the main chain
        best_height: height of the chain tip
        adjusted_time: network-adjusted unix time; defaults to now
    """

    def __init__(self, block_heights: Optional[Dict[str, int]] = None, best_height: int = 0,
                 adjusted_time: Optional[int] = None, settings: Optional[Settings] = None):
        super().__init__(settings)
        self._block_heights = {h.lower(): height for h, height in (block_heights or {}).items()}
        self._best_height = best_height
        self._adjusted_time = int(time.time()) if adjusted_time is None else adjusted_time

    def confirming_block_height(self, block_hash: Optional[str]) -> Optional[int]:
        if not block_hash:
            return None
        height = self._block_heights.get(block_hash.lower())
        if height is None or height > self._best_height:
            return None
        return height

    def best_height(self) -> int:
        return self._best_height

    def adjusted_time(self) -> int:
        return self._adjusted_time

    def advance(self, best_height: int, block_heights: Optional[Dict[str, int]] = None,
                adjusted_time: Optional[int] = None) -> "ChainSnapshot":
        """Return a new snapshot at a later tip"""
        merged = dict(self._block_heights)
        merged.update(block_heights or {})
        return ChainSnapshot(
            block_heights=merged,
            best_height=best_height,
            adjusted_time=self._adjusted_time if adjusted_time is None else adjusted_time,
            settings=self.settings,
        )

    @classmethod
    def from_dict(cls, data: Dict, settings: Optional[Settings] = None) -> "ChainSnapshot":
        return cls(
            block_heights={str(k): int(v) for k, v in (data.get("blocks") or {}).items()},
            best_height=int(data.get("best_height", 0)),
            adjusted_time=data.get("adjusted_time"),
            settings=settings,
        )
