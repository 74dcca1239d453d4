# walletview/core/transaction.py
"""
Wallet transaction model

Immutable snapshot of a wallet-visible transaction: inputs, outputs, lock
time, timestamps and the hash of the block that includes it (if any).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from walletview.errors import InvalidTransaction
from walletview.utils.validation import validate_transaction_payload

SEQUENCE_FINAL = 0xFFFFFFFF


@dataclass(frozen=True)
class OutPoint:
    """Reference to an output of a previous transaction"""
    hash: str
    n: int


@dataclass(frozen=True)
class TxIn:
    prevout: OutPoint
    sequence: int = SEQUENCE_FINAL

    def is_final(self) -> bool:
        return self.sequence == SEQUENCE_FINAL


@dataclass(frozen=True)
class TxOut:
    """Output value in base units and its decoded destination (None if non-standard)"""
    value: int
    address: Optional[str] = None


@dataclass(frozen=True)
class WalletTransaction:
    """A transaction as the wallet sees it"""
    hash: str
    vin: Tuple[TxIn, ...] = ()
    vout: Tuple[TxOut, ...] = ()
    time: int = 0
    time_received: int = 0
    lock_time: int = 0
    block_hash: Optional[str] = None
    coinbase: bool = False
    coinstake: bool = False
    labels: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def tx_time(self) -> int:
        """Time shown for the transaction: smart time when known, else receive time"""
        return self.time or self.time_received

    def is_coinbase(self) -> bool:
        return self.coinbase

    def is_coinstake(self) -> bool:
        return self.coinstake

    def is_reward(self) -> bool:
        return self.coinbase or self.coinstake

    def label(self, key: str) -> str:
        return self.labels.get(key, "") or ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalletTransaction":
        """Build a transaction from a JSON-like payload"""
        ok, message = validate_transaction_payload(data)
        if not ok:
            tx_hash = data.get("hash") if isinstance(data, dict) else None
            raise InvalidTransaction(message, tx_hash=tx_hash)

        vin: List[TxIn] = []
        for raw_in in data.get("vin", []):
            prevout = raw_in["prevout"]
            vin.append(TxIn(
                prevout=OutPoint(hash=prevout["hash"].lower(), n=prevout["n"]),
                sequence=int(raw_in.get("sequence", SEQUENCE_FINAL)),
            ))

        vout = [TxOut(value=raw_out["value"], address=raw_out.get("address"))
                for raw_out in data.get("vout", [])]

        block_hash = data.get("block_hash")
        return cls(
            hash=data["hash"].lower(),
            vin=tuple(vin),
            vout=tuple(vout),
            time=data.get("time", 0),
            time_received=data.get("time_received", data.get("time", 0)),
            lock_time=data.get("lock_time", 0),
            block_hash=block_hash.lower() if block_hash else None,
            coinbase=bool(data.get("coinbase", False)),
            coinstake=bool(data.get("coinstake", False)),
            labels=dict(data.get("labels") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "vin": [{"prevout": {"hash": i.prevout.hash, "n": i.prevout.n}, "sequence": i.sequence}
                    for i in self.vin],
            "vout": [{"value": o.value, "address": o.address} for o in self.vout],
            "time": self.time,
            "time_received": self.time_received,
            "lock_time": self.lock_time,
            "block_hash": self.block_hash,
            "coinbase": self.coinbase,
            "coinstake": self.coinstake,
            "labels": dict(self.labels),
        }


def is_final_tx(tx: WalletTransaction, block_height: int, block_time: int,
                locktime_threshold: int = 500000000) -> bool:
    """
    Lock-time finality at the given height/time.

    A lock value below the threshold is a block height, otherwise a unix
    timestamp. An unexpired lock is still final when every input opted out
    by using the final sequence number.
    """
    if tx.lock_time == 0:
        return True
    limit = block_height if tx.lock_time < locktime_threshold else block_time
    if tx.lock_time < limit:
        return True
    return all(txin.is_final() for txin in tx.vin)
