# walletview/transactions/record.py
"""Display records split out of wallet transactions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from walletview.transactions.status import TransactionStatus
from walletview.utils.formatting import format_amount


class RecordType(Enum):
    """Category of a display record"""
    OTHER = "other"
    GENERATED = "generated"
    STAKE_MINT = "stake_mint"
    SEND_TO_ADDRESS = "send_to_address"
    SEND_TO_OTHER = "send_to_other"
    RECV_WITH_ADDRESS = "recv_with_address"
    RECV_FROM_OTHER = "recv_from_other"
    SEND_TO_SELF = "send_to_self"

    def is_reward(self) -> bool:
        return self in (RecordType.GENERATED, RecordType.STAKE_MINT)


@dataclass
class TransactionRecord:
    """One row of the transaction list"""
    hash: str
    time: int
    type: RecordType = RecordType.OTHER
    address: str = ""
    debit: int = 0
    credit: int = 0
    idx: int = 0
    status: TransactionStatus = field(default_factory=TransactionStatus, compare=False)

    @property
    def net(self) -> int:
        return self.debit + self.credit

    def display_id(self) -> str:
        """Stable list key: transaction hash plus the split index"""
        return f"{self.hash}-{self.idx:03d}"

    def to_dict(self, settings=None) -> Dict:
        """Plain dict for JSON output; amounts are rendered with `settings` unit and decimals"""
        return {
            "id": self.display_id(),
            "hash": self.hash,
            "idx": self.idx,
            "time": self.time,
            "type": self.type.value,
            "address": self.address,
            "debit": self.debit,
            "credit": self.credit,
            "debit_display": format_amount(self.debit, settings=settings),
            "credit_display": format_amount(self.credit, settings=settings),
            "amount_display": format_amount(self.net, plus=True, settings=settings),
            "status": self.status.to_dict(),
        }
