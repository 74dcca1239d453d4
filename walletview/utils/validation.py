import json
import re
from typing import Any, Dict, Optional, Tuple

_HEX_RE = re.compile(r"^[0-9a-f]+$", re.IGNORECASE)

COIN = 100000000
MAX_MONEY = 21000000 * COIN
MAX_LABEL_LEN = 128
MAX_TX_BYTES = 1024 * 1024
MAX_LOCK_TIME = 0xFFFFFFFF


def is_safe_text(value: Optional[str], max_len: int = MAX_LABEL_LEN) -> bool:
    if value is None:
        return False
    text = str(value)
    if len(text) > max_len:
        return False
    for ch in text:
        code = ord(ch)
        if code < 32 or code == 127:
            return False
    return True


def _is_hex(value: Optional[str], length: int) -> bool:
    if value is None:
        return False
    text = str(value).lower().strip()
    if len(text) != length:
        return False
    return bool(_HEX_RE.fullmatch(text))


def is_valid_tx_hash(value: Optional[str]) -> bool:
    return _is_hex(value, 64)


def money_range(value: Any) -> bool:
    """True for integer amounts inside 0..MAX_MONEY."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_MONEY


def _validate_outpoint(prevout: Any) -> Tuple[bool, str]:
    if not isinstance(prevout, dict):
        return False, "Input prevout must be an object"
    if not is_valid_tx_hash(prevout.get("hash")):
        return False, "Invalid prevout hash"
    n = prevout.get("n")
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        return False, "Invalid prevout index"
    return True, "OK"


def validate_transaction_payload(transaction: Any) -> Tuple[bool, str]:
    if not isinstance(transaction, dict):
        return False, "Transaction payload must be an object"

    try:
        payload_size = len(json.dumps(transaction))
        if payload_size > MAX_TX_BYTES:
            return False, "Transaction payload too large"
    except Exception:
        return False, "Transaction payload not serializable"

    if not is_valid_tx_hash(transaction.get("hash")):
        return False, "Invalid transaction hash"

    vin = transaction.get("vin", [])
    vout = transaction.get("vout", [])
    if not isinstance(vin, list) or not isinstance(vout, list):
        return False, "vin/vout must be lists"

    for txin in vin:
        if not isinstance(txin, dict):
            return False, "Input must be an object"
        ok, message = _validate_outpoint(txin.get("prevout"))
        if not ok:
            return False, message

    total = 0
    for txout in vout:
        if not isinstance(txout, dict):
            return False, "Output must be an object"
        value = txout.get("value")
        if not money_range(value):
            return False, "Output value out of range"
        total += value
        address = txout.get("address")
        if address is not None and not is_safe_text(address, max_len=128):
            return False, "Invalid output address"
    if not money_range(total):
        return False, "Total output value out of range"

    for key in ("time", "time_received"):
        stamp = transaction.get(key, 0)
        if isinstance(stamp, bool) or not isinstance(stamp, int) or stamp < 0:
            return False, f"Invalid {key}"

    lock_time = transaction.get("lock_time", 0)
    if isinstance(lock_time, bool) or not isinstance(lock_time, int) or not 0 <= lock_time <= MAX_LOCK_TIME:
        return False, "Invalid lock_time"

    block_hash = transaction.get("block_hash")
    if block_hash is not None and not is_valid_tx_hash(block_hash):
        return False, "Invalid block hash"

    labels: Dict = transaction.get("labels") or {}
    if not isinstance(labels, dict):
        return False, "Labels must be an object"
    for key in ("from", "to"):
        if key in labels and not is_safe_text(labels[key]):
            return False, f"Invalid '{key}' label"

    return True, "OK"
