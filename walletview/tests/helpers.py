from walletview.core.transaction import OutPoint, TxIn, WalletTransaction

MY_ADDRESS = "1MyReceiveAddr"
MY_CHANGE = "1MyChangeAddr"
OTHER_ADDRESS = "1SomeoneElse"
THIRD_ADDRESS = "1ThirdParty"
NOW = 1700000000


def tx_hash(n: int) -> str:
    return f"{n:064x}"


def block_hash(height: int) -> str:
    return f"b{height:063x}"


def make_tx(n, vin=(), vout=(), **kwargs) -> WalletTransaction:
    kwargs.setdefault("time", NOW - 60)
    kwargs.setdefault("time_received", NOW - 60)
    return WalletTransaction(hash=tx_hash(n), vin=tuple(vin), vout=tuple(vout), **kwargs)


def spend(n: int, index: int = 0, sequence: int = 0xFFFFFFFF) -> TxIn:
    return TxIn(OutPoint(tx_hash(n), index), sequence)
