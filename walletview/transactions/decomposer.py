# walletview/transactions/decomposer.py
"""
Transaction decomposition

Splits one wallet transaction into the records shown in the transaction
list: a stake mint, one credit row per owned output, a single send-to-self
row, one debit row per external payee, or one row for mixed transactions
whose payees cannot be told apart.
"""

from typing import List

from walletview.core.chain import ChainIndex
from walletview.core.transaction import WalletTransaction
from walletview.core.wallet import WalletOracle
from walletview.transactions.record import RecordType, TransactionRecord


def is_visible(tx: WalletTransaction, chain: ChainIndex) -> bool:
    """
    Whether tx belongs in the list at all.

    Generated coins stay hidden until buried under at least one more block:
    a reward whose block loses the race is simply invalid, while ordinary
    transactions can always make it into a later block.
    """
    if tx.is_coinbase():
        return chain.depth_in_main_chain(tx) >= chain.settings.min_reward_depth
    return True


def _credit_records(tx: WalletTransaction, wallet: WalletOracle) -> List[TransactionRecord]:
    records = []
    for txout in tx.vout:
        if not wallet.is_mine_output(txout):
            continue
        record = TransactionRecord(tx.hash, tx.tx_time, credit=txout.value)
        address = wallet.known_address(txout)
        if tx.is_coinbase():
            record.type = RecordType.GENERATED
        elif address:
            record.type = RecordType.RECV_WITH_ADDRESS
            record.address = address
        else:
            # Multisig or other non-standard payment to us
            record.type = RecordType.RECV_FROM_OTHER
            record.address = tx.label("from")
        records.append(record)
    return records


def _debit_records(tx: WalletTransaction, wallet: WalletOracle, debit: int) -> List[TransactionRecord]:
    # Owned outputs are change and are not listed; the whole fee goes on the first payee
    fee = debit - wallet.value_out(tx)
    records = []
    for txout in tx.vout:
        if wallet.is_mine_output(txout):
            continue
        record = TransactionRecord(tx.hash, tx.tx_time)
        if txout.address:
            record.type = RecordType.SEND_TO_ADDRESS
            record.address = txout.address
        else:
            record.type = RecordType.SEND_TO_OTHER
            record.address = tx.label("to")
        value = txout.value
        if fee > 0:
            value += fee
            fee = 0
        record.debit = -value
        records.append(record)
    return records


def decompose(tx: WalletTransaction, wallet: WalletOracle, chain: ChainIndex) -> List[TransactionRecord]:
    """Records for tx in output order, indexed densely from 0"""
    if not is_visible(tx, chain):
        return []

    credit = wallet.credit(tx)
    debit = wallet.debit(tx)
    net = credit - debit

    if tx.is_coinstake():
        records = [TransactionRecord(tx.hash, tx.tx_time, RecordType.STAKE_MINT, "",
                                     -debit, wallet.value_out(tx))]
    elif net > 0 or tx.is_coinbase():
        records = _credit_records(tx, wallet)
    else:
        all_from_me = all(wallet.is_mine_input(txin) for txin in tx.vin)
        all_to_me = all(wallet.is_mine_output(txout) for txout in tx.vout)

        if all_from_me and all_to_me:
            change = wallet.change(tx)
            records = [TransactionRecord(tx.hash, tx.tx_time, RecordType.SEND_TO_SELF, "",
                                         -(debit - change), credit - change)]
        elif all_from_me:
            records = _debit_records(tx, wallet, debit)
        else:
            # Mixed debit, payees can't be broken down
            records = [TransactionRecord(tx.hash, tx.tx_time, RecordType.OTHER, "", net, 0)]

    for idx, record in enumerate(records):
        record.idx = idx
    return records
