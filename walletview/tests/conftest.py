import pytest

from walletview.config import Settings
from walletview.core.chain import ChainSnapshot
from walletview.core.transaction import TxOut
from walletview.core.wallet import InMemoryWallet
from walletview.tests.helpers import MY_ADDRESS, MY_CHANGE, NOW, block_hash, make_tx


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def make_chain(settings):
    """Chain snapshot with blocks 0..best_height at hashes block_hash(height)"""
    def _make(best_height=100, adjusted_time=NOW):
        blocks = {block_hash(h): h for h in range(best_height + 1)}
        return ChainSnapshot(blocks, best_height=best_height, adjusted_time=adjusted_time,
                             settings=settings)
    return _make


@pytest.fixture
def chain(make_chain):
    return make_chain()


@pytest.fixture
def wallet(chain):
    """Wallet owning two addresses with one funding coin of 1000 at tx 1:0"""
    w = InMemoryWallet(
        addresses=[MY_ADDRESS, MY_CHANGE],
        address_book={MY_ADDRESS: "Savings"},
        chain=chain,
    )
    w.add_transaction(make_tx(1, vout=[TxOut(1000, MY_ADDRESS)], block_hash=block_hash(50)))
    return w
