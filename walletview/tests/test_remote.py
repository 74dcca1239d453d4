import pytest
import requests

from walletview.core import remote
from walletview.core.remote import RemoteChainIndex
from walletview.core.transaction import TxOut
from walletview.core.wallet import InMemoryWallet
from walletview.errors import ChainUnavailable
from walletview.transactions.book import TransactionBook
from walletview.transactions.record import RecordType, TransactionRecord
from walletview.transactions.status import LifecycleState, compute_status
from walletview.tests.helpers import MY_ADDRESS, block_hash, make_tx, spend


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeNode:
    """Answers the two REST paths the index uses and counts calls"""

    def __init__(self, height, blocks):
        self.height = height
        self.blocks = blocks
        self.calls = []
        self.tip_hash = block_hash(height)

    def get(self, url, timeout=None):
        self.calls.append(url)
        if url.endswith('/blockchain/height'):
            return FakeResponse(payload={'height': self.height, 'hash': self.tip_hash})
        block = url.rsplit('/', 1)[-1]
        if block in self.blocks:
            return FakeResponse(payload=self.blocks[block])
        return FakeResponse(status_code=404)


@pytest.fixture
def node(monkeypatch):
    fake = FakeNode(120, {
        block_hash(110): {'height': 110, 'in_main_chain': True},
        block_hash(111): {'height': 111, 'in_main_chain': False},
    })
    monkeypatch.setattr(remote.requests, 'get', fake.get)
    return fake


class TestRemoteChainIndex:
    def test_heights_and_depth(self, node, settings):
        index = RemoteChainIndex('http://node.local/', settings=settings)
        tx = make_tx(200, vin=[spend(99)], vout=[TxOut(1, MY_ADDRESS)], block_hash=block_hash(110))

        assert index.best_height() == 120
        assert index.confirming_block_height(block_hash(110)) == 110
        assert index.confirming_block_height(block_hash(111)) is None
        assert index.confirming_block_height('d' * 64) is None
        assert index.depth_in_main_chain(tx) == 11
        assert node.calls[0] == 'http://node.local/blockchain/height'

    def test_block_lookups_cached_until_tip_moves(self, node, settings):
        index = RemoteChainIndex('http://node.local', settings=settings)
        index.confirming_block_height(block_hash(110))
        index.confirming_block_height(block_hash(110))
        assert len(node.calls) == 1

        node.height = 121
        assert index.refresh_tip() == 121
        index.confirming_block_height(block_hash(110))
        assert len(node.calls) == 3

    def test_network_error_raises_chain_unavailable(self, monkeypatch, settings):
        def refuse(url, timeout=None):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(remote.requests, 'get', refuse)
        index = RemoteChainIndex('http://node.local', settings=settings)

        with pytest.raises(ChainUnavailable):
            index.best_height()

    def test_bad_status_raises_chain_unavailable(self, monkeypatch, settings):
        monkeypatch.setattr(remote.requests, 'get', lambda url, timeout=None: FakeResponse(status_code=500))
        index = RemoteChainIndex('http://node.local', settings=settings)

        with pytest.raises(ChainUnavailable):
            index.refresh_tip()

    def test_status_is_indeterminate_when_node_down(self, monkeypatch, settings):
        monkeypatch.setattr(remote.requests, 'get', lambda url, timeout=None: FakeResponse(status_code=503))
        index = RemoteChainIndex('http://node.local', settings=settings)
        tx = make_tx(201, vin=[spend(99)], vout=[TxOut(1, MY_ADDRESS)], block_hash=block_hash(110))
        record = TransactionRecord(tx.hash, tx.tx_time, RecordType.RECV_WITH_ADDRESS, MY_ADDRESS, 0, 1)

        status = compute_status(record, tx, InMemoryWallet([MY_ADDRESS]), index)

        assert status.indeterminate is True
        assert status.lifecycle == LifecycleState.UNCONFIRMED

    def test_same_height_new_tip_drops_cached_blocks(self, node, settings):
        index = RemoteChainIndex('http://node.local', settings=settings)
        assert index.current_height() == 120
        assert index.confirming_block_height(block_hash(110)) == 110

        # Competing chain of equal length no longer contains block 110
        node.tip_hash = 'e' * 64
        node.blocks[block_hash(110)] = {'height': 110, 'in_main_chain': False}

        assert index.current_height() == 120
        assert index.confirming_block_height(block_hash(110)) is None


class TestRemoteBookRefresh:
    def test_book_follows_node_tip(self, node, settings):
        index = RemoteChainIndex('http://node.local', settings=settings)
        wallet = InMemoryWallet([MY_ADDRESS], chain=index)
        tx = make_tx(210, vin=[spend(99)], vout=[TxOut(5, MY_ADDRESS)], block_hash=block_hash(110))
        book = TransactionBook(wallet, index)

        [record] = book.load([tx])
        assert record.status.depth == 11
        assert record.status.chain_height == 120
        assert book.needs_status_refresh(record.status) is False

        node.height = 130
        node.tip_hash = block_hash(130)

        assert book.needs_status_refresh(record.status) is True
        assert book.refresh() == [record]
        assert record.status.depth == 21
        assert record.status.chain_height == 130
        assert book.refresh() == []

    def test_refresh_marks_everything_stale_when_node_down(self, node, settings, monkeypatch):
        index = RemoteChainIndex('http://node.local', settings=settings)
        wallet = InMemoryWallet([MY_ADDRESS], chain=index)
        tx = make_tx(211, vin=[spend(99)], vout=[TxOut(5, MY_ADDRESS)], block_hash=block_hash(110))
        book = TransactionBook(wallet, index)
        [record] = book.load([tx])

        monkeypatch.setattr(remote.requests, 'get', lambda url, timeout=None: FakeResponse(status_code=503))

        assert book.refresh() == [record]
        assert record.status.indeterminate is True
