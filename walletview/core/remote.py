# walletview/core/remote.py
import time
from typing import Dict, Optional

import requests

from walletview.config import Settings
from walletview.core.chain import ChainIndex
from walletview.errors import ChainUnavailable
from walletview.utils.console import print_debug, print_warn


class RemoteChainIndex(ChainIndex):
    """Chain index backed by a node's REST endpoint"""

    def __init__(self, endpoint_url: Optional[str] = None, settings: Optional[Settings] = None,
                 time_offset: int = 0):
        super().__init__(settings)
        self.endpoint_url = (endpoint_url or self.settings.chain_endpoint).rstrip('/')
        self.timeout = self.settings.chain_timeout
        self.time_offset = time_offset
        self._tip: Optional[int] = None
        self._tip_hash: Optional[str] = None
        self._height_cache: Dict[str, Optional[int]] = {}

    def _get_json(self, path: str) -> Dict:
        url = f'{self.endpoint_url}{path}'
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            print_warn(f"⚠️  Chain endpoint error: {e}")
            raise ChainUnavailable(f"Chain endpoint unreachable: {url}") from e
        if response.status_code == 404:
            return {}
        if response.status_code != 200:
            raise ChainUnavailable(f"Chain endpoint returned {response.status_code} for {url}")
        try:
            return response.json()
        except ValueError as e:
            raise ChainUnavailable(f"Chain endpoint returned invalid JSON for {url}") from e

    def refresh_tip(self) -> int:
        """Fetch the current best height; a new tip (height or hash) drops cached block lookups"""
        data = self._get_json('/blockchain/height')
        try:
            height = int(data['height'])
        except (KeyError, TypeError, ValueError) as e:
            raise ChainUnavailable("Height endpoint returned no height") from e
        tip_hash = data.get('hash')
        if height != self._tip or tip_hash != self._tip_hash:
            print_debug(f"📊 Chain tip {self._tip} -> {height}")
            self._height_cache.clear()
        self._tip = height
        self._tip_hash = tip_hash
        return height

    def current_height(self) -> int:
        return self.refresh_tip()

    def best_height(self) -> int:
        if self._tip is None:
            return self.refresh_tip()
        return self._tip

    def confirming_block_height(self, block_hash: Optional[str]) -> Optional[int]:
        if not block_hash:
            return None
        key = block_hash.lower()
        if key in self._height_cache:
            return self._height_cache[key]

        block = self._get_json(f'/blockchain/block/{key}')
        height = None
        if block and block.get('in_main_chain', True) and block.get('height') is not None:
            height = int(block['height'])
        self._height_cache[key] = height
        return height

    def adjusted_time(self) -> int:
        return int(time.time()) + self.time_offset
