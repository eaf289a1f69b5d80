"""Tests for the single-slot token cache."""

import threading
from unittest.mock import MagicMock

import pytest

from infisical_client import AuthenticationError, DecodeError, TokenStore


class TestTokenStore:
    def test_get_token_logs_in_lazily(self):
        login = MagicMock(return_value="tok-A")
        store = TokenStore(login)

        assert not store.has_token
        login.assert_not_called()
        assert store.get_token() == "tok-A"
        assert store.get_token() == "tok-A"
        login.assert_called_once_with()

    def test_force_refresh_overwrites(self):
        login = MagicMock(side_effect=["tok-A", "tok-B"])
        store = TokenStore(login)

        store.get_token()
        assert store.force_refresh() == "tok-B"
        assert store.get_token() == "tok-B"
        assert login.call_count == 2

    def test_force_refresh_without_cached_token(self):
        store = TokenStore(MagicMock(return_value="tok-A"))

        assert store.force_refresh() == "tok-A"
        assert store.token == "tok-A"

    def test_failed_login_keeps_previous_token(self):
        login = MagicMock(side_effect=["tok-A", AuthenticationError("rejected")])
        store = TokenStore(login)
        store.get_token()

        with pytest.raises(AuthenticationError):
            store.force_refresh()
        assert store.token == "tok-A"

    def test_failed_first_login_caches_nothing(self):
        store = TokenStore(MagicMock(side_effect=AuthenticationError("rejected")))

        with pytest.raises(AuthenticationError):
            store.get_token()
        assert store.token is None

    def test_empty_token_is_rejected(self):
        store = TokenStore(MagicMock(return_value=""))

        with pytest.raises(DecodeError):
            store.get_token()
        assert not store.has_token

    def test_concurrent_first_callers_do_not_block(self):
        barrier = threading.Barrier(2, timeout=5)
        tokens = iter(["tok-A", "tok-B"])
        lock = threading.Lock()

        def login():
            barrier.wait()
            with lock:
                return next(tokens)

        store = TokenStore(login)
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(store.get_token()))
            for _ in range(2)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert sorted(results) == ["tok-A", "tok-B"]
        assert store.token in ("tok-A", "tok-B")
