"""Unit tests for CancellationToken."""

from __future__ import annotations

import threading
import time

import pytest

from searchx.cancellation import CancellationToken
from searchx.errors import ErrorCode, SearchCancelledError, SearchTimeoutError


def test_fresh_token_is_live():
    token = CancellationToken()

    assert not token.cancelled
    assert token.remaining is None
    token.raise_if_cancelled()


def test_cancel_fires_token():
    token = CancellationToken()
    token.cancel()

    assert token.cancelled
    with pytest.raises(SearchCancelledError) as excinfo:
        token.raise_if_cancelled()
    assert excinfo.value.code is ErrorCode.CANCELED
    assert not isinstance(excinfo.value, SearchTimeoutError)


def test_deadline_expiry_raises_timeout():
    token = CancellationToken.with_timeout(0.01)
    time.sleep(0.02)

    assert token.expired
    assert token.cancelled
    assert token.remaining == 0.0
    with pytest.raises(SearchTimeoutError) as excinfo:
        token.raise_if_cancelled()
    assert excinfo.value.code is ErrorCode.TIMEOUT


def test_explicit_cancel_wins_over_deadline():
    token = CancellationToken(timeout=0)
    token.cancel()

    with pytest.raises(SearchCancelledError) as excinfo:
        token.raise_if_cancelled()
    assert type(excinfo.value) is SearchCancelledError


def test_remaining_counts_down():
    token = CancellationToken(timeout=60)

    assert 0 < token.remaining <= 60
    assert not token.expired


def test_cancel_from_another_thread():
    token = CancellationToken()
    thread = threading.Thread(target=token.cancel)
    thread.start()
    thread.join(timeout=5)

    assert token.cancelled
