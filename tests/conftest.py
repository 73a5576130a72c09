"""Shared fixtures for account SDK tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest import mock

import pytest

from account.client import AccountClient


class RecordingTransport:
    """Transport spy: records every call and replies with a canned body or error."""

    def __init__(self, body: bytes = b"null", error: Optional[Exception] = None) -> None:
        self.body = body
        self.error = error
        self.calls: List[Tuple[str, str, str, Dict[str, str]]] = []

    def reply_json(self, payload: Any) -> None:
        self.body = json.dumps(payload).encode("utf-8")

    def __call__(self, host: str, service: str, method: str, params: Dict[str, str]) -> bytes:
        self.calls.append((host, service, method, dict(params)))
        if self.error is not None:
            raise self.error
        return self.body

    @property
    def last_params(self) -> Dict[str, str]:
        return self.calls[-1][3]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def logger() -> mock.Mock:
    return mock.Mock()


@pytest.fixture
def client(transport: RecordingTransport, logger: mock.Mock) -> AccountClient:
    return AccountClient(transport=transport, host="http://account.test", service="account", logger=logger)


@pytest.fixture
def account_payload() -> Dict[str, Any]:
    return {
        "accountId": 11,
        "orgId": 1,
        "userId": 42,
        "currency": "USDT",
        "availAmount": "100.123456789012345678",
        "freezeAmount": "0.5",
        "status": 1,
        "createTime": 1700000000,
        "updateTime": 1700000100,
    }


@pytest.fixture
def log_payload() -> Dict[str, Any]:
    return {
        "logId": 7,
        "userId": 42,
        "currency": "USDT",
        "logType": 5,
        "amount": "12.30",
        "createTime": 1700000200,
    }
