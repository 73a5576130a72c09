"""
HTTP transport for the account service RPC endpoints.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional

import requests

from account.errors import AccountServiceError, TransportError
from config import settings
from infra.logger import get_logger
from infra.retry import retry_call


# rpc_call(host, service, method, params) -> raw response bytes
RpcCall = Callable[[str, str, str, Dict[str, str]], bytes]

# Read-only methods are safe to resend after any request failure.
READ_ONLY_METHODS = frozenset({"accountInfo", "accountLogList", "sumLog"})


class RpcTransport:
    """Form-encoded POST transport that unwraps the service's code/msg/data envelope."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else getattr(settings, "REQUEST_TIMEOUT", 10.0)
        self.max_retries = max_retries if max_retries is not None else getattr(settings, "RPC_MAX_RETRIES", 3)
        self.backoff_factor = (
            backoff_factor if backoff_factor is not None else getattr(settings, "RPC_BACKOFF_FACTOR", 0.5)
        )
        self.session = session or requests.Session()
        self.logger = get_logger("RpcTransport")

    def __call__(self, host: str, service: str, method: str, params: Dict[str, str]) -> bytes:
        url = f"{host.rstrip('/')}/{service}/{method}"
        # Mutations may already be applied once the request is sent; only a failed connect is resent.
        retry_on = (requests.RequestException,) if method in READ_ONLY_METHODS else (requests.ConnectTimeout,)
        try:
            response = retry_call(
                self._post,
                url,
                params,
                max_retries=self.max_retries,
                backoff_factor=self.backoff_factor,
                retry_on=retry_on,
            )
        except requests.RequestException as exc:
            raise TransportError(f"request to {service}/{method} failed: {exc}") from exc
        return self._handle_response(response, f"{service}/{method}")

    def _post(self, url: str, params: Dict[str, str]) -> Any:
        return self.session.post(url, data=params, timeout=self.timeout)

    def _handle_response(self, response: Any, endpoint: str) -> bytes:
        if response.status_code >= 400:
            self.logger.error("Account service HTTP error (%s) on %s: %s", response.status_code, endpoint, response.text)
            raise TransportError(f"HTTP {response.status_code} from {endpoint}", status=response.status_code)
        try:
            envelope = response.json()
        except ValueError as exc:
            self.logger.error("Failed to decode response envelope from %s", endpoint)
            raise TransportError(f"invalid response envelope from {endpoint}") from exc
        if not isinstance(envelope, dict) or not isinstance(envelope.get("code"), int):
            self.logger.error("Unexpected response envelope from %s: %s", endpoint, envelope)
            raise TransportError(f"invalid response envelope from {endpoint}")
        if envelope["code"] != 0:
            raise AccountServiceError(envelope["code"], str(envelope.get("msg") or ""))
        return json.dumps(envelope.get("data")).encode("utf-8")
