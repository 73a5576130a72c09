"""
Error types raised by the account SDK.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Union


class ErrorCode(IntEnum):
    """Error codes documented by the remote account service."""

    INVALID_PARAMS = 1001
    BC_OPERATE_FAILED = 1009
    ACCOUNT_EXISTS = 2001
    CREATE_FAILED = 2002
    ACCOUNT_NOT_FOUND = 2003
    UPDATE_STATUS_FAILED = 2004
    AVAILABLE_ADD_FAILED = 2005
    INSUFFICIENT_AVAILABLE = 2007
    UNFREEZE_FAILED = 2008
    AVAILABLE_SUBTRACT_FAILED = 2009
    FREEZE_SUBTRACT_FAILED = 2010
    LOG_CREATE_FAILED = 2011


def to_error_code(value: int) -> Union[ErrorCode, int]:
    try:
        return ErrorCode(value)
    except ValueError:
        return value


class AccountSdkError(Exception):
    """Base class for every error surfaced by the SDK."""

    code: Optional[Union[ErrorCode, int]] = None

    def __init__(self, message: str, code: Optional[Union[ErrorCode, int]] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        # Default result an operation reports alongside this error, if any.
        self.fallback: Optional[str] = None


class InvalidParamsError(AccountSdkError):
    """Raised when caller arguments fail validation; the network is never touched."""

    code = ErrorCode.INVALID_PARAMS


class DecodeError(AccountSdkError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str = "service busy") -> None:
        super().__init__(message)


class TransportError(AccountSdkError):
    """Raised by the transport for network, HTTP or envelope failures."""

    def __init__(
        self,
        message: str,
        code: Optional[Union[ErrorCode, int]] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message, code)
        self.status = status


class AccountServiceError(TransportError):
    """Raised when the account service answers with a non-zero error code."""

    def __init__(self, code: int, message: str = "") -> None:
        resolved = to_error_code(code)
        super().__init__(message or f"account service error {code}", code=resolved)

    def __str__(self) -> str:
        return f"[{int(self.code)}] {self.message}"
