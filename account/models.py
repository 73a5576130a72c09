"""
Account service wire models.

Amounts stay decimal strings exactly as the service sends them; the
``Decimal`` properties are read-only views for callers doing arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, Mapping


class OperationType(IntEnum):
    AVAILABLE_ADD = 1
    AVAILABLE_SUBTRACT = 2
    FREEZE_ADD = 3
    FREEZE_SUBTRACT = 4
    UNFREEZE = 5  # frozen -> available


class AccountStatus(IntEnum):
    NORMAL = 1
    FROZEN = 2


def _require_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _optional_int(payload: Mapping[str, Any], key: str) -> int:
    # absent or null decodes as 0
    if payload.get(key) is None:
        return 0
    return _require_int(payload, key)


def _require_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


@dataclass(frozen=True)
class Account:
    account_id: int
    org_id: int
    user_id: int
    currency: str
    avail_amount: str
    freeze_amount: str
    status: AccountStatus
    create_time: int  # epoch seconds
    update_time: int  # epoch seconds

    @property
    def available(self) -> Decimal:
        return Decimal(self.avail_amount)

    @property
    def frozen(self) -> Decimal:
        return Decimal(self.freeze_amount)

    @classmethod
    def from_dict(cls, payload: Any) -> "Account":
        """Build an Account from a decoded JSON object; raises ValueError/KeyError on bad shape."""
        payload = _require_object(payload)
        return cls(
            account_id=_require_int(payload, "accountId"),
            org_id=_require_int(payload, "orgId"),
            user_id=_require_int(payload, "userId"),
            currency=_require_str(payload, "currency"),
            avail_amount=_require_str(payload, "availAmount"),
            freeze_amount=_require_str(payload, "freezeAmount"),
            status=AccountStatus(_require_int(payload, "status")),
            create_time=_optional_int(payload, "createTime"),
            update_time=_optional_int(payload, "updateTime"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accountId": self.account_id,
            "orgId": self.org_id,
            "userId": self.user_id,
            "currency": self.currency,
            "availAmount": self.avail_amount,
            "freezeAmount": self.freeze_amount,
            "status": int(self.status),
            "createTime": self.create_time,
            "updateTime": self.update_time,
        }


@dataclass(frozen=True)
class LogEntry:
    log_id: int
    user_id: int
    currency: str
    log_type: OperationType
    amount: str
    create_time: int  # epoch seconds

    @property
    def amount_decimal(self) -> Decimal:
        return Decimal(self.amount)

    @classmethod
    def from_dict(cls, payload: Any) -> "LogEntry":
        payload = _require_object(payload)
        return cls(
            log_id=_require_int(payload, "logId"),
            user_id=_require_int(payload, "userId"),
            currency=_require_str(payload, "currency"),
            log_type=OperationType(_require_int(payload, "logType")),
            amount=_require_str(payload, "amount"),
            create_time=_optional_int(payload, "createTime"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logId": self.log_id,
            "userId": self.user_id,
            "currency": self.currency,
            "logType": int(self.log_type),
            "amount": self.amount,
            "createTime": self.create_time,
        }


@dataclass
class TaskDetail:
    """A single balance mutation submitted through a batch request."""

    op_type: OperationType
    bs_type: int
    account_id: int
    user_id: int
    currency: str
    amount: str
    allow_negative: bool = False
    detail: str = ""
    ext: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opType": int(self.op_type),
            "bsType": self.bs_type,
            "accountId": self.account_id,
            "userId": self.user_id,
            "currency": self.currency,
            "allowNegative": 1 if self.allow_negative else 0,
            "amount": self.amount,
            "detail": self.detail,
            "ext": self.ext,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "TaskDetail":
        payload = _require_object(payload)
        return cls(
            op_type=OperationType(_require_int(payload, "opType")),
            bs_type=_require_int(payload, "bsType"),
            account_id=_require_int(payload, "accountId"),
            user_id=_require_int(payload, "userId"),
            currency=_require_str(payload, "currency"),
            amount=_require_str(payload, "amount"),
            allow_negative=bool(_require_int(payload, "allowNegative")),
            detail=_require_str(payload, "detail"),
            ext=_require_str(payload, "ext"),
        )


@dataclass
class TaskCallback:
    """Completion notification target for asynchronous batch requests."""

    callback_url: str
    data: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"callBackUrl": self.callback_url, "data": dict(self.data)}

    @classmethod
    def from_dict(cls, payload: Any) -> "TaskCallback":
        payload = _require_object(payload)
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise ValueError("data must be a JSON object")
        return cls(callback_url=_require_str(payload, "callBackUrl"), data={str(k): str(v) for k, v in data.items()})
