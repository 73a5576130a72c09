"""
Typed client for the remote account service.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union

from account.errors import AccountSdkError, DecodeError, InvalidParamsError
from account.models import Account, AccountStatus, LogEntry, OperationType, TaskCallback, TaskDetail
from account.transport import RpcCall, RpcTransport
from config import settings
from infra.logger import get_logger

T = TypeVar("T")

MAX_LOG_PAGE_SIZE = 1000
DEFAULT_SUM_AMOUNT = "0"


def _positive(*values: int) -> bool:
    return all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in values)


def _operation_type(value: Union[OperationType, int]) -> Optional[OperationType]:
    if not _positive(value):
        return None
    try:
        return OperationType(value)
    except ValueError:
        return None


def _account_status(value: Union[AccountStatus, int]) -> Optional[AccountStatus]:
    if not _positive(value):
        return None
    try:
        return AccountStatus(value)
    except ValueError:
        return None


class AccountClient:
    """Validate, marshal and send account operations through an injected RPC transport."""

    def __init__(
        self,
        transport: Optional[RpcCall] = None,
        host: Optional[str] = None,
        service: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.transport = transport if transport is not None else RpcTransport()
        self.host = host or getattr(settings, "ACCOUNT_SERVER_HOST", "http://127.0.0.1:8080")
        self.service = service or getattr(settings, "ACCOUNT_SERVICE_NAME", "account")
        self.logger = logger or get_logger("AccountClient")

    def create_account(self, org_id: int, user_id: int, currencies: Sequence[str]) -> List[Account]:
        """
        Create one account per currency for a user.

        Remote errors: 2001 account exists, 2002 create failed.
        """
        if not _positive(org_id, user_id) or isinstance(currencies, str) or not currencies or not all(currencies):
            raise InvalidParamsError("orgId, userId and currency are required")
        params = {
            "orgId": str(org_id),
            "userId": str(user_id),
            "currency": ",".join(currencies),
        }
        data = self._call("createAccount", params)
        return self._decode_list("createAccount", params, data, Account.from_dict)

    def account_info(self, org_id: int, user_ids: Sequence[int], currency: str = "") -> List[Account]:
        """
        Fetch accounts for the given users, optionally filtered by currency.

        Remote errors: 2003 account not found.
        """
        if not _positive(org_id) or isinstance(user_ids, str) or not user_ids or not _positive(*user_ids):
            raise InvalidParamsError("orgId and userIds are required")
        params = {
            "orgId": str(org_id),
            "userIds": json.dumps(list(user_ids)),
            "currency": currency,
        }
        data = self._call("accountInfo", params)
        return self._decode_list("accountInfo", params, data, Account.from_dict)

    def update_status(self, org_id: int, account_id: int, status: Union[AccountStatus, int]) -> None:
        """Remote errors: 2003 account not found, 2004 update failed."""
        resolved = _account_status(status)
        if not _positive(org_id, account_id) or resolved is None:
            raise InvalidParamsError("orgId, accountId and a valid status are required")
        params = {
            "orgId": str(org_id),
            "accountId": str(account_id),
            "status": str(int(resolved)),
        }
        self._call("updateStatus", params)

    def operate_amount(
        self,
        org_id: int,
        account_id: int,
        op_type: Union[OperationType, int],
        bs_type: int,
        amount: str,
        allow_negative: bool = False,
        detail: str = "",
        ext: str = "",
        callback: str = "",
    ) -> None:
        """
        Apply a single balance mutation to an account.

        Remote errors: 2003 not found, 2005/2009/2010 ledger update failed,
        2007 insufficient available balance, 2008 unfreeze failed,
        2011 log creation failed, 1009 BC operation failed.
        """
        resolved = _operation_type(op_type)
        if not _positive(org_id, account_id, bs_type) or resolved is None or not amount:
            raise InvalidParamsError("orgId, accountId, opType, bsType and amount are required")
        params = {
            "orgId": str(org_id),
            "accountId": str(account_id),
            "opType": str(int(resolved)),
            "bsType": str(bs_type),
            "allowNegative": "1" if allow_negative else "0",
            "amount": amount,
            "detail": detail,
            "ext": ext,
            "callback": callback,
        }
        self._call("operateAmount", params)

    def account_log_list(
        self,
        org_id: int,
        user_id: int,
        op_type: Union[OperationType, int] = 0,
        bs_type: int = 0,
        currency: str = "",
        begin_time: int = 0,
        end_time: int = 0,
        page: int = 1,
        limit: int = 20,
    ) -> List[LogEntry]:
        """
        Page through a user's account log. ``op_type`` 0 returns every type.

        Remote errors: 2003 account not found.
        """
        if (
            not _positive(org_id, user_id, page, limit)
            or limit > MAX_LOG_PAGE_SIZE
            or not self._valid_filter(op_type)
        ):
            raise InvalidParamsError("orgId, userId, opType, page and limit (1-1000) are required")
        params = self._log_filter_params(org_id, user_id, op_type, bs_type, currency, begin_time, end_time)
        params["page"] = str(page)
        params["limit"] = str(limit)
        data = self._call("accountLogList", params)
        return self._decode_list("accountLogList", params, data, LogEntry.from_dict)

    def sum_log(
        self,
        org_id: int,
        user_id: int,
        op_type: Union[OperationType, int] = 0,
        bs_type: int = 0,
        currency: str = "",
        begin_time: int = 0,
        end_time: int = 0,
    ) -> str:
        """
        Sum log amounts matching the filters, as a decimal string.

        Any raised AccountSdkError carries ``fallback == "0"``.
        """
        try:
            if not _positive(org_id, user_id) or not self._valid_filter(op_type):
                raise InvalidParamsError("orgId, userId and opType are required")
            params = self._log_filter_params(org_id, user_id, op_type, bs_type, currency, begin_time, end_time)
            data = self._call("sumLog", params)
            total = self._decode("sumLog", params, data)
            if not isinstance(total, str):
                self._log_decode_failure("sumLog", params, data)
                raise DecodeError()
            return total
        except AccountSdkError as exc:
            exc.fallback = DEFAULT_SUM_AMOUNT
            raise

    def batch_operate_amount(
        self,
        org_id: int,
        details: Sequence[TaskDetail],
        is_async: bool = False,
        callback: Optional[TaskCallback] = None,
    ) -> None:
        """
        Submit several balance mutations in one request.

        With ``is_async`` the service processes the batch in the background and
        notifies ``callback`` when done; the delivery guarantee is the service's.
        A failure of any item fails the whole request.
        """
        if not _positive(org_id) or not details or not all(isinstance(d, TaskDetail) for d in details):
            raise InvalidParamsError("orgId and task details are required")
        params = {
            "orgId": str(org_id),
            "isAsync": "1" if is_async else "0",
            "detail": json.dumps([d.to_dict() for d in details]),
            "callback": json.dumps(callback.to_dict() if callback is not None else None),
        }
        self._call("batchOperateAmount", params)

    @staticmethod
    def _valid_filter(op_type: Union[OperationType, int]) -> bool:
        # 0 matches every operation type
        if isinstance(op_type, bool) or not isinstance(op_type, int):
            return False
        return op_type == 0 or _operation_type(op_type) is not None

    @staticmethod
    def _log_filter_params(
        org_id: int,
        user_id: int,
        op_type: Union[OperationType, int],
        bs_type: int,
        currency: str,
        begin_time: int,
        end_time: int,
    ) -> Dict[str, str]:
        return {
            "orgId": str(org_id),
            "userId": str(user_id),
            "opType": str(int(op_type)),
            "bsType": str(bs_type),
            "currency": currency,
            "beginTime": str(begin_time),
            "endTime": str(end_time),
        }

    def _call(self, method: str, params: Dict[str, str]) -> bytes:
        return self.transport(self.host, self.service, method, params)

    def _decode(self, method: str, params: Dict[str, str], data: bytes) -> Any:
        try:
            return json.loads(data)
        except (TypeError, ValueError) as exc:
            self._log_decode_failure(method, params, data)
            raise DecodeError() from exc

    def _decode_list(
        self,
        method: str,
        params: Dict[str, str],
        data: bytes,
        parse: Callable[[Any], T],
    ) -> List[T]:
        payload = self._decode(method, params, data)
        if payload is None:
            return []
        try:
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            return [parse(item) for item in payload]
        except (KeyError, TypeError, ValueError) as exc:
            self._log_decode_failure(method, params, data)
            raise DecodeError() from exc

    def _log_decode_failure(self, method: str, params: Dict[str, str], data: Any) -> None:
        raw = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else repr(data)
        self.logger.error("Decode %s response failed; params=%s body=%s", method, params, raw)
