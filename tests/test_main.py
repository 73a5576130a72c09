"""Tests for the command-line entry point."""

import json

from account.client import AccountClient
from account.errors import AccountServiceError
import main


def test_info_prints_accounts(capsys, transport, account_payload) -> None:
    transport.reply_json([account_payload])
    client = AccountClient(transport=transport, host="http://h")

    code = main.main(["info", "--org-id", "1", "--user-id", "42", "--user-id", "43"], client=client)

    assert code == 0
    assert json.loads(capsys.readouterr().out) == [account_payload]
    assert json.loads(transport.last_params["userIds"]) == [42, 43]


def test_logs_forwards_paging(capsys, transport) -> None:
    transport.reply_json([])
    client = AccountClient(transport=transport, host="http://h")

    code = main.main(["logs", "--org-id", "1", "--user-id", "42", "--page", "3", "--limit", "1000"], client=client)

    assert code == 0
    assert transport.last_params["page"] == "3"
    assert transport.last_params["limit"] == "1000"
    assert json.loads(capsys.readouterr().out) == []


def test_sum_prints_total(capsys, transport) -> None:
    transport.reply_json("42.42")
    client = AccountClient(transport=transport, host="http://h")

    assert main.main(["sum", "--org-id", "1", "--user-id", "42", "--op-type", "1"], client=client) == 0
    assert json.loads(capsys.readouterr().out) == {"sum": "42.42"}


def test_sdk_error_exits_non_zero(capsys, transport) -> None:
    transport.error = AccountServiceError(2003, "account not found")
    client = AccountClient(transport=transport, host="http://h")

    assert main.main(["info", "--org-id", "1", "--user-id", "42"], client=client) == 1
    assert "accountId" not in capsys.readouterr().out
