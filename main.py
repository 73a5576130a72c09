"""
Command-line entry point for read-only account service queries.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables before other imports that may read them.
load_dotenv()

from account.client import AccountClient
from account.errors import AccountSdkError
from infra.logger import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="account-sdk", description="Query the remote account service.")
    parser.add_argument("--host", default=None, help="Account server base URL (default: ACCOUNT_SERVER_HOST)")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Show accounts for one or more users")
    info.add_argument("--org-id", type=int, required=True)
    info.add_argument("--user-id", type=int, action="append", required=True, dest="user_ids")
    info.add_argument("--currency", default="")

    for name, help_text in (("logs", "List account log entries"), ("sum", "Sum account log amounts")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--org-id", type=int, required=True)
        cmd.add_argument("--user-id", type=int, required=True)
        cmd.add_argument("--op-type", type=int, default=0)
        cmd.add_argument("--bs-type", type=int, default=0)
        cmd.add_argument("--currency", default="")
        cmd.add_argument("--begin-time", type=int, default=0)
        cmd.add_argument("--end-time", type=int, default=0)
        if name == "logs":
            cmd.add_argument("--page", type=int, default=1)
            cmd.add_argument("--limit", type=int, default=20)
    return parser


def main(argv: Optional[List[str]] = None, client: Optional[AccountClient] = None) -> int:
    logger = get_logger("Main")
    args = build_parser().parse_args(argv)
    client = client or AccountClient(host=args.host)

    try:
        if args.command == "info":
            accounts = client.account_info(args.org_id, args.user_ids, args.currency)
            result: object = [a.to_dict() for a in accounts]
        elif args.command == "logs":
            entries = client.account_log_list(
                args.org_id,
                args.user_id,
                op_type=args.op_type,
                bs_type=args.bs_type,
                currency=args.currency,
                begin_time=args.begin_time,
                end_time=args.end_time,
                page=args.page,
                limit=args.limit,
            )
            result = [e.to_dict() for e in entries]
        else:
            result = {
                "sum": client.sum_log(
                    args.org_id,
                    args.user_id,
                    op_type=args.op_type,
                    bs_type=args.bs_type,
                    currency=args.currency,
                    begin_time=args.begin_time,
                    end_time=args.end_time,
                )
            }
    except AccountSdkError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1

    json.dump(result, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
