"""CLI to exercise the crypto_watcher HTTP API.

Usage:
  crypto-watcher-cli health
  crypto-watcher-cli accounts list
  crypto-watcher-cli accounts positions main-binance --symbol BTC/USDT:USDT
  crypto-watcher-cli watchers create SOL binance 100 above --frequency 5m
  crypto-watcher-cli watchers update <id> --inactive
  crypto-watcher-cli watchers price <id>
"""
import argparse
import json
import sys
from collections.abc import Sequence

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _show(response: httpx.Response) -> int:
    response.raise_for_status()
    if response.content:
        print_json(response.json())
    return 0


def _account_filters(args: argparse.Namespace) -> dict[str, object]:
    params: dict[str, object] = {}
    for name in ("symbol", "since", "limit"):
        value = getattr(args, name, None)
        if value is not None:
            params[name] = value
    return params


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/health"))


def cmd_accounts_list(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/accounts"))


def cmd_accounts_transactions(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(
        client.get(f"/accounts/{args.account_id}/transactions", params=_account_filters(args))
    )


def cmd_accounts_positions(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(
        client.get(f"/accounts/{args.account_id}/positions", params=_account_filters(args))
    )


def cmd_accounts_open_orders(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(
        client.get(f"/accounts/{args.account_id}/open-orders", params=_account_filters(args))
    )


def cmd_watchers_list(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/watchers"))


def cmd_watchers_get(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/watchers/{args.watcher_id}"))


def cmd_watchers_create(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {
        "symbol": args.symbol,
        "exchange": args.exchange,
        "threshold": args.threshold,
        "direction": args.direction,
        "frequency": args.frequency,
    }
    return _show(client.post("/watchers", json=body))


def cmd_watchers_update(client: httpx.Client, args: argparse.Namespace) -> int:
    body: dict[str, object] = {}
    if args.threshold is not None:
        body["threshold"] = args.threshold
    if args.direction is not None:
        body["direction"] = args.direction
    if args.frequency is not None:
        body["frequency"] = args.frequency
    if args.active is not None:
        body["active"] = args.active
    return _show(client.patch(f"/watchers/{args.watcher_id}", json=body))


def cmd_watchers_delete(client: httpx.Client, args: argparse.Namespace) -> int:
    response = client.delete(f"/watchers/{args.watcher_id}")
    response.raise_for_status()
    print(f"Deleted watcher {args.watcher_id}")
    return 0


def cmd_watchers_price(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/watchers/{args.watcher_id}/price"))


HANDLERS = {
    "health": cmd_health,
    "accounts": {
        "list": cmd_accounts_list,
        "transactions": cmd_accounts_transactions,
        "positions": cmd_accounts_positions,
        "open-orders": cmd_accounts_open_orders,
    },
    "watchers": {
        "list": cmd_watchers_list,
        "get": cmd_watchers_get,
        "create": cmd_watchers_create,
        "update": cmd_watchers_update,
        "delete": cmd_watchers_delete,
        "price": cmd_watchers_price,
    },
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exercise the crypto_watcher HTTP API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:4000",
        help="API base URL (default: http://localhost:4000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET /health")

    # accounts
    accounts = subparsers.add_parser("accounts", help="Exchange account routes (/accounts)")
    accounts_sub = accounts.add_subparsers(dest="accounts_cmd", required=True)
    accounts_sub.add_parser("list", help="GET /accounts")
    for name in ("transactions", "positions", "open-orders"):
        p = accounts_sub.add_parser(name, help=f"GET /accounts/{{id}}/{name}")
        p.add_argument("account_id", help="Account id from EXCHANGE_ACCOUNTS")
        p.add_argument("--symbol", default=None, help="Market or currency filter")
        if name != "positions":
            p.add_argument("--since", type=int, default=None, help="Start time (epoch ms)")
            p.add_argument("--limit", type=int, default=None, help="Max records")

    # watchers
    watchers = subparsers.add_parser("watchers", help="Watcher routes (/watchers)")
    watchers_sub = watchers.add_subparsers(dest="watchers_cmd", required=True)
    watchers_sub.add_parser("list", help="GET /watchers")
    for name, help_text in (
        ("get", "GET /watchers/{id}"),
        ("delete", "DELETE /watchers/{id}"),
        ("price", "GET /watchers/{id}/price"),
    ):
        p = watchers_sub.add_parser(name, help=help_text)
        p.add_argument("watcher_id", help="Watcher id")

    p = watchers_sub.add_parser("create", help="POST /watchers")
    p.add_argument("symbol", help="Asset symbol (e.g. BTC)")
    p.add_argument("exchange", help="Exchange id (e.g. binance)")
    p.add_argument("threshold", type=float, help="Price threshold (> 0)")
    p.add_argument("direction", choices=["above", "below"])
    p.add_argument("--frequency", choices=["realtime", "1m", "5m", "15m"], default="realtime")

    p = watchers_sub.add_parser("update", help="PATCH /watchers/{id}")
    p.add_argument("watcher_id", help="Watcher id")
    p.add_argument("--threshold", type=float, default=None)
    p.add_argument("--direction", choices=["above", "below"], default=None)
    p.add_argument("--frequency", choices=["realtime", "1m", "5m", "15m"], default=None)
    active = p.add_mutually_exclusive_group()
    active.add_argument("--active", dest="active", action="store_true", default=None)
    active.add_argument("--inactive", dest="active", action="store_false", default=None)

    return parser


def main(argv: Sequence[str] | None = None, client: httpx.Client | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "health":
        handler = HANDLERS["health"]
    else:
        handler = HANDLERS[args.command][getattr(args, f"{args.command}_cmd")]

    try:
        if client is not None:
            return handler(client, args)
        with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=args.timeout) as http:
            return handler(http, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
