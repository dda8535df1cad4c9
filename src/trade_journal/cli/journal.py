"""CLI for a running trade journal dashboard.

Usage:
  poetry run trade-journal-cli login alice
  poetry run trade-journal-cli trades --filter active
  poetry run trade-journal-cli stocks --search app --sort daily --descending
  poetry run trade-journal-cli alert 3 150.5 --below
"""
import argparse
import getpass
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _show(response: httpx.Response) -> int:
    response.raise_for_status()
    print_json(response.json())
    return 0


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def cmd_login(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"username": args.username, "password": _password(args)}
    return _show(client.post("/login", json=body))


def cmd_register(client: httpx.Client, args: argparse.Namespace) -> int:
    password = _password(args)
    confirm = args.confirm if args.confirm is not None else getpass.getpass("Confirm password: ")
    body = {"username": args.username, "password": password, "confirmPassword": confirm}
    return _show(client.post("/register", json=body))


def cmd_logout(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.post("/logout"))


def cmd_dashboard(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/"))


def cmd_trades(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {"filter": args.filter} if args.filter else {}
    return _show(client.get("/trades", params=params))


def cmd_sell(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.post(f"/trades/{args.trade_id}/sell"))


def cmd_delete_trade(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.delete(f"/trades/{args.trade_id}"))


def cmd_stocks(client: httpx.Client, args: argparse.Namespace) -> int:
    params: dict[str, str] = {}
    if args.search is not None:
        params["search"] = args.search
    if args.sort:
        params["sort"] = args.sort
        params["direction"] = "descending" if args.descending else "ascending"
    r = client.get("/stocks", params=params)
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data['stocks'])} stocks")
    print_json(data)
    return 0


def cmd_stock(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {"range": args.range} if args.range else {}
    return _show(client.get(f"/stocks/{args.stock_id}", params=params))


def cmd_buy(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.post(f"/stocks/{args.stock_id}/buy"))


def cmd_alert(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"targetPrice": args.price, "direction": "below" if args.below else "above"}
    return _show(client.post(f"/stocks/{args.stock_id}/alerts", json=body))


def cmd_alerts(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/alerts"))


def cmd_delete_alert(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.delete(f"/alerts/{args.alert_id}"))


def cmd_notifications(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/notifications"))


def cmd_set_notifications(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"email": args.email, "emailNotificationsEnabled": not args.disable}
    return _show(client.put("/notifications", json=body))


def cmd_test_notification(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.post("/notifications/test"))


def cmd_profile(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/profile"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drive a running trade journal dashboard.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8010",
        help="Dashboard base URL (default: http://127.0.0.1:8010)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    p = subparsers.add_parser("login", help="POST /login")
    p.add_argument("username")
    p.add_argument("--password", default=None, help="Prompted when omitted")
    p = subparsers.add_parser("register", help="POST /register")
    p.add_argument("username")
    p.add_argument("--password", default=None, help="Prompted when omitted")
    p.add_argument("--confirm", default=None, help="Password confirmation (prompted when omitted)")
    subparsers.add_parser("logout", help="POST /logout")

    subparsers.add_parser("dashboard", help="GET / open positions and stats")
    p = subparsers.add_parser("trades", help="GET /trades")
    p.add_argument("--filter", choices=["all", "active", "closed"], default=None)
    p = subparsers.add_parser("sell", help="POST /trades/{id}/sell")
    p.add_argument("trade_id", type=int)
    p = subparsers.add_parser("delete-trade", help="DELETE /trades/{id} (closed trades only)")
    p.add_argument("trade_id", type=int)

    p = subparsers.add_parser("stocks", help="GET /stocks")
    p.add_argument("--search", default=None, help="Match on symbol or name")
    p.add_argument("--sort", choices=["symbol", "name", "price", "daily"], default=None)
    p.add_argument("--descending", action="store_true", help="Sort descending")
    p = subparsers.add_parser("stock", help="GET /stocks/{id}")
    p.add_argument("stock_id", type=int)
    p.add_argument("--range", choices=["1W", "1M", "3M", "1Y", "ALL"], default=None)
    p = subparsers.add_parser("buy", help="POST /stocks/{id}/buy")
    p.add_argument("stock_id", type=int)
    p = subparsers.add_parser("alert", help="POST /stocks/{id}/alerts")
    p.add_argument("stock_id", type=int)
    p.add_argument("price", help="Target price")
    p.add_argument("--below", action="store_true", help="Trigger when price falls below target")

    subparsers.add_parser("alerts", help="GET /alerts")
    p = subparsers.add_parser("delete-alert", help="DELETE /alerts/{id}")
    p.add_argument("alert_id", type=int)

    subparsers.add_parser("notifications", help="GET /notifications")
    p = subparsers.add_parser("set-notifications", help="PUT /notifications")
    p.add_argument("--email", default="", help="Address for notifications")
    p.add_argument("--disable", action="store_true", help="Turn email notifications off")
    subparsers.add_parser("test-notification", help="POST /notifications/test")

    subparsers.add_parser("profile", help="GET /profile")
    return parser


HANDLERS = {
    "login": cmd_login,
    "register": cmd_register,
    "logout": cmd_logout,
    "dashboard": cmd_dashboard,
    "trades": cmd_trades,
    "sell": cmd_sell,
    "delete-trade": cmd_delete_trade,
    "stocks": cmd_stocks,
    "stock": cmd_stock,
    "buy": cmd_buy,
    "alert": cmd_alert,
    "alerts": cmd_alerts,
    "delete-alert": cmd_delete_alert,
    "notifications": cmd_notifications,
    "set-notifications": cmd_set_notifications,
    "test-notification": cmd_test_notification,
    "profile": cmd_profile,
}


def main(argv: list[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    args = build_parser().parse_args(argv)
    handler = HANDLERS[args.command]
    try:
        with httpx.Client(
            base_url=args.base_url.rstrip("/"),
            timeout=args.timeout,
            follow_redirects=True,
            transport=transport,
        ) as client:
            return handler(client, args)
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
