"""CLI to probe the crypto advisor API and its upstream providers.

Usage:
  poetry run probe health
  poetry run probe signup "Ada" ada@example.com secret123
  poetry run probe login ada@example.com secret123
  poetry run probe --token TOKEN onboard --assets Bitcoin Ethereum --investor-type HODLer --content Charts
  poetry run probe --token TOKEN dashboard
  poetry run probe --token TOKEN feedback vote coin_prices bitcoin thumbs_up
  poetry run probe provider prices --assets Bitcoin Solana
  poetry run probe provider insight --investor-type "Day Trader"
"""
import argparse
import asyncio
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_signup(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/auth/signup", json={"name": args.name, "email": args.email, "password": args.password})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_login(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/auth/login", json={"email": args.email, "password": args.password})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_me(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/user/me")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_onboard(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {
        "interestedAssets": args.assets,
        "investorType": args.investor_type,
        "contentPreferences": args.content,
    }
    r = client.post("/onboarding", json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_onboarding_status(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/onboarding/status")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_dashboard(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/dashboard")
    r.raise_for_status()
    data = r.json()
    print(
        f"Dashboard: {len(data['coinPrices'])} coins, {len(data['marketNews'])} headlines, "
        f"insight by {data['aiInsight']['model']}",
        file=sys.stderr,
    )
    print_json(data)
    return 0


def cmd_feedback_vote(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"feedbackType": args.feedback_type, "itemId": args.item_id, "vote": args.vote}
    r = client.post("/feedback", json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_feedback_get(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/feedback/{args.feedback_type}/{args.item_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def _provider_run(args: argparse.Namespace) -> int:
    """Call one upstream provider directly (no server required)."""
    from crypto_advisor.config import get_settings
    from crypto_advisor.container import (create_insight_provider,
                                          create_price_provider)
    from crypto_advisor.providers import (CryptoPanicProvider,
                                          RedditMemeProvider)

    settings = get_settings()

    async def run() -> object:
        if args.provider_cmd == "prices":
            async with create_price_provider(settings) as provider:
                if args.assets:
                    return await provider.get_specific_prices(args.assets)
                return await provider.get_top_prices(limit=args.limit)
        if args.provider_cmd == "news":
            async with CryptoPanicProvider(
                api_key=settings.cryptopanic_api_key,
                timeout=settings.cryptopanic_timeout,
                base_url=settings.cryptopanic_base_url,
            ) as provider:
                return await provider.get_market_news(limit=args.limit, interested_assets=args.assets)
        if args.provider_cmd == "insight":
            async with create_insight_provider(settings) as provider:
                return await provider.get_insight(args.assets, args.investor_type)
        async with RedditMemeProvider(
            subreddit=settings.reddit_subreddit,
            hosts=settings.reddit_hosts,
            timeout=settings.reddit_timeout,
            user_agent=settings.reddit_user_agent,
        ) as provider:
            return await provider.get_random_meme()

    try:
        result = asyncio.run(run())
    except KeyboardInterrupt:
        print("\nStopped by user", file=sys.stderr)
        return 130
    if isinstance(result, list):
        print(f"Found {len(result)} items", file=sys.stderr)
        print_json([item.model_dump(mode="json") for item in result])
    else:
        print_json(result.model_dump(mode="json"))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Probe the crypto advisor API and upstream providers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument("--token", default=None, help="Bearer token for protected routes")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")

    p = subparsers.add_parser("signup", help="POST /auth/signup")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("password")
    p = subparsers.add_parser("login", help="POST /auth/login")
    p.add_argument("email")
    p.add_argument("password")
    subparsers.add_parser("me", help="GET /user/me")

    p = subparsers.add_parser("onboard", help="POST /onboarding")
    p.add_argument("--assets", nargs="+", required=True, help="Display names (e.g. Bitcoin Ethereum)")
    p.add_argument("--investor-type", required=True, help="e.g. HODLer, 'Day Trader'")
    p.add_argument("--content", nargs="+", required=True, help="e.g. 'Market News' Charts")
    subparsers.add_parser("status", help="GET /onboarding/status")
    subparsers.add_parser("dashboard", help="GET /dashboard")

    feedback = subparsers.add_parser("feedback", help="Feedback routes (/feedback)")
    feedback_sub = feedback.add_subparsers(dest="feedback_cmd", required=True)
    p = feedback_sub.add_parser("vote", help="POST /feedback")
    p.add_argument("feedback_type", choices=["market_news", "coin_prices", "ai_insight", "meme"])
    p.add_argument("item_id")
    p.add_argument("vote", choices=["thumbs_up", "thumbs_down"])
    p = feedback_sub.add_parser("get", help="GET /feedback/{type}/{item_id}")
    p.add_argument("feedback_type")
    p.add_argument("item_id")

    # provider (direct upstream calls; no server required)
    provider = subparsers.add_parser("provider", help="Call an upstream provider directly")
    provider_sub = provider.add_subparsers(dest="provider_cmd", required=True)
    for name, help_text in [
        ("prices", "CoinGecko prices (top-N, or --assets for specific coins)"),
        ("news", "CryptoPanic headlines"),
        ("insight", "AI insight (OpenRouter, HuggingFace, template)"),
        ("meme", "Random meme (Reddit, local catalog)"),
    ]:
        p = provider_sub.add_parser(name, help=help_text)
        p.add_argument("--assets", nargs="*", default=None, help="Display names (e.g. Bitcoin)")
        p.add_argument("--limit", type=int, default=10, help="Max items (default: 10)")
        p.add_argument("--investor-type", default=None, help="Investor type for the insight prompt")

    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    handlers = {
        "health": cmd_health,
        "signup": cmd_signup,
        "login": cmd_login,
        "me": cmd_me,
        "onboard": cmd_onboard,
        "status": cmd_onboarding_status,
        "dashboard": cmd_dashboard,
        "feedback": {
            "vote": cmd_feedback_vote,
            "get": cmd_feedback_get,
        },
    }

    cmd = args.command
    if cmd == "provider":
        try:
            return _provider_run(args)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    if cmd == "feedback":
        handler = handlers["feedback"][args.feedback_cmd]
    else:
        handler = handlers[cmd]

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else None
    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout, headers=headers) as client:
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
