#!/usr/bin/env python3
"""Simple CLI for trying the swap form locally"""

import argparse
import asyncio
from typing import List, Optional, Sequence

from swapform.config import settings
from swapform.core.swap import (
    SwapFormSession,
    Token,
    build_quote,
    find_token_by_symbol,
    format_amount,
    format_rate_line,
    normalize_symbol,
    search_tokens,
    validate_amount,
)
from swapform.logging_config import setup_logging
from swapform.services.catalog_loader import CatalogLoader


SWAP_HELP = """
Commands:
  send <amount>     - Set the amount to send
  receive <amount>  - Set the amount to receive
  from <symbol>     - Choose the token to send
  to <symbol>       - Choose the token to receive
  flip              - Swap send and receive sides
  search <query>    - Quick search; follow with 'down', 'up', 'pick' or 'esc'
  submit            - Confirm the swap (simulated)
  show              - Print the form
  exit              - Quit
"""


def print_tokens(tokens: Sequence[Token]):
    """Pretty print a token list"""
    if not tokens:
        print("❌ No tokens available")
        return

    print(f"\n{'Symbol':<10} {'Price (USD)':>18}  Updated")
    print("-" * 60)
    for token in tokens:
        print(f"{token.symbol:<10} {format_amount(token.price, 8):>18}  {token.updated_at}")
    print(f"\n{len(tokens)} token(s)")


def render_form(session: SwapFormSession) -> str:
    snapshot = session.snapshot
    values = snapshot.values
    lines = [
        "=" * 50,
        f"Send:    {values.from_amount or '0.00':>20} {values.from_symbol or '--'}",
        f"Receive: {values.to_amount or '0.00':>20} {values.to_symbol or '--'}",
    ]
    if snapshot.is_loading:
        lines.append("⏳ Loading prices...")
    elif session.rate_line:
        lines.append(f"Rate:    {session.rate_line}")
    for field, message in session.visible_errors.items():
        lines.append(f"⚠️  {field}: {message}")
    if snapshot.catalog_error:
        lines.append(f"❌ {snapshot.catalog_error}")
    if snapshot.submit_message:
        lines.append(f"✅ {snapshot.submit_message}")
    lines.append("=" * 50)
    return "\n".join(lines)


def render_search(session: SwapFormSession) -> str:
    state = session.search_state
    if not state.is_open:
        return ""
    results = session.search_results
    if not results:
        return "No matching token"
    rows: List[str] = []
    for index, token in enumerate(results):
        marker = "▶" if index == state.highlighted_index else " "
        rows.append(f" {marker} {token.symbol}")
    return "\n".join(rows)


async def handle_swap_command(session: SwapFormSession, line: str) -> Optional[str]:
    """Apply one interactive command to the session and return text to print.

    Returns None when the user asked to quit.
    """
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("exit", "quit", "q"):
        return None
    if command in ("help", "h", ""):
        return SWAP_HELP
    if command == "send":
        session.touch("from_amount")
        session.edit_from_amount(argument)
    elif command == "receive":
        session.touch("to_amount")
        session.edit_to_amount(argument)
    elif command == "from":
        session.touch("from_symbol")
        session.select_from_symbol(argument)
    elif command == "to":
        session.touch("to_symbol")
        session.select_to_symbol(argument)
    elif command == "flip":
        session.swap_direction()
    elif command == "search":
        session.update_search(argument)
        return render_search(session)
    elif command == "down":
        session.move_search_highlight(1)
        return render_search(session)
    elif command == "up":
        session.move_search_highlight(-1)
        return render_search(session)
    elif command == "pick":
        symbol = session.confirm_search()
        if symbol is None:
            return "No search result to pick"
    elif command == "esc":
        session.cancel_search()
        return ""
    elif command == "submit":
        if session.can_submit:
            print("⏳ Processing...")
        await session.submit()
    elif command != "show":
        return f"❌ Unknown command: {command}\n{SWAP_HELP}"

    return render_form(session)


async def cli_tokens(search: Optional[str] = None):
    """CLI command to list the normalized token catalog"""
    print(f"🔍 Fetching prices from {settings.prices_url}...")
    result = await CatalogLoader().load()
    if result is None:
        return
    if not result.ok:
        print(f"❌ Error: {result.error}")
        return

    tokens = search_tokens(result.tokens, search, settings.search_result_limit) if search else result.tokens
    print_tokens(tokens)


async def cli_quote(amount: str, from_symbol: str, to_symbol: str, receive: bool = False):
    """CLI command to quote a single conversion"""
    validation = validate_amount(amount, settings.max_amount_input_length)
    if not validation.ok:
        print(f"❌ {validation.message} ({validation.error})")
        return

    result = await CatalogLoader().load()
    if result is None:
        return
    if not result.ok:
        print(f"❌ Error: {result.error}")
        return

    from_token = find_token_by_symbol(result.tokens, normalize_symbol(from_symbol))
    to_token = find_token_by_symbol(result.tokens, normalize_symbol(to_symbol))
    quote = build_quote(validation.value, from_token, to_token, is_send_amount=not receive)
    if quote is None:
        print(f"❌ No quote available for {from_symbol} → {to_symbol}")
        return

    digits = settings.amount_fraction_digits
    print(f"\n💱 {format_amount(quote.send_amount, digits)} {from_token.symbol} → "
          f"{format_amount(quote.receive_amount, digits)} {to_token.symbol}")
    print(f"   {format_rate_line(quote, from_token.symbol, to_token.symbol, settings.rate_fraction_digits)}")


async def cli_swap():
    """Interactive swap form"""
    print("💱 Swap Assets")
    print("Type 'help' for commands, 'exit' to quit")

    session = SwapFormSession.from_settings(settings, loader=CatalogLoader())
    print("🔄 Syncing prices...")
    await session.load_catalog()
    print(render_form(session))

    while True:
        try:
            line = input("\n> ")
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye! 👋")
            break

        output = await handle_swap_command(session, line)
        if output is None:
            print("Goodbye! 👋")
            break
        if output:
            print(output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Swapform CLI")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command")

    tokens_parser = subparsers.add_parser("tokens", help="List the token catalog")
    tokens_parser.add_argument("--search", help="Only show symbols containing this text")

    quote_parser = subparsers.add_parser("quote", help="Quote a conversion")
    quote_parser.add_argument("amount", help="Amount to convert")
    quote_parser.add_argument("from_symbol", help="Token to send")
    quote_parser.add_argument("to_symbol", help="Token to receive")
    quote_parser.add_argument("--receive", action="store_true", help="Treat amount as the receive side")

    subparsers.add_parser("swap", help="Interactive swap form")

    return parser


async def main():
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    command = args.command.lower()

    if command == "tokens":
        await cli_tokens(args.search)

    elif command == "quote":
        await cli_quote(args.amount, args.from_symbol, args.to_symbol, args.receive)

    elif command == "swap":
        await cli_swap()

    else:
        print(f"❌ Unknown command: {command}")
        parser.print_help()


if __name__ == "__main__":
    asyncio.run(main())
