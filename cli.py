#!/usr/bin/env python3
"""Simple CLI for trying Chainlens locally"""

import argparse
import asyncio
import sys

import httpx

from chainlens.config import settings
from chainlens.core.responder import ChatResponder
from chainlens.core.supervisor import AIConnectionSupervisor
from chainlens.logging_config import setup_logging
from chainlens.providers.base import UpstreamDataError
from chainlens.providers.llm import get_llm_provider
from chainlens.providers.tatum import TatumProvider
from chainlens.services.blockchain import BlockchainDataService
from chainlens.services.chains import CHAIN_IDS, is_supported_chain, normalize_chain
from chainlens.services.wallet_context import fetch_wallet_context, summarize_wallet_counts


async def cli_probe():
    """Send one test prompt to the configured model"""
    print(f"🔑 {settings.llm_provider} API key: {'set' if settings.has_llm_key else 'not set'}")
    try:
        provider = get_llm_provider()
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"🤖 Sending test request to {provider.model}...")
    try:
        reply = await provider.generate_text("Hello, test message")
        print(f"✅ Success! Response: {reply}")
        return 0
    except Exception as e:
        print(f"❌ Error: {e}")
        return 1
    finally:
        await provider.close()


async def cli_gas(chain: str):
    provider = TatumProvider()
    try:
        tiers = await provider.get_gas_tiers(chain)
    except UpstreamDataError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"⛽ Gas on {chain.upper()} (Gwei, estimated tiers)")
    for tier in ("slow", "standard", "fast", "baseFee"):
        print(f"  {tier:<9} {tiers[tier]}")
    return 0


async def cli_wallet(address: str, chains):
    print(f"🔍 Fetching {address} on {', '.join(chains)}...")
    summary = summarize_wallet_counts(await fetch_wallet_context(TatumProvider(), address, chains))

    print("=" * 50)
    for chain, entry in summary.per_chain.items():
        if entry.error:
            print(f"{chain:<10} ⚠️  {entry.error}")
        else:
            print(f"{chain:<10} {entry.native_approx:>18.6f} {entry.native_symbol:<6} {entry.token_count} tokens")
    return 0


async def cli_status(base_url: str):
    async with httpx.AsyncClient() as client:
        response = await client.get(f"{base_url}/api/mcp-status", timeout=10)
        response.raise_for_status()
        data = response.json()

    mcp = data.get("mcp", {})
    print(f"State:      {mcp.get('state')}")
    print(f"Connected:  {mcp.get('connected')}")
    print(f"Fallback:   {mcp.get('fallbackActive')}")
    print(f"Last error: {mcp.get('lastError') or 'none'}")
    return 0


async def cli_chat():
    """Interactive chat mode"""
    supervisor = AIConnectionSupervisor(enable_health_check=False)
    responder = ChatResponder(supervisor, BlockchainDataService(TatumProvider()))

    connected = await supervisor.start()
    print("🤖 Chainlens Chat")
    print(f"Model: {'connected' if connected else 'fallback mode (' + str(supervisor.last_error) + ')'}")
    print("Type 'exit' to quit")
    print("-" * 40)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, "\n💬 You: ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye! 👋")
                break

            if user_input.lower() in ['exit', 'quit', 'q']:
                print("Goodbye! 👋")
                break
            if not user_input:
                continue

            outcome = await responder.classify_and_respond(user_input)
            source = "model" if outcome.used_model else "local"
            print(f"🤖 Assistant ({source}): {outcome.text}")
    finally:
        await supervisor.shutdown()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chainlens CLI")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("chat", help="Interactive chat mode")
    subparsers.add_parser("probe", help="Send one test prompt to the configured model")

    gas_parser = subparsers.add_parser("gas", help="Show gas price tiers")
    gas_parser.add_argument("chain", nargs="?", default="ethereum", help="Chain (default: ethereum)")

    wallet_parser = subparsers.add_parser("wallet", help="Native balance and token count")
    wallet_parser.add_argument("address", help="Wallet address")
    wallet_parser.add_argument("--chain", default="ethereum", help="Chain (default: ethereum)")
    wallet_parser.add_argument("--all", action="store_true", help="Query every supported chain")

    status_parser = subparsers.add_parser("status", help="Model connection status of a running server")
    status_parser.add_argument("--url", default=f"http://{settings.host}:{settings.port}", help="Server base URL")

    return parser


async def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.log_level, "console")

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "chat":
        return await cli_chat()
    if args.command == "probe":
        return await cli_probe()
    if args.command == "status":
        return await cli_status(args.url)

    chain = normalize_chain(getattr(args, "chain", None))
    if not is_supported_chain(chain):
        print(f"❌ Unsupported chain: {chain}")
        return 2

    if args.command == "gas":
        return await cli_gas(chain)
    if args.command == "wallet":
        return await cli_wallet(args.address, CHAIN_IDS if args.all else (chain,))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
