"""Canned replies used while the language model is unavailable."""

from typing import Optional

from ..services.chains import list_chains
from ..types.wallet import WalletContextSummary

FALLBACK_HELP = """🔄 **Fallback AI Response - Help**

**Available Commands in Fallback Mode:**

**Wallet Analysis:**
• "Analyze wallet 0x1234..." - Single chain analysis
• "Multi-chain wallet 0x1234..." - All chains analysis

**Portfolio Tracking:**
• "Portfolio 0x1234..." - Portfolio across all chains

**NFT Analysis:**
• "NFTs 0x1234..." - NFT collection overview

**Blockchain Info:**
• "Gas prices" - Current gas fees
• "Supported chains" - Available networks
• "System status" / "MCP status" - Connection state"""

FALLBACK_STATUS = """🔄 **Fallback AI Response - System Status**

**Current Status:**
• **AI Model:** Fallback Mode
• **Blockchain Data:** Available ✅
• **Multi-Chain Support:** Available ✅

**What's Limited:**
• Free-form AI analysis (canned responses in use)"""

FALLBACK_DEFAULT = """🔄 **Fallback AI Response**

I'm currently operating in fallback mode because the AI model is unreachable. Blockchain lookups still work:

**Available Features:**
• **Multi-Chain Wallet Analysis** - Native balances across 6 chains
• **Portfolio Tracking** - Token counts per chain
• **Gas Price Monitoring** - Current network fees

**Example Commands:**
• "Analyze wallet 0x1234..."
• "Multi-chain portfolio 0x1234..."
• "Supported chains\""""

HELP_KEYWORDS = ("help", "what can you do")
CHAIN_KEYWORDS = ("supported", "chains", "networks")
STATUS_KEYWORDS = ("status", "health")


def _supported_chains_text() -> str:
    lines = [f"• **{chain.display_name} ({chain.symbol})**" for chain in list_chains()]
    return "🔄 **Fallback AI Response - Supported Chains**\n\n**Available Blockchains:**\n" + "\n".join(lines)


def format_wallet_snapshot(summary: WalletContextSummary) -> str:
    lines = [f"**Wallet snapshot for {summary.address}:**"]
    for chain, entry in summary.per_chain.items():
        if entry.error is not None:
            lines.append(f"• {chain}: unavailable ({entry.error})")
        else:
            lines.append(
                f"• {chain}: {entry.native_approx:.6f} {entry.native_symbol}, {entry.token_count} tokens"
            )
    return "\n".join(lines)


def _status_line(connected: bool, fallback_active: bool) -> str:
    if fallback_active:
        return "**Status:** Fallback Mode Active"
    if connected:
        return "**Status:** AI Active (canned reply for this message)"
    return "**Status:** AI Inactive"


def fallback_response(
    message: str,
    summary: Optional[WalletContextSummary] = None,
    *,
    connected: bool = False,
    fallback_active: bool = True,
) -> str:
    """Pick a canned reply by keyword and echo the user's message back.

    The closing status line reports the supervisor flags as passed in.
    """
    lower = message.lower()
    if any(keyword in lower for keyword in HELP_KEYWORDS):
        body = FALLBACK_HELP
    elif any(keyword in lower for keyword in CHAIN_KEYWORDS):
        body = _supported_chains_text()
    elif any(keyword in lower for keyword in STATUS_KEYWORDS):
        body = FALLBACK_STATUS
    else:
        body = FALLBACK_DEFAULT

    sections = [body, f'**Your Query:** "{message}"']
    if summary is not None and summary.per_chain:
        sections.append(format_wallet_snapshot(summary))
    sections.append(_status_line(connected, fallback_active))
    return "\n\n".join(sections)
