"""
Keyword intent classification for chat messages.

Classification is plain case-insensitive substring matching evaluated
as an ordered rule list; the first rule whose predicate matches wins.
Short keywords (``eth``, ``op``, ``base``, ``fee``) match inside longer
words, so rule order decides many borderline messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from ..services.address import find_evm_address
from ..services.chains import CHAIN_IDS


class IntentCategory(str, Enum):
    BALANCE = "balance"
    PORTFOLIO = "portfolio"
    NFT = "nft"
    GAS = "gas"
    CHAIN = "chain"
    CHAIN_INFO = "chainInfo"
    SYSTEM_STATUS = "systemStatus"
    MCP_STATUS = "mcpStatus"
    RESTART = "restart"
    FORCE_FALLBACK = "forceFallback"
    GENERAL_CHAT = "generalChat"


OPERATIONAL_CATEGORIES = frozenset({
    IntentCategory.SYSTEM_STATUS,
    IntentCategory.MCP_STATUS,
    IntentCategory.RESTART,
    IntentCategory.FORCE_FALLBACK,
})


@dataclass(frozen=True)
class Intent:
    category: IntentCategory
    chain: Optional[str] = None
    address: Optional[str] = None
    multi_chain: bool = False

    @property
    def needs_wallet_data(self) -> bool:
        return self.address is not None and self.category in (
            IntentCategory.BALANCE,
            IntentCategory.PORTFOLIO,
        )

    @property
    def is_operational(self) -> bool:
        return self.category in OPERATIONAL_CATEGORIES

    def target_chains(self) -> Tuple[str, ...]:
        if self.multi_chain:
            return CHAIN_IDS
        return (self.chain or "ethereum",)


MULTI_CHAIN_PHRASES = (
    "all chain",
    "all chains",
    "multi-chain",
    "multi chain",
    "multi",
    "across all",
    "every chain",
    "all networks",
)

PORTFOLIO_KEYWORDS = ("portfolio", "portofolio")
NFT_KEYWORDS = ("nft", "collection")
BALANCE_KEYWORDS = ("wallet", "balance", "analysis", "check", "analyze")
GAS_KEYWORDS = ("gas", "fee")
CHAIN_LIST_KEYWORDS = ("chains", "chain info", "supported chains", "blockchain info", "chain")

# Checked in order; optimism's "op" stays last.
CHAIN_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("ethereum", ("ethereum", "eth")),
    ("polygon", ("polygon", "matic")),
    ("bsc", ("bsc", "bnb")),
    ("arbitrum", ("arbitrum", "arb")),
    ("base", ("base",)),
    ("optimism", ("optimism", "op")),
)

# Sub-rules for messages that carry an address; portfolio beats NFT beats balance.
# The third field names a keyword that on its own makes the query multi-chain.
ADDRESS_SUBRULES: Tuple[Tuple[Tuple[str, ...], IntentCategory, Optional[str]], ...] = (
    (PORTFOLIO_KEYWORDS, IntentCategory.PORTFOLIO, "portfolio"),
    (NFT_KEYWORDS, IntentCategory.NFT, "nft"),
    (BALANCE_KEYWORDS, IntentCategory.BALANCE, None),
)


def contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def mentioned_chain(text: str) -> Optional[str]:
    for chain_id, keywords in CHAIN_KEYWORDS:
        if contains_any(text, keywords):
            return chain_id
    return None


def is_multi_chain(text: str) -> bool:
    return contains_any(text, MULTI_CHAIN_PHRASES)


def _address_intent(text: str) -> Intent:
    address = find_evm_address(text)
    phrase_multi = is_multi_chain(text)
    for keywords, category, multi_keyword in ADDRESS_SUBRULES:
        if contains_any(text, keywords):
            implied = multi_keyword is not None and multi_keyword in text
            return Intent(
                category=category,
                chain="ethereum",
                address=address,
                multi_chain=phrase_multi or implied,
            )
    return Intent(IntentCategory.BALANCE, chain="ethereum", address=address, multi_chain=phrase_multi)


def _fixed(category: IntentCategory, chain: Optional[str] = None) -> Callable[[str], Intent]:
    return lambda _text: Intent(category=category, chain=chain)


Predicate = Callable[[str], bool]
Builder = Callable[[str], Intent]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Predicate
    build: Builder


DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule("system status", lambda t: "system status" in t, _fixed(IntentCategory.SYSTEM_STATUS)),
    ClassificationRule("mcp status", lambda t: "mcp status" in t, _fixed(IntentCategory.MCP_STATUS)),
    ClassificationRule("restart", lambda t: "restart mcp" in t, _fixed(IntentCategory.RESTART)),
    ClassificationRule("force fallback", lambda t: "force fallback" in t, _fixed(IntentCategory.FORCE_FALLBACK)),
    ClassificationRule("address", lambda t: find_evm_address(t) is not None, _address_intent),
    ClassificationRule(
        "gas",
        lambda t: contains_any(t, GAS_KEYWORDS),
        lambda t: Intent(IntentCategory.GAS, chain=mentioned_chain(t) or "ethereum"),
    ),
    ClassificationRule(
        "chain",
        lambda t: mentioned_chain(t) is not None,
        lambda t: Intent(IntentCategory.CHAIN, chain=mentioned_chain(t)),
    ),
    ClassificationRule(
        "chain info",
        lambda t: contains_any(t, CHAIN_LIST_KEYWORDS),
        _fixed(IntentCategory.CHAIN_INFO, "ethereum"),
    ),
    ClassificationRule("general", lambda _t: True, _fixed(IntentCategory.GENERAL_CHAT)),
)


class IntentClassifier:
    """First-match-wins classifier over an ordered rule list."""

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def classify(self, message: str) -> Intent:
        text = (message or "").lower()
        for rule in self.rules:
            if rule.predicate(text):
                return rule.build(text)
        return Intent(IntentCategory.GENERAL_CHAT)

    def rule_names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)
