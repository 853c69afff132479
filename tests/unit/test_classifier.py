import pytest

from chainlens.core.classifier import (
    ClassificationRule,
    Intent,
    IntentCategory,
    IntentClassifier,
)
from chainlens.services.chains import CHAIN_IDS

ADDRESS = "0xABCDEF0123456789abcdef0123456789ABCDEF01"

classifier = IntentClassifier()


@pytest.mark.parametrize(
    "message,category",
    [
        ("What is the system status?", IntentCategory.SYSTEM_STATUS),
        ("mcp status please", IntentCategory.MCP_STATUS),
        ("Restart MCP", IntentCategory.RESTART),
        ("force fallback now", IntentCategory.FORCE_FALLBACK),
        ("hello there", IntentCategory.GENERAL_CHAT),
        ("", IntentCategory.GENERAL_CHAT),
    ],
)
def test_operational_and_general_messages(message, category):
    assert classifier.classify(message).category == category


def test_operational_commands_win_over_addresses():
    intent = classifier.classify(f"system status for {ADDRESS}")

    assert intent.category == IntentCategory.SYSTEM_STATUS
    assert intent.address is None
    assert intent.is_operational


def test_gas_question_resolves_mentioned_chain():
    intent = classifier.classify("Show gas price on Ethereum")

    assert intent.category == IntentCategory.GAS
    assert intent.chain == "ethereum"


@pytest.mark.parametrize(
    "message,chain",
    [
        ("gas on polygon", "polygon"),
        ("What are the fees on arbitrum?", "arbitrum"),
        ("current gas prices", "ethereum"),
    ],
)
def test_gas_chain_defaults_to_ethereum(message, chain):
    intent = classifier.classify(message)
    assert intent.category == IntentCategory.GAS
    assert intent.chain == chain


def test_chain_mention_without_gas():
    intent = classifier.classify("Tell me about Polygon")

    assert intent.category == IntentCategory.CHAIN
    assert intent.chain == "polygon"
    assert not intent.multi_chain


def test_short_keywords_match_inside_words():
    # "something" contains "eth"
    intent = classifier.classify("Tell me something")

    assert intent.category == IntentCategory.CHAIN
    assert intent.chain == "ethereum"


def test_chain_list_question():
    intent = classifier.classify("Which chains do you support?")

    assert intent.category == IntentCategory.CHAIN_INFO
    assert intent.chain == "ethereum"


def test_address_defaults_to_single_chain_balance():
    intent = classifier.classify(f"Analyze wallet {ADDRESS}")

    assert intent.category == IntentCategory.BALANCE
    assert intent.address == ADDRESS.lower()
    assert intent.chain == "ethereum"
    assert not intent.multi_chain
    assert intent.needs_wallet_data
    assert intent.target_chains() == ("ethereum",)


def test_bare_address_is_balance_query():
    intent = classifier.classify(ADDRESS)

    assert intent.category == IntentCategory.BALANCE
    assert not intent.multi_chain


def test_portfolio_implies_every_chain():
    intent = classifier.classify(f"Portfolio {ADDRESS}")

    assert intent.category == IntentCategory.PORTFOLIO
    assert intent.multi_chain
    assert intent.target_chains() == CHAIN_IDS


def test_multi_chain_phrase_on_balance():
    intent = classifier.classify(f"multi-chain wallet {ADDRESS}")

    assert intent.category == IntentCategory.BALANCE
    assert intent.multi_chain


def test_check_wallet_across_all_chains():
    intent = classifier.classify(f"Check wallet {ADDRESS} across all chains")

    assert intent.category == IntentCategory.BALANCE
    assert intent.address == ADDRESS.lower()
    assert intent.multi_chain
    assert intent.target_chains() == CHAIN_IDS


def test_nft_queries():
    nft = classifier.classify(f"NFTs owned by {ADDRESS}")
    collection = classifier.classify(f"my collection at {ADDRESS}")

    assert nft.category == IntentCategory.NFT and nft.multi_chain
    assert collection.category == IntentCategory.NFT and not collection.multi_chain
    assert not nft.needs_wallet_data


def test_portfolio_beats_nft():
    intent = classifier.classify(f"portfolio and nft collection for {ADDRESS}")
    assert intent.category == IntentCategory.PORTFOLIO


def test_custom_rules_fall_through_to_general_chat():
    rules = [ClassificationRule("foo", lambda t: "foo" in t, lambda _t: Intent(IntentCategory.GAS))]
    custom = IntentClassifier(rules)

    assert custom.classify("FOO bar").category == IntentCategory.GAS
    assert custom.classify("bar").category == IntentCategory.GENERAL_CHAT


def test_rule_order():
    names = classifier.rule_names()

    assert names[0] == "system status"
    assert names[-1] == "general"
    assert names.index("gas") < names.index("chain") < names.index("chain info")
