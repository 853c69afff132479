from chainlens.core.classifier import Intent, IntentCategory
from chainlens.core.prompts import NO_SUMMARY, build_grounded_prompt, serialize_summary
from chainlens.types.wallet import ChainSummary, WalletContextSummary


def _summary(chains=6):
    return WalletContextSummary(
        address="0xabc",
        per_chain={
            f"chain{i}": ChainSummary(native_symbol="ETH", native_approx=1.0, token_count=i)
            for i in range(chains)
        },
    )


def test_summary_json_uses_camel_case_and_drops_nulls():
    payload = serialize_summary(_summary(1), 10_000)

    assert '"perChain"' in payload
    assert '"tokenCount":0' in payload
    assert "error" not in payload


def test_summary_is_cut_to_budget():
    assert len(serialize_summary(_summary(), 50)) == 50
    assert serialize_summary(None, 10_000) == NO_SUMMARY


def test_grounded_prompt_carries_context():
    intent = Intent(IntentCategory.PORTFOLIO, chain="ethereum", address="0xabc", multi_chain=True)

    prompt = build_grounded_prompt("Portfolio 0xabc", intent, _summary(2), 10_000)

    assert 'User Query: "Portfolio 0xabc"' in prompt
    assert "- Type: portfolio" in prompt
    assert "- Multi-chain: true" in prompt
    assert '"address":"0xabc"' in prompt
    assert prompt.endswith("Response:")


def test_chain_question_gets_catalog_context():
    prompt = build_grounded_prompt("tell me about polygon", Intent(IntentCategory.CHAIN, chain="polygon"), None, 10_000)

    assert '"symbol":"MATIC"' in prompt
    assert "- Chain: polygon" in prompt
