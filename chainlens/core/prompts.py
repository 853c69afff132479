"""Prompt assembly for grounded model answers."""

from typing import Optional

from ..services.chains import get_chain
from ..types.wallet import WalletContextSummary
from .classifier import Intent

NO_SUMMARY = '{"note":"no summary available"}'

GROUNDED_PROMPT_TEMPLATE = """You are a blockchain analytics assistant. Use ONLY the provided context data to answer. If data is missing, say so briefly.

User Query: "{message}"

Detected Context:
- Type: {category}
- Chain: {chain}
- Multi-chain: {multi_chain}

Provided Summary (JSON):
{summary}

Instructions:
- Respond in English.
- Report per-chain: native balance (approx) and tokenCount only.
- Do NOT list token addresses or make price assumptions.
- Keep it short and scannable with bullets.

Response:"""


def serialize_summary(summary: Optional[WalletContextSummary], max_chars: int) -> str:
    """Summary JSON cut to ``max_chars`` characters."""
    payload = summary.to_prompt_json() if summary is not None else NO_SUMMARY
    return payload[:max_chars]


def chain_context(chain_id: Optional[str]) -> str:
    descriptor = get_chain(chain_id) if chain_id else None
    if descriptor is None:
        return NO_SUMMARY
    return (
        f'{{"chain":"{descriptor.id}","name":"{descriptor.display_name}",'
        f'"symbol":"{descriptor.symbol}","decimals":{descriptor.decimals}}}'
    )


def build_grounded_prompt(
    message: str,
    intent: Intent,
    summary: Optional[WalletContextSummary],
    max_chars: int,
) -> str:
    if summary is None and intent.chain and not intent.address:
        context = chain_context(intent.chain)[:max_chars]
    else:
        context = serialize_summary(summary, max_chars)
    return GROUNDED_PROMPT_TEMPLATE.format(
        message=message,
        category=intent.category.value,
        chain=intent.chain or "n/a",
        multi_chain="true" if intent.multi_chain else "false",
        summary=context,
    )
