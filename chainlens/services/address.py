"""Helpers for finding and validating EVM wallet addresses."""

from __future__ import annotations

import re
from typing import Optional

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_EVM_ADDRESS_SEARCH_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def is_valid_evm_address(address: str | None) -> bool:
    if not address:
        return False
    return bool(_EVM_ADDRESS_RE.match(address.strip()))


def find_evm_address(text: str) -> Optional[str]:
    """Return the first ``0x``-prefixed 40-hex address in ``text``, lowercased."""

    match = _EVM_ADDRESS_SEARCH_RE.search(text or "")
    return match.group(0).lower() if match else None
