"""
Conversions from raw chain quantities to display values.

Hex strings come straight from JSON-RPC (``eth_getBalance``,
``eth_gasPrice``). All rounding is half-up so that ``x.5`` always rounds
away from zero, matching what wallet UIs show.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

NATIVE_DISPLAY_PLACES = 6
GWEI_PLACES = 2
WEI_PER_GWEI = 10**9

# Display heuristic only; these are not derived from mempool data.
GAS_TIER_MULTIPLIERS: Dict[str, Decimal] = {
    "slow": Decimal("0.8"),
    "standard": Decimal("1.0"),
    "fast": Decimal("1.2"),
    "baseFee": Decimal("0.9"),
}


def parse_hex_quantity(value: Union[str, int, None]) -> int:
    """Parse a JSON-RPC quantity. Empty or missing values count as zero."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a hex quantity: {value!r}")
    text = value.strip().lower()
    if text in ("", "0x"):
        return 0
    return int(text, 16)


def _quantize(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def wei_to_native(wei: int, decimals: int = 18) -> Decimal:
    """Native amount rounded to six decimal places."""
    return _quantize(Decimal(wei) / (Decimal(10) ** decimals), NATIVE_DISPLAY_PLACES)


def format_native_balance(wei: int, decimals: int = 18) -> str:
    """Six decimal places with trailing zeros kept, e.g. ``1.500000``."""
    return f"{wei_to_native(wei, decimals):.{NATIVE_DISPLAY_PLACES}f}"


def native_approx(wei: int, decimals: int = 18) -> float:
    return float(wei_to_native(wei, decimals))


def wei_to_gwei(wei: int) -> float:
    return float(_quantize(Decimal(wei) / WEI_PER_GWEI, GWEI_PLACES))


def gas_tiers(standard_gwei: Union[float, Decimal]) -> Dict[str, int]:
    """Derive slow/standard/fast/baseFee tiers, each rounded to whole Gwei."""
    base = Decimal(str(standard_gwei))
    return {
        tier: int(_quantize(base * multiplier, 0))
        for tier, multiplier in GAS_TIER_MULTIPLIERS.items()
    }


def format_gwei(gwei: float) -> str:
    """``42.0`` -> ``42``, ``12.50`` -> ``12.5``."""
    return f"{Decimal(str(gwei)).normalize():f}"
