"""
Name normalization for assets and price venues.
"""

import re

_PAIR_SEPARATORS = re.compile(r"[/\-_:]")
_SOURCE_NOISE = re.compile(r"[\s_\-.]+")


def normalize_asset(pair_or_symbol: str) -> str:
    """Extract the upper-cased base asset from a pair ("eth/usd" -> "ETH")."""
    base = _PAIR_SEPARATORS.split(pair_or_symbol.strip(), maxsplit=1)[0]
    return base.strip().upper()


def normalize_source(source: str) -> str:
    """Case-fold a venue name and drop separators ("Uniswap V3" -> "uniswapv3")."""
    return _SOURCE_NOISE.sub("", source.strip().lower())


def source_matches(source: str, names) -> bool:
    """True if the venue is one of `names` or a variant of one (prefix match)."""
    normalized = normalize_source(source)
    if not normalized:
        return False
    for name in names:
        key = normalize_source(name)
        if key and normalized.startswith(key):
            return True
    return False
