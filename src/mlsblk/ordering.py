"""Natural ordering of diskutil identifiers (disk2 < disk10 < disk10s1)."""

import re
from typing import List, Tuple

DEVICE_PREFIX = "disk"
PARTITION_SEPARATOR = "s"

_TOKEN_RE = re.compile(r"(\d+)|(.)", re.DOTALL | re.ASCII)

# Numeric runs rank at the position of "0" against single characters;
# the separator ranks after everything else.
_NUMBER_RANK = ord("0")
_SEPARATOR_RANK = 0x110000


def _tokens(identifier: str) -> List[Tuple[int, int]]:
    rest = identifier[len(DEVICE_PREFIX):] if identifier.startswith(DEVICE_PREFIX) else identifier
    tokens = []
    for digits, char in _TOKEN_RE.findall(rest):
        if digits:
            tokens.append((_NUMBER_RANK, int(digits)))
        elif char == PARTITION_SEPARATOR:
            tokens.append((_SEPARATOR_RANK, 0))
        else:
            tokens.append((ord(char), 0))
    return tokens


def identifier_key(identifier: str) -> Tuple[List[Tuple[int, int]], str]:
    """Sort key: token sequence first, raw string as the final tie-break."""
    return _tokens(identifier), identifier


def compare_identifiers(a: str, b: str) -> int:
    """Three-way comparison: negative if a sorts first, 0 if equal, positive otherwise."""
    ka, kb = identifier_key(a), identifier_key(b)
    return (ka > kb) - (ka < kb)
