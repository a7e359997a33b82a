"""Big integer <-> 32-bit limb conversion for the shared transfer region.

A LimbArray holds one field-sized integer as ``width`` 32-bit words, most
significant word first. The guest's shared region uses the opposite word
order: region index ``j`` holds limb ``width - 1 - j``. ``to_wire`` and
``from_wire`` apply that reversal so callers never index it by hand.
"""

from typing import Iterable, Sequence

import numpy as np

LIMB_BITS = 32
LIMB_RADIX = 1 << LIMB_BITS
LIMB_MASK = LIMB_RADIX - 1

# Type alias for documentation
LimbArray = np.ndarray  # 1D uint32 array, big-endian word order


def encode(value: int, width: int) -> LimbArray:
    """Encode a non-negative integer into ``width`` limbs, most significant first.

    Raises:
        ValueError: If ``value`` is negative or needs more than ``width`` limbs.
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    if value >> (LIMB_BITS * width):
        raise ValueError(
            f"Value needs {limbs_needed(value)} limbs, only {width} available"
        )

    limbs = np.zeros(width, dtype=np.uint32)
    rem = value
    c = width
    while rem:
        c -= 1
        limbs[c] = rem & LIMB_MASK
        rem >>= LIMB_BITS
    return limbs


def decode(limbs: Iterable[int]) -> int:
    """Decode limbs (most significant first) back into an integer."""
    result = 0
    for limb in limbs:
        result = (result << LIMB_BITS) | (int(limb) & LIMB_MASK)
    return result


def limbs_needed(value: int) -> int:
    """Number of 32-bit limbs needed to hold ``value`` (at least one)."""
    return max(1, -(-value.bit_length() // LIMB_BITS))


# --- Shared Region Word Order ---


def to_wire(value: int, width: int) -> LimbArray:
    """Encode ``value`` in shared-region order (least significant word first)."""
    return encode(value, width)[::-1]


def from_wire(words: Sequence[int]) -> int:
    """Decode words read from the shared region (least significant word first)."""
    return decode(reversed(list(words)))
