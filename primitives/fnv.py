"""Signal addressing: 64-bit FNV-1a hash of a signal name.

The guest locates input signals by this hash, split into its high and low
32-bit halves. It must match the circom runtime bit for bit, so the
parameters are the standard FNV-1a 64-bit offset basis and prime.

Collisions between names are not detected here.
"""

from typing import NamedTuple

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1


class SignalAddress(NamedTuple):
    """High and low halves of a signal name hash."""
    msb: int
    lsb: int


def fnv1a_64(data: bytes) -> int:
    """FNV-1a 64-bit hash of ``data``."""
    h = FNV64_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV64_PRIME) & _MASK64
    return h


def signal_address(name: str) -> SignalAddress:
    """Address of signal ``name`` as understood by ``setInputSignal``."""
    h = fnv1a_64(name.encode("utf-8"))
    return SignalAddress(h >> 32, h & 0xFFFFFFFF)
