"""Prime field construction and witness normalization.

Uses galois for the field type. The field is whatever prime the guest
reports, so the type is built at runtime and cached per prime.

Witness values are plain Python ints until the final conversion; nothing on
the way goes through fixed-width integers.
"""

from functools import lru_cache
from typing import Iterable

import galois

from primitives.errors import UnreducedValueError

# --- Known Circom Primes ---

BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BLS12_381_PRIME = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

# Multiplicative generators of the fields above. Passing these to galois
# skips the factorisation of p - 1 it would otherwise run to find one.
KNOWN_GENERATORS: dict[int, int] = {
    BN254_PRIME: 5,
    BLS12_381_PRIME: 7,
    GOLDILOCKS_PRIME: 7,
}


@lru_cache(maxsize=None)
def prime_field(prime: int) -> type[galois.FieldArray]:
    """Return the galois field type GF(prime)."""
    if prime in KNOWN_GENERATORS:
        return galois.GF(prime, primitive_element=KNOWN_GENERATORS[prime], verify=False)
    return galois.GF(prime)


def n64_for_prime(prime: int) -> int:
    """Number of 64-bit limbs needed to represent ``prime``."""
    return (prime.bit_length() - 1) // 64 + 1


# --- Normalization ---


def canonical(value: int, prime: int) -> int:
    """Map a signed witness value onto its representative in [0, prime).

    Negative values are taken as -|value| and become ``prime - |value| mod prime``.
    Values already in [0, prime) are returned unchanged.

    Raises:
        UnreducedValueError: If ``value >= prime``.
    """
    if value < 0:
        return (prime - (-value % prime)) % prime
    if value >= prime:
        raise UnreducedValueError(f"Witness value {value} is not reduced modulo {prime}")
    return value


def to_field_elements(values: Iterable[int], prime: int) -> galois.FieldArray:
    """Convert witness values into a GF(prime) array."""
    GF = prime_field(prime)
    canon = [canonical(int(v), prime) for v in values]
    if not canon:
        return GF.Zeros(0)
    return GF(canon)
