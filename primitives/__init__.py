"""Primitives - Wire encoding, signal addressing, field conversion and errors."""

from primitives.errors import (
    FailureReason,
    GuestTrapError,
    InputParseError,
    InputRangeError,
    InvalidStateError,
    MissingExportError,
    ModuleLoadError,
    NegativeInputError,
    UnreducedValueError,
    WitnessError,
)
from primitives.field import (
    BLS12_381_PRIME,
    BN254_PRIME,
    GOLDILOCKS_PRIME,
    canonical,
    n64_for_prime,
    prime_field,
    to_field_elements,
)
from primitives.fnv import SignalAddress, fnv1a_64, signal_address
from primitives.limbs import LimbArray, decode, encode, from_wire, to_wire

__all__ = [
    # Errors
    "WitnessError",
    "ModuleLoadError",
    "MissingExportError",
    "GuestTrapError",
    "NegativeInputError",
    "InputRangeError",
    "InputParseError",
    "UnreducedValueError",
    "InvalidStateError",
    "FailureReason",
    # Field
    "BN254_PRIME",
    "BLS12_381_PRIME",
    "GOLDILOCKS_PRIME",
    "prime_field",
    "canonical",
    "to_field_elements",
    "n64_for_prime",
    # Signal addressing
    "SignalAddress",
    "fnv1a_64",
    "signal_address",
    # Limbs
    "LimbArray",
    "encode",
    "decode",
    "to_wire",
    "from_wire",
]
