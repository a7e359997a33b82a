"""Protocol - Host side of the circom witness exchange."""

from protocol.exports import REQUIRED_EXPORTS, CircomExports
from protocol.inputs import InputAssignment, load_inputs, normalize_assignment
from protocol.witness_calculator import (
    CalculatorConfig,
    FieldInfo,
    WitnessCalculator,
    WitnessSession,
    WitnessState,
)

__all__ = [
    "WitnessCalculator",
    "WitnessSession",
    "WitnessState",
    "CalculatorConfig",
    "FieldInfo",
    "CircomExports",
    "REQUIRED_EXPORTS",
    "InputAssignment",
    "load_inputs",
    "normalize_assignment",
]
