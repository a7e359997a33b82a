"""Input assignments: named signals bound to ordered integer values.

Accepted shapes mirror circom's input.json: a scalar or a nested list per
signal, with values as ints, decimal strings or 0x-prefixed hex strings.
Nested lists are flattened row-major, which is the slot order the guest
expects for multi-dimensional input signals.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

import numpy as np

from primitives.errors import InputParseError

# Type alias for documentation
InputAssignment = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def parse_value(value: Any) -> int:
    """Parse one input value into an int.

    Raises:
        InputParseError: If ``value`` is not an int or an integer string.
    """
    if isinstance(value, (bool, np.bool_)):
        raise InputParseError(f"Boolean is not a valid signal value: {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, str):
        s = value.strip().lower()
        neg = s.startswith("-")
        digits = s[1:] if neg else s
        try:
            n = int(digits[2:], 16) if digits.startswith("0x") else int(digits, 10)
        except ValueError:
            raise InputParseError(f"Invalid signal value string: {value!r}") from None
        return -n if neg else n
    raise InputParseError(f"Unsupported signal value type {type(value).__name__}: {value!r}")


def flatten_values(values: Any) -> list[int]:
    """Flatten a scalar or (nested) list of values into slot order."""
    if isinstance(values, np.ndarray):
        values = values.tolist()
    if isinstance(values, (list, tuple)):
        flat: list[int] = []
        for v in values:
            flat.extend(flatten_values(v))
        return flat
    return [parse_value(values)]


def normalize_assignment(inputs: InputAssignment) -> list[tuple[str, list[int]]]:
    """Turn a mapping or iterable of (name, values) pairs into ordered pairs."""
    items = inputs.items() if isinstance(inputs, Mapping) else inputs
    return [(str(name), flatten_values(values)) for name, values in items]


def load_inputs(path: str | Path) -> list[tuple[str, list[int]]]:
    """Load a circom-style input.json file."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InputParseError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InputParseError(f"{path}: expected a JSON object mapping signal names to values")
    return normalize_assignment(data)
