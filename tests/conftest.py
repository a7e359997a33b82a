"""
Pytest configuration and shared fixtures for the test suite.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to the path so absolute imports work
# (tests/ is inside the project root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from tests.guests import ADDITION_WAT, FakeGuestModule  # noqa: E402


@pytest.fixture
def small_guest() -> FakeGuestModule:
    """out = a + b over p = 101."""
    return FakeGuestModule(prime=101)


@pytest.fixture
def bn254_guest() -> FakeGuestModule:
    """out = a + b over the BN254 scalar field (eight words per element)."""
    from primitives.field import BN254_PRIME
    return FakeGuestModule(prime=BN254_PRIME)


@pytest.fixture
def addition_wasm() -> bytes:
    """The addition guest compiled from wat to wasm bytes."""
    from wasmtime import wat2wasm
    return bytes(wat2wasm(ADDITION_WAT))
