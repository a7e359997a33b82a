"""Abstract capability a witness computation needs from a WebAssembly engine.

The protocol layer only calls named guest exports with 32-bit integer
arguments and reads back an optional 32-bit result. Shared-region access is
itself a pair of guest exports, so nothing else is required of an engine.

Two adapters implement this in guest/wasmtime_guest.py.
"""

from abc import ABC, abstractmethod

from guest.callbacks import HostCallbacks

U32_MASK = 0xFFFFFFFF


def to_i32(value: int) -> int:
    """Reinterpret an unsigned 32-bit value as the signed i32 wasm expects."""
    value &= U32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def to_u32(value: int) -> int:
    """Reinterpret a signed i32 result as unsigned."""
    return value & U32_MASK


class GuestInstance(ABC):
    """One isolated guest execution context (fresh memory, fresh globals)."""

    @abstractmethod
    def has_export(self, name: str) -> bool:
        """Whether the guest exports a function called ``name``."""

    @abstractmethod
    def call(self, name: str, *args: int) -> int | None:
        """Call export ``name`` with u32 arguments.

        Returns:
            The u32 result, or None for exports without a result.

        Raises:
            MissingExportError: If ``name`` is not an exported function.
            GuestTrapError: If the guest trapped or reported an exception.
        """


class GuestModule(ABC):
    """A compiled guest module that can be instantiated many times."""

    @abstractmethod
    def instantiate(self, callbacks: HostCallbacks) -> GuestInstance:
        """Create a fresh execution context with ``callbacks`` linked in.

        Raises:
            ModuleLoadError: If the module's imports cannot be satisfied.
        """
