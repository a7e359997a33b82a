"""Guest - WebAssembly engine adapters and the host callbacks they link in."""

from guest.base import GuestInstance, GuestModule
from guest.callbacks import EXCEPTION_MESSAGES, HostCallbacks
from guest.wasmtime_guest import PrecompiledWasmtimeModule, WasmtimeInstance, WasmtimeModule

__all__ = [
    "GuestInstance",
    "GuestModule",
    "HostCallbacks",
    "EXCEPTION_MESSAGES",
    # wasmtime
    "WasmtimeModule",
    "PrecompiledWasmtimeModule",
    "WasmtimeInstance",
]
