"""Guest adapters backed by the wasmtime engine.

WasmtimeModule compiles wasm (or wat text) on load with the engine's JIT.
PrecompiledWasmtimeModule loads an artifact produced by
WasmtimeModule.serialize(), skipping compilation entirely. Both hand out the
same WasmtimeInstance, one Store per instance.

A precompiled artifact only loads into an engine configured the same way as
the one that produced it, so fuel metering must match on both sides.
"""

import logging
from pathlib import Path

from wasmtime import (
    Config,
    Engine,
    Func,
    FuncType,
    Linker,
    Module,
    Store,
    Trap,
    ValType,
    WasmtimeError,
)

from guest.base import GuestInstance, GuestModule, to_i32, to_u32
from guest.callbacks import HostCallbacks
from primitives.errors import MissingExportError, ModuleLoadError

logger = logging.getLogger(__name__)

RUNTIME_MODULE = "runtime"


def make_engine(fuel: int | None = None) -> Engine:
    """Engine with fuel metering enabled iff a fuel budget is given."""
    config = Config()
    config.consume_fuel = fuel is not None
    return Engine(config)


# --- Execution Context ---


class WasmtimeInstance(GuestInstance):
    """A single instantiated guest with its own Store."""

    def __init__(self, store: Store, exports, callbacks: HostCallbacks) -> None:
        self._store = store
        self._exports = exports
        self._callbacks = callbacks

    def _func(self, name: str) -> Func | None:
        try:
            ext = self._exports[name]
        except KeyError:
            return None
        return ext if isinstance(ext, Func) else None

    def has_export(self, name: str) -> bool:
        return self._func(name) is not None

    def call(self, name: str, *args: int) -> int | None:
        func = self._func(name)
        if func is None:
            raise MissingExportError(name)
        try:
            result = func(self._store, *(to_i32(a) for a in args))
        except (Trap, WasmtimeError) as e:
            raise self._callbacks.trap_error(e) from e
        return None if result is None else to_u32(result)


# --- Caller-side view used from inside host callbacks ---


def _caller_view(caller):
    def func(name: str) -> Func | None:
        ext = caller.get(name)
        return ext if isinstance(ext, Func) else None

    def has_export(name: str) -> bool:
        return func(name) is not None

    def call(name: str, *args: int) -> int | None:
        f = func(name)
        if f is None:
            raise MissingExportError(name)
        result = f(caller, *(to_i32(a) for a in args))
        return None if result is None else to_u32(result)

    return call, has_export


def _link_runtime(linker: Linker, callbacks: HostCallbacks) -> None:
    """Define the runtime.* imports of a circom guest, bound to ``callbacks``."""
    no_args = FuncType([], [])

    def exception_handler(code: int) -> None:
        callbacks.exception_handler(to_u32(code))

    def diagnostic(hook):
        def wrapped(caller) -> None:
            hook(*_caller_view(caller))
        return wrapped

    linker.define_func(
        RUNTIME_MODULE, "exceptionHandler", FuncType([ValType.i32()], []), exception_handler
    )
    linker.define_func(
        RUNTIME_MODULE, "printErrorMessage", no_args,
        diagnostic(callbacks.print_error_message), access_caller=True,
    )
    linker.define_func(
        RUNTIME_MODULE, "writeBufferMessage", no_args,
        diagnostic(callbacks.write_buffer_message), access_caller=True,
    )
    linker.define_func(
        RUNTIME_MODULE, "showSharedRWMemory", no_args,
        diagnostic(callbacks.show_shared_rw_memory), access_caller=True,
    )


# --- Module Adapters ---


class _WasmtimeModuleBase(GuestModule):
    def __init__(self, engine: Engine, module: Module, fuel: int | None) -> None:
        self.engine = engine
        self.module = module
        self.fuel = fuel

    def instantiate(self, callbacks: HostCallbacks) -> WasmtimeInstance:
        store = Store(self.engine)
        if self.fuel is not None:
            store.set_fuel(self.fuel)
        linker = Linker(self.engine)
        _link_runtime(linker, callbacks)
        try:
            instance = linker.instantiate(store, self.module)
        except (Trap, WasmtimeError) as e:
            raise ModuleLoadError(f"Failed to instantiate guest module: {e}") from e
        return WasmtimeInstance(store, instance.exports(store), callbacks)


class WasmtimeModule(_WasmtimeModuleBase):
    """Guest compiled from wasm bytes (or wat text) at load time."""

    @classmethod
    def from_bytes(cls, data: bytes | str, fuel: int | None = None) -> "WasmtimeModule":
        engine = make_engine(fuel)
        try:
            module = Module(engine, data)
        except WasmtimeError as e:
            raise ModuleLoadError(f"Failed to compile guest module: {e}") from e
        logger.debug("Compiled guest module (%d imports, %d exports)",
                     len(module.imports), len(module.exports))
        return cls(engine, module, fuel)

    @classmethod
    def from_file(cls, path: str | Path, fuel: int | None = None) -> "WasmtimeModule":
        return cls.from_bytes(Path(path).read_bytes(), fuel)

    def serialize(self) -> bytes:
        """Ahead-of-time artifact loadable by PrecompiledWasmtimeModule."""
        return bytes(self.module.serialize())


class PrecompiledWasmtimeModule(_WasmtimeModuleBase):
    """Guest loaded from an artifact produced by WasmtimeModule.serialize()."""

    @classmethod
    def from_serialized(cls, data: bytes, fuel: int | None = None) -> "PrecompiledWasmtimeModule":
        engine = make_engine(fuel)
        try:
            module = Module.deserialize(engine, data)
        except WasmtimeError as e:
            raise ModuleLoadError(f"Failed to load precompiled guest module: {e}") from e
        return cls(engine, module, fuel)

    @classmethod
    def from_file(cls, path: str | Path, fuel: int | None = None) -> "PrecompiledWasmtimeModule":
        return cls.from_serialized(Path(path).read_bytes(), fuel)
