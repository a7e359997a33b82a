"""Witness computation over a circom guest module.

A WitnessSession drives one fresh guest context through the exchange:

    UNLOADED --load--> INITIALIZED --discover_prime--> PRIME_DISCOVERED
        --load_inputs--> INPUTS_LOADED --execute--> EXECUTED
        --extract--> EXTRACTED

Any failure moves the session to FAILED and re-raises; a failed session is
never resumed and its partial witness is dropped. WitnessCalculator owns the
compiled module and the field parameters discovered on construction, and
runs one new session per computation, so calls never share guest state.

The shared transfer region is a single buffer inside the guest. Every value
is written (or read) completely before the next setInputSignal / getWitness
call reuses it.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import galois

from guest.base import GuestModule
from guest.callbacks import HostCallbacks
from guest.wasmtime_guest import PrecompiledWasmtimeModule, WasmtimeModule
from primitives.errors import (
    FailureReason,
    InputRangeError,
    InvalidStateError,
    MissingExportError,
    ModuleLoadError,
    NegativeInputError,
    UnreducedValueError,
    WitnessError,
)
from primitives.field import n64_for_prime, to_field_elements
from primitives.fnv import signal_address
from protocol.exports import CircomExports
from protocol.inputs import InputAssignment, normalize_assignment

logger = logging.getLogger(__name__)


class WitnessState(Enum):
    UNLOADED = "unloaded"
    INITIALIZED = "initialized"
    PRIME_DISCOVERED = "prime_discovered"
    INPUTS_LOADED = "inputs_loaded"
    EXECUTED = "executed"
    EXTRACTED = "extracted"
    FAILED = "failed"


@dataclass
class CalculatorConfig:
    """Configuration for a WitnessCalculator.

    Attributes:
        sanity_check: Default for the guest's internal consistency assertions
        fuel: wasmtime fuel budget per computation, None for unlimited
    """
    sanity_check: bool = False
    fuel: int | None = None


@dataclass(frozen=True)
class FieldInfo:
    """Field parameters reported by the guest.

    Attributes:
        prime: Field modulus
        n32: 32-bit words per field element on the wire
        n64: 64-bit limbs needed for the prime
    """
    prime: int
    n32: int
    n64: int


# --- Session ---


class WitnessSession:
    """One witness computation against a freshly instantiated guest."""

    def __init__(self, module: GuestModule, field: FieldInfo | None = None) -> None:
        self.module = module
        self.field = field
        self.state = WitnessState.UNLOADED
        self.failure: FailureReason | None = None
        self.error: WitnessError | None = None
        self.callbacks = HostCallbacks()
        self.exports: CircomExports | None = None
        self.version: int | None = None
        self.witness_size: int | None = None

    def _fail(self, error: WitnessError) -> None:
        self.callbacks.flush_log()
        self.state = WitnessState.FAILED
        self.failure = error.reason
        self.error = error
        logger.debug("Witness session failed (%s): %s", error.reason.value, error)

    @contextmanager
    def _transition(self, expected: WitnessState, target: WitnessState):
        if self.state is not expected:
            error = InvalidStateError(
                f"Cannot move to {target.value} from {self.state.value}; "
                f"expected {expected.value}"
            )
            if self.state is not WitnessState.FAILED:
                self._fail(error)
            raise error
        try:
            yield
        except WitnessError as e:
            self._fail(e)
            raise
        self.state = target

    def load(self) -> None:
        """Instantiate the guest and check its export table."""
        with self._transition(WitnessState.UNLOADED, WitnessState.INITIALIZED):
            self.exports = CircomExports(self.module.instantiate(self.callbacks))
            self.version = self.exports.get_version()
            missing = self.exports.missing_exports()
            if missing:
                logger.debug("Guest (version %d) lacks exports %s", self.version, missing)
                raise MissingExportError(missing[0])

    def discover_prime(self) -> FieldInfo:
        """Read the field prime from the guest, or confirm the cached one."""
        with self._transition(WitnessState.INITIALIZED, WitnessState.PRIME_DISCOVERED):
            n32 = self.exports.get_field_num_len32()
            if self.field is not None:
                if n32 != self.field.n32:
                    raise ModuleLoadError(
                        f"Guest reports {n32} words per element, expected {self.field.n32}"
                    )
            else:
                self.exports.get_raw_prime()
                prime = self.exports.read_value(n32)
                if prime < 2:
                    raise ModuleLoadError(f"Guest reported invalid prime {prime}")
                self.field = FieldInfo(prime=prime, n32=n32, n64=n64_for_prime(prime))
                logger.debug("Discovered %d-bit prime (n32=%d, n64=%d)",
                             prime.bit_length(), n32, self.field.n64)
        return self.field

    def load_inputs(self, inputs: InputAssignment, sanity_check: bool = False) -> None:
        """Run the guest's init, then hand every input value to the guest."""
        with self._transition(WitnessState.PRIME_DISCOVERED, WitnessState.INPUTS_LOADED):
            assignment = normalize_assignment(inputs)
            self.exports.init(sanity_check)
            n32 = self.field.n32
            prime = self.field.prime
            for name, values in assignment:
                msb, lsb = signal_address(name)
                for i, value in enumerate(values):
                    if value < 0:
                        raise NegativeInputError(name, i, value)
                    if value >= prime:
                        raise InputRangeError(name, i, value, prime)
                    self.exports.write_value(value, n32)
                    self.exports.set_input_signal(msb, lsb, i)

    def execute(self) -> int:
        """Query the witness size once all inputs are in."""
        with self._transition(WitnessState.INPUTS_LOADED, WitnessState.EXECUTED):
            self.witness_size = self.exports.get_witness_size()
        return self.witness_size

    def extract(self) -> list[int]:
        """Read every witness slot out of the guest."""
        with self._transition(WitnessState.EXECUTED, WitnessState.EXTRACTED):
            n32 = self.field.n32
            prime = self.field.prime
            witness = []
            for i in range(self.witness_size):
                self.exports.get_witness(i)
                value = self.exports.read_value(n32)
                if value >= prime:
                    raise UnreducedValueError(f"Witness slot {i} = {value} is not reduced modulo {prime}")
                witness.append(value)
            self.callbacks.flush_log()
        return witness


# --- Calculator ---


class WitnessCalculator:
    """Computes witnesses for one compiled circuit.

    Construction instantiates the guest once to learn the field prime; each
    computation afterwards runs in its own fresh guest context.
    """

    def __init__(self, module: GuestModule, config: CalculatorConfig | None = None) -> None:
        self.module = module
        self.config = config or CalculatorConfig()
        session = WitnessSession(module)
        session.load()
        self.field = session.discover_prime()
        self.version = session.version

    @classmethod
    def from_bytes(
        cls, data: bytes, config: CalculatorConfig | None = None, precompiled: bool = False
    ) -> "WitnessCalculator":
        """Build from wasm bytes, or from a serialized artifact if ``precompiled``."""
        config = config or CalculatorConfig()
        if precompiled:
            module = PrecompiledWasmtimeModule.from_serialized(data, fuel=config.fuel)
        else:
            module = WasmtimeModule.from_bytes(data, fuel=config.fuel)
        return cls(module, config)

    @classmethod
    def from_file(
        cls, path: str | Path, config: CalculatorConfig | None = None, precompiled: bool = False
    ) -> "WitnessCalculator":
        return cls.from_bytes(Path(path).read_bytes(), config, precompiled)

    @property
    def prime(self) -> int:
        return self.field.prime

    @property
    def n32(self) -> int:
        return self.field.n32

    @property
    def n64(self) -> int:
        return self.field.n64

    def new_session(self) -> WitnessSession:
        return WitnessSession(self.module, self.field)

    def calculate_witness(self, inputs: InputAssignment, sanity_check: bool | None = None) -> list[int]:
        """Compute the raw witness values for ``inputs``.

        Args:
            inputs: Signal name -> value(s), as a mapping or (name, values) pairs
            sanity_check: Enable guest-side assertions; defaults to the config

        Returns:
            One integer per witness slot, each in [0, prime)

        Raises:
            WitnessError: On any failure; no partial witness is returned
        """
        if sanity_check is None:
            sanity_check = self.config.sanity_check
        session = self.new_session()
        session.load()
        session.discover_prime()
        session.load_inputs(inputs, sanity_check)
        session.execute()
        witness = session.extract()
        logger.debug("Computed witness of %d values", len(witness))
        return witness

    def calculate_witness_elements(
        self, inputs: InputAssignment, sanity_check: bool | None = None
    ) -> galois.FieldArray:
        """Compute the witness as GF(prime) elements."""
        return to_field_elements(self.calculate_witness(inputs, sanity_check), self.prime)
