"""Typed failures of a witness computation.

Every error aborts the computation it was raised in; none are retried.
Address collisions between signal names are not detected and have no error.
"""

from enum import Enum


class FailureReason(Enum):
    """Why a witness session ended in the FAILED state."""
    MODULE_LOAD = "module_load"
    MISSING_EXPORT = "missing_export"
    GUEST_TRAP = "guest_trap"
    BAD_INPUT = "bad_input"
    INVALID_STATE = "invalid_state"


class WitnessError(Exception):
    """Base class for witness computation failures."""
    reason = FailureReason.GUEST_TRAP


class ModuleLoadError(WitnessError):
    """Module bytes could not be compiled or instantiated."""
    reason = FailureReason.MODULE_LOAD


class MissingExportError(WitnessError):
    """A required guest export is absent."""
    reason = FailureReason.MISSING_EXPORT

    def __init__(self, name: str) -> None:
        super().__init__(f"Guest module does not export '{name}'")
        self.name = name


class GuestTrapError(WitnessError):
    """The guest reported an error or the engine faulted while running it."""
    reason = FailureReason.GUEST_TRAP

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class NegativeInputError(WitnessError, ValueError):
    """An input value is negative; callers must pre-normalize it."""
    reason = FailureReason.BAD_INPUT

    def __init__(self, signal: str, index: int, value: int) -> None:
        super().__init__(
            f"Input {signal}[{index}] = {value} is negative; "
            f"reduce it modulo the field prime first"
        )
        self.signal = signal
        self.index = index
        self.value = value


class InputRangeError(WitnessError, ValueError):
    """An input value is not below the field prime."""
    reason = FailureReason.BAD_INPUT

    def __init__(self, signal: str, index: int, value: int, prime: int) -> None:
        super().__init__(f"Input {signal}[{index}] = {value} is not reduced modulo {prime}")
        self.signal = signal
        self.index = index
        self.value = value


class InvalidStateError(WitnessError):
    """A session step was attempted out of order."""
    reason = FailureReason.INVALID_STATE


class InputParseError(WitnessError, ValueError):
    """An input value or input file could not be parsed."""
    reason = FailureReason.BAD_INPUT


class UnreducedValueError(WitnessError, ValueError):
    """A witness value is not in [0, prime)."""
    reason = FailureReason.GUEST_TRAP
