"""Host functions linked into every guest instance under the "runtime" module.

A HostCallbacks object belongs to exactly one guest context, so concurrent
contexts never share callback state. The diagnostic hooks only log; the
exception hook aborts the run.
"""

import logging
from typing import Callable

from primitives.errors import GuestTrapError
from primitives.limbs import from_wire

logger = logging.getLogger(__name__)

# Calls a guest export from inside a callback: call(name, *args) -> result
GuestCall = Callable[..., "int | None"]

# Messages the circom runtime associates with exceptionHandler codes
EXCEPTION_MESSAGES: dict[int, str] = {
    1: "Signal not found",
    2: "Too many signals set",
    3: "Signal already set",
    4: "Assert Failed",
    5: "Not enough memory",
    6: "Input signal array access exceeds the size",
}


def read_message(call: GuestCall, has_export: Callable[[str], bool]) -> str:
    """Read a NUL-terminated message out of the guest via getMessageChar."""
    if not has_export("getMessageChar"):
        return ""
    chars = []
    c = call("getMessageChar")
    while c:
        chars.append(chr(c))
        c = call("getMessageChar")
    return "".join(chars)


class HostCallbacks:
    """Per-context state behind the runtime.* imports."""

    def __init__(self) -> None:
        self.exception_code: int | None = None
        self.error_messages: list[str] = []
        self._log_line: list[str] = []

    # --- runtime.exceptionHandler ---

    def exception_handler(self, code: int) -> None:
        """Record the guest's exception code and abort the run."""
        self.exception_code = code
        raise self.trap_error()

    # --- Diagnostic hooks ---

    def print_error_message(self, call: GuestCall, has_export: Callable[[str], bool]) -> None:
        msg = read_message(call, has_export)
        if msg:
            self.error_messages.append(msg)
            logger.error("guest: %s", msg)

    def write_buffer_message(self, call: GuestCall, has_export: Callable[[str], bool]) -> None:
        """Collect guest log() output, emitting a line when the guest sends "\\n"."""
        msg = read_message(call, has_export)
        if msg == "\n":
            self.flush_log()
        elif msg:
            self._log_line.append(msg)

    def show_shared_rw_memory(self, call: GuestCall, has_export: Callable[[str], bool]) -> None:
        n32 = call("getFieldNumLen32")
        words = [call("readSharedRWMemory", j) for j in range(n32)]
        logger.info("guest shared memory: %d", from_wire(words))

    def flush_log(self) -> None:
        if self._log_line:
            logger.info("guest: %s", " ".join(self._log_line))
            self._log_line = []

    # --- Error reporting ---

    def trap_error(self, cause: BaseException | None = None) -> GuestTrapError:
        """Build the error describing why the guest stopped."""
        if self.exception_code is None:
            message = f"Guest trapped: {cause}" if cause is not None else "Guest trapped"
        else:
            message = EXCEPTION_MESSAGES.get(self.exception_code, "Unknown error")
        if self.error_messages:
            message += "\n" + "\n".join(self.error_messages)
        return GuestTrapError(message, code=self.exception_code)
