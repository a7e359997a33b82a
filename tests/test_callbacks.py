"""Tests for the per-context host callbacks."""

import logging

import pytest

from guest.callbacks import EXCEPTION_MESSAGES, HostCallbacks, read_message
from primitives.errors import GuestTrapError
from primitives.limbs import to_wire


class MessageGuest:
    """Minimal guest side for callbacks: a message and a shared region."""

    def __init__(self, message: str = "", shared: list[int] | None = None, message_export: bool = True) -> None:
        self.message = message
        self.shared = shared or []
        self.message_export = message_export

    def has_export(self, name: str) -> bool:
        return name != "getMessageChar" or self.message_export

    def call(self, name: str, *args: int) -> int:
        if name == "getMessageChar":
            if not self.message:
                return 0
            c, self.message = self.message[0], self.message[1:]
            return ord(c)
        if name == "getFieldNumLen32":
            return len(self.shared)
        if name == "readSharedRWMemory":
            return self.shared[args[0]]
        raise AssertionError(f"unexpected call {name}")


class TestReadMessage:
    """Tests for message retrieval from the guest."""

    def test_reads_until_nul(self) -> None:
        guest = MessageGuest("hello")
        assert read_message(guest.call, guest.has_export) == "hello"

    def test_without_export(self) -> None:
        guest = MessageGuest("hello", message_export=False)
        assert read_message(guest.call, guest.has_export) == ""


class TestExceptionHandler:
    """Tests for the fatal exception hook."""

    def test_raises_with_code(self) -> None:
        callbacks = HostCallbacks()
        with pytest.raises(GuestTrapError, match="Assert Failed") as exc_info:
            callbacks.exception_handler(4)
        assert exc_info.value.code == 4
        assert callbacks.exception_code == 4

    def test_unknown_code(self) -> None:
        with pytest.raises(GuestTrapError, match="Unknown error"):
            HostCallbacks().exception_handler(99)

    def test_includes_error_messages(self) -> None:
        callbacks = HostCallbacks()
        guest = MessageGuest("Error in template Main line: 7")
        callbacks.print_error_message(guest.call, guest.has_export)
        with pytest.raises(GuestTrapError, match="line: 7"):
            callbacks.exception_handler(4)

    def test_all_codes_described(self) -> None:
        assert set(EXCEPTION_MESSAGES) == {1, 2, 3, 4, 5, 6}


class TestTrapError:
    """Tests for errors built from engine faults."""

    def test_engine_fault(self) -> None:
        error = HostCallbacks().trap_error(RuntimeError("wasm trap: unreachable"))
        assert error.code is None
        assert "unreachable" in str(error)


class TestDiagnostics:
    """Tests for the logging-only hooks."""

    def test_buffer_message_flushes_on_newline(self, caplog) -> None:
        callbacks = HostCallbacks()
        with caplog.at_level(logging.INFO, logger="guest.callbacks"):
            for msg in ("x", "=", "5", "\n"):
                guest = MessageGuest(msg)
                callbacks.write_buffer_message(guest.call, guest.has_export)
        assert "guest: x = 5" in caplog.messages

    def test_show_shared_memory(self, caplog) -> None:
        guest = MessageGuest(shared=[int(w) for w in to_wire((1 << 40) + 9, 2)])
        with caplog.at_level(logging.INFO, logger="guest.callbacks"):
            HostCallbacks().show_shared_rw_memory(guest.call, guest.has_export)
        assert f"guest shared memory: {(1 << 40) + 9}" in caplog.messages

    def test_independent_state(self) -> None:
        """Two contexts never share recorded errors."""
        first, second = HostCallbacks(), HostCallbacks()
        guest = MessageGuest("boom")
        first.print_error_message(guest.call, guest.has_export)
        assert first.error_messages == ["boom"]
        assert second.error_messages == []
