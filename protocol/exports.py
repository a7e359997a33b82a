"""Typed wrapper over the export table a circom guest must provide.

The names and signatures here are the wire contract between host and guest.
Every call goes through GuestInstance.call, so missing exports and traps
surface as MissingExportError / GuestTrapError at the call site.
"""

from guest.base import GuestInstance
from primitives.errors import GuestTrapError
from primitives.limbs import from_wire, to_wire

REQUIRED_EXPORTS = (
    "init",
    "getFieldNumLen32",
    "getRawPrime",
    "readSharedRWMemory",
    "writeSharedRWMemory",
    "setInputSignal",
    "getWitness",
    "getWitnessSize",
)

# Guests built before getVersion existed speak version 1
LEGACY_VERSION = 1


class CircomExports:
    """Circom witness-calculator exports of one guest instance."""

    def __init__(self, guest: GuestInstance) -> None:
        self.guest = guest

    def _u32(self, name: str, *args: int) -> int:
        result = self.guest.call(name, *args)
        if result is None:
            raise GuestTrapError(f"Guest export '{name}' returned no value")
        return result

    def missing_exports(self) -> list[str]:
        return [name for name in REQUIRED_EXPORTS if not self.guest.has_export(name)]

    def get_version(self) -> int:
        if not self.guest.has_export("getVersion"):
            return LEGACY_VERSION
        return self._u32("getVersion")

    def init(self, sanity_check: bool) -> None:
        self.guest.call("init", int(sanity_check))

    def get_field_num_len32(self) -> int:
        return self._u32("getFieldNumLen32")

    def get_raw_prime(self) -> None:
        self.guest.call("getRawPrime")

    def read_shared_rw_memory(self, i: int) -> int:
        return self._u32("readSharedRWMemory", i)

    def write_shared_rw_memory(self, i: int, v: int) -> None:
        self.guest.call("writeSharedRWMemory", i, v)

    def set_input_signal(self, msb: int, lsb: int, pos: int) -> None:
        self.guest.call("setInputSignal", msb, lsb, pos)

    def get_witness(self, i: int) -> None:
        self.guest.call("getWitness", i)

    def get_witness_size(self) -> int:
        return self._u32("getWitnessSize")

    # --- Shared Region Transfers ---

    def read_value(self, n32: int) -> int:
        """Read one field-sized value out of the shared region."""
        return from_wire([self.read_shared_rw_memory(j) for j in range(n32)])

    def write_value(self, value: int, n32: int) -> None:
        """Write one field-sized value into the shared region."""
        for j, word in enumerate(to_wire(value, n32)):
            self.write_shared_rw_memory(j, int(word))
