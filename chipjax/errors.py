"""Emulation error hierarchy.

Every fatal condition raised out of ``step()`` derives from
:class:`EmulationError`. Programmer and host errors (bad register or key
index) derive from the matching builtin instead.
"""

from chipjax.constants import MAX_PROGRAM_SIZE, STACK_SIZE


class EmulationError(Exception):
    """Base class for fatal interpreter errors."""


class RomTooLarge(EmulationError):
    """Program image does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, capacity: int = MAX_PROGRAM_SIZE):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes, only {capacity} bytes available")


class UnknownOpcode(EmulationError):
    """Instruction word matches no recognised instruction."""

    def __init__(self, opcode: int, address: int | None = None):
        self.opcode = opcode
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown opcode 0x{opcode:04X}{where}")


class StackOverflow(EmulationError):
    """CALL with the return stack already full."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow pushing 0x{address:03X} (depth {STACK_SIZE})")


class StackUnderflow(EmulationError):
    """RET with an empty return stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")


class OutOfBoundsAccess(EmulationError):
    """Memory access outside [0x000, 0xFFF]."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        if length == 1:
            message = f"Memory access out of bounds at 0x{address:X}"
        else:
            message = f"Memory access out of bounds: {length} bytes at 0x{address:X}"
        super().__init__(message)


class InvalidRegister(IndexError):
    """Register index outside V0-VF."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid register index {index}")


class InvalidKey(ValueError):
    """Key index outside 0x0-0xF."""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"Invalid key {key}, expected 0x0-0xF")
