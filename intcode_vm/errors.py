"""
Intcode VM: Exception hierarchy

Every failure the machine can report derives from IntcodeError, so an
embedding driver can catch one type and still inspect the specifics.
Nothing in the VM terminates the process; the CLI decides exit codes.
"""


class IntcodeError(Exception):
    """Base class for all Intcode VM errors."""
    pass


class TapeError(IntcodeError, ValueError):
    """Raised when program text cannot be parsed into a tape."""
    def __init__(self, message: str, position: int = 0, token: str = ""):
        self.position = position
        self.token = token
        if position:
            message = f"Token {position} ({token!r}): {message}"
        super().__init__(message)


class NegativeAddressError(IntcodeError, IndexError):
    """Raised on any memory access (or pointer update) below address 0."""
    def __init__(self, address: int, what: str = "memory access"):
        self.address = address
        super().__init__(f"Negative address {address} in {what}")


class ImmediateWriteError(IntcodeError):
    """Raised when an instruction tries to write through an immediate operand."""
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Write to immediate-mode parameter at {address}")


class DecodeError(IntcodeError):
    """Raised when an instruction word cannot be decoded."""
    def __init__(self, message: str, word: int, address: int = None):
        self.word = word
        self.address = address
        loc = f" at {address}" if address is not None else ""
        super().__init__(f"{message}: {word}{loc}")


class IllegalOpcode(DecodeError):
    """Raised when the low two digits of a word name no known operation."""
    def __init__(self, word: int, address: int = None):
        super().__init__("Illegal opcode", word, address)


class IllegalMode(DecodeError):
    """Raised when a parameter mode digit is not 0, 1 or 2."""
    def __init__(self, word: int, digit: int, address: int = None):
        self.digit = digit
        super().__init__(f"Illegal parameter mode {digit}", word, address)


class StepLimitExceeded(IntcodeError):
    """Raised by run() when the step budget runs out before the machine stops."""
    def __init__(self, max_steps: int, ip: int):
        self.max_steps = max_steps
        self.ip = ip
        super().__init__(f"Step limit of {max_steps} exceeded (ip={ip})")


class NoOutputError(IntcodeError, LookupError):
    """Raised when a caller asks for an output value that was never produced."""
    pass


class ChainStalled(IntcodeError):
    """Raised when every computer in a chain is blocked and nothing moved."""
    pass
