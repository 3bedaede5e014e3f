"""Exceptions raised by the CHIP-8 machine."""


class Chip8Error(Exception):
    """Base class for every error raised by chip8vm."""


class LoadError(Chip8Error):
    """A program image could not be placed in memory."""


class ProgramTooLarge(LoadError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Program is {size} bytes, at most {limit} bytes fit in memory")


class ProgramUnreadable(LoadError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read program '{path}': {reason}")


class StepError(Chip8Error):
    """Execution halted on an instruction. Machine state is left as it was before it."""

    def __init__(self, message: str, address: int, instruction: int):
        self.address = address
        self.instruction = instruction
        super().__init__(f"{message} at 0x{address:03X} (instruction 0x{instruction:04X})")


class StackOverflow(StepError):
    def __init__(self, address: int, instruction: int):
        super().__init__("Call stack overflow", address, instruction)


class StackUnderflow(StepError):
    def __init__(self, address: int, instruction: int):
        super().__init__("Return with empty call stack", address, instruction)
