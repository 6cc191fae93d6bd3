"""Exceptions raised by the logging core."""


class InvalidLevel(ValueError):
    """Raised when a level name or external severity is not recognised."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid log level: {value!r}")
        self.value = value


class AppenderWriteError(OSError):
    """Raised by an appender when a rendered line could not be written.

    The registry catches it per appender during dispatch, so it never
    reaches the code that issued the log call.
    """
