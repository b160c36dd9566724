"""abstract module for exceptions"""


class TypedpipeException(Exception):
    """Base class for typedpipe related exceptions."""

    def __init__(self, message: str, *args) -> None:
        self.message = message
        super().__init__(message, *args)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypedpipeException):
            return self.args == other.args
        return NotImplemented

    __hash__ = Exception.__hash__
