from typing import Any


class ContainerError(Exception):
    """Base class for errors raised by :class:`~assoc.container.AssociativeContainer`."""


class InvalidInputError(ContainerError, TypeError):
    """Raised when a source cannot be turned into container data.

    Accepted sources are mappings, objects implementing ``to_array()``,
    non-string iterables and plain objects with public attributes.
    """

    def __init__(self, source: Any, message: str | None = None) -> None:
        self.source = source
        super().__init__(
            message or f'Cannot build a container from {type(source).__name__!r}'
        )


class ConversionError(ContainerError, TypeError):
    """Raised by ``implode`` when a value cannot be converted to a string.

    Attributes
    ----------
    key:
        The key of the offending element.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f'Element with key [{key}] could not be converted to string')
