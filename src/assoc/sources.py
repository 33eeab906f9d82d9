from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from assoc.errors import InvalidInputError


@runtime_checkable
class Arrayable(Protocol):
    """Objects that can convert themselves into key-value data."""

    def to_array(self) -> Mapping[Any, Any] | Iterable[Any]: ...


def to_mapping(source: Any) -> dict[Any, Any]:
    """Normalize ``source`` into a fresh ``dict``.

    Parameters
    ----------
    source : Any
        ``None`` (empty), a mapping, an :class:`Arrayable`, a non-string
        iterable (enumerated with sequential keys) or a plain object, whose
        public instance attributes are used.

    Returns
    -------
    dict[Any, Any]
        A shallow copy of the source's key-value pairs.

    Raises
    ------
    InvalidInputError
        When ``source`` is a string, bytes, an object without attributes,
        or an :class:`Arrayable` whose ``to_array()`` result is neither a
        mapping nor an iterable.
    """
    if source is None:
        return {}

    if isinstance(source, Mapping):
        return dict(source)  # pyright: ignore[reportUnknownArgumentType]

    if isinstance(source, Arrayable):
        data = source.to_array()
        if not isinstance(data, Mapping) and not is_collection(data):
            raise InvalidInputError(
                source,
                f'{type(source).__name__}.to_array() returned {type(data).__name__}, '
                'expected a mapping or an iterable',
            )
        return to_mapping(data)

    if isinstance(source, (str, bytes, bytearray)):
        raise InvalidInputError(source, f'Cannot build a container from a {type(source).__name__}, use explode()')

    if isinstance(source, Iterable):
        return dict(enumerate(source))  # pyright: ignore[reportUnknownArgumentType]

    try:
        fields = vars(source)
    except TypeError as exc:
        raise InvalidInputError(source) from exc

    return {name: value for name, value in fields.items() if not name.startswith('_')}


def is_collection(value: Any) -> bool:
    """Whether ``value`` is wrapped into a child container when stored."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))
