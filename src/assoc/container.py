from collections.abc import Iterator, Mapping
from logging import getLogger
from typing import Any, Callable, Self

from assoc.callbacks import Fit, invoke
from assoc.config.decorator import config_setting, resolve_setting
from assoc.cursor import Cursor
from assoc.errors import ConversionError, InvalidInputError
from assoc.sources import is_collection, to_mapping

type Key = int | str

DEFAULT_GLUE = ','
DEFAULT_SEPARATOR = ','

_VALUE_TYPES = (str, bytes, int, float, complex, bool, type(None), dict, list, tuple)

_logger = getLogger(__name__)


class AssociativeContainer:
    """
    Ordered key-value container with chainable higher-order operations.

    The `AssociativeContainer` wraps a dictionary whose keys are strings or
    sequential integers. Nested mappings, lists and tuples stored as values
    are treated as sub-collections: reading them through ``container[key]``,
    :meth:`get_or_create`, :meth:`pull` or iteration yields a fresh child
    container over the nested data, and the ``recursive`` flag of the bulk
    operations applies the same operation to them.

    Most bulk operations (``map``, ``filter``, ``reverse``, ...) replace the
    internal data and return the container itself so calls can be chained.
    ``keys``, ``each``, ``fetch`` and the factory class methods return new
    containers.

    Parameters
    ----------
    source : Any, optional
        Initial data: a mapping, an object implementing ``to_array()``, a
        non-string iterable (keyed ``0..n-1``), or a plain object whose
        public attributes are used. ``None`` creates an empty container.

    Attributes
    ----------
    _data : dict[Key, Any]
        Internal storage. Users should treat this as private and prefer
        the container's operations.

    Notes
    -----
    - Iterating a container yields ``(key, value)`` pairs, not keys.
    - Missing keys are never an error: ``get`` and ``pull`` return a
      default, ``unset`` is a no-op. ``container[key]`` raises ``KeyError``
      unless the ``autovivify`` setting is enabled.
    - Modifying a container while iterating over it is not supported.
    - The position cursor (``current``, ``next``, ...) is per-instance
      state and not safe to share between independent callers.

    Examples
    --------
    >>> c = AssociativeContainer({'a': 1, 'b': 2, 'c': 3})
    >>> c.filter(lambda v: v > 1).to_array()
    {'b': 2, 'c': 3}
    >>> AssociativeContainer.explode('1,2,3').to_array()
    {0: '1', 1: '2', 2: '3'}
    """

    _data: dict[Key, Any]
    _cursor: Cursor

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, source: Any = None) -> None:
        """
        Initialize the `AssociativeContainer`.

        Raises
        ------
        InvalidInputError
            When ``source`` is a string, bytes, or an object without
            attributes.
        """
        self._data = to_mapping(source)
        self._cursor = Cursor(self._data)

    @config_setting(default=False)
    def autovivify(self) -> bool:
        """Whether ``container[key]`` stores and returns an empty child for missing keys."""
        ...

    @config_setting(default=DEFAULT_GLUE)
    def glue(self) -> str:
        """Default glue for :meth:`implode`."""
        ...

    @config_setting(default=DEFAULT_SEPARATOR)
    def separator(self) -> str:
        """Default separator for :meth:`explode`."""
        ...

    @classmethod
    def from_keys(cls, source: Any) -> Self:
        """Build a container whose sequential values are the keys of ``source``."""
        return cls(list(to_mapping(source)))

    @classmethod
    def from_values(cls, source: Any) -> Self:
        """Build a container whose sequential values are the values of ``source``."""
        return cls(list(to_mapping(source).values()))

    @classmethod
    def explode(cls, string: str, separator: str | None = None) -> Self:
        """
        Split ``string`` on ``separator`` into a sequential container.

        Parameters
        ----------
        string : str
            The string to split.
        separator : str | None, optional
            The delimiter. Defaults to the ``separator`` setting (``','``).

        Raises
        ------
        InvalidInputError
            When the separator is empty.
        """
        if separator is None:
            separator = resolve_setting(cls, 'separator', DEFAULT_SEPARATOR)
        if not separator:
            raise InvalidInputError(separator, 'explode() separator must not be empty')
        return cls(string.split(separator))

    def to_array(self) -> dict[Key, Any]:
        """Return a shallow copy of the stored data; nested values are left as stored."""
        return dict(self._data)

    def _is_nested(self, value: Any) -> bool:
        return isinstance(value, (Mapping, list, tuple, AssociativeContainer))

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, (Mapping, list, tuple)):
            return type(self)(value)
        return value

    def _next_index(self) -> int:
        indexes = [key for key in self._data if isinstance(key, int) and not isinstance(key, bool)]
        if not indexes:
            return 0
        return max(max(indexes) + 1, 0)

    # Access

    def exists(self, key: Key) -> bool:
        """Whether ``key`` is present, even when its value is ``None``."""
        return key in self._data

    def get(self, key: Key, default: Any = None) -> Any:
        """Return the raw value stored at ``key``, or ``default``. Nested values are not wrapped."""
        return self._data.get(key, default)

    def get_or_create(self, key: Key) -> Any:
        """
        Read ``key``, creating an empty child container when it is missing.

        A missing key is set to a new empty container, which is returned so
        that deep writes can be chained::

            c.get_or_create('a').get_or_create('b')['c'] = 1

        Nested raw values are returned wrapped in a new child container on
        every call; writes to that child do not reach this container. Other
        values, including stored child containers, are returned as they are.
        """
        if key not in self._data:
            child = type(self)()
            self._data[key] = child
            _logger.debug('Created empty child container at key %r', key)
            return child

        return self._wrap(self._data[key])

    def set(self, key: Key | None, value: Any) -> Self:
        """
        Store ``value`` at ``key``.

        Non-string iterables are wrapped into a child container before they
        are stored. A ``None`` key appends at the next sequential integer key.
        """
        if is_collection(value):
            value = type(self)(value)
        if key is None:
            key = self._next_index()
        self._data[key] = value
        return self

    def append(self, value: Any) -> Self:
        return self.set(None, value)

    def unset(self, key: Key) -> Self:
        self._data.pop(key, None)
        return self

    def pull(self, key: Key, default: Any = None) -> Any:
        """Remove ``key`` and return its value, or return ``default`` when it is missing."""
        if key not in self._data:
            return default
        return self._wrap(self._data.pop(key))

    def replace_key(self, old_key: Key, new_key: Key) -> Self:
        """Move the value at ``old_key`` to ``new_key``. No-op when ``old_key`` is missing."""
        if old_key in self._data:
            self.set(new_key, self.pull(old_key))
        return self

    def replace(self, data: Any) -> Self:
        """
        Replace all stored data with ``data`` and reset the cursor.

        ``data`` accepts the same sources as the constructor.
        """
        self._data = to_mapping(data)
        self._cursor = Cursor(self._data)
        return self

    def __getitem__(self, key: Key) -> Any:
        if key not in self._data and not self.autovivify:
            raise KeyError(key)
        return self.get_or_create(key)

    def __setitem__(self, key: Key | None, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Key) -> None:
        self.unset(key)

    def __contains__(self, key: Any) -> bool:
        return self.exists(key)

    def __iter__(self) -> Iterator[tuple[Key, Any]]:
        for key, value in self._data.items():
            yield key, self._wrap(value)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AssociativeContainer):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)  # pyright: ignore[reportUnknownArgumentType]
        return NotImplemented

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._data!r})'

    # Cursor

    def key(self) -> Key | None:
        return self._cursor.key()

    def current(self) -> Any:
        return self._cursor.current()

    def next(self) -> Any:
        return self._cursor.next()

    def prev(self) -> Any:
        return self._cursor.prev()

    def end(self) -> Any:
        return self._cursor.end()

    def rewind(self) -> None:
        self._cursor.rewind()

    # Bulk transforms

    def map(self, callback: Callable[..., Any], recursive: bool = False) -> Self:
        """
        Replace every value with ``callback(value, key)``.

        Parameters
        ----------
        callback : Callable[..., Any]
            Called with the value and, if it accepts a second argument, the key.
        recursive : bool, optional
            Apply the callback to the values of nested collections instead of
            the collections themselves, by default False
        """
        data: dict[Key, Any] = {}
        for key, value in self._data.items():
            if recursive and self._is_nested(value):
                data[key] = type(self)(value).map(callback, True).to_array()
            else:
                data[key] = invoke(callback, value, key)

        return self.replace(data)

    def filter(self, callback: Callable[..., Any], recursive: bool = False) -> Self:
        """
        Keep the entries for which ``callback(value, key)`` returns ``True``.

        Only the ``True`` object itself keeps an entry; other truthy results
        drop it. In recursive mode nested collections are filtered in turn
        and dropped when nothing in them is kept.
        """
        data: dict[Key, Any] = {}
        for key, value in self._data.items():
            if recursive and self._is_nested(value):
                child = type(self)(value).filter(callback, True)
                if not child.is_empty():
                    data[key] = child.to_array()
            elif invoke(callback, value, key) is True:
                data[key] = value

        return self.replace(data)

    def reject(self, callback: Callable[..., Any], recursive: bool = False) -> Self:
        """Keep the entries for which ``callback(value, key)`` is falsy; the inverse of :meth:`filter`."""
        data: dict[Key, Any] = {}
        for key, value in self._data.items():
            if recursive and self._is_nested(value):
                child = type(self)(value).reject(callback, True)
                if not child.is_empty():
                    data[key] = child.to_array()
            elif not invoke(callback, value, key):
                data[key] = value

        return self.replace(data)

    def reduce(
        self,
        callback: Callable[..., Any],
        initial: Any = None,
        recursive: bool = False,
        thread_carry: bool = False,
    ) -> Any:
        """
        Fold the values from left to right with ``callback(carry, value)``.

        Parameters
        ----------
        callback : Callable[..., Any]
            Receives the carry and the value, returns the new carry.
        initial : Any, optional
            The starting carry, by default None
        recursive : bool, optional
            Handle nested collections with a sub-reduction instead of passing
            them to the callback, by default False
        thread_carry : bool, optional
            Only used in recursive mode. When False the sub-reduction runs
            over an empty container, so nested collections leave the carry
            unchanged. When True the carry is folded through the nested
            values, by default False

        Returns
        -------
        Any
            The final carry.
        """
        carry = initial
        for value in self._data.values():
            if recursive and self._is_nested(value):
                nested = type(self)(value if thread_carry else None)
                carry = nested.reduce(callback, carry, True, thread_carry)
            else:
                carry = invoke(callback, carry, value)

        return carry

    def transform(self, callback: Callable[..., Any], recursive: bool = False) -> Self:
        """
        Rebuild the entries from ``callback(value, key)``.

        The callback returns a ``(new_key, new_value)`` pair, or ``None`` to
        drop the entry. In recursive mode nested collections keep their key,
        are transformed in turn and dropped when they end up empty.
        """
        data: dict[Key, Any] = {}
        for key, value in self._data.items():
            if recursive and self._is_nested(value):
                child = type(self)(value).transform(callback, True)
                if not child.is_empty():
                    data[key] = child.to_array()
                continue

            result = invoke(callback, value, key)
            if result is not None:
                new_key, new_value = result
                data[new_key] = new_value

        return self.replace(data)

    def reverse(self, preserve_keys: bool = False, recursive: bool = False) -> Self:
        """
        Reverse the order of the entries.

        String keys are always kept. Integer keys are renumbered from zero
        in the new order unless ``preserve_keys`` is set. In recursive mode
        nested collections are reversed with the same flags.
        """
        data: dict[Key, Any] = {}
        index = 0
        for key, value in reversed(self._data.items()):
            if recursive and self._is_nested(value):
                value = type(self)(value).reverse(preserve_keys, True).to_array()

            if preserve_keys or isinstance(key, str):
                data[key] = value
            else:
                data[index] = value
                index += 1

        return self.replace(data)

    def flip(self) -> Self:
        """
        Swap keys and values.

        Only string and integer values can become keys, other values are
        skipped. When values repeat, the last key wins.
        """
        data: dict[Key, Any] = {}
        for key, value in self._data.items():
            if isinstance(value, (int, str)) and not isinstance(value, bool):
                data[value] = key
            else:
                _logger.debug('flip() skipped the value at key %r, only str and int values can be flipped', key)

        return self.replace(data)

    def values(self) -> Self:
        """Renumber the keys ``0..n-1``, keeping the values and their order."""
        return self.replace(list(self._data.values()))

    def keys(self) -> Self:
        """Return a new container whose sequential values are this container's keys."""
        return type(self)(list(self._data))

    def only(self, *keys: Key) -> Self:
        return self.replace({key: self._data[key] for key in keys if key in self._data})

    def except_(self, *keys: Key) -> Self:
        return self.replace({key: value for key, value in self._data.items() if key not in keys})

    def intersect_keys(self, other: Any) -> Self:
        """
        Keep the entries whose key is also a key of ``other``.

        ``other`` is normalized like a constructor source, so for a list or
        tuple its indexes are the keys. The result follows ``other``'s order.
        """
        return self.replace({key: self._data[key] for key in to_mapping(other) if key in self._data})

    def fetch(self, key: Key) -> Self:
        """
        Collect ``value[key]`` from every nested value into a new container.

        Entries whose value is not a nested collection are skipped; nested
        collections without ``key`` contribute ``None``. Outer keys are kept.
        """
        data: dict[Key, Any] = {}
        for outer_key, value in self._data.items():
            if self._is_nested(value):
                data[outer_key] = to_mapping(value).get(key)

        return type(self)(data)

    # Iteration, search and aggregates

    def each(self, callback: Callable[..., Any]) -> Self:
        """Return a new container holding ``callback(value, key)`` for every entry."""
        return type(self)({key: invoke(callback, value, key) for key, value in self._data.items()})

    def fit(self, callback: Callable[..., Any]) -> bool:
        """
        Scan the entries until the callback decides the outcome.

        ``callback(value, key)`` returns a :class:`~assoc.callbacks.Fit`
        signal. ``Fit.STOP`` ends the scan with ``True``; ``Fit.ABORT`` or a
        falsy result ends it with ``False``. Any other result continues.

        Returns
        -------
        bool
            ``True`` when the scan was stopped or ran to completion.
        """
        for key, value in self._data.items():
            signal = invoke(callback, value, key)
            if signal is Fit.STOP:
                return True
            if signal is Fit.ABORT or not signal:
                return False

        return True

    def _matches(self, needle: Any, strict: bool) -> Iterator[Key]:
        if callable(needle):
            for key, value in self._data.items():
                if needle(value):
                    yield key
            return

        for key, value in self._data.items():
            if _equals(value, needle, strict):
                yield key

    def search(self, needle: Any, strict: bool = False) -> Key | None:
        """
        Return the key of the first value matching ``needle``, or ``None``.

        Parameters
        ----------
        needle : Any
            A predicate called with each value, or a value to compare with.
        strict : bool, optional
            Compare value types exactly and other objects by identity instead
            of with ``==``, by default False
        """
        return next(self._matches(needle, strict), None)

    def search_all(self, needle: Any, strict: bool = False) -> list[Key]:
        """Return the keys of every value matching ``needle``, see :meth:`search`."""
        return list(self._matches(needle, strict))

    def implode(
        self, glue: str | None = None, recursive: bool = False, ignore_not_string: bool = True
    ) -> str:
        """
        Join the string forms of the values with ``glue``.

        Parameters
        ----------
        glue : str | None, optional
            Separator between values. Defaults to the ``glue`` setting (``','``).
        recursive : bool, optional
            Implode nested collections with the same arguments and join their
            non-empty results in place. Otherwise nested collections are
            values that cannot be converted, by default False
        ignore_not_string : bool, optional
            Skip values that cannot be converted instead of raising, by default True

        Returns
        -------
        str
            The joined string. ``None`` values render as an empty string.

        Raises
        ------
        ConversionError
            When ``ignore_not_string`` is False and a value cannot be converted.
        """
        if glue is None:
            glue = self.glue

        parts: list[str] = []
        for key, value in self._data.items():
            if recursive and self._is_nested(value):
                part = type(self)(value).implode(glue, True, ignore_not_string)
                if part:
                    parts.append(part)
            elif not self._is_nested(value) and _is_stringable(value):
                parts.append('' if value is None else str(value))
            elif ignore_not_string:
                _logger.debug('implode() skipped the value at key %r of type %s', key, type(value).__name__)
            else:
                raise ConversionError(key)

        return glue.join(parts)

    def count(self, recursive: bool = False) -> int:
        """Return the number of entries, or with ``recursive`` the number of leaf values."""
        if not recursive:
            return len(self._data)

        return sum(
            type(self)(value).count(True) if self._is_nested(value) else 1
            for value in self._data.values()
        )

    def is_empty(self) -> bool:
        return not self._data

    def clear(self) -> Self:
        return self.replace({})

    def first_key(self) -> Key | None:
        return next(iter(self._data), None)

    def last_key(self) -> Key | None:
        return next(reversed(self._data), None)

    def first_item(self) -> Any:
        if not self._data:
            return None
        return self._data[next(iter(self._data))]

    def last_item(self) -> Any:
        if not self._data:
            return None
        return self._data[next(reversed(self._data))]


def _equals(value: Any, needle: Any, strict: bool) -> bool:
    if not strict:
        return value == needle
    if value is needle:
        return True
    return type(value) is type(needle) and isinstance(value, _VALUE_TYPES) and value == needle


def _is_stringable(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return False
    if isinstance(value, (str, int, float, complex, bool)) or value is None:
        return True
    # object.__str__ falls back to repr, which is not a string form
    return any('__str__' in vars(cls) for cls in type(value).__mro__[:-1])
