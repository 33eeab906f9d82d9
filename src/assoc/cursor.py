from itertools import islice
from typing import Any


class Cursor:
    """Stateful position pointer over the entries of a ``dict``.

    The cursor is separate from ``for``-loop iteration over a container:
    moving it never affects iterators and vice versa. Once the pointer
    leaves either end it stays invalid, reading ``None``, until
    :meth:`rewind` or :meth:`end` repositions it.

    Notes
    -----
    The pointer is an index into the insertion order of ``data``. Adding
    entries keeps it in place; removing entries before the pointer shifts
    what it reads and is not supported.
    """

    _data: dict[Any, Any]
    _position: int | None

    def __init__(self, data: dict[Any, Any]) -> None:
        self._data = data
        self._position = 0

    @property
    def valid(self) -> bool:
        return self._position is not None and 0 <= self._position < len(self._data)

    def _entry(self) -> tuple[Any, Any] | None:
        if not self.valid:
            return None
        # dicts offer no positional access, walk to the pointer
        return next(islice(self._data.items(), self._position, None), None)

    def key(self) -> Any:
        entry = self._entry()
        return None if entry is None else entry[0]

    def current(self) -> Any:
        entry = self._entry()
        return None if entry is None else entry[1]

    def next(self) -> Any:
        if self._position is not None:
            self._position += 1
            if self._position >= len(self._data):
                self._position = None
        return self.current()

    def prev(self) -> Any:
        if self._position is not None:
            self._position -= 1
            if self._position < 0:
                self._position = None
        return self.current()

    def rewind(self) -> Any:
        self._position = 0
        return self.current()

    def end(self) -> Any:
        self._position = len(self._data) - 1 if self._data else None
        return self.current()
