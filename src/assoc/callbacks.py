import inspect
from enum import Enum
from typing import Any, Callable

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class Fit(Enum):
    """Signal returned by a :meth:`~assoc.container.AssociativeContainer.fit` callback."""

    CONTINUE = 'continue'
    STOP = 'stop'
    ABORT = 'abort'


def arity(callback: Callable[..., Any]) -> int | None:
    """Return how many positional arguments ``callback`` accepts.

    ``None`` means the callback takes ``*args`` and accepts any number.
    """
    # Builtin types such as ``str`` or ``int`` are converters of one value
    if isinstance(callback, type) and callback.__module__ == 'builtins':
        return 1

    try:
        sig = inspect.signature(callback)
    except (TypeError, ValueError):
        return 1

    count = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL:
            count += 1
    return count


def invoke(callback: Callable[..., Any], *args: Any) -> Any:
    """Call ``callback`` with as many of ``args`` as it accepts.

    Container callbacks are offered ``(value, key)``; a callback declared
    as ``lambda value: ...`` simply receives the value.
    """
    accepted = arity(callback)
    if accepted is None:
        return callback(*args)
    return callback(*args[:accepted])
