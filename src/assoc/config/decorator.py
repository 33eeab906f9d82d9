from functools import wraps
from typing import Any, Callable, overload, get_type_hints
import warnings

from assoc.config.registry import MISSING, ConfigProperty, register
from assoc.config.validation import get_config, resolve_config_value


class TypedProperty[T, Owner](property):
    def __init__(
        self,
        fget: Callable[[Owner], T],
        fset: Callable[[Owner, T], None] | None = None,
        fdel: Callable[[Owner], None] | None = None,
        doc: str | None = None,
    ) -> None:
        self._fget = fget
        self._fset = fset
        self._fdel = fdel
        self.__doc__ = doc

    @overload
    def __get__(self, instance: None, owner: type[Owner]) -> 'TypedProperty[T, Owner]': ...
    @overload
    def __get__(self, instance: Owner, owner: type[Owner] | None = None) -> T: ...

    def __get__(
        self, instance: Owner | None, owner: type[Owner] | None = None
    ) -> T | 'TypedProperty[T, Owner]':
        if instance is None:
            return self
        return self._fget(instance)

    def __set__(self, instance: Owner, value: T) -> None:
        if self._fset is None:
            raise AttributeError('can\'t set attribute')
        self._fset(instance, value)

    def __delete__(self, instance: Owner) -> None:
        if self._fdel is None:
            raise AttributeError('can\'t delete attribute')
        self._fdel(instance)


class Property[T](TypedProperty[T, Any]):
    pass


def resolve_setting(owner: type[Any], key: str, default: Any = MISSING) -> Any:
    '''Resolve the setting ``key`` for the class ``owner``.

    Class scoped values are looked up for every class in the MRO of
    ``owner`` (most derived first), then the flat ``key``. When nothing is
    bound ``default`` is returned.

    Raises
    ------
    KeyError
        When nothing is bound and no default is given.
    '''
    config = get_config()
    for cls in owner.__mro__[:-1]:
        try:
            return resolve_config_value(config=config, key=f'{cls.__name__}.{key}')
        except KeyError:
            continue

    try:
        return resolve_config_value(config=config, key=key)
    except KeyError:
        if default is MISSING:
            raise
        return default


@overload
def config_setting[T](
    name: str | None = None, *, default: Any = MISSING
) -> Callable[[Callable[..., T]], Property[T]]: ...
@overload
def config_setting[T](name: Callable[..., T]) -> Property[T]: ...


def config_setting[T](
    name: str | Callable[..., T] | None = None,
    *,
    default: Any = MISSING,
) -> Callable[[Callable[..., T]], Property[T]] | Property[T]:
    '''Decorator for configuration-backed properties.

    The decorated method is a typed stub; its return annotation is the
    expected type of the setting. Reading the property resolves the value
    with :func:`resolve_setting` for the class of the instance.

    Parameters
    ----------
    name : str | None
        Explicit configuration key name to use instead of the
        property name. When omitted the property name is used, by default None
    default : Any
        Value returned when no configuration is bound for the setting.
        Settings without a default are required.

    Returns
    -------
    Callable[[Callable[..., T]], Property[T]]
        A decorator which converts the given function into a
        configuration-backed ``Property``.
    '''

    explicit_name = None if callable(name) else name

    def decorator(func: Callable[..., T]) -> Property[T]:
        qual_parts = func.__qualname__.split('.')
        if len(qual_parts) >= 2:
            class_name: str = qual_parts[-2]
        else:
            class_name: str = qual_parts[0]
        key: str = explicit_name or func.__name__

        type_hints = get_type_hints(func)
        expected_type: type[Any] | None = None
        if 'return' in type_hints:
            expected_type = type_hints['return']
        else:
            warnings.warn(
                f'Property "{class_name}.{key}" cannot be type checked because it does not declare a return type',
                RuntimeWarning,
            )

        @wraps(func)
        def wrapper(self: Any) -> T:
            return resolve_setting(type(self), key, default)

        # Registration occurs at decoration time
        register(
            ConfigProperty(
                key=key,
                collection_name=class_name,
                expected_type=expected_type,
                fget=func,
                default=default,
            )
        )

        return Property(wrapper, doc=func.__doc__)

    if callable(name):
        func = name
        return decorator(func)

    return decorator
