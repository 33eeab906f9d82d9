from dataclasses import dataclass
from typing import Any, Callable, List


class _Missing:
    def __repr__(self) -> str:
        return 'MISSING'


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ConfigProperty:
    """Metadata for a configuration-backed property.

    Instances describe a single setting declared on a class with
    :func:`~assoc.config.decorator.config_setting`. The registry stores these
    entries so settings can be validated without importing the classes that
    declare them.

    Attributes
    ----------
    key:
        The name used in the configuration mapping.
    collection_name:
        The name of the class that declares the setting.
    expected_type:
        The Python type expected for the configured value, or ``None`` when
        no type checking should be performed.
    fget:
        The original stub method the property was created from.
    default:
        Value used when nothing is bound, or ``MISSING`` when the setting is
        required.
    """

    key: str
    collection_name: str
    expected_type: type[Any] | None
    fget: Callable[..., Any]
    default: Any = MISSING

    @property
    def required(self) -> bool:
        return self.default is MISSING


_REGISTRY: List[ConfigProperty] = []


def register(entry: ConfigProperty) -> None:
    """Register a ``ConfigProperty`` entry in the global registry.

    No uniqueness checks are performed; callers are expected to avoid
    duplicate registrations.
    """

    _REGISTRY.append(entry)


def all_registered() -> List[ConfigProperty]:
    """Return a shallow copy of all registered configuration entries."""

    return list(_REGISTRY)
