from typing import Any, Mapping
from types import MappingProxyType

from assoc.config.registry import all_registered

_CONFIG_CONTEXT: dict[str, Any] = {}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails.

    Raised by :func:`ensure_required_config_values` when required settings
    are missing from the bound configuration or have a value of the wrong
    type.
    """


def bind_config_values(**kwargs: Any) -> None:
    """Bind configuration values for later setting resolution.

    Values are merged into the global configuration context that
    :func:`resolve_config_value` and properties decorated with
    ``config_setting`` read from. Keys already bound are overwritten.

    Parameters
    ----------
    kwargs:
        Configuration keys and values. Keys are either flat (``glue``),
        class scoped (``AssociativeContainer.glue``) or nested mappings
        (``AssociativeContainer={'glue': ';'}``).
    """
    _CONFIG_CONTEXT.update(kwargs)  # pyright: ignore[reportConstantRedefinition]


def clear_config_values() -> None:
    """Forget every bound configuration value."""
    _CONFIG_CONTEXT.clear()


def get_config() -> Mapping[str, Any]:
    """Return a read-only view of the currently bound configuration."""
    return MappingProxyType(_CONFIG_CONTEXT)


def resolve_config_value(
    *, config: Mapping[str, Any] | None = None, key: str, collection_name: str | None = None
) -> Any:
    """Resolve a configuration value using string-based precedence.

    When looking up a value the function tries keys in this order (first
    match wins):

    - ``{collection_name}.{key}`` as a flat key
    - ``{collection_name}`` -> ``{key}`` as a nested mapping
    - ``{key}``

    Parameters
    ----------
    config:
        The mapping to search, by default the bound configuration.
    key:
        The setting name. Dotted keys are looked up flat first, then as a
        path through nested mappings.
    collection_name:
        The name of the class declaring the setting.

    Returns
    -------
    Any
        The first matching value found in ``config``.

    Raises
    ------
    KeyError
        If none of the candidate keys are present in ``config``.
    """
    if config is None:
        config = get_config()

    if collection_name:
        try:
            flat_key = f'{collection_name}.{key}'
            return resolve_config_value(config=config, key=flat_key)
        except KeyError:
            pass

    # Flat keys > nested keys
    if key in config:
        return config[key]

    parts = key.split('.', maxsplit=1)
    if len(parts) == 2:
        collection, restkey = parts
        nested = config.get(collection)
        if isinstance(nested, Mapping):
            return resolve_config_value(config=nested, key=restkey)  # pyright: ignore[reportUnknownArgumentType]

    raise KeyError(f'No config value for {key}')


def ensure_required_config_values(config: Mapping[str, Any] | None = None) -> None:
    """Validate a configuration mapping against registered settings.

    For each registered :class:`~assoc.config.registry.ConfigProperty` the
    value is resolved from ``config`` with :func:`resolve_config_value`.
    Required settings that are missing and values that do not match the
    registered ``expected_type`` are collected, and a single
    :class:`ConfigValidationError` lists all of them.

    Parameters
    ----------
    config:
        The mapping to validate, by default the bound configuration.

    Raises
    ------
    ConfigValidationError
        When required settings are missing or a type mismatch is found.
    """
    if config is None:
        config = get_config()

    errors: list[str] = []

    for entry in all_registered():
        try:
            value = resolve_config_value(
                config=config,
                key=entry.key,
                collection_name=entry.collection_name,
            )
        except KeyError as exc:
            if entry.required:
                errors.append(str(exc))
            continue

        if entry.expected_type and not isinstance(value, entry.expected_type):
            errors.append(
                f'Type mismatch for {entry.collection_name}.{entry.key}: '
                f'expected {entry.expected_type.__name__}, '
                f'got {type(value).__name__}'
            )

    if errors:
        raise ConfigValidationError('Configuration validation failed:\n' + '\n'.join(errors))
