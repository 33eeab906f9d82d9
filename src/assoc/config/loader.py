import json
import tomllib
from logging import getLogger
from os import PathLike
from pathlib import Path
from typing import Any, Mapping, cast

from assoc.config.validation import bind_config_values

try:
    import yaml  # type: ignore
except ImportError:
    yaml = None  # type: ignore

_logger = getLogger(__name__)


def load_config_file(path: str | PathLike[str] | Path) -> Mapping[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Config file not found: {path}')

    config = None
    text = path.read_text(encoding='utf-8')
    suffix = path.suffix.lower()
    match suffix:
        case '.yaml' | '.yml':
            if yaml is None:
                raise RuntimeError('PyYAML is required to load YAML config files')
            config = yaml.safe_load(text)
        case '.json':
            config = json.loads(text)
        case '.toml':
            config = tomllib.loads(text)
        case _:
            raise RuntimeError(
                f'Unsupported config file type: {suffix}, supported extensions: .yaml, .yml, .json, .toml'
            )

    if not isinstance(config, Mapping):
        raise RuntimeError('Config file must contain a mapping at the top level')

    return cast(Mapping[str, Any], config)


def bind_config_file(path: str | PathLike[str] | Path) -> Mapping[str, Any]:
    """Load a settings file and bind its top level mapping."""
    config = load_config_file(path)
    bind_config_values(**config)
    _logger.info('Bound %d config values from %s', len(config), path)
    return config
