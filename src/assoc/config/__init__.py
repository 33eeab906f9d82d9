# pyright: reportUnusedImport=false
from assoc.config.decorator import config_setting, resolve_setting
from assoc.config.loader import bind_config_file, load_config_file
from assoc.config.registry import ConfigProperty, all_registered
from assoc.config.validation import (
    ConfigValidationError,
    bind_config_values,
    clear_config_values,
    ensure_required_config_values,
    get_config,
    resolve_config_value,
)
