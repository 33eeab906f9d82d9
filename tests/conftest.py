from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_config_and_registry() -> Iterator[None]:
    """Restore module-level state of the config modules around each test."""
    import assoc.config.registry as registry
    import assoc.config.validation as validation

    # Settings declared by library classes are registered at import time
    registered = list(registry._REGISTRY)  # pyright: ignore[reportPrivateUsage]
    validation._CONFIG_CONTEXT.clear()  # pyright: ignore[reportPrivateUsage]

    yield

    registry._REGISTRY[:] = registered  # pyright: ignore[reportPrivateUsage]
    validation._CONFIG_CONTEXT.clear()  # pyright: ignore[reportPrivateUsage]
