from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Any

from src.library.runtime.config.config_data import ConfigData
from src.library.runtime.config.config_template import load_config


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


_default_context = AppContext(config=load_config())

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_dict_merge(base_dict: dict[str, Any], override_dict: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override_dict`` into a copy of ``base_dict``."""
    result = base_dict.copy()
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value
    return result


@contextmanager
def with_context(config_override: ConfigData | dict[str, Any] | None = None):
    """Temporarily override the application configuration.

    Overrides are merged into the current configuration, so a partial dict only
    replaces the keys it names.

    Example:
        with with_context({"database": {"url": "sqlite+aiosqlite:///:memory:"}}):
            assert get_config().database.url.endswith(":memory:")
    """
    if config_override is None:
        yield
        return

    current = get_config().model_dump()
    if isinstance(config_override, ConfigData):
        override = config_override.model_dump(exclude_unset=True)
    elif isinstance(config_override, dict):
        override = config_override
    else:
        raise ValueError(
            f"config_override must be ConfigData, dict or None, got {type(config_override)}"
        )

    merged = ConfigData.model_validate(_recursive_dict_merge(current, override))
    token = set_context(replace(get_context(), config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
