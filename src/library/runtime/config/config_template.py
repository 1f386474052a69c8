"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.library.runtime.config.config_data import ConfigData
from src.library.runtime.config.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str, environ: dict[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    env = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return env.get(var_name, default)

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = env.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = env.get(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def environment_overrides(environment: str) -> dict[str, str]:
    """Collect ``<ENVIRONMENT>_``-prefixed variables with the prefix stripped.

    ``TEST_DATABASE_URL`` becomes ``DATABASE_URL`` when running under the
    ``test`` environment.
    """
    prefix = f"{environment.upper()}_"
    return {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }


def load_templated_yaml(
    file_path: Path, env_settings: EnvironmentVariables | None = None
) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_settings: Environment selection; read from the process when omitted

    Returns:
        Parsed and validated configuration

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    env_settings = env_settings or EnvironmentVariables()
    content = Path(file_path).read_text()

    logger.info("Loading configuration for environment: {}", env_settings.environment)
    overrides = environment_overrides(env_settings.environment)
    if overrides:
        logger.debug("Applying environment-specific overrides: {}", sorted(overrides))

    substituted_content = substitute_env_vars(content, {**os.environ, **overrides})

    try:
        loaded = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file {file_path} is empty or malformed")

    config_data = loaded.get("config") or {}
    app_section = config_data.get("app") or {}
    app_section.setdefault("environment", env_settings.environment)
    config_data["app"] = app_section
    try:
        return ConfigData.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(env_settings: EnvironmentVariables | None = None) -> ConfigData:
    """Load the configuration named by ``APP_CONFIG_FILE``, or defaults when absent."""
    env_settings = env_settings or EnvironmentVariables()
    path = Path(env_settings.config_file)
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        return ConfigData.model_validate(
            {"app": {"environment": env_settings.environment}}
        )
    return load_templated_yaml(path, env_settings)
