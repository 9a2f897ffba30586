"""Configuration validation."""

import logging
from pathlib import Path
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_COMMAND_FALLBACKS = ['emulator_path', 'emulator_params', 'none']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    for section in ('launchbox', 'logging'):
        if not isinstance(config.get(section, {}), dict):
            errors.append(f"{section} must be a mapping")

    if not errors:
        # Validate launchbox section
        errors.extend(_validate_launchbox(config.get('launchbox', {})))

        # Validate logging section
        errors.extend(_validate_logging(config.get('logging', {})))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_launchbox(section: Dict[str, Any]) -> List[str]:
    """Validate launchbox provider section."""
    errors = []

    installdir = section.get('installdir')
    if installdir is not None:
        if not isinstance(installdir, str) or not installdir.strip():
            errors.append("launchbox.installdir must be a non-empty string path or null")
        elif not Path(installdir).expanduser().is_dir():
            # Not fatal: the provider reports a missing installation on its own
            logger.warning(f"launchbox.installdir does not exist: {installdir}")

    fallback = section.get('command_fallback', 'emulator_path')
    if fallback not in VALID_COMMAND_FALLBACKS:
        errors.append(
            f"launchbox.command_fallback must be one of: {', '.join(VALID_COMMAND_FALLBACKS)}"
        )

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    # Validate level
    level = section.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}")

    # Validate console flag
    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    # Validate optional log file
    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
