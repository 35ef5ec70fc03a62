from __future__ import annotations

"""
Configuration Validation Service.

Normalizes an untrusted configuration dictionary into strictly typed scan
settings. Invalid values are replaced with defaults and reported as
warnings, or rejected outright in strict mode.
"""

import logging
from typing import Any, Dict, List, Tuple

from treesizer.domain.config import get_default_config
from treesizer.domain.constants import HIDDEN_DETECTION_MODES
from treesizer.infra.logging.config import LEVEL_NAMES

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in ("root_path", "diagnostics_path", "log_file"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["collect_diagnostics"] = _as_bool(
        merged.get("collect_diagnostics"), defaults["collect_diagnostics"],
        "collect_diagnostics", warnings, strict,
    )
    merged["max_workers"] = _as_positive_int(
        merged.get("max_workers"), defaults["max_workers"], "max_workers", warnings, strict
    )
    merged["hidden_detection"] = _as_choice(
        merged.get("hidden_detection"), defaults["hidden_detection"],
        HIDDEN_DETECTION_MODES, "hidden_detection", warnings, strict,
    )
    merged["log_level"] = _as_choice(
        merged.get("log_level"), defaults["log_level"],
        LEVEL_NAMES, "log_level", warnings, strict,
    ).upper()

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _fail(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()
    _fail(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _fail(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if isinstance(value, bool):
        _fail(f"Invalid field '{field}': expected int, received bool.", warnings, strict)
        return fallback
    if isinstance(value, int):
        if value >= 1:
            return value
        _fail(f"Invalid field '{field}': must be >= 1, received {value}.", warnings, strict, ValueError)
        return fallback
    if isinstance(value, str) and not strict and value.strip().isdecimal():
        number = int(value)
        if number >= 1:
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return number
    _fail(f"Invalid field '{field}': expected int, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if isinstance(value, str):
        v = value.strip()
        for choice in choices:
            if v.lower() == choice.lower():
                return choice
        _fail(
            f"Invalid field '{field}': '{value}' is not one of {', '.join(choices)}.",
            warnings, strict, ValueError,
        )
        return fallback
    _fail(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback
