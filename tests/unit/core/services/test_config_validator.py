from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.
"""

import pytest

from treesizer.core.services.validator import validate_config
from treesizer.infra.logging import LEVEL_NAMES


def test_valid_config_passes_unchanged(mock_config_dict) -> None:
    clean, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert clean == mock_config_dict


def test_non_dict_falls_back_to_defaults() -> None:
    clean, warnings = validate_config("nope")

    assert clean["hidden_detection"] == "attribute"
    assert len(warnings) == 1

    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_coercions_emit_warnings(mock_config_dict) -> None:
    mock_config_dict.update({
        "collect_diagnostics": "no",
        "max_workers": "3",
        "hidden_detection": "DOTFILE",
        "log_level": "debug",
    })

    clean, warnings = validate_config(mock_config_dict)

    assert clean["collect_diagnostics"] is False
    assert clean["max_workers"] == 3
    assert clean["hidden_detection"] == "dotfile"
    assert clean["log_level"] == "DEBUG"
    assert len(warnings) == 2


@pytest.mark.parametrize(
    "field, value",
    [
        ("max_workers", 0),
        ("max_workers", True),
        ("max_workers", "²"),
        ("max_workers", "0"),
        ("max_workers", "-3"),
        ("hidden_detection", "sparkles"),
        ("log_level", "LOUD"),
        ("root_path", 42),
        ("collect_diagnostics", "maybe"),
    ],
)
def test_invalid_values_reset_to_defaults(mock_config_dict, field, value) -> None:
    from treesizer.domain.config import get_default_config

    mock_config_dict[field] = value

    clean, warnings = validate_config(mock_config_dict)
    assert clean[field] == get_default_config()[field]
    assert len(warnings) == 1

    with pytest.raises((TypeError, ValueError)):
        validate_config(mock_config_dict, strict=True)


def test_unknown_keys_are_dropped(mock_config_dict) -> None:
    mock_config_dict["extra"] = 1
    clean, _ = validate_config(mock_config_dict)
    assert "extra" not in clean


@pytest.mark.parametrize("level", LEVEL_NAMES)
def test_every_logging_level_name_is_accepted(mock_config_dict, level) -> None:
    mock_config_dict["log_level"] = level.lower()

    clean, warnings = validate_config(mock_config_dict, strict=True)
    assert clean["log_level"] == level
    assert warnings == []
