"""Configuration validation for chromedriver-installer.

Unknown keys produce warnings (with a suggestion when one is close enough);
values of the wrong type or an unknown platform produce errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from typing import Any, List, Optional, Set

from chromedriver_installer.bootstrap.platform import SUPPORTED_PLATFORMS
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


# Keys whose values are strings (numbers accepted for version)
STRING_KEYS: Set[str] = {
    "version",
    "platform",
    "binary",
    "destination",
    "zip_file",
    "bin_dir",
    "catalog_url",
}

BOOL_KEYS: Set[str] = {
    "use_zip_file",
}

VALID_KEYS: Set[str] = STRING_KEYS | BOOL_KEYS


def _suggest_key(key: str, valid_keys: Set[str]) -> Optional[str]:
    matches = get_close_matches(key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def validate_config(data: Any, source: str) -> List[ConfigValidationIssue]:
    """Validate a configuration dictionary.

    Args:
        data: Parsed config mapping.
        source: Where the mapping came from, for messages.

    Returns:
        List of validation issues, empty when the config is clean.
    """
    issues: List[ConfigValidationIssue] = []

    if not isinstance(data, dict):
        issues.append(ConfigValidationIssue(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return issues

    for key, value in data.items():
        if key not in VALID_KEYS:
            suggestion = _suggest_key(str(key), VALID_KEYS)
            message = f"Unknown config key '{key}'"
            if suggestion:
                message += f" (did you mean '{suggestion}'?)"
            issues.append(ConfigValidationIssue(
                message=message,
                source=source,
                severity=ValidationSeverity.WARNING,
                key=str(key),
                suggestion=suggestion,
            ))
            continue

        if value is None:
            continue

        if key in BOOL_KEYS and not isinstance(value, bool):
            issues.append(ConfigValidationIssue(
                message=f"'{key}' must be true or false, got {value!r}",
                source=source,
                severity=ValidationSeverity.ERROR,
                key=key,
            ))
        elif key == "version" and not isinstance(value, (str, int)):
            issues.append(ConfigValidationIssue(
                message=f"'version' must be a string or integer, got {type(value).__name__}",
                source=source,
                severity=ValidationSeverity.ERROR,
                key=key,
            ))
        elif key in STRING_KEYS and key != "version" and not isinstance(value, str):
            issues.append(ConfigValidationIssue(
                message=f"'{key}' must be a string, got {type(value).__name__}",
                source=source,
                severity=ValidationSeverity.ERROR,
                key=key,
            ))
        elif key == "platform" and value not in SUPPORTED_PLATFORMS:
            suggestion = _suggest_key(value, set(SUPPORTED_PLATFORMS))
            issues.append(ConfigValidationIssue(
                message=(
                    f"Unknown platform '{value}', supported platforms are: "
                    f"{', '.join(sorted(SUPPORTED_PLATFORMS))}"
                ),
                source=source,
                severity=ValidationSeverity.ERROR,
                key=key,
                suggestion=suggestion,
            ))

    for issue in issues:
        if issue.severity == ValidationSeverity.WARNING:
            LOGGER.warning(f"{issue.source}: {issue.message}")

    return issues

