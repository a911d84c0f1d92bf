"""
Error types and validation helpers for the combat engine.

Only two failure classes exist. Data-integrity problems (an id missing from
the static tables) are recovered locally and reported as warnings by the
content repository. Invariant violations (a combatant or floor the caller
built incorrectly) are raised as ``CombatEngineError`` subclasses so the
caller can treat the battle state as corrupted.
"""

from typing import Any, Optional

from pydantic import ValidationError

from .logging import log_error


class CombatEngineError(Exception):
    """Base class for every error raised by the combat engine."""


class CombatStateError(CombatEngineError):
    """Raised when a combatant record violates the engine's input contract."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class InvalidFloorError(CombatEngineError):
    """Raised when the floor index is not a positive integer."""


class ContentError(CombatEngineError):
    """Raised when a data-table file is missing or malformed."""


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================


def require_floor(value: Any, context: Optional[dict[str, Any]] = None) -> int:
    """
    Validates that a value is a usable floor index (integer >= 1).

    Args:
        value: The value to validate
        context: Additional context for logging

    Returns:
        int: The validated floor index

    Raises:
        InvalidFloorError: If validation fails
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        log_error(
            f"floor must be an integer >= 1, got: {value!r}",
            {**(context or {}), "value": value, "type": type(value).__name__},
        )
        raise InvalidFloorError(f"Invalid floor: {value!r}")
    return value


def require_model(
    value: Any,
    model_class: type,
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """
    Validates that a value is (or can be validated into) a pydantic model.

    Args:
        value: The value to validate, either a model instance or a mapping
        model_class: The pydantic model class expected
        param_name: Human-readable parameter name for error messages
        context: Additional context for logging

    Returns:
        The validated model instance

    Raises:
        CombatStateError: If validation fails
    """
    if isinstance(value, model_class):
        return value
    try:
        return model_class.model_validate(value)
    except ValidationError as e:
        details = {
            **(context or {}),
            "param_name": param_name,
            "expected_type": model_class.__name__,
            "errors": e.error_count(),
        }
        log_error(f"{param_name} is not a valid {model_class.__name__}", details)
        raise CombatStateError(
            f"Invalid {param_name}: {e.errors(include_url=False)}", details
        ) from e
