"""Rule serialization.

Rules are persisted as an opaque JSON blob beside the owning task definition
and decoded again on every read. The encoding always carries the ``type``
discriminator and omits optional fields that are unset, so a decode/encode
cycle reproduces the stored payload.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from recurring_tasks.recurrence.errors import InvalidRuleError
from recurring_tasks.recurrence.models import RULE_CLASSES, RecurrenceRule

_RULE_ADAPTER: TypeAdapter[RecurrenceRule] = TypeAdapter(RecurrenceRule)

_TAG_ERRORS = {"union_tag_invalid", "union_tag_not_found"}


def _to_invalid_rule(exc: ValidationError) -> InvalidRuleError:
    errors = exc.errors()
    details = [f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in errors]
    if any(err["type"] in _TAG_ERRORS for err in errors):
        return InvalidRuleError("UNKNOWN_TYPE", details)
    return InvalidRuleError("SCHEMA_VIOLATION", details)


def rule_to_dict(rule: RecurrenceRule) -> dict[str, Any]:
    """Encode a rule as a JSON-compatible dict with camelCase keys."""
    return _RULE_ADAPTER.dump_python(rule, mode="json", by_alias=True, exclude_none=True)


def rule_to_json(rule: RecurrenceRule) -> str:
    """Encode a rule as a JSON string with camelCase keys."""
    return _RULE_ADAPTER.dump_json(rule, by_alias=True, exclude_none=True).decode()


def rule_from_dict(payload: dict[str, Any]) -> RecurrenceRule:
    """Decode a stored rule payload.

    Raises:
        InvalidRuleError: If the payload matches no rule variant
    """
    if not isinstance(payload, dict):
        raise InvalidRuleError("SCHEMA_VIOLATION", [f"expected an object, got {type(payload).__name__}"])
    try:
        return _RULE_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise _to_invalid_rule(e) from e


def rule_from_json(text: str | bytes) -> RecurrenceRule:
    """Decode a rule from its JSON text.

    Raises:
        InvalidRuleError: If the text is not JSON or matches no rule variant
    """
    try:
        return _RULE_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise _to_invalid_rule(e) from e


def coerce_rule(value: RecurrenceRule | dict[str, Any] | str) -> RecurrenceRule:
    """Accept a rule model, a decoded payload, or JSON text and return a rule model."""
    if isinstance(value, RULE_CLASSES):
        return value  # type: ignore[return-value]
    if isinstance(value, str | bytes):
        return rule_from_json(value)
    return rule_from_dict(value)
