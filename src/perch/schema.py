"""Schema validation — per-field value checks with aggregated errors.

A schema maps field names to field specs in JSON Schema vocabulary::

    schema = {
        "name": {"type": "string", "required": True},
        "page": {"type": "integer", "minimum": 1},
    }
    errors = validate(schema, {"name": 123, "page": 0})
    if errors:
        # errors.codes == ["rest_invalid_type", "rest_out_of_bounds"]
        ...

Only fields present in *data* are checked. ``required: True`` is not
enforced against absent fields unless ``enforce_required=True`` is
passed, because endpoint argument schemas apply required-ness upstream.

Value checks are delegated to ``jsonschema`` (Draft 2020-12). Field-spec
keys that describe an endpoint argument rather than a value constraint
(``default``, ``sanitize_callback``, boolean ``required``...) are
stripped before the spec reaches the validator.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, best_match

# Argument metadata that is not a JSON Schema value constraint
_ARGUMENT_KEYS = frozenset({
    "arg_options",
    "context",
    "default",
    "description",
    "readonly",
    "sanitize_callback",
    "validate_callback",
})

# JSON Schema keyword → error code
_KEYWORD_CODES: dict[str, str] = {
    "type": "rest_invalid_type",
    "minimum": "rest_out_of_bounds",
    "maximum": "rest_out_of_bounds",
    "exclusiveMinimum": "rest_out_of_bounds",
    "exclusiveMaximum": "rest_out_of_bounds",
    "multipleOf": "rest_out_of_bounds",
    "enum": "rest_not_in_enum",
    "const": "rest_not_in_enum",
    "pattern": "rest_invalid_pattern",
    "minLength": "rest_too_short",
    "minItems": "rest_too_short",
    "minProperties": "rest_too_short",
    "maxLength": "rest_too_long",
    "maxItems": "rest_too_long",
    "maxProperties": "rest_too_long",
    "format": "rest_invalid_format",
    "additionalProperties": "rest_additional_properties_forbidden",
    "uniqueItems": "rest_duplicate_items",
    "required": "rest_property_required",
}

DEFAULT_CODE = "rest_invalid_param"
INVALID_SCHEMA_CODE = "rest_invalid_schema"
MISSING_PARAM_CODE = "rest_missing_param"


@dataclass(frozen=True, slots=True)
class FieldError:
    """One failing field: error code, message and context."""

    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def param(self) -> str | None:
        return self.context.get("param")


@dataclass(frozen=True, slots=True)
class ValidationErrorSet:
    """Ordered field errors from a single validation pass.

    An empty set means the data passed. The set is truthy when it holds
    errors, so the natural check reads::

        errors = validate(schema, data)
        if errors:
            return errors.as_dict()
    """

    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    def for_field(self, name: str) -> list[FieldError]:
        """Errors whose context names *name*."""
        return [e for e in self.errors if e.param == name]

    def as_dict(self) -> dict[str, list[str]]:
        """Field name → messages, in first-seen order."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            result.setdefault(error.param or "", []).append(error.message)
        return result

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)


def validate_value(value: Any, spec: Mapping[str, Any], field_name: str) -> FieldError | None:
    """Validate one value against its field spec.

    Returns ``None`` when the value passes, otherwise a ``FieldError``
    for the most relevant failure, as ranked by ``jsonschema``'s
    ``best_match``. The message is the underlying validator message
    without the field prefix; ``validate()`` adds it. A *spec* that is
    not a mapping yields ``rest_invalid_schema``.
    """
    if not isinstance(spec, Mapping):
        return FieldError(
            code=INVALID_SCHEMA_CODE,
            message=f"Invalid schema for {field_name}: expected a mapping, got {type(spec).__name__}",
            context={"param": field_name},
        )
    constraints = _constraints(spec)
    try:
        Draft202012Validator.check_schema(constraints)
    except SchemaError as exc:
        return FieldError(
            code=INVALID_SCHEMA_CODE,
            message=f"Invalid schema for {field_name}: {exc.message}",
            context={"param": field_name},
        )

    validator = Draft202012Validator(
        constraints,
        format_checker=Draft202012Validator.FORMAT_CHECKER,
    )
    error = best_match(validator.iter_errors(value))
    if error is None:
        return None
    return FieldError(
        code=_KEYWORD_CODES.get(str(error.validator), DEFAULT_CODE),
        message=error.message,
        context={"param": field_name},
    )


def validate(
    schema: Mapping[str, Mapping[str, Any]],
    data: Mapping[str, Any],
    *,
    enforce_required: bool = False,
) -> ValidationErrorSet:
    """Validate *data* against a per-field *schema*.

    Every field present in both *schema* and *data* is checked; the
    pass is not fail-fast, so the returned set holds one entry per
    invalid field, in schema order.

    Args:
        schema: Field name → field spec.
        data: Field name → value. Keys missing from *schema* are ignored.
        enforce_required: Also report fields whose spec has
            ``required: True`` but which are absent from *data*
            (code ``rest_missing_param``). Off by default.

    Returns:
        A ``ValidationErrorSet``; empty on success.
    """
    errors: list[FieldError] = []

    for name, spec in schema.items():
        if name not in data:
            if enforce_required and isinstance(spec, Mapping) and spec.get("required") is True:
                errors.append(
                    FieldError(
                        code=MISSING_PARAM_CODE,
                        message=f"{name}: Missing parameter",
                        context={"param": name},
                    )
                )
            continue

        error = validate_value(data[name], spec, name)
        if error is not None:
            errors.append(
                FieldError(
                    code=error.code,
                    message=f"{name}: {error.message}",
                    context={"param": name},
                )
            )

    return ValidationErrorSet(tuple(errors))


def _constraints(spec: Mapping[str, Any]) -> dict[str, Any]:
    """Drop argument metadata, keeping only value constraints."""
    constraints: dict[str, Any] = {}
    for key, value in spec.items():
        if key in _ARGUMENT_KEYS:
            continue
        # Boolean ``required`` marks the argument itself, not object properties
        if key == "required" and isinstance(value, bool):
            continue
        constraints[key] = value
    return constraints
