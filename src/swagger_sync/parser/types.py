"""Type-expression resolution for definition fields, parameters and responses.

Every resolver returns TypeScript text: the type expression used in
declarations, the initial value used in value classes, and the name of the
definition a field depends on.
"""

import math
import re

from .naming import canonical_name

REF_PREFIX = "#/definitions/"
DEFS_NAMESPACE = "defs"
ENVELOPE_NAMES = ("ResultDTO",)

ARRAY = "array"
INTEGER = "integer"
NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def resolve_ref(ref: str) -> str:
    """Resolve ``#/definitions/ResultDTO«User»`` to the definition name ``User``."""
    name = ref[len(REF_PREFIX):]

    for envelope in ENVELOPE_NAMES:
        opening = f"{envelope}«"
        if name.startswith(opening) and name.endswith("»"):
            return canonical_name(name[len(opening):-1])

    return canonical_name(name)


def qualified(name: str) -> str:
    return f"{DEFS_NAMESPACE}.{name}"


def enum_type(values: list) -> str:
    """Union of numeric literals for parseable values and quoted literals for all values."""
    numbers = [num for num in (_as_number(value) for value in values) if num is not None]
    quoted = [f"'{value}'" for value in values]
    return " | ".join(numbers + quoted)


def array_type(items: dict | None) -> str:
    items = items or {}
    item_type = items.get("type")

    if item_type == BOOLEAN:
        return "boolean[]"
    if item_type in (NUMBER, INTEGER):
        return "number[]"
    if item_type == STRING:
        return "string[]"
    if items.get("$ref"):
        return f"{qualified(resolve_ref(items['$ref']))}[]"
    return "any[]"


def field_type(
    type_: str | None,
    enum: list | None = None,
    items: dict | None = None,
    ref: str | None = None,
) -> str:
    """Type expression for a definition field or a response schema."""
    if enum:
        return enum_type(enum)
    if ref:
        return qualified(resolve_ref(ref))
    if type_ == ARRAY:
        return array_type(items)
    if type_ == INTEGER:
        return NUMBER
    return type_ or "any"


def field_initial_value(type_: str | None, ref: str | None = None, namespaced: bool = False) -> str:
    """Initial value expression; empty when the field is left unset."""
    if ref:
        name = resolve_ref(ref)
        return f"new {qualified(name) if namespaced else name}()"
    if type_ == ARRAY:
        return "[]"
    if type_ == STRING:
        return "''"
    return ""


def field_dep(ref: str | None = None, items: dict | None = None, owner: str | None = None) -> str:
    """Name of the definition this field depends on, or ``""``.

    A reference back to ``owner`` (the enclosing definition) is not a dependency.
    """
    for candidate in (ref, (items or {}).get("$ref")):
        if candidate:
            name = resolve_ref(candidate)
            if name != owner:
                return name
    return ""


def parameter_type(
    type_: str | None,
    items: dict | None = None,
    schema: dict | None = None,
) -> str:
    """Type expression for an endpoint parameter, which may carry its own ``schema``."""
    schema = schema or {}

    if schema.get("$ref"):
        return qualified(resolve_ref(schema["$ref"]))
    if schema.get("type") and schema["type"] != ARRAY:
        return schema["type"]
    if type_ == ARRAY:
        return array_type(items)
    if type_ == INTEGER:
        return NUMBER
    if schema.get("type") == ARRAY:
        item_type = (schema.get("items") or {}).get("type")
        if item_type in (NUMBER, INTEGER):
            return "number[]"
        if item_type == STRING:
            return "string[]"
        return "any[]"
    return type_ or "any"


def body_params(parameters: list) -> str:
    """Intersect every body parameter into one composite type."""
    return " & ".join(param.final_type for param in parameters if param.location == "body")


def params_type(parameters: list) -> str:
    """Render the ``Params`` class for the non-body parameters of an endpoint."""
    lines = []
    for param in parameters:
        if param.location == "body":
            continue
        if param.description:
            lines.append(f"/**\n * {param.description}\n */")
        optional = "" if param.required else "?"
        lines.append(f"{param.name}{optional}: {param.final_type};")

    body = "\n".join(f"  {line}" for line in "\n".join(lines).split("\n")) if lines else ""
    return f"class Params {{\n{body}\n}}"


def _as_number(value) -> str | None:
    text = str(value).strip()
    if _RADIX.fullmatch(text):
        number = float(int(text, 0))
    elif _DECIMAL.fullmatch(text):
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return str(int(number))
    return repr(number)
