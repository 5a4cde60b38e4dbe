"""Swagger 2.0 document parser.

Builds a normalized Snapshot (modules of endpoints plus type definitions)
from a raw Swagger document. The document is not validated; missing keys
resolve to empty values.
"""

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import ValidationError

from swagger_sync.errors import DefinitionCollapseError

from .base import Definition, Interface, Mod, Parameter, Property, Schema, Snapshot
from .naming import (
    canonical_name,
    format_description,
    get_identifier_from_url,
    get_max_same_path,
    parse_owners,
    transform_description,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "head", "options")


class CollapsePolicy(str, Enum):
    """What to do when several raw definitions share one canonical name."""

    FIRST_WINS = "first"
    LAST_WINS = "last"
    REJECT = "reject"


def parse_openapi(file_path: Path, policy: CollapsePolicy = CollapsePolicy.FIRST_WINS) -> Snapshot:
    """Parse a Swagger file (YAML or JSON) into a Snapshot."""
    text = file_path.read_text(encoding="utf-8")
    doc = yaml.safe_load(text)
    return build_snapshot(doc, policy)


def build_snapshot(doc: dict, policy: CollapsePolicy = CollapsePolicy.FIRST_WINS) -> Snapshot:
    """Build a Snapshot from an already loaded Swagger document."""
    interfaces = _parse_interfaces(doc.get("paths") or {})

    mods: list[Mod] = []
    for tag in doc.get("tags") or []:
        mod = _build_mod(tag, interfaces)
        if any(existing.name == mod.name for existing in mods):
            logger.warning("Module %s already built from an earlier tag, skipping %s", mod.name, tag.get("name"))
            continue
        mods.append(mod)

    definitions = _parse_definitions(doc.get("definitions") or {}, policy)
    return Snapshot(mods=mods, definitions=definitions)


def _parse_interfaces(paths: dict) -> list[Interface]:
    result = []
    for path, methods in paths.items():
        for method, operation in (methods or {}).items():
            if method.lower() not in HTTP_METHODS:
                continue
            try:
                result.append(_parse_interface(path, method.lower(), operation or {}))
            except ValidationError as e:
                logger.warning("Skipping %s %s: %s", method.upper(), path, e)
    return result


def _parse_interface(path: str, method: str, operation: dict) -> Interface:
    # YAML loads unquoted status codes as ints
    responses = {str(code): value for code, value in (operation.get("responses") or {}).items()}
    response = (responses.get("200") or {}).get("schema") or {}

    return Interface(
        method=method,
        path=path,
        summary=operation.get("summary") or "",
        description=operation.get("description") or "",
        tags=operation.get("tags") or [],
        consumes=operation.get("consumes") or [],
        operation_id=operation.get("operationId"),
        parameters=_parse_parameters(operation.get("parameters") or []),
        response=Schema.model_validate(response),
    )


def _parse_parameters(params: list[dict]) -> list[Parameter]:
    result: list[Parameter] = []
    seen = set()
    for p in params:
        name = p.get("name", "")
        if name in seen:
            continue
        seen.add(name)

        data = dict(p)
        if data.get("description"):
            data["description"] = format_description(data["description"])
        result.append(Parameter.model_validate(data))
    return result


def _build_mod(tag: dict, interfaces: list[Interface]) -> Mod:
    tag_name = tag.get("name") or ""
    members = [inter.model_copy(deep=True) for inter in interfaces if tag_name in inter.tags]

    same_path = get_max_same_path([inter.path[1:] for inter in members])

    unique: list[Interface] = []
    names = set()
    for inter in members:
        inter.name = get_identifier_from_url(inter.path, inter.method, same_path)
        inter.same_path = same_path
        if inter.name in names:
            logger.debug("Duplicate endpoint name %s in tag %s, keeping the first", inter.name, tag_name)
            continue
        names.add(inter.name)
        unique.append(inter)

    owners = parse_owners(tag_name)
    return Mod(
        name=transform_description(tag.get("description") or tag_name),
        description=tag_name,
        interfaces=unique,
        fe_owners=owners.fe_owners,
        be_owners=owners.be_owners,
    )


def _parse_definitions(raw_definitions: dict, policy: CollapsePolicy) -> list[Definition]:
    by_name: dict[str, Definition] = {}
    raw_names: dict[str, list[str]] = {}

    for raw_name, raw_def in raw_definitions.items():
        name = canonical_name(raw_name)
        raw_names.setdefault(name, []).append(raw_name)

        try:
            definition = _parse_definition(name, raw_def or {})
        except ValidationError as e:
            logger.warning("Skipping definition %s: %s", raw_name, e)
            continue

        if name not in by_name:
            by_name[name] = definition
            continue

        if policy == CollapsePolicy.REJECT:
            raise DefinitionCollapseError(name, raw_names[name])
        logger.warning(
            "Definition %s collapses to %s, keeping the %s one",
            raw_name, name, policy.value,
        )
        if policy == CollapsePolicy.LAST_WINS:
            by_name[name] = definition

    return list(by_name.values())


def _parse_definition(name: str, raw_def: dict) -> Definition:
    required = raw_def.get("required") or []
    properties = [
        Property.model_validate({**(prop or {}), "name": prop_name, "required": prop_name in required})
        for prop_name, prop in (raw_def.get("properties") or {}).items()
    ]
    return Definition(name=name, description=raw_def.get("description"), properties=properties)
