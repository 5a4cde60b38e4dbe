"""Identifier derivation for endpoints, modules and definitions.

Endpoint names are built from the HTTP method and the part of the path
that is not shared by every endpoint of the same module, so siblings get
short names that are still unique within the module.
"""

import re

from pydantic import BaseModel

GENERIC_OPEN = "«"

_PATH_PARAM = re.compile(r"^\{(.+)\}$")
_FE_OWNERS = re.compile(r"前端[:：]\s*\[([^\]]*)\]")
_BE_OWNERS = re.compile(r"后端[:：]\s*([^;；]*)[;；]")


class Owners(BaseModel):
    """Owner lists parsed out of a tag string."""

    fe_owners: list[str] = []
    be_owners: list[str] = []


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def canonical_name(raw: str) -> str:
    """Map a possibly generic type name (``Page«User»``) to its base name (``Page``)."""
    if GENERIC_OPEN in raw:
        return raw[: raw.index(GENERIC_OPEN)]
    return raw


def get_max_same_path(paths: list[str], same_path: str = "") -> str:
    """Return the leading segments shared by every path, as ``/a/b``.

    Paths are given without their leading slash. Peeling stops as soon as
    one path has no further segment or the first segments diverge.
    """
    while paths and all("/" in path for path in paths):
        heads = [path.split("/", 1) for path in paths]
        first = heads[0][0]
        if any(head[0] != first for head in heads):
            break
        same_path = f"{same_path}/{first}"
        paths = [head[1] for head in heads]
    return same_path


def get_identifier_from_url(url: str, method: str, same_path: str = "") -> str:
    """Build an endpoint name like ``getByIdProfile`` from its path."""
    rest = url[len(same_path):]

    parts = []
    for segment in rest.split("/"):
        match = _PATH_PARAM.match(segment)
        if match:
            parts.append("By" + upper_first(match.group(1)))
        else:
            parts.append(upper_first(segment))
    return method + "".join(parts)


def transform_description(description: str) -> str:
    """Turn a tag description such as ``UserController 用户管理`` into ``userController``."""
    word = description.split(" ", 1)[0]
    word = re.sub(r"\W", "", word)
    return word[:1].lower() + word[1:]


def parse_owners(text: str | None) -> Owners:
    """Parse ``前端:[a,b]`` and ``后端:c,d;`` markers. Missing markers give empty lists."""
    if not text:
        return Owners()

    fe_match = _FE_OWNERS.search(text)
    be_match = _BE_OWNERS.search(text)
    return Owners(
        fe_owners=_split_names(fe_match.group(1)) if fe_match else [],
        be_owners=_split_names(be_match.group(1).strip("[]")) if be_match else [],
    )


def format_description(description: str) -> str:
    """Prefix continuation lines with ``* `` so they sit inside a doc comment."""
    lines = description.split("\n")
    return "\n".join([lines[0]] + [f"* {line}" for line in lines[1:]])


def _split_names(raw: str) -> list[str]:
    return [name.strip() for name in re.split(r"[,，]", raw) if name.strip()]
