"""Dependency-impact graph over the definitions and modules of a snapshot.

Edges point from a dependency to its dependents: if ``User`` has a field of
type ``Address``, changing ``Address`` impacts ``User``. The graph is an
index keyed by definition name and is rebuilt for every snapshot.
"""

import logging
from collections import deque

from pydantic import BaseModel

from swagger_sync.errors import UnresolvedReferenceError
from swagger_sync.parser.base import Definition, Mod

logger = logging.getLogger(__name__)


class DefinitionImpact(BaseModel):
    """Definitions and modules affected by a change to one definition."""

    name: str
    direct_dependents: list[str] = []
    transitive_dependents: list[str] = []
    direct_modules: list[str] = []
    transitive_modules: list[str] = []


class ImpactGraph(BaseModel):
    impacts: dict[str, DefinitionImpact] = {}

    def get(self, name: str) -> DefinitionImpact | None:
        return self.impacts.get(name)

    def modules_affected_by(self, name: str) -> list[str]:
        """Modules referencing ``name`` directly or through other definitions."""
        impact = self.impacts.get(name)
        if impact is None:
            return []
        return _merge(impact.direct_modules, impact.transitive_modules)


def compute_impact(definitions: list[Definition], mods: list[Mod]) -> ImpactGraph:
    """Build the impact graph for one snapshot.

    Raises:
        UnresolvedReferenceError: a field or response refers to a definition
            that is not in ``definitions``. Nothing is returned in that case,
            since a partial graph would understate the impact.
    """
    impacts = {d.name: DefinitionImpact(name=d.name) for d in definitions}

    for definition in definitions:
        for dep in definition.deps:
            target = impacts.get(dep)
            if target is None:
                raise UnresolvedReferenceError(dep, definition.name)
            if definition.name not in target.direct_dependents:
                target.direct_dependents.append(definition.name)

    for impact in impacts.values():
        impact.transitive_dependents = transitive_dependents(impact.name, impacts)

    for mod in mods:
        for inter in mod.interfaces:
            dep = inter.dep
            if not dep:
                continue
            target = impacts.get(dep)
            if target is None:
                raise UnresolvedReferenceError(dep, f"{mod.name}.{inter.name}")
            if mod.name not in target.direct_modules:
                target.direct_modules.append(mod.name)

    for impact in impacts.values():
        impact.transitive_modules = _merge(
            *(impacts[name].direct_modules for name in impact.transitive_dependents)
        )

    logger.debug("Computed impact graph for %d definitions and %d modules", len(definitions), len(mods))
    return ImpactGraph(impacts=impacts)


def transitive_dependents(name: str, impacts: dict[str, DefinitionImpact]) -> list[str]:
    """Breadth-first closure over direct dependents, excluding ``name`` itself."""
    visited = {name}
    result = []
    queue = deque(impacts[name].direct_dependents)

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        result.append(current)
        queue.extend(impacts[current].direct_dependents)

    return result


def _merge(*lists: list[str]) -> list[str]:
    merged = []
    for names in lists:
        for name in names:
            if name not in merged:
                merged.append(name)
    return merged
