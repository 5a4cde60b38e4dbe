"""Structural diff between two snapshots.

Entities are matched by name only: a renamed definition shows up as one
removal and one addition, never as a change.
"""

from enum import Enum
from typing import Sequence

from pydantic import BaseModel

from swagger_sync.compare.impact import DefinitionImpact, ImpactGraph, compute_impact
from swagger_sync.parser.base import Definition, Mod, Snapshot


class DiffKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


class DiffRecord(BaseModel):
    """One classified change to a module or a definition."""

    kind: DiffKind
    name: str
    entity: str  # mod / definition
    description: str | None = None
    impact: DefinitionImpact | None = None


class SnapshotDiff(BaseModel):
    mod_diffs: list[DiffRecord] = []
    definition_diffs: list[DiffRecord] = []

    @property
    def is_empty(self) -> bool:
        return not self.mod_diffs and not self.definition_diffs


def diff(
    old_items: Sequence[Mod | Definition],
    new_items: Sequence[Mod | Definition],
    is_module_diff: bool,
) -> list[DiffRecord]:
    """Classify every name as added, removed or changed.

    Records for the new list come first in its order, followed by removals
    in the order of the old list.
    """
    entity = "mod" if is_module_diff else "definition"
    old_by_name = {}
    for item in old_items:
        old_by_name.setdefault(item.name, item)

    records = []
    seen = set()
    for item in new_items:
        if item.name in seen:
            continue
        seen.add(item.name)

        old = old_by_name.get(item.name)
        if old is None:
            records.append(DiffRecord(kind=DiffKind.ADDED, name=item.name, entity=entity, description=item.description))
        elif _content(old) != _content(item):
            records.append(DiffRecord(kind=DiffKind.CHANGED, name=item.name, entity=entity, description=item.description))

    for name, old in old_by_name.items():
        if name not in seen:
            records.append(DiffRecord(kind=DiffKind.REMOVED, name=name, entity=entity, description=old.description))

    return records


def diff_snapshots(old: Snapshot, new: Snapshot, graph: ImpactGraph | None = None) -> SnapshotDiff:
    """Diff modules and definitions; definition records carry their impact in ``new``.

    Removed definitions have no impact since they are absent from ``new``.
    """
    if graph is None:
        graph = compute_impact(new.definitions, new.mods)

    definition_diffs = diff(old.definitions, new.definitions, False)
    for record in definition_diffs:
        if record.kind != DiffKind.REMOVED:
            record.impact = graph.get(record.name)

    return SnapshotDiff(
        mod_diffs=diff(old.mods, new.mods, True),
        definition_diffs=definition_diffs,
    )


def _content(item: Mod | Definition) -> dict:
    return item.model_dump(by_alias=True)
