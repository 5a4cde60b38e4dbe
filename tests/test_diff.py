from pathlib import Path

from swagger_sync.compare.diff import DiffKind, diff, diff_snapshots
from swagger_sync.compare.impact import compute_impact
from swagger_sync.parser.base import Definition, Interface, Mod, Property
from swagger_sync.parser.swagger import parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


def _snapshot():
    return parse_openapi(FIXTURES / "petstore_v2.json")


class TestDiff:
    def test_self_comparison_is_empty(self):
        snapshot = _snapshot()
        assert diff(snapshot.mods, snapshot.mods, True) == []
        assert diff(snapshot.definitions, snapshot.definitions, False) == []

    def test_equal_copies_are_unchanged(self):
        old = _snapshot()
        new = _snapshot()
        assert diff_snapshots(old, new).is_empty

    def test_added_and_removed(self):
        old = [Definition(name="A"), Definition(name="B")]
        new = [Definition(name="B"), Definition(name="C")]
        records = diff(old, new, False)
        assert [(r.kind, r.name) for r in records] == [
            (DiffKind.ADDED, "C"),
            (DiffKind.REMOVED, "A"),
        ]
        assert all(r.entity == "definition" for r in records)

    def test_rename_is_remove_plus_add(self):
        old = [Definition(name="User", properties=[Property(name="id", type="integer")])]
        new = [Definition(name="Member", properties=[Property(name="id", type="integer")])]
        records = diff(old, new, False)
        assert {(r.kind, r.name) for r in records} == {
            (DiffKind.ADDED, "Member"),
            (DiffKind.REMOVED, "User"),
        }

    def test_changed_field(self):
        old = [Definition(name="User", properties=[Property(name="id", type="integer")])]
        new = [Definition(name="User", properties=[Property(name="id", type="string")])]
        records = diff(old, new, False)
        assert [(r.kind, r.name) for r in records] == [(DiffKind.CHANGED, "User")]

    def test_changed_module_endpoint(self):
        old = [Mod(name="user", interfaces=[Interface(method="get", path="/user", name="get")])]
        new = [Mod(name="user", interfaces=[Interface(method="get", path="/user", name="get", summary="List")])]
        records = diff(old, new, True)
        assert [(r.kind, r.name, r.entity) for r in records] == [(DiffKind.CHANGED, "user", "mod")]

    def test_order_follows_new_list_then_old_only(self):
        old = [Definition(name="X"), Definition(name="A", description="old"), Definition(name="Y")]
        new = [Definition(name="B"), Definition(name="A", description="new"), Definition(name="C")]
        records = diff(old, new, False)
        assert [r.name for r in records] == ["B", "A", "C", "X", "Y"]


class TestDiffSnapshots:
    def test_changed_definition_carries_impact(self):
        old = _snapshot()
        new = _snapshot()
        address = new.find_definition("Address")
        address.properties.append(Property(name="country", type="string"))

        result = diff_snapshots(old, new)
        assert result.mod_diffs == []
        assert len(result.definition_diffs) == 1

        record = result.definition_diffs[0]
        assert record.kind == DiffKind.CHANGED
        assert record.name == "Address"
        assert record.impact.transitive_modules == ["userController", "orderController"]

    def test_removed_definition_has_no_impact(self):
        old = _snapshot()
        new = _snapshot()
        new.definitions = [d for d in new.definitions if d.name != "UserQuery"]
        new.mods = []

        result = diff_snapshots(old, new)
        removed = [r for r in result.definition_diffs if r.kind == DiffKind.REMOVED]
        assert [r.name for r in removed] == ["UserQuery"]
        assert removed[0].impact is None
        assert {r.name for r in result.mod_diffs} == {"userController", "orderController"}

    def test_graph_recomputation_does_not_change_diff(self):
        old = _snapshot()
        new = _snapshot()
        compute_impact(old.definitions, old.mods)
        graph = compute_impact(new.definitions, new.mods)
        assert diff_snapshots(old, new, graph).is_empty
