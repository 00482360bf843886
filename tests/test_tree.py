"""Tests for tree derivation."""

import json

from conftest import make_person
from graph import build_graph
from models import Relationship, RelationshipType, TreeNode
from tree import build_node, build_tree, format_tree

T = RelationshipType


def ids(nodes):
    return [n.person.id for n in nodes]


def walk(node: TreeNode):
    """Yield every node reachable through children and siblings."""
    yield node
    for child in node.children:
        yield from walk(child)
    for sibling in node.siblings or []:
        yield from walk(sibling)


# ============================================================================
# Demo Family
# ============================================================================

class TestBuildTree:
    """Tests for the tree built over the demo family."""

    def test_rooted_at_oldest_top_generation(self, family):
        tree = build_tree(family, "1")
        assert tree.person.id == "7"
        assert tree.spouse.person.id == "8"
        assert tree.parents == []

    def test_same_tree_from_any_member(self, family):
        expected = build_tree(family, "1").to_dict()
        for start in ("5", "9", "12", "11"):
            assert build_tree(family, start).to_dict() == expected

    def test_hierarchy(self, family):
        tree = build_tree(family, "1")
        [irina] = tree.children
        assert irina.person.id == "4"
        assert irina.spouse.person.id == "3"
        assert ids(irina.children) == ["1", "9"]
        assert ids(irina.parents) == ["7", "8"]

        dmitry = irina.children[0]
        assert dmitry.spouse.person.id == "2"
        assert ids(dmitry.children) == ["5", "6"]
        assert ids(dmitry.parents) == ["3", "4"]

    def test_spouse_is_a_leaf(self, family):
        tree = build_tree(family, "1")
        spouse = tree.children[0].spouse
        assert spouse.children == []
        assert spouse.spouse is None

    def test_other_ancestor_lines_are_root_siblings(self, family):
        tree = build_tree(family, "1")
        assert ids(tree.siblings) == ["12", "10"]

        vasily = tree.siblings[1]
        assert vasily.spouse.person.id == "11"
        # Alexander is already placed as Irina's spouse, so he is a stub here
        [stub] = vasily.children
        assert stub.person.id == "3"
        assert stub.children == []

    def test_each_person_expanded_once(self, family):
        tree = build_tree(family, "1")
        expanded = [n.person.id for n in walk(tree) if n.children]
        assert len(expanded) == len(set(expanded))

    def test_unknown_person(self, family):
        assert build_tree(family, "nobody") is None

    def test_isolated_person(self, store):
        store.add(make_person("solo"))
        tree = build_tree(store, "solo")
        assert tree.person.id == "solo"
        assert tree.children == []
        assert tree.siblings == []

    def test_to_dict_is_json_ready(self, family):
        data = build_tree(family, "1").to_dict()
        assert data["id"] == "7"
        assert data["spouse"]["firstName"] == "Valentina"
        assert data["children"][0]["parents"] == [
            {"id": "7", "name": "Nikolai Sergeevich Beda"},
            {"id": "8", "name": "Valentina Ivanovna Beda"},
        ]
        json.dumps(data)

    def test_format_tree(self, family):
        text = format_tree(build_tree(family, "1"))
        lines = text.splitlines()
        assert lines[0] == "Nikolai Sergeevich Beda (1944) + Valentina Ivanovna Beda (1946)"
        assert lines[1].startswith("  Irina Nikolaevna Mogilevtseva (1971) + Alexander")
        assert "~ Lyubov Ivanovna Baeva (1948)" in lines
        assert "~ Vasily Mogilevtsev + Zoya Mogilevtseva" in lines


# ============================================================================
# Cycles and Revisits
# ============================================================================

class TestCycles:
    """Tests for termination on cyclic relationship data."""

    def test_mutual_parents_terminate(self, store):
        store.add(make_person("a"))
        store.add(make_person("b"))
        store.add_relationship(Relationship("ab", "a", "b", T.SON))
        store.add_relationship(Relationship("ba", "b", "a", T.SON))

        # "a" stays at level 0, so its recorded parent "b" is the root
        tree = build_tree(store, "a")
        assert tree.person.id == "b"
        [a] = tree.children
        assert a.person.id == "a"
        [stub] = a.children
        assert stub.person.id == "b"
        assert stub.children == []
        assert stub.parents == []

    def test_long_cycle_terminates(self, store):
        chain = [f"p{i}" for i in range(6)]
        for pid in chain:
            store.add(make_person(pid))
        for i, pid in enumerate(chain):
            store.add_relationship(Relationship("", pid, chain[(i + 1) % len(chain)], T.SON))
        tree = build_tree(store, "p3")
        assert len(list(walk(tree))) == len(chain) + 1

    def test_build_node_returns_stub_for_visited(self, family):
        G = build_graph(family)
        person = G.nodes["4"]["person"]
        stub = build_node(G, person, {"4"})
        assert stub.children == []
        assert stub.spouse is None

    def test_shared_visited_set_across_parents(self, store):
        # A child of two unmarried parents is expanded under the first only
        for pid in ("m", "f", "kid", "grandkid"):
            store.add(make_person(pid))
        store.add_relationship(Relationship("", "m", "kid", T.SON))
        store.add_relationship(Relationship("", "f", "kid", T.SON))
        store.add_relationship(Relationship("", "kid", "grandkid", T.SON))

        tree = build_tree(store, "grandkid")
        assert tree.person.id == "f"
        assert ids(tree.children) == ["kid"]
        assert ids(tree.children[0].children) == ["grandkid"]
        [m] = tree.siblings
        assert m.person.id == "m"
        assert m.children[0].children == []


# ============================================================================
# Mutations
# ============================================================================

class TestRebuildAfterMutation:
    """Trees reflect the store after each change."""

    def test_deleted_son_edge_detaches_child(self, store):
        for pid in ("p", "c", "d"):
            store.add(make_person(pid))
        store.add_relationship(Relationship("pc", "p", "c", T.SON))
        store.add_relationship(Relationship("pd", "p", "d", T.SON))
        assert ids(build_tree(store, "c").children) == ["c", "d"]

        store.delete_relationship("pc")
        for start in ("p", "d"):
            tree = build_tree(store, start)
            assert "c" not in [n.person.id for n in walk(tree)]
        assert build_tree(store, "c").person.id == "c"

    def test_deleted_person_disappears(self, family):
        family.delete("9")
        tree = build_tree(family, "1")
        assert "9" not in [n.person.id for n in walk(tree)]
