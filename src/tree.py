"""Projection of the family graph into a renderable tree."""

import logging

import networkx as nx

from graph import (
    build_graph,
    children_of,
    connected_component,
    explicit_siblings,
    parents_of,
    shared_parent_siblings,
    spouses_of,
)
from models import Person, TreeNode
from roots import canonical_root, top_level_ancestors
from store import FamilyStore

logger = logging.getLogger(__name__)


def build_node(
    G: nx.MultiDiGraph, person: Person, visited: set[str], with_siblings: bool = False
) -> TreeNode:
    """
    Build the subtree hanging from `person`.

    `visited` is shared by the whole build. A person already in it comes back
    as a childless stub, which is what ends the walk on cyclic input. The
    spouse is a leaf side-link and is marked visited so it is never expanded
    elsewhere; parents are informational references only.
    """
    if person.id in visited:
        return TreeNode(person=person)
    visited.add(person.id)

    node = TreeNode(person=person)

    for spouse_id in spouses_of(G, person.id):
        if spouse_id not in visited:
            node.spouse = TreeNode(person=G.nodes[spouse_id]["person"])
            visited.add(spouse_id)
            break

    child_ids = children_of(G, person.id)
    if node.spouse is not None:
        child_ids += children_of(G, node.spouse.person.id)
    node.children = [
        build_node(G, G.nodes[child_id]["person"], visited)
        for child_id in dict.fromkeys(child_ids)
    ]

    node.parents = [TreeNode(person=G.nodes[pid]["person"]) for pid in parents_of(G, person.id)]

    if with_siblings:
        node.siblings = []
        sibling_ids = shared_parent_siblings(G, person.id) + explicit_siblings(G, person.id)
        for sibling_id in dict.fromkeys(sibling_ids):
            if sibling_id in visited:
                continue
            node.siblings.append(build_node(G, G.nodes[sibling_id]["person"], visited))

    return node


def build_tree(store: FamilyStore, start_id: str) -> TreeNode | None:
    """
    Build the family tree containing `start_id`, rooted at its canonical root.

    Siblings of the root and every other parentless ancestor line of the
    network are listed in the root's `siblings`, so marriages that join two
    unrelated lines do not drop either line. Parentless ancestors already
    placed elsewhere in the tree (a spouse, or someone reached through
    another line) are left out of that list rather than repeated as stubs.
    Returns None for an unknown id.
    """
    G = build_graph(store)
    if start_id not in G:
        logger.warning(f"Cannot build tree: person {start_id} not found")
        return None

    root = canonical_root(G, start_id)
    network = connected_component(G, start_id)

    visited: set[str] = set()
    tree = build_node(G, root, visited, with_siblings=True)

    for ancestor in top_level_ancestors(G, network):
        if ancestor.id == root.id or ancestor.id in visited:
            continue
        tree.siblings.append(build_node(G, ancestor, visited))

    logger.debug(
        f"Built tree for {start_id}: root {root.id}, {len(visited)} of {len(network)} people placed"
    )
    return tree


def format_tree(tree: TreeNode) -> str:
    """Indented text outline of a tree."""
    lines: list[str] = []

    def label(node: TreeNode) -> str:
        p = node.person
        text = p.full_name
        if p.birth_date:
            text += f" ({p.birth_date[:4]})"
        return text

    def walk(node: TreeNode, depth: int, marker: str = ""):
        line = "  " * depth + marker + label(node)
        if node.spouse is not None:
            line += f" + {label(node.spouse)}"
        lines.append(line)
        for child in node.children:
            walk(child, depth + 1)

    walk(tree, 0)
    for sibling in tree.siblings or []:
        walk(sibling, 0, marker="~ ")
    return "\n".join(lines)
