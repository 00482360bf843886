"""NetworkX graph building and traversal operations."""

import logging
from collections import deque

import networkx as nx

from models import CHILD_TYPES, PARENT_TYPES, SIBLING_TYPES, SPOUSE_TYPES, Relationship, TreeNode
from store import FamilyStore

logger = logging.getLogger(__name__)


def build_graph(store: FamilyStore) -> nx.MultiDiGraph:
    """
    Build a NetworkX multigraph snapshot of the store.

    Nodes are person ids carrying the Person and a few flattened attributes.
    Edges are keyed by relationship id and keep their storage order in `order`,
    so "first stored" lookups stay deterministic.
    """
    G = nx.MultiDiGraph()

    for person in store.get_all():
        G.add_node(
            person.id,
            person=person,
            person_name=person.full_name,
            gender=person.gender,
            birth_date=person.birth_date,
        )

    for order, rel in enumerate(store.get_relationships()):
        # Edges to unknown people are dropped from the snapshot
        if rel.source_id not in G or rel.target_id not in G:
            logger.debug(f"Skipping dangling relationship {rel.id}")
            continue
        G.add_edge(
            rel.source_id,
            rel.target_id,
            key=rel.id,
            relationship=rel,
            relationship_type=rel.type,
            order=order,
        )

    return G


def parent_child(rel: Relationship) -> tuple[str, str] | None:
    """Return (parent_id, child_id) for a parent/child edge, else None."""
    if rel.type in CHILD_TYPES:
        return rel.source_id, rel.target_id
    if rel.type in PARENT_TYPES:
        return rel.target_id, rel.source_id
    return None


def edges_touching(G: nx.MultiDiGraph, person_id: str) -> list[Relationship]:
    """All relationships touching a person, in storage order."""
    if person_id not in G:
        return []
    seen: dict[str, tuple[int, Relationship]] = {}
    for _, _, key, data in G.out_edges(person_id, keys=True, data=True):
        seen[key] = (data["order"], data["relationship"])
    for _, _, key, data in G.in_edges(person_id, keys=True, data=True):
        seen[key] = (data["order"], data["relationship"])
    return [rel for _, rel in sorted(seen.values(), key=lambda item: item[0])]


def parents_of(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    parents = []
    for rel in edges_touching(G, person_id):
        pair = parent_child(rel)
        if pair and pair[1] == person_id and pair[0] != person_id:
            parents.append(pair[0])
    return list(dict.fromkeys(parents))


def children_of(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    children = []
    for rel in edges_touching(G, person_id):
        pair = parent_child(rel)
        if pair and pair[0] == person_id and pair[1] != person_id:
            children.append(pair[1])
    return list(dict.fromkeys(children))


def spouses_of(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    spouses = [
        rel.other(person_id)
        for rel in edges_touching(G, person_id)
        if rel.type in SPOUSE_TYPES and rel.other(person_id) != person_id
    ]
    return list(dict.fromkeys(spouses))


def explicit_siblings(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    siblings = [
        rel.other(person_id)
        for rel in edges_touching(G, person_id)
        if rel.type in SIBLING_TYPES and rel.other(person_id) != person_id
    ]
    return list(dict.fromkeys(siblings))


def shared_parent_siblings(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    """People sharing at least one parent with person_id (half siblings included)."""
    siblings = []
    for parent in parents_of(G, person_id):
        for child in children_of(G, parent):
            if child != person_id:
                siblings.append(child)
    return list(dict.fromkeys(siblings))


def connected_component(G: nx.MultiDiGraph, start_id: str) -> set[str]:
    """
    The "family network" of a person: everyone reachable over any
    relationship, ignoring edge direction.
    """
    if start_id not in G:
        return set()
    # Use undirected view so parents, children and spouses are all reachable
    return set(nx.node_connected_component(G.to_undirected(as_view=True), start_id))


def ancestors_of(G: nx.MultiDiGraph, person_id: str) -> set[str]:
    """Every ancestor of person_id, including person_id itself."""
    if person_id not in G:
        return set()

    # Parent -> child edges only, in canonical direction
    parent_graph = nx.DiGraph()
    parent_graph.add_node(person_id)
    for _, _, rel in G.edges(data="relationship"):
        pair = parent_child(rel)
        if pair:
            parent_graph.add_edge(*pair)

    return nx.ancestors(parent_graph, person_id) | {person_id}


def levels_from(G: nx.MultiDiGraph, start_id: str) -> dict[str, int]:
    """
    Assign a generation level to everyone reachable from start_id.

    The start is level 0, parents are one level up (-1), children one level
    down (+1), spouses and siblings share a level. A spouse's parents are
    placed one level above the person too. Each person keeps the lowest level
    found, except the start, which stays at 0. A person whose level drops
    after expansion is expanded again, at most once per person in the graph,
    so the walk ends on cyclic input.
    """
    if start_id not in G:
        return {}

    levels = {start_id: 0}
    expansions: dict[str, int] = {}
    max_expansions = G.number_of_nodes()
    queue = deque([start_id])
    queued = {start_id}

    def relax(person_id: str, level: int):
        if person_id == start_id:
            return
        if person_id in levels and level >= levels[person_id]:
            return
        levels[person_id] = level
        if person_id not in queued and expansions.get(person_id, 0) < max_expansions:
            queued.add(person_id)
            queue.append(person_id)

    while queue:
        current = queue.popleft()
        queued.discard(current)
        expansions[current] = expansions.get(current, 0) + 1
        level = levels[current]

        for parent in parents_of(G, current):
            relax(parent, level - 1)
        for child in children_of(G, current):
            relax(child, level + 1)
        for spouse in spouses_of(G, current):
            relax(spouse, level)
            for parent in parents_of(G, spouse):
                relax(parent, level - 1)
        for sibling in explicit_siblings(G, current):
            relax(sibling, level)

    logger.debug(f"Assigned levels to {len(levels)} people from {start_id}")
    return levels


def build_union_layout_graph(tree: TreeNode) -> nx.DiGraph:
    """
    Build a layout graph using the union-node model from a derived tree.

    Creates "family nodes" (union nodes) that connect a person and their
    spouse to their children:
    - Spouses naturally sit on the same generation
    - All children hang from the union node, so siblings align
    - Side-listed siblings and extra forest roots are added as separate roots

    Args:
        tree: Root TreeNode produced by the tree builder

    Returns:
        A new graph with family nodes suitable for hierarchical layout
    """
    H = nx.DiGraph()

    def add_person(node: TreeNode):
        p = node.person
        if p.id not in H:
            H.add_node(
                p.id,
                node_type="person",
                person_name=p.full_name,
                given_name=p.first_name,
                surname=p.last_name,
                gender=p.gender.value,
                birth_date=p.birth_date,
                death_date=p.death_date,
            )

    stack = [tree]
    while stack:
        node = stack.pop()
        add_person(node)

        parents = [node.person.id]
        if node.spouse is not None:
            add_person(node.spouse)
            parents.append(node.spouse.person.id)

        if node.spouse is not None or node.children:
            fam_id = f"FAM_{'_'.join(parents)}"
            if fam_id not in H:
                # Family node is a small connector point
                H.add_node(fam_id, node_type="family", spouses=tuple(parents))
                for parent in parents:
                    H.add_edge(parent, fam_id, edge_type="spouse_to_family")
            for child in node.children:
                add_person(child)
                # Child hangs from family node
                H.add_edge(fam_id, child.person.id, edge_type="family_to_child")

        stack.extend(reversed(node.children))
        stack.extend(reversed(node.siblings or []))

    return H
