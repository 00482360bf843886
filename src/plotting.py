"""Visualization functions for derived family trees."""

import io
import logging
from pathlib import Path

from graphviz import Digraph

from config import CHART_FORMATS
from graph import build_union_layout_graph
from models import TreeNode

logger = logging.getLogger(__name__)

FILL_COLORS = {"male": "lightblue", "female": "lightpink"}


def tree_to_dot(tree: TreeNode) -> Digraph:
    """
    Convert a derived tree into a Graphviz chart using the union-node model.

    - Parents appear above children (ancestors at top)
    - Spouses are aligned horizontally on the same rank
    - Siblings align under their family node
    """
    H = build_union_layout_graph(tree)

    chart = Digraph(
        comment="Family tree",
        engine="dot",
        graph_attr={
            "rankdir": "TB",  # Top-to-bottom (ancestors at top)
            "splines": "ortho",  # Orthogonal edges for cleaner tree look
            "nodesep": "0.4",
            "ranksep": "0.6",
        },
    )

    # Track couples for rank=same subgraphs
    couples: list[tuple] = []

    for node, data in H.nodes(data=True):
        if data.get("node_type") == "family":
            # Family nodes are small connector points
            chart.node(str(node), label="", shape="point", width="0.1", height="0.1")
            spouses = data.get("spouses", ())
            if len(spouses) == 2:
                couples.append(spouses)
            continue

        birth_date = data.get("birth_date") or ""
        death_date = data.get("death_date") or ""
        # Graphviz escString line breaks
        label = "\\n".join(
            [data.get("given_name", ""), data.get("surname", ""), f"{birth_date[:4]}-{death_date[:4]}"]
        )
        chart.node(
            str(node),
            label=label,
            shape="box",
            style="rounded,filled",
            fillcolor=FILL_COLORS.get(data.get("gender"), "lightgray"),
            fontsize="10",
        )

    for u, v, data in H.edges(data=True):
        if data.get("edge_type") == "spouse_to_family":
            chart.edge(str(u), str(v), dir="none", color="darkgray")
        else:
            chart.edge(str(u), str(v), color="darkgray")

    for i, (a, b) in enumerate(couples):
        with chart.subgraph(name=f"couple_{i}") as s:
            s.attr(rank="same")
            s.node(str(a))
            s.node(str(b))

    return chart


def plot_tree(tree: TreeNode, output_path: Path | None = None, chart_format: str | None = None):
    """
    Render a tree chart with Graphviz.

    Args:
        tree: Root TreeNode produced by the tree builder
        output_path: Path to save the output image. If None, displays interactively.
        chart_format: png, svg or pdf. Defaults to the output path's suffix, then png.
    """
    chart = tree_to_dot(tree)

    if output_path:
        ext = chart_format or output_path.suffix.lower().lstrip(".")
        if ext not in CHART_FORMATS:
            ext = "png"
        chart.render(outfile=str(output_path), format=ext, cleanup=True)
        logger.info(f"Chart saved to {output_path}")
        return

    import matplotlib.image as mpimg
    import matplotlib.pyplot as plt

    img = mpimg.imread(io.BytesIO(chart.pipe(format="png")), format="png")
    plt.figure(figsize=(20, 16))
    plt.imshow(img)
    plt.axis("off")
    plt.tight_layout()
    plt.show()
