"""Code-flow graph construction for visualization.

Builds a file-level import graph from raw import specifiers by fuzzy name
matching, and places nodes with a deterministic layout. This is a display
graph: no module resolution, no cycle detection, no topological order.

Edge matching (loose mode) for a file F and one of its import specifiers:

1. Normalize the specifier: keep the text after the last ``/`` and drop
   quote characters. If that leaves nothing, use the raw specifier.
2. For every file T, including F itself, add an edge F -> T when the
   normalized import is a substring of T's name, or T's name up to its
   first ``.`` is a substring of the normalized import.
3. Every qualifying (F, import, T) triple adds its own edge, so two imports
   of the same target produce two parallel edges.

The match is loose on purpose: ``api.ts`` links from any import containing
"api", and a file whose name starts with ``.`` links from every import.
Strict mode compares stems exactly instead.
"""

import math
from collections import Counter
from collections.abc import Sequence
from typing import Any, get_args

import networkx as nx

from narrato.analyzers.languages import LANGUAGE_EXTENSIONS, classify, extension_of
from narrato.analyzers.structure import extract
from narrato.logging import log_operation, logger
from narrato.models.analysis import (
    CodeFlowGraph,
    FileImports,
    GraphEdge,
    GraphNode,
    LayoutMode,
    MatchMode,
    Position,
    SourceFile,
)

# Hierarchical grid spacing, in canvas pixels
COLUMN_SPACING = 220
ROW_SPACING = 140

# Circular layout ring
CIRCLE_RADIUS = 300
CIRCLE_CENTER_X = 400
CIRCLE_CENTER_Y = 400

LAYOUTS: tuple[str, ...] = get_args(LayoutMode)
MATCH_MODES: tuple[str, ...] = get_args(MatchMode)


def node_position(index: int, total: int, layout: LayoutMode = "hierarchical") -> Position:
    """Compute the canvas position of node ``index`` out of ``total``.

    Args:
        index: Node index, 0-based.
        total: Number of nodes in the graph.
        layout: "hierarchical" grid or "circular" ring.

    Returns:
        Position; identical for identical arguments.

    Raises:
        ValueError: If ``total`` is not positive or ``layout`` is unknown.
    """
    if total <= 0:
        raise ValueError(f"Cannot place a node in a graph of {total} nodes")

    if layout == "hierarchical":
        columns = math.ceil(math.sqrt(total))
        row, col = divmod(index, columns)
        return Position(x=float(col * COLUMN_SPACING), y=float(row * ROW_SPACING))

    if layout == "circular":
        theta = index * 2 * math.pi / total
        return Position(
            x=math.cos(theta) * CIRCLE_RADIUS + CIRCLE_CENTER_X,
            y=math.sin(theta) * CIRCLE_RADIUS + CIRCLE_CENTER_Y,
        )

    raise ValueError(f"Unknown layout: {layout!r}. Expected one of {LAYOUTS}")


def normalize_import(specifier: str) -> str:
    """Reduce an import specifier to the text used for name matching."""
    normalized = specifier.split("/")[-1].replace('"', "").replace("'", "")
    return normalized or specifier


def _stem(file_name: str) -> str:
    return file_name.split(".")[0]


def _import_stem(normalized: str) -> str:
    """Last module segment of a normalized import, without a source extension."""
    name = normalized.lstrip(".")
    if extension_of(name) in LANGUAGE_EXTENSIONS:
        name = name.rsplit(".", 1)[0]
    return name.replace("::", ".").split(".")[-1]


def matches(normalized: str, target_name: str, mode: MatchMode = "loose") -> bool:
    """Whether a normalized import refers to ``target_name``."""
    if mode == "strict":
        stem = _import_stem(normalized)
        return bool(stem) and stem == _stem(target_name)
    return normalized in target_name or _stem(target_name) in normalized


def file_imports(file: SourceFile) -> FileImports:
    """Extract the graph-builder input for one source file."""
    record = extract(file.content, file.language)
    return FileImports(name=file.name, imports=record.imports, exports=record.exports)


def build_graph(
    files: Sequence[FileImports],
    layout: LayoutMode = "hierarchical",
    match: MatchMode = "loose",
    dedupe: bool = False,
) -> CodeFlowGraph:
    """Build the code-flow graph for a set of files.

    Args:
        files: Files in display order; node IDs follow this order.
        layout: Node placement policy.
        match: "loose" (substring both ways) or "strict" (exact stem).
        dedupe: Collapse parallel edges between the same pair of files.

    Returns:
        CodeFlowGraph with one node per file and one "imports" edge per
        matching (file, import, target) triple.

    Raises:
        ValueError: If ``layout`` or ``match`` is not a known mode.
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout: {layout!r}. Expected one of {LAYOUTS}")
    if match not in MATCH_MODES:
        raise ValueError(f"Unknown match mode: {match!r}. Expected one of {MATCH_MODES}")

    total = len(files)
    with log_operation(
        "build_graph", {"files": total, "layout": layout, "match": match}
    ) as timing:
        nodes = [
            GraphNode(
                id=index,
                label=file.name,
                language=classify(file.name),
                extension=extension_of(file.name),
                export_count=len(file.exports),
                position=node_position(index, total, layout),
            )
            for index, file in enumerate(files)
        ]

        edges: list[GraphEdge] = []
        pair_counts: Counter[tuple[int, int]] = Counter()
        for source_index, file in enumerate(files):
            for specifier in file.imports:
                normalized = normalize_import(specifier)
                for target_index, target in enumerate(files):
                    if not matches(normalized, target.name, match):
                        continue

                    pair = (source_index, target_index)
                    seen = pair_counts[pair]
                    if dedupe and seen:
                        continue
                    pair_counts[pair] += 1

                    edge_id = f"e{source_index}-{target_index}"
                    if seen:
                        edge_id = f"{edge_id}-{seen}"
                    edges.append(GraphEdge(id=edge_id, source=source_index, target=target_index))

    logger.debug(
        "  Graph has %d nodes, %d edges (%.1fms)", len(nodes), len(edges), timing.elapsed_ms
    )
    return CodeFlowGraph(nodes=nodes, edges=edges, layout=layout)


def code_flow(
    files: Sequence[SourceFile],
    layout: LayoutMode = "hierarchical",
    match: MatchMode = "loose",
    dedupe: bool = False,
) -> CodeFlowGraph:
    """Extract imports from source files and build their code-flow graph."""
    return build_graph([file_imports(f) for f in files], layout=layout, match=match, dedupe=dedupe)


# NetworkX Conversion Utilities


def to_networkx(graph: CodeFlowGraph) -> nx.MultiDiGraph:
    """Convert a code-flow graph to a NetworkX multigraph.

    Node keys are the integer node IDs; edge keys are the edge IDs, so
    parallel edges survive the conversion.
    """
    G = nx.MultiDiGraph()

    for node in graph.nodes:
        G.add_node(
            node.id,
            label=node.label,
            language=str(node.language),
            export_count=node.export_count,
            x=node.position.x,
            y=node.position.y,
        )

    for edge in graph.edges:
        G.add_edge(edge.source, edge.target, key=edge.id, type=edge.kind)

    return G


def graph_metadata(graph: CodeFlowGraph, top: int = 5) -> dict[str, Any]:
    """Extract summary metadata from a code-flow graph.

    Args:
        graph: Graph to summarize.
        top: How many of the most-imported files to list.

    Returns:
        Dict with node/edge counts, self-loops, most-imported files,
        isolated files, and node counts per language.
    """
    G = to_networkx(graph)

    node_languages: dict[str, int] = {}
    for _, attrs in G.nodes(data=True):
        language = attrs.get("language", "unknown")
        node_languages[language] = node_languages.get(language, 0) + 1

    ranked = sorted(G.nodes, key=lambda n: (-G.in_degree(n), n))
    most_imported = [
        {"file": G.nodes[n]["label"], "imported_by": G.in_degree(n)}
        for n in ranked[:top]
        if G.in_degree(n) > 0
    ]

    return {
        "node_count": G.number_of_nodes(),
        "edge_count": G.number_of_edges(),
        "self_loop_count": nx.number_of_selfloops(G),
        "most_imported": most_imported,
        "isolated": sorted(G.nodes[n]["label"] for n in nx.isolates(G)),
        "node_languages": node_languages,
    }
