"""Analyzers for uploaded source files."""

from narrato.analyzers.code_flow import (
    build_graph,
    code_flow,
    file_imports,
    graph_metadata,
    node_position,
    normalize_import,
    to_networkx,
)
from narrato.analyzers.frameworks import detect, manifest_flags
from narrato.analyzers.languages import classify, display_name, extension_of
from narrato.analyzers.project import (
    analyze,
    fold,
    generate_suggestions,
    load_uploads,
    merge,
)
from narrato.analyzers.quality import quality_level, score
from narrato.analyzers.structure import StructureCache, extract, is_supported

__all__ = [
    "StructureCache",
    "analyze",
    "build_graph",
    "classify",
    "code_flow",
    "detect",
    "display_name",
    "extension_of",
    "extract",
    "file_imports",
    "fold",
    "generate_suggestions",
    "graph_metadata",
    "is_supported",
    "load_uploads",
    "manifest_flags",
    "merge",
    "node_position",
    "normalize_import",
    "quality_level",
    "score",
    "to_networkx",
]
