"""Data models for file analysis, code-flow graphs, and quality scoring.

All models are Pydantic models so they serialize straight to JSON for the
visualization and prompt-construction collaborators. Analysis results are
frozen: they are rebuilt from scratch on every pass, never patched.
"""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

LayoutMode = Literal["hierarchical", "circular"]
MatchMode = Literal["loose", "strict"]


class LanguageTag(StrEnum):
    """Language classification derived from a file extension."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    GO = "go"
    RUST = "rust"
    C = "c"
    CPP = "cpp"
    JSON = "json"
    MARKDOWN = "markdown"
    UNKNOWN = "unknown"


class SourceFile(BaseModel):
    """An uploaded file. Owned by the caller, borrowed for one analysis pass."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="File name as uploaded (e.g., 'utils.ts')")
    language: LanguageTag = Field(
        default=LanguageTag.UNKNOWN, description="Language tag from the file extension"
    )
    content: str = Field(default="", description="Raw file text")

    @model_validator(mode="before")
    @classmethod
    def _classify_name(cls, data: Any) -> Any:
        """Derive the language tag from the name when it is not given."""
        if isinstance(data, dict) and data.get("language") is None and "name" in data:
            # Import here to avoid a circular import with the classifier
            from narrato.analyzers.languages import classify

            data = {**data, "language": classify(str(data["name"]))}
        return data

    @classmethod
    def from_upload(cls, payload: dict[str, Any]) -> "SourceFile":
        """Build a SourceFile from an upload payload ``{name, content}``.

        Missing content becomes an empty string and bytes are decoded as
        UTF-8 with replacement, so unreadable uploads degrade to near-empty
        analysis instead of failing.
        """
        content = payload.get("content") or ""
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        return cls(name=str(payload.get("name", "")), content=str(content))


class StructureRecord(BaseModel):
    """Heuristic per-file extraction result.

    Sequences keep first-seen order and keep duplicates, since the counts
    feed the prompt summary as-is.
    """

    model_config = ConfigDict(frozen=True)

    classes: tuple[str, ...] = Field(default=(), description="Declared class/type names")
    functions: tuple[str, ...] = Field(default=(), description="Declared function/method names")
    imports: tuple[str, ...] = Field(
        default=(), description="Raw module specifiers, unresolved"
    )
    exports: tuple[str, ...] = Field(
        default=(), description="Publicly exported symbol names"
    )
    complexity: int = Field(default=0, ge=0, description="Count of branching lines")


class ProjectAnalysis(BaseModel):
    """Aggregate heuristic summary across all uploaded files.

    ``languages`` and ``frameworks`` behave as insertion-ordered sets so the
    serialized form is identical for identical input.
    """

    model_config = ConfigDict(frozen=True)

    languages: tuple[str, ...] = Field(
        default=(), description="Display names of detected languages (e.g., 'Python')"
    )
    frameworks: tuple[str, ...] = Field(
        default=(), description="Detected frameworks/tools (e.g., 'React', 'Docker')"
    )
    total_files: int = Field(default=0, ge=0, description="Number of files analyzed")
    code_files: int = Field(default=0, ge=0, description="Files with a supported language")
    config_files: int = Field(default=0, ge=0, description="Config-format files (json, yaml, ...)")
    total_lines: int = Field(default=0, ge=0, description="Sum of line counts")
    classes: tuple[str, ...] = Field(default=(), description="Class names, in file order")
    functions: tuple[str, ...] = Field(default=(), description="Function names, in file order")
    imports: tuple[str, ...] = Field(default=(), description="Import specifiers, in file order")
    complexity: int = Field(default=0, ge=0, description="Sum of per-file complexity")
    has_package_json: bool = Field(default=False, description="A package.json was uploaded")
    has_requirements_txt: bool = Field(
        default=False, description="A requirements.txt was uploaded"
    )
    has_pom_xml: bool = Field(default=False, description="A pom.xml was uploaded")
    has_dockerfile: bool = Field(default=False, description="A Docker file was uploaded")


class FileImports(BaseModel):
    """Graph-builder input: a file name with its raw imports and exports."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="File name, used as the node label")
    imports: tuple[str, ...] = Field(default=(), description="Raw import specifiers")
    exports: tuple[str, ...] = Field(default=(), description="Exported symbol names")


class Position(BaseModel):
    """Canvas coordinates of a node."""

    x: float
    y: float


class GraphNode(BaseModel):
    """A node in the code-flow graph representing one uploaded file."""

    id: int = Field(description="Dense index 0..n-1, stable for a given input order")
    label: str = Field(description="File name")
    language: LanguageTag = Field(description="Language tag of the file")
    extension: str = Field(description="Lowercase extension, or 'unknown'")
    export_count: int = Field(default=0, ge=0, description="Number of exported symbols")
    position: Position = Field(description="Deterministic layout position")


class GraphEdge(BaseModel):
    """A directed import relationship between two files."""

    id: str = Field(description="Edge identifier (e.g., 'e0-1', parallel edges 'e0-1-1')")
    source: int = Field(description="Importing node ID")
    target: int = Field(description="Imported node ID")
    kind: Literal["imports"] = Field(default="imports")


class CodeFlowGraph(BaseModel):
    """Nodes and edges handed to the rendering collaborator."""

    nodes: list[GraphNode] = Field(default_factory=list, description="Graph nodes")
    edges: list[GraphEdge] = Field(default_factory=list, description="Graph edges")
    layout: LayoutMode = Field(default="hierarchical", description="Layout used for positions")


class ChatMessage(BaseModel):
    """One turn of the documentation interview."""

    role: Literal["system", "user", "assistant"] = Field(default="user")
    content: str = Field(default="", description="Message text")


class QualityReport(BaseModel):
    """Documentation quality score with a display level."""

    score: int = Field(ge=0, le=100, description="Quality score (0-100)")
    level: Literal["Excellent", "Good", "Fair", "Needs Work"] = Field(
        description="Display label for the score band"
    )
    hint: str = Field(description="Short guidance for the next step")
