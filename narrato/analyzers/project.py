"""Project-level aggregation of per-file analysis.

The aggregate is built with an explicit reducer: ``fold`` takes the
analysis so far plus one file and returns a new ``ProjectAnalysis``.
``analyze`` is ``reduce(fold, files, ProjectAnalysis())``; ``merge``
combines two partial results so files can be analyzed in chunks and
combined afterwards.
"""

from collections.abc import Iterable, Mapping, Sequence
from functools import reduce
from typing import Any

from narrato.analyzers.frameworks import detect, manifest_flags
from narrato.analyzers.languages import display_name, extension_of
from narrato.analyzers.structure import StructureCache, extract, is_supported
from narrato.logging import log_operation, logger, progress_bar
from narrato.models.analysis import ProjectAnalysis, SourceFile

CONFIG_EXTENSIONS = frozenset({"json", "yml", "yaml", "toml", "ini", "env"})

# Projects with more code files than this get a Dockerfile suggestion
DOCKERFILE_SUGGESTION_THRESHOLD = 5

ALWAYS_SUGGESTED = (
    "Add .gitignore file",
    "Add LICENSE file",
    "Add CONTRIBUTING.md for collaborators",
)


def _ordered_union(left: tuple[str, ...], right: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys((*left, *right)))


def load_uploads(payloads: Iterable[Mapping[str, Any]]) -> list[SourceFile]:
    """Convert upload payloads ``{name, content}`` into SourceFiles, keeping order."""
    return [SourceFile.from_upload(dict(payload)) for payload in payloads]


def fold(
    acc: ProjectAnalysis,
    file: SourceFile,
    cache: StructureCache | None = None,
) -> ProjectAnalysis:
    """Fold one file into an aggregate analysis.

    Args:
        acc: Analysis of the files seen so far. Not modified.
        file: The next file.
        cache: Optional extraction cache keyed on content hash.

    Returns:
        A new ProjectAnalysis including ``file``.
    """
    if cache is not None:
        record = cache.get(file.content, file.language)
    else:
        record = extract(file.content, file.language)

    language = display_name(file.language)
    flags = manifest_flags(file.name)

    return acc.model_copy(
        update={
            "languages": _ordered_union(acc.languages, [language] if language else []),
            "frameworks": _ordered_union(acc.frameworks, detect(file.name, file.content)),
            "total_files": acc.total_files + 1,
            "code_files": acc.code_files + int(is_supported(file.language)),
            "config_files": acc.config_files
            + int(extension_of(file.name) in CONFIG_EXTENSIONS),
            "total_lines": acc.total_lines + len(file.content.split("\n")),
            "classes": acc.classes + record.classes,
            "functions": acc.functions + record.functions,
            "imports": acc.imports + record.imports,
            "complexity": acc.complexity + record.complexity,
            "has_package_json": acc.has_package_json or flags.package_json,
            "has_requirements_txt": acc.has_requirements_txt or flags.requirements_txt,
            "has_pom_xml": acc.has_pom_xml or flags.pom_xml,
            "has_dockerfile": acc.has_dockerfile or flags.dockerfile,
        }
    )


def merge(left: ProjectAnalysis, right: ProjectAnalysis) -> ProjectAnalysis:
    """Combine two partial analyses.

    ``merge(analyze(a), analyze(b)) == analyze(a + b)`` for any split of the
    input, so chunks can be analyzed independently.
    """
    return ProjectAnalysis(
        languages=_ordered_union(left.languages, right.languages),
        frameworks=_ordered_union(left.frameworks, right.frameworks),
        total_files=left.total_files + right.total_files,
        code_files=left.code_files + right.code_files,
        config_files=left.config_files + right.config_files,
        total_lines=left.total_lines + right.total_lines,
        classes=left.classes + right.classes,
        functions=left.functions + right.functions,
        imports=left.imports + right.imports,
        complexity=left.complexity + right.complexity,
        has_package_json=left.has_package_json or right.has_package_json,
        has_requirements_txt=left.has_requirements_txt or right.has_requirements_txt,
        has_pom_xml=left.has_pom_xml or right.has_pom_xml,
        has_dockerfile=left.has_dockerfile or right.has_dockerfile,
    )


def analyze(
    files: Sequence[SourceFile],
    cache: StructureCache | None = None,
) -> ProjectAnalysis:
    """Analyze a set of uploaded files.

    Args:
        files: Files in upload order. Order determines the order of the
            concatenated classes/functions/imports sequences.
        cache: Optional extraction cache shared across calls.

    Returns:
        ProjectAnalysis for the whole set. Empty input gives an empty
        analysis.
    """
    with log_operation("analyze", {"files": len(files)}) as timing:
        result = reduce(
            lambda acc, file: fold(acc, file, cache),
            progress_bar(files, desc="Analyzing", total=len(files), unit="files"),
            ProjectAnalysis(),
        )

    logger.debug(
        "  %d files, %d lines in %.1fms, languages=%s, frameworks=%s",
        result.total_files,
        result.total_lines,
        timing.elapsed_ms,
        ",".join(result.languages) or "-",
        ",".join(result.frameworks) or "-",
    )
    return result


def generate_suggestions(analysis: ProjectAnalysis) -> list[str]:
    """Suggest project files to add, based on what was uploaded."""
    suggestions: list[str] = []

    if not analysis.has_package_json and "JavaScript" in analysis.languages:
        suggestions.append("Add package.json with dependencies")

    if not analysis.has_requirements_txt and "Python" in analysis.languages:
        suggestions.append("Add requirements.txt file")

    if not analysis.has_dockerfile and analysis.code_files > DOCKERFILE_SUGGESTION_THRESHOLD:
        suggestions.append("Consider adding Dockerfile for easy deployment")

    suggestions.extend(ALWAYS_SUGGESTED)
    return suggestions
