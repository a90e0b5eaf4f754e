"""Framework and tooling detection from well-known manifest files.

Detection is best-effort: a manifest that fails to parse contributes no
tags and raises nothing.
"""

import json
from dataclasses import dataclass

from narrato.logging import logger

# package.json dependency name -> framework tag
JS_FRAMEWORKS: list[tuple[tuple[str, ...], str]] = [
    (("react",), "React"),
    (("vue",), "Vue"),
    (("angular", "@angular/core"), "Angular"),
    (("next",), "Next.js"),
    (("express",), "Express"),
    (("nestjs", "@nestjs/core"), "NestJS"),
]

# Substring (lowercase) found in a Python dependency list -> framework tag
PYTHON_FRAMEWORKS: list[tuple[str, str]] = [
    ("flask", "Flask"),
    ("django", "Django"),
    ("fastapi", "FastAPI"),
    ("torch", "PyTorch"),
    ("tensorflow", "TensorFlow"),
]

PYTHON_DEPENDENCY_FILES = frozenset({"requirements.txt", "pyproject.toml", "pipfile"})

# Exact (lowercase) build descriptor name -> tool tag
BUILD_DESCRIPTORS: dict[str, str] = {
    "pom.xml": "Maven",
    "build.gradle": "Gradle",
    "build.gradle.kts": "Gradle",
    "cargo.toml": "Cargo",
    "go.mod": "Go Modules",
}


@dataclass(frozen=True)
class ManifestFlags:
    """Which of the suggestion-relevant manifests a file name is."""

    package_json: bool = False
    requirements_txt: bool = False
    pom_xml: bool = False
    dockerfile: bool = False


def _base_name(file_name: str) -> str:
    return file_name.replace("\\", "/").rsplit("/", 1)[-1].lower()


def _is_docker_file(name: str) -> bool:
    # Matches Dockerfile as well as docker-compose.yml and friends
    return name == "dockerfile" or name.startswith("docker")


def manifest_flags(file_name: str) -> ManifestFlags:
    """Classify a file name against the manifests tracked for suggestions."""
    name = _base_name(file_name)
    return ManifestFlags(
        package_json=name == "package.json",
        requirements_txt=name == "requirements.txt",
        pom_xml=name == "pom.xml",
        dockerfile=_is_docker_file(name),
    )


def detect_js_frameworks(content: str) -> list[str]:
    """Detect JavaScript/TypeScript frameworks from package.json text.

    Returns:
        ``["Node.js", ...]`` when the manifest parses as a JSON object,
        otherwise an empty list.
    """
    # ValueError covers JSONDecodeError and oversized integer literals;
    # RecursionError comes from deeply nested documents.
    try:
        pkg = json.loads(content)
    except (ValueError, RecursionError, TypeError):
        logger.debug("  Skipping unparseable package.json")
        return []
    if not isinstance(pkg, dict):
        logger.debug("  Skipping package.json that is not a JSON object")
        return []

    deps: dict = {}
    for section in ("dependencies", "devDependencies"):
        value = pkg.get(section)
        if isinstance(value, dict):
            deps.update(value)

    frameworks = ["Node.js"]
    for keys, tag in JS_FRAMEWORKS:
        if any(deps.get(key) for key in keys):
            frameworks.append(tag)
    return frameworks


def detect_python_frameworks(content: str) -> list[str]:
    """Detect Python frameworks from a plain-text dependency list."""
    frameworks: list[str] = []
    for line in content.lower().split("\n"):
        for keyword, tag in PYTHON_FRAMEWORKS:
            if keyword in line and tag not in frameworks:
                frameworks.append(tag)
    return frameworks


def detect(file_name: str, content: str) -> tuple[str, ...]:
    """Detect framework/tool tags contributed by one file.

    Args:
        file_name: Uploaded file name; only the base name is compared,
            case-insensitively.
        content: File text.

    Returns:
        Ordered, de-duplicated tags. Empty for files that are not
        recognized manifests.
    """
    name = _base_name(file_name)
    tags: list[str] = []

    if name == "package.json":
        tags.extend(detect_js_frameworks(content))
    if name in PYTHON_DEPENDENCY_FILES:
        tags.extend(detect_python_frameworks(content))
    if name in BUILD_DESCRIPTORS:
        tags.append(BUILD_DESCRIPTORS[name])
    if _is_docker_file(name):
        tags.append("Docker")

    return tuple(dict.fromkeys(tags))
