"""Language classification by file extension."""

from narrato.models.analysis import LanguageTag

# Language detection by file extension (lowercase, without the dot)
LANGUAGE_EXTENSIONS: dict[str, LanguageTag] = {
    "py": LanguageTag.PYTHON,
    "pyw": LanguageTag.PYTHON,
    "js": LanguageTag.JAVASCRIPT,
    "jsx": LanguageTag.JAVASCRIPT,
    "mjs": LanguageTag.JAVASCRIPT,
    "cjs": LanguageTag.JAVASCRIPT,
    "ts": LanguageTag.TYPESCRIPT,
    "tsx": LanguageTag.TYPESCRIPT,
    "java": LanguageTag.JAVA,
    "go": LanguageTag.GO,
    "rs": LanguageTag.RUST,
    "c": LanguageTag.C,
    "h": LanguageTag.C,
    "cpp": LanguageTag.CPP,
    "cc": LanguageTag.CPP,
    "cxx": LanguageTag.CPP,
    "hpp": LanguageTag.CPP,
    "hh": LanguageTag.CPP,
    "json": LanguageTag.JSON,
    "md": LanguageTag.MARKDOWN,
}

# Human-readable names used in the project summary
DISPLAY_NAMES: dict[LanguageTag, str] = {
    LanguageTag.PYTHON: "Python",
    LanguageTag.JAVASCRIPT: "JavaScript",
    LanguageTag.TYPESCRIPT: "TypeScript",
    LanguageTag.JAVA: "Java",
    LanguageTag.GO: "Go",
    LanguageTag.RUST: "Rust",
    LanguageTag.C: "C",
    LanguageTag.CPP: "C++",
}


def extension_of(file_name: str) -> str:
    """Return the lowercase text after the last dot, or 'unknown'."""
    _, dot, ext = file_name.rpartition(".")
    if not dot or not ext:
        return "unknown"
    return ext.lower()


def classify(file_name: str) -> LanguageTag:
    """Map a file name to its language tag.

    Args:
        file_name: File name, with or without an extension.

    Returns:
        The language tag, ``LanguageTag.UNKNOWN`` when the extension is
        missing or not recognized.
    """
    return LANGUAGE_EXTENSIONS.get(extension_of(file_name), LanguageTag.UNKNOWN)


def display_name(language: LanguageTag) -> str | None:
    """Return the summary name for a code language, None for data formats."""
    return DISPLAY_NAMES.get(language)
