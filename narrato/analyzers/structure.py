"""Line-based structure extraction.

Scans file text one line at a time and pulls out class/type declarations,
function declarations, import specifiers, exported names, and a rough
complexity count. This is a regex heuristic, not a parser: there is no
statement joining and no awareness of comments or string literals, so
results over- and under-count in predictable ways.
"""

import hashlib
import re
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field

from narrato.models.analysis import LanguageTag, StructureRecord

# A trimmed line containing any of these counts once toward complexity.
# Matches inside comments and strings are counted too.
BRANCH_KEYWORDS = ("if ", "for ", "while ", "switch ", "case ")

# Python
PY_CLASS = re.compile(r"^class\s+(\w+)")
PY_FUNCTION = re.compile(r"^(?:async\s+)?def\s+(\w+)")
PY_FROM_IMPORT = re.compile(r"^from\s+([\w.]+)\s+import\b")
PY_IMPORT = re.compile(r"^import\s+([\w.]+)")

# JavaScript / TypeScript
JS_CLASS = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+(\w+)")
JS_FUNCTION = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\*?\s+(\w+)")
JS_ARROW = re.compile(
    r"^(?:export\s+)?const\s+(\w+)\s*(?::[^=]*)?=\s*(?:async\s*)?\([^)]*\)\s*(?::[^=]*)?=>"
)
JS_IMPORT = re.compile(
    r"""^import\s+(?:(?:type\s+)?(?:\{[^}]*\}|\*\s+as\s+\w+|\w+)"""
    r"""(?:\s*,\s*(?:\{[^}]*\}|\*\s+as\s+\w+))?\s+from\s+)?['"]([^'"]+)['"]"""
)
JS_REQUIRE = re.compile(r"""\brequire\s*\(\s*['"]([^'"]+)['"]\s*\)""")
JS_EXPORT = re.compile(
    r"^export\s+(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
    r"(?:class|function\*?|const|let|var|interface|type|enum)\s+(\w+)"
)

# Java
JAVA_CLASS = re.compile(
    r"^(?:public\s+|private\s+|protected\s+)?(?:static\s+)?(?:abstract\s+|final\s+)?"
    r"(?:class|interface|enum|record)\s+(\w+)"
)
JAVA_METHOD = re.compile(
    r"^(?:public|private|protected)\s+(?:static\s+)?(?:final\s+)?(?:[\w<>\[\],]+\s+)?(\w+)\s*\("
)
JAVA_IMPORT = re.compile(r"^import\s+(?:static\s+)?([\w.*]+)\s*;")

# Go
GO_TYPE = re.compile(r"^type\s+(\w+)\s+(?:struct|interface)\b")
GO_FUNC = re.compile(r"^func\s+(?:\([^)]*\)\s*)?(\w+)\s*[(\[]")
GO_IMPORT = re.compile(r'^import\s+(?:[\w.]+\s+)?"([^"]+)"')
GO_IMPORT_BLOCK = re.compile(r"^import\s*\($")
GO_IMPORT_SPEC = re.compile(r'^(?:[\w.]+\s+)?"([^"]+)"')

# Rust
_RUST_VIS = r"(?:pub(?:\([^)]*\))?\s+)?"
RUST_TYPE = re.compile(rf"^{_RUST_VIS}(?:struct|enum|trait)\s+(\w+)")
RUST_FN = re.compile(
    rf'^{_RUST_VIS}(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?(?:extern\s+"[^"]*"\s+)?fn\s+(\w+)'
)
RUST_USE = re.compile(rf"^{_RUST_VIS}use\s+([\w:]+)")
RUST_MOD = re.compile(rf"^{_RUST_VIS}mod\s+(\w+)\s*;")

# C / C++
C_INCLUDE = re.compile(r'^#\s*include\s*[<"]([^>"]+)[>"]')
C_TYPE = re.compile(r"^(?:template\s*<[^>]*>\s*)?(?:typedef\s+)?(?:class|struct)\s+(\w+)\b(?!\s*;)")
C_FUNCTION = re.compile(
    r"^(?:(?:static|inline|extern|virtual|const|unsigned|signed)\s+)*[\w:<>]+[\s*&]+"
    r"(?!(?:if|for|while|switch|return|else)\b)(~?[\w:]+)\s*\([^;]*$"
)


@dataclass
class _Collected:
    """Mutable scratch space for a single file scan."""

    classes: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)


def _scan_python(lines: list[str]) -> _Collected:
    out = _Collected()
    for raw in lines:
        line = raw.strip()
        top_level = bool(raw) and not raw[0].isspace()

        if match := PY_CLASS.match(line):
            out.classes.append(match.group(1))
            if top_level and not match.group(1).startswith("_"):
                out.exports.append(match.group(1))

        if match := PY_FUNCTION.match(line):
            out.functions.append(match.group(1))
            if top_level and not match.group(1).startswith("_"):
                out.exports.append(match.group(1))

        if match := PY_FROM_IMPORT.match(line) or PY_IMPORT.match(line):
            out.imports.append(match.group(1))
    return out


def _scan_javascript(lines: list[str]) -> _Collected:
    out = _Collected()
    for raw in lines:
        line = raw.strip()

        if match := JS_CLASS.match(line):
            out.classes.append(match.group(1))

        if match := JS_FUNCTION.match(line):
            out.functions.append(match.group(1))
        if match := JS_ARROW.match(line):
            out.functions.append(match.group(1))

        if match := JS_IMPORT.match(line):
            out.imports.append(match.group(1))
        out.imports.extend(JS_REQUIRE.findall(line))

        if match := JS_EXPORT.match(line):
            out.exports.append(match.group(1))
    return out


def _scan_java(lines: list[str]) -> _Collected:
    out = _Collected()
    for raw in lines:
        line = raw.strip()

        if match := JAVA_CLASS.match(line):
            out.classes.append(match.group(1))
            if line.startswith("public"):
                out.exports.append(match.group(1))
        elif match := JAVA_METHOD.match(line):
            out.functions.append(match.group(1))

        if match := JAVA_IMPORT.match(line):
            out.imports.append(match.group(1))
    return out


def _scan_go(lines: list[str]) -> _Collected:
    out = _Collected()
    in_import_block = False
    for raw in lines:
        line = raw.strip()

        if in_import_block:
            if line.startswith(")"):
                in_import_block = False
            elif match := GO_IMPORT_SPEC.match(line):
                out.imports.append(match.group(1))
            continue

        if GO_IMPORT_BLOCK.match(line):
            in_import_block = True
            continue
        if match := GO_IMPORT.match(line):
            out.imports.append(match.group(1))

        if match := GO_TYPE.match(line):
            out.classes.append(match.group(1))
            if match.group(1)[0].isupper():
                out.exports.append(match.group(1))

        if match := GO_FUNC.match(line):
            out.functions.append(match.group(1))
            if match.group(1)[0].isupper():
                out.exports.append(match.group(1))
    return out


def _scan_rust(lines: list[str]) -> _Collected:
    out = _Collected()
    for raw in lines:
        line = raw.strip()
        public = line.startswith(("pub ", "pub("))

        if match := RUST_TYPE.match(line):
            out.classes.append(match.group(1))
            if public:
                out.exports.append(match.group(1))

        if match := RUST_FN.match(line):
            out.functions.append(match.group(1))
            if public:
                out.exports.append(match.group(1))

        if match := RUST_USE.match(line):
            out.imports.append(match.group(1).rstrip(":"))
        elif match := RUST_MOD.match(line):
            out.imports.append(match.group(1))
    return out


def _scan_c_family(lines: list[str]) -> _Collected:
    out = _Collected()
    for raw in lines:
        line = raw.strip()

        if match := C_INCLUDE.match(line):
            out.imports.append(match.group(1))
            continue

        if match := C_TYPE.match(line):
            out.classes.append(match.group(1))
        # Definitions start at column 0; indented matches are usually calls.
        elif raw and not raw[0].isspace() and (match := C_FUNCTION.match(line)):
            out.functions.append(match.group(1))
    return out


Scanner = Callable[[list[str]], _Collected]

SCANNERS: dict[LanguageTag, Scanner] = {
    LanguageTag.PYTHON: _scan_python,
    LanguageTag.JAVASCRIPT: _scan_javascript,
    LanguageTag.TYPESCRIPT: _scan_javascript,
    LanguageTag.JAVA: _scan_java,
    LanguageTag.GO: _scan_go,
    LanguageTag.RUST: _scan_rust,
    LanguageTag.C: _scan_c_family,
    LanguageTag.CPP: _scan_c_family,
}


def is_supported(language: LanguageTag) -> bool:
    """Whether the extractor has line rules for this language."""
    return language in SCANNERS


def count_complexity(lines: list[str]) -> int:
    """Count lines that contain a branching keyword."""
    return sum(1 for line in lines if any(kw in line.strip() for kw in BRANCH_KEYWORDS))


def extract(content: str, language: LanguageTag) -> StructureRecord:
    """Extract a structure record from file text.

    Args:
        content: Raw file text.
        language: Language tag of the file.

    Returns:
        StructureRecord for the file. Languages without line rules yield an
        empty record with zero complexity.
    """
    scanner = SCANNERS.get(language)
    if scanner is None or not content:
        return StructureRecord()

    lines = content.split("\n")
    collected = scanner(lines)
    return StructureRecord(
        classes=tuple(collected.classes),
        functions=tuple(collected.functions),
        imports=tuple(collected.imports),
        exports=tuple(collected.exports),
        complexity=count_complexity(lines),
    )


def content_hash(content: str) -> str:
    """SHA-256 hex digest of file text."""
    return hashlib.sha256(content.encode("utf-8", errors="surrogatepass")).hexdigest()


class StructureCache:
    """Bounded LRU of extraction results keyed on content hash and language.

    Extraction is pure, so a cached record is always equal to a fresh one.
    Safe to share between threads.
    """

    def __init__(self, maxsize: int = 1024) -> None:
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple[str, LanguageTag], StructureRecord] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, content: str, language: LanguageTag) -> StructureRecord:
        """Return the record for ``content``, extracting it on a miss."""
        key = (content_hash(content), language)
        with self._lock:
            record = self._entries.get(key)
            if record is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return record

        record = extract(content, language)

        with self._lock:
            self.misses += 1
            self._entries[key] = record
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        return record

    def clear(self) -> None:
        """Drop all cached records and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
