"""
Configuration for the pullup refactoring engine.
"""

from pathlib import Path
from typing import Final

# --- Type System ---
UNIVERSAL_TOP_TYPE: Final[str] = "Object"
TOP_TYPE_ALIASES: Final[frozenset[str]] = frozenset({"Object", "java.lang.Object"})
VOID_TYPE: Final[str] = "void"
PRIMITIVE_TYPES: Final[frozenset[str]] = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double"}
)
# Types that resolve from any location without being declared in the graph.
KNOWN_EXTERNAL_TYPES: Final[frozenset[str]] = frozenset(
    {
        "String",
        "Integer",
        "Long",
        "Short",
        "Byte",
        "Character",
        "Boolean",
        "Double",
        "Float",
        "Number",
        "CharSequence",
        "Runnable",
        "List",
        "Map",
        "Set",
        "Collection",
        "Optional",
    }
)
# Packages whose members are written either qualified or by simple name.
KNOWN_EXTERNAL_PACKAGES: Final[tuple[str, ...]] = ("java.lang", "java.util")
# Subtype edges between known external types, child -> parent.
KNOWN_EXTERNAL_SUPERTYPES: Final[dict[str, str]] = {
    "Integer": "Number",
    "Long": "Number",
    "Short": "Number",
    "Byte": "Number",
    "Double": "Number",
    "Float": "Number",
}

# --- Code Synthesis ---
OVERRIDE_MARKER: Final[str] = "@Override"
STUB_EXCEPTION_TYPE: Final[str] = "UnsupportedOperationException"
STUB_EXCEPTION_MESSAGE: Final[str] = "Not implemented"
SUPER_CALL_REMOVED_MARKER: Final[str] = (
    "super.{name}() call removed: {owner}.{name} is now abstract and no concrete "
    "implementation exists above it"
)

# --- Source Documents ---
CLASS_DOCUMENT_SUFFIX: Final[str] = ".class.json"
MODULE_MANIFEST_NAMES: Final[tuple[str, ...]] = (
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
    "pyproject.toml",
)
DOCUMENT_INDENT: Final[int] = 2

# --- Snapshot ---
SNAPSHOT_DIR_NAME: Final[str] = ".pullup-snapshot"
SNAPSHOT_MANIFEST_NAME: Final[str] = "manifest.json"

# --- UI Configuration ---
RICH_SYNTAX_THEME: Final[str] = "monokai"
RENDER_INDENT: Final[str] = "    "

# --- Logging ---
LOG_FORMAT: Final[str] = "%(message)s"
DEFAULT_WORKING_DIR: Final[Path] = Path(".")

# --- SSoT Enforcement ---
__all__ = [
    "CLASS_DOCUMENT_SUFFIX",
    "DEFAULT_WORKING_DIR",
    "DOCUMENT_INDENT",
    "KNOWN_EXTERNAL_PACKAGES",
    "KNOWN_EXTERNAL_SUPERTYPES",
    "KNOWN_EXTERNAL_TYPES",
    "LOG_FORMAT",
    "MODULE_MANIFEST_NAMES",
    "OVERRIDE_MARKER",
    "PRIMITIVE_TYPES",
    "RENDER_INDENT",
    "RICH_SYNTAX_THEME",
    "SNAPSHOT_DIR_NAME",
    "SNAPSHOT_MANIFEST_NAME",
    "STUB_EXCEPTION_MESSAGE",
    "STUB_EXCEPTION_TYPE",
    "SUPER_CALL_REMOVED_MARKER",
    "TOP_TYPE_ALIASES",
    "UNIVERSAL_TOP_TYPE",
    "VOID_TYPE",
]
