"""
Subtyping and resolvability over type names.

Types are plain strings as written in declarations. A name resolves to a
class of the graph (by qualified or unambiguous simple name), to a known
library type, to a primitive, or to the universal top.
"""

from __future__ import annotations

from ..app import config
from ..model.graph import ClassGraph
from .navigator import HierarchyNavigator


def is_primitive(type_name: str) -> bool:
    return type_name.strip() in config.PRIMITIVE_TYPES


def is_void(type_name: str) -> bool:
    return type_name.strip() == config.VOID_TYPE


def is_reference(type_name: str) -> bool:
    return not is_primitive(type_name) and not is_void(type_name)


def erasure(type_name: str) -> str:
    """Drop generic arguments: `List<String>` becomes `List`."""
    return type_name.split("<", 1)[0].strip()


def type_arguments(type_name: str) -> list[str]:
    """Top-level generic arguments of `type_name`, in order."""
    start = type_name.find("<")
    if start < 0 or not type_name.rstrip().endswith(">"):
        return []
    inner = type_name[start + 1 : type_name.rstrip().rfind(">")]
    args: list[str] = []
    depth = 0
    current = ""
    for char in inner:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            args.append(current.strip())
            current = ""
        else:
            current += char
    if current.strip():
        args.append(current.strip())
    return args


class TypeSystem:
    """Answers subtype and visibility-of-type questions for one class graph."""

    def __init__(self, graph: ClassGraph, navigator: HierarchyNavigator | None = None):
        self.graph = graph
        self.navigator = navigator or HierarchyNavigator(graph)

    def canonical(self, type_name: str) -> str:
        name = type_name.strip()
        if name in config.TOP_TYPE_ALIASES:
            return config.UNIVERSAL_TOP_TYPE
        package, _, simple = name.rpartition(".")
        if package in config.KNOWN_EXTERNAL_PACKAGES and simple in config.KNOWN_EXTERNAL_TYPES:
            return simple
        node = self.graph.lookup(name)
        return node.qualified_name if node is not None else name

    def is_top(self, type_name: str) -> bool:
        return self.canonical(type_name) == config.UNIVERSAL_TOP_TYPE

    def same_type(self, a: str, b: str) -> bool:
        return self.canonical(a) == self.canonical(b)

    def supertypes_of(self, type_name: str) -> list[str]:
        """Proper supertypes nearest first, excluding the universal top."""
        if not is_reference(type_name):
            return []
        chain: list[str] = []
        name = self.canonical(erasure(type_name))
        node = self.graph.get(name)
        if node is not None:
            ancestors = self.navigator.ancestors_of(node)
            chain.extend(a.qualified_name for a in ancestors)
            last = ancestors[-1] if ancestors else node
            tail = last.supertype
            if tail is None or tail in config.TOP_TYPE_ALIASES or self.graph.lookup(tail):
                return chain
            name = tail
            chain.append(name)
        while name in config.KNOWN_EXTERNAL_SUPERTYPES:
            name = config.KNOWN_EXTERNAL_SUPERTYPES[name]
            chain.append(name)
        return chain

    def is_subtype(self, sub: str, sup: str) -> bool:
        """Reflexive subtype test; primitives relate only to themselves."""
        a, b = self.canonical(sub), self.canonical(sup)
        if a == b:
            return True
        if not is_reference(a) or not is_reference(b):
            return False
        if b == config.UNIVERSAL_TOP_TYPE:
            return True
        if type_arguments(b):
            return False
        return b in self.supertypes_of(a)

    def related(self, a: str, b: str) -> bool:
        return self.is_subtype(a, b) or self.is_subtype(b, a)

    def is_resolvable(self, type_name: str) -> bool:
        """Whether `type_name` names something visible without new imports of unknown code."""
        name = type_name.strip()
        if name.endswith("[]"):
            return self.is_resolvable(name[:-2])
        if is_primitive(name) or is_void(name) or name in config.TOP_TYPE_ALIASES:
            return True
        base = erasure(name)
        if not all(self.is_resolvable(arg) for arg in type_arguments(name)):
            return False
        return (
            self.canonical(base) in config.KNOWN_EXTERNAL_TYPES
            or base in self.graph.external_types
            or self.graph.lookup(base) is not None
        )


__all__ = [
    "TypeSystem",
    "erasure",
    "is_primitive",
    "is_reference",
    "is_void",
    "type_arguments",
]
