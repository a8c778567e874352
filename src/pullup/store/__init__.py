from .documents import ClassDocument, ClassDocumentStore
from .modules import find_module_root, module_of

__all__ = ["ClassDocument", "ClassDocumentStore", "find_module_root", "module_of"]
