from .conflicts import ConflictCheck, ConflictChecker, ConflictOutcome
from .dependencies import DependencyAnalyzer, DependencyFinding, DependencyKind, DependencyReport
from .resolution import MemberResolver, Scope

__all__ = [
    "ConflictCheck",
    "ConflictChecker",
    "ConflictOutcome",
    "DependencyAnalyzer",
    "DependencyFinding",
    "DependencyKind",
    "DependencyReport",
    "MemberResolver",
    "Scope",
]
