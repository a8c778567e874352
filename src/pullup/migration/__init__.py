from .fields import FieldMigrator
from .methods import MethodMigrator
from .plan import MigrationPlan
from .rewriter import CallSiteRewriter, CallSiteScan
from .stubs import StubSynthesizer

__all__ = [
    "CallSiteRewriter",
    "CallSiteScan",
    "FieldMigrator",
    "MethodMigrator",
    "MigrationPlan",
    "StubSynthesizer",
]
