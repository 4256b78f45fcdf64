"""
Variant selection engine.

Pure Python, no Django imports: given the variants of one product and a
shopper's partial choice of attribute values, tells which values can still be
picked, why the others can't, and which variant a complete choice resolves to.

Components:
- VariantCatalog: attribute groups inferred from the variants
- AvailabilityResolver: per-value availability and conflict reasons
- VariantMatcher: complete selection -> variant (stock-agnostic)
- ExplanationEngine: UI-ready payload
- SelectionStateMachine: owns the selection, entry point for hosts
"""

from .types import (
    AvailabilityResult,
    InvalidVariantData,
    MatchStatus,
    Rejection,
    SelectionPhase,
    ValueDescriptor,
    Variant,
    VariationAssignment,
)
from .catalog import AttributeGroups, CatalogIssue, VariantCatalog
from .resolver import (
    AvailabilityResolver,
    REASON_NOT_IN_COMBINATION,
    REASON_OUT_OF_STOCK,
)
from .matcher import MatchOutcome, VariantMatcher
from .explanation import ExplanationEngine, SelectionPayload, ValueOption
from .state import ImageChangeNotifier, SelectionStateMachine

__all__ = [
    'AttributeGroups',
    'AvailabilityResolver',
    'AvailabilityResult',
    'CatalogIssue',
    'ExplanationEngine',
    'ImageChangeNotifier',
    'InvalidVariantData',
    'MatchOutcome',
    'MatchStatus',
    'REASON_NOT_IN_COMBINATION',
    'REASON_OUT_OF_STOCK',
    'Rejection',
    'SelectionPayload',
    'SelectionPhase',
    'SelectionStateMachine',
    'ValueDescriptor',
    'ValueOption',
    'Variant',
    'VariantCatalog',
    'VariantMatcher',
    'VariationAssignment',
]
