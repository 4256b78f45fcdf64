"""
Resolves a complete selection to the variant it describes.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .catalog import VariantCatalog
from .types import MatchStatus, Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOutcome:
    status: MatchStatus
    candidates: Tuple[Variant, ...] = ()

    @property
    def variant(self) -> Optional[Variant]:
        if self.status is MatchStatus.MATCHED:
            return self.candidates[0]
        return None

    @property
    def is_integrity_problem(self) -> bool:
        """A complete selection that does not resolve to exactly one variant."""
        return self.status in (MatchStatus.NO_MATCH, MatchStatus.AMBIGUOUS)


class VariantMatcher:
    """
    Exact structural matching of a selection against the catalog.

    Stock is deliberately ignored here: a sold-out variant is still the
    variant the shopper picked. Stock exhaustion is reported by the
    availability resolver.
    """

    def __init__(self, catalog: VariantCatalog):
        self.catalog = catalog

    def is_complete(self, selection: Mapping[str, str]) -> bool:
        attributes = self.catalog.attributes
        return bool(attributes) and set(selection) == set(attributes)

    def evaluate(self, selection: Mapping[str, str]) -> MatchOutcome:
        if not self.is_complete(selection):
            return MatchOutcome(MatchStatus.INCOMPLETE)

        wanted = dict(selection)
        candidates = tuple(
            variant for variant in self.catalog.variants
            if variant.get_options_dict() == wanted
        )

        if len(candidates) == 1:
            return MatchOutcome(MatchStatus.MATCHED, candidates)

        if not candidates:
            logger.warning("No variant matches complete selection %s", wanted)
            return MatchOutcome(MatchStatus.NO_MATCH)

        logger.warning(
            "Selection %s matches %d variants: %s",
            wanted, len(candidates), ', '.join(v.sku for v in candidates)
        )
        return MatchOutcome(MatchStatus.AMBIGUOUS, candidates)

    def match(self, selection: Mapping[str, str]) -> Optional[Variant]:
        """Return the single variant for a complete selection, or None."""
        return self.evaluate(selection).variant
