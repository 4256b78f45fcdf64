"""
Availability of candidate attribute values under a partial selection.
"""

from typing import Dict, FrozenSet, List, Mapping

from .catalog import VariantCatalog
from .types import AvailabilityResult, Variant, selection_items

REASON_NOT_IN_COMBINATION = 'not available in this combination'
REASON_OUT_OF_STOCK = 'out of stock'
CONFLICT_REASON = 'not available with {value} {attribute}'

Availability = Dict[str, Dict[str, AvailabilityResult]]


class AvailabilityResolver:
    """
    Decides whether a value can still be picked given the other choices.

    Example:
        variants = Black/S (5), Black/M (0), White/S (3)
        selection = {'size': 'M'}
        resolve('color', 'Black', selection)
        -> unavailable, ['out of stock']
        resolve('color', 'White', selection)
        -> unavailable, ['not available in this combination',
                         'not available with M size']
    """

    def __init__(self, catalog: VariantCatalog, attribute_conflicts: bool = True):
        self.catalog = catalog
        self.attribute_conflicts = attribute_conflicts

    def _matching_positions(
        self,
        attribute: str,
        value: str,
        selection: Mapping[str, str],
        skip: str = None
    ) -> FrozenSet[int]:
        positions = self.catalog.positions_with(attribute, value)
        for other_attribute, other_value in selection_items(dict(selection), exclude=attribute):
            if not positions:
                break
            if other_attribute == skip:
                continue
            positions = positions & self.catalog.positions_with(other_attribute, other_value)
        return positions

    def matching_variants(
        self,
        attribute: str,
        value: str,
        selection: Mapping[str, str]
    ) -> List[Variant]:
        """
        Variants carrying `attribute=value` and every other selected value.

        The entry for `attribute` itself in `selection` is ignored.
        """
        positions = self._matching_positions(attribute, value, selection)
        return [self.catalog.variants[i] for i in sorted(positions)]

    def resolve(
        self,
        attribute: str,
        value: str,
        selection: Mapping[str, str]
    ) -> AvailabilityResult:
        """
        Compute availability of one candidate value.

        Args:
            attribute: Attribute the candidate belongs to
            value: Candidate value
            selection: Current selection; its entry for `attribute` is ignored

        Returns:
            AvailabilityResult with the in-stock total of matching variants
            and the reasons the value cannot be picked (empty if it can)
        """
        matching = self.matching_variants(attribute, value, selection)
        available = [v for v in matching if v.stock > 0]

        reasons = []
        if not matching:
            reasons.append(REASON_NOT_IN_COMBINATION)
            reasons.extend(self._conflicts(attribute, value, selection))
        elif not available:
            reasons.append(REASON_OUT_OF_STOCK)

        return AvailabilityResult(
            is_available=bool(available),
            available_stock=sum(v.stock for v in available),
            reasons=tuple(reasons),
        )

    def _conflicts(self, attribute: str, value: str, selection: Mapping[str, str]) -> List[str]:
        """
        Name the selected values that block the candidate on their own.

        Each other selected entry is dropped in turn; if the candidate then
        exists in some variant, that entry is reported as a conflict.
        """
        if not self.attribute_conflicts:
            return []

        conflicts = []
        for other_attribute, other_value in selection_items(dict(selection), exclude=attribute):
            if self._matching_positions(attribute, value, selection, skip=other_attribute):
                conflicts.append(
                    CONFLICT_REASON.format(value=other_value, attribute=other_attribute)
                )
        return conflicts

    def resolve_all(self, selection: Mapping[str, str]) -> Availability:
        """Availability of every value of every attribute under `selection`."""
        result: Availability = {}
        for attribute, descriptors in self.catalog.groups.items():
            per_value = result.setdefault(attribute, {})
            for descriptor in descriptors:
                if descriptor.value not in per_value:
                    per_value[descriptor.value] = self.resolve(attribute, descriptor.value, selection)
        return result
