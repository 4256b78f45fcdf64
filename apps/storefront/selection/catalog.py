"""
Normalizes a flat variant list into attribute groups.

Attributes are not configured anywhere: they are INFERRED from the variants,
in the order they first appear.
"""

import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .types import ValueDescriptor, Variant

logger = logging.getLogger(__name__)

AttributeGroups = Dict[str, Tuple[ValueDescriptor, ...]]


@dataclass(frozen=True)
class CatalogIssue:
    """A variant that does not assign a value to one of the catalog attributes."""
    sku: str
    attribute: str

    def __str__(self):
        return f"{self.sku} has no value for {self.attribute}"


class VariantCatalog:
    """
    Immutable view over the variants of one product.

    Holds the attribute groups, an (attribute, value) -> variant positions
    index used by the resolver, and a fingerprint identifying the data.
    """

    def __init__(self, variants: Iterable[Variant] = ()):
        self.variants: Tuple[Variant, ...] = tuple(variants)
        self.groups: AttributeGroups = self.build(self.variants)
        self._index = self._build_index(self.variants)
        self.issues: Tuple[CatalogIssue, ...] = self._find_issues()
        self.fingerprint = self._fingerprint(self.variants)

        for issue in self.issues:
            logger.warning("Incomplete variant in catalog: %s", issue)

    @staticmethod
    def build(variants: Iterable[Variant]) -> AttributeGroups:
        """
        Group every variant assignment by attribute.

        Descriptors are deduplicated by structural equality; first-seen order
        is kept for both attributes and values.
        """
        groups: Dict[str, Dict[ValueDescriptor, None]] = {}
        for variant in variants:
            for assignment in variant.assignments:
                groups.setdefault(assignment.attribute, {})[assignment] = None
        return {attribute: tuple(values) for attribute, values in groups.items()}

    @staticmethod
    def _build_index(variants: Tuple[Variant, ...]) -> Dict[Tuple[str, str], FrozenSet[int]]:
        index: Dict[Tuple[str, str], set] = {}
        for position, variant in enumerate(variants):
            for assignment in variant.assignments:
                index.setdefault((assignment.attribute, assignment.value), set()).add(position)
        return {key: frozenset(positions) for key, positions in index.items()}

    @staticmethod
    def _fingerprint(variants: Tuple[Variant, ...]) -> str:
        payload = [
            [
                str(v.id),
                v.sku,
                v.stock,
                [list(a.key) for a in v.assignments],
            ]
            for v in variants
        ]
        raw = json.dumps(payload, separators=(',', ':'), default=str)
        return hashlib.sha1(raw.encode('utf-8')).hexdigest()

    def _find_issues(self) -> Tuple[CatalogIssue, ...]:
        issues = []
        for variant in self.variants:
            assigned = set(variant.get_options_dict())
            for attribute in self.groups:
                if attribute not in assigned:
                    issues.append(CatalogIssue(sku=variant.sku, attribute=attribute))
        return tuple(issues)

    @property
    def attributes(self) -> List[str]:
        return list(self.groups)

    def has_attribute(self, attribute: str) -> bool:
        return attribute in self.groups

    def descriptors(self, attribute: str) -> Tuple[ValueDescriptor, ...]:
        return self.groups.get(attribute, ())

    def descriptor(self, attribute: str, value: str) -> Optional[ValueDescriptor]:
        """First descriptor offered for `attribute` with the given value."""
        for descriptor in self.descriptors(attribute):
            if descriptor.value == value:
                return descriptor
        return None

    def positions_with(self, attribute: str, value: str) -> FrozenSet[int]:
        return self._index.get((attribute, value), frozenset())

    def variants_with(self, attribute: str, value: str) -> List[Variant]:
        return [self.variants[i] for i in sorted(self.positions_with(attribute, value))]

    def __len__(self):
        return len(self.variants)

    def __repr__(self):
        return f"<VariantCatalog variants={len(self.variants)} attributes={self.attributes}>"
