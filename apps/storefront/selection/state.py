"""
Selection state machine driving the catalog, resolver and matcher.

The machine owns a single mutable value: the current selection. It is meant
to be driven by one caller at a time.
"""

import dataclasses
import hashlib
import json
import logging
from typing import Callable, Dict, Iterable, Optional, Union

from .catalog import AttributeGroups, VariantCatalog
from .explanation import ExplanationEngine, SelectionPayload
from .matcher import VariantMatcher
from .resolver import AvailabilityResolver
from .types import Rejection, SelectionPhase, ValueDescriptor, Variant

logger = logging.getLogger(__name__)

ImageChangeNotifier = Callable[[str], None]


class SelectionStateMachine:
    """
    INITIAL -> PARTIAL -> COMPLETE, driven by toggle/deselect/reset.

    Rejected requests never change the selection; they return the current
    payload flagged with the rejection code.
    """

    def __init__(
        self,
        on_image_change: Optional[ImageChangeNotifier] = None,
        attribute_conflicts: bool = True,
        explanation: Optional[ExplanationEngine] = None,
    ):
        self.on_image_change = on_image_change
        self.attribute_conflicts = attribute_conflicts
        self.explanation = explanation or ExplanationEngine()
        self.selection: Dict[str, str] = {}
        self._cache: Dict[str, SelectionPayload] = {}
        self._load(VariantCatalog())

    def _load(self, catalog: VariantCatalog):
        self.catalog = catalog
        self.resolver = AvailabilityResolver(catalog, attribute_conflicts=self.attribute_conflicts)
        self.matcher = VariantMatcher(catalog)
        self.selection = {}
        self._cache = {}

    def initialize(self, variants: Iterable[Variant]) -> AttributeGroups:
        """Load a product's variants. Any previous product's state is discarded."""
        self._load(VariantCatalog(variants))
        logger.debug(
            "Selection initialized: %d variants, attributes %s",
            len(self.catalog), self.catalog.attributes
        )
        return self.catalog.groups

    @property
    def phase(self) -> SelectionPhase:
        return ExplanationEngine.phase(self.catalog, self.selection)

    def fingerprint(self) -> str:
        # Selection order is part of the key: conflict reasons follow it.
        raw = json.dumps(
            [self.catalog.fingerprint, list(self.selection.items())],
            separators=(',', ':')
        )
        return hashlib.sha1(raw.encode('utf-8')).hexdigest()

    def payload(self) -> SelectionPayload:
        """Payload for the current selection, without changing anything."""
        key = self.fingerprint()
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        availability = self.resolver.resolve_all(self.selection)
        outcome = self.matcher.evaluate(self.selection)
        payload = self.explanation.explain(self.catalog, self.selection, availability, outcome)
        self._cache[key] = payload
        return payload

    def _reject(self, code: Rejection, attribute: str, value=None) -> SelectionPayload:
        logger.debug("Selection request rejected (%s): %s=%r", code.value, attribute, value)
        return dataclasses.replace(self.payload(), accepted=False, rejection=code)

    def _descriptor_for(
        self,
        attribute: str,
        value: Union[ValueDescriptor, str]
    ) -> Optional[ValueDescriptor]:
        if isinstance(value, ValueDescriptor):
            if value.attribute != attribute:
                return None
            if value in self.catalog.descriptors(attribute):
                return value
            value = value.value
        return self.catalog.descriptor(attribute, value)

    def toggle(self, attribute: str, value: Union[ValueDescriptor, str]) -> SelectionPayload:
        """
        Choose `value` for `attribute`.

        The request is a no-op when the attribute is unknown, the value was
        never offered, it is already the chosen value, or it is not
        available given the other chosen values.
        """
        if not self.catalog.has_attribute(attribute):
            return self._reject(Rejection.UNKNOWN_ATTRIBUTE, attribute, value)

        descriptor = self._descriptor_for(attribute, value)
        if descriptor is None:
            return self._reject(Rejection.UNKNOWN_VALUE, attribute, value)

        if self.selection.get(attribute) == descriptor.value:
            return self._reject(Rejection.ALREADY_SELECTED, attribute, descriptor.value)

        others = {k: v for k, v in self.selection.items() if k != attribute}
        if not self.resolver.resolve(attribute, descriptor.value, others).is_available:
            return self._reject(Rejection.UNAVAILABLE_VALUE, attribute, descriptor.value)

        self.selection[attribute] = descriptor.value
        if descriptor.image_ref and self.on_image_change:
            self.on_image_change(descriptor.image_ref)

        return self.payload()

    def deselect(self, attribute: str) -> SelectionPayload:
        """Drop the choice made for one attribute."""
        if not self.catalog.has_attribute(attribute):
            return self._reject(Rejection.UNKNOWN_ATTRIBUTE, attribute)
        if attribute not in self.selection:
            return self._reject(Rejection.NOT_SELECTED, attribute)

        del self.selection[attribute]
        return self.payload()

    def reset(self) -> SelectionPayload:
        self.selection.clear()
        return self.payload()
