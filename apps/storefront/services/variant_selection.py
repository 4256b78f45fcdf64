"""
Service exposing the selection engine to HTTP clients.

Requests are stateless: the client sends back the selection it holds, the
service replays it on a fresh state machine and applies the new request.
"""

import logging
from typing import Any, Dict, List, Optional

from apps.storefront.conf import selection_setting
from apps.storefront.models import Product
from apps.storefront.selection import SelectionStateMachine

from .variant_source import VariantSource

logger = logging.getLogger(__name__)


class SelectionSession:
    """A state machine loaded with one product, recording image changes."""

    def __init__(self, product: Product):
        self.product = product
        self.image_ref: Optional[str] = None
        self.discarded: List[Dict[str, str]] = []
        self.machine = SelectionStateMachine(
            on_image_change=self._record_image,
            attribute_conflicts=selection_setting('CONFLICT_ATTRIBUTION'),
        )
        self.attribute_groups = self.machine.initialize(VariantSource.load(product))

    def _record_image(self, image_ref: str):
        self.image_ref = image_ref

    def replay(self, selections: Dict[str, str]):
        """
        Re-apply a client-held selection in order.
        Entries the engine rejects (stale stock, unknown attribute) are dropped and reported.
        """
        for attribute, value in selections.items():
            payload = self.machine.toggle(attribute, value)
            if not payload.accepted:
                self.discarded.append({
                    'attribute': attribute,
                    'value': value,
                    'rejection': payload.rejection.value,
                })
        if self.discarded:
            logger.info(
                "Discarded stale selection entries for %s: %s",
                self.product.slug, self.discarded
            )
        # Images picked while replaying are not a change the shopper made now.
        self.image_ref = None

    def response(self, payload) -> Dict[str, Any]:
        data = payload.to_dict()
        data['product_slug'] = self.product.slug
        data['discarded'] = self.discarded
        data['image_ref'] = self.image_ref
        return data


class VariantSelectionService:
    """
    Entry points used by the storefront API.
    """

    @staticmethod
    def get_variant_options(product: Product) -> Dict[str, Any]:
        """
        Initialize selection for a product.

        Returns attribute groups (every distinct value of every attribute)
        together with the payload for an empty selection.
        """
        session = SelectionSession(product)
        data = session.response(session.machine.payload())
        data['attributes'] = [
            {
                'slug': attribute,
                'values': [descriptor.to_dict() for descriptor in descriptors],
            }
            for attribute, descriptors in session.attribute_groups.items()
        ]
        data['issues'] = [str(issue) for issue in session.machine.catalog.issues]
        return data

    @staticmethod
    def select(
        product: Product,
        selections: Dict[str, str],
        attribute: str,
        value: str
    ) -> Dict[str, Any]:
        session = SelectionSession(product)
        session.replay(selections)
        return session.response(session.machine.toggle(attribute, value))

    @staticmethod
    def deselect(
        product: Product,
        selections: Dict[str, str],
        attribute: str
    ) -> Dict[str, Any]:
        session = SelectionSession(product)
        session.replay(selections)
        return session.response(session.machine.deselect(attribute))

    @staticmethod
    def reset(product: Product) -> Dict[str, Any]:
        session = SelectionSession(product)
        return session.response(session.machine.reset())
