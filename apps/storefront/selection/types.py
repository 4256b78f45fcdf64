"""
Value types shared by the selection engine.

Everything here is immutable. Descriptors compare structurally so the same
attribute value coming from two different variants collapses to one entry.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class InvalidVariantData(ValueError):
    """Raised when a variant is built from data that breaks the catalog rules."""


class SelectionPhase(str, Enum):
    INITIAL = 'initial'
    PARTIAL = 'partial'
    COMPLETE = 'complete'


class Rejection(str, Enum):
    """Why a toggle or deselect request left the selection untouched."""
    UNKNOWN_ATTRIBUTE = 'unknown_attribute'
    UNKNOWN_VALUE = 'unknown_value'
    ALREADY_SELECTED = 'already_selected'
    UNAVAILABLE_VALUE = 'unavailable_value'
    NOT_SELECTED = 'not_selected'


class MatchStatus(str, Enum):
    INCOMPLETE = 'incomplete'
    MATCHED = 'matched'
    NO_MATCH = 'no_match'
    AMBIGUOUS = 'ambiguous'


@dataclass(frozen=True)
class ValueDescriptor:
    """
    One selectable value of an attribute.

    Equality and hashing use (attribute, value, hex_color, image_ref) only;
    `kind` and `display_value` are presentation hints.
    """
    attribute: str
    value: str
    hex_color: Optional[str] = None
    image_ref: Optional[str] = None
    kind: str = field(default='text', compare=False)
    display_value: str = field(default='', compare=False)

    @property
    def key(self) -> Tuple[str, str, Optional[str], Optional[str]]:
        return (self.attribute, self.value, self.hex_color, self.image_ref)

    def get_display_value(self) -> str:
        return self.display_value or self.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attribute': self.attribute,
            'value': self.value,
            'display_value': self.get_display_value(),
            'kind': self.kind,
            'hex_color': self.hex_color,
            'image_ref': self.image_ref,
        }


# A variant's assignment of one attribute carries the same data as the
# descriptor offered to the shopper.
VariationAssignment = ValueDescriptor


@dataclass(frozen=True)
class Variant:
    """
    One purchasable SKU: a full attribute assignment plus stock and price.
    """
    id: Any
    sku: str
    stock: int
    price: Decimal
    assignments: Tuple[ValueDescriptor, ...] = ()
    slug: str = ''

    def __post_init__(self):
        assignments = tuple(self.assignments)
        object.__setattr__(self, 'assignments', assignments)

        if self.stock < 0:
            raise InvalidVariantData(
                f"Variant {self.sku!r} has negative stock ({self.stock})"
            )

        seen = set()
        for assignment in assignments:
            if assignment.attribute in seen:
                raise InvalidVariantData(
                    f"Variant {self.sku!r} assigns {assignment.attribute!r} more than once"
                )
            seen.add(assignment.attribute)

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0

    def value_of(self, attribute: str) -> Optional[str]:
        for assignment in self.assignments:
            if assignment.attribute == attribute:
                return assignment.value
        return None

    def has(self, attribute: str, value: str) -> bool:
        return self.value_of(attribute) == value

    def get_options_dict(self) -> Dict[str, str]:
        """Return dict of {attribute: value}"""
        return {a.attribute: a.value for a in self.assignments}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sku': self.sku,
            'slug': self.slug,
            'stock': self.stock,
            'price': str(self.price),
            'is_in_stock': self.is_in_stock,
            'attributes': self.get_options_dict(),
        }


@dataclass(frozen=True)
class AvailabilityResult:
    is_available: bool
    available_stock: int
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_available': self.is_available,
            'available_stock': self.available_stock,
            'reasons': list(self.reasons),
        }


def selection_items(selection: Dict[str, str], exclude: Optional[str] = None) -> Iterable[Tuple[str, str]]:
    """Iterate (attribute, value) pairs of a selection, skipping `exclude`."""
    for attribute, value in selection.items():
        if attribute != exclude:
            yield attribute, value
