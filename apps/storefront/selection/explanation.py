"""
Turns resolver and matcher output into the payload returned to the UI.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .catalog import VariantCatalog
from .matcher import MatchOutcome
from .resolver import Availability
from .types import MatchStatus, Rejection, SelectionPhase, Variant


@dataclass(frozen=True)
class ValueOption:
    """One row of the per-value availability list."""
    value: str
    display_value: str
    kind: str
    hex_color: Optional[str]
    image_ref: Optional[str]
    is_selected: bool
    is_available: bool
    available_stock: int
    reasons: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'display_value': self.display_value,
            'kind': self.kind,
            'hex_color': self.hex_color,
            'image_ref': self.image_ref,
            'is_selected': self.is_selected,
            'is_available': self.is_available,
            'available_stock': self.available_stock,
            'reasons': list(self.reasons),
        }


@dataclass(frozen=True)
class SelectionPayload:
    """
    Everything the UI needs after one request.

    The mappings are read-only views over private copies, so a payload can be
    cached and handed out again.
    """
    selection: Mapping[str, str]
    per_value_availability: Mapping[str, Tuple[ValueOption, ...]]
    matched_variant: Optional[Variant]
    match_status: MatchStatus
    missing_attributes: Tuple[str, ...]
    prompt: str
    phase: SelectionPhase
    accepted: bool = True
    rejection: Optional[Rejection] = None

    def __post_init__(self):
        object.__setattr__(self, 'selection', MappingProxyType(dict(self.selection)))
        object.__setattr__(
            self,
            'per_value_availability',
            MappingProxyType({
                attribute: tuple(options)
                for attribute, options in self.per_value_availability.items()
            }),
        )

    def option(self, attribute: str, value: str) -> Optional[ValueOption]:
        for option in self.per_value_availability.get(attribute, ()):
            if option.value == value:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'selection': dict(self.selection),
            'per_value_availability': {
                attribute: [option.to_dict() for option in options]
                for attribute, options in self.per_value_availability.items()
            },
            'matched_variant': self.matched_variant.to_dict() if self.matched_variant else None,
            'match_status': self.match_status.value,
            'missing_attributes': list(self.missing_attributes),
            'prompt': self.prompt,
            'phase': self.phase.value,
            'accepted': self.accepted,
            'rejection': self.rejection.value if self.rejection else None,
        }


@dataclass
class ExplanationEngine:
    prompt_prefix: str = field(default='Please choose: ')

    @staticmethod
    def missing_attributes(catalog: VariantCatalog, selection: Mapping[str, str]) -> List[str]:
        return [attribute for attribute in catalog.attributes if attribute not in selection]

    def prompt(self, missing: List[str]) -> str:
        if not missing:
            return ''
        return self.prompt_prefix + ', '.join(missing)

    @staticmethod
    def phase(catalog: VariantCatalog, selection: Mapping[str, str]) -> SelectionPhase:
        if not selection:
            return SelectionPhase.INITIAL
        if len(selection) == len(catalog.attributes):
            return SelectionPhase.COMPLETE
        return SelectionPhase.PARTIAL

    @staticmethod
    def options(
        catalog: VariantCatalog,
        selection: Mapping[str, str],
        availability: Availability
    ) -> Dict[str, Tuple[ValueOption, ...]]:
        per_attribute = {}
        for attribute, descriptors in catalog.groups.items():
            rows = []
            for descriptor in descriptors:
                result = availability[attribute][descriptor.value]
                rows.append(ValueOption(
                    value=descriptor.value,
                    display_value=descriptor.get_display_value(),
                    kind=descriptor.kind,
                    hex_color=descriptor.hex_color,
                    image_ref=descriptor.image_ref,
                    is_selected=selection.get(attribute) == descriptor.value,
                    is_available=result.is_available,
                    available_stock=result.available_stock,
                    reasons=result.reasons,
                ))
            per_attribute[attribute] = tuple(rows)
        return per_attribute

    def explain(
        self,
        catalog: VariantCatalog,
        selection: Mapping[str, str],
        availability: Availability,
        outcome: MatchOutcome,
    ) -> SelectionPayload:
        missing = self.missing_attributes(catalog, selection)
        return SelectionPayload(
            selection=dict(selection),
            per_value_availability=self.options(catalog, selection, availability),
            matched_variant=outcome.variant,
            match_status=outcome.status,
            missing_attributes=tuple(missing),
            prompt=self.prompt(missing),
            phase=self.phase(catalog, selection),
        )
