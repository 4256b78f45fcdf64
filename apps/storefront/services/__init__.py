from .variant_source import VariantSource
from .variant_selection import SelectionSession, VariantSelectionService

__all__ = [
    'SelectionSession',
    'VariantSelectionService',
    'VariantSource',
]
