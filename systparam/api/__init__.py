from .catalogue import ParameterCatalogue
from .header_builder import HeaderBuilder

__all__ = [
    "HeaderBuilder",
    "ParameterCatalogue",
]
