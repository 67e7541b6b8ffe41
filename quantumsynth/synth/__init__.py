"""
Synthesis module: numeric helpers and the request dispatcher.
"""

from .quantum import noise, random_matrix, collapse
from .processor import QuantumDispatcher, available_models, label_for_mode

__all__ = [
    "noise",
    "random_matrix",
    "collapse",
    "QuantumDispatcher",
    "available_models",
    "label_for_mode"
]
