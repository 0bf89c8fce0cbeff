"""simplenn: neural network layers with hand-derived forward and backward passes."""
from .helpers.Backend import backend
from .helpers.errors import (
    SimpleNNError,
    UnsupportedOperationError,
    InvalidConfigurationError,
    ShapeMismatchError,
)

__version__ = "0.1.0"

__all__ = [
    "backend",
    "SimpleNNError",
    "UnsupportedOperationError",
    "InvalidConfigurationError",
    "ShapeMismatchError",
]
