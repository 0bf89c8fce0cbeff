"""Error kinds raised by the layers and the training helpers."""


class SimpleNNError(Exception):
    """Base class of all the errors raised by simplenn."""


class UnsupportedOperationError(SimpleNNError, NotImplementedError):
    """A layer family does not implement the requested operation (e.g. forward with contributions)."""


class InvalidConfigurationError(SimpleNNError, ValueError):
    """A component was built with an invalid configuration."""


class ShapeMismatchError(SimpleNNError, ValueError):
    """An array operation was given incompatible shapes."""
