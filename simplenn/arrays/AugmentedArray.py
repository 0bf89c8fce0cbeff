from ..helpers.Backend import backend


class AugmentedArray:
    """
    A column array of a layer together with its parallel buffers.

    values_not_activated: the linear value, before the activation
    values: the activated value (same object content as values_not_activated if there is no activation)
    errors: the errors with respect to values (seeded by the caller) or, after the backward
            of the layer that owns it, with respect to values_not_activated
    relevance: the relevance of each element (interpretability)
    """
    def __init__(self, size, activation=None):
        self.size = size
        self.activation = activation
        self.values_not_activated = backend.zeros((size, 1))
        self.values = backend.zeros((size, 1))
        self.errors = backend.zeros((size, 1))
        self.relevance = backend.zeros((size, 1))

    @property
    def shape(self):
        return self.values.shape

    def assign_values(self, values):
        """Assign the not activated values; the activated ones are set equal to them until activate()."""
        backend.assign(self.values_not_activated, values)
        backend.assign(self.values, values)
        return self

    def activate(self):
        if self.activation is None:
            backend.assign(self.values, self.values_not_activated)
        else:
            backend.assign(self.values, self.activation.f(self.values_not_activated))
        return self

    def activation_deriv(self):
        if self.activation is None:
            return backend.ones(self.values.shape)
        return self.activation.df(self.values_not_activated)

    def assign_errors(self, errors):
        backend.assign(self.errors, errors)
        return self

    def assign_errors_by_prod(self, a, b):
        backend.assign_prod(self.errors, a, b)
        return self

    def apply_activation_deriv(self):
        """errors = errors * f'(values_not_activated)"""
        if self.activation is not None:
            backend.assign_prod(self.errors, self.activation.df(self.values_not_activated))
        return self

    def assign_relevance(self, relevance):
        backend.assign(self.relevance, relevance)
        return self
