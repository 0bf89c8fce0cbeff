import copy

import numpy as np

from ..helpers.Backend import backend
from ..helpers.errors import ShapeMismatchError


class LayerParameters:
    """
    An ordered collection of named parameter arrays.

    The same structure is used for the parameters of a layer, for the errors of
    the parameters (gradients) and for the contributions recorded during a
    forward with contributions (see zeros_like()).

    Entries can be arrays, lists of arrays or nested LayerParameters.
    """
    def __init__(self):
        self._names = []
        self._is_bias = {}

    # ----- registration (used by subclasses) -----
    def _weights(self, name, shape):
        setattr(self, name, backend.zeros(shape))
        self._names.append(name)
        self._is_bias[name] = False

    def _biases(self, name, size):
        setattr(self, name, backend.zeros((size, 1)))
        self._names.append(name)
        self._is_bias[name] = True

    def _weights_list(self, name, shapes):
        setattr(self, name, [backend.zeros(s) for s in shapes])
        self._names.append(name)
        self._is_bias[name] = False

    def _unit(self, name, unit):
        setattr(self, name, unit)
        self._names.append(name)
        self._is_bias[name] = False

    # ----- iteration -----
    def arrays(self, prefix=""):
        """Yield (qualified_name, array, is_bias) in a stable order."""
        for name in self._names:
            value = getattr(self, name)
            qualified = prefix + name
            if isinstance(value, LayerParameters):
                yield from value.arrays(prefix=qualified + ".")
            elif isinstance(value, list):
                for i, a in enumerate(value):
                    yield f"{qualified}.{i}", a, self._is_bias[name]
            else:
                yield qualified, value, self._is_bias[name]

    def values(self):
        return [a for _, a, _ in self.arrays()]

    # ----- initialization -----
    def initialize(self, rng=None, seed=None):
        """
        Weights ~ N(0, 1/fan_in), biases = 0.

        Nested units run their own initialize() (e.g. the gain of the NormLayerParameters is set to 1).
        """
        if rng is None:
            rng = np.random.default_rng(seed)
        for name in self._names:
            value = getattr(self, name)
            if isinstance(value, LayerParameters):
                value.initialize(rng=rng)
            elif isinstance(value, list):
                for a in value:
                    self._initialize_array(a, self._is_bias[name], rng)
            else:
                self._initialize_array(value, self._is_bias[name], rng)
        return self

    @staticmethod
    def _initialize_array(a, is_bias, rng):
        if is_bias:
            a[...] = 0.0
        else:
            fan_in = a.shape[1] if a.ndim == 2 else a.size
            w = rng.standard_normal(a.shape) * np.sqrt(1.0 / max(fan_in, 1))
            a[...] = backend.ensure_array(w, dtype=backend.default_float)

    # ----- copies and arithmetic -----
    def zeros_like(self):
        other = copy.deepcopy(self)
        for a in other.values():
            a[...] = 0.0
        return other

    def copy(self):
        return copy.deepcopy(self)

    def _check_same_structure(self, other):
        mine, theirs = self.values(), other.values()
        if len(mine) != len(theirs) or any(a.shape != b.shape for a, b in zip(mine, theirs)):
            raise ShapeMismatchError(f"{type(self).__name__}: parameters with a different structure")
        return zip(mine, theirs)

    def assign_sum(self, other):
        for a, b in self._check_same_structure(other):
            a += b
        return self

    def assign_values(self, other):
        for a, b in self._check_same_structure(other):
            a[...] = b
        return self

    def div(self, scalar):
        for a in self.values():
            backend.assign_div(a, scalar)
        return self

    def zero(self):
        for a in self.values():
            a[...] = 0.0
        return self

    def to_npz_dict(self, prefix=""):
        return {prefix + name: backend.to_cpu(a) for name, a, _ in self.arrays()}

    def load_npz_dict(self, data, prefix=""):
        for name, a, _ in self.arrays():
            a[...] = backend.ensure_array(data[prefix + name])
        return self
