from ...helpers.Backend import backend
from ...helpers.errors import ShapeMismatchError
from ..Layer import Layer
from ..LayerUnit import LayerUnit

EPSILON = 1e-8


class NormLayer(Layer):
    """
    Normalizes a set of input arrays of the same size, element by element:

        mean = sum(x_k) / n
        dev = sqrt(sum((x_k - mean)^2) / n + eps)
        y_k = f(g * (x_k - mean) / dev + b)

    There is one output array for each input array.
    """
    def __init__(self, params, n_inputs, activation=None, context_window=None):
        super().__init__(
            input_sizes=[params.input_size] * n_inputs,
            output_size=params.output_size,
            params=params,
            activation=activation,
            context_window=context_window)
        self.output_arrays = [self.output_array] + [
            LayerUnit(params.output_size, activation=activation) for _ in range(n_inputs - 1)]
        self.normalized = backend.zeros((params.input_size, n_inputs))
        self.dev = backend.zeros((params.input_size, 1))

    def set_output_errors(self, *errors):
        if len(errors) != len(self.output_arrays):
            raise ValueError(f"NormLayer expects {len(self.output_arrays)} output errors, got {len(errors)}")
        errors = [backend.ensure_array(e) for e in errors]
        for k, (array, e) in enumerate(zip(self.output_arrays, errors)):
            if e.shape != array.shape:
                raise ShapeMismatchError(f"output errors {k}: expected shape {array.shape}, got {e.shape}")
        for array, e in zip(self.output_arrays, errors):
            array.assign_errors(e)
        return self

    def _stacked(self, arrays, attr):
        return backend.concatenate([getattr(a, attr) for a in arrays], axis=1)

    def forward(self):
        super().forward()
        return [a.values for a in self.output_arrays]

    def _forward(self):
        x = self._stacked(self.input_arrays, "values")
        mean = backend.mean(x, axis=1, keepdims=True)
        centered = x - mean
        backend.assign(self.dev, backend.sqrt(backend.mean(centered * centered, axis=1, keepdims=True) + EPSILON))
        backend.assign(self.normalized, centered / self.dev)

        for k, y in enumerate(self.output_arrays):
            y.assign_values(self.params.g * self.normalized[:, k:k + 1] + self.params.b)
            y.activate()

    def _backward(self, params_errors, propagate_to_input):
        for y in self.output_arrays:
            y.apply_activation_deriv()

        gy = self._stacked(self.output_arrays, "errors")

        if params_errors is not None:
            backend.assign(params_errors.g, backend.sum(gy * self.normalized, axis=1, keepdims=True))
            backend.assign(params_errors.b, backend.sum(gy, axis=1, keepdims=True))

        if propagate_to_input:
            gz = gy * self.params.g
            gx = (gz
                  - backend.mean(gz, axis=1, keepdims=True)
                  - self.normalized * backend.mean(gz * self.normalized, axis=1, keepdims=True)) / self.dev
            for k, x in enumerate(self.input_arrays):
                x.assign_errors(gx[:, k:k + 1])
