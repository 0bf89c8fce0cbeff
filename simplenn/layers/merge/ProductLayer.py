from ...helpers.Backend import backend
from ...helpers.errors import InvalidConfigurationError
from ..Layer import Layer


class ProductLayer(Layer):
    """
    The element-wise product of two or more input arrays of the same size:

        y = f(x1 * x2 * ... * xn)

    It has no parameters.
    """
    def __init__(self, input_size, n_inputs, activation=None, context_window=None):
        if n_inputs < 2:
            raise InvalidConfigurationError(f"the product layer requires at least 2 inputs, got {n_inputs}")
        super().__init__(
            input_sizes=[input_size] * n_inputs,
            output_size=input_size,
            params=None,
            activation=activation,
            context_window=context_window)

    def _forward(self):
        y = self.output_array.values_not_activated
        backend.assign(y, self.input_arrays[0].values)
        for x in self.input_arrays[1:]:
            backend.assign_prod(y, x.values)
        self.output_array.activate()

    def _backward(self, params_errors, propagate_to_input):
        if propagate_to_input:
            self.output_array.apply_activation_deriv()
            self._assign_layer_gradients()

    def _assign_layer_gradients(self):
        """
        gxi = gy * prod(xj) [j != i]

        The product of each input starts from a copy of another input j0 != i.
        """
        gy = self.output_array.errors

        for i, xi in enumerate(self.input_arrays):
            j0 = 1 if i == 0 else 0
            prod = self.input_arrays[j0].values.copy()

            for j, xj in enumerate(self.input_arrays):
                if j != j0 and j != i:
                    backend.assign_prod(prod, xj.values)

            xi.assign_errors_by_prod(prod, gy)
