from ...helpers.Backend import backend
from ...helpers.errors import UnsupportedOperationError
from ..Layer import Layer


class BiaffineLayer(Layer):
    """
    Merges two input arrays:

        w[i] = (wi (dot) x1)^T (dot) x2
        y = f(w + w1 (dot) x1 + w2 (dot) x2 + b)
    """
    def __init__(self, params, activation=None, context_window=None):
        super().__init__(
            input_sizes=[params.input1_size, params.input2_size],
            output_size=params.output_size,
            params=params,
            activation=activation,
            context_window=context_window)
        self.wx_arrays = [backend.zeros((params.input2_size, 1)) for _ in range(params.output_size)]

    def _forward(self):
        x1 = self.input_arrays[0].values
        x2 = self.input_arrays[1].values
        p = self.params

        w = backend.zeros((self.output_size, 1))
        for i, wi in enumerate(p.w):
            wxi = self.wx_arrays[i]
            backend.assign_dot(wxi, wi, x1)
            w[i, 0] = backend.dot(backend.transpose(wxi), x2)[0, 0]  # the result has shape (1, 1)

        y = self.output_array.values_not_activated
        backend.assign_dot(y, p.w1, x1)
        backend.assign_sum(y, backend.dot(p.w2, x2), w, p.b)
        self.output_array.activate()

    def _forward_with_contributions(self, contributions):
        raise UnsupportedOperationError("Forward with contributions not available for the Biaffine layer.")

    def _backward(self, params_errors, propagate_to_input):
        """
        gb = gy
        gw1 = gy (dot) x1^T, gw2 = gy (dot) x2^T
        gwi = gy[i] * x2 (dot) x1^T
        gx1 = w1^T (dot) gy + sum_i gy[i] * wi^T (dot) x2
        gx2 = w2^T (dot) gy + sum_i gy[i] * wi (dot) x1
        """
        x1 = self.input_arrays[0].values
        x2 = self.input_arrays[1].values
        p = self.params

        self.output_array.apply_activation_deriv()
        gy = self.output_array.errors

        if params_errors is not None:
            backend.assign(params_errors.b, gy)
            backend.assign_dot(params_errors.w1, gy, backend.transpose(x1))
            backend.assign_dot(params_errors.w2, gy, backend.transpose(x2))
            x2_x1 = backend.outer(x2, x1)
            for i, gwi in enumerate(params_errors.w):
                backend.assign(gwi, gy[i, 0] * x2_x1)

        if propagate_to_input:
            gx1 = backend.dot(backend.transpose(p.w1), gy)
            gx2 = backend.dot(backend.transpose(p.w2), gy)
            for i, wi in enumerate(p.w):
                gx1 += gy[i, 0] * backend.dot(backend.transpose(wi), x2)
                gx2 += gy[i, 0] * self.wx_arrays[i]
            self.input_arrays[0].assign_errors(gx1)
            self.input_arrays[1].assign_errors(gx2)

    def _get_input_relevance(self, contributions):
        raise UnsupportedOperationError("Relevance not available for the Biaffine layer.")
