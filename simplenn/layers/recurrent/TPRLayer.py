from ...activations import Sigmoid
from ...helpers.Backend import backend
from ...helpers.errors import UnsupportedOperationError, ShapeMismatchError
from ..Layer import Layer
from ..LayerUnit import LayerUnit


def vectorize(matrix):
    """Flatten a matrix into a column array, rows outer and columns inner."""
    rows, columns = matrix.shape
    vector = backend.zeros((rows * columns, 1))
    i = 0
    for r in range(rows):
        for c in range(columns):
            vector[i, 0] = matrix[r, c]
            i += 1
    return vector


def unvectorize(vector, rows, columns):
    """The inverse of vectorize()."""
    if vector.size != rows * columns:
        raise ShapeMismatchError(f"cannot reshape an array of size {vector.size} into ({rows}, {columns})")
    matrix = backend.zeros((rows, columns))
    i = 0
    for r in range(rows):
        for c in range(columns):
            matrix[r, c] = vector[i, 0]
            i += 1
    return matrix


class TPRLayer(Layer):
    """
    Tensor Product Representation layer.

        aS = g(wInS (dot) x + bS + wRecS (dot) yPrev)
        aR = g(wInR (dot) x + bR + wRecR (dot) yPrev)
        s = S (dot) aS
        r = R (dot) aR
        B = s (dot) r^T
        y = vec(B)

    g is the attention activation (sigmoid by default).

      Reference:
      Palangi et al. - Question-Answering with Grammatically-Interpretable Representations
    """
    def __init__(self, params, gate_activation=None, context_window=None):
        super().__init__(
            input_sizes=[params.input_size],
            output_size=params.output_size,
            params=params,
            activation=None,
            context_window=context_window)
        gate_activation = gate_activation if gate_activation is not None else Sigmoid()
        self.a_s = LayerUnit(params.n_symbols, activation=gate_activation)
        self.a_r = LayerUnit(params.n_roles, activation=gate_activation)
        self.s = LayerUnit(params.d_symbols)
        self.r = LayerUnit(params.d_roles)
        self.binding_matrix = backend.zeros((params.d_symbols, params.d_roles))

    def _y_prev(self):
        prev = self.prev_state()
        return None if prev is None else prev.output_array.values

    # ----- forward -----
    def _forward(self):
        x = self.input_array.values
        y_prev = self._y_prev()

        self.a_s.forward_with(w=self.params.w_in_s, b=self.params.b_s, x=x)
        self.a_r.forward_with(w=self.params.w_in_r, b=self.params.b_r, x=x)

        if y_prev is not None:
            self.a_s.add_recurrent_with(self.params.w_rec_s, y_prev)
            self.a_r.add_recurrent_with(self.params.w_rec_r, y_prev)

        self.a_s.activate()
        self.a_r.activate()

        self.s.forward_with(w=self.params.S, b=None, x=self.a_s.values)
        self.r.forward_with(w=self.params.R, b=None, x=self.a_r.values)

        backend.assign(self.binding_matrix, backend.outer(self.s.values, self.r.values))

        self.output_array.assign_values(vectorize(self.binding_matrix))
        self.output_array.activate()

    def _forward_with_contributions(self, contributions):
        raise UnsupportedOperationError("Forward with contributions not available for the TPR layer.")

    # ----- backward -----
    def _backward(self, params_errors, propagate_to_input):
        """
        gB = unvec(gy)
        gs = gB (dot) r, gr = gB^T (dot) s
        gS = gs (dot) aS^T, gR = gr (dot) aR^T
        gaS = S^T (dot) gs * aS', gaR = R^T (dot) gr * aR'
        """
        x = self.input_array.values
        y_prev = self._y_prev()
        p = self.params

        self._add_output_recurrent_errors()

        g_binding = unvectorize(self.output_array.errors, p.d_symbols, p.d_roles)
        self.s.assign_errors(backend.dot(g_binding, self.r.values))
        self.r.assign_errors(backend.dot(backend.transpose(g_binding), self.s.values))

        self.a_s.assign_errors(backend.dot(backend.transpose(p.S), self.s.errors) * self.a_s.activation_deriv())
        self.a_r.assign_errors(backend.dot(backend.transpose(p.R), self.r.errors) * self.a_r.activation_deriv())

        if params_errors is not None:
            backend.assign_dot(params_errors.S, self.s.errors, backend.transpose(self.a_s.values))
            backend.assign_dot(params_errors.R, self.r.errors, backend.transpose(self.a_r.values))
            backend.assign(params_errors.b_s, self.a_s.errors)
            backend.assign(params_errors.b_r, self.a_r.errors)
            backend.assign_dot(params_errors.w_in_s, self.a_s.errors, backend.transpose(x))
            backend.assign_dot(params_errors.w_in_r, self.a_r.errors, backend.transpose(x))
            if y_prev is not None:
                backend.assign_dot(params_errors.w_rec_s, self.a_s.errors, backend.transpose(y_prev))
                backend.assign_dot(params_errors.w_rec_r, self.a_r.errors, backend.transpose(y_prev))
            else:
                params_errors.w_rec_s[...] = 0.0
                params_errors.w_rec_r[...] = 0.0

        if propagate_to_input:
            self.input_array.assign_errors(
                backend.dot(backend.transpose(p.w_in_s), self.a_s.errors)
                + backend.dot(backend.transpose(p.w_in_r), self.a_r.errors))

    def _add_output_recurrent_errors(self):
        next_state = self.next_state()
        if next_state is not None:
            backend.assign_sum(self.output_array.errors, next_state.recurrent_errors())

    def recurrent_errors(self):
        """gyPrev = wRecS^T (dot) gaS + wRecR^T (dot) gaR (valid after backward)"""
        return (backend.dot(backend.transpose(self.params.w_rec_s), self.a_s.errors)
                + backend.dot(backend.transpose(self.params.w_rec_r), self.a_r.errors))

    def _get_input_relevance(self, contributions):
        raise UnsupportedOperationError("Relevance not available for the TPR layer.")
