from ...activations import Sigmoid
from ...helpers.Backend import backend
from ..Layer import Layer
from ..LayerUnit import LayerUnit
from ..RelevanceHelper import calculate_relevance_of_array, split_relevance


class RANLayer(Layer):
    """
    Recurrent Additive Network layer.

        inG = g(wIn (dot) x + bIn + wrIn (dot) yPrev)
        forG = g(wForG (dot) x + bForG + wrForG (dot) yPrev)
        c = wc (dot) x + bc
        y = f(inG * c + yPrev * forG)

    g is the gate activation (sigmoid by default).
    yPrev is the not activated output of the previous state. When there is no
    previous state the recurrent terms are omitted.

      Reference:
      Kenton Lee, Omer Levy, Luke Zettlemoyer - Recurrent Additive Networks
    """
    def __init__(self, params, activation=None, gate_activation=None, context_window=None):
        super().__init__(
            input_sizes=[params.input_size],
            output_size=params.output_size,
            params=params,
            activation=activation,
            context_window=context_window)
        gate_activation = gate_activation if gate_activation is not None else Sigmoid()
        self.input_gate = LayerUnit(params.output_size, activation=gate_activation)
        self.forget_gate = LayerUnit(params.output_size, activation=gate_activation)
        self.candidate = LayerUnit(params.output_size)
        # yPrev * forG, set only when there is a previous state
        self.recurrent_output = backend.zeros((params.output_size, 1))
        # the relevance of yPrev, set by get_input_relevance()
        self.recurrent_relevance = backend.zeros((params.output_size, 1))

    def _y_prev(self):
        prev = self.prev_state()
        return None if prev is None else prev.output_array.values_not_activated

    # ----- forward -----
    def _forward(self):
        x = self.input_array.values
        y_prev = self._y_prev()

        self.input_gate.forward(self.params.input_gate, x)
        self.forget_gate.forward(self.params.forget_gate, x)
        self.candidate.forward(self.params.candidate, x)

        if y_prev is not None:
            self.input_gate.add_recurrent_contribution(self.params.input_gate, y_prev)
            self.forget_gate.add_recurrent_contribution(self.params.forget_gate, y_prev)

        self._set_output(y_prev)

    def _forward_with_contributions(self, contributions):
        """
        Like forward(), saving the contributions of x (weights) and of yPrev (recurrent_weights) to each gate.

        If there is a previous state the biases of the gates are divided equally between the
        input and the recurrent contributions, so that their sum gives back the gate value.
        """
        x = self.input_array.values
        y_prev = self._y_prev()
        split_biases = y_prev is not None

        in_params = self.params.input_gate
        for_params = self.params.forget_gate
        b_in = in_params.biases / 2.0 if split_biases else in_params.biases
        b_for = for_params.biases / 2.0 if split_biases else for_params.biases

        self.candidate.forward_with_contributions(
            contributions.candidate.weights, w=self.params.candidate.weights, b=self.params.candidate.biases, x=x)
        self.input_gate.forward_with_contributions(
            contributions.input_gate.weights, w=in_params.weights, b=b_in, x=x)
        self.forget_gate.forward_with_contributions(
            contributions.forget_gate.weights, w=for_params.weights, b=b_for, x=x)

        if y_prev is not None:
            self.input_gate.add_recurrent_with_contributions(
                contributions.input_gate.recurrent_weights, w_rec=in_params.recurrent_weights, b=b_in, y_prev=y_prev)
            self.forget_gate.add_recurrent_with_contributions(
                contributions.forget_gate.recurrent_weights, w_rec=for_params.recurrent_weights, b=b_for, y_prev=y_prev)

        self._set_output(y_prev)

    def _set_output(self, y_prev):
        self.input_gate.activate()
        self.forget_gate.activate()
        self.candidate.activate()

        # y = inG * c
        self.output_array.assign_values(self.input_gate.values * self.candidate.values)

        # y += yPrev * forG
        if y_prev is not None:
            backend.assign_prod(self.recurrent_output, y_prev, self.forget_gate.values)
            backend.assign_sum(self.output_array.values_not_activated, self.recurrent_output)
        else:
            self.recurrent_output[...] = 0.0

        self.output_array.activate()

    # ----- backward -----
    def _backward(self, params_errors, propagate_to_input):
        """
        gy = errors * f'(y) [+ recurrent errors from the next state]
        gc = gy * inG
        gInG = gy * c * inG'
        gForG = gy * yPrev * forG'  (0 without a previous state)
        """
        x = self.input_array.values
        y_prev = self._y_prev()

        self.output_array.apply_activation_deriv()
        self._add_output_recurrent_errors()

        gy = self.output_array.errors

        self.candidate.assign_errors(gy * self.input_gate.values)
        self.input_gate.assign_errors(gy * self.candidate.values * self.input_gate.activation_deriv())
        if y_prev is not None:
            self.forget_gate.assign_errors(gy * y_prev * self.forget_gate.activation_deriv())
        else:
            self.forget_gate.errors[...] = 0.0

        if params_errors is not None:
            self.candidate.assign_params_gradients(params_errors.candidate, x)
            self.input_gate.assign_params_gradients(params_errors.input_gate, x, y_prev)
            self.forget_gate.assign_params_gradients(params_errors.forget_gate, x, y_prev)

        if propagate_to_input:
            self.input_array.assign_errors(
                backend.dot(backend.transpose(self.params.candidate.weights), self.candidate.errors)
                + backend.dot(backend.transpose(self.params.input_gate.weights), self.input_gate.errors)
                + backend.dot(backend.transpose(self.params.forget_gate.weights), self.forget_gate.errors))

    def _add_output_recurrent_errors(self):
        """
        gy += forG(next) * gy(next) + wrIn^T (dot) gInG(next) + wrForG^T (dot) gForG(next)

        The next state must have already executed its backward.
        """
        next_state = self.next_state()
        if next_state is not None:
            backend.assign_sum(self.output_array.errors, next_state.recurrent_errors())

    def recurrent_errors(self):
        """The errors of the output of the previous state, coming from this state (valid after backward)."""
        return (self.forget_gate.values * self.output_array.errors
                + backend.dot(backend.transpose(self.params.input_gate.recurrent_weights), self.input_gate.errors)
                + backend.dot(backend.transpose(self.params.forget_gate.recurrent_weights), self.forget_gate.errors))

    # ----- relevance -----
    def _get_input_relevance(self, contributions):
        """
        The output relevance is split between the input part (inG * c) and the recurrent part
        (yPrev * forG) proportionally to their values. The input part is redistributed to x through
        the contributions of the candidate, the recurrent part is saved as recurrent_relevance.
        """
        y_relevance = self.output_array.relevance
        input_part = self.input_gate.values * self.candidate.values

        if self.prev_state() is not None:
            input_relevance, recurrent_relevance = split_relevance([input_part, self.recurrent_output], y_relevance)
        else:
            input_relevance, recurrent_relevance = y_relevance, backend.zeros(y_relevance.shape)

        backend.assign(self.recurrent_relevance, recurrent_relevance)
        relevance = calculate_relevance_of_array(contributions.candidate.weights, input_relevance)
        self.input_array.assign_relevance(relevance)
        return relevance
