from ...helpers.Backend import backend
from ..Layer import Layer
from ..RelevanceHelper import calculate_relevance_of_array


class FeedforwardLayer(Layer):
    """
    y = f(w (dot) x + b)
    """
    def __init__(self, params, activation=None, context_window=None):
        super().__init__(
            input_sizes=[params.input_size],
            output_size=params.output_size,
            params=params,
            activation=activation,
            context_window=context_window)

    def _forward(self):
        self.output_array.forward(self.params, self.input_array.values)
        self.output_array.activate()

    def _forward_with_contributions(self, contributions):
        """
        Save the contribution of each input element to each output element into contributions.weights:

            contributions[j, i] = w[j, i] * x[i] + b[j] / len(x)
        """
        self.output_array.forward_with_contributions(
            contributions=contributions.weights,
            w=self.params.weights,
            b=self.params.biases,
            x=self.input_array.values)
        self.output_array.activate()

    def _backward(self, params_errors, propagate_to_input):
        """
        gy = errors * f'(y)
        gb = gy
        gw = gy (dot) x^T
        gx = w^T (dot) gy
        """
        self.output_array.apply_activation_deriv()

        if params_errors is not None:
            self.output_array.assign_params_gradients(params_errors, self.input_array.values)

        if propagate_to_input:
            backend.assign_dot(self.input_array.errors, backend.transpose(self.params.weights), self.output_array.errors)

    def _get_input_relevance(self, contributions):
        relevance = calculate_relevance_of_array(
            contributions=contributions.weights,
            y_relevance=self.output_array.relevance)
        self.input_array.assign_relevance(relevance)
        return relevance
