from ..helpers.Backend import backend
from ..helpers.errors import InvalidConfigurationError
from ..layers.ContextWindow import SequenceContextWindow
from ..layers.LayerFactory import build_layer
from ..layers.LayerType import Connection

SEQUENCE_CONNECTIONS = (Connection.Feedforward, Connection.RAN, Connection.TPR)


class RecurrentNeuralProcessor:
    """
    Runs a stack of layers over a sequence.

    A layer is built for each (time step, depth) pair. The layers at the same depth
    form the sequence seen by their context windows (previous state = index - 1,
    next state = index + 1), so the recurrent layers read the previous step in the
    forward and the next step in the backward.
    """
    def __init__(self, model, propagate_to_input=False):
        for i in range(model.n_layers):
            connection = model.layer_configuration(i).connection
            if connection not in SEQUENCE_CONNECTIONS:
                raise InvalidConfigurationError(
                    f"the layer {i} ({connection.label}) cannot be processed in a sequence")
        self.model = model
        self.propagate_to_input = propagate_to_input
        self.states = []        # one list of layers (one per time step) for each depth
        self.params_errors = None
        self.input_errors = None

    def forward(self, input_sequence):
        """Forward a sequence of input arrays. Returns the output sequence."""
        self.states = [[] for _ in range(self.model.n_layers)]
        self.params_errors = None
        self.input_errors = None

        for t, x in enumerate(input_sequence):
            values = x
            for depth, states in enumerate(self.states):
                config = self.model.layer_configuration(depth)
                layer = build_layer(
                    config.connection,
                    self.model.layer_params(depth),
                    activation=config.activation,
                    gate_activation=config.gate_activation,
                    context_window=SequenceContextWindow(states, t))
                states.append(layer)
                layer.set_input(values)
                values = layer.forward()

        return self.get_output_sequence()

    def get_output_sequence(self, copy=True):
        if not self.states:
            return []
        outputs = [layer.output_array.values for layer in self.states[-1]]
        return [y.copy() for y in outputs] if copy else outputs

    def backward(self, output_errors):
        """
        Backward the errors of the output sequence (one array per time step), from the last step
        to the first one. The errors of the parameters of all the steps are summed.
        """
        if not self.states or len(output_errors) != len(self.states[-1]):
            raise ValueError("the output errors must match the sequence of the last forward")

        self.params_errors = self.model.zeros_like()
        step_errors = self.model.zeros_like()
        self.input_errors = [None] * len(output_errors)

        for t in reversed(range(len(output_errors))):
            errors = backend.column(output_errors[t])
            for depth in reversed(range(self.model.n_layers)):
                layer = self.states[depth][t]
                layer.set_output_errors(errors)
                propagate = depth > 0 or self.propagate_to_input
                errors = layer.backward(step_errors.layer_params(depth), propagate_to_input=propagate)
                self.params_errors.layer_params(depth).assign_sum(step_errors.layer_params(depth))
            if self.propagate_to_input:
                self.input_errors[t] = errors

    def get_params_errors(self, copy=True):
        if self.params_errors is None:
            raise ValueError("Must call backward() before getting the errors of the parameters")
        return self.params_errors.copy() if copy else self.params_errors

    def get_input_errors(self):
        if not self.propagate_to_input:
            raise ValueError("the processor does not propagate the errors to the input")
        return self.input_errors
