from ..helpers.Backend import backend
from ..processor.RecurrentNeuralProcessor import RecurrentNeuralProcessor


class BiRNNEncoder:
    """
    Encodes a sequence with a BiRNN: the output of each step is the concatenation of the
    left-to-right output at that step and the right-to-left output at the same step.
    """
    def __init__(self, network, propagate_to_input=False):
        self.network = network
        self.propagate_to_input = propagate_to_input
        self.left_to_right_processor = RecurrentNeuralProcessor(network.left_to_right_network, propagate_to_input)
        self.right_to_left_processor = RecurrentNeuralProcessor(network.right_to_left_network, propagate_to_input)

    def forward(self, input_sequence):
        input_sequence = list(input_sequence)
        l2r = self.left_to_right_processor.forward(input_sequence)
        r2l = self.right_to_left_processor.forward(input_sequence[::-1])[::-1]
        return [backend.concatenate([a, b], axis=0) for a, b in zip(l2r, r2l)]

    def backward(self, output_errors):
        """
        Split the errors of each step between the two directions.
        Returns the sum of the input errors of both directions if propagate_to_input, otherwise None.
        """
        size = self.network.hidden_size
        errors = [backend.column(e) for e in output_errors]
        self.left_to_right_processor.backward([e[:size] for e in errors])
        self.right_to_left_processor.backward([e[size:] for e in errors][::-1])

        if not self.propagate_to_input:
            return None
        l2r = self.left_to_right_processor.get_input_errors()
        r2l = self.right_to_left_processor.get_input_errors()[::-1]
        return [a + b for a, b in zip(l2r, r2l)]

    def get_params_errors(self, copy=True):
        """The errors of the (left-to-right, right-to-left) networks."""
        return (self.left_to_right_processor.get_params_errors(copy=copy),
                self.right_to_left_processor.get_params_errors(copy=copy))
