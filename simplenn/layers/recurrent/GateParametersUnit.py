from ..LayerParameters import LayerParameters


class GateParametersUnit(LayerParameters):
    """
    The parameters of a gate.

    weights: (output size, input size)
    biases: (output size, 1)
    recurrent_weights: (output size, output size)
    """
    def __init__(self, input_size, output_size):
        super().__init__()
        self.input_size = input_size
        self.output_size = output_size
        self._weights("weights", (output_size, input_size))
        self._biases("biases", output_size)
        self._weights("recurrent_weights", (output_size, output_size))
