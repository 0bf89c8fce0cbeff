from ..LayerParameters import LayerParameters


class FeedforwardLayerParameters(LayerParameters):
    """weights: (output size, input size), biases: (output size, 1)"""
    def __init__(self, input_size, output_size):
        super().__init__()
        self.input_size = input_size
        self.output_size = output_size
        self._weights("weights", (output_size, input_size))
        self._biases("biases", output_size)
