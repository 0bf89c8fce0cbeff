from ..LayerParameters import LayerParameters


class NormLayerParameters(LayerParameters):
    """g: the gain (initialized to 1), b: the bias (initialized to 0)"""
    def __init__(self, input_size):
        super().__init__()
        self.input_size = input_size
        self.output_size = input_size
        self._biases("g", input_size)
        self._biases("b", input_size)

    def initialize(self, rng=None, seed=None):
        self.g[...] = 1.0
        self.b[...] = 0.0
        return self
