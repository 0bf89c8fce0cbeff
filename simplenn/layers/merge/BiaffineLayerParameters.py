from ..LayerParameters import LayerParameters


class BiaffineLayerParameters(LayerParameters):
    """
    w1: (output size, input1 size)
    w2: (output size, input2 size)
    b: (output size, 1)
    w: one (input2 size, input1 size) matrix for each output element
    """
    def __init__(self, input1_size, input2_size, output_size):
        super().__init__()
        self.input1_size = input1_size
        self.input2_size = input2_size
        self.output_size = output_size
        self._weights("w1", (output_size, input1_size))
        self._weights("w2", (output_size, input2_size))
        self._biases("b", output_size)
        self._weights_list("w", [(input2_size, input1_size)] * output_size)
