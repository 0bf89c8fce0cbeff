from ..LayerParameters import LayerParameters
from ..feedforward.FeedforwardLayerParameters import FeedforwardLayerParameters
from .GateParametersUnit import GateParametersUnit


class RANLayerParameters(LayerParameters):
    """The parameters of a Recurrent Additive Network layer: input gate, forget gate and candidate."""
    def __init__(self, input_size, output_size):
        super().__init__()
        self.input_size = input_size
        self.output_size = output_size
        self._unit("input_gate", GateParametersUnit(input_size, output_size))
        self._unit("forget_gate", GateParametersUnit(input_size, output_size))
        self._unit("candidate", FeedforwardLayerParameters(input_size, output_size))
