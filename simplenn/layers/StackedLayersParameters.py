from ..helpers.errors import InvalidConfigurationError
from .LayerParameters import LayerParameters
from .LayerFactory import build_params


class StackedLayersParameters(LayerParameters):
    """
    The parameters of a stack of layers.

    The first configuration describes the input (only its size is used), each of the
    following ones a layer whose input is the output of the previous one.
    """
    def __init__(self, *layers_configuration):
        super().__init__()
        if len(layers_configuration) < 2:
            raise InvalidConfigurationError("a stack requires an input configuration and at least one layer")
        self.layers_configuration = list(layers_configuration)
        self.input_size = layers_configuration[0].size
        self.output_size = layers_configuration[-1].size

        input_size = self.input_size
        for i, config in enumerate(self.layers_configuration[1:]):
            if config.connection is None:
                raise InvalidConfigurationError(f"the layer {i} has no connection type")
            self._unit(f"layer{i}", build_params(config.connection, input_size, config))
            input_size = config.size

    @property
    def n_layers(self):
        return len(self.layers_configuration) - 1

    def layer_params(self, index):
        return getattr(self, f"layer{index}")

    def layer_configuration(self, index):
        return self.layers_configuration[index + 1]
