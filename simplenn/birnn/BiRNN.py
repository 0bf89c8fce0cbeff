import numpy as np

from ..helpers.errors import InvalidConfigurationError
from ..layers.LayerFactory import LayerConfiguration
from ..layers.LayerType import Property
from ..layers.StackedLayersParameters import StackedLayersParameters


class BiRNN:
    """
    Bidirectional Recurrent Neural Network.

    Holds the two sub-networks which process a sequence left-to-right and right-to-left.
    Their outputs are concatenated, so the output size is 2 * hidden_size.

      Reference:
      Mike Schuster and Kuldip K. Paliwal - Bidirectional recurrent neural networks
    """
    def __init__(self, input_size, hidden_size, hidden_activation, recurrent_connection, options=None):
        if getattr(recurrent_connection, "property", None) is not Property.RECURRENT:
            raise InvalidConfigurationError("required recurrent_connection with Recurrent property")

        self.input_size = input_size
        self.hidden_size = hidden_size
        self.hidden_activation = hidden_activation
        self.recurrent_connection = recurrent_connection
        self.output_size = hidden_size * 2

        self.left_to_right_network = self._build_network(options)
        self.right_to_left_network = self._build_network(options)

    def _build_network(self, options):
        return StackedLayersParameters(
            LayerConfiguration(size=self.input_size),
            LayerConfiguration(
                size=self.hidden_size,
                connection=self.recurrent_connection,
                activation=self.hidden_activation,
                options=dict(options or {})))

    def initialize(self, seed=None):
        rng = np.random.default_rng(seed)
        self.left_to_right_network.initialize(rng=rng)
        self.right_to_left_network.initialize(rng=rng)
        return self
