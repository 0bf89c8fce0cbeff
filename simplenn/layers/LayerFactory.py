from dataclasses import dataclass, field
from typing import Optional

from ..activations import Activation
from ..helpers.errors import InvalidConfigurationError
from .LayerType import Connection
from .feedforward.FeedforwardLayer import FeedforwardLayer
from .feedforward.FeedforwardLayerParameters import FeedforwardLayerParameters
from .feedforward.NormLayer import NormLayer
from .feedforward.NormLayerParameters import NormLayerParameters
from .merge.BiaffineLayer import BiaffineLayer
from .merge.BiaffineLayerParameters import BiaffineLayerParameters
from .merge.ProductLayer import ProductLayer
from .recurrent.RANLayer import RANLayer
from .recurrent.RANLayerParameters import RANLayerParameters
from .recurrent.TPRLayer import TPRLayer
from .recurrent.TPRLayerParameters import TPRLayerParameters


@dataclass
class LayerConfiguration:
    """
    The configuration of a layer.

    size: the output size of the layer (the input size for the first configuration of a stack)
    connection: the layer family (None for an input configuration)
    activation: the activation of the output
    gate_activation: the activation of the gates of a recurrent layer (sigmoid if None)
    options: family specific options, e.g. n_symbols, d_symbols, n_roles, d_roles for the TPR
             (d_symbols * d_roles must be equal to size) or n_inputs for the Norm and Product layers
    """
    size: int
    connection: Optional[Connection] = None
    activation: Optional[Activation] = None
    gate_activation: Optional[Activation] = None
    options: dict = field(default_factory=dict)


def build_params(connection, input_size, config):
    """Build the (not initialized) parameters of a layer of the given connection type."""
    if connection is Connection.Feedforward:
        return FeedforwardLayerParameters(input_size, config.size)
    if connection is Connection.RAN:
        return RANLayerParameters(input_size, config.size)
    if connection is Connection.TPR:
        opts = config.options
        try:
            params = TPRLayerParameters(
                input_size,
                n_symbols=opts["n_symbols"],
                d_symbols=opts["d_symbols"],
                n_roles=opts["n_roles"],
                d_roles=opts["d_roles"])
        except KeyError as e:
            raise InvalidConfigurationError(f"missing TPR option {e}") from e
        if params.output_size != config.size:
            raise InvalidConfigurationError(
                f"TPR output size d_symbols * d_roles = {params.output_size} differs from size {config.size}")
        return params
    if connection is Connection.Norm:
        return NormLayerParameters(input_size)
    if connection is Connection.Biaffine:
        return BiaffineLayerParameters(input_size, config.options.get("input2_size", input_size), config.size)
    if connection is Connection.Product:
        return None
    raise InvalidConfigurationError(f"unknown connection type: {connection!r}")


def build_layer(connection, params, activation=None, context_window=None, gate_activation=None, **options):
    """Build the layer of the given connection type around the given parameters."""
    if connection is Connection.Feedforward:
        return FeedforwardLayer(params, activation=activation, context_window=context_window)
    if connection is Connection.RAN:
        return RANLayer(params, activation=activation, gate_activation=gate_activation,
                        context_window=context_window)
    if connection is Connection.TPR:
        if activation is not None:
            raise InvalidConfigurationError("the TPR layer has no output activation")
        return TPRLayer(params, gate_activation=gate_activation, context_window=context_window)
    if connection is Connection.Norm:
        return NormLayer(params, n_inputs=options.get("n_inputs", 1), activation=activation,
                         context_window=context_window)
    if connection is Connection.Biaffine:
        return BiaffineLayer(params, activation=activation, context_window=context_window)
    if connection is Connection.Product:
        return ProductLayer(options["input_size"], n_inputs=options.get("n_inputs", 2), activation=activation,
                            context_window=context_window)
    raise InvalidConfigurationError(f"unknown connection type: {connection!r}")
