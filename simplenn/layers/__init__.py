from .Layer import Layer
from .LayerUnit import LayerUnit
from .LayerParameters import LayerParameters
from .LayerType import Connection, Property
from .LayerFactory import LayerConfiguration, build_layer, build_params
from .StackedLayersParameters import StackedLayersParameters
from .ContextWindow import LayerContextWindow, NoContextWindow, SequenceContextWindow
from .feedforward.FeedforwardLayer import FeedforwardLayer
from .feedforward.FeedforwardLayerParameters import FeedforwardLayerParameters
from .feedforward.NormLayer import NormLayer
from .feedforward.NormLayerParameters import NormLayerParameters
from .recurrent.GateParametersUnit import GateParametersUnit
from .recurrent.RANLayer import RANLayer
from .recurrent.RANLayerParameters import RANLayerParameters
from .recurrent.TPRLayer import TPRLayer
from .recurrent.TPRLayerParameters import TPRLayerParameters
from .merge.BiaffineLayer import BiaffineLayer
from .merge.BiaffineLayerParameters import BiaffineLayerParameters
from .merge.ProductLayer import ProductLayer

__all__ = [
    "Layer",
    "LayerUnit",
    "LayerParameters",
    "Connection",
    "Property",
    "LayerConfiguration",
    "build_layer",
    "build_params",
    "StackedLayersParameters",
    "LayerContextWindow",
    "NoContextWindow",
    "SequenceContextWindow",
    "FeedforwardLayer",
    "FeedforwardLayerParameters",
    "NormLayer",
    "NormLayerParameters",
    "GateParametersUnit",
    "RANLayer",
    "RANLayerParameters",
    "TPRLayer",
    "TPRLayerParameters",
    "BiaffineLayer",
    "BiaffineLayerParameters",
    "ProductLayer",
]
