from .Activation import Activation, Identity, Sigmoid, Tanh, ReLU, Softmax

__all__ = [
    "Activation",
    "Identity",
    "Sigmoid",
    "Tanh",
    "ReLU",
    "Softmax",
]
