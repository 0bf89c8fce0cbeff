from .BiRNN import BiRNN
from .BiRNNEncoder import BiRNNEncoder

__all__ = ["BiRNN", "BiRNNEncoder"]
