from .LossCalculator import LossCalculator, MSECalculator
from .CrossEntropyLoss import SoftmaxCrossEntropyCalculator

__all__ = ["LossCalculator", "MSECalculator", "SoftmaxCrossEntropyCalculator"]
