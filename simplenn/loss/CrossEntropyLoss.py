from ..helpers.Backend import backend
from .LossCalculator import LossCalculator


class SoftmaxCrossEntropyCalculator(LossCalculator):
    """
    Cross-entropy of the output of a softmax layer with respect to a one-hot gold array.

    The errors are the fused softmax + cross-entropy gradient (y - gold): they are
    already calculated with respect to the input of the softmax.
    """
    def __init__(self, eps=1e-12):
        self.eps = eps

    def calculate_loss(self, output, gold):
        gold = backend.column(gold)
        loss = -backend.sum(gold * backend.log(output + self.eps))
        return float(backend.to_cpu(loss))

    def calculate_errors(self, output, gold):
        return output - backend.column(gold)
