"""Finite-difference helpers used to check the hand-derived backward passes."""
import numpy as np


def numeric_gradient(loss, array, h=1e-6):
    """Central differences of the scalar loss() with respect to each element of array (perturbed in place)."""
    grad = np.zeros_like(array)
    for idx in np.ndindex(array.shape):
        orig = array[idx]
        array[idx] = orig + h
        plus = loss()
        array[idx] = orig - h
        minus = loss()
        array[idx] = orig
        grad[idx] = (plus - minus) / (2 * h)
    return grad


def randomize(params, seed=0, scale=0.5):
    """Fill every array of the parameters (biases included) with uniform values in [-scale, scale]."""
    rng = np.random.default_rng(seed)
    for a in params.values():
        a[...] = rng.uniform(-scale, scale, a.shape)
    return params


def layer_loss(layer, seed):
    """loss = sum(seed * y): its gradient with respect to y is seed."""
    def loss():
        return float(np.sum(seed * layer.forward()))
    return loss


def sequence_loss(processor, inputs, seeds):
    def loss():
        outputs = processor.forward(inputs)
        return float(sum(np.sum(s * y) for s, y in zip(seeds, outputs)))
    return loss


def column(*values):
    return np.array(values, dtype=np.float64).reshape(-1, 1)
