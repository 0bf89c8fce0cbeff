import numpy as np
import pytest

from simplenn.activations import Tanh, ReLU
from simplenn.layers import FeedforwardLayer, FeedforwardLayerParameters

from gradcheck import column, layer_loss, numeric_gradient, randomize


def make_layer(input_size=4, output_size=3, activation=None, seed=0):
    params = randomize(FeedforwardLayerParameters(input_size, output_size), seed=seed)
    return FeedforwardLayer(params, activation=activation)


def test_forward():
    params = FeedforwardLayerParameters(2, 2)
    params.weights[...] = [[1.0, 2.0], [-1.0, 0.5]]
    params.biases[...] = [[0.5], [-1.0]]
    layer = FeedforwardLayer(params, activation=ReLU())
    layer.set_input([1.0, 2.0])
    y = layer.forward()
    np.testing.assert_allclose(y, [[5.5], [0.0]])
    np.testing.assert_allclose(layer.output_array.values_not_activated, [[5.5], [-1.0]])


def test_backward_matches_finite_differences():
    layer = make_layer(activation=Tanh())
    layer.set_input(np.array([0.3, -0.2, 0.8, 0.1]))
    seed = column(0.5, -1.0, 0.25)

    layer.forward()
    layer.set_output_errors(seed)
    params_errors = layer.params.zeros_like()
    gx = layer.backward(params_errors, propagate_to_input=True)

    loss = layer_loss(layer, seed)
    for a, g in zip(layer.params.values(), params_errors.values()):
        np.testing.assert_allclose(g, numeric_gradient(loss, a), atol=1e-7)
    np.testing.assert_allclose(gx, numeric_gradient(loss, layer.input_array.values), atol=1e-7)


def test_backward_without_propagation_leaves_input_errors():
    layer = make_layer()
    layer.set_input(np.ones(4))
    layer.forward()
    layer.set_output_errors(column(1.0, 1.0, 1.0))
    assert layer.backward(layer.params.zeros_like(), propagate_to_input=False) is None
    np.testing.assert_array_equal(layer.input_array.errors, np.zeros((4, 1)))


def test_backward_before_forward_raises():
    layer = make_layer()
    layer.set_input(np.ones(4))
    layer.set_output_errors(column(1.0, 1.0, 1.0))
    with pytest.raises(ValueError, match="Must call forward"):
        layer.backward(layer.params.zeros_like())


def test_params_errors_structure_is_checked():
    layer = make_layer()
    layer.set_input(np.ones(4))
    layer.forward()
    with pytest.raises(ValueError):
        layer.backward(FeedforwardLayerParameters(2, 3))


def test_wrong_number_of_inputs():
    layer = make_layer()
    with pytest.raises(ValueError):
        layer.set_input(np.ones(4), np.ones(4))


def test_forward_with_contributions_gives_the_same_output():
    layer = make_layer(activation=Tanh())
    layer.set_input(np.array([0.3, -0.2, 0.8, 0.1]))
    y = layer.forward().copy()

    contributions = layer.params.zeros_like()
    y_contrib = layer.forward_with_contributions(contributions)

    np.testing.assert_allclose(y_contrib, y, rtol=1e-12)
    np.testing.assert_allclose(
        contributions.weights.sum(axis=1, keepdims=True), layer.output_array.values_not_activated, rtol=1e-12)
