import numpy as np
import pytest

from simplenn import ShapeMismatchError
from simplenn.activations import ReLU, Tanh
from simplenn.layers import (
    Connection,
    LayerConfiguration,
    NormLayer,
    NormLayerParameters,
    StackedLayersParameters,
    build_layer,
)

from gradcheck import column, numeric_gradient

INPUTS = [
    np.array([0.4, 0.8, -0.7, -0.5]),
    np.array([-0.4, -0.6, -0.2, -0.9]),
    np.array([0.4, 0.4, 0.2, 0.8]),
]


def make_layer(activation=None):
    params = NormLayerParameters(4)
    params.g[...] = column(0.4, 0.0, -0.3, 0.8)
    params.b[...] = column(0.9, 0.2, -0.9, 0.2)
    layer = NormLayer(params, n_inputs=3, activation=activation)
    layer.set_input(*INPUTS)
    return layer


def test_initialize():
    params = NormLayerParameters(3).initialize(seed=0)
    np.testing.assert_array_equal(params.g, np.ones((3, 1)))
    np.testing.assert_array_equal(params.b, np.zeros((3, 1)))


def test_forward():
    layer = make_layer(activation=ReLU())
    outputs = layer.forward()
    assert len(outputs) == 3

    x = np.stack(INPUTS, axis=1)
    z = (x - x.mean(axis=1, keepdims=True)) / np.sqrt(x.var(axis=1, keepdims=True) + 1e-8)
    np.testing.assert_allclose(layer.normalized, z)
    for k, y in enumerate(outputs):
        expected = np.maximum(0.0, layer.params.g[:, 0] * z[:, k] + layer.params.b[:, 0])
        np.testing.assert_allclose(y[:, 0], expected)

    # g = 0: the output is the bias
    for y in outputs:
        np.testing.assert_allclose(y[1, 0], 0.2)


def test_normalized_inputs_have_zero_mean_and_unit_variance():
    layer = make_layer()
    layer.forward()
    np.testing.assert_allclose(layer.normalized.mean(axis=1), 0.0, atol=1e-12)
    np.testing.assert_allclose(layer.normalized.var(axis=1), 1.0, rtol=1e-6)


def test_backward_matches_finite_differences():
    layer = make_layer(activation=Tanh())
    seeds = [column(0.5, -1.0, 0.3, 0.8), column(-0.2, 0.4, 1.0, -0.6), column(0.9, 0.1, -0.5, 0.2)]
    layer.forward()
    layer.set_output_errors(*seeds)
    params_errors = layer.params.zeros_like()
    grads = layer.backward(params_errors, propagate_to_input=True)

    def loss():
        return float(sum(np.sum(s * y) for s, y in zip(seeds, layer.forward())))

    for (name, a, _), g in zip(layer.params.arrays(), params_errors.values()):
        np.testing.assert_allclose(g, numeric_gradient(loss, a), atol=1e-7, err_msg=name)
    for x, g in zip(layer.input_arrays, grads):
        np.testing.assert_allclose(g, numeric_gradient(loss, x.values), atol=1e-6)


def test_wrong_number_of_output_errors():
    layer = make_layer()
    layer.forward()
    with pytest.raises(ValueError):
        layer.set_output_errors(column(1, 1, 1, 1))


def test_from_the_factory():
    params = NormLayerParameters(4)
    layer = build_layer(Connection.Norm, params, n_inputs=2)
    assert len(layer.output_arrays) == 2


def test_failed_set_output_errors_leaves_the_errors_unchanged():
    layer = make_layer()
    layer.forward()
    layer.set_output_errors(column(1, 1, 1, 1), column(2, 2, 2, 2), column(3, 3, 3, 3))

    with pytest.raises(ShapeMismatchError):
        layer.set_output_errors(column(5, 5, 5, 5), column(5, 5, 5, 5), column(5, 5, 5))

    for k, y in enumerate(layer.output_arrays, start=1):
        np.testing.assert_array_equal(y.errors, np.full((4, 1), float(k)))


def test_stack_initialization_sets_the_gain():
    model = StackedLayersParameters(
        LayerConfiguration(size=3),
        LayerConfiguration(size=4, connection=Connection.Feedforward),
        LayerConfiguration(size=4, connection=Connection.Norm)).initialize(seed=0)

    np.testing.assert_array_equal(model.layer_params(1).g, np.ones((4, 1)))
    np.testing.assert_array_equal(model.layer_params(1).b, np.zeros((4, 1)))
    assert np.any(model.layer_params(0).weights != 0.0)
    np.testing.assert_array_equal(model.layer_params(0).biases, np.zeros((4, 1)))
