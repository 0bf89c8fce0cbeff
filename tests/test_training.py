import json

import numpy as np
import pytest

from simplenn import InvalidConfigurationError
from simplenn.activations import Softmax, Tanh
from simplenn.early_stopping import EarlyStopping
from simplenn.helpers.Shuffler import Shuffler
from simplenn.helpers.logger import RunLogger
from simplenn.layers import Connection, FeedforwardLayerParameters, LayerConfiguration, StackedLayersParameters
from simplenn.loss import MSECalculator, SoftmaxCrossEntropyCalculator
from simplenn.optimizer import AdamWOptimizer, ParamsOptimizer, SGDOptimizer
from simplenn.training import SequenceEvaluator, SequenceExample, SequenceTrainer

from gradcheck import column


def one_hot(i, n=3):
    v = np.zeros(n)
    v[i] = 1.0
    return v


def copy_task_examples():
    """Predict the symbol given at each step."""
    sequences = [[0, 1, 2], [2, 2, 0], [1, 0, 1, 2], [0, 0], [2, 1]]
    return [SequenceExample([one_hot(i) for i in s], [one_hot(i) for i in s]) for s in sequences]


def classifier(seed=0):
    model = StackedLayersParameters(
        LayerConfiguration(size=3),
        LayerConfiguration(size=4, connection=Connection.RAN, activation=Tanh()),
        LayerConfiguration(size=3, connection=Connection.Feedforward, activation=Softmax()))
    return model.initialize(seed=seed)


# ----- losses -----
def test_mse():
    loss = MSECalculator()
    y, gold = column(1.0, 2.0), np.array([0.0, 4.0])
    assert loss.calculate_loss(y, gold) == pytest.approx(0.5 * (1.0 + 4.0))
    np.testing.assert_allclose(loss.calculate_errors(y, gold), [[1.0], [-2.0]])


def test_softmax_cross_entropy():
    loss = SoftmaxCrossEntropyCalculator()
    y = Softmax().f(column(1.0, 2.0, 0.5))
    gold = one_hot(1)
    assert loss.calculate_loss(y, gold) == pytest.approx(-np.log(y[1, 0]))
    np.testing.assert_allclose(loss.calculate_errors(y, gold), y - column(*gold))


def test_errors_sequence_length():
    with pytest.raises(ValueError):
        MSECalculator().calculate_errors_sequence([column(1.0)], [])


# ----- optimizers -----
def test_params_optimizer_averages_the_batch():
    params = FeedforwardLayerParameters(2, 1)
    optimizer = ParamsOptimizer(params, SGDOptimizer(lr=1.0))

    first = params.zeros_like()
    for a in first.values():
        a[...] = 1.0
    second = params.zeros_like()
    for a in second.values():
        a[...] = 3.0

    optimizer.accumulate(first, copy=False)
    optimizer.accumulate(second)
    optimizer.update()

    np.testing.assert_allclose(params.weights, np.full((1, 2), -2.0))
    np.testing.assert_allclose(params.biases, np.full((1, 1), -2.0))
    assert optimizer.n_accumulated == 0

    # nothing accumulated, nothing changes
    optimizer.update()
    np.testing.assert_allclose(params.weights, np.full((1, 2), -2.0))


def test_sgd_weight_decay():
    p = np.ones((2, 1))
    SGDOptimizer(lr=0.1, weight_decay=0.5).step([[p, np.zeros((2, 1))]])
    np.testing.assert_allclose(p, np.full((2, 1), 0.95))


def test_adamw_first_step_moves_by_the_learning_rate():
    p = np.zeros((3, 1))
    g = column(2.0, -0.5, 10.0)
    AdamWOptimizer(lr=0.01).step([[p, g]])
    np.testing.assert_allclose(p, [[-0.01], [0.01], [-0.01]], rtol=1e-6)


# ----- helpers -----
def test_shuffler_is_deterministic():
    a, b = Shuffler(seed=42), Shuffler(seed=42)
    for _ in range(3):
        np.testing.assert_array_equal(a.permutation(10), b.permutation(10))

    items = list("abcde")
    shuffled = Shuffler(seed=1).shuffle(items)
    assert sorted(shuffled) == items
    assert items == list("abcde")


def test_early_stopping_restores_the_best_params():
    params = FeedforwardLayerParameters(2, 1)
    stopper = EarlyStopping(patience=2, monitor="val_loss")

    params.weights[...] = 1.0
    assert not stopper.update(1, {"val_loss": 1.0}, params)
    params.weights[...] = 2.0
    assert not stopper.update(2, {"val_loss": 0.5}, params)
    params.weights[...] = 3.0
    assert not stopper.update(3, {"val_loss": 0.7}, params)
    assert stopper.update(4, {"val_loss": 0.8}, params)

    assert stopper.stopped
    assert stopper.best_epoch == 2
    np.testing.assert_array_equal(params.weights, np.full((1, 2), 2.0))


def test_early_stopping_follows_the_trainer_metrics():
    assert EarlyStopping().configure(has_evaluator=True).monitor == "val_acc"
    assert EarlyStopping().configure(has_evaluator=True).mode == "max"
    assert EarlyStopping().configure(has_evaluator=False).monitor == "loss"
    assert EarlyStopping().configure(has_evaluator=False).mode == "min"
    assert EarlyStopping(monitor="val_acc", mode="min").configure(has_evaluator=True).mode == "min"

    with pytest.raises(InvalidConfigurationError):
        EarlyStopping(mode="lowest")


def test_early_stopping_on_accuracy():
    params = FeedforwardLayerParameters(2, 1)
    stopper = EarlyStopping(patience=1).configure(has_evaluator=True)

    params.weights[...] = 1.0
    assert not stopper.update(1, {"loss": 0.9, "val_loss": 0.9, "val_acc": 0.6}, params)
    params.weights[...] = 2.0
    assert stopper.update(2, {"loss": 0.5, "val_loss": 0.5, "val_acc": 0.4}, params)
    assert stopper.best == 0.6
    np.testing.assert_array_equal(params.weights, np.full((1, 2), 1.0))


def test_validation_metric_requires_an_evaluator():
    with pytest.raises(InvalidConfigurationError):
        SequenceTrainer(classifier(), SGDOptimizer(), SoftmaxCrossEntropyCalculator(), copy_task_examples(),
                        epochs=1, early_stopping=EarlyStopping(monitor="val_loss"))

    stopper = EarlyStopping()
    SequenceTrainer(classifier(), SGDOptimizer(), SoftmaxCrossEntropyCalculator(), copy_task_examples(),
                    epochs=1, early_stopping=stopper)
    assert stopper.monitor == "loss"


def test_example_lengths_must_match():
    with pytest.raises(ValueError):
        SequenceExample([one_hot(0)], [])


# ----- trainer -----
def test_softmax_and_cross_entropy_go_together():
    with pytest.raises(InvalidConfigurationError):
        SequenceTrainer(classifier(), SGDOptimizer(), MSECalculator(), copy_task_examples(), epochs=1)

    model = StackedLayersParameters(
        LayerConfiguration(size=3), LayerConfiguration(size=3, connection=Connection.Feedforward, activation=Tanh()))
    with pytest.raises(InvalidConfigurationError):
        SequenceTrainer(model, SGDOptimizer(), SoftmaxCrossEntropyCalculator(), copy_task_examples(), epochs=1)


def test_batch_size_must_be_positive():
    with pytest.raises(InvalidConfigurationError):
        SequenceTrainer(classifier(), SGDOptimizer(), SoftmaxCrossEntropyCalculator(), copy_task_examples(),
                        epochs=1, batch_size=0)


@pytest.mark.parametrize("batch_size", [1, 2])
def test_training_reduces_the_loss(batch_size, capsys):
    model = classifier(seed=3)
    trainer = SequenceTrainer(
        model, SGDOptimizer(lr=0.2), SoftmaxCrossEntropyCalculator(), copy_task_examples(),
        epochs=40, batch_size=batch_size, shuffler=Shuffler(seed=0))
    history = trainer.train()

    assert len(history["loss"]) == 40
    assert history["loss"][-1] < history["loss"][0]
    out = capsys.readouterr().out
    assert "Starting training for 40 epochs..." in out
    assert "Epoch 1/40 - loss:" in out


def test_training_is_reproducible():
    histories = []
    for _ in range(2):
        trainer = SequenceTrainer(
            classifier(seed=5), AdamWOptimizer(lr=0.01), SoftmaxCrossEntropyCalculator(), copy_task_examples(),
            epochs=3, shuffler=Shuffler(seed=9), verbose=False)
        histories.append(trainer.train()["loss"])
    np.testing.assert_allclose(histories[0], histories[1])


def test_training_with_evaluation_and_run_logger(tmp_path):
    model = classifier(seed=7)
    examples = copy_task_examples()
    evaluator = SequenceEvaluator(model, SoftmaxCrossEntropyCalculator(), examples)
    run_logger = RunLogger(root=tmp_path, tag="copy")
    trainer = SequenceTrainer(
        model, AdamWOptimizer(lr=0.05), SoftmaxCrossEntropyCalculator(), examples, epochs=5,
        evaluator=evaluator, shuffler=Shuffler(seed=0), run_logger=run_logger, verbose=False,
        early_stopping=EarlyStopping(patience=10, monitor="val_loss"))
    history = trainer.train()

    assert len(history["val_loss"]) == 5
    assert all(0.0 <= acc <= 1.0 for acc in history["val_acc"])

    rows = (run_logger.dir / "history.csv").read_text().strip().splitlines()
    assert rows[0].split(",") == ["epoch", "time_s", "loss", "val_loss", "val_acc"]
    assert len(rows) == 6
    assert len(json.loads(run_logger.json_path.read_text())) == 5
    assert (run_logger.dir / "plots" / "loss_curve_copy.png").exists()

    restored = classifier(seed=99)
    with np.load(run_logger.last_ckpt) as data:
        restored.load_npz_dict(data)
    for a, b in zip(restored.values(), model.values()):
        np.testing.assert_array_equal(a, b)
    assert run_logger.best_ckpt.exists()
