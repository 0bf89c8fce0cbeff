import time

from ..activations import Softmax
from ..helpers.Shuffler import Shuffler
from ..helpers.errors import InvalidConfigurationError
from ..loss.CrossEntropyLoss import SoftmaxCrossEntropyCalculator
from ..optimizer.ParamsOptimizer import ParamsOptimizer
from ..processor.RecurrentNeuralProcessor import RecurrentNeuralProcessor


class SequenceTrainer:
    """
    Trains a stack of layers (StackedLayersParameters) on sequence examples.

    Each epoch visits the examples in the order given by the shuffler, learns from each of
    them (forward, loss errors, backward), accumulates the errors of the parameters once per
    example and updates the parameters every `batch_size` examples (and at the end of the epoch).
    """
    def __init__(
        self,
        model,
        update_method,
        loss_calculator,
        examples,
        epochs,
        batch_size=1,
        evaluator=None,
        shuffler=None,
        shuffle=True,
        early_stopping=None,
        run_logger=None,
        verbose=True,
    ):
        activation = model.layer_configuration(model.n_layers - 1).activation
        is_softmax_ce = isinstance(loss_calculator, SoftmaxCrossEntropyCalculator)
        if is_softmax_ce != isinstance(activation, Softmax):
            raise InvalidConfigurationError(
                "Softmax cross-entropy loss must be used with the softmax as output activation function and vice versa")
        if batch_size < 1:
            raise InvalidConfigurationError(f"batch_size must be >= 1, got {batch_size}")

        self.model = model
        self.loss_calculator = loss_calculator
        self.examples = list(examples)
        self.epochs = epochs
        self.batch_size = batch_size
        self.evaluator = evaluator
        self.shuffler = shuffler if shuffler is not None else Shuffler()
        self.shuffle = shuffle
        self.early_stopping = early_stopping
        if early_stopping is not None:
            early_stopping.configure(has_evaluator=evaluator is not None)
        self.run_logger = run_logger
        self.verbose = verbose

        self.processor = RecurrentNeuralProcessor(model, propagate_to_input=False)
        self.optimizer = ParamsOptimizer(model, update_method)

    def train(self):
        history = {"loss": []}
        if self.evaluator is not None:
            history["val_loss"] = []
            history["val_acc"] = []

        if self.verbose:
            print(f"Starting training for {self.epochs} epochs...")

        for ep in range(1, self.epochs + 1):
            t0 = time.time()
            train_loss = self.train_epoch()
            history["loss"].append(train_loss)
            metrics = {"loss": train_loss}

            if self.evaluator is not None:
                val_loss, val_acc = self.evaluator.evaluate()
                history["val_loss"].append(val_loss)
                history["val_acc"].append(val_acc)
                metrics.update({"val_loss": val_loss, "val_acc": val_acc})

            if self.verbose:
                log_interval = max(1, self.epochs // 10)
                if ep % log_interval == 0 or ep == 1 or ep == self.epochs:
                    line = f"Epoch {ep}/{self.epochs} - loss: {train_loss:.4f}"
                    if self.evaluator is not None:
                        line += f" - val_loss: {val_loss:.4f} - val_acc: {val_acc:.4f}"
                    print(line)

            if self.run_logger is not None:
                self.run_logger.log_epoch(ep, time_s=time.time() - t0, **metrics)
                self.run_logger.save_checkpoint(self.model.to_npz_dict(), best=False)
                monitored = history.get("val_loss") or history["loss"]
                if monitored[-1] <= min(monitored):
                    self.run_logger.save_checkpoint(self.model.to_npz_dict(), best=True)

            if self.early_stopping is not None and self.early_stopping.update(ep, metrics, self.model):
                if self.verbose:
                    print(
                        f"Early stopping at epoch {ep:02d}. "
                        f"Best {self.early_stopping.monitor}={self.early_stopping.best:.4f} "
                        f"at epoch {self.early_stopping.best_epoch:02d}."
                    )
                break

        if self.run_logger is not None:
            self.run_logger.save_json()
            self.run_logger.plot_loss(history)

        return history

    def train_epoch(self):
        """Learn from all the examples once. Returns the mean loss per step."""
        if self.shuffle:
            order = self.shuffler.permutation(len(self.examples))
        else:
            order = range(len(self.examples))

        total_loss = 0.0
        n_steps = 0
        for k, i in enumerate(order):
            example = self.examples[i]
            total_loss += self.learn_from_example(example)
            n_steps += len(example.sequence_features)
            self.accumulate_errors()
            if (k + 1) % self.batch_size == 0:
                self.optimizer.update()

        self.optimizer.update()  # the last incomplete batch
        return total_loss / max(n_steps, 1)

    def learn_from_example(self, example):
        """Forward and backward an example. Returns the sum of the losses of its steps."""
        outputs = self.processor.forward(example.sequence_features)
        gold = example.sequence_output_gold
        errors = self.loss_calculator.calculate_errors_sequence(outputs, gold)
        self.processor.backward(errors)
        return sum(self.loss_calculator.calculate_loss(y, g) for y, g in zip(outputs, gold))

    def accumulate_errors(self):
        copy = self.batch_size > 1
        self.optimizer.accumulate(self.processor.get_params_errors(copy=copy), copy=copy)
