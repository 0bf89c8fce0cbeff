from ..helpers.errors import InvalidConfigurationError

MODES = ("min", "max")


class EarlyStopping:
    """
    Stops the training of a model when an epoch metric stops improving, restoring
    the parameters of the best epoch.

    monitor: a key of the metrics of an epoch given by the SequenceTrainer
             ("loss", "val_loss", "val_acc"). If None it is chosen by the trainer:
             "val_acc" when there is an evaluator, "loss" otherwise.
    mode: "min" or "max". If None it follows the monitored metric ("max" for accuracies).
    """
    def __init__(self, patience=5, min_delta=0.0, monitor=None, mode=None, restore_best_params=True):
        if mode is not None and mode not in MODES:
            raise InvalidConfigurationError(f"mode must be one of {MODES}, got {mode!r}")
        self.patience = patience
        self.min_delta = float(min_delta)
        self.monitor = monitor
        self.mode = mode
        self.restore_best_params = restore_best_params

        self.best = None
        self.best_epoch = -1
        self.wait = 0
        self.stopped = False
        self._best_params = None

    def configure(self, has_evaluator):
        """Resolve the monitored metric and the mode for a trainer with or without an evaluator."""
        if self.monitor is None:
            self.monitor = "val_acc" if has_evaluator else "loss"
        elif self.monitor.startswith("val_") and not has_evaluator:
            raise InvalidConfigurationError(f"cannot monitor {self.monitor!r} without an evaluator")
        if self.mode is None:
            self.mode = "max" if self.monitor.endswith("acc") else "min"
        return self

    def _is_better(self, value):
        if self.mode == "min":
            return value < self.best - self.min_delta
        return value > self.best + self.min_delta

    def update(self, epoch, metrics, params):
        """
        Track the monitored metric of an epoch. `params` are the LayerParameters of the model.
        Returns True when the training must stop (after restoring the best parameters if required).
        """
        if self.monitor is None or self.mode is None:
            self.configure(has_evaluator="val_loss" in metrics)
        if self.monitor not in metrics:
            raise InvalidConfigurationError(f"the metric {self.monitor!r} is not among {sorted(metrics)}")

        value = metrics[self.monitor]
        if self.best is None or self._is_better(value):
            self.best = value
            self.best_epoch = epoch
            self.wait = 0
            self._best_params = params.copy()
            return False

        self.wait += 1
        if self.wait < self.patience:
            return False

        self.stopped = True
        if self.restore_best_params:
            params.assign_values(self._best_params)
        return True
