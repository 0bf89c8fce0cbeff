class ParamsOptimizer:
    """
    Accumulates the errors of the parameters of a model over a batch of examples and
    updates the parameters with their average, through an update method
    (SGDOptimizer, AdamWOptimizer, ...).

    accumulate() must be called exactly once per example.
    """
    def __init__(self, params, update_method):
        self.params = params
        self.update_method = update_method
        self._errors = params.zeros_like()
        self.n_accumulated = 0

    def accumulate(self, params_errors, copy=True):
        """
        Sum the given errors to the accumulated ones.

        With copy=False the first errors of a batch are taken as the accumulator itself,
        so the caller must not reuse them afterwards.
        """
        if self.n_accumulated == 0 and not copy:
            self._errors = params_errors
        else:
            if self.n_accumulated == 0:
                self._errors.zero()
            self._errors.assign_sum(params_errors)
        self.n_accumulated += 1

    def update(self):
        """Update the parameters with the average of the accumulated errors, then clear them."""
        if self.n_accumulated == 0:
            return
        if self.n_accumulated > 1:
            self._errors.div(float(self.n_accumulated))
        self.update_method.step([[p, g] for p, g in zip(self.params.values(), self._errors.values())])
        self._errors = self.params.zeros_like()
        self.n_accumulated = 0
