from ..arrays.AugmentedArray import AugmentedArray
from ..helpers.Backend import backend


class LayerUnit(AugmentedArray):
    """
    The basic unit of a layer: an augmented array with forward and backward methods.

    g = w (dot) x + b [+ wRec (dot) yPrev]
    """
    def forward(self, gate_params, x):
        """
        g = w (dot) x + b

        gate_params: a parameters unit with `weights` and `biases`
        x: the input column array
        """
        return self.forward_with(w=gate_params.weights, b=gate_params.biases, x=x)

    def forward_with(self, w, b, x):
        backend.assign_dot(self.values_not_activated, w, x)
        if b is not None:
            backend.assign_sum(self.values_not_activated, b)
        backend.assign(self.values, self.values_not_activated)
        return self

    def forward_with_contributions(self, contributions, w, b, x):
        """
        g = w (dot) x + b, saving the contribution of each input element to each output element:

        contributions[j, i] = w[j, i] * x[i] + b[j] / len(x)

        so that each row of the contributions sums to g[j].
        """
        contrib = w * backend.transpose(x)
        if b is not None:
            contrib = contrib + b / x.shape[0]
        backend.assign(contributions, contrib)
        backend.assign(self.values_not_activated, backend.sum(contrib, axis=1, keepdims=True))
        backend.assign(self.values, self.values_not_activated)
        return self

    def add_recurrent_contribution(self, gate_params, y_prev):
        """g += wRec (dot) yPrev"""
        return self.add_recurrent_with(gate_params.recurrent_weights, y_prev)

    def add_recurrent_with(self, w_rec, y_prev):
        backend.assign_sum(self.values_not_activated, backend.dot(w_rec, y_prev))
        backend.assign(self.values, self.values_not_activated)
        return self

    def add_recurrent_with_contributions(self, contributions, w_rec, b, y_prev):
        """
        g += wRec (dot) yPrev + b, saving the contributions of the previous output:

        contributions[j, i] = wRec[j, i] * yPrev[i] + b[j] / len(yPrev)

        Returns the recurrent term (the row sums of the contributions).
        """
        contrib = w_rec * backend.transpose(y_prev) + b / y_prev.shape[0]
        backend.assign(contributions, contrib)
        recurrent = backend.sum(contrib, axis=1, keepdims=True)
        backend.assign_sum(self.values_not_activated, recurrent)
        backend.assign(self.values, self.values_not_activated)
        return recurrent

    def assign_params_gradients(self, params_errors, x, y_prev=None):
        """
        gb = errors * 1
        gw = errors (dot) x^T
        gwRec = errors (dot) yPrev^T  (zeros if there is no previous state)

        The errors of the parameters are overwritten, not summed.
        """
        backend.assign(params_errors.biases, self.errors)
        backend.assign_dot(params_errors.weights, self.errors, backend.transpose(x))
        if getattr(params_errors, "recurrent_weights", None) is not None:
            if y_prev is None:
                params_errors.recurrent_weights[...] = 0.0
            else:
                backend.assign_dot(params_errors.recurrent_weights, self.errors, backend.transpose(y_prev))
