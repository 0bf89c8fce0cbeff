from ..arrays.AugmentedArray import AugmentedArray
from .LayerUnit import LayerUnit
from ..helpers.Backend import backend
from ..helpers.errors import ShapeMismatchError, UnsupportedOperationError
from .ContextWindow import NoContextWindow


class Layer:
    """
    The state of a layer for one time step.

    It owns its input arrays (copies of the given values), the internal arrays
    of its family and the output array. The parameters are shared and are only
    read by forward and backward: the gradients are written into a separate
    `params_errors` structure given by the caller.

    Usage:
        layer.set_input(x)
        y = layer.forward()
        layer.set_output_errors(gy)
        gx = layer.backward(params_errors, propagate_to_input=True)
    """
    def __init__(self, input_sizes, output_size, params, activation=None, context_window=None):
        self.input_arrays = [AugmentedArray(size) for size in input_sizes]
        self.output_array = LayerUnit(output_size, activation=activation)
        self.params = params
        self.context_window = context_window if context_window is not None else NoContextWindow()
        self._forwarded = False

    @property
    def input_array(self):
        return self.input_arrays[0]

    @property
    def output_size(self):
        return self.output_array.size

    # ----- input / output -----
    def set_input(self, *xs):
        if len(xs) != len(self.input_arrays):
            raise ValueError(f"{type(self).__name__} expects {len(self.input_arrays)} input arrays, got {len(xs)}")
        values = [backend.column(x) if getattr(x, "ndim", 1) != 2 else x for x in xs]
        # all the shapes are checked before any input is overwritten
        for i, (array, x) in enumerate(zip(self.input_arrays, values)):
            if x.shape != array.shape:
                raise ShapeMismatchError(f"input {i}: expected shape {array.shape}, got {x.shape}")
        for array, x in zip(self.input_arrays, values):
            array.assign_values(x)
        self._forwarded = False
        return self

    def set_output_errors(self, errors):
        self.output_array.assign_errors(errors)
        return self

    def input_errors(self):
        errors = [array.errors.copy() for array in self.input_arrays]
        return errors[0] if len(errors) == 1 else errors

    # ----- forward -----
    def forward(self):
        """Compute the output from the input and the parameters. Returns the output values."""
        self._forward()
        self._forwarded = True
        return self.output_array.values

    def forward_with_contributions(self, contributions):
        """
        Compute the output like forward(), saving the contributions of the input to the output
        into `contributions` (a structure like the parameters, see LayerParameters.zeros_like()).
        """
        self._forward_with_contributions(contributions)
        self._forwarded = True
        return self.output_array.values

    def _forward(self):
        raise NotImplementedError

    def _forward_with_contributions(self, contributions):
        raise UnsupportedOperationError(f"Forward with contributions not available for the {type(self).__name__}.")

    # ----- backward -----
    def backward(self, params_errors, propagate_to_input=False):
        """
        Calculate the errors of the parameters (written into params_errors) and, if required, the errors
        of the input, starting from the errors preset in the output array.

        Returns the input errors if propagate_to_input, otherwise None.
        """
        if not self._forwarded:
            raise ValueError("Must call forward() before backward()")
        if params_errors is not None and self.params is not None:
            self.params._check_same_structure(params_errors)
        self._backward(params_errors, propagate_to_input)
        return self.input_errors() if propagate_to_input else None

    def _backward(self, params_errors, propagate_to_input):
        raise NotImplementedError

    # ----- relevance -----
    def get_input_relevance(self, contributions):
        """
        The relevance of the input with respect to the relevance preset in the output array,
        given the contributions saved during the last forward with contributions.
        """
        return self._get_input_relevance(contributions)

    def _get_input_relevance(self, contributions):
        raise UnsupportedOperationError(f"Relevance not available for the {type(self).__name__}.")

    # ----- context -----
    def prev_state(self):
        return self.context_window.get_prev_state()

    def next_state(self):
        return self.context_window.get_next_state()
