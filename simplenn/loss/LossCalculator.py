from ..helpers.Backend import backend


class LossCalculator:
    # Subclasses override loss and errors
    def calculate_loss(self, output, gold):
        """From the output and the gold array, figure out how wrong we are (a scalar)."""
        raise NotImplementedError

    def calculate_errors(self, output, gold):
        """The errors of the output with respect to the gold array."""
        raise NotImplementedError

    def calculate_errors_sequence(self, output_sequence, gold_sequence):
        if len(output_sequence) != len(gold_sequence):
            raise ValueError("the output and the gold sequences must have the same length")
        return [self.calculate_errors(y, backend.column(g)) for y, g in zip(output_sequence, gold_sequence)]


class MSECalculator(LossCalculator):
    """loss = 0.5 * sum((y - gold)^2), errors = y - gold"""
    def calculate_loss(self, output, gold):
        diff = output - backend.column(gold)
        return float(0.5 * backend.sum(diff * diff))

    def calculate_errors(self, output, gold):
        return output - backend.column(gold)
