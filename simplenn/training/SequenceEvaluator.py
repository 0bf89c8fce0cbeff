import numpy as np

from ..helpers.Backend import backend
from ..processor.RecurrentNeuralProcessor import RecurrentNeuralProcessor


class SequenceEvaluator:
    """Evaluates a model on a set of sequence examples: mean loss per step and argmax accuracy."""
    def __init__(self, model, loss_calculator, examples):
        self.model = model
        self.loss_calculator = loss_calculator
        self.examples = examples
        self.processor = RecurrentNeuralProcessor(model, propagate_to_input=False)

    def evaluate(self):
        total_loss = 0.0
        correct = 0
        n_steps = 0
        for example in self.examples:
            outputs = self.processor.forward(example.sequence_features)
            for y, gold in zip(outputs, example.sequence_output_gold):
                gold = backend.column(gold)
                total_loss += self.loss_calculator.calculate_loss(y, gold)
                correct += int(np.argmax(backend.to_cpu(y)) == np.argmax(backend.to_cpu(gold)))
                n_steps += 1
        if n_steps == 0:
            return 0.0, 0.0
        return total_loss / n_steps, correct / n_steps
