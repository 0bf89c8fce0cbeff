from .SequenceExample import SequenceExample
from .SequenceEvaluator import SequenceEvaluator
from .SequenceTrainer import SequenceTrainer

__all__ = ["SequenceExample", "SequenceEvaluator", "SequenceTrainer"]
