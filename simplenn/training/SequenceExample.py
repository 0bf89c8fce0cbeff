from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass
class SequenceExample:
    """A sequence of input arrays with the gold output array of each step."""
    sequence_features: List[np.ndarray]
    sequence_output_gold: List[np.ndarray]

    def __post_init__(self):
        if len(self.sequence_features) != len(self.sequence_output_gold):
            raise ValueError("features and gold outputs must have the same length")
