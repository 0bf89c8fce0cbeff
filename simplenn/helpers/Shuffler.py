import numpy as np


class Shuffler:
    """
    Produces shuffled orders of indices from its own seeded random generator,
    so that two shufflers built with the same seed yield the same sequence of orders.
    """
    def __init__(self, seed=None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def permutation(self, n):
        return self.rng.permutation(n)

    def shuffle(self, items):
        # returns a new list, the given one is left untouched
        return [items[i] for i in self.permutation(len(items))]
