class SGDOptimizer:
    """Gradient descent with a constant learning rate and optional L2 weight decay."""
    def __init__(self, lr=1e-2, weight_decay=0.0):
        self.lr = lr
        self.wd = weight_decay

    def step(self, params):
        """params: list of [p, g], updated in place"""
        for p, g in params:
            if self.wd != 0.0:
                p -= self.lr * (g + self.wd * p)  # L2 weight decay
            else:
                p -= self.lr * g
