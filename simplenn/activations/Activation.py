from ..helpers.Backend import backend


class Activation:
    # Subclasses override f and df.
    # Both are pure: they never modify x.
    def f(self, x):
        raise NotImplementedError

    def df(self, x):
        # derivative with respect to the (not activated) input x
        raise NotImplementedError

    def __repr__(self):
        return type(self).__name__ + "()"


class Identity(Activation):
    def f(self, x):
        return x.copy()

    def df(self, x):
        return backend.ones(x.shape)


class Sigmoid(Activation):
    def f(self, x):
        # clipped for numerical stability
        return 1.0 / (1.0 + backend.exp(-backend.clip(x, -500, 500)))

    def df(self, x):
        s = self.f(x)
        return s * (1.0 - s)


class Tanh(Activation):
    def f(self, x):
        return backend.tanh(x)

    def df(self, x):
        y = backend.tanh(x)
        return 1.0 - y * y


class ReLU(Activation):
    def f(self, x):
        return backend.maximum(0.0, x)

    def df(self, x):
        return (x > 0).astype(backend.default_float)


class Softmax(Activation):
    """
    Softmax over the whole array.

    The derivative is the identity: the errors reaching a softmax output are
    expected to be already calculated with respect to its input, as the
    softmax cross-entropy loss does (fused gradient).
    """
    def f(self, x):
        z = x - backend.max(x)
        e = backend.exp(z)
        return e / backend.sum(e)

    def df(self, x):
        return backend.ones(x.shape)
