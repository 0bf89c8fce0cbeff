# simplenn/helpers/Backend.py
import numpy as np

from .errors import ShapeMismatchError

VERBOSE_STARTUP = False  # set True to print which array module is in use

try:
    import cupy as cp
    try:
        _ = (cp.array([1, 2, 3]) + 1).sum()
        CUPY_AVAILABLE = True
    except Exception as e:
        if VERBOSE_STARTUP:
            print(f"CuPy installed but CUDA runtime error: {e}")
        cp = None
        CUPY_AVAILABLE = False
except ImportError:
    cp = None
    CUPY_AVAILABLE = False


class Backend:
    """
    The numeric array collaborator of the layers.

    Vectors are column arrays with shape (n, 1), matrices are (rows, columns).
    The assign_* operations write into an owned buffer in place and never let
    numpy broadcasting change the meaning of the operation: every shape is
    checked before the buffer is touched.
    """
    def __init__(self, use_gpu=False, default_float=np.float64):
        self.use_gpu = bool(use_gpu and CUPY_AVAILABLE)
        self.default_float = default_float
        self.xp = cp if self.use_gpu else np
        if VERBOSE_STARTUP:
            print("Using GPU backend (CuPy)" if self.use_gpu else "Using CPU backend (NumPy)")

    # -------- device transfer --------
    def to_cpu(self, x):
        """Move array to CPU (NumPy)."""
        if self.use_gpu and x is not None:
            return cp.asnumpy(x)
        return x

    def ensure_array(self, x, dtype=None):
        """
        Ensure 'x' is an array of the current backend.
        Accepts list/tuple/np/cp arrays; returns xp.ndarray.
        """
        if self.use_gpu and isinstance(x, np.ndarray):
            x = cp.asarray(x)
        elif (not self.use_gpu) and (cp is not None) and isinstance(x, cp.ndarray):
            x = cp.asnumpy(x)
        arr = self.xp.asarray(x)
        if dtype is not None and arr.dtype != dtype:
            arr = arr.astype(dtype, copy=False)
        return arr

    def column(self, x):
        """Build a column vector (n, 1) from any 1-d sequence or array."""
        arr = self.ensure_array(x, dtype=self.default_float)
        return self.xp.reshape(arr, (-1, 1)).copy()

    # -------- array creation --------
    def zeros(self, shape):
        return self.xp.zeros(shape, dtype=self.default_float)

    def ones(self, shape):
        return self.xp.ones(shape, dtype=self.default_float)

    def zeros_like(self, x):
        return self.xp.zeros_like(x)

    # -------- assign-style in-place operations --------
    def _check_shape(self, out, shape, op):
        if out.shape != tuple(shape):
            raise ShapeMismatchError(f"{op}: cannot write shape {tuple(shape)} into buffer of shape {out.shape}")

    def assign(self, out, value):
        """out = value"""
        value = self.ensure_array(value)
        self._check_shape(out, value.shape, "assign")
        out[...] = value
        return out

    def assign_dot(self, out, a, b):
        """out = a (dot) b"""
        if a.ndim != 2 or b.ndim != 2 or a.shape[1] != b.shape[0]:
            raise ShapeMismatchError(f"assign_dot: incompatible shapes {a.shape} and {b.shape}")
        self._check_shape(out, (a.shape[0], b.shape[1]), "assign_dot")
        out[...] = self.xp.dot(a, b)
        return out

    def assign_sum(self, out, *arrays):
        """out += a1 + a2 + ..."""
        for a in arrays:
            self._check_shape(out, a.shape, "assign_sum")
        for a in arrays:
            out += a
        return out

    def assign_prod(self, out, a, b=None):
        """out = a * b, or out *= a when b is missing (element-wise)"""
        self._check_shape(out, a.shape, "assign_prod")
        if b is None:
            out *= a
            return out
        self._check_shape(out, b.shape, "assign_prod")
        out[...] = a * b
        return out

    def assign_div(self, out, scalar):
        """out /= scalar"""
        out /= scalar
        return out

    # -------- math / linalg (thin wrappers) --------
    def dot(self, a, b):
        if a.shape[-1] != b.shape[0]:
            raise ShapeMismatchError(f"dot: incompatible shapes {a.shape} and {b.shape}")
        return self.xp.dot(a, b)

    def outer(self, a, b):
        """a (dot) b^T for two column vectors"""
        return self.dot(a, self.transpose(b))

    def transpose(self, x, axes=None):            return self.xp.transpose(x, axes)
    def sqrt(self, x):                             return self.xp.sqrt(x)
    def exp(self, x):                              return self.xp.exp(x)
    def log(self, x):                              return self.xp.log(x)
    def tanh(self, x):                             return self.xp.tanh(x)
    def clip(self, x, lo, hi):                     return self.xp.clip(x, lo, hi)
    def maximum(self, a, b):                       return self.xp.maximum(a, b)
    def sum(self, x, axis=None, keepdims=False):   return self.xp.sum(x, axis=axis, keepdims=keepdims)
    def mean(self, x, axis=None, keepdims=False):  return self.xp.mean(x, axis=axis, keepdims=keepdims)
    def max(self, x, axis=None, keepdims=False):   return self.xp.max(x, axis=axis, keepdims=keepdims)
    def concatenate(self, arrays, axis=0):         return self.xp.concatenate(arrays, axis=axis)

    # -------- delegate unknown attrs to xp --------
    def __getattr__(self, name):
        return getattr(self.xp, name)


# Global backend instance - can be overridden
backend = Backend(use_gpu=False)
