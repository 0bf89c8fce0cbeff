from .ParamsOptimizer import ParamsOptimizer
from .SGDOptimizer import SGDOptimizer
from .AdamWOptimizer import AdamWOptimizer

__all__ = ["ParamsOptimizer", "SGDOptimizer", "AdamWOptimizer"]
