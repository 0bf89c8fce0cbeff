from .AugmentedArray import AugmentedArray

__all__ = ["AugmentedArray"]
