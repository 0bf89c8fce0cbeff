from .RecurrentNeuralProcessor import RecurrentNeuralProcessor

__all__ = ["RecurrentNeuralProcessor"]
