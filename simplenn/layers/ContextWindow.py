class LayerContextWindow:
    """Gives a layer access to the layers of the previous and next state of a sequence."""
    def get_prev_state(self):
        raise NotImplementedError

    def get_next_state(self):
        raise NotImplementedError


class NoContextWindow(LayerContextWindow):
    """The context of a layer processed out of any sequence."""
    def get_prev_state(self):
        return None

    def get_next_state(self):
        return None


class SequenceContextWindow(LayerContextWindow):
    """
    The context of the layer at position `index` of `states`.

    `states` is the list of the layers at the same depth, one per time step. It
    is shared by reference, so states appended after the creation of this
    window become visible as next states.
    """
    def __init__(self, states, index):
        self.states = states
        self.index = index

    def get_prev_state(self):
        return self.states[self.index - 1] if self.index > 0 else None

    def get_next_state(self):
        return self.states[self.index + 1] if self.index + 1 < len(self.states) else None
