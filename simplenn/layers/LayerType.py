from enum import Enum


class Property(Enum):
    FEEDFORWARD = "feedforward"
    RECURRENT = "recurrent"
    MERGE = "merge"


class Connection(Enum):
    """The layer families, each tagged with its property."""
    Feedforward = ("feedforward", Property.FEEDFORWARD)
    Norm = ("norm", Property.FEEDFORWARD)
    RAN = ("ran", Property.RECURRENT)
    TPR = ("tpr", Property.RECURRENT)
    Biaffine = ("biaffine", Property.MERGE)
    Product = ("product", Property.MERGE)

    def __init__(self, label, prop):
        self.label = label
        self.property = prop
