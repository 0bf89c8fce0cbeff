from ..helpers.Backend import backend


def calculate_relevance_of_array(contributions, y_relevance):
    """
    Redistribute the relevance of an output array to the input, proportionally to the
    contributions of each input element to each output element.

        r[k] = sum_j ( contributions[j, k] / sum_k' contributions[j, k'] ) * yRelevance[j]

    When the contributions to y[j] sum exactly to 0, yRelevance[j] is split uniformly
    among the input elements.

    contributions: matrix (output size, input size)
    y_relevance: column (output size, 1)
    Returns: column (input size, 1)
    """
    if contributions.shape[0] != y_relevance.shape[0]:
        raise ValueError(f"contributions {contributions.shape} do not match the relevance {y_relevance.shape}")
    return backend.dot(backend.transpose(_shares(contributions)), y_relevance)


def split_relevance(parts, y_relevance):
    """
    Split the relevance of y = sum(parts) among its additive parts, proportionally to their values
    (uniformly where the parts sum exactly to 0). Returns one column per part.
    """
    stacked = backend.concatenate(parts, axis=1)  # (size, n parts)
    shares = _shares(stacked)
    return [shares[:, i:i + 1] * y_relevance for i in range(len(parts))]


def _shares(contributions):
    totals = backend.sum(contributions, axis=1, keepdims=True)
    degenerate = totals == 0.0
    safe_totals = backend.where(degenerate, 1.0, totals)
    uniform = 1.0 / contributions.shape[1]
    return backend.where(degenerate, uniform, contributions / safe_totals)
