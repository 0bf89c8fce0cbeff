from ..LayerParameters import LayerParameters


class TPRLayerParameters(LayerParameters):
    """
    The parameters of a Tensor Product Representation layer.

    w_in_s, w_in_r: input weights of the symbols / roles attention
    w_rec_s, w_rec_r: recurrent weights of the symbols / roles attention
    b_s, b_r: biases of the symbols / roles attention
    S: the symbols embeddings (d_symbols, n_symbols)
    R: the roles embeddings (d_roles, n_roles)

    The output size is d_symbols * d_roles.
    """
    def __init__(self, input_size, n_symbols, d_symbols, n_roles, d_roles):
        super().__init__()
        self.input_size = input_size
        self.n_symbols = n_symbols
        self.d_symbols = d_symbols
        self.n_roles = n_roles
        self.d_roles = d_roles
        self.output_size = d_symbols * d_roles

        self._weights("w_in_s", (n_symbols, input_size))
        self._weights("w_in_r", (n_roles, input_size))
        self._weights("w_rec_s", (n_symbols, self.output_size))
        self._weights("w_rec_r", (n_roles, self.output_size))
        self._biases("b_s", n_symbols)
        self._biases("b_r", n_roles)
        self._weights("S", (d_symbols, n_symbols))
        self._weights("R", (d_roles, n_roles))
