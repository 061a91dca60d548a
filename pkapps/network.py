"""A feed-forward network built from fixed-point dense layers."""

from .fixed import fixed_div, fixed_mul, to_fixed
from .layer import Layer, default_learning_rate


class Network:
    """Stack of layers trained by gradient descent on mean squared error."""

    def __init__(self, in_size, learning_rate=None):
        if in_size <= 0:
            raise ValueError("input size must be positive")
        self.in_size = in_size
        self.learning_rate = (
            default_learning_rate() if learning_rate is None else learning_rate
        )
        self.layers = []

    @property
    def outputs(self):
        """Outputs of the last layer after the latest activation."""
        self._require_layers()
        return list(self.layers[-1].outputs)

    def _require_layers(self):
        if not self.layers:
            raise ValueError("network has no layers")

    def add_layer(self, out_size):
        """Append a layer of ``out_size`` neurons and return it."""
        in_size = self.layers[-1].out_size if self.layers else self.in_size
        layer = Layer(in_size, out_size, self.learning_rate)
        self.layers.append(layer)
        return layer

    def activate(self, inputs):
        """Feed ``inputs`` through every layer and return the final outputs."""
        self._require_layers()
        if len(inputs) != self.in_size:
            raise ValueError(
                f"inputs has {len(inputs)} values, expected {self.in_size}"
            )
        values = list(inputs)
        for layer in self.layers:
            values = layer.activate(values)
        return values

    def learn(self, correct):
        """Back-propagate the error between the last outputs and ``correct``."""
        self._require_layers()
        last = self.layers[-1]
        if len(correct) != last.out_size:
            raise ValueError(
                f"correct has {len(correct)} values, expected {last.out_size}"
            )
        scale = to_fixed(last.out_size)
        costs = [
            fixed_div(fixed_mul(to_fixed(2), out - want), scale)
            for out, want in zip(last.outputs, correct)
        ]
        for layer in reversed(self.layers):
            costs = layer.learn(costs)

    def cost(self, inputs, expected):
        """Return the mean squared error of the network on one sample."""
        self._require_layers()
        out_size = self.layers[-1].out_size
        if len(expected) != out_size:
            raise ValueError(
                f"expected has {len(expected)} values, expected {out_size}"
            )
        outputs = self.activate(inputs)
        total = sum(
            fixed_mul(out - want, out - want) for out, want in zip(outputs, expected)
        )
        return fixed_div(total, to_fixed(out_size))