"""A fully connected network layer with a leaky rectifier, in fixed point."""

from .fixed import fixed_div, fixed_mul, to_fixed

_ONE = to_fixed(1)
_LEAK_SLOPE = _ONE // 10
_LEAK_DIVISOR = to_fixed(10)


def default_learning_rate():
    """Return the learning rate used when none is given: one tenth."""
    return _ONE // 10


def _check_length(name, values, expected):
    if len(values) != expected:
        raise ValueError(f"{name} has {len(values)} values, expected {expected}")


class Layer:
    """Dense layer mapping ``in_size`` inputs to ``out_size`` outputs.

    ``weights[i][j]`` connects input ``j`` to output ``i``.
    """

    def __init__(self, in_size, out_size, learning_rate=None):
        if in_size <= 0 or out_size <= 0:
            raise ValueError("layer sizes must be positive")
        self.in_size = in_size
        self.out_size = out_size
        self.learning_rate = (
            default_learning_rate() if learning_rate is None else learning_rate
        )

        self.inputs = [0] * in_size
        self.pre_outputs = [0] * out_size
        self.outputs = [0] * out_size

        self.biases = [_ONE // (i % 5 + 1) for i in range(out_size)]
        self.weights = [
            [_ONE // ((i * in_size + j) % 5 + 1) for j in range(in_size)]
            for i in range(out_size)
        ]

    def activate(self, inputs):
        """Feed ``inputs`` forward and return the layer's outputs."""
        _check_length("inputs", inputs, self.in_size)
        self.inputs = list(inputs)

        for i, (row, bias) in enumerate(zip(self.weights, self.biases)):
            acc = sum(fixed_mul(x, w) for x, w in zip(self.inputs, row)) + bias
            self.pre_outputs[i] = acc
            self.outputs[i] = acc if acc > 0 else fixed_div(acc, _LEAK_DIVISOR)

        return list(self.outputs)

    def learn(self, costs):
        """Adjust weights and biases against ``costs``; return the input costs.

        Uses the inputs and pre-activations of the last call to ``activate``.
        """
        _check_length("costs", costs, self.out_size)
        costs_out = [0] * self.in_size

        for i, (cost, pre, row) in enumerate(
            zip(costs, self.pre_outputs, self.weights)
        ):
            slope = _ONE if pre > 0 else _LEAK_SLOPE
            move = fixed_mul(cost, slope)

            for j, (weight, x) in enumerate(zip(row, self.inputs)):
                costs_out[j] += fixed_mul(move, weight)
                row[j] = weight - fixed_mul(fixed_mul(move, x), self.learning_rate)

            self.biases[i] -= fixed_mul(move, self.learning_rate)

        return costs_out