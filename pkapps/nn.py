"""Command that trains a small fixed-point network and draws its learning curve."""

import math
import sys

from .fixed import fixed_div, fixed_mul, format_fixed, to_fixed
from .layer import default_learning_rate
from .network import Network

_XOR_INPUTS = (
    (to_fixed(0), to_fixed(0)),
    (to_fixed(0), to_fixed(1)),
    (to_fixed(1), to_fixed(0)),
    (to_fixed(1), to_fixed(1)),
)
_XOR_OUTPUTS = ((to_fixed(0),), (to_fixed(1),), (to_fixed(1),), (to_fixed(0),))

_GRAPH_MAX = to_fixed(1) // 3 * 2
_GRAPH_WIDTH = 40
_GRAPH_HEIGHT = 24
_STEPS_PER_COLUMN = 40

# Flat weight positions and values as first laid out for the hand-worked
# example; weights are integers, so fractional values truncate.
_HW_WEIGHTS = (
    (
        (0 * 2 * 0, 0.1),
        (1 * 2 * 0, 0.3),
        (2 * 2 * 0, 0.4),
        (0 * 2 * 1, 0.2),
        (1 * 2 * 1, 0.2),
        (2 * 2 * 1, 0.1),
    ),
    (
        (0 * 2 * 0, 0.3),
        (1 * 2 * 0, 0.1),
        (0 * 2 * 1, 0.5),
        (1 * 2 * 1, 0.6),
        (0 * 2 * 2, 0.2),
        (1 * 2 * 2, 0.7),
    ),
)


def graph(out=None):
    """Train a 2-8-1 network on XOR, plotting the average cost as it learns."""
    out = sys.stdout if out is None else out

    net = Network(2)
    net.add_layer(8)
    net.add_layer(1)
    out.write("Network ready\n")

    costs = []
    for _ in range(_GRAPH_WIDTH):
        for step in range(_STEPS_PER_COLUMN):
            sample = step % len(_XOR_INPUTS)
            net.activate(_XOR_INPUTS[sample])
            net.learn(_XOR_OUTPUTS[sample])
        total = sum(
            net.cost(inputs, expected)
            for inputs, expected in zip(_XOR_INPUTS, _XOR_OUTPUTS)
        )
        costs.append(fixed_div(total, to_fixed(len(_XOR_INPUTS))))

    step_height = fixed_div(_GRAPH_MAX, to_fixed(_GRAPH_HEIGHT))
    for row in range(_GRAPH_HEIGHT):
        threshold = fixed_mul(to_fixed(_GRAPH_HEIGHT - row - 1), step_height)
        out.write("".join("#" if cost > threshold else " " for cost in costs))
        out.write("\n")

    out.write("Network test:\n")
    for inputs, expected in zip(_XOR_INPUTS, _XOR_OUTPUTS):
        result = net.activate(inputs)
        out.write(
            f"  {{ {format_fixed(inputs[0], 4)}, {format_fixed(inputs[1], 4)} }}: "
            f"{format_fixed(result[0], 4)} [{format_fixed(expected[0], 4)}]\n"
        )


def hw(out=None):
    """Build the hand-worked 2-3-2 network with its preset weights."""
    out = sys.stdout if out is None else out

    net = Network(2)
    net.add_layer(3)
    net.add_layer(2)

    for layer, assignments in zip(net.layers, _HW_WEIGHTS):
        for position, value in assignments:
            row, column = divmod(position, layer.in_size)
            layer.weights[row][column] = math.trunc(value)

    out.write("Network ready\n")


_COMMANDS = {"graph": graph, "hw": hw}


def main(argv=None):
    """Run the command named by the single argument; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return 1

    out = sys.stdout
    out.write(f"Learning rate: {format_fixed(default_learning_rate(), 10)}\n")

    command = _COMMANDS.get(args[0])
    if command is not None:
        command(out)

    out.write("Done\n")
    return 0