"""Small tools: fixed-point arithmetic and neural network, heap allocator, window-server protocol, file utilities, shell and counter service."""

__version__ = "0.1.0"