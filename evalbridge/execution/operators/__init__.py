# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Operator Implementations

Operators are organized by category:
- math_ops: Identity, Add, Sub, Mul, Times
- activation_ops: Relu, Sigmoid, Tanh
"""

# Import all operator modules to register them
from . import math_ops
from . import activation_ops

__all__ = [
    "math_ops",
    "activation_ops",
]
