# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""Model file loading and saving."""

from .loader import load_model, save_model, graph_from_dict, graph_to_dict

__all__ = [
    "load_model",
    "save_model",
    "graph_from_dict",
    "graph_to_dict",
]
