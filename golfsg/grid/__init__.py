from .hexgrid import DEFAULT_MAX_CELLS, HexGrid, build_grid, hex_edge_length
from .probability import ProbabilityField, assign_probabilities, normal_pdf

__all__ = [
    "DEFAULT_MAX_CELLS",
    "HexGrid",
    "ProbabilityField",
    "assign_probabilities",
    "build_grid",
    "hex_edge_length",
    "normal_pdf",
]
