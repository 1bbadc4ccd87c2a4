"""Public API for draig."""
from .diagram import (
    ArgumentError,
    Chart,
    DiagramError,
    DimensionError,
    UndefinedPinError,
    UnknownCommandError,
    interpret,
    render,
    to_svg,
)
from .fit import FitIssue, check_fit
from .ringdeque import DequeStateError, RingDeque

__all__ = [
    "render",
    "interpret",
    "to_svg",
    "check_fit",
    "Chart",
    "FitIssue",
    "RingDeque",
    "DiagramError",
    "ArgumentError",
    "UndefinedPinError",
    "DimensionError",
    "UnknownCommandError",
    "DequeStateError",
]
