"""Pallet load optimisation utilities."""

from .optimizer import (
    STANDARD_PALLET,
    BoxRequest,
    ErrorKind,
    OptimizationError,
    OptimizationResult,
    PalletSpec,
    choose_orientation,
    convert_to_inches,
    load_request,
    optimize,
    optimize_request,
)

__all__ = [
    "STANDARD_PALLET",
    "BoxRequest",
    "ErrorKind",
    "OptimizationError",
    "OptimizationResult",
    "PalletSpec",
    "choose_orientation",
    "convert_to_inches",
    "load_request",
    "optimize",
    "optimize_request",
]
