"""Core pallet optimisation: orientation search and pallet counts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CM_PER_INCH = 2.54
SUPPORTED_UNITS = ("cm", "in")


@dataclass(frozen=True)
class PalletSpec:
    """Pallet footprint and stacking limit, in inches."""

    length: float
    width: float
    max_height: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "length": self.length,
            "width": self.width,
            "max_height": self.max_height,
        }


STANDARD_PALLET = PalletSpec(length=48, width=40, max_height=90)


@dataclass(frozen=True)
class BoxDimensions:
    length: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "unit": "inches",
        }


@dataclass(frozen=True)
class Orientation:
    """Box footprint as laid along the pallet length and width axes."""

    length: float
    width: float

    def to_dict(self) -> Dict[str, float]:
        return {"length": self.length, "width": self.width}


@dataclass(frozen=True)
class LayerResult:
    boxes_per_layer: int
    orientation: Optional[Orientation]
    boxes_along_length: int = 0
    boxes_along_width: int = 0


class ErrorKind(str, Enum):
    INVALID_DIMENSION = "invalid_dimension"
    BOX_EXCEEDS_PALLET = "box_exceeds_pallet"
    NO_FIT = "no_fit"


@dataclass(frozen=True)
class OptimizationError:
    kind: ErrorKind
    message: str

    success = False

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message, "error": self.kind.value}


@dataclass(frozen=True)
class OptimizationResult:
    box_dimensions: BoxDimensions
    pallet_dimensions: PalletSpec
    boxes_per_layer: int
    layers_per_pallet: int
    boxes_per_pallet: int
    total_pallets: int
    remaining_boxes: int
    actual_height: float
    orientation: Orientation

    success = True

    @property
    def actual_height_cm(self) -> float:
        return inches_to_cm(self.actual_height)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON envelope expected by the front end."""

        return {
            "success": True,
            "data": {
                "box_dimensions": self.box_dimensions.to_dict(),
                "pallet_dimensions": self.pallet_dimensions.to_dict(),
                "optimization": {
                    "boxes_per_layer": self.boxes_per_layer,
                    "layers_per_pallet": self.layers_per_pallet,
                    "boxes_per_pallet": self.boxes_per_pallet,
                    "total_pallets": self.total_pallets,
                    "remaining_boxes": self.remaining_boxes,
                    "actual_height": self.actual_height,
                    "orientation": self.orientation.to_dict(),
                },
            },
        }


Outcome = Union[OptimizationResult, OptimizationError]


def convert_to_inches(value: float, unit: str) -> float:
    if unit == "cm":
        return value / CM_PER_INCH
    return value


def inches_to_cm(value: float) -> float:
    return value * CM_PER_INCH


def choose_orientation(
    box_length: float, box_width: float, pallet: PalletSpec = STANDARD_PALLET
) -> LayerResult:
    """Pick the footprint orientation that fits the most boxes per layer.

    The unrotated orientation is tried first and is only replaced by a
    strictly better one, so ties (e.g. square boxes) keep it.
    """

    best = LayerResult(boxes_per_layer=0, orientation=None)
    for length, width in ((box_length, box_width), (box_width, box_length)):
        along_length = math.floor(pallet.length / length)
        along_width = math.floor(pallet.width / width)
        per_layer = along_length * along_width
        if per_layer > best.boxes_per_layer:
            best = LayerResult(
                boxes_per_layer=per_layer,
                orientation=Orientation(length=length, width=width),
                boxes_along_length=along_length,
                boxes_along_width=along_width,
            )
    return best


def _fail(kind: ErrorKind, message: str) -> OptimizationError:
    logger.debug("Optimisation rejected (%s): %s", kind.value, message)
    return OptimizationError(kind=kind, message=message)


def validate_request(
    length: float, width: float, height: float, quantity: int
) -> Optional[str]:
    """Return an error message for an unusable request, or ``None``."""

    if length <= 0 or width <= 0 or height <= 0:
        return "All dimensions must be greater than 0."
    if quantity <= 0:
        return "Quantity must be greater than 0."
    return None


@dataclass(frozen=True)
class BoxRequest:
    """A calculation request as received by the CLI or web front end."""

    length: float
    width: float
    height: float
    quantity: int
    unit: str = "cm"


def load_request(raw: Dict[str, Any]) -> BoxRequest:
    try:
        request = BoxRequest(
            length=float(raw["length"]),
            width=float(raw["width"]),
            height=float(raw["height"]),
            quantity=int(raw["quantity"]),
            unit=str(raw.get("unit") or "cm").strip().lower(),
        )
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ValueError(
            "Length, width, height and quantity must be numeric values."
        ) from exc
    if not all(
        math.isfinite(value) for value in (request.length, request.width, request.height)
    ):
        raise ValueError("All dimensions must be finite numbers.")
    if request.unit not in SUPPORTED_UNITS:
        valid = ", ".join(SUPPORTED_UNITS)
        raise ValueError(f"Unsupported unit '{request.unit}'. Valid values: {valid}.")
    message = validate_request(
        request.length, request.width, request.height, request.quantity
    )
    if message:
        raise ValueError(message)
    return request


def optimize_request(request: BoxRequest, pallet: PalletSpec = STANDARD_PALLET) -> Outcome:
    return optimize(
        request.length,
        request.width,
        request.height,
        request.quantity,
        unit=request.unit,
        pallet=pallet,
    )


def optimize(
    box_length: float,
    box_width: float,
    box_height: float,
    total_boxes: int,
    unit: str = "cm",
    pallet: PalletSpec = STANDARD_PALLET,
) -> Outcome:
    length = convert_to_inches(box_length, unit)
    width = convert_to_inches(box_width, unit)
    height = convert_to_inches(box_height, unit)

    if not all(math.isfinite(value) for value in (length, width, height)):
        return _fail(
            ErrorKind.INVALID_DIMENSION, "Box dimensions must be finite numbers."
        )
    if length <= 0 or width <= 0 or height <= 0:
        return _fail(
            ErrorKind.INVALID_DIMENSION, "Box dimensions must be greater than 0."
        )
    # Pallet-to-box ratios are floored below and must stay finite.
    ratios = (
        pallet.length / length,
        pallet.width / width,
        pallet.length / width,
        pallet.width / length,
        pallet.max_height / height,
    )
    if not all(math.isfinite(ratio) for ratio in ratios):
        return _fail(
            ErrorKind.INVALID_DIMENSION, "Box dimensions are too small to calculate."
        )

    # Checked against the unrotated footprint, even if rotating would fit.
    if length > pallet.length or width > pallet.width:
        return _fail(
            ErrorKind.BOX_EXCEEDS_PALLET, "Box dimensions exceed the pallet size."
        )

    layer = choose_orientation(length, width, pallet)
    if layer.boxes_per_layer == 0:
        return _fail(ErrorKind.NO_FIT, "The boxes do not fit on the pallet.")

    layers_per_pallet = math.floor(pallet.max_height / height)
    if layers_per_pallet == 0:
        return _fail(
            ErrorKind.NO_FIT,
            "Box height exceeds the maximum pallet height.",
        )

    boxes_per_pallet = layer.boxes_per_layer * layers_per_pallet
    total_pallets = math.ceil(total_boxes / boxes_per_pallet)
    remaining_boxes = total_boxes % boxes_per_pallet
    if remaining_boxes == 0:
        remaining_boxes = boxes_per_pallet
    actual_height = math.ceil(total_boxes / layer.boxes_per_layer) * height

    logger.debug(
        "Orientation %.2f x %.2f in: %d per layer, %d layers, %d pallets",
        layer.orientation.length,
        layer.orientation.width,
        layer.boxes_per_layer,
        layers_per_pallet,
        total_pallets,
    )
    return OptimizationResult(
        box_dimensions=BoxDimensions(length=length, width=width, height=height),
        pallet_dimensions=pallet,
        boxes_per_layer=layer.boxes_per_layer,
        layers_per_pallet=layers_per_pallet,
        boxes_per_pallet=boxes_per_pallet,
        total_pallets=total_pallets,
        remaining_boxes=remaining_boxes,
        actual_height=actual_height,
        orientation=layer.orientation,
    )
