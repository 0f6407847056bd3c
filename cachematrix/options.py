import os
from dataclasses import dataclass

METHODS = ("numpy", "numpy_lu", "lu", "gauss_jordan", "torch", "torch_lu")

DEFAULT_METHOD = "numpy"
DEFAULT_TOLERANCE = 1e-12
DEFAULT_DEVICE = "cpu"


@dataclass(frozen=True)
class InversionOptions:
    """
    Settings forwarded untouched from resolve_inverse to the inversion routine.

    Args:
        method: backend name, one of METHODS
        tolerance: lower bound of the singularity threshold; every method also
            scales it up to n * eps * max|A| for the working dtype
        device: torch device for the torch backends ('cpu' or 'cuda')
    """

    method: str = DEFAULT_METHOD
    tolerance: float = DEFAULT_TOLERANCE
    device: str = DEFAULT_DEVICE

    def __post_init__(self):
        if self.method not in METHODS:
            raise ValueError(
                f"Unknown inversion method {self.method!r}, expected one of {', '.join(METHODS)}"
            )
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")

    @classmethod
    def from_env(cls) -> "InversionOptions":
        """Build options from CACHEMATRIX_METHOD, CACHEMATRIX_TOLERANCE and CACHEMATRIX_DEVICE."""
        return cls(
            method=os.environ.get("CACHEMATRIX_METHOD", DEFAULT_METHOD),
            tolerance=float(os.environ.get("CACHEMATRIX_TOLERANCE", DEFAULT_TOLERANCE)),
            device=os.environ.get("CACHEMATRIX_DEVICE", DEFAULT_DEVICE),
        )
