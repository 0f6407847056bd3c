class InversionError(ValueError):
    """Base class for failures raised by the inversion backends."""


class InvalidShapeError(InversionError):
    """Matrix is not two-dimensional and square."""


class SingularMatrixError(InversionError):
    """Matrix is not invertible within the configured tolerance."""
