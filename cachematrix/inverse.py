"""Default dense inversion routine used by resolve_inverse on a cache miss."""

import logging
from typing import Optional, Tuple

import numpy as np

from . import naive, numpy_lu
from .errors import InvalidShapeError, SingularMatrixError
from .options import InversionOptions

logger = logging.getLogger(__name__)


def matrix_shape(matrix) -> Tuple[int, ...]:
    shape = getattr(matrix, "shape", None)
    if shape is not None:
        return tuple(shape)
    try:
        return np.shape(matrix)
    except ValueError as exc:
        # ragged nested lists
        raise InvalidShapeError(f"Matrix rows have inconsistent lengths: {exc}") from exc


def check_square(matrix) -> int:
    shape = matrix_shape(matrix)
    if len(shape) != 2 or shape[0] != shape[1]:
        raise InvalidShapeError(f"Expected a square 2-D matrix, got shape {shape}")
    return shape[0]


def _as_lists(matrix):
    if isinstance(matrix, list):
        return matrix
    return np.asarray(matrix).tolist()


def _numpy_inv(matrix, options):
    A = np.asarray(matrix, dtype=np.float64)
    n = A.shape[0]
    try:
        if n:
            # LAPACK only fails on exact zero pivots, so check conditioning first
            s = np.linalg.svd(A, compute_uv=False)
            threshold = max(options.tolerance, n * np.finfo(A.dtype).eps * s[0])
            if s[-1] <= threshold:
                raise SingularMatrixError(
                    f"Singular matrix: smallest singular value {s[-1]:.3g} <= {threshold:.3g}"
                )
        return np.linalg.inv(A)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(str(exc)) from exc


def _torch_backend(options):
    from .torch_lu import LUPyTorch

    return LUPyTorch(device=options.device, tolerance=options.tolerance)


_BACKENDS = {
    "numpy": _numpy_inv,
    "numpy_lu": lambda m, o: numpy_lu.invert_matrix(m, o.tolerance),
    "lu": lambda m, o: naive.lu_invert(_as_lists(m), o.tolerance),
    "gauss_jordan": lambda m, o: naive.gauss_jordan_invert(_as_lists(m), o.tolerance),
    "torch": lambda m, o: _torch_backend(o).invert_direct(m),
    "torch_lu": lambda m, o: _torch_backend(o).invert_via_lu(m),
}


def invert(matrix, options: Optional[InversionOptions] = None):
    """
    Compute the inverse of a square matrix.

    Args:
        matrix: nested lists, numpy array or torch tensor [n, n]
        options: backend selection and singularity tolerance; read from the
            environment when omitted

    Returns:
        The inverse. numpy backends return an ndarray, the pure Python ones
        nested lists and the torch ones a tensor on options.device.

    Raises:
        InvalidShapeError: matrix is not square
        SingularMatrixError: matrix is not invertible within options.tolerance
    """
    if options is None:
        options = InversionOptions.from_env()
    n = check_square(matrix)
    logger.debug("inverting %dx%d matrix with method=%s", n, n, options.method)
    return _BACKENDS[options.method](matrix, options)
