import logging
from typing import Callable, Optional

from .holder import CachedMatrixHolder
from .inverse import invert
from .options import InversionOptions

logger = logging.getLogger(__name__)


def resolve_inverse(
    holder: CachedMatrixHolder,
    options: Optional[InversionOptions] = None,
    inverter: Optional[Callable] = None,
):
    """
    Return the inverse of the matrix held by `holder`, computing it at most once.

    On a cache hit the stored inverse is returned as is. On a miss the matrix
    is passed to `inverter(matrix, options)` and the result is cached in the
    holder before being returned. Errors from the inverter propagate and leave
    the holder without a cached inverse.

    Args:
        holder: the matrix and its cache
        options: forwarded unchanged to the inverter
        inverter: inversion routine, defaults to cachematrix.inverse.invert
    """
    cached = holder.get_cached_inverse()
    if cached is not None:
        logger.info("getting cached data")
        return cached

    logger.debug("no cached inverse, computing")
    if inverter is None:
        inverter = invert
    inverse = inverter(holder.get_matrix(), options)
    holder.set_cached_inverse(inverse)
    return inverse
