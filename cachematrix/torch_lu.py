import logging
from typing import Tuple

import numpy as np
import torch

from .errors import SingularMatrixError
from .options import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)


class LUPyTorch:
    """
    Matrix inversion using PyTorch's (optionally GPU-accelerated) linear algebra.
    """

    def __init__(self, device: str = 'cpu', tolerance: float = DEFAULT_TOLERANCE):
        """
        Args:
            device: 'cuda' for GPU, 'cpu' for CPU
            tolerance: diagonal entries of U at or below this are treated as zero
        """
        self.device = torch.device(device if torch.cuda.is_available() else 'cpu')
        if device.startswith('cuda') and not torch.cuda.is_available():
            logger.warning("CUDA not available, falling back to CPU")
        self.tolerance = tolerance

    def to_tensor(self, A) -> torch.Tensor:
        if isinstance(A, torch.Tensor):
            T = A
        else:
            T = torch.from_numpy(np.asarray(A, dtype=np.float64))
        if not T.is_floating_point() and not T.is_complex():
            T = T.to(torch.float64)
        return T.to(self.device)

    def singular_threshold(self, A: torch.Tensor) -> float:
        """
        Pivot magnitude at or below which A is treated as singular.

        The configured tolerance, raised to n * eps * max|A| so rounding residue
        in lower precision dtypes is not mistaken for a usable pivot.
        """
        if A.numel() == 0:
            return self.tolerance
        magnitude = A.abs()
        eps = torch.finfo(magnitude.dtype).eps
        return max(self.tolerance, eps * A.shape[0] * magnitude.max().item())

    def factor(self, A) -> Tuple[torch.Tensor, torch.Tensor]:
        """
        Compact LU factorization with pivots, rejecting singular input.

        Raises:
            SingularMatrixError: if the factorization fails or a diagonal entry
                of U is within the singularity threshold
        """
        A = self.to_tensor(A)

        try:
            LU, pivots = torch.linalg.lu_factor(A)
        except RuntimeError as exc:
            raise SingularMatrixError(str(exc)) from exc

        if bool((torch.abs(torch.diagonal(LU)) <= self.singular_threshold(A)).any()):
            raise SingularMatrixError("Singular matrix")
        return LU, pivots

    def lu_decomposition(self, A: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        """
        Compute LU decomposition with partial pivoting: PA = LU

        Uses torch.linalg.lu_factor which calls cuSOLVER on GPU and LAPACK on CPU.

        Args:
            A: Input matrix [n, n]

        Returns:
            L: Lower triangular with ones on diagonal [n, n]
            U: Upper triangular [n, n]
            P: Permutation matrix [n, n]
        """
        LU, pivots = self.factor(A)

        n = LU.shape[0]
        U = torch.triu(LU)
        eye = torch.eye(n, dtype=LU.dtype, device=self.device)
        L = torch.tril(LU, diagonal=-1) + eye

        # Pivots are 1-based sequential row swaps
        P = eye.clone()
        for i, pivot in enumerate((pivots - 1).tolist()):
            if i != pivot:
                P[[i, pivot]] = P[[pivot, i]]

        return L, U, P

    def invert_triangular(self, T: torch.Tensor, lower: bool = True) -> torch.Tensor:
        """
        Invert a triangular matrix with a triangular solve against the identity.
        """
        n = T.shape[0]
        I = torch.eye(n, dtype=T.dtype, device=self.device)
        return torch.linalg.solve_triangular(T, I, upper=not lower)

    def invert_via_lu(self, A) -> torch.Tensor:
        """
        Invert matrix using LU decomposition: A^(-1) = U^(-1) @ L^(-1) @ P
        """
        L, U, P = self.lu_decomposition(A)

        L_inv = self.invert_triangular(L, lower=True)
        U_inv = self.invert_triangular(U, lower=False)

        return U_inv @ L_inv @ P

    def invert_direct(self, A) -> torch.Tensor:
        """
        Direct inversion: one LU factorization solved against the identity,
        which is what torch.linalg.inv does internally.
        """
        LU, pivots = self.factor(A)
        I = torch.eye(LU.shape[0], dtype=LU.dtype, device=self.device)
        return torch.linalg.lu_solve(LU, pivots, I)
