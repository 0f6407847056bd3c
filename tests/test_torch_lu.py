"""Tests for the PyTorch inversion backend (CPU unless CUDA is present)."""

import numpy as np
import pytest

torch = pytest.importorskip("torch")

from cachematrix import (  # noqa: E402
    CachedMatrixHolder,
    InversionOptions,
    SingularMatrixError,
    invert,
    resolve_inverse,
)
from cachematrix.torch_lu import LUPyTorch  # noqa: E402

A_NP = np.array([
    [4.0, 3.0, 2.0],
    [3.0, 2.0, 1.0],
    [2.0, 1.0, 3.0]
])


def test_lu_decomposition_reconstructs_pa():
    lu = LUPyTorch(device="cpu")
    A = torch.from_numpy(A_NP)
    L, U, P = lu.lu_decomposition(A)
    assert torch.allclose(L @ U, P @ A)


def test_invert_via_lu_matches_builtin():
    lu = LUPyTorch(device="cpu")
    A = torch.from_numpy(A_NP)
    A_inv = lu.invert_via_lu(A)
    assert torch.allclose(A_inv, torch.linalg.inv(A))
    assert torch.allclose(A @ A_inv, torch.eye(3, dtype=A.dtype))


@pytest.mark.parametrize("method", ["torch", "torch_lu"])
def test_invert_accepts_lists(method):
    inv = invert([[2, 0], [0, 2]], InversionOptions(method=method))
    assert isinstance(inv, torch.Tensor)
    np.testing.assert_allclose(inv.cpu().numpy(), [[0.5, 0.0], [0.0, 0.5]])


SINGULAR = [
    [[1.0, 2.0], [2.0, 4.0]],
    [[1.0, 2.0], [3.0, 6.0]],
    [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]],
    [[0.1, 0.2], [0.3, 0.6]],
    [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6], [0.7, 0.8, 0.9]],
]


@pytest.mark.parametrize("method", ["torch", "torch_lu"])
@pytest.mark.parametrize("matrix", SINGULAR)
def test_singular(method, matrix):
    with pytest.raises(SingularMatrixError):
        invert(matrix, InversionOptions(method=method))


@pytest.mark.parametrize("method", ["torch", "torch_lu"])
@pytest.mark.parametrize("matrix", SINGULAR)
def test_singular_float32(method, matrix):
    A = torch.tensor(matrix, dtype=torch.float32)
    with pytest.raises(SingularMatrixError):
        invert(A, InversionOptions(method=method))


def test_singular_inverse_is_not_cached():
    h = CachedMatrixHolder([[1.0, 2.0], [3.0, 6.0]])
    with pytest.raises(SingularMatrixError):
        resolve_inverse(h, InversionOptions(method="torch"))
    assert h.get_cached_inverse() is None


def test_float32_inverse_stays_float32():
    A = torch.from_numpy(A_NP).to(torch.float32)
    inv = invert(A, InversionOptions(method="torch"))
    assert inv.dtype == torch.float32
    assert torch.allclose(A @ inv, torch.eye(3), atol=1e-5)


def test_pivoting():
    inv = invert(torch.tensor([[0.0, 1.0], [1.0, 0.0]]), InversionOptions(method="torch_lu"))
    assert torch.allclose(inv, torch.tensor([[0.0, 1.0], [1.0, 0.0]]))


def test_cuda_request_falls_back_to_cpu(caplog):
    if torch.cuda.is_available():
        pytest.skip("CUDA is available")
    lu = LUPyTorch(device="cuda")
    assert lu.device.type == "cpu"
    assert "falling back to CPU" in caplog.text


def test_holder_caches_tensor_inverse():
    h = CachedMatrixHolder(torch.from_numpy(A_NP))
    opts = InversionOptions(method="torch_lu")
    first = resolve_inverse(h, opts)
    assert resolve_inverse(h, opts) is first
