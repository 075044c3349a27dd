"""
## Overview

Determinant and inverse of small square matrices.

Both functions use closed forms for 1x1, 2x2 and 3x3 matrices, which
are much faster than generic algorithms at these sizes:
    - `det` falls back to a recursive cofactor expansion;
    - `inverse` falls back to `lapack_inverse` (LU with partial pivoting).

`inverse` never pivots at sizes 2 and 3, so it can be less accurate
than `lapack_inverse` on badly conditioned matrices. Call
`lapack_inverse` explicitly to get the most stable algorithm.

Negated and conjugated views are stripped before inverting and put
back on the result, since `inv(-A) == -inv(A)` and
`inv(conj(A)) == conj(inv(A))`.

---
"""
__all__ = ['det', 'inverse', 'lapack_inverse', 'COFACTOR_WARN_SIZE']
import torch
from warnings import warn
from .shapes import Mat, SymMat
from .elements import Element
from .errors import ShapeMismatchError, SingularMatrixError
from .utils import to_numpy, from_numpy
from ._impl import small as _small
from ._wrap import lapack as _lapack


# cofactor expansion of larger matrices triggers a RuntimeWarning
COFACTOR_WARN_SIZE = 8


def _as_square(m, op):
    if isinstance(m, SymMat):
        m = m.full()
    if not isinstance(m, Mat):
        raise TypeError(f'{op}: expected a Mat but got {type(m).__name__}')
    if m.is_composite:
        raise TypeError(f'{op}: composite elements are not supported')
    if not m.is_square:
        raise ShapeMismatchError(op, m.shape)
    return m


def _det_cofactor(a):
    n = a.shape[0]
    if n == 1:
        return a[0, 0]
    if n == 2:
        return _small.det2(a)
    if n == 3:
        return _small.det3(a)
    # We're always going to drop the first row.
    a2 = a[1:]
    sign = 1
    result = torch.zeros_like(a[0, 0])
    for j in range(n):
        # recursive, but terminates at 3x3
        keep = [k for k in range(n) if k != j]
        result = result + sign * a[0, j] * _det_cofactor(a2[:, keep])
        sign = -sign
    return result


def det(m, method='cofactor'):
    """Determinant of a square matrix

    !!! note
        1x1, 2x2 and 3x3 matrices use closed forms (0, 3 and 14 flops).

    !!! warning
        With `method='cofactor'`, larger matrices use a recursive
        cofactor expansion along the first row, which costs
        `M*cost(M-1) + 4*M` flops (60 for 4x4, 320 for 5x5) and scales
        very badly. `method='lu'` computes the product of the diagonal
        of an LU factorization instead: it is much faster at large
        sizes, but rounding errors differ from the cofactor expansion.

    Parameters
    ----------
    m : Mat(M, M) or SymMat(M)
        Input matrix.
    method : {'cofactor', 'lu'}, default='cofactor'
        Algorithm used for matrices larger than 3x3.

    Returns
    -------
    d : () tensor
        Determinant.

    """
    method = method.lower()
    if not method.startswith(('cof', 'lu')):
        raise ValueError('Unknown determinant method {}.'.format(method))
    m = _as_square(m, 'det')
    a = m.value
    n = m.nrow
    if n <= 3 or method.startswith('cof'):
        if n > COFACTOR_WARN_SIZE:
            warn(f'det: cofactor expansion of a {n}x{n} matrix is very '
                 f'slow, consider using method="lu"', RuntimeWarning)
        return _det_cofactor(a)
    std = m.element.std_number.dtype
    return torch.linalg.det(a.to(std))


def _check_det(dt, a, routine, rtol=None):
    """Raise if a closed-form determinant is zero or negligible"""
    if bool(dt == 0):
        raise SingularMatrixError(routine)
    if a.is_floating_point() or a.is_complex():
        # Hadamard bound: |det| <= product of the row norms
        scale = torch.linalg.vector_norm(a, dim=1).prod()
        if rtol is None:
            rtol = torch.finfo(scale.dtype).eps
        if bool(dt.abs() <= rtol * scale):
            raise SingularMatrixError(routine)


def _rewrap(inv, element, std):
    # the inverse of a view is the same view of the inverse
    element = Element(std, element.negated, element.conjugated)
    return Mat._from_raw(inv, element)


def inverse(m, rtol=None):
    """Inverse of a square matrix

    !!! note
        1x1, 2x2 and 3x3 matrices use closed forms (1 divide, plus 9
        flops for 2x2 and 45 flops for 3x3). Other sizes call
        `lapack_inverse`.

    Parameters
    ----------
    m : Mat(M, M) or SymMat(M)
        Input matrix.
    rtol : float, default=eps
        A closed-form determinant smaller than `rtol` times the product
        of the row norms of `m` is considered to be zero.

    Returns
    -------
    inv : Mat(M, M)
        Inverse matrix, with the same view (negation, conjugation)
        as the input.

    Raises
    ------
    SingularMatrixError
        If the matrix is singular.

    """
    m = _as_square(m, 'inverse')
    n = m.nrow
    if n > 3:
        return lapack_inverse(m)
    std = m.element.std_number.dtype
    a = m.raw.to(std)
    if n == 1:
        _check_det(a[0, 0], a, 'inverse', rtol)
        inv = a.reciprocal()
    elif n == 2:
        dt = _small.det2(a)
        _check_det(dt, a, 'inverse', rtol)
        inv = _small.inv2(a, dt)
    else:
        # first-row cofactors are shared with the determinant
        d0 = _small.cofactors3_row0(a)
        dt = a[0, 0] * d0[0] - a[0, 1] * d0[1] + a[0, 2] * d0[2]
        _check_det(dt, a, 'inverse', rtol)
        inv = _small.inv3(a, d0, dt)
    return _rewrap(inv, m.element, std)


def _lapack_dtype(dtype):
    if dtype in (torch.float32, torch.float64,
                 torch.complex64, torch.complex128):
        return dtype
    return torch.complex128 if dtype.is_complex else torch.float64


def lapack_inverse(m):
    """Inverse of a square matrix by LU decomposition with pivoting

    This calls Lapack's `getrf` and `getri` on a dense column-major
    copy of the raw values. It is not specialized for small sizes
    (other than 1x1): use it instead of `inverse` if numerical
    stability matters more than speed.

    Parameters
    ----------
    m : Mat(M, M) or SymMat(M)
        Input matrix.

    Returns
    -------
    inv : Mat(M, M)
        Inverse matrix, with the same view (negation, conjugation)
        as the input.

    Raises
    ------
    SingularMatrixError
        If Lapack finds an exactly zero pivot.
    LapackArgumentError
        If Lapack rejects one of its arguments.

    """
    m = _as_square(m, 'lapack_inverse')
    std = m.element.std_number.dtype
    a = m.raw.to(std)
    if m.nrow == 1:
        if bool(a[0, 0] == 0):
            raise SingularMatrixError('lapack_inverse')
        return _rewrap(a.reciprocal(), m.element, std)
    a = a.to(_lapack_dtype(std))
    inv = _lapack.inv(to_numpy(a))
    inv = from_numpy(inv, device=m.device).to(std)
    return _rewrap(inv, m.element, std)
