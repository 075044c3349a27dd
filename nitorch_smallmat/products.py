"""
## Overview

Products between fixed-size containers.

Two conventions coexist and must not be confused:

- `dot(a, b)` and `outer(a, b)` are inner/outer products: they apply a
  Hermitian transpose to one operand (the first one for `dot`, the
  second one for `outer`). Rows are first reinterpreted as columns
  (positional transpose, no conjugation).
- `a * b` is the plain matrix product: a `Row` is already a transposed
  vector, so `row * vec` and `vec * row` never conjugate anything.

`multiply` (the `*` operator) tries the conforming products first
(`Row*Vec`, `Vec*Row`, `Mat*Vec`, `Row*Mat`, `Mat*Mat` and their
`SymMat` variants). When the shapes do not conform, it falls back to
the non-conforming product: every element of the most composite
operand is multiplied by the other operand as a whole, which yields a
container of containers. `matmul` (the `@` operator) only accepts
conforming operands.

---
"""
__all__ = ['dot', 'outer', 'multiply', 'multiply_nonconforming', 'matmul',
           'rowvec', 'vecrow', 'matvec', 'rowmat', 'matmat']
import torch
from typing import Union
from .elements import promote
from .shapes import SmallMatrix, Vec, Row, Mat, SymMat
from .errors import ShapeMismatchError
from .utils import is_scalar
from .typing import Scalar
from .sym import sym_matvec, row_symmat
from ._impl import small as _small


def _as_column(x, op):
    if isinstance(x, Row):
        return x.positional_transpose()
    if isinstance(x, Vec):
        return x
    raise TypeError(f'{op}: expected a Vec or a Row but got '
                    f'{type(x).__name__}')


def _check_scalar_elements(op, *args):
    for arg in args:
        if isinstance(arg, SmallMatrix) and arg.is_composite:
            raise TypeError(f'{op}: composite elements are not supported')


def _promoted(a, b, va=None, vb=None):
    """Values of `a` and `b`, cast to the element type of `a * b`"""
    dtype = promote(a, b).dtype
    va = a.value if va is None else va
    vb = b.value if vb is None else vb
    return va.to(dtype), vb.to(dtype)


def _sum_products(a, b):
    n = len(a)
    if n == 1:
        return _small.dot1(a, b)
    elif n == 2:
        return _small.dot2(a, b)
    elif n == 3:
        return _small.dot3(a, b)
    return (a * b).sum()


def dot(a, b):
    """Inner product `sum_i conj(a[i]) * b[i]`

    Parameters
    ----------
    a : Vec(N) or Row(N)
        Left operand. Its elements are conjugated.
    b : Vec(N) or Row(N)
        Right operand.

    Returns
    -------
    ab : () tensor

    """
    a = _as_column(a, 'dot')
    b = _as_column(b, 'dot')
    _check_scalar_elements('dot', a, b)
    if len(a) != len(b):
        raise ShapeMismatchError('dot', a.shape, b.shape)
    # fold the Hermitian transpose into the view flags of `a`
    ah, vb = _promoted(a, b, va=a.element.herm().apply(a.raw))
    return _sum_products(ah, vb)


def outer(a, b):
    """Outer product `a[i] * conj(b[j])`

    Parameters
    ----------
    a : Vec(M) or Row(M)
        Left operand.
    b : Vec(M) or Row(M)
        Right operand. Its elements are conjugated.

    Returns
    -------
    ab : Mat(M, M)

    """
    a = _as_column(a, 'outer')
    b = _as_column(b, 'outer')
    _check_scalar_elements('outer', a, b)
    if len(a) != len(b):
        raise ShapeMismatchError('outer', a.shape, b.shape)
    va, bh = _promoted(a, b, vb=b.element.herm().apply(b.raw))
    return Mat._from_raw(va[:, None] * bh[None, :])


def rowvec(row, vec):
    """Conforming product `Row(N) * Vec(N)` (no conjugation)"""
    if len(row) != len(vec):
        raise ShapeMismatchError('rowvec', row.shape, vec.shape)
    return _sum_products(*_promoted(row, vec))


def vecrow(vec, row):
    """Conforming product `Vec(M) * Row(M) -> Mat(M, M)` (no conjugation)"""
    if len(vec) != len(row):
        raise ShapeMismatchError('vecrow', vec.shape, row.shape)
    v, r = _promoted(vec, row)
    return Mat._from_raw(v[:, None] * r[None, :])


def matvec(mat, vec):
    """Conforming product `Mat(M, N) * Vec(N) -> Vec(M)`"""
    if mat.ncol != len(vec):
        raise ShapeMismatchError('matvec', mat.shape, vec.shape)
    m, v = _promoted(mat, vec)
    n = mat.nrow
    if mat.is_square and n <= 3:
        if n == 1:
            mv = _small.matvec1(m, v)
        elif n == 2:
            mv = _small.matvec2(m, v)
        else:
            mv = _small.matvec3(m, v)
    else:
        mv = (m * v[None, :]).sum(1)
    return Vec._from_raw(mv)


def rowmat(row, mat):
    """Conforming product `Row(M) * Mat(M, N) -> Row(N)`"""
    if len(row) != mat.nrow:
        raise ShapeMismatchError('rowmat', row.shape, mat.shape)
    # result[j] = row * column j
    r, m = _promoted(row, mat)
    rm = (r[:, None] * m).sum(0)
    return Row._from_raw(rm)


def matmat(a, b):
    """Conforming product `Mat(M, K) * Mat(K, N) -> Mat(M, N)`"""
    if isinstance(a, SymMat):
        a = a.full()
    if isinstance(b, SymMat):
        b = b.full()
    if a.ncol != b.nrow:
        raise ShapeMismatchError('matmat', a.shape, b.shape)
    va, vb = _promoted(a, b)
    mm = (va[:, :, None] * vb[None, :, :]).sum(1)
    return Mat._from_raw(mm)


def _conforming(a, b):
    """Return the conforming product function for `a * b`, if any"""
    if isinstance(a, Row):
        if isinstance(b, Vec) and len(a) == len(b):
            return rowvec
        if isinstance(b, Mat) and len(a) == b.nrow:
            return rowmat
        if isinstance(b, SymMat) and len(a) == b.size:
            return row_symmat
    elif isinstance(a, Vec):
        if isinstance(b, Row) and len(a) == len(b):
            return vecrow
    elif isinstance(a, Mat):
        if isinstance(b, Vec) and a.ncol == len(b):
            return matvec
        if isinstance(b, (Mat, SymMat)) and a.ncol == b.shape[0]:
            return matmat
    elif isinstance(a, SymMat):
        if isinstance(b, Vec) and a.size == len(b):
            return sym_matvec
        if isinstance(b, (Mat, SymMat)) and a.size == b.shape[0]:
            return matmat
    return None


def _scale(x, s, left):
    s = torch.as_tensor(s, device=x.device)
    if isinstance(x, SymMat) and s.is_complex():
        # a complex multiple of a Hermitian matrix is not Hermitian
        x = x.full()
    value = s * x.value if left else x.value * s
    return x._from_raw(value, None, x.inner)


def multiply(a: Union[SmallMatrix, Scalar],
             b: Union[SmallMatrix, Scalar]):
    """Product `a * b` of two containers, or of a container and a scalar

    The conforming product is used whenever the shapes allow it.
    Otherwise, the non-conforming product is returned.

    Parameters
    ----------
    a : SmallMatrix or scalar
    b : SmallMatrix or scalar

    Returns
    -------
    ab : SmallMatrix or () tensor

    """
    if is_scalar(a) and is_scalar(b):
        return torch.as_tensor(a) * b
    if is_scalar(a):
        return _scale(b, a, left=True)
    if is_scalar(b):
        return _scale(a, b, left=False)
    fn = _conforming(a, b)
    if fn is not None:
        _check_scalar_elements('multiply', a, b)
        return fn(a, b)
    return multiply_nonconforming(a, b)


def matmul(a, b):
    """Conforming product `a @ b`

    Raises
    ------
    ShapeMismatchError
        If the operands do not conform.

    """
    fn = _conforming(a, b)
    if fn is None:
        raise ShapeMismatchError('matmul', a.shape, b.shape)
    _check_scalar_elements('matmul', a, b)
    return fn(a, b)


def multiply_nonconforming(a, b):
    """Non-conforming product: elementwise product with a whole operand

    The result has the container type and shape of the most composite
    operand (matrices are more composite than vectors and rows; the
    left operand wins ties). Each of its elements is the product of the
    corresponding element with the other operand, in the original
    left-to-right order:

    - `a` most composite: `result[i] = a[i] * b`
    - `b` most composite: `result[i] = a * b[i]`

    Symmetric matrices are expanded to full matrices.

    Parameters
    ----------
    a : SmallMatrix
    b : SmallMatrix

    Returns
    -------
    ab : SmallMatrix with composite elements

    """
    _check_scalar_elements('multiply_nonconforming', a, b)
    if isinstance(a, SymMat):
        a = a.full()
    if isinstance(b, SymMat):
        b = b.full()
    va, vb = _promoted(a, b)
    if b._rank > a._rank:
        out = va * vb.reshape(vb.shape + (1,) * va.dim())
        return type(b)._from_raw(out, None, type(a))
    out = va.reshape(va.shape + (1,) * vb.dim()) * vb
    return type(a)._from_raw(out, None, type(b))
