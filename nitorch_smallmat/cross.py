"""
## Overview

Cross products of 2D and 3D vectors, and the matrices that represent
them.

- `cross(a, b)` (also `a % b`): 3D vectors give a 3D vector, which is a
  `Row` if either operand is a `Row` and a `Vec` otherwise. 2D vectors
  give the scalar `a0*b1 - a1*b0`. Elements are never conjugated.
- `cross_mat(v)`: matrix `M(v)` such that `M(v) * w == v % w`. It is a
  3x3 skew-symmetric `Mat` in 3D and a 2-element `Row` in 2D.
- `cross_mat_sq(v)`: symmetric matrix `S(v)` such that
  `S(v) * w == -v % (v % w)`, which is the form used to shift inertia
  matrices with the parallel axis theorem.

The same matrix is produced for a `Vec` or a `Row`. When `v` is a
negated view, the negation is folded into the closed form (it is applied
to the raw values exactly once) and the result is a plain matrix.

---
"""
__all__ = ['cross', 'cross_mat', 'cross_mat_sq']
from typing import Union
from torch import Tensor
from .shapes import Vec, Row, Mat, SymMat
from .elements import Element, promote
from .errors import ShapeMismatchError
from ._impl import small as _small


VectorLike = Union[Vec, Row]


def _check_vector(v, op, sizes=(2, 3)):
    if not isinstance(v, (Vec, Row)):
        raise TypeError(f'{op}: expected a Vec or a Row but got '
                        f'{type(v).__name__}')
    if v.is_composite:
        raise TypeError(f'{op}: composite elements are not supported')
    if len(v) not in sizes:
        raise ShapeMismatchError(op, v.shape)


def cross(a: VectorLike, b: VectorLike) -> Union[Vec, Row, Tensor]:
    """Cross product

    Parameters
    ----------
    a : Vec(3) or Row(3) or Vec(2) or Row(2)
    b : Vec(3) or Row(3) or Vec(2) or Row(2)

    Returns
    -------
    ab : Vec(3) or Row(3) or () tensor
        In 3D, a `Row` if either operand is a `Row`, else a `Vec`.
        In 2D, the scalar `a0*b1 - a1*b0`.

    """
    _check_vector(a, 'cross')
    _check_vector(b, 'cross')
    if len(a) != len(b):
        raise ShapeMismatchError('cross', a.shape, b.shape)
    dtype = promote(a, b).dtype
    va, vb = a.value.to(dtype), b.value.to(dtype)
    if len(a) == 2:
        return _small.cross2(va, vb)
    out = _small.cross3(va, vb)
    if isinstance(a, Row) or isinstance(b, Row):
        return Row._from_raw(out)
    return Vec._from_raw(out)


def _unnegated(v):
    """Values of `v` without its negation flag, and the folded sign"""
    element = v.element
    sign = 1
    if element.negated:
        sign = -1
        element = Element(element.dtype, conjugated=element.conjugated)
    return element.apply(v.raw), sign


def cross_mat(v: VectorLike) -> Union[Mat, Row]:
    """Cross product matrix

    Requires 3 flops to form (3D) or 1 flop (2D).

    Parameters
    ----------
    v : Vec(3) or Row(3) or Vec(2) or Row(2)

    Returns
    -------
    m : Mat(3, 3) or Row(2)
        Matrix such that `m * w == v % w`.

    """
    _check_vector(v, 'cross_mat')
    value, sign = _unnegated(v)
    if len(v) == 2:
        return Row._from_raw(_small.cross_mat2(value, sign))
    return Mat._from_raw(_small.cross_mat3(value, sign))


def cross_mat_sq(v: VectorLike) -> SymMat:
    r"""Square of the cross product matrix

    If `M(v) = cross_mat(v)`, then
    `S(v) = -M(v) * M(v) = dot(v, v) * I - outer(v, v)`.
    With `v = [x, y, z]`:

        [ y^2+z^2     .        .    ]
        [   -xy    x^2+z^2     .    ]
        [   -xz      -yz    x^2+y^2 ]

    This requires 11 flops to form. There is no 2D equivalent.

    Parameters
    ----------
    v : Vec(3) or Row(3)
        Real-valued vector.

    Returns
    -------
    s : SymMat(3)

    """
    _check_vector(v, 'cross_mat_sq', sizes=(3,))
    if v.element.is_complex:
        raise TypeError('cross_mat_sq: complex elements are not supported')
    # quadratic in v: a negation cancels out, use the raw values as is
    value, _ = _unnegated(v)
    return SymMat._from_raw(_small.cross_mat_sq3(value))
