"""
Unrolled kernels for 1x1, 2x2 and 3x3 operands.

All kernels work on materialized tensors (views already applied) and are
compiled with torchscript. Flop counts are given for real elements.
"""
import torch
from torch import Tensor
from typing import List


# ----------------------------------------------------------------------
#   inner products (no conjugation: callers conjugate beforehand)
# ----------------------------------------------------------------------


@torch.jit.script
def dot1(a, b):
    return a[0] * b[0]


@torch.jit.script
def dot2(a, b):
    return a[0] * b[0] + a[1] * b[1]


@torch.jit.script
def dot3(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


# ----------------------------------------------------------------------
#   square matrix-vector products
# ----------------------------------------------------------------------


@torch.jit.script
def matvec1(A, v):
    return torch.stack([A[0, 0] * v[0]])


@torch.jit.script
def matvec2(A, v):
    return torch.stack([A[0, 0] * v[0] + A[0, 1] * v[1],
                        A[1, 0] * v[0] + A[1, 1] * v[1]])


@torch.jit.script
def matvec3(A, v):
    return torch.stack([A[0, 0] * v[0] + A[0, 1] * v[1] + A[0, 2] * v[2],
                        A[1, 0] * v[0] + A[1, 1] * v[1] + A[1, 2] * v[2],
                        A[2, 0] * v[0] + A[2, 1] * v[1] + A[2, 2] * v[2]])


# ----------------------------------------------------------------------
#   determinants
# ----------------------------------------------------------------------


# 3 flops
@torch.jit.script
def det2(a):
    dt = a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0]
    return dt


# 14 flops
@torch.jit.script
def det3(a):
    dt = a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1]) - \
         a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0]) + \
         a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
    return dt


# ----------------------------------------------------------------------
#   inverses (the caller checks that `dt` is nonzero)
# ----------------------------------------------------------------------


# one divide + 9 flops
@torch.jit.script
def inv2(A, dt):
    ood = torch.reciprocal(dt)
    F = torch.stack([torch.stack([ood * A[1, 1], -ood * A[0, 1]]),
                     torch.stack([-ood * A[1, 0], ood * A[0, 0]])])
    return F


@torch.jit.script
def cofactors3_row0(A) -> List[Tensor]:
    # 2x2 determinants of the submatrices with the first row removed,
    # shared by the determinant and the first column of the inverse
    d00 = A[1, 1] * A[2, 2] - A[1, 2] * A[2, 1]
    d01 = A[1, 0] * A[2, 2] - A[1, 2] * A[2, 0]
    d02 = A[1, 0] * A[2, 1] - A[1, 1] * A[2, 0]
    return [d00, d01, d02]


# one divide + 45 flops
@torch.jit.script
def inv3(A, d0: List[Tensor], dt):
    d00, d01, d02 = d0[0], d0[1], d0[2]
    ood = torch.reciprocal(dt)
    d10 = A[0, 1] * A[2, 2] - A[0, 2] * A[2, 1]
    d11 = A[0, 0] * A[2, 2] - A[0, 2] * A[2, 0]
    d12 = A[0, 0] * A[2, 1] - A[0, 1] * A[2, 0]
    d20 = A[0, 1] * A[1, 2] - A[0, 2] * A[1, 1]
    d21 = A[0, 0] * A[1, 2] - A[0, 2] * A[1, 0]
    d22 = A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0]
    F = torch.stack([
        torch.stack([ood * d00, -ood * d10, ood * d20]),
        torch.stack([-ood * d01, ood * d11, -ood * d21]),
        torch.stack([ood * d02, -ood * d12, ood * d22]),
    ])
    return F


# ----------------------------------------------------------------------
#   cross products
# ----------------------------------------------------------------------


@torch.jit.script
def cross2(a, b):
    return a[0] * b[1] - a[1] * b[0]


@torch.jit.script
def cross3(a, b):
    return torch.stack([a[1] * b[2] - a[2] * b[1],
                        a[2] * b[0] - a[0] * b[2],
                        a[0] * b[1] - a[1] * b[0]])


@torch.jit.script
def cross_mat3(v, sign: int):
    # `sign == -1` builds the matrix of `-v` from the raw values of `v`
    zero = torch.zeros_like(v[0])
    x, y, z = v[0], v[1], v[2]
    if sign < 0:
        return torch.stack([torch.stack([zero, z, -y]),
                            torch.stack([-z, zero, x]),
                            torch.stack([y, -x, zero])])
    return torch.stack([torch.stack([zero, -z, y]),
                        torch.stack([z, zero, -x]),
                        torch.stack([-y, x, zero])])


@torch.jit.script
def cross_mat2(v, sign: int):
    if sign < 0:
        return torch.stack([v[1], -v[0]])
    return torch.stack([-v[1], v[0]])


# 11 flops
@torch.jit.script
def cross_mat_sq3(v):
    x, y, z = v[0], v[1], v[2]
    xx = x * x
    yy = y * y
    zz = z * z
    nx = -x
    ny = -y
    # compact layout: diagonal, then upper triangle (01, 02, 12)
    return torch.stack([yy + zz, xx + zz, xx + yy,
                        nx * y, nx * z, ny * z])
