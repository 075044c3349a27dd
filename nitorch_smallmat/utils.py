import torch
from numbers import Number
from math import sqrt


def is_scalar(x):
    """True if `x` is a python number or a zero-dimensional tensor"""
    if isinstance(x, Number):
        return True
    return torch.is_tensor(x) and x.dim() == 0


def triangular_size(n):
    """Number of elements stored by a compact symmetric matrix"""
    return n * (n + 1) // 2


def triangular_root(nn):
    """Size of the symmetric matrix stored in `nn` compact elements.

    Returns None if `nn` is not a triangular number.
    """
    n = int((sqrt(1 + 8 * nn) - 1) // 2)
    if triangular_size(n) != nn:
        return None
    return n


def upper_index(n, i, j):
    """Index of element (i, j), i < j, in a compact symmetric matrix

    The compact layout stores the diagonal first, followed by the rows
    of the upper triangle:

        [ a d e ]
        [ . b f ]   =>  [a b c d e f]
        [ . . c ]
    """
    return n + (i * (2 * n - i - 1)) // 2 + (j - i - 1)


def to_numpy(x):
    return x.detach().cpu().numpy()


def from_numpy(x, **backend):
    return torch.as_tensor(x, **backend)
