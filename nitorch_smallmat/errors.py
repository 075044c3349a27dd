"""Exceptions raised by small-matrix operations.

Shapes are only known at run time, so dimension errors that a typed
implementation would catch when building are reported as
`ShapeMismatchError`. Inversion is the only operation that can fail on
well-formed inputs, with `SingularMatrixError`.
"""
__all__ = ['ShapeMismatchError', 'SingularMatrixError', 'LapackArgumentError']
import torch


class ShapeMismatchError(ValueError):
    """Operand shapes do not satisfy the operation's rule"""

    def __init__(self, op, *shapes):
        self.op = op
        self.shapes = shapes
        shapes = ' and '.join(str(s) for s in shapes)
        super().__init__(f'{op}: incompatible shapes {shapes}')


class SingularMatrixError(torch.linalg.LinAlgError):
    """Matrix is singular and cannot be inverted

    Attributes
    ----------
    routine : str
        Name of the routine that detected the singularity.
    info : int or None
        Lapack status code (index of the zero pivot), if any.
    """

    def __init__(self, routine, info=None):
        self.routine = routine
        self.info = info
        msg = f'{routine}: matrix is singular so can\'t be inverted'
        if info is not None:
            msg += f' (lapack info={info})'
        super().__init__(msg)


class LapackArgumentError(RuntimeError):
    """A Lapack routine rejected one of its arguments (negative info)"""

    def __init__(self, routine, info):
        self.routine = routine
        self.info = info
        super().__init__(f'Argument {-info} to Lapack {routine} routine '
                         f'was bad')
