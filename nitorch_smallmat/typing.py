from typing import Union
from numbers import Number
from torch import Tensor

Scalar = Union[Number, Tensor]
