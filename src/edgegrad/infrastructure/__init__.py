from ._context import Context
from ._evaluate import backward, forward

__all__ = [Context.__name__, forward.__name__, backward.__name__]
