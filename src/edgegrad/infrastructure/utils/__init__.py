from ._gradcheck import GradcheckResult, gradcheck

__all__ = [GradcheckResult.__name__, gradcheck.__name__]
