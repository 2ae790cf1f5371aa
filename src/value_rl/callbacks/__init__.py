from .base import CallbackList, FitCallback, wrap_callbacks
from .history import LossHistoryCallback
from .progress import RichProgressCallback

__all__ = ["CallbackList", "FitCallback", "LossHistoryCallback", "RichProgressCallback", "wrap_callbacks"]
