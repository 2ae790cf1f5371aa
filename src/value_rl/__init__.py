# src/value_rl/__init__.py
from .callbacks import CallbackList, FitCallback, LossHistoryCallback, RichProgressCallback
from .errors import TrainingError
from .logging import NullLogger, PythonScalarLogger, ScalarLogger
from .train import ArrayDataset, Dataset, FitStats, ValueMLP, fit

__all__ = [
    "ArrayDataset",
    "CallbackList",
    "Dataset",
    "FitCallback",
    "FitStats",
    "LossHistoryCallback",
    "NullLogger",
    "PythonScalarLogger",
    "RichProgressCallback",
    "ScalarLogger",
    "TrainingError",
    "ValueMLP",
    "fit",
]
