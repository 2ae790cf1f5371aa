from .dataset import ArrayDataset, Dataset
from .fit import LossFn, fit
from .model import ValueMLP
from .types import FitStats

__all__ = ["ArrayDataset", "Dataset", "FitStats", "LossFn", "ValueMLP", "fit"]
