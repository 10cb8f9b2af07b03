from .coefficients import CoefficientSnapshot, CoefficientStore
from .features import derive_group
from .pipeline import run
from .predict import predict

__all__ = ["CoefficientSnapshot", "CoefficientStore", "derive_group", "predict", "run"]
