from .params import TestingParams, TrainingParams

__all__ = ["TrainingParams", "TestingParams"]
