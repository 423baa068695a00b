"""Pod league tracker."""

__version__ = "0.1.0"
