from bitbloom.metrics.metrics import Metrics

__all__ = ["Metrics"]
