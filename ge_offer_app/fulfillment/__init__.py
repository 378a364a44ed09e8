"""Order fill probability estimation from forecast price bands"""

from .estimator import erf, estimate_fulfillment, normal_cdf

__all__ = ["erf", "estimate_fulfillment", "normal_cdf"]
