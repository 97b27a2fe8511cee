"""
Unit Economics Simulation

Unit cost, ROI and payback period for given scale parameters.
"""

from .core import (
    ECONOMICS_METRICS,
    EconomicsMetric,
    EconomicsParameters,
    compute_metrics
)

from .evaluators import (
    EconomicsMetricValidator,
    make_economics_detector,
    make_economics_request_builder
)

from .pipeline import (
    get_unit_economics_runnable,
    simulate_unit_economics,
    asimulate_unit_economics
)

__all__ = [
    'ECONOMICS_METRICS',
    'EconomicsMetric',
    'EconomicsParameters',
    'compute_metrics',
    'EconomicsMetricValidator',
    'make_economics_detector',
    'make_economics_request_builder',
    'get_unit_economics_runnable',
    'simulate_unit_economics',
    'asimulate_unit_economics'
]
