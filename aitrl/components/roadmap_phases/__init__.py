"""
R&D Roadmap Phases

Phase-by-phase roadmap from the current production scale to deployment.
"""

from .core import (
    ROADMAP_PHASES,
    RoadmapPhase
)

from .evaluators import (
    RoadmapPhaseDetector,
    RoadmapPhaseValidator,
    make_roadmap_detector,
    make_roadmap_request_builder
)

from .pipeline import (
    get_roadmap_runnable,
    generate_roadmap_phases,
    agenerate_roadmap_phases
)

__all__ = [
    'ROADMAP_PHASES',
    'RoadmapPhase',
    'RoadmapPhaseDetector',
    'RoadmapPhaseValidator',
    'make_roadmap_detector',
    'make_roadmap_request_builder',
    'get_roadmap_runnable',
    'generate_roadmap_phases',
    'agenerate_roadmap_phases'
]
