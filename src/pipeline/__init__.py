"""Pipeline module - readiness state and assistant wiring."""
from .readiness import ReadinessState, build_readiness
from .assistant import AssistantDomain, AssistantPipeline, build_pipelines, load_domains

__all__ = [
    "ReadinessState",
    "build_readiness",
    "AssistantDomain",
    "AssistantPipeline",
    "build_pipelines",
    "load_domains",
]
