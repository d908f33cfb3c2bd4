"""
Assistant Pipeline
==================

Binds one assistant domain (store, label, prompt, result cap) to the
grounded answerer and the startup readiness state.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.settings import Settings, settings as default_settings
from src.generation.grounded_answer import GroundedAnswerer
from src.pipeline.readiness import ReadinessState


@dataclass(frozen=True)
class AssistantDomain:
    """Configuration of one assistant endpoint."""
    slug: str
    label: str
    store_id: str
    system_prompt: str
    max_results: int = 8


class AssistantPipeline:
    """One assistant: readiness decides whether is_latest is enforced."""

    def __init__(
        self,
        domain: AssistantDomain,
        answerer: GroundedAnswerer,
        readiness: ReadinessState
    ):
        self.domain = domain
        self.answerer = answerer
        self.readiness = readiness

    @property
    def enforce_latest(self) -> bool:
        return self.readiness.is_ready(self.domain.store_id)

    def ask(self, messages: Any) -> str:
        return self.answerer.answer(
            self.domain.system_prompt,
            messages,
            store_id=self.domain.store_id or None,
            domain_label=self.domain.label,
            enforce_latest=self.enforce_latest,
            max_results=self.domain.max_results
        )


def load_domains(config: Optional[Settings] = None) -> List[AssistantDomain]:
    """Build domain configs from settings, loading each prompt file."""
    config = config or default_settings
    return [
        AssistantDomain(
            slug=section.slug,
            label=section.label,
            store_id=section.store_id,
            system_prompt=config.load_prompt(section.prompt_file),
            max_results=section.max_results
        )
        for section in config.domains
    ]


def build_pipelines(
    domains: List[AssistantDomain],
    answerer: GroundedAnswerer,
    readiness: ReadinessState
) -> Dict[str, AssistantPipeline]:
    """slug -> pipeline"""
    return {d.slug: AssistantPipeline(d, answerer, readiness) for d in domains}
