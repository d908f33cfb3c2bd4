"""
Configuration Management for the Grounded Assistant Backend
============================================================

Environment-aware configuration for the provider connection, the
freshness refresh, and the two assistant domains. All settings are
centralized here so the API layer and the pipeline read the same values.

Design Decision: Using pydantic-settings for type-safe configuration with
environment variable support, so each deployment only differs by its .env.
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import Field

# Load .env file from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class ProviderSettings(BaseSettings):
    """
    Remote Provider Configuration

    The provider hosts both the vector stores and the Responses API used
    for retrieval-augmented completion.
    """

    # Falls back to the conventional OPENAI_API_KEY variable
    api_key: str = Field(default_factory=lambda: os.environ.get("OPENAI_API_KEY", ""))
    model: str = "gpt-4.1-mini"
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 60.0

    class Config:
        env_prefix = "RAG_PROVIDER_"


class FreshnessSettings(BaseSettings):
    """
    Freshness Refresh Configuration

    - list_limit: page size for listing a store (later pages are ignored)
    - lookup_concurrency: parallel filename lookups per refresh
    - refresh_on_startup: tag every store once before serving traffic
    """

    list_limit: int = 100
    lookup_concurrency: int = 4
    refresh_on_startup: bool = True

    class Config:
        env_prefix = "RAG_FRESHNESS_"


class PriceDomainSettings(BaseSettings):
    """Price index assistant."""

    slug: str = "mulgatogtog"
    label: str = "Price Index"
    store_id: str = ""
    prompt_file: str = "mulga_prompt.txt"
    max_results: int = 8

    class Config:
        env_prefix = "RAG_PRICE_"


class IndustryDomainSettings(BaseSettings):
    """Industrial activity assistant."""

    slug: str = "saneobtogtog"
    label: str = "Industrial Activity"
    store_id: str = ""
    prompt_file: str = "sanup_prompt.txt"
    max_results: int = 8

    class Config:
        env_prefix = "RAG_INDUSTRY_"


class PathSettings(BaseSettings):
    """
    File System Paths

    Prompt texts and the optional public frontend live under the
    project root by default.
    """

    # Base directory - auto-detect from module location
    base_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent)
    index_file: str = "index_public_v3.html"

    @property
    def prompts_dir(self) -> Path:
        return self.base_dir / "prompts"

    @property
    def public_dir(self) -> Path:
        return self.base_dir / "public"

    class Config:
        env_prefix = "RAG_PATH_"


class Settings(BaseSettings):
    """
    Master Settings Container

    Aggregates all configuration sections for easy access.
    Usage:
        from config.settings import settings
        print(settings.provider.model)
    """

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    freshness: FreshnessSettings = Field(default_factory=FreshnessSettings)
    price: PriceDomainSettings = Field(default_factory=PriceDomainSettings)
    industry: IndustryDomainSettings = Field(default_factory=IndustryDomainSettings)
    paths: PathSettings = Field(default_factory=PathSettings)

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Debug mode
    debug: bool = False

    @property
    def domains(self) -> List[BaseSettings]:
        """Domain sections in registration order."""
        return [self.price, self.industry]

    def initialize(self) -> None:
        """Validate config at startup; a missing key is only a warning here."""
        if not self.provider.api_key:
            print("[Config] OPENAI_API_KEY is empty - provider calls will fail")

    def load_prompt(self, file_name: str) -> str:
        """
        Read a system prompt file from the prompts directory.

        A missing file is not fatal: the assistant then runs with only
        the built-in grounding rules.
        """
        path = self.paths.prompts_dir / file_name
        try:
            return path.read_text(encoding="utf-8")
        except OSError:
            print(f"[Config] Could not read prompt file {path}")
            return ""

    class Config:
        env_prefix = "RAG_"


# Global settings instance
settings = Settings()
