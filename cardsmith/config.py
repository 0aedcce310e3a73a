"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from cardsmith.generation.prompts import DEFAULT_CONTEXT
from cardsmith.scrape.text import SelectorFilter


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    api_key: str = ""

    # Provider credentials (OPENAI_API_KEY, ...) are read from the environment by pydantic-ai
    llm_provider: str = "openai"
    model: str = "gpt-4o-mini"
    generation_context: str = DEFAULT_CONTEXT

    anki_connect_url: str = "http://127.0.0.1:8765"
    default_deck: str = "Default"

    # Comma-separated tag names / substrings
    include_tags: str = ""
    exclude_tags: str = "script,style,noscript,nav,header,footer"
    exclude_ids: str = ""
    exclude_classes: str = ""

    fetch_timeout_seconds: float = 15.0
    user_agent: str = "cardsmith/0.1.0"
    log_level: str = "INFO"

    @property
    def agent_model(self) -> str:
        """Model identifier in the ``provider:model`` form pydantic-ai expects."""
        if ":" in self.model:
            return self.model
        return f"{self.llm_provider}:{self.model}"

    def selector_filter(self) -> SelectorFilter:
        return SelectorFilter(
            include_tags=_split_csv(self.include_tags),
            exclude_tags=_split_csv(self.exclude_tags),
            exclude_ids=_split_csv(self.exclude_ids),
            exclude_classes=_split_csv(self.exclude_classes),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
