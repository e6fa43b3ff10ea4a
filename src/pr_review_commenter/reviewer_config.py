# src/pr_review_commenter/reviewer_config.py
import os
import logging
from dataclasses import dataclass, field
from typing import Optional, List, Tuple

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Default values for optional parameters
DEFAULT_API_PROVIDER = "gemini"
DEFAULT_OPENAI_MODEL = "openai/gpt-4o-mini"
DEFAULT_GEMINI_MODEL = "gemini/gemini-1.5-flash"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.2
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_EXCLUDE_PATTERNS = ""
DEFAULT_LOG_LEVEL = "INFO"

SUPPORTED_PROVIDERS = ("gemini", "openai")
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ReviewerConfig:
    """
    Holds all configuration for a review run, sourced from environment
    variables. Built once at startup and passed to the orchestrator.
    """

    # --- SCM Settings ---
    repo_token: Optional[str] = field(
        default_factory=lambda: os.getenv("REPO_TOKEN")
    )  # Handled as a secret by CI
    repository: Optional[str] = field(
        default_factory=lambda: os.getenv("REPO_REPOSITORY")
    )  # "owner/repo"
    pr_number_raw: Optional[str] = field(
        default_factory=lambda: os.getenv("REPO_PR_NUMBER")
    )
    github_api_url: str = field(
        default_factory=lambda: os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/")
    )

    # --- LLM Settings ---
    api_provider: str = field(
        default_factory=lambda: (os.getenv("API_PROVIDER") or DEFAULT_API_PROVIDER).strip().lower()
    )
    openai_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY")
    )
    gemini_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY")
    )
    openai_model: str = field(
        default_factory=lambda: os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
    )
    gemini_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
    )
    max_tokens: int = field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)))
    )
    temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", str(DEFAULT_TEMPERATURE)))
    )

    # --- Reviewer Behavior ---
    include_patterns: List[str] = field(
        default_factory=lambda: [
            p.strip() for p in os.getenv("INCLUDE_PATTERNS", "").split(',') if p.strip()
        ]
    )
    exclude_patterns: List[str] = field(
        default_factory=lambda: [
            p.strip() for p in os.getenv("EXCLUDE_PATTERNS", DEFAULT_EXCLUDE_PATTERNS).split(',') if p.strip()
        ]
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    )

    def __post_init__(self):
        if self.log_level not in VALID_LOG_LEVELS:
            logger.warning(f"Invalid LOG_LEVEL '{self.log_level}'. Defaulting to '{DEFAULT_LOG_LEVEL}'.")
            self.log_level = DEFAULT_LOG_LEVEL

    @property
    def repo_owner_and_name(self) -> Tuple[str, str]:
        """Splits `repository` into (owner, repo). Call validate_config first."""
        owner, _, name = (self.repository or "").partition("/")
        return owner, name

    @property
    def pr_number(self) -> int:
        return int(self.pr_number_raw or "")

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key of the selected provider."""
        if self.api_provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key


def validate_config(config: ReviewerConfig) -> None:
    """
    Validate that all required configuration is present.

    Raises:
        ConfigurationError: Listing every missing or invalid setting.
    """
    problems = []

    if not config.repo_token:
        problems.append("REPO_TOKEN is not set")

    if not config.repository:
        problems.append("REPO_REPOSITORY is not set")
    else:
        owner, name = config.repo_owner_and_name
        if not owner or not name or "/" in name:
            problems.append(f"REPO_REPOSITORY must be 'owner/repo', got '{config.repository}'")

    if not config.pr_number_raw:
        problems.append("REPO_PR_NUMBER is not set")
    elif not config.pr_number_raw.strip().isdigit():
        problems.append(f"REPO_PR_NUMBER must be a number, got '{config.pr_number_raw}'")

    if config.api_provider not in SUPPORTED_PROVIDERS:
        problems.append(
            f"API_PROVIDER must be one of {', '.join(SUPPORTED_PROVIDERS)}, got '{config.api_provider}'"
        )
    elif not config.llm_api_key:
        problems.append(f"{config.api_provider.upper()}_API_KEY is not set for API_PROVIDER '{config.api_provider}'")

    if problems:
        raise ConfigurationError("Missing or invalid configuration: " + "; ".join(problems))


def load_reviewer_config() -> ReviewerConfig:
    """
    Factory function to create and return a ReviewerConfig instance.
    """
    try:
        return ReviewerConfig()
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e
