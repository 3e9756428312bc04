import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

DEFAULT_MODEL = "gpt-4o"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class EvaluatorConfig:
    """Settings for one request against the text-generation endpoint.

    Resolved once at the service boundary and passed down explicitly.
    ``timeout`` of None leaves the client's own default in place.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = 0.3
    max_tokens: int = 4000
    question_temperature: float = 0.7
    question_max_tokens: int = 3000
    mock_mode: bool = False
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> "EvaluatorConfig":
        """Build from the environment (``.env`` is loaded at import). An explicit ``api_key`` wins."""
        key = api_key or os.getenv("OPENAI_API_KEY")
        timeout = os.getenv("OPENAI_TIMEOUT")
        return cls(
            api_key=key.strip() if key else None,
            model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            mock_mode=_env_flag("MOCK_MODE"),
            timeout=float(timeout) if timeout else None,
        )

    def with_key(self, api_key: Optional[str]) -> "EvaluatorConfig":
        return replace(self, api_key=api_key)
