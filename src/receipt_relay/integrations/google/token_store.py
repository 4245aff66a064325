"""
Token store for Google OAuth2 token sets.

Tokens are looked up in an ordered list of sources. The first source that
yields a valid token set wins; unreadable or malformed sources are logged and
skipped so that loading never raises.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ...models.token import TokenSet

logger = logging.getLogger(__name__)


class TokenSource(ABC):
    """Abstract source of a stored OAuth2 token set."""

    @abstractmethod
    def load(self) -> TokenSet | None:
        """Return the stored token set, or ``None`` if unavailable."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human readable name used in log and error messages."""
        pass


class EnvTokenSource(TokenSource):
    """Token set provided inline as JSON, typically ``GOOGLE_OAUTH_TOKENS``."""

    def __init__(self, raw: str | None, name: str = "GOOGLE_OAUTH_TOKENS"):
        self.raw = raw
        self.name = name

    def load(self) -> TokenSet | None:
        if not self.raw:
            return None
        try:
            return TokenSet.model_validate(json.loads(self.raw))
        except Exception as e:
            logger.warning(f"Invalid {self.name}: {e}")
            return None

    def describe(self) -> str:
        return f"env {self.name}"


class FileTokenSource(TokenSource):
    """Token set persisted as a JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> TokenSet | None:
        if not self.path.exists():
            return None
        try:
            return TokenSet.model_validate(json.loads(self.path.read_text("utf-8")))
        except Exception as e:
            logger.warning(f"Failed reading token file {self.path}: {e}")
            return None

    def save(self, tokens: TokenSet) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(tokens.model_dump_json_safe()), "utf-8")

    def describe(self) -> str:
        return f"file {self.path}"


class TokenStore:
    """Loads tokens from ordered sources and persists them to a file."""

    def __init__(self, sources: list[TokenSource], file_source: FileTokenSource):
        self.sources = sources
        self.file_source = file_source

    @classmethod
    def from_settings(cls, settings) -> "TokenStore":
        file_source = FileTokenSource(settings.google_token_path)
        return cls(
            sources=[EnvTokenSource(settings.google_oauth_tokens), file_source],
            file_source=file_source,
        )

    def load(self) -> TokenSet | None:
        """Return the first token set found, or ``None``. Never raises."""
        for source in self.sources:
            tokens = source.load()
            if tokens is not None:
                logger.info(f"Loaded Google OAuth tokens from {source.describe()}")
                return tokens
        logger.info(f"No Google OAuth tokens found (tried: {self.describe()})")
        return None

    def save(self, tokens: TokenSet) -> bool:
        """Persist ``tokens`` to the token file.

        Failures are logged and reported through the return value only.
        """
        try:
            self.file_source.save(tokens)
        except OSError as e:
            logger.warning(
                f"Failed to write token file {self.file_source.path}: {e}"
            )
            return False
        logger.info(f"Saved Google OAuth tokens to {self.file_source.path}")
        return True

    def describe(self) -> str:
        return ", ".join(source.describe() for source in self.sources)
