"""Central application settings using Pydantic."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Core application
    log_level: str = Field("INFO", env="LOG_LEVEL")
    port: int = Field(3000, env="PORT")
    base_url: str | None = Field(None, env="BASE_URL")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    static_dir: Path = Field(Path("public"), env="STATIC_DIR")
    upload_dir: Path = Field(Path("uploads"), env="UPLOAD_DIR")

    # OCR provider
    veryfi_api_url: str | None = Field(None, env="VERYFI_API_URL")
    veryfi_client_id: str | None = Field(None, env="VERYFI_CLIENT_ID")
    veryfi_authorization: str | None = Field(None, env="VERYFI_AUTHORIZATION")
    ocr_timeout_seconds: float | None = Field(None, env="OCR_TIMEOUT_SECONDS")

    # Google Sheets
    spreadsheet_id: str | None = Field(None, env="SPREADSHEET_ID")
    sheet_range: str = Field("Sheet1!A:E", env="SHEET_RANGE")
    google_sheets_scopes: list[str] = Field(
        default_factory=lambda: ["https://www.googleapis.com/auth/spreadsheets"]
    )

    # Google auth
    google_oauth_client_id: str | None = Field(None, env="GOOGLE_OAUTH_CLIENT_ID")
    google_oauth_client_secret: str | None = Field(
        None, env="GOOGLE_OAUTH_CLIENT_SECRET"
    )
    google_oauth_redirect: str | None = Field(None, env="GOOGLE_OAUTH_REDIRECT")
    google_oauth_tokens: str | None = Field(None, env="GOOGLE_OAUTH_TOKENS")
    google_credentials: str | None = Field(None, env="GOOGLE_CREDENTIALS")
    google_token_path: Path = Field(Path("google_tokens.json"), env="GOOGLE_TOKEN_PATH")
    auth_success_url: str = Field("/auth-success", env="AUTH_SUCCESS_URL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("static_dir", "upload_dir", "google_token_path", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @property
    def oauth_configured(self) -> bool:
        """Both OAuth client id and secret are set."""
        return bool(self.google_oauth_client_id and self.google_oauth_client_secret)

    @property
    def oauth_redirect_uri(self) -> str:
        if self.google_oauth_redirect:
            return self.google_oauth_redirect
        base_url = self.base_url or f"http://localhost:{self.port}"
        return f"{base_url.rstrip('/')}/oauth2callback"


def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings()
