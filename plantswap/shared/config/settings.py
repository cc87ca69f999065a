# 📄 File: plantswap/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# One place that knows every knob of the plant exchange service: backend address and
# keys, bucket names, upload limits, log format. Values come from the environment or .env.
#
# 🧪 Purpose (Technical Summary):
# A pydantic-settings model read once per process (lru_cache). Field validators normalise
# enum-like strings so the rest of the code can compare them directly.
#
# 🔗 Dependencies:
# - pydantic, pydantic-settings
#
# 🔄 Connected Modules / Calls From:
# - plantswap.main (application startup)
# - plantswap.shared.config.supabase (backend client)
# - plantswap.shared.infrastructure.storage (bucket names and size limits)
# - plantswap.api.middleware.authentication (token verification)

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENVIRONMENTS = {"development", "staging", "production", "test"}
_LOG_FORMATS = {"json", "text"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_JWT_ALGORITHMS = {"HS256", "HS384", "HS512"}


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseSettings):
    """
    Process configuration. Required: SUPABASE_URL, SUPABASE_ANON_KEY and
    SUPABASE_JWT_SECRET; everything else has a development default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="PlantSwap API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Version reported by /health")
    APP_DESCRIPTION: str = Field(
        default="Community marketplace for peer-to-peer plant exchanges",
        description="OpenAPI description"
    )
    ENVIRONMENT: str = Field(default="development", description="development, staging, production or test")
    DEBUG: bool = Field(default=True, description="Exposes /docs and verbose errors")
    LOG_LEVEL: str = Field(default="INFO", description="Root logger level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json/text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    PORT: int = Field(default=8000, description="Bind port for uvicorn")
    RELOAD: bool = Field(default=True, description="uvicorn --reload in development")
    WORKERS: int = Field(default=1, description="uvicorn worker count outside development")

    # =========================================================================
    # SUPABASE CONFIGURATION
    # =========================================================================

    SUPABASE_URL: str = Field(..., description="Base URL of the hosted backend project")
    SUPABASE_ANON_KEY: str = Field(..., description="Public API key")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(
        None,
        description="Supabase service role key"
    )
    SUPABASE_JWT_SECRET: str = Field(..., description="Secret used to verify Supabase access tokens")

    # Backend client timeouts (seconds)
    SUPABASE_POSTGREST_TIMEOUT: int = Field(default=10, description="Row API timeout")
    SUPABASE_STORAGE_TIMEOUT: int = Field(default=30, description="Storage API timeout")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_ALGORITHM: str = Field(default="HS256", description="HMAC algorithm of access tokens")
    JWT_AUDIENCE: str = Field(default="authenticated", description="Expected token audience")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:8080",
        description="Comma separated browser origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow cookies and auth headers cross-origin")

    # =========================================================================
    # FILE STORAGE
    # =========================================================================

    PLANTS_BUCKET: str = Field(default="plants", description="Bucket for plant photos")
    AVATARS_BUCKET: str = Field(default="avatars", description="Bucket for profile pictures")

    # Upload caps, bytes
    MAX_PLANT_IMAGE_SIZE: int = Field(default=10485760, description="Max plant image size (10MB)")
    MAX_AVATAR_SIZE: int = Field(default=5242880, description="Max avatar size (5MB)")
    STORAGE_CACHE_CONTROL: str = Field(default="3600", description="Cache-Control for uploads")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT", "LOG_FORMAT")
    @classmethod
    def lower_choice(cls, v: str, info: ValidationInfo) -> str:
        choices = _ENVIRONMENTS if info.field_name == "ENVIRONMENT" else _LOG_FORMATS
        if v.lower() not in choices:
            raise ValueError(f"{info.field_name} must be one of {sorted(choices)}, got {v!r}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return v.upper()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def hmac_only(cls, v: str) -> str:
        # Supabase signs access tokens with the project secret
        if v not in _JWT_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {sorted(_JWT_ALGORITHMS)}, got {v!r}")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def check_origins(cls, v: str) -> str:
        for origin in _split_origins(v):
            if origin != "*" and not origin.startswith(("http://", "https://")):
                raise ValueError(f"CORS origin needs a scheme: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_origins(self.CORS_ORIGINS)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def backend_key(self) -> str:
        """Service role key when configured (bucket creation needs it), else the anon key."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY

    def bucket_size_limits(self) -> dict:
        """Bucket name to upload size cap."""
        return {
            self.PLANTS_BUCKET: self.MAX_PLANT_IMAGE_SIZE,
            self.AVATARS_BUCKET: self.MAX_AVATAR_SIZE,
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """Cached Settings; tests clear the cache after changing the environment."""
    return Settings()
