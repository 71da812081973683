"""
Application settings and configuration.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ========== App Settings ==========
    APP_NAME: str = "Chromaflow"
    APP_VERSION: str = "1.0.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 7860
    DEBUG: bool = False

    # ========== LLM Settings ==========
    LLM_PROVIDER: str = Field("gemini", validation_alias="LLM_PROVIDER")
    MODEL_NAME: str | None = Field(None, validation_alias="MODEL_NAME")
    TEMPERATURE: float = 0.7
    LLM_MAX_RETRIES: int = 0
    LLM_REQUEST_TIMEOUT: float | None = None

    # Gemini LLM Configuration
    GEMINI_API_KEY: str | None = Field(None, validation_alias="GEMINI_API_KEY")

    # OpenAI LLM Configuration
    OPENAI_API_KEY: str | None = Field(None, validation_alias="OPENAI_API_KEY")

    # ========== Rendering ==========
    SVG_GRADIENT_ID: str = "grad1"

    model_config = ConfigDict(
            env_file=".env",
            env_file_encoding="utf-8",
            case_sensitive=False,
            extra="ignore",
        )
# Create settings instance
settings = Settings()
