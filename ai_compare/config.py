from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    APP_ENV: str = "development"
    CORS_ORIGINS: list[str] = ["*"]

    # Providers
    GEMINI_API_KEY: str = ""
    COHERE_API_KEY: str = ""
    MISTRAL_API_KEY: str = ""

    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    COHERE_BASE_URL: str = "https://api.cohere.ai/v1"
    MISTRAL_BASE_URL: str = "https://api.mistral.ai/v1"

    GEMINI_MODEL: str = "gemini-2.0-flash"
    COHERE_MODEL: str = "command"
    MISTRAL_MODEL: str = "mistral-small-latest"
    PROVIDER_MAX_TOKENS: int = 300
    PROVIDER_TEMPERATURE: float = 0.7
    PROVIDER_TIMEOUT: float = 30.0  # transport timeout only, no retries

    # Discord (optional)
    DISCORD_TOKEN: str = ""
    DISCORD_CHANNEL_ID: str = ""
    DISCORD_API_BASE: str = "https://discord.com/api/v10"
    DISCORD_GREETING: str = "¡Hola desde el bot! 🚀"  # sent once on startup; empty disables
    NOTIFY_WAIT_SECONDS: float = 5.0

    @property
    def missing_provider_keys(self) -> list[str]:
        keys = ("GEMINI_API_KEY", "COHERE_API_KEY", "MISTRAL_API_KEY")
        return [k for k in keys if not getattr(self, k)]

    @property
    def discord_configured(self) -> bool:
        return bool(self.DISCORD_TOKEN and self.DISCORD_CHANNEL_ID)


settings = Settings()
