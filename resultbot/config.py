import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


def _first_non_empty_env(*keys: str) -> str:
    for key in keys:
        value = os.getenv(key, "")
        if value.strip():
            return value.strip()
    return ""


class Settings(BaseSettings):
    app_name: str = Field(default="Test Results Bot", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    http_timeout_seconds: float = Field(default=20.0, alias="HTTP_TIMEOUT_SECONDS")

    test262_results_url: str = Field(
        default="https://github.com/LadybirdBrowser/libjs-data/raw/master/test262/results.json",
        alias="TEST262_RESULTS_URL",
    )
    testwasm_results_url: str = Field(
        default="https://github.com/LadybirdBrowser/libjs-data/raw/master/wasm/results.json",
        alias="TESTWASM_RESULTS_URL",
    )

    github_api_base_url: str = Field(default="https://api.github.com", alias="GITHUB_API_BASE_URL")
    github_repository: str = Field(default="LadybirdBrowser/ladybird", alias="GITHUB_REPOSITORY")
    github_token: str = Field(default="", alias="GITHUB_TOKEN")

    discord_api_base_url: str = Field(default="https://discord.com/api/v10", alias="DISCORD_API_BASE_URL")
    discord_application_id: str = Field(default="", alias="DISCORD_APPLICATION_ID")
    discord_guild_id: str = Field(default="", alias="DISCORD_GUILD_ID")
    discord_bot_token: str = Field(default="", alias="DISCORD_BOT_TOKEN")
    discord_public_key: str = Field(default="", alias="DISCORD_PUBLIC_KEY")

    ladybird_emoji_name: str = Field(default="ladybird", alias="LADYBIRD_EMOJI_NAME")
    makemore_emoji_name: str = Field(default="makemore", alias="MAKEMORE_EMOJI_NAME")
    sadcaret_emoji_name: str = Field(default="sadcaret", alias="SADCARET_EMOJI_NAME")

    @model_validator(mode="after")
    def apply_token_env_alias_fallbacks(self) -> "Settings":
        if not self.github_token:
            self.github_token = _first_non_empty_env(
                "GH_TOKEN",
                "GITHUB_API_TOKEN",
            )

        if not self.discord_bot_token:
            self.discord_bot_token = _first_non_empty_env(
                "DISCORD_TOKEN",
                "BOT_TOKEN",
            )

        return self

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
