# foreverr/config.py
import os
from typing import List, Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # OpenAI
    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_moderation_url: str = "https://api.openai.com/v1/moderations"

    # ElevenLabs (voice), Hugging Face (photo restore); mock output when unset
    elevenlabs_api_key: Optional[str] = None
    elevenlabs_default_voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    huggingface_token: Optional[str] = None

    # Database
    database_url: Optional[str] = None
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "foreverr"
    mysql_password: str = ""
    mysql_database: str = "foreverr"

    # Auth (access tokens issued by the hosted auth provider)
    supabase_jwt_secret: str
    jwt_audience: str = "authenticated"

    # Media
    media_dir: str = "static"
    public_base_url: str = "http://localhost:8000"
    mock_media_base_url: str = "https://storage.example.com/mock"

    # LangChain LangSmith tracing
    langsmith_tracing: Optional[bool] = False
    langsmith_endpoint: Optional[str] = "https://api.smith.langchain.com"
    langsmith_api_key: Optional[str] = None
    langsmith_project: Optional[str] = "foreverr"

    # Features
    auto_moderation: bool = False
    scheduler_enabled: bool = True
    delivery_hour: int = 4

    # App Settings
    cors_origins: List[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"mysql+aiomysql://{self.mysql_user}:{self.mysql_password}@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"


settings = Settings()

# LangSmith reads its configuration from the environment
if settings.langsmith_tracing:
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGCHAIN_API_KEY"] = settings.langsmith_api_key or ""
    os.environ["LANGCHAIN_ENDPOINT"] = settings.langsmith_endpoint
    os.environ["LANGCHAIN_PROJECT"] = settings.langsmith_project
