from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "Palace Tour Navigator"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO")

    mongodb_uri: str = Field(default="mongodb://mongo:27017")
    mongodb_db: str = Field(default="palacetour")

    redis_url: str = Field(default="redis://redis:6379/0")

    jwt_secret_key: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7)

    # Google OAuth
    google_client_id: str = Field(default="")
    google_client_secret: str = Field(default="")
    google_redirect_uri: str = Field(default="http://localhost:8000/api/auth/google/callback")
    frontend_base_url: str = Field(default="http://localhost:3000")

    kakao_map_app_key: str = Field(default="")
    kakao_rest_api_key: str = Field(default="")

    # 한국관광공사 TourAPI
    tour_api_key: str = Field(default="")
    tour_api_base_url: str = Field(default="https://apis.data.go.kr/B551011/KorService2")
    tour_api_cache_ttl: int = Field(default=600)

    cors_origins: str = Field(default="http://localhost:5173,http://localhost:3000,http://localhost")

    # Google Gemini API 설정
    gemini_api_key: str = Field(default="", description="Google Gemini API 키 (환경 변수: GEMINI_API_KEY)")
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_temperature: float = Field(default=0.7)
    gemini_max_output_tokens: int = Field(default=2000)

    upload_dir: Path = Field(default=Path("uploads"))
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def frontend_static_dir(self) -> Path:
        return Path(__file__).resolve().parents[3] / "frontend"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
