from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./app.db"
    # create_all on startup (local SQLite); production runs `alembic upgrade head`
    auto_create_schema: bool = True

    # JWT (identity provider: `sub` is the user id)
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Calendar day boundaries for streaks and daily counters (IANA zone)
    report_timezone: str = "UTC"

    # Games per day before plays are rejected (0 = no cap)
    max_games_per_day: int = 0

    # Same game on the same day counts once
    dedupe_game_plays: bool = True

    # Leaderboard page size (default and maximum)
    leaderboard_limit: int = 100

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def sqlalchemy_url(self) -> str:
        url = self.database_url.strip()
        # Heroku/Render style URLs
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
