from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    server_bind: str = "0.0.0.0"
    server_port: int | None = 5001
    server_debug: bool = False

    server_endpoint: str = "localhost:5001"
    server_endpoint_ssl: bool = False

    # seconds each simulated job takes before producing its result
    worker_processing_delay: float = 2.0

    mock_users_count: int = 1000
    mock_users_seed: int | None = None

    stream_paragraphs: int = 32
    stream_default_speed: int = 50  # ms per character

    client_batch_size: int = 20

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
