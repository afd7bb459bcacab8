from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Completion service (OpenAI-compatible)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-4o"
    llm_max_tokens: int = 2048
    llm_timeout_seconds: float = 60.0

    # Search engine results page
    search_url: str = "https://www.google.com/search"
    search_result_count_param: int = 16
    search_max_results: int = 8
    search_snippet_class: str = "VwiC3b"
    expansion_query_count: int = 3

    # Content extraction
    extractor_max_chars: int = 4000
    extractor_min_paragraph_chars: int = 50

    # Politeness delays (seconds)
    source_delay_seconds: float = 0.5
    query_delay_seconds: float = 2.0

    # Outbound HTTP
    http_timeout_seconds: float = 20.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # App
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
