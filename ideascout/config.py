from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Ollama (local inference)
    ollama_endpoint: str = "http://localhost:11434"
    ollama_model: str = "llama3"
    llm_timeout_seconds: float = 300.0

    # Evidence sources
    user_agent: str = "Mozilla/5.0"
    search_timeout_seconds: float = 30.0
    duckduckgo_max_results: int = 80
    reddit_max_results: int = 40
    wikipedia_max_results: int = 15
    rss_feeds: str = (
        "https://news.google.com/rss,"
        "https://feeds.bloomberg.com/markets/news.rss,"
        "https://feeds.cnbc.com/cnbc/world/"
    )
    aggregate_max_results: int = 50

    # Scraping / chunking
    fetch_timeout_seconds: float = 5.0
    scrape_max_chars: int = 5000
    scrape_min_chars: int = 200
    chunk_size: int = 2000
    max_chunks: int = 5

    # Job defaults
    default_location: str = "Azerbaijan"
    default_budget: str = "<$100"

    # App
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
        return [o.strip() for o in self.cors_origins.split(",")]

    @property
    def rss_feed_list(self) -> list[str]:
        return [f.strip() for f in self.rss_feeds.split(",") if f.strip()]


settings = Settings()
