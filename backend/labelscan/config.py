from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "labelscan"
    env: str = "local"
    log_level: str = "INFO"

    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_key: str = ""
    llm_temperature: float = 0.2
    llm_timeout_s: int = 30

    # Use the LLM research provider for ingredients missing from the reference store.
    # If False, the local knowledge base + heuristic classifier is used.
    use_llm_research: bool = False
    # Upper bound for one research call; a timeout degrades that ingredient only.
    research_timeout_s: float = 10.0

    # Resolve ingredients on a ThreadPoolExecutor instead of one by one.
    # Set ANALYSIS_CONCURRENT=true in .env to enable.
    analysis_concurrent: bool = False
    analysis_max_workers: int = 4

    ocr_language: str = "eng"
    ocr_char_whitelist: str = (
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789()[]{},.:-% "
    )
    ocr_fallback_max_ingredients: int = 20

    max_upload_bytes: int = 10 * 1024 * 1024

    class Config:
        env_file = ".env"


settings = Settings()
