from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Affordability
    default_dti_threshold: Decimal = Decimal("0.4")  # Share of monthly income a loan may take

    # Amortization
    max_term_periods: int = 600  # Upper bound on schedule length

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
