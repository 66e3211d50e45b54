from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./budgets.db"
    COMPANY_NAME: str = "Aislaciones"

    # Reference bag, 4.5 m² covered at 100 mm. Bag quantities scale from here.
    REFERENCE_COVERAGE_SQ_M: float = 4.5
    REFERENCE_THICKNESS_MM: int = 100

    # Form limits
    LAYER_THICKNESS_MIN_MM: int = 50
    LAYER_THICKNESS_MAX_MM: int = 200
    AREA_TO_COVER_MIN_SQ_M: float = 4.5

    # Budgets expire this many days after creation
    BUDGET_VALID_DAYS: int = 30

    class Config:
        env_file = ".env"


settings = Settings()
