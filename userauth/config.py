from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./accounts.db"
    LOG_LEVEL: str = "INFO"
    PASSWORD_SCHEME: str = "bcrypt_sha256"
    PASSWORD_ROUNDS: int = 12
    # дайджесты этих схем принимаются при входе и перехэшируются
    PASSWORD_LEGACY_SCHEMES: list[str] = ["bcrypt"]
    AUTH_EQUALIZE_TIMING: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
