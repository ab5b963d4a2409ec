from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_url: str = "http://localhost:5000"

    # durable local store (token, wishlist)
    storage_url: str = "sqlite:///storefront.db"

    request_timeout: int = 10
    auth_ready_timeout: float = 2.0

    default_commission_rate: float = 2.5
    currency: str = "INR"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "STOREFRONT_"
        extra = "allow"

settings = Settings()
