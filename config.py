from enum import Enum

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "recipes"
    collection_name: str = "recipes"
    # Server selection and connect timeout for new clients.
    timeout_ms: int = 10_000
    log_level: str = "INFO"
