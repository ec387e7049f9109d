"""
Configurações da aplicação via pydantic-settings.

Os valores vêm de variáveis de ambiente ou do arquivo .env.
Use get_settings() para obter a instância única.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent.parent / "data" / "products.json"


class Settings(BaseSettings):
    """
    Variáveis de ambiente:
        - CATALOG_BACKEND: 'memory' (arquivo JSON) ou 'supabase'
        - CATALOG_PATH: caminho do catálogo JSON (backend memory)
        - SUPABASE_URL / SUPABASE_SERVICE_KEY: obrigatórias no backend supabase
        - CORS_ORIGINS: origens separadas por vírgula
        - LOG_LEVEL: nível de log da aplicação
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Nome do ambiente")
    log_level: str = Field(default="INFO", description="Nível de log da aplicação")

    host: str = Field(default="0.0.0.0", description="Host do servidor")
    port: int = Field(default=8000, description="Porta do servidor")
    cors_origins: Annotated[List[str], NoDecode] = Field(default=["*"], description="Origens CORS permitidas")

    catalog_backend: Literal["memory", "supabase"] = Field(default="memory")
    catalog_path: Path = Field(default=DEFAULT_CATALOG_PATH)

    supabase_url: Optional[str] = Field(default=None, description="URL do projeto Supabase")
    supabase_service_key: Optional[str] = Field(default=None, description="Service role key do Supabase")
    products_table: str = Field(default="products")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
