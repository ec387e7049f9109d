from functools import lru_cache

from supabase import Client, create_client

from app.config.Settings import get_settings
from app.repositories.CatalogRepository import CatalogRepositoryError


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Retorna o cliente Supabase (instância única).

    Raises:
        CatalogRepositoryError: se as credenciais não estiverem configuradas
            ou o cliente não puder ser criado
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise CatalogRepositoryError("SUPABASE_URL e SUPABASE_SERVICE_KEY são obrigatórias para o backend supabase")
    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        raise CatalogRepositoryError(f"Falha ao criar o cliente Supabase: {e}") from e
