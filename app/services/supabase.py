"""
Cliente Supabase para operacoes de banco de dados.
"""
from supabase import create_client, Client
import logging

from app.core.config import settings
from app.core.exceptions import WorkerStartupError

logger = logging.getLogger(__name__)


def criar_supabase_client(
    url: str | None = None,
    service_key: str | None = None,
) -> Client:
    """
    Cria cliente Supabase.
    Usa service key para acesso completo.

    Raises:
        WorkerStartupError: Se URL ou service key nao estao configuradas
    """
    url = url or settings.SUPABASE_URL
    service_key = service_key or settings.SUPABASE_SERVICE_KEY

    if not url or not service_key:
        raise WorkerStartupError("SUPABASE_URL e SUPABASE_SERVICE_KEY sao obrigatorios")

    try:
        client = create_client(url, service_key)
    except Exception as e:
        raise WorkerStartupError(
            "Erro ao criar cliente Supabase",
            details={"url": url},
            original_error=e,
        ) from e

    logger.info("Cliente Supabase criado")
    return client
