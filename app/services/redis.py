"""
Cliente Redis para o canal de eventos de campanha.
"""
import redis.asyncio as redis
import logging
from app.core.config import settings

logger = logging.getLogger(__name__)


def criar_redis_client(url: str | None = None) -> redis.Redis:
    """Cria cliente Redis com respostas decodificadas em UTF-8."""
    return redis.from_url(
        url or settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True
    )


async def verificar_conexao_redis(client: redis.Redis) -> bool:
    """Verifica se Redis está acessível."""
    try:
        await client.ping()
        logger.debug("Redis conectado")
        return True
    except Exception as e:
        logger.error(f"Redis não acessível: {e}")
        return False
