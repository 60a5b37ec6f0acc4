"""
HTTP Client com connection pooling para a API de envio.

Centraliza a criacao do httpx.AsyncClient para:
- Reutilização de conexões entre envios de uma campanha
- Timeout padronizado
- Fechamento gracioso no shutdown
"""

import httpx
import logging
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


def criar_http_client(
    timeout_seconds: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Cria cliente HTTP com pooling configurado.

    Args:
        timeout_seconds: Timeout total por request (default: DELIVERY_TIMEOUT_SECONDS)
        transport: Transport customizado (usado em testes)

    Returns:
        httpx.AsyncClient configurado
    """
    timeout = timeout_seconds or settings.DELIVERY_TIMEOUT_SECONDS
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            timeout,
            connect=min(timeout, 5.0),  # Timeout para estabelecer conexão
        ),
        # Envio sequencial: poucas conexões bastam
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
            keepalive_expiry=30.0,
        ),
        headers={
            "User-Agent": "Campaign-Worker/1.0",
        },
        transport=transport,
    )
    logger.debug("HTTP client criado com pooling configurado")
    return client


async def fechar_http_client(client: httpx.AsyncClient) -> None:
    """
    Fecha o cliente HTTP.

    Deve ser chamado no shutdown do worker para liberar recursos.
    """
    await client.aclose()
    logger.info("HTTP client fechado")
