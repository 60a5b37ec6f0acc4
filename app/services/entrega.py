"""
Cliente da API de envio (vendor).

Uma chamada por destinatario, sem deduplicacao e sem retry.
"""
import httpx
import logging
from enum import Enum
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ExternalAPIError

logger = logging.getLogger(__name__)

SERVICE_NAME = "vendor"


class SendOutcome(str, Enum):
    """Resultado de um envio para um destinatario."""

    SENT = "SENT"
    NOT_SENT = "NOT_SENT"
    ERROR = "ERROR"  # falha de transporte/protocolo; conta como NOT_SENT

    @property
    def is_success(self) -> bool:
        return self == SendOutcome.SENT


class EntregaClient:
    """Cliente para a API de envio de mensagens."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: Optional[str] = None):
        self.http = http_client
        self.base_url = (base_url or settings.DELIVERY_API_URL).rstrip("/")

    @property
    def send_url(self) -> str:
        return f"{self.base_url}/vendor/send"

    async def enviar(self, campaign_id: str, customer_id: str, mensagem: str) -> SendOutcome:
        """
        Envia mensagem para um cliente.

        Args:
            campaign_id: ID da campanha
            customer_id: ID do cliente
            mensagem: Texto da mensagem

        Returns:
            SENT se a API respondeu status SENT, NOT_SENT caso contrario

        Raises:
            ExternalAPIError: Erro de rede, HTTP nao-2xx ou resposta invalida
        """
        payload = {
            "campaignId": campaign_id,
            "customerId": customer_id,
            "message": mensagem,
        }

        try:
            response = await self.http.post(self.send_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                f"API de envio retornou {e.response.status_code}",
                service=SERVICE_NAME,
                details={"customer_id": customer_id, "status_code": e.response.status_code},
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise ExternalAPIError(
                f"Erro de comunicacao com API de envio: {e}",
                service=SERVICE_NAME,
                details={"customer_id": customer_id},
                original_error=e,
            ) from e
        except ValueError as e:
            raise ExternalAPIError(
                "Resposta da API de envio nao e JSON",
                service=SERVICE_NAME,
                details={"customer_id": customer_id},
                original_error=e,
            ) from e

        status = data.get("status") if isinstance(data, dict) else None
        if status == SendOutcome.SENT.value:
            return SendOutcome.SENT

        logger.warning(
            f"Envio nao confirmado para cliente {customer_id} "
            f"(campanha {campaign_id}, status={status})"
        )
        return SendOutcome.NOT_SENT
