"""
Tipos e enums para campanhas.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.core.exceptions import DecodeError
from app.services.entrega import SendOutcome


class StatusCampanha(str, Enum):
    """Status possiveis de uma campanha."""

    DRAFT = "DRAFT"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (StatusCampanha.COMPLETED, StatusCampanha.FAILED)


class CampaignEvent(BaseModel):
    """Payload publicado no canal campaign:new."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    campaign_id: str = Field(alias="campaignId")
    rules: Dict[str, Any]

    @field_validator("campaign_id", mode="before")
    @classmethod
    def _id_como_string(cls, value: Any) -> Any:
        # ID opaco: aceita numeros, mas sempre trata como string
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass
class DispatchRequest:
    """Pedido de processamento de uma campanha."""

    campaign_id: str
    rules: Dict[str, Any] = field(default_factory=dict)
    raw: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Union[str, bytes]) -> "DispatchRequest":
        """
        Decodifica payload JSON do canal.

        Args:
            payload: Texto UTF-8 no formato {"campaignId": ..., "rules": {...}}

        Returns:
            DispatchRequest com o payload bruto preservado

        Raises:
            DecodeError: Se o payload nao e JSON valido ou nao tem campaignId/rules
        """
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError("Payload nao e UTF-8 valido", original_error=e) from e

        try:
            evento = CampaignEvent.model_validate_json(payload)
        except ValidationError as e:
            raise DecodeError(
                "Payload de campanha invalido",
                details={"erros": e.error_count()},
                original_error=e,
            ) from e

        return cls(campaign_id=evento.campaign_id, rules=evento.rules, raw=payload)


def extrair_campaign_id(payload: Optional[str]) -> Optional[str]:
    """
    Extrai apenas o campaignId de um payload bruto.

    Usado na recuperacao de falhas, independente da decodificacao completa.

    Returns:
        campaignId como string ou None se nao for possivel extrair
    """
    if not payload:
        return None
    try:
        data = json.loads(payload)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    campaign_id = data.get("campaignId")
    return str(campaign_id) if campaign_id is not None else None


@dataclass
class ResultadoCampanha:
    """Contadores de um disparo de campanha."""

    sucessos: int = 0
    falhas: int = 0

    def registrar(self, outcome: SendOutcome) -> None:
        if outcome.is_success:
            self.sucessos += 1
        else:
            self.falhas += 1

    @property
    def total(self) -> int:
        return self.sucessos + self.falhas

    @property
    def status_final(self) -> StatusCampanha:
        """
        Status terminal da campanha.

        Sucesso parcial continua COMPLETED; so FAILED quando nenhum envio deu certo.
        """
        if self.falhas == 0 or self.sucessos > 0:
            return StatusCampanha.COMPLETED
        return StatusCampanha.FAILED
