"""
Repository para campanhas.

O worker so escreve o status da campanha; o restante do registro pertence
ao painel que cria a campanha.
"""

import logging

from app.core.config import settings
from app.core.timezone import agora_utc
from app.repositories.base import BaseRepository
from app.services.campanhas.types import StatusCampanha

logger = logging.getLogger(__name__)


class CampanhaRepository(BaseRepository):
    """Repository para operacoes de campanhas no banco."""

    @property
    def table_name(self) -> str:
        return settings.CAMPAIGNS_TABLE

    async def atualizar_status(
        self,
        campaign_id: str,
        novo_status: StatusCampanha,
    ) -> bool:
        """
        Atualiza status da campanha.

        Sem controle de concorrencia: a ultima escrita vence.

        Args:
            campaign_id: ID da campanha
            novo_status: Novo status

        Returns:
            True se atualizado com sucesso
        """
        data = {
            "status": novo_status.value,
            "updated_at": agora_utc().isoformat(),
        }

        try:
            self.db.table(self.table_name).update(data).eq("id", campaign_id).execute()
            logger.info(f"Campanha {campaign_id} atualizada para status {novo_status.value}")
            return True

        except Exception as e:
            logger.error(f"Erro ao atualizar status da campanha {campaign_id}: {e}")
            return False
