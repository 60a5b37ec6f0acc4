"""
Executor de campanhas.

Responsavel por:
- Marcar a campanha como PROCESSING
- Buscar destinatarios a partir das regras
- Enviar uma mensagem por destinatario, em sequencia e com intervalo
- Gravar o status final (COMPLETED ou FAILED)
"""

import logging
from typing import Callable, Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.repositories.cliente import Cliente, ClienteRepository
from app.services.campanhas.regras import compilar_regras
from app.services.campanhas.repository import CampanhaRepository
from app.services.campanhas.types import (
    DispatchRequest,
    ResultadoCampanha,
    StatusCampanha,
    extrair_campaign_id,
)
from app.services.entrega import EntregaClient, SendOutcome
from app.services.rate_limiter import IntervaloFixo

logger = logging.getLogger(__name__)


class CampanhaExecutor:
    """Executor de campanhas."""

    def __init__(
        self,
        campanha_repo: CampanhaRepository,
        cliente_repo: ClienteRepository,
        entrega: EntregaClient,
        criar_intervalo: Optional[Callable[[], IntervaloFixo]] = None,
        template_mensagem: Optional[str] = None,
    ):
        self.campanha_repo = campanha_repo
        self.cliente_repo = cliente_repo
        self.entrega = entrega
        self.criar_intervalo = criar_intervalo or (
            lambda: IntervaloFixo(settings.dispatch_interval_seconds)
        )
        self.template_mensagem = template_mensagem or settings.CAMPAIGN_MESSAGE_TEMPLATE

    async def processar(self, pedido: DispatchRequest) -> None:
        """
        Processa uma campanha do inicio ao fim.

        Nunca levanta excecao: qualquer falha vira status FAILED
        (melhor esforco) e log.

        Args:
            pedido: Pedido decodificado do canal
        """
        try:
            resultado = await self._disparar(pedido)

            status = resultado.status_final
            await self.campanha_repo.atualizar_status(pedido.campaign_id, status)

            logger.info(
                f"Campanha {pedido.campaign_id} processada: {status.value} "
                f"(sucessos={resultado.sucessos}, falhas={resultado.falhas})"
            )
        except Exception as e:
            logger.exception(f"Erro ao processar campanha {pedido.campaign_id}: {e}")
            await self._marcar_falha(pedido)

    async def _disparar(self, pedido: DispatchRequest) -> ResultadoCampanha:
        """Executa o disparo e devolve os contadores."""
        campaign_id = pedido.campaign_id
        log = get_logger(__name__, campaign_id=campaign_id)
        log.info(f"Processando campanha {campaign_id}")

        # Melhor esforco: segue mesmo se a escrita falhar
        await self.campanha_repo.atualizar_status(campaign_id, StatusCampanha.PROCESSING)

        query = compilar_regras(pedido.rules)
        clientes = await self.cliente_repo.buscar_por_query(query)
        log.info(f"Encontrados {len(clientes)} clientes para campanha {campaign_id}")

        resultado = ResultadoCampanha()
        intervalo = self.criar_intervalo()

        for cliente in clientes:
            async with intervalo:
                outcome = await self._enviar(campaign_id, cliente)
            resultado.registrar(outcome)

        return resultado

    async def _enviar(self, campaign_id: str, cliente: Cliente) -> SendOutcome:
        """Envia para um destinatario; erros viram SendOutcome.ERROR."""
        mensagem = self._gerar_mensagem(cliente)
        try:
            return await self.entrega.enviar(campaign_id, cliente.id, mensagem)
        except Exception as e:
            logger.error(f"Erro ao enviar mensagem para cliente {cliente.id}: {e}")
            return SendOutcome.ERROR

    def _gerar_mensagem(self, cliente: Cliente) -> str:
        """Gera texto da mensagem para o destinatario."""
        return self.template_mensagem.format(nome=cliente.nome or "")

    async def _marcar_falha(self, pedido: DispatchRequest) -> None:
        """Grava FAILED usando o ID extraido de novo do payload bruto."""
        campaign_id = extrair_campaign_id(pedido.raw) or pedido.campaign_id
        if not campaign_id:
            logger.error("Nao foi possivel atualizar status: campaignId desconhecido")
            return

        try:
            atualizado = await self.campanha_repo.atualizar_status(
                campaign_id, StatusCampanha.FAILED
            )
        except Exception as e:
            logger.error(f"Nao foi possivel atualizar status da campanha {campaign_id}: {e}")
            return

        if not atualizado:
            logger.error(f"Nao foi possivel atualizar status da campanha {campaign_id}")
