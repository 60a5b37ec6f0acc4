"""
Worker que consome o canal de novas campanhas.

Uma campanha por vez: cada mensagem e processada ate o fim antes da
proxima ser lida do canal. Queda do Redis durante a execucao nao
encerra o worker: ele se inscreve de novo apos uma pausa.
"""
import asyncio
import logging
from typing import Any, Optional

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.core.config import settings
from app.core.exceptions import DecodeError, WorkerStartupError
from app.services.campanhas.executor import CampanhaExecutor
from app.services.campanhas.types import DispatchRequest

logger = logging.getLogger(__name__)

# Timeout de leitura do canal; limita o tempo de reacao ao pedido de parada
POLL_TIMEOUT_SEGUNDOS = 1.0

ERROS_CONEXAO = (RedisConnectionError, RedisTimeoutError, ConnectionError)


class CampanhasWorker:
    """Consome eventos de campanha do Redis e dispara o executor."""

    def __init__(
        self,
        redis_client: Any,
        executor: CampanhaExecutor,
        canal: Optional[str] = None,
        pausa_reconexao: Optional[float] = None,
    ):
        self.redis = redis_client
        self.executor = executor
        self.canal = canal or settings.CAMPAIGN_CHANNEL
        self.pausa_reconexao = (
            settings.REDIS_RECONNECT_DELAY_SECONDS
            if pausa_reconexao is None
            else pausa_reconexao
        )
        self._pubsub = None
        self._iniciado = False
        self._parar = asyncio.Event()

    async def iniciar(self) -> None:
        """
        Inscreve no canal de campanhas.

        Raises:
            WorkerStartupError: Se a inscricao falhar
        """
        try:
            await self._inscrever()
        except Exception as e:
            logger.error(f"Falha ao inscrever no canal {self.canal}: {e}")
            raise WorkerStartupError(
                f"Falha ao inscrever no canal {self.canal}",
                original_error=e,
            ) from e

        self._iniciado = True
        logger.info(f"Inscrito no canal {self.canal}")

    def parar(self) -> None:
        """Para de aceitar mensagens; a campanha em andamento termina."""
        if not self._parar.is_set():
            logger.info("Encerrando worker de campanhas...")
        self._parar.set()

    @property
    def parando(self) -> bool:
        return self._parar.is_set()

    async def executar(self) -> None:
        """Loop principal: le e processa mensagens ate parar() ser chamado."""
        if not self._iniciado:
            raise WorkerStartupError("Worker nao inscrito; chame iniciar() antes")

        logger.info("Worker de campanhas iniciado")

        while not self._parar.is_set():
            try:
                mensagem = await self._pubsub.get_message(
                    ignore_subscribe_messages=True,
                    timeout=POLL_TIMEOUT_SEGUNDOS,
                )
            except ERROS_CONEXAO as e:
                logger.error(f"Conexao com Redis perdida no canal {self.canal}: {e}")
                await self._reconectar()
                continue

            if mensagem is None:
                continue

            if mensagem.get("type") != "message" or mensagem.get("channel") != self.canal:
                continue

            await self.processar_mensagem(mensagem.get("data"))

        logger.info("Worker de campanhas parado")

    async def processar_mensagem(self, data: Any) -> None:
        """
        Processa uma mensagem do canal.

        Payload invalido e descartado com log; nenhuma excecao escapa.
        """
        try:
            pedido = DispatchRequest.from_payload(data)
        except DecodeError as e:
            logger.error(f"Payload de campanha descartado: {e}")
            return
        except Exception as e:
            logger.error(f"Erro inesperado ao decodificar payload: {e}")
            return

        try:
            await self.executor.processar(pedido)
        except Exception as e:
            logger.exception(f"Erro nao tratado na campanha {pedido.campaign_id}: {e}")

    async def fechar(self) -> None:
        """Cancela a inscricao e fecha a conexao do pubsub."""
        if self._pubsub is None:
            return

        try:
            await self._pubsub.unsubscribe(self.canal)
        except Exception as e:
            logger.warning(f"Erro ao cancelar inscricao em {self.canal}: {e}")
        finally:
            await self._descartar_pubsub()
            logger.info(f"Inscricao em {self.canal} encerrada")

    async def _inscrever(self) -> None:
        self._pubsub = self.redis.pubsub()
        await self._pubsub.subscribe(self.canal)

    async def _reconectar(self) -> None:
        """Tenta se inscrever de novo ate conseguir ou receber parada."""
        while not self._parar.is_set():
            await self._aguardar_parada(self.pausa_reconexao)
            if self._parar.is_set():
                return

            await self._descartar_pubsub()
            try:
                await self._inscrever()
            except ERROS_CONEXAO as e:
                logger.warning(f"Falha ao reinscrever no canal {self.canal}: {e}")
                continue

            logger.info(f"Reinscrito no canal {self.canal}")
            return

    async def _aguardar_parada(self, segundos: float) -> None:
        """Dorme ate `segundos` ou ate parar() ser chamado."""
        try:
            await asyncio.wait_for(self._parar.wait(), timeout=segundos)
        except asyncio.TimeoutError:
            pass

    async def _descartar_pubsub(self) -> None:
        if self._pubsub is None:
            return
        try:
            await self._pubsub.aclose()
        except Exception as e:
            logger.warning(f"Erro ao fechar pubsub de {self.canal}: {e}")
        finally:
            self._pubsub = None
