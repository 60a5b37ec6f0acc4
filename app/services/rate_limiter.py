"""
Rate limiter para controle de envio de mensagens.

Garante um intervalo minimo entre o fim de um envio e o inicio do
proximo dentro do disparo de uma campanha.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class IntervaloFixo:
    """
    Portao de intervalo fixo entre envios.

    Uso:
        intervalo = IntervaloFixo(0.1)
        for cliente in clientes:
            async with intervalo:
                await enviar(cliente)

    O primeiro envio passa direto; os seguintes esperam o tempo que
    faltar para completar o intervalo desde o fim do envio anterior,
    independente do resultado.
    """

    def __init__(
        self,
        intervalo_segundos: float,
        relogio: Callable[[], float] = time.monotonic,
        dormir: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if intervalo_segundos < 0:
            raise ValueError("intervalo_segundos deve ser >= 0")
        self.intervalo_segundos = intervalo_segundos
        self._relogio = relogio
        self._dormir = dormir
        self._liberado_em: Optional[float] = None

    async def aguardar(self) -> float:
        """
        Espera ate o proximo envio ser permitido.

        Returns:
            Segundos efetivamente aguardados
        """
        if self._liberado_em is None:
            return 0.0

        restante = self._liberado_em - self._relogio()
        if restante <= 0:
            return 0.0

        await self._dormir(restante)
        return restante

    def registrar_envio(self) -> None:
        """Marca o fim de um envio; o proximo so sai apos o intervalo."""
        self._liberado_em = self._relogio() + self.intervalo_segundos

    async def __aenter__(self) -> "IntervaloFixo":
        await self.aguardar()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.registrar_envio()
