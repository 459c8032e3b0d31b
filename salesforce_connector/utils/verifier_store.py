"""
Armazenamento temporário de code_verifier (PKCE) indexado pelo state.

O verifier só precisa viver entre o redirect para /authorize e o callback,
então fica em memória no processo. Reiniciar o servidor invalida fluxos em
andamento; basta o usuário clicar em "Connect" de novo.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_VERIFIER_TTL = 30 * 60  # 30 minutos


class VerifierStore(ABC):
    """Interface {put, take} para permitir trocar por um cache distribuído"""

    @abstractmethod
    def put(self, state: str, verifier: str) -> None:
        """Associa o verifier ao state"""
        pass

    @abstractmethod
    def take(self, state: str) -> Optional[str]:
        """Retorna e remove o verifier (uso único). None se ausente ou expirado."""
        pass


class InMemoryVerifierStore(VerifierStore):
    """
    Map state -> (verifier, created_at) com TTL.

    A expiração é verificada de forma preguiçosa: put() limpa entradas vencidas
    e take() sempre remove a entrada antes de checar a idade.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_VERIFIER_TTL,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def put(self, state: str, verifier: str) -> None:
        with self._lock:
            self._cleanup_expired()
            self._entries[state] = (verifier, self._clock())

    def take(self, state: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.pop(state, None)
            if entry is None:
                return None

            verifier, created_at = entry
            if self._clock() - created_at > self.ttl_seconds:
                logger.info(f'PKCE verifier expired for state {state}')
                return None

            return verifier

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def _cleanup_expired(self):
        # Caller must hold self._lock
        now = self._clock()
        expired = [
            state for state, (_, created_at) in self._entries.items()
            if now - created_at > self.ttl_seconds
        ]
        for state in expired:
            del self._entries[state]
        if expired:
            logger.debug(f'Removed {len(expired)} expired PKCE verifiers')
