# src/trp_config/core/config/resolver.py
"""
ConfigResolver — contexto canônico de resolução e cache da configuração.

Este módulo define o **ConfigResolver**, objeto de resolução pertencente
ao entry point do processo e passado por referência aos consumidores.

O ConfigResolver é responsável por:
- calcular o `ResolutionContext` (opções → ambiente → descoberta → padrão)
- compor as camadas e aplicar os overrides de ambiente
- guardar a configuração composta em um cache de slot único
- expor a visão validada por módulo (`config_for`)
- registrar eventos estruturados da resolução

Princípios fundamentais:
- Resolver uma vez, reutilizar sem custo: após a primeira resolução bem
  sucedida, nenhuma leitura de filesystem ou ambiente é repetida
- No máximo uma resolução completa por resolver: a escrita do cache é
  protegida por lock e chamadores concorrentes aguardam a resolução em curso
- Nenhum chamador observa um merge parcial
- Não existe API pública de invalidação; testes constroem um resolver novo

Para consumidores que não recebem o resolver por injeção, existe um
resolver padrão de processo exposto por `load_config` e `config_for`.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .composer import compose
from .context import LoadOptions, ResolutionContext, resolve_context
from .env_overrides import apply_env_overrides
from .hashing import compute_config_hash
from .scoper import scope_module_config


class ConfigResolver:
    """
    Resolver de configuração com cache de slot único.

    Campos canônicos:
    - options: opções explícitas usadas na primeira resolução
    - context: `ResolutionContext` calculado (None antes de `load`)
    - fingerprint: hash SHA-256 da configuração composta (None antes de `load`)
    - events: log estruturado de eventos da resolução

    Importante:
    - `load()` sempre retorna o mesmo objeto após a primeira resolução
    - A configuração retornada deve ser tratada como somente leitura
    """

    def __init__(
        self,
        options: Optional[LoadOptions] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ) -> None:
        self.options = options
        self._environ = environ
        self._cwd = cwd
        self._lock = threading.Lock()
        self._cached: Optional[Dict[str, Any]] = None
        self._ignored_options_logged = False
        self.context: Optional[ResolutionContext] = None
        self.fingerprint: Optional[str] = None
        self.events: List[Dict[str, Any]] = []

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, event: str, level: str, message: str, **extra: Any) -> None:
        record = {
            "event": event,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        record.update(extra)
        self.events.append(record)

    def events_of(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event"] == event]

    # -----------------------------
    # Resolução
    # -----------------------------
    @property
    def is_resolved(self) -> bool:
        return self._cached is not None

    def load(self, options: Optional[LoadOptions] = None) -> Dict[str, Any]:
        """Retorna a configuração composta, resolvendo-a na primeira chamada.

        Opções passadas depois que o cache está preenchido são ignoradas
        (registradas uma única vez como evento `config.cached`).
        """
        cached = self._cached
        if cached is not None:
            if (options is not None and options != self.options
                    and not self._ignored_options_logged):
                self._ignored_options_logged = True
                self.log(event="config.cached", level="WARNING",
                         message="Opções ignoradas: configuração já resolvida")
            return cached

        with self._lock:
            if self._cached is None:
                if options is not None:
                    self.options = options
                self._cached = self._resolve()
            return self._cached

    def _resolve(self) -> Dict[str, Any]:
        context = resolve_context(self.options, environ=self._environ, cwd=self._cwd)

        composed = compose(context, log=self.log)
        config = apply_env_overrides(
            composed, context.env_prefix, environ=self._environ, log=self.log
        )

        self.context = context
        self.fingerprint = compute_config_hash(config)
        self.log(
            event="config.resolved",
            level="INFO",
            message="Configuração composta resolvida",
            fingerprint=self.fingerprint,
            sources=[e["path"] for e in self.events_of("source.loaded")],
            **context.to_dict(),
        )
        return config

    def config_for(
        self,
        module_name: str,
        schema: Any,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Visão validada de `modules[module_name]` (não é cacheada)."""
        return scope_module_config(self.load(), module_name, schema, defaults)


# ---------------------------------------------------------------------------
# Resolver padrão de processo
# ---------------------------------------------------------------------------

_default_resolver = ConfigResolver()


def get_default_resolver() -> ConfigResolver:
    return _default_resolver


def load_config(options: Optional[LoadOptions] = None) -> Dict[str, Any]:
    """Configuração composta do processo (idempotente após a primeira chamada)."""
    return _default_resolver.load(options)


def config_for(
    module_name: str,
    schema: Any,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Configuração validada de um módulo a partir do resolver padrão.

    Raises:
        ModuleConfigValidationError: Se os dados não satisfazem o schema.
    """
    return _default_resolver.config_for(module_name, schema, defaults)
