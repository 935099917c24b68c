"""
TRP Config — Canonical Error Structures (v1)

Este módulo define o payload canônico e serializável de erros do TRP Config,
usado por entry points (ex.: handlers de inicialização de módulos) para
reportar falhas de configuração de forma estável.

Erros devem ser:

- explícitos
- serializáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .config.errors import (
    ConfigError,
    EnvOverrideCollisionError,
    ModuleConfigValidationError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigErrorPayload:
    """
    Payload canônico de erro do TRP Config.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_MODULE_INVALID = "CONFIG_MODULE_INVALID"
CONFIG_ENV_OVERRIDE_COLLISION = "CONFIG_ENV_OVERRIDE_COLLISION"
CONFIG_ERROR = "CONFIG_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def module_config_invalid(
    *,
    exc: ModuleConfigValidationError,
    hint: str = "Corrija os campos listados em config/modules/<módulo> ou nos overrides TRP__modules__<módulo>__*.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=CONFIG_MODULE_INVALID,
        message="Configuração do módulo não satisfaz o schema",
        details={
            "module": exc.module_name,
            "fields": exc.fields,
            "errors": exc.errors,
        },
        hint=hint,
    )


def env_override_collision(
    *,
    exc: EnvOverrideCollisionError,
    hint: str = "Remova uma das variáveis: ambas normalizam para o mesmo caminho.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=CONFIG_ENV_OVERRIDE_COLLISION,
        message="Overrides de ambiente ambíguos",
        details={"path": ".".join(exc.path), "variables": list(exc.names)},
        hint=hint,
    )


def to_error_payload(exc: ConfigError) -> ConfigErrorPayload:
    """Mapeia deterministicamente uma exceção de configuração para o payload."""
    if isinstance(exc, ModuleConfigValidationError):
        return module_config_invalid(exc=exc)
    if isinstance(exc, EnvOverrideCollisionError):
        return env_override_collision(exc=exc)
    return ConfigErrorPayload(
        type=CONFIG_ERROR,
        message=str(exc),
        details={"exception": type(exc).__name__},
    )
