# src/trp_config/core/config/__init__.py
"""
Camada de configuração do TRP Config.

Este pacote contém as estruturas e utilitários responsáveis por ler,
mesclar, compor, sobrescrever via ambiente, cachear e projetar por
módulo a configuração do servidor.

Fluxo (em uma única direção):
    sources → composer → env_overrides → resolver (cache) → scoper

Princípios fundamentais:
    - Precedência explícita e fixa entre camadas
    - Fontes ausentes/inválidas contribuem com nada, sem erro
    - A mesma entrada sempre produz a mesma configuração composta
    - Apenas falhas de validação de módulo chegam ao chamador

Limites explícitos:
    - Sem live-reload, sem armazenamento de segredos, sem fontes remotas
    - Não escreve arquivos
"""

from .context import LayoutMode, LoadOptions, ResolutionContext
from .errors import (
    ConfigError,
    EnvOverrideCollisionError,
    ModuleConfigValidationError,
)
from .merge import deep_merge
from .resolver import ConfigResolver, config_for, get_default_resolver, load_config

__all__ = [
    "ConfigError",
    "ConfigResolver",
    "EnvOverrideCollisionError",
    "LayoutMode",
    "LoadOptions",
    "ModuleConfigValidationError",
    "ResolutionContext",
    "config_for",
    "deep_merge",
    "get_default_resolver",
    "load_config",
]
