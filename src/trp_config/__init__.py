# src/trp_config/__init__.py
"""
TRP Config — resolução de configuração em camadas para o servidor multi-módulo.

Este pacote raiz define o namespace público do TRP Config, o motor que
monta uma única configuração autoritativa a partir de várias fontes
locais independentes e possivelmente ausentes.

Princípios centrais:
    - A precedência entre camadas é fixa e determinística
    - Fontes ausentes ou inválidas nunca interrompem a resolução
    - A configuração composta é resolvida uma única vez e reutilizada
    - Cada módulo consome apenas a sua fatia validada por schema

Arquitetura em alto nível:
    - core.config  → leitura de fontes, merge, composição, overrides e cache
    - core.errors  → payload canônico e serializável de erros
    - schemas      → schemas tipados de configurações compartilhadas

Limites explícitos:
    - Não observa arquivos (sem live-reload)
    - Não armazena nem criptografa segredos
    - Não busca configuração remota

Este módulo existe para estabelecer o namespace e a API pública
do TRP Config.
"""
# src/trp_config/__init__.py
from .core.config import (
    ConfigResolver,
    LayoutMode,
    LoadOptions,
    ModuleConfigValidationError,
    config_for,
    load_config,
)

__all__ = [
    "ConfigResolver",
    "LayoutMode",
    "LoadOptions",
    "ModuleConfigValidationError",
    "config_for",
    "load_config",
]
