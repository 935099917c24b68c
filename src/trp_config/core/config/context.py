# src/trp_config/core/config/context.py
"""
ResolutionContext — entradas que determinam quais fontes são consultadas.

Cada campo é resolvido nesta ordem:
    1. opção explícita (`LoadOptions`)
    2. variável de ambiente (`TRP_CONFIG_DIR`, `TRP_ENV`, `TRP_NODE`)
    3. fallback: descoberta do diretório `config` subindo a partir do CWD,
       tier "dev" e hostname da máquina
    4. caminho padrão relativo `<cwd>/config` (apenas para o diretório)

O contexto é imutável após o cálculo.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from .sources import CONFIG_DIR_NAME, find_config_root


ENV_CONFIG_DIR = "TRP_CONFIG_DIR"
ENV_TIER = "TRP_ENV"
ENV_NODE = "TRP_NODE"

DEFAULT_TIER = "dev"
DEFAULT_ENV_PREFIX = "TRP__"


class LayoutMode(str, Enum):
    """
    Layout de arquivos consumido pelo compositor de camadas.

    - NESTED: `base.<ext>`, `env/<tier>.<ext>`, `nodes/<node>.<ext>`
    - FLAT:   `config.<ext>`, `<tier>.<ext>`, `<node>.<ext>`

    Ambos compartilham `modules.<ext>`, `modules/<nome>.<ext>` e
    `secrets.<ext>`.
    """

    NESTED = "nested"
    FLAT = "flat"


class ConfigDirOrigin(str, Enum):
    OPTION = "option"
    ENVIRONMENT = "environment"
    DISCOVERED = "discovered"
    DEFAULT = "default"


@dataclass(frozen=True)
class LoadOptions:
    """Opções explícitas do chamador; `None` delega para ambiente e fallbacks."""

    config_dir: Optional[str] = None
    env: Optional[str] = None
    node: Optional[str] = None
    env_prefix: Optional[str] = None
    layout: LayoutMode = LayoutMode.NESTED


@dataclass(frozen=True)
class ResolutionContext:
    config_dir: Path
    env: str
    node: str
    env_prefix: str
    layout: LayoutMode
    config_dir_origin: ConfigDirOrigin

    def to_dict(self) -> dict:
        return {
            "config_dir": str(self.config_dir),
            "env": self.env,
            "node": self.node,
            "env_prefix": self.env_prefix,
            "layout": self.layout.value,
            "config_dir_origin": self.config_dir_origin.value,
        }


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def resolve_context(
    options: Optional[LoadOptions] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> ResolutionContext:
    """
    Calcula o `ResolutionContext` a partir de opções, ambiente e fallbacks.

    Args:
        options: Opções explícitas do chamador.
        environ: Ambiente de processo (padrão: `os.environ`).
        cwd: Diretório de partida da descoberta (padrão: `Path.cwd()`).

    Returns:
        ResolutionContext: Contexto imutável com tier e node em minúsculas.
    """
    options = options or LoadOptions()
    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else Path(cwd)

    env = _non_empty(options.env) or _non_empty(environ.get(ENV_TIER)) or DEFAULT_TIER
    node = (
        _non_empty(options.node)
        or _non_empty(environ.get(ENV_NODE))
        or socket.gethostname()
    )

    explicit_dir = _non_empty(options.config_dir)
    env_dir = _non_empty(environ.get(ENV_CONFIG_DIR))
    if explicit_dir is not None:
        config_dir, origin = Path(explicit_dir), ConfigDirOrigin.OPTION
    elif env_dir is not None:
        config_dir, origin = Path(env_dir), ConfigDirOrigin.ENVIRONMENT
    else:
        discovered = find_config_root(cwd)
        if discovered is not None:
            config_dir, origin = discovered, ConfigDirOrigin.DISCOVERED
        else:
            config_dir, origin = cwd / CONFIG_DIR_NAME, ConfigDirOrigin.DEFAULT

    prefix = options.env_prefix if options.env_prefix else DEFAULT_ENV_PREFIX

    return ResolutionContext(
        config_dir=config_dir,
        env=env.lower(),
        node=node.lower(),
        env_prefix=prefix,
        layout=LayoutMode(options.layout),
        config_dir_origin=origin,
    )
