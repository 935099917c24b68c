# src/trp_config/core/config/env_overrides.py
"""
Overrides de configuração via variáveis de ambiente: TRP__a__b__c=valor.

Regras:
    - Apenas variáveis cujo nome começa com o prefixo participam
    - O restante do nome é dividido em segmentos por "__"
    - Cada segmento é normalizado removendo "_" e espaços nas bordas
      (TRP__db__mysql__pool_limit → db.mysql.poollimit)
    - Segmentos intermediários inexistentes são criados; intermediários
      que não são dict são substituídos por um dict vazio (destrutivo)

Coerção do valor, nesta ordem:
    "true"/"false" → bool; número finito → int/float; demais → str.

Variáveis distintas que normalizam para o mesmo caminho são rejeitadas
com `EnvOverrideCollisionError`: a ordem de enumeração do ambiente não
é garantida pela plataforma.
"""

from __future__ import annotations

import math
import os
import re
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import EnvOverrideCollisionError
from .merge import is_mapping
from .sources import LogFn


PATH_DELIMITER = "__"

_INT_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class EnvOverride:
    name: str
    path: Tuple[str, ...]
    value: Any


def coerce_env_value(raw: str) -> Any:
    if raw == "true":
        return True
    if raw == "false":
        return False

    text = raw.strip()
    if not text or "_" in text:
        return raw

    if _INT_RE.match(text):
        # Python 3.11+ limita int(str) a 4300 dígitos
        try:
            return int(text)
        except ValueError:
            return raw

    try:
        number = float(text)
    except ValueError:
        return raw

    # "nan"/"inf" são aceitos por float(), mas não são números de config
    if not math.isfinite(number):
        return raw
    return number


def _normalize_segment(segment: str) -> str:
    return segment.replace("_", "").strip()


def parse_env_overrides(
    environ: Mapping[str, str],
    prefix: str,
    log: Optional[LogFn] = None,
) -> List[EnvOverride]:
    """
    Extrai os overrides de ambiente que correspondem ao prefixo.

    Returns:
        Overrides ordenados pelo nome da variável.

    Raises:
        EnvOverrideCollisionError: Se variáveis distintas normalizam
            para o mesmo caminho.
    """
    overrides: List[EnvOverride] = []
    seen: Dict[Tuple[str, ...], str] = {}

    for name in sorted(k for k in environ if k.startswith(prefix)):
        remainder = name[len(prefix):]
        path = tuple(_normalize_segment(s) for s in remainder.split(PATH_DELIMITER))

        if not all(path):
            if log is not None:
                log(event="env.skipped", level="WARNING",
                    message="Override de ambiente com segmento vazio ignorado",
                    variable=name)
            continue

        if path in seen:
            raise EnvOverrideCollisionError(path, [seen[path], name])
        seen[path] = name

        overrides.append(
            EnvOverride(name=name, path=path, value=coerce_env_value(environ[name]))
        )

    return overrides


def _set_path(root: Dict[str, Any], path: Tuple[str, ...], value: Any) -> None:
    cursor = root
    for key in path[:-1]:
        if not is_mapping(cursor.get(key)):
            cursor[key] = {}
        cursor = cursor[key]
    cursor[path[-1]] = value


def apply_env_overrides(
    config: Dict[str, Any],
    prefix: str = "TRP__",
    environ: Optional[Mapping[str, str]] = None,
    log: Optional[LogFn] = None,
) -> Dict[str, Any]:
    """
    Aplica os overrides de ambiente como camada final da configuração.

    Sem nenhuma variável correspondente, o próprio objeto `config` é
    retornado (não uma cópia). Caso contrário, os overrides são escritos
    sobre uma cópia profunda.

    Args:
        config: Configuração composta.
        prefix: Prefixo das variáveis de override.
        environ: Ambiente de processo (padrão: `os.environ`).
        log: Callback opcional de eventos estruturados.

    Returns:
        Dict[str, Any]: Configuração com overrides aplicados.
    """
    environ = os.environ if environ is None else environ
    overrides = parse_env_overrides(environ, prefix, log=log)
    if not overrides:
        return config

    out = deepcopy(config)
    for override in overrides:
        _set_path(out, override.path, override.value)
        if log is not None:
            log(event="env.override", level="INFO",
                message="Override de ambiente aplicado",
                variable=override.name, path=".".join(override.path))
    return out
