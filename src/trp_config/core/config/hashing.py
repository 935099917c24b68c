# src/trp_config/core/config/hashing.py
"""
Hashing e serialização canônica da configuração composta.

O hash representa a **identidade estrutural** da configuração e é
registrado no evento `config.resolved` do resolver, permitindo
comparar resoluções entre processos e nós.

Princípios fundamentais:
    - Hashing determinístico e independente da ordem das chaves
    - Serialização JSON canônica, UTF-8, SHA-256
    - Dumps de diagnóstico preservam a ordem de inserção

Limites explícitos:
    - Não carrega ou resolve configuração
    - Não persiste o hash nem o dump
"""

import hashlib
import json
import re
from typing import Any, Dict

import yaml


# `db_password`, `API-KEY`, `token` ou camelCase (`apiKey`); não `monkey`
_SECRET_KEY_RE = re.compile(
    r"(?i:(?:^|[_.-])(?:password|secret|token|key))$"
    r"|[a-z0-9](?:Password|Secret|Token|Key)$"
)
MASK = "***"


def _stringify_keys(value: Any) -> Any:
    # json.dumps(sort_keys=True) não ordena chaves de tipos mistos
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(v) for v in value]
    return value


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração composta.

    Política de hashing:
        - Serialização JSON canônica com chaves ordenadas
        - Separadores compactos
        - Valores não serializáveis em JSON (ex.: datas YAML) via `str`
        - Chaves não-string (ex.: `on:`/`off:` do YAML, portas) via `str`
        - Algoritmo SHA-256

    Invariantes:
        - O valor retornado é uma string hexadecimal de 64 caracteres
        - Configurações estruturalmente equivalentes produzem o mesmo hash

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _stringify_keys(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def mask_secrets(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: (MASK if isinstance(k, str) and _SECRET_KEY_RE.search(k)
                and not isinstance(v, dict) else mask_secrets(v))
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [mask_secrets(v) for v in value]
    return value


def dump_config(config: Dict[str, Any], fmt: str = "yaml", reveal: bool = False) -> str:
    """
    Re-serializa a configuração para diagnóstico, na ordem de inserção.

    Valores sob chaves que terminam na palavra `password`, `secret`,
    `token` ou `key` (após `_`, `-`, `.` ou em camelCase) são mascarados,
    exceto com `reveal=True`.

    Raises:
        ValueError: Se `fmt` não for "yaml" nem "json".
    """
    data = config if reveal else mask_secrets(config)

    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)
    raise ValueError(f"Formato de dump não suportado: {fmt}")
