# src/trp_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
TRP Config para dobrar as camadas de configuração em uma única árvore.

Política de merge:
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total (sem merge elemento a elemento)
    - escalar     → sobrescrita direta
    - tipos distintos → o override substitui o valor base inteiro

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - O resultado não compartilha containers mutáveis com os inputs

Invariantes:
    - merge(A, A) == A
    - merge(merge(A, B), C) == merge(A, merge(B, C))
    - merge(A, B) != merge(B, A) quando há chaves em conflito

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não realiza coerção de tipos
    - Não valida schema de módulos
"""

from copy import deepcopy
from typing import Any, Mapping


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def deep_merge(base: Any, override: Any) -> Any:
    """
    Realiza um deep-merge determinístico entre duas árvores de configuração.

    Para cada chave presente em `override`:
        - se ambos os valores são dicionários, o merge é recursivo
        - caso contrário, o valor do override substitui o da base
          (incluindo listas, que nunca são concatenadas)

    Chaves presentes apenas na base são preservadas; chaves presentes
    apenas no override são adicionadas.

    Decisões arquiteturais:
        - Conflitos de tipo não são erro: o override vence por inteiro
        - Se `base` ou `override` não for um mapa, o resultado é uma
          cópia do override
        - Cópias profundas garantem ausência de aliasing com os inputs

    Args:
        base (Any): Árvore base (camada de menor precedência).
        override (Any): Árvore de override (camada de maior precedência).

    Returns:
        Any: Nova árvore resultante do deep-merge.
    """

    if not is_mapping(base) or not is_mapping(override):
        return deepcopy(override)

    result = {key: deepcopy(value) for key, value in base.items()}

    for key, override_value in override.items():
        base_value = result.get(key)

        # dict -> merge recursivo
        if key in result and is_mapping(base_value) and is_mapping(override_value):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list, escalar ou conflito de tipo -> sobrescrita
        result[key] = deepcopy(override_value)

    return result
