# src/trp_config/core/config/scoper.py
"""Projeção validada da configuração de um módulo (`modules[nome]`)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from .composer import MODULES_KEY
from .errors import ModuleConfigValidationError
from .merge import deep_merge, is_mapping


def format_validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(part) for part in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def raw_module_config(config: Mapping[str, Any], module_name: str) -> Any:
    modules = config.get(MODULES_KEY)
    if not is_mapping(modules):
        return {}
    raw = modules.get(module_name)
    return {} if raw is None else raw


def scope_module_config(
    config: Mapping[str, Any],
    module_name: str,
    schema: Any,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Extrai e valida a configuração endereçada a um módulo.

    Política:
        - `modules[module_name]` ausente é tratado como `{}`
        - `defaults` do chamador perdem, chave a chave, para os dados resolvidos
        - O resultado é o valor tipado produzido pelo schema (ex.: modelo pydantic)

    Args:
        config: Configuração composta (não é mutada).
        module_name: Nome do módulo.
        schema: Tipo aceito por `pydantic.TypeAdapter` (BaseModel, dataclass, TypedDict...).
        defaults: Defaults opcionais aplicados antes da validação.

    Raises:
        ModuleConfigValidationError: Se os dados não satisfazem o schema.
    """
    raw = raw_module_config(config, module_name)
    # o merge também desacopla `data` da árvore em cache
    data = deep_merge(defaults if defaults is not None else {}, raw)

    try:
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as e:
        raise ModuleConfigValidationError(module_name, format_validation_errors(e)) from e
