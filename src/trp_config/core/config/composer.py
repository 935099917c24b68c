# src/trp_config/core/config/composer.py
"""
Compositor de camadas do TRP Config.

Este módulo define a lista ordenada de fontes candidatas para um
`ResolutionContext` e as dobra via `deep_merge`, produzindo a
configuração composta (antes dos overrides de ambiente).

Ordem de precedência (camadas posteriores sobrescrevem anteriores):
    1. seed          → {"env": tier, "node": node, "modules": {}}
    2. base          → base.<ext> (NESTED) | config.<ext> (FLAT)
    3. env           → env/<tier>.<ext> (NESTED) | <tier>.<ext> (FLAT)
    4. node          → nodes/<node>.<ext> (NESTED) | <node>.<ext> (FLAT)
    5. modules       → modules.<ext> (compartilhado, opcional), mesclado no
                       nível raiz: entradas de módulo ficam sob `modules:`
    6. module:<nome> → modules/<nome>.<ext>, mesclado em modules[<nome>]
    7. secrets       → secrets.<ext>, mesclado no nível raiz

Decisões arquiteturais:
    - Cada camada é opcional; camada ausente é um no-op
    - Arquivos por módulo são namespaced, nunca mesclados no topo
    - Com YAML e JSON para o mesmo stem, o YAML vence (prioridade fixa)

Limites explícitos:
    - Não aplica overrides de ambiente
    - Não valida schema de módulos
    - Não mantém cache
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .context import LayoutMode, ResolutionContext
from .merge import deep_merge, is_mapping
from .sources import LogFn, find_source, iter_module_sources, try_read


MODULES_KEY = "modules"


@dataclass(frozen=True)
class Layer:
    """
    Descritor de uma camada no plano de composição.

    - name: identificador estável da camada (ex.: "base", "module:trp-core")
    - path: arquivo resolvido, ou None quando nenhum candidato existe
    - module: nome do módulo quando a camada é namespaced
    """

    name: str
    path: Optional[Path]
    module: Optional[str] = None


def seed_config(context: ResolutionContext) -> Dict[str, Any]:
    return {"env": context.env, "node": context.node, MODULES_KEY: {}}


def _layer_stems(context: ResolutionContext) -> List[tuple]:
    root = context.config_dir
    if context.layout is LayoutMode.FLAT:
        return [
            ("base", root / "config"),
            ("env", root / context.env),
            ("node", root / context.node),
        ]
    return [
        ("base", root / "base"),
        ("env", root / "env" / context.env),
        ("node", root / "nodes" / context.node),
    ]


def plan_layers(
    context: ResolutionContext, log: Optional[LogFn] = None
) -> List[Layer]:
    """
    Monta o plano ordenado de camadas para um contexto de resolução.

    A seed não aparece no plano: ela é sempre o acumulador inicial.

    Returns:
        List[Layer]: Camadas na ordem estrita de precedência.
    """
    root = context.config_dir
    layers: List[Layer] = [
        Layer(name=name, path=find_source(stem, log=log))
        for name, stem in _layer_stems(context)
    ]
    layers.append(Layer(name=MODULES_KEY, path=find_source(root / MODULES_KEY, log=log)))

    for module_name, path in iter_module_sources(root / MODULES_KEY, log=log):
        layers.append(Layer(name=f"module:{module_name}", path=path, module=module_name))

    layers.append(Layer(name="secrets", path=find_source(root / "secrets", log=log)))
    return layers


def _merge_module(
    config: Dict[str, Any], module_name: str, data: Dict[str, Any]
) -> Dict[str, Any]:
    modules = config.get(MODULES_KEY)
    if not is_mapping(modules):
        modules = {}
    previous = modules.get(module_name)
    if previous is None:
        previous = {}

    out = dict(config)
    out[MODULES_KEY] = {**modules, module_name: deep_merge(previous, data)}
    return out


def compose(
    context: ResolutionContext, log: Optional[LogFn] = None
) -> Dict[str, Any]:
    """
    Produz a configuração composta dobrando todas as camadas disponíveis.

    Args:
        context: Contexto de resolução imutável.
        log: Callback opcional de eventos estruturados.

    Returns:
        Dict[str, Any]: Configuração composta (sem overrides de ambiente).
    """
    config: Dict[str, Any] = seed_config(context)

    for layer in plan_layers(context, log=log):
        if layer.path is None:
            if log is not None:
                log(event="layer.skipped", level="DEBUG",
                    message="Camada sem fonte", layer=layer.name)
            continue

        data = try_read(layer.path, log=log)
        if data is None:
            continue

        if layer.module is not None:
            config = _merge_module(config, layer.module, data)
        else:
            config = deep_merge(config, data)

    return config
