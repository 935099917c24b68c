# tests/conftest.py
"""
Fixtures compartilhados para testes do TRP Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório `config` temporário com helper de escrita de camadas
- um ambiente de processo isolado (dict), injetado nos resolvers
- um resolver padrão de processo limpo por teste

O cache de configuração é de slot único e não possui API pública de
invalidação: cada teste constrói um `ConfigResolver` novo ou recebe o
resolver padrão substituído via `monkeypatch` (fixture
`fresh_default_resolver`).

Invariantes:
    - Nenhuma fixture lê o `config/` real do repositório
    - Nenhuma fixture depende das variáveis de ambiente da máquina
    - Todas as fixtures são seguras para execução em paralelo
"""

from pathlib import Path

import pytest


# =====================================================
# Filesystem fixtures
# =====================================================

@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """
    Diretório `config` vazio dentro de um projeto temporário.

    Returns:
        Path: `<tmp>/project/config`, já criado.
    """
    path = tmp_path / "project" / "config"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_layer(config_dir: Path):
    """
    Factory que escreve um arquivo de camada relativo ao `config_dir`.

    Uso:
        write_layer("base.yaml", "a: 1\\n")
        write_layer("modules/trp-core.json", '{"limits": {}}')
    """

    def _write(relative: str, content: str) -> Path:
        path = config_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# =====================================================
# Environment / resolver fixtures
# =====================================================

@pytest.fixture
def environ() -> dict:
    """Ambiente de processo isolado (vazio) para injeção em resolvers."""
    return {}


@pytest.fixture
def make_resolver(config_dir: Path, environ: dict):
    """
    Factory de `ConfigResolver` apontado para o `config_dir` temporário.

    Tier "dev" e node "node-1" são fixados para que o hostname da
    máquina de teste nunca influencie a resolução.
    """
    from trp_config.core.config import ConfigResolver, LoadOptions

    def _make(**overrides) -> ConfigResolver:
        opts = {"config_dir": str(config_dir), "env": "dev", "node": "node-1"}
        opts.update(overrides)
        return ConfigResolver(LoadOptions(**opts), environ=environ)

    return _make


@pytest.fixture
def fresh_default_resolver(monkeypatch, environ: dict, config_dir: Path):
    """
    Substitui o resolver padrão de processo por um resolver limpo.

    Necessário porque `load_config`/`config_for` compartilham um cache de
    processo sem invalidação pública.
    """
    from trp_config.core.config import resolver as resolver_module

    fresh = resolver_module.ConfigResolver(environ=environ, cwd=config_dir.parent)
    monkeypatch.setattr(resolver_module, "_default_resolver", fresh)
    return fresh
