# src/trp_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do TRP Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura de fontes, aplicação de overrides de ambiente e validação
da configuração de módulos.

Taxonomia:
    - Fonte ausente/inválida → `ConfigSourceError` e subclasses.
      Levantadas apenas na fronteira de decodificação e sempre
      rebaixadas para "ausente" pelo leitor de fontes.
    - Colisão de overrides → `EnvOverrideCollisionError`.
      Duas variáveis de ambiente distintas apontam para o mesmo caminho
      após normalização dos segmentos.
    - Falha de validação → `ModuleConfigValidationError`.
      A única categoria que o chamador de `config_for` deve tratar.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Erros de fonte nunca atravessam o leitor de fontes

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra eventos (responsabilidade do resolver)
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do TRP Config.

    Esta hierarquia permite captura genérica de erros de configuração
    sem confundi-los com erros de execução dos módulos consumidores.
    """


class ConfigSourceError(ConfigError):
    """
    Exceção base para falhas de leitura ou decodificação de uma fonte.

    Decisões arquiteturais:
        - Fontes são opcionais: nenhuma falha de fonte é fatal
        - O leitor converte esta família de erros em "ausente"

    Limites explícitos:
        - Nunca propagada ao chamador de `load_config`
    """


class UnsupportedConfigFormatError(ConfigSourceError):
    """
    Exceção levantada quando a extensão do arquivo não corresponde
    a nenhum formato suportado.

    Formatos suportados:
        - YAML (.yaml, .yml), formato leniente
        - JSON (.json), formato estrito
    """


class ConfigDecodeError(ConfigSourceError):
    """Conteúdo textual não pôde ser decodificado no formato declarado."""


class InvalidConfigRootTypeError(ConfigSourceError):
    """
    Exceção levantada quando o conteúdo raiz decodificado não é um
    dicionário (`dict`).

    Decisões arquiteturais:
        - Uma camada é sempre um mapa chave-valor
        - Listas ou escalares no root tornam a camada ausente,
          em vez de substituir a configuração inteira
    """


class EnvOverrideCollisionError(ConfigError):
    """
    Exceção levantada quando duas variáveis de ambiente distintas
    resultam no mesmo caminho após a normalização dos segmentos.

    Exemplo de colisão:
        - TRP__db__pool_limit
        - TRP__db__poollimit

    Decisões arquiteturais:
        - A ordem de enumeração do ambiente não é confiável
        - Ambiguidade é rejeitada em vez de resolvida silenciosamente
    """

    def __init__(self, path: Sequence[str], names: Sequence[str]) -> None:
        self.path = tuple(path)
        self.names = tuple(names)
        super().__init__(
            "Overrides de ambiente colidem no caminho "
            f"'{'.'.join(self.path)}': {', '.join(self.names)}"
        )


class ModuleConfigValidationError(ConfigError):
    """
    Exceção levantada quando a configuração de um módulo não satisfaz
    o schema informado pelo chamador.

    Carrega os diagnósticos por campo produzidos pelo schema:
        - `module_name`: módulo cuja configuração falhou
        - `errors`: lista de dicts com `loc`, `msg` e `type`
        - `fields`: caminhos pontuados dos campos inválidos

    Invariantes:
        - `errors` nunca é vazio
        - O cache de configuração não é alterado pela falha
    """

    def __init__(self, module_name: str, errors: List[Dict[str, Any]]) -> None:
        self.module_name = module_name
        self.errors = list(errors)
        summary = "; ".join(f"{e['loc']}: {e['msg']}" for e in self.errors)
        super().__init__(
            f"Configuração inválida para o módulo '{module_name}': {summary}"
        )

    @property
    def fields(self) -> List[str]:
        return [e["loc"] for e in self.errors]
