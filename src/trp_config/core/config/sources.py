# src/trp_config/core/config/sources.py
"""
Leitor canônico de fontes de configuração do TRP Config.

Este módulo é responsável por localizar o diretório raiz de configuração
e ler arquivos candidatos individuais, tolerando ausência, conteúdo
vazio ou inválido.

Contrato de leitura:
    - `try_read(path)` nunca levanta exceção
    - Arquivo inexistente, erro de I/O, texto vazio, falha de decodificação,
      documento nulo ou raiz não-dict → `None` ("ausente")
    - Um mapa vazio explícito (`{}`) → `{}` ("presente, porém vazio")

Formatos suportados (ordem de prioridade fixa):
    - YAML (.yaml, .yml) — formato leniente (comentários, estilo flow)
    - JSON (.json)       — formato estrito

Descoberta de diretório:
    - Sobe a partir de `start` por no máximo 6 níveis procurando um
      subdiretório chamado literalmente `config`
    - Para antecipadamente ao alcançar a raiz do filesystem

Limites explícitos:
    - Não realiza merge de camadas
    - Não escreve arquivos
    - Não tenta novamente em falhas transitórias
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml  # PyYAML

from .errors import (
    ConfigDecodeError,
    ConfigSourceError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


CONFIG_DIR_NAME = "config"
MAX_DISCOVERY_DEPTH = 6

# Ordem de prioridade: a primeira extensão existente vence.
SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".yaml", ".yml", ".json")

LogFn = Callable[..., None]


def _decode_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def _decode_json(text: str) -> Any:
    return json.loads(text)


_DECODERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": _decode_yaml,
    ".yml": _decode_yaml,
    ".json": _decode_json,
}


def decode_text(text: str, suffix: str) -> Optional[Dict[str, Any]]:
    """
    Decodifica o texto bruto de uma fonte em um mapa aninhado.

    Args:
        text: Conteúdo textual do arquivo.
        suffix: Extensão do arquivo (com ponto), usada para escolher o formato.

    Returns:
        O mapa decodificado, ou `None` para texto vazio/documento nulo.

    Raises:
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        ConfigDecodeError: Se o texto não for válido no formato declarado.
        InvalidConfigRootTypeError: Se a raiz decodificada não for um dict.
    """
    decoder = _DECODERS.get(suffix.lower())
    if decoder is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {suffix}")

    if not text.strip():
        return None

    try:
        data = decoder(text)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigDecodeError(str(e) or "falha ao decodificar fonte") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def try_read(path: Path, log: Optional[LogFn] = None) -> Optional[Dict[str, Any]]:
    """
    Lê uma fonte candidata, rebaixando qualquer falha para "ausente".

    Decisões arquiteturais:
        - Fontes são sempre opcionais
        - Falhas são registradas via `log` (quando fornecido) e nunca propagadas
        - Ausência (`None`) é distinguível de mapa vazio (`{}`)

    Args:
        path: Caminho do arquivo candidato.
        log: Callback opcional de eventos estruturados (ver `ConfigResolver.log`).

    Returns:
        O mapa lido, ou `None` quando a fonte não contribui.
    """
    path = Path(path)
    try:
        if not path.is_file():
            if log is not None:
                log(event="source.absent", level="DEBUG",
                    message="Fonte não encontrada", path=str(path))
            return None
        text = path.read_text(encoding="utf-8")
        data = decode_text(text, path.suffix)
    except (OSError, UnicodeDecodeError, ConfigSourceError) as e:
        if log is not None:
            log(event="source.invalid", level="WARNING",
                message="Fonte ignorada por falha de leitura ou decodificação",
                path=str(path), error=f"{type(e).__name__}: {e}")
        return None

    if log is not None:
        if data is None:
            log(event="source.absent", level="DEBUG",
                message="Fonte vazia", path=str(path))
        else:
            log(event="source.loaded", level="INFO",
                message="Fonte carregada", path=str(path))
    return data


def find_source(stem: Path, log: Optional[LogFn] = None) -> Optional[Path]:
    """
    Resolve o arquivo de uma fonte lógica (caminho sem extensão).

    A primeira extensão existente, na ordem de `SUPPORTED_EXTENSIONS`,
    vence. Arquivos de menor prioridade com o mesmo stem são ignorados.
    """
    stem = Path(stem)
    found: List[Path] = []
    for ext in SUPPORTED_EXTENSIONS:
        candidate = stem.parent / f"{stem.name}{ext}"
        try:
            if candidate.is_file():
                found.append(candidate)
        except OSError:
            continue

    if not found:
        return None

    if len(found) > 1 and log is not None:
        log(event="source.shadowed", level="WARNING",
            message="Múltiplos formatos para a mesma fonte; prioridade fixa aplicada",
            path=str(found[0]), shadowed=[str(p) for p in found[1:]])
    return found[0]


def iter_module_sources(
    directory: Path, log: Optional[LogFn] = None
) -> List[Tuple[str, Path]]:
    """
    Lista os arquivos por módulo de um diretório `modules/`.

    Returns:
        Pares `(nome_do_modulo, caminho)` ordenados por nome, um por stem,
        com a extensão de maior prioridade vencendo.
    """
    directory = Path(directory)
    try:
        if not directory.is_dir():
            return []
        entries = sorted(directory.iterdir())
    except OSError as e:
        if log is not None:
            log(event="source.invalid", level="WARNING",
                message="Diretório de módulos ilegível",
                path=str(directory), error=f"{type(e).__name__}: {e}")
        return []

    names: List[str] = []
    for entry in entries:
        if entry.suffix.lower() in SUPPORTED_EXTENSIONS and entry.stem not in names:
            names.append(entry.stem)

    out: List[Tuple[str, Path]] = []
    for name in sorted(names):
        path = find_source(directory / name, log=log)
        if path is not None:
            out.append((name, path))
    return out


def find_config_root(
    start: Path, max_depth: int = MAX_DISCOVERY_DEPTH
) -> Optional[Path]:
    """
    Procura um diretório `config` subindo a partir de `start`.

    `start` é o primeiro nível verificado; no máximo `max_depth` níveis
    são inspecionados.
    """
    current = Path(start).resolve()
    for _ in range(max_depth):
        candidate = current / CONFIG_DIR_NAME
        if candidate.is_dir():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
