"""
Schema da conexão MySQL compartilhada (`db.mysql`).

Diferente das configurações de módulo, `db.mysql` vive no nível raiz da
configuração composta, para que `secrets.<ext>` e overrides
`TRP__db__mysql__*` possam alcançá-lo diretamente.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.config.errors import ModuleConfigValidationError
from ..core.config.merge import is_mapping
from ..core.config.resolver import ConfigResolver, get_default_resolver
from ..core.config.scoper import format_validation_errors


class MySqlConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    host: str
    port: int = 3306
    database: str
    user: str
    password: str
    pool_limit: int = Field(30, alias="poolLimit")


def get_mysql_config(resolver: Optional[ConfigResolver] = None) -> MySqlConfig:
    """Lê e valida `db.mysql` da configuração composta.

    Raises:
        ModuleConfigValidationError: Com `module_name="db.mysql"` quando inválido.
    """
    config = (resolver or get_default_resolver()).load()
    db = config.get("db")
    raw = db.get("mysql") if is_mapping(db) else None

    try:
        return MySqlConfig.model_validate(raw if raw is not None else {})
    except ValidationError as e:
        raise ModuleConfigValidationError("db.mysql", format_validation_errors(e)) from e
