"""Schemas tipados das configurações compartilhadas e do módulo core."""

from .core import CORE_MODULE_NAME, CoreConfig, get_core_config
from .db import MySqlConfig, get_mysql_config

__all__ = [
    "CORE_MODULE_NAME",
    "CoreConfig",
    "MySqlConfig",
    "get_core_config",
    "get_mysql_config",
]
