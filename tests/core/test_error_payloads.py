# tests/core/test_error_payloads.py
"""
Testes do payload canônico de erros de configuração.

Os testes asseguram que exceções de configuração são mapeadas de forma
determinística para `ConfigErrorPayload` serializável.
"""

import json

from trp_config.core.config.errors import (
    ConfigDecodeError,
    EnvOverrideCollisionError,
    ModuleConfigValidationError,
)
from trp_config.core.errors import (
    CONFIG_ENV_OVERRIDE_COLLISION,
    CONFIG_ERROR,
    CONFIG_MODULE_INVALID,
    to_error_payload,
)


def test_module_validation_payload():
    exc = ModuleConfigValidationError(
        "trp-core",
        [{"loc": "limits.maxCharactersPerPlayer", "msg": "Input should be greater than 0", "type": "greater_than"}],
    )
    payload = to_error_payload(exc)

    assert payload.type == CONFIG_MODULE_INVALID
    assert payload.details["module"] == "trp-core"
    assert payload.details["fields"] == ["limits.maxCharactersPerPlayer"]
    assert payload.hint
    json.dumps(payload.to_dict())


def test_collision_payload():
    exc = EnvOverrideCollisionError(("db", "poollimit"), ["TRP__db__pool_limit", "TRP__db__poollimit"])
    payload = to_error_payload(exc).to_dict()

    assert payload["type"] == CONFIG_ENV_OVERRIDE_COLLISION
    assert payload["details"] == {
        "path": "db.poollimit",
        "variables": ["TRP__db__pool_limit", "TRP__db__poollimit"],
    }


def test_generic_config_error_payload():
    payload = to_error_payload(ConfigDecodeError("bad yaml"))
    assert payload.type == CONFIG_ERROR
    assert payload.message == "bad yaml"
    assert payload.details == {"exception": "ConfigDecodeError"}
