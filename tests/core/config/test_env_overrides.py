# tests/core/config/test_env_overrides.py
"""
Testes dos overrides de configuração via variáveis de ambiente.

Os testes asseguram que:
- apenas variáveis com o prefixo participam
- caminhos são divididos por "__" e segmentos normalizados
- a coerção segue a ordem bool → número → string
- intermediários não-dict são substituídos (comportamento destrutivo)
- sem variáveis correspondentes, o próprio input é retornado
- colisões após normalização são rejeitadas
"""

import pytest

from trp_config.core.config.env_overrides import (
    apply_env_overrides,
    coerce_env_value,
    parse_env_overrides,
)
from trp_config.core.config.errors import EnvOverrideCollisionError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("false", False),
        ("5432", 5432),
        ("-3", -3),
        ("1.5", 1.5),
        ("1e3", 1000.0),
        ("localhost", "localhost"),
        ("True", "True"),
        ("", ""),
        ("  ", "  "),
        ("nan", "nan"),
        ("inf", "inf"),
        ("1_000", "1_000"),
        ("0x10", "0x10"),
        ("1" * 5000, "1" * 5000),
    ],
)
def test_coerce_env_value(raw, expected):
    out = coerce_env_value(raw)
    assert out == expected
    assert type(out) is type(expected)


def test_number_override_is_coerced():
    config = {"db": {"mysql": {"port": 3306, "host": "db"}}}
    out = apply_env_overrides(config, "TRP__", environ={"TRP__db__mysql__port": "5432"})
    assert out["db"]["mysql"]["port"] == 5432
    assert isinstance(out["db"]["mysql"]["port"], int)
    assert out["db"]["mysql"]["host"] == "db"


def test_boolean_override_is_coerced():
    out = apply_env_overrides({}, "TRP__", environ={"TRP__featureFlags__rbac": "false"})
    assert out["featureFlags"]["rbac"] is False


def test_override_creates_intermediate_mappings():
    out = apply_env_overrides({"modules": {}}, "TRP__", environ={
        "TRP__modules__trp-core__limits__maxCharactersPerPlayer": "5",
    })
    assert out["modules"]["trp-core"]["limits"]["maxCharactersPerPlayer"] == 5


def test_non_mapping_intermediate_is_overwritten():
    config = {"logger": "info"}
    out = apply_env_overrides(config, "TRP__", environ={"TRP__logger__level": "debug"})
    assert out["logger"] == {"level": "debug"}
    assert config == {"logger": "info"}


def test_no_match_returns_same_object():
    config = {"a": 1}
    out = apply_env_overrides(config, "TRP__", environ={"PATH": "/bin", "TRP_ENV": "prod"})
    assert out is config


def test_matches_do_not_mutate_input():
    config = {"db": {"mysql": {"port": 3306}}}
    out = apply_env_overrides(config, "TRP__", environ={"TRP__db__mysql__port": "1"})
    assert out is not config
    assert config["db"]["mysql"]["port"] == 3306


def test_segment_normalization_strips_underscores():
    overrides = parse_env_overrides({"TRP__db__mysql__pool_limit": "10"}, "TRP__")
    assert overrides[0].path == ("db", "mysql", "poollimit")
    assert overrides[0].value == 10


def test_custom_prefix():
    out = apply_env_overrides({}, "APP__", environ={"APP__a": "1", "TRP__b": "2"})
    assert out == {"a": 1}


def test_empty_segment_is_skipped():
    events = []
    out = apply_env_overrides(
        {"a": 1}, "TRP__",
        environ={"TRP__": "x", "TRP__a____b": "y"},
        log=lambda **r: events.append(r),
    )
    assert out == {"a": 1}
    assert sorted(e["variable"] for e in events) == ["TRP__", "TRP__a____b"]


def test_overrides_sorted_by_name():
    overrides = parse_env_overrides({"TRP__b": "1", "TRP__a": "2"}, "TRP__")
    assert [o.name for o in overrides] == ["TRP__a", "TRP__b"]


def test_normalized_collision_is_rejected():
    environ = {"TRP__db__pool_limit": "10", "TRP__db__poollimit": "20"}
    with pytest.raises(EnvOverrideCollisionError) as info:
        apply_env_overrides({}, "TRP__", environ=environ)
    assert info.value.path == ("db", "poollimit")
    assert set(info.value.names) == set(environ)
