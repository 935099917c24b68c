"""Configuração do módulo `trp-core` (feature flags e limites)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from ..core.config.resolver import ConfigResolver, get_default_resolver


CORE_MODULE_NAME = "trp-core"


class FeatureFlags(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_session_audit: bool = Field(True, alias="playerSessionAudit")
    rbac: bool = True


class Limits(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_characters_per_player: PositiveInt = Field(3, alias="maxCharactersPerPlayer")


class CoreConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feature_flags: FeatureFlags = Field(default_factory=FeatureFlags, alias="featureFlags")
    limits: Limits = Field(default_factory=Limits)


def get_core_config(resolver: Optional[ConfigResolver] = None) -> CoreConfig:
    return (resolver or get_default_resolver()).config_for(CORE_MODULE_NAME, CoreConfig)
