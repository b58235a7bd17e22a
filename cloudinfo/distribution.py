"""Configuration of the distributions offered on top of cloud providers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ProviderToggle:
    """Whether a distribution is enabled for a provider."""

    enabled: bool = False


@dataclass
class PkeConfig:
    """PKE distribution settings per provider."""

    amazon: ProviderToggle = field(default_factory=ProviderToggle)
    azure: ProviderToggle = field(default_factory=ProviderToggle)


@dataclass
class Config:
    """Distribution configuration."""

    pke: PkeConfig = field(default_factory=PkeConfig)