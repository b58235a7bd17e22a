"""Mapping of Alibaba instance families and bandwidths to generic categories."""

from __future__ import annotations

from cloudinfo.instance_type import (
    CATEGORY_COMPUTE,
    CATEGORY_GENERAL,
    CATEGORY_MEMORY,
    CATEGORY_STORAGE,
)

CATEGORY_GPU = "GPU instance"

NTW_LOW = "low"
NTW_MEDIUM = "medium"
NTW_HIGH = "high"
NTW_EXTRA = "extra"

CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    CATEGORY_GENERAL: (
        "g5", "sn2ne", "hfg5", "ebmhfg5", "ebmg5", "ebmg5s", "sccg5", "t5", "xn4",
        "n4", "mn4", "sn2", "n1", "n2", "s2", "t1", "s1", "s3",
    ),
    CATEGORY_COMPUTE: (
        "ic5", "c5", "sn1ne", "hfc5", "ebmc4", "scch5", "sn1", "c4", "ce4", "cm4", "c1", "c2",
    ),
    CATEGORY_MEMORY: ("r5", "re4", "re4e", "se1ne", "se1", "e4", "e3", "m1", "m2"),
    CATEGORY_STORAGE: ("d1ne", "d1", "i2", "i2g", "i1"),
    CATEGORY_GPU: ("gn6v", "gn5", "gn5i", "gn4", "ga1", "f1", "f3", "vgn5i"),
}

NTW_PERF_MAP: dict[str, tuple[str, ...]] = {
    NTW_LOW: (
        "0.0 Gbit/s", "0.1 Gbit/s", "0.2 Gbit/s", "0.4 Gbit/s", "0.5 Gbit/s",
        "0.8 Gbit/s", "1.0 Gbit/s", "1.2 Gbit/s", "1.5 Gbit/s", "2.0 Gbit/s",
    ),
    NTW_MEDIUM: (
        "2.5 Gbit/s", "3.0 Gbit/s", "4.0 Gbit/s", "4.5 Gbit/s", "5.0 Gbit/s",
        "6.0 Gbit/s", "7.5 Gbit/s", "8.0 Gbit/s",
    ),
    NTW_HIGH: ("10.0 Gbit/s", "12.0 Gbit/s"),
    NTW_EXTRA: (
        "15.0 Gbit/s", "16.0 Gbit/s", "17.0 Gbit/s", "20.0 Gbit/s", "25.0 Gbit/s",
        "30.0 Gbit/s", "35.0 Gbit/s",
    ),
}


class MappingError(ValueError):
    """Raised when a value cannot be mapped to a known category."""


def map_category(name: str) -> str:
    """Map an Alibaba instance type name (e.g. ``ecs.g5.large``) to its category."""
    parts = name.split(".")
    if len(parts) < 2:
        raise MappingError(f"could not determine the category: {name}")
    family = parts[1].split("-")[0]

    for category, families in CATEGORY_MAP.items():
        if family in families:
            return category
    raise MappingError(f"could not determine the category: {family}")


class AlibabaNetworkMapper:
    """Maps Alibaba network bandwidth descriptions to network performance categories."""

    def map_network_perf(self, ntw_perf: str) -> str:
        """Return the category of a bandwidth such as ``"10.0 Gbit/s"``."""
        for category, values in NTW_PERF_MAP.items():
            if ntw_perf in values:
                return category
        raise MappingError(f"could not determine network performance: {ntw_perf}")