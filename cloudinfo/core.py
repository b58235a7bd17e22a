"""Cached cloud product information: providers, regions, zones, products and prices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from cloudinfo.adapter import Logger

CONTINENT_ASIA = "Asia"
CONTINENT_AUSTRALIA = "Australia"
CONTINENT_EUROPE = "Europe"
CONTINENT_NORTH_AMERICA = "North America"
CONTINENT_SOUTH_AMERICA = "South America"
CONTINENT_AFRICA = "Africa"
CONTINENT_UNKNOWN = "unknown"

CPU = "cpu"
MEMORY = "memory"


@dataclass
class Service:
    """A service offered by a cloud provider."""

    service: str
    is_static: bool = False


@dataclass
class CloudProvider:
    """A cloud provider together with the services it offers."""

    provider: str
    services: list[Service] = field(default_factory=list)


@dataclass
class Image:
    """A machine image available for a service."""

    name: str
    gpu_available: bool = False
    version: str = ""


@dataclass
class LocationVersion:
    """Versions supported by a service in a location."""

    location: str = ""
    versions: list[str] = field(default_factory=list)
    default: str = ""


@dataclass
class Region:
    """A region identifier and its display name."""

    id: str
    name: str


@dataclass
class ZonePrice:
    """The spot price of an instance type in an availability zone."""

    zone: str
    price: float


@dataclass
class Price:
    """On-demand price and per-zone spot prices of an instance type."""

    on_demand_price: float = 0.0
    spot_price: dict[str, float] = field(default_factory=dict)


@dataclass
class VMInfo:
    """Attributes of a virtual machine type."""

    type: str = ""
    category: str = ""
    on_demand_price: float = 0.0
    cpus: float = 0.0
    mem: float = 0.0
    gpus: float = 0.0
    ntw_perf: str = ""
    ntw_perf_cat: str = ""
    zones: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class ProductDetails(VMInfo):
    """A virtual machine type decorated with spot price information."""

    spot_price: list[ZonePrice] = field(default_factory=list)

    @classmethod
    def from_vm(cls, vm: VMInfo) -> "ProductDetails":
        """Build product details from a virtual machine description."""
        return cls(
            type=vm.type,
            category=vm.category,
            on_demand_price=vm.on_demand_price,
            cpus=vm.cpus,
            mem=vm.mem,
            gpus=vm.gpus,
            ntw_perf=vm.ntw_perf,
            ntw_perf_cat=vm.ntw_perf_cat,
            zones=list(vm.zones),
            attributes=dict(vm.attributes),
        )


class CloudInfoError(Exception):
    """Raised when cloud information is unavailable or a request is invalid."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details)

    def __str__(self) -> str:
        return self.message


class CloudInfoStore(Protocol):
    """Cache of scraped cloud information; getters return None when nothing is cached."""

    def get_regions(self, provider: str, service: str) -> Optional[dict[str, str]]: ...

    def get_zones(self, provider: str, service: str, region: str) -> Optional[list[str]]: ...

    def get_services(self, provider: str) -> Optional[list[Service]]: ...

    def get_vm(self, provider: str, service: str, region: str) -> Optional[list[VMInfo]]: ...

    def get_price(self, provider: str, region: str, instance_type: str) -> Optional[Price]: ...

    def get_status(self, provider: str) -> Optional[str]: ...

    def get_image(self, provider: str, service: str, region: str) -> Optional[list[Image]]: ...

    def get_version(
        self, provider: str, service: str, region: str
    ) -> Optional[list[LocationVersion]]: ...


class CloudInfoer(Protocol):
    """Provider specific retrieval of cloud information."""

    def initialize(self) -> Optional[dict[str, dict[str, Price]]]: ...

    def get_virtual_machines(self, region: str) -> list[VMInfo]: ...

    def get_products(self, vms: list[VMInfo], service: str, region_id: str) -> list[VMInfo]: ...

    def get_zones(self, region: str) -> list[str]: ...

    def get_regions(self, service: str) -> dict[str, str]: ...

    def has_short_lived_price_info(self) -> bool: ...

    def get_current_prices(self, region: str) -> dict[str, Price]: ...

    def has_images(self) -> bool: ...

    def get_service_images(self, service: str, region: str) -> list[Image]: ...

    def get_versions(self, service: str, region: str) -> list[LocationVersion]: ...

    def get_service_products(self, region: str, service: str) -> list[ProductDetails]: ...


class CloudInfo:
    """Entry point for reading cached product information of the enabled providers."""

    def __init__(self, providers: Optional[list[str]], store: Optional[CloudInfoStore], logger: Logger) -> None:
        if providers is None or store is None:
            raise CloudInfoError("could not create product infoer")
        self.providers = list(providers)
        self.store = store
        self.log = logger.with_fields({"component": "cloudInfo"})

    def get_providers(self) -> list[CloudProvider]:
        """Return every enabled provider with its services."""
        return [self.get_provider(name) for name in self.providers]

    def get_provider(self, provider: str) -> CloudProvider:
        """Return an enabled provider decorated with its services."""
        if provider not in self.providers:
            raise CloudInfoError("unsupported provider", provider=provider)
        try:
            services = self.get_services(provider)
        except CloudInfoError as err:
            err.details["provider"] = provider
            raise
        return CloudProvider(provider, services)

    def get_zones(self, provider: str, service: str, region: str) -> list[str]:
        zones = self.store.get_zones(provider, service, region)
        if zones is None:
            raise CloudInfoError("zones not yet cached", provider=provider, region=region)
        return zones

    def get_regions(self, provider: str, service: str) -> dict[str, str]:
        regions = self.store.get_regions(provider, service)
        if regions is None:
            raise CloudInfoError("regions not yet cached", provider=provider, services=service)
        return regions

    def get_services(self, provider: str) -> list[Service]:
        services = self.store.get_services(provider)
        if services is None:
            raise CloudInfoError("services not yet cached", provider=provider)
        return services

    def get_product_details(self, provider: str, service: str, region: str) -> list[ProductDetails]:
        """Return the cached VMs of a region decorated with their spot prices."""
        vms = self.store.get_vm(provider, service, region)
        if vms is None:
            self.log.debug("VMs not yet cached")
            raise CloudInfoError(
                "VMs not yet cached", provider=provider, service=service, region=region
            )

        details = []
        for vm in vms:
            product = ProductDetails.from_vm(vm)
            price = self.store.get_price(provider, region, vm.type)
            if price is None:
                self.log.debug("price info not yet cached", {"instanceType": vm.type})
            else:
                product.spot_price.extend(
                    ZonePrice(zone, value) for zone, value in price.spot_price.items()
                )
            details.append(product)
        return details

    def get_status(self, provider: str) -> str:
        status = self.store.get_status(provider)
        if status is None:
            raise CloudInfoError("status not yet cached", provider=provider)
        return status

    def get_service_images(self, provider: str, service: str, region: str) -> list[Image]:
        images = self.store.get_image(provider, service, region)
        if images is None:
            raise CloudInfoError(
                "images not yet cached", provider=provider, service=service, region=region
            )
        return images

    def get_versions(self, provider: str, service: str, region: str) -> list[LocationVersion]:
        versions = self.store.get_version(provider, service, region)
        if versions is None:
            raise CloudInfoError(
                "versions not yet cached", provider=provider, service=service, region=region
            )
        return versions

    def get_continents(self) -> list[str]:
        """Return the continents regions are grouped into."""
        return [
            CONTINENT_ASIA,
            CONTINENT_AUSTRALIA,
            CONTINENT_EUROPE,
            CONTINENT_NORTH_AMERICA,
            CONTINENT_SOUTH_AMERICA,
        ]

    def get_continents_data(self, provider: str, service: str) -> dict[str, list[Region]]:
        """Return the cached regions of a service grouped by continent."""
        regions = self.store.get_regions(provider, service)
        if regions is None:
            raise CloudInfoError("regions not yet cached", provider=provider, services=service)
        continents: dict[str, list[Region]] = {}
        for region_id, name in regions.items():
            continents.setdefault(get_continent(region_id), []).append(Region(region_id, name))
        return continents


def _has_any(region: str, substrings: tuple[str, ...]) -> bool:
    return any(sub in region for sub in substrings)


def get_continent(region: str) -> str:
    """Categorize a region identifier by continent."""
    if _has_any(region, ("ap-southeast-2", "australia")):
        return CONTINENT_AUSTRALIA
    if _has_any(region, ("cn-", "ap-", "me-", "asia", "japan", "india", "korea")) or region.startswith(
        ("sgp", "blr", "uae")
    ):
        return CONTINENT_ASIA
    if _has_any(region, ("eu", "uk", "france", "switzerland", "germany", "norway")) or region.startswith(
        ("ams", "lon", "fra")
    ):
        return CONTINENT_EUROPE
    if _has_any(region, ("us", "ca-central-1", "canada", "northamerica")) or region.startswith(
        ("nyc", "sfo", "tor")
    ):
        return CONTINENT_NORTH_AMERICA
    if _has_any(region, ("southamerica", "brazil", "sa-")):
        return CONTINENT_SOUTH_AMERICA
    if _has_any(region, ("africa", "af-")):
        return CONTINENT_AFRICA
    return CONTINENT_UNKNOWN


def contains(items, s: str) -> bool:
    """Tell whether the sequence holds the string."""
    return s in items


def attributes(cpu: str, memory: str, ntw_perf_cat: str, vm_category: str) -> dict[str, str]:
    """Build the attribute map of a virtual machine type."""
    return {
        CPU: cpu,
        MEMORY: memory,
        "networkPerfCategory": ntw_perf_cat,
        "instanceTypeCategory": vm_category,
    }


def create_string(*args: str) -> str:
    """Concatenate the given strings."""
    return "".join(args)