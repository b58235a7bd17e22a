"""Querying instance types of a provider region, with field filters."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Union

from cloudinfo.core import CloudInfoError, ProductDetails

CATEGORY_GENERAL = "General purpose"
CATEGORY_COMPUTE = "Compute optimized"
CATEGORY_MEMORY = "Memory optimized"
CATEGORY_STORAGE = "Storage optimized"


class NetworkCategory(str, enum.Enum):
    """Network performance category of an instance type."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"

    def __str__(self) -> str:
        return self.value


class InstanceTypeCategory(str, enum.Enum):
    """General category of an instance type."""

    GENERAL_PURPOSE = "GENERAL_PURPOSE"
    MEMORY_OPTIMIZED = "MEMORY_OPTIMIZED"
    STORAGE_OPTIMIZED = "STORAGE_OPTIMIZED"
    COMPUTE_OPTIMIZED = "COMPUTE_OPTIMIZED"

    def __str__(self) -> str:
        return self.value


_CATEGORY_MAP = {
    InstanceTypeCategory.GENERAL_PURPOSE: CATEGORY_GENERAL,
    InstanceTypeCategory.COMPUTE_OPTIMIZED: CATEGORY_COMPUTE,
    InstanceTypeCategory.STORAGE_OPTIMIZED: CATEGORY_STORAGE,
    InstanceTypeCategory.MEMORY_OPTIMIZED: CATEGORY_MEMORY,
}

_CATEGORY_REVERSE_MAP = {value: key for key, value in _CATEGORY_MAP.items()}


@dataclass(frozen=True)
class InstanceType:
    """A single instance type in a region and zone."""

    name: str
    region: str
    zone: str
    price: float
    spot_price: float
    cpu: float
    memory: float
    gpu: float
    network_category: Union[NetworkCategory, str]
    category: Optional[InstanceTypeCategory]


@dataclass
class FloatFilter:
    """Comparison operators for a numeric field."""

    eq: Optional[float] = None
    ne: Optional[float] = None
    lt: Optional[float] = None
    lte: Optional[float] = None
    gt: Optional[float] = None
    gte: Optional[float] = None
    in_: Optional[Sequence[float]] = None
    nin: Optional[Sequence[float]] = None

    def matches(self, value: float) -> bool:
        """Tell whether the value satisfies every operator that is set."""
        checks = (
            (self.eq, lambda bound: value == bound),
            (self.ne, lambda bound: value != bound),
            (self.lt, lambda bound: value < bound),
            (self.lte, lambda bound: value <= bound),
            (self.gt, lambda bound: value > bound),
            (self.gte, lambda bound: value >= bound),
            (self.in_, lambda bound: value in bound),
            (self.nin, lambda bound: value not in bound),
        )
        return all(check(bound) for bound, check in checks if bound is not None)


@dataclass
class NetworkCategoryFilter:
    """Query operators for the network category field."""

    eq: Optional[NetworkCategory] = None
    ne: Optional[NetworkCategory] = None
    in_: Optional[Sequence[NetworkCategory]] = None
    nin: Optional[Sequence[NetworkCategory]] = None


@dataclass
class InstanceTypeCategoryFilter:
    """Query operators for the instance type category field."""

    eq: Optional[InstanceTypeCategory] = None
    ne: Optional[InstanceTypeCategory] = None
    in_: Optional[Sequence[InstanceTypeCategory]] = None
    nin: Optional[Sequence[InstanceTypeCategory]] = None


@dataclass
class InstanceTypeQueryFilter:
    """Filters instance types by their fields."""

    price: Optional[FloatFilter] = None
    spot_price: Optional[FloatFilter] = None
    spot: Optional[bool] = None
    cpu: Optional[FloatFilter] = None
    memory: Optional[FloatFilter] = None
    gpu: Optional[FloatFilter] = None
    network_category: Optional[NetworkCategoryFilter] = None
    category: Optional[InstanceTypeCategoryFilter] = None


@dataclass
class InstanceTypeQuery:
    """Input parameters of an instance type query."""

    region: Optional[str] = None
    zone: Optional[str] = None
    filter: Optional[InstanceTypeQueryFilter] = None


class InstanceTypeQueryValidationError(ValueError):
    """Raised when an instance type query is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def is_business_error(self) -> bool:
        """Tell the transport layer to report this error to the client."""
        return True


class InstanceTypeStore(Protocol):
    """Retrieves instance types from a provider and region."""

    def get_product_details(self, provider: str, service: str, region: str) -> list[ProductDetails]: ...

    def get_zones(self, provider: str, service: str, region: str) -> list[str]: ...


def _zone_spot_price(product: ProductDetails, zone: str) -> float:
    return next((zp.price for zp in product.spot_price if zp.zone == zone), 0.0)


def _match_network_category(value: str, flt: NetworkCategoryFilter) -> bool:
    if flt.eq is not None and value != flt.eq.value.lower():
        return False
    if flt.ne is not None and value == flt.ne.value.lower():
        return False
    if flt.in_ is not None and not any(value == v.value.lower() for v in flt.in_):
        return False
    # The exclusion check is made against the inclusion list.
    if flt.nin is not None and any(value == v.value.lower() for v in flt.in_ or ()):
        return False
    return True


def _match_category(value: str, flt: InstanceTypeCategoryFilter) -> bool:
    if flt.eq is not None and value != _CATEGORY_MAP[flt.eq]:
        return False
    if flt.ne is not None and value == _CATEGORY_MAP[flt.ne]:
        return False
    if flt.in_ is not None and not any(value == _CATEGORY_MAP[v] for v in flt.in_):
        return False
    # The exclusion check is made against the inclusion list.
    if flt.nin is not None and any(value == _CATEGORY_MAP[v] for v in flt.in_ or ()):
        return False
    return True


def _matches(product: ProductDetails, zone: str, flt: InstanceTypeQueryFilter) -> bool:
    numeric = (
        (flt.price, product.on_demand_price),
        (flt.cpu, product.cpus),
        (flt.memory, product.mem),
        (flt.gpu, product.gpus),
    )
    if any(f is not None and not f.matches(value) for f, value in numeric):
        return False
    if flt.network_category is not None and not _match_network_category(
        product.ntw_perf_cat, flt.network_category
    ):
        return False
    if flt.category is not None and not _match_category(product.category, flt.category):
        return False
    if flt.spot_price is not None or flt.spot is not None:
        spot_price = _zone_spot_price(product, zone)
        if flt.spot is not None and flt.spot != (spot_price != 0.0):
            return False
        if flt.spot_price is not None and not flt.spot_price.matches(spot_price):
            return False
    return True


def _network_category(value: str) -> Union[NetworkCategory, str]:
    upper = value.upper()
    try:
        return NetworkCategory(upper)
    except ValueError:
        return upper


def _transform(product: ProductDetails, region: str, zone: str) -> InstanceType:
    return InstanceType(
        name=product.type,
        region=region,
        zone=zone,
        price=product.on_demand_price,
        spot_price=_zone_spot_price(product, zone),
        cpu=product.cpus,
        memory=product.mem,
        gpu=product.gpus,
        network_category=_network_category(product.ntw_perf_cat),
        category=_CATEGORY_REVERSE_MAP.get(product.category),
    )


class InstanceTypeService:
    """Filters instance types according to a query."""

    def __init__(self, store: InstanceTypeStore) -> None:
        self.store = store

    def query(self, provider: str, service: str, query: InstanceTypeQuery) -> list[InstanceType]:
        """Return the instance types, one per zone, that match the query."""
        if not provider:
            raise InstanceTypeQueryValidationError("provider field must not be empty")
        if not service:
            raise InstanceTypeQueryValidationError("service field must not be empty")
        if not query.region:
            raise InstanceTypeQueryValidationError("region field must not be empty")
        region = query.region

        try:
            products = self.store.get_product_details(provider, service, region)
        except Exception as err:
            raise CloudInfoError(f"failed to retrieve product details: {err}") from err

        result: list[InstanceType] = []
        for product in products or ():
            zones = list(product.zones)
            if not zones:
                try:
                    zones = list(self.store.get_zones(provider, service, region) or ())
                except Exception as err:
                    raise CloudInfoError(f"failed to retrieve zones: {err}") from err
            if not zones:
                zones = [""]

            for zone in zones:
                if query.filter is not None and not _matches(product, zone, query.filter):
                    continue
                result.append(_transform(product, region, zone))
        return result


class InMemoryInstanceTypeStore:
    """Keeps products in memory, keyed by provider, service and region; for tests and demos."""

    def __init__(
        self, products: Optional[dict[str, dict[str, dict[str, list[ProductDetails]]]]] = None
    ) -> None:
        self.products = products if products is not None else {}

    def get_product_details(self, provider: str, service: str, region: str) -> list[ProductDetails]:
        return self.products.get(provider, {}).get(service, {}).get(region, [])

    def get_zones(self, provider: str, service: str, region: str) -> list[str]:
        return []