"""Request/response endpoints that expose the cloud info services to a transport."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from cloudinfo.adapter import Logger
from cloudinfo.instance_type import (
    InstanceType,
    InstanceTypeQuery,
    InstanceTypeQueryFilter,
)
from cloudinfo.provider import Provider

LOG_ENDPOINT_DEFAULT_NAME = "gokit/endpoint"

OPERATION_PROVIDER_LIST_PROVIDERS = "cloudinfo.Provider.ListProviders"
OPERATION_REGION_LIST_REGIONS = "cloudinfo.Region.ListRegions"
OPERATION_REGION_LIST_ZONES = "cloudinfo.Region.ListZones"
OPERATION_SERVICE_LIST_SERVICES = "cloudinfo.Service.ListServices"

Endpoint = Callable[[Any, Any], Any]
Middleware = Callable[[Endpoint], Endpoint]


class InstanceTypeService(Protocol):
    """Filters instance types according to a query."""

    def query(self, provider: str, service: str, query: InstanceTypeQuery) -> list[InstanceType]: ...


class ProviderService(Protocol):
    """Returns the list of supported providers."""

    def list_providers(self) -> list[Provider]: ...


class RegionService(Protocol):
    """Provides access to regions and zones supported by a service."""

    def list_regions(self, provider: str, service: str) -> list[Any]: ...

    def list_zones(self, provider: str, service: str, region: str) -> list[Any]: ...


class ServiceService(Protocol):
    """Returns the list of services supported by a provider."""

    def list_services(self, provider: str) -> list[Any]: ...


def _root_cause(err: BaseException) -> BaseException:
    while err.__cause__ is not None:
        err = err.__cause__
    return err


def _is_business_error(err: BaseException) -> bool:
    check = getattr(_root_cause(err), "is_business_error", None)
    return callable(check) and bool(check())


def log_endpoint(name: str, logger: Logger) -> Middleware:
    """Return a middleware that logs the start and end of every request."""
    name = name or LOG_ENDPOINT_DEFAULT_NAME

    def middleware(next_endpoint: Endpoint) -> Endpoint:
        def endpoint(ctx: Any, request: Any) -> Any:
            log = logger.with_context(ctx)
            log.debug("processing request", {"endpoint": name})
            begin = time.monotonic()
            try:
                return next_endpoint(ctx, request)
            finally:
                log.debug(
                    "processing request finished",
                    {"endpoint": name, "took": time.monotonic() - begin},
                )

        return endpoint

    return middleware


@dataclass
class InstanceTypeQueryRequest:
    provider: str
    service: str
    region: Optional[str] = None
    zone: Optional[str] = None
    filter: Optional[InstanceTypeQueryFilter] = None


@dataclass
class InstanceTypeQueryResponse:
    instance_types: list[InstanceType] = field(default_factory=list)
    err: Optional[BaseException] = None

    def failed(self) -> Optional[BaseException]:
        """Return the business error carried by the response, if any."""
        return self.err


@dataclass
class ListProvidersResponse:
    providers: list[Provider] = field(default_factory=list)
    err: Optional[BaseException] = None

    def failed(self) -> Optional[BaseException]:
        """Return the business error carried by the response, if any."""
        return self.err


@dataclass
class ListRegionsRequest:
    provider: str
    service: str


@dataclass
class ListRegionsResponse:
    regions: list[Any] = field(default_factory=list)
    err: Optional[BaseException] = None

    def failed(self) -> Optional[BaseException]:
        """Return the business error carried by the response, if any."""
        return self.err


@dataclass
class ListZonesRequest:
    provider: str
    service: str
    region: str


@dataclass
class ListZonesResponse:
    zones: list[Any] = field(default_factory=list)
    err: Optional[BaseException] = None

    def failed(self) -> Optional[BaseException]:
        """Return the business error carried by the response, if any."""
        return self.err


@dataclass
class ListServicesRequest:
    provider: str


@dataclass
class ListServicesResponse:
    services: list[Any] = field(default_factory=list)
    err: Optional[BaseException] = None

    def failed(self) -> Optional[BaseException]:
        """Return the business error carried by the response, if any."""
        return self.err


@dataclass
class Endpoints:
    """Endpoints of the instance type service."""

    instance_type_query: Endpoint


@dataclass
class ProviderEndpoints:
    """Endpoints of the provider service."""

    list_providers: Endpoint


@dataclass
class RegionEndpoints:
    """Endpoints of the region service."""

    list_regions: Endpoint
    list_zones: Endpoint


@dataclass
class ServiceEndpoints:
    """Endpoints of the service service."""

    list_services: Endpoint


def make_instance_type_query_endpoint(service: InstanceTypeService) -> Endpoint:
    """Return an endpoint running instance type queries on the service."""

    def endpoint(ctx: Any, request: InstanceTypeQueryRequest) -> InstanceTypeQueryResponse:
        query = InstanceTypeQuery(region=request.region, zone=request.zone, filter=request.filter)
        try:
            instance_types = service.query(request.provider, request.service, query)
        except Exception as err:
            if _is_business_error(err):
                return InstanceTypeQueryResponse(err=err)
            raise
        return InstanceTypeQueryResponse(instance_types=instance_types)

    return endpoint


def make_endpoints(service: InstanceTypeService) -> Endpoints:
    """Collect the endpoints of an instance type service."""
    return Endpoints(instance_type_query=make_instance_type_query_endpoint(service))


def make_list_providers_endpoint(service: ProviderService) -> Endpoint:
    """Return an endpoint listing the providers of the service."""

    def endpoint(ctx: Any, request: Any) -> ListProvidersResponse:
        try:
            providers = service.list_providers()
        except Exception as err:
            if _is_business_error(err):
                return ListProvidersResponse(err=err)
            raise
        return ListProvidersResponse(providers=providers)

    return endpoint


def make_provider_endpoints(service: ProviderService, logger: Logger) -> ProviderEndpoints:
    """Collect the logged endpoints of a provider service."""
    return ProviderEndpoints(
        list_providers=log_endpoint(OPERATION_PROVIDER_LIST_PROVIDERS, logger)(
            make_list_providers_endpoint(service)
        )
    )


def make_list_regions_endpoint(service: RegionService) -> Endpoint:
    """Return an endpoint listing the regions of a provider service."""

    def endpoint(ctx: Any, request: ListRegionsRequest) -> Any:
        try:
            regions = service.list_regions(request.provider, request.service)
        except Exception as err:
            if _is_business_error(err):
                return ListProvidersResponse(err=err)
            raise
        return ListRegionsResponse(regions=regions)

    return endpoint


def make_list_zones_endpoint(service: RegionService) -> Endpoint:
    """Return an endpoint listing the zones of a region."""

    def endpoint(ctx: Any, request: ListZonesRequest) -> Any:
        try:
            zones = service.list_zones(request.provider, request.service, request.region)
        except Exception as err:
            if _is_business_error(err):
                return ListProvidersResponse(err=err)
            raise
        return ListZonesResponse(zones=zones)

    return endpoint


def make_region_endpoints(service: RegionService, logger: Logger) -> RegionEndpoints:
    """Collect the logged endpoints of a region service."""
    return RegionEndpoints(
        list_regions=log_endpoint(OPERATION_REGION_LIST_REGIONS, logger)(
            make_list_regions_endpoint(service)
        ),
        list_zones=log_endpoint(OPERATION_REGION_LIST_ZONES, logger)(
            make_list_zones_endpoint(service)
        ),
    )


def make_list_services_endpoint(service: ServiceService) -> Endpoint:
    """Return an endpoint listing the services of a provider."""

    def endpoint(ctx: Any, request: ListServicesRequest) -> Any:
        try:
            services = service.list_services(request.provider)
        except Exception as err:
            if _is_business_error(err):
                return ListProvidersResponse(err=err)
            raise
        return ListServicesResponse(services=services)

    return endpoint


def make_service_endpoints(service: ServiceService, logger: Logger) -> ServiceEndpoints:
    """Collect the logged endpoints of a service service."""
    return ServiceEndpoints(
        list_services=log_endpoint(OPERATION_SERVICE_LIST_SERVICES, logger)(
            make_list_services_endpoint(service)
        )
    )