# cloudinfo

Core building blocks for a service that serves information about cloud
providers: the services they offer, their regions and zones, virtual machine
types, on-demand and spot prices, images and Kubernetes versions. It has no
dependencies beyond the standard library.

## What is inside

- `cloudinfo.core`: the data types (`VMInfo`, `ProductDetails`, `Price`,
  `ZonePrice`, `Region`, `Image`, `LocationVersion`, `Service`,
  `CloudProvider`) and `CloudInfo`, which answers queries from a cache that
  implements the `CloudInfoStore` protocol. `get_continent` sorts a region
  identifier into a continent; `CloudInfo.get_continents_data` groups the
  cached regions of a service that way. `CloudInfoer` is the protocol a
  provider specific collector implements.
- `cloudinfo.instance_type`: `InstanceTypeService`, which lists the instance
  types of a region, one entry per zone, filtered by price, spot price, spot
  availability, CPU, memory, GPU, network category (`NetworkCategory`) and
  category (`InstanceTypeCategory`). `InMemoryInstanceTypeStore` is a simple
  store for tests and demos. Invalid queries raise
  `InstanceTypeQueryValidationError`.
- `cloudinfo.provider`: `ProviderService` lists providers with their display
  names; `InMemoryProviderStore` holds them in memory.
- `cloudinfo.driver`: endpoint functions (`make_endpoints`,
  `make_provider_endpoints`, `make_region_endpoints`,
  `make_service_endpoints`, ...) that wrap the services and turn business
  errors into responses whose `failed()` returns the error; `log_endpoint`
  is a middleware that logs the start and end of each request.
- `cloudinfo.adapter`: a small structured `Logger` that adds fields and
  context to a sink. `RecordingLogger` keeps events in memory and
  `new_noop_logger()` discards them.
- `cloudinfo.executor`: `PeriodicExecutor` runs a task right away and then
  every `interval` seconds on a background thread until a `threading.Event`
  is set.
- `cloudinfo.distribution`: the `Config` dataclass saying which PKE
  distributions are enabled per provider.
- `cloudinfo.alibaba.mappers`: `map_category` maps an Alibaba instance type
  name to a generic category and `AlibabaNetworkMapper.map_network_perf` maps
  a bandwidth such as `"10.0 Gbit/s"` to a network performance category. Both
  raise `MappingError` for unknown values.

## Install

    pip install .

## Examples

Regions and cached information:

    from cloudinfo.adapter import new_noop_logger
    from cloudinfo.core import CloudInfo, get_continent

    print(get_continent("eu-west-1"))   # Europe

    info = CloudInfo(["amazon"], store, new_noop_logger())
    zones = info.get_zones("amazon", "compute", "eu-west-1")

`store` is any object with the `CloudInfoStore` methods, each returning `None`
when nothing is cached. A value that is not yet cached raises `CloudInfoError`.

Listing providers:

    from cloudinfo.core import CloudProvider
    from cloudinfo.provider import InMemoryProviderStore, ProviderService

    store = InMemoryProviderStore([CloudProvider("amazon"), CloudProvider("google")])
    for p in ProviderService(store).list_providers():
        print(p.code, p.name)   # amazon Amazon Web Services, google Google Cloud

Querying instance types:

    from cloudinfo.core import ProductDetails
    from cloudinfo.instance_type import (
        FloatFilter, InMemoryInstanceTypeStore, InstanceTypeQuery,
        InstanceTypeQueryFilter, InstanceTypeService,
    )

    product = ProductDetails(type="m5.large", cpus=2, mem=8, ntw_perf_cat="high",
                             on_demand_price=0.1, zones=["eu-west-1a"])
    store = InMemoryInstanceTypeStore({"amazon": {"compute": {"eu-west-1": [product]}}})
    query = InstanceTypeQuery(region="eu-west-1",
                              filter=InstanceTypeQueryFilter(cpu=FloatFilter(gte=2)))
    for it in InstanceTypeService(store).query("amazon", "compute", query):
        print(it.name, it.zone, it.network_category)

Alibaba mappings:

    from cloudinfo.alibaba.mappers import AlibabaNetworkMapper, map_category

    map_category("ecs.g5.large")                              # "General purpose"
    AlibabaNetworkMapper().map_network_perf("10.0 Gbit/s")    # "high"

## What this package does not do

- It does not fetch anything from cloud provider APIs. There is no client for
  Alibaba Cloud or any other provider; only the Alibaba category and network
  mappings are included.
- It has no persistent cache: `CloudInfoStore` is a protocol, and the only
  stores provided keep data in memory.
- It collects no metrics and exports nothing for monitoring.
- It runs no HTTP or GraphQL server and installs no command; the endpoint
  functions in `cloudinfo.driver` are meant to be mounted by a transport of
  your choosing.

## Tests

    pip install .[test]
    pytest