import pytest

from cloudinfo.adapter import Level, RecordingLogger, new_logger, new_noop_logger
from cloudinfo.core import (
    CloudInfo,
    CloudInfoError,
    CloudProvider,
    Image,
    LocationVersion,
    Price,
    ProductDetails,
    Region,
    Service,
    VMInfo,
    ZonePrice,
    attributes,
    contains,
    create_string,
    get_continent,
)

NOT_CACHED = "error"


class DummyCloudInfoStore:
    def __init__(self, tc_id=""):
        self.tc_id = tc_id

    def _cached(self, value):
        return None if self.tc_id == NOT_CACHED else value

    def get_regions(self, provider, service):
        return self._cached(
            {
                "US West (Oregon)": "us-west-2",
                "EU (Frankfurt)": "eu-central-1",
                "EU (Ireland)": "eu-west-1",
            }
        )

    def get_zones(self, provider, service, region):
        return self._cached(["eu-central-1a", "eu-central-1b"])

    def get_image(self, provider, service, region):
        return self._cached(
            [
                Image("ami-12345676", False, "1.10"),
                Image("ami-3246433", True, "1.11"),
            ]
        )

    def get_version(self, provider, service, region):
        return self._cached([LocationVersion(versions=["1.10", "1.11"])])

    def get_status(self, provider):
        return self._cached("dummyStatus")

    def get_services(self, provider):
        return self._cached([Service("dummy1", False), Service("dummy2", False)])

    def get_vm(self, provider, service, region):
        return self._cached(
            [
                VMInfo(type="small", cpus=2, mem=4, zones=["z1"]),
                VMInfo(type="large", cpus=8, mem=32),
            ]
        )

    def get_price(self, provider, region, instance_type):
        if instance_type == "small":
            return Price(on_demand_price=0.1, spot_price={"z1": 0.03, "z2": 0.04})
        return None


class RegionStore(DummyCloudInfoStore):
    def get_regions(self, provider, service):
        return {
            "eu-central-1": "EU (Frankfurt)",
            "us-west-2": "US West (Oregon)",
            "ap-southeast-2": "Asia Pacific (Sydney)",
        }


def make_info(store=None, providers=()):
    return CloudInfo(list(providers), store or DummyCloudInfoStore(), new_noop_logger())


def test_new_cloud_info_success():
    info = CloudInfo([""], DummyCloudInfoStore(), new_noop_logger())
    assert info.providers == [""]


def test_new_cloud_info_fails_on_nil_providers():
    with pytest.raises(CloudInfoError) as exc:
        CloudInfo(None, DummyCloudInfoStore(), new_noop_logger())
    assert str(exc.value) == "could not create product infoer"


def test_new_cloud_info_fails_on_nil_store():
    with pytest.raises(CloudInfoError, match="could not create product infoer"):
        CloudInfo([], None, new_noop_logger())


def test_get_regions():
    assert make_info().get_regions("dummyProvider", "dummyService") == {
        "US West (Oregon)": "us-west-2",
        "EU (Frankfurt)": "eu-central-1",
        "EU (Ireland)": "eu-west-1",
    }


def test_get_regions_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_regions("dummyProvider", "dummyService")
    assert str(exc.value) == "regions not yet cached"
    assert exc.value.details == {"provider": "dummyProvider", "services": "dummyService"}


def test_get_versions():
    versions = make_info().get_versions("dummyProvider", "dummyService", "dummyRegion")
    assert len(versions) == 1


def test_get_versions_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_versions("p", "s", "r")
    assert str(exc.value) == "versions not yet cached"


def test_get_service_images():
    images = make_info().get_service_images("dummyProvider", "dummyService", "dummyRegion")
    assert len(images) == 2


def test_get_service_images_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_service_images("p", "s", "r")
    assert str(exc.value) == "images not yet cached"


def test_get_zones():
    assert make_info().get_zones("p", "s", "r") == ["eu-central-1a", "eu-central-1b"]


def test_get_zones_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_zones("p", "s", "r")
    assert str(exc.value) == "zones not yet cached"


def test_get_services():
    assert len(make_info().get_services("dummyProvider")) == 2


def test_get_services_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_services("dummyProvider")
    assert str(exc.value) == "services not yet cached"


def test_get_status():
    assert make_info().get_status("dummyProvider") == "dummyStatus"


def test_get_status_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_status("dummyProvider")
    assert str(exc.value) == "status not yet cached"


def test_get_provider_unsupported():
    with pytest.raises(CloudInfoError) as exc:
        make_info(providers=["amazon"]).get_provider("google")
    assert str(exc.value) == "unsupported provider"
    assert exc.value.details["provider"] == "google"


def test_get_providers_decorated_with_services():
    providers = make_info(providers=["amazon", "google"]).get_providers()
    assert providers == [
        CloudProvider("amazon", [Service("dummy1"), Service("dummy2")]),
        CloudProvider("google", [Service("dummy1"), Service("dummy2")]),
    ]


def test_get_provider_services_not_cached_adds_provider_detail():
    info = make_info(DummyCloudInfoStore(NOT_CACHED), providers=["amazon"])
    with pytest.raises(CloudInfoError) as exc:
        info.get_provider("amazon")
    assert str(exc.value) == "services not yet cached"
    assert exc.value.details["provider"] == "amazon"


def test_get_product_details_spot_prices():
    sink = RecordingLogger()
    info = CloudInfo([], DummyCloudInfoStore(), new_logger(sink))
    details = info.get_product_details("p", "s", "r")
    assert [d.type for d in details] == ["small", "large"]
    assert details[0].spot_price == [ZonePrice("z1", 0.03), ZonePrice("z2", 0.04)]
    assert details[0].cpus == 2
    assert details[1].spot_price == []
    event = sink.last_event()
    assert event.level == Level.DEBUG
    assert event.line == "price info not yet cached"
    assert event.fields == {"component": "cloudInfo", "instanceType": "large"}


def test_get_product_details_not_cached():
    with pytest.raises(CloudInfoError) as exc:
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_product_details("p", "s", "r")
    assert str(exc.value) == "VMs not yet cached"


def test_product_details_from_vm_copies_fields():
    vm = VMInfo(type="t", category="General purpose", on_demand_price=0.5, cpus=1, mem=2, zones=["a"])
    pd = ProductDetails.from_vm(vm)
    assert (pd.type, pd.category, pd.on_demand_price, pd.cpus, pd.mem, pd.zones) == (
        "t", "General purpose", 0.5, 1, 2, ["a"],
    )
    assert pd.spot_price == []


def test_get_continents():
    assert make_info().get_continents() == [
        "Asia", "Australia", "Europe", "North America", "South America",
    ]


def test_get_continents_data():
    data = make_info(RegionStore()).get_continents_data("p", "s")
    assert data == {
        "Europe": [Region("eu-central-1", "EU (Frankfurt)")],
        "North America": [Region("us-west-2", "US West (Oregon)")],
        "Australia": [Region("ap-southeast-2", "Asia Pacific (Sydney)")],
    }


def test_get_continents_data_not_cached():
    with pytest.raises(CloudInfoError, match="regions not yet cached"):
        make_info(DummyCloudInfoStore(NOT_CACHED)).get_continents_data("p", "s")


@pytest.mark.parametrize(
    "region, continent",
    [
        ("ap-southeast-2", "Australia"),
        ("australiaeast", "Australia"),
        ("ap-northeast-1", "Asia"),
        ("cn-beijing", "Asia"),
        ("me-east-1", "Asia"),
        ("sgp1", "Asia"),
        ("eu-central-1", "Europe"),
        ("ams3", "Europe"),
        ("us-west-2", "North America"),
        ("nyc1", "North America"),
        ("ca-central-1", "North America"),
        ("sa-east-1", "South America"),
        ("brazilsouth", "South America"),
        ("af-south-1", "Africa"),
        ("xyz", "unknown"),
    ],
)
def test_get_continent(region, continent):
    assert get_continent(region) == continent


def test_contains():
    assert contains(["a", "b"], "b") is True
    assert contains(["a", "b"], "c") is False


def test_attributes():
    assert attributes("2", "4", "high", "General purpose") == {
        "cpu": "2",
        "memory": "4",
        "networkPerfCategory": "high",
        "instanceTypeCategory": "General purpose",
    }


def test_create_string():
    assert create_string("ModuleList.", "1", ".Config") == "ModuleList.1.Config"
    assert create_string() == ""