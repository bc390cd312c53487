import pytest

from chartbroker.core.adapters.registry import RegistryClient
from chartbroker.core.errors import FetchError, NotFoundError


class _Fetcher:
    def __init__(self, documents: dict[str, object]):
        self.documents = documents
        self.urls: list[str] = []

    def fetch_object(self, url: str):
        self.urls.append(url)
        doc = self.documents.get(url)
        if isinstance(doc, Exception):
            raise doc
        return doc


def test_list_services_parses_catalog(registry_payload):
    fetcher = _Fetcher({"http://registry:8080/services": registry_payload})
    client = RegistryClient("registry", 8080, fetcher)

    services = client.list_services()

    assert fetcher.urls == ["http://registry:8080/services"]
    assert [s.name for s in services] == ["mysql", "redis"]
    assert services[0].bindable is True
    assert services[1].bindable is False
    assert services[0].plans[1].metadata == {"instanceType": "gs://charts/mysql-large"}


def test_list_services_rejects_non_list_payload():
    client = RegistryClient("r", 1, _Fetcher({"http://r:1/services": {"services": []}}))

    with pytest.raises(FetchError, match="not a list"):
        client.list_services()


def test_list_services_rejects_service_without_id():
    client = RegistryClient("r", 1, _Fetcher({"http://r:1/services": [{"name": "x"}]}))

    with pytest.raises(FetchError, match="Malformed"):
        client.list_services()


def test_get_service_uses_service_url(registry_payload):
    url = "http://r:1/services/svc-redis"
    fetcher = _Fetcher({url: registry_payload[1]})

    service = RegistryClient("r", 1, fetcher).get_service("svc-redis")

    assert service.id == "svc-redis"
    assert service.find_plan("plan-default") is not None
    assert service.find_plan("nope") is None


def test_get_service_maps_404_to_not_found():
    url = "http://r:1/services/gone"
    fetcher = _Fetcher({url: FetchError("404", url=url, status_code=404)})

    with pytest.raises(NotFoundError, match="gone"):
        RegistryClient("r", 1, fetcher).get_service("gone")


def test_get_service_keeps_other_fetch_errors():
    url = "http://r:1/services/s"
    fetcher = _Fetcher({url: FetchError("500", url=url, status_code=500)})

    with pytest.raises(FetchError) as excinfo:
        RegistryClient("r", 1, fetcher).get_service("s")

    assert not isinstance(excinfo.value, NotFoundError)
