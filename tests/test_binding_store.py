import pytest

from chartbroker.core.errors import ConversionError, StoreError, UnsupportedOperationError
from chartbroker.core.servicecatalog import (
    Binding,
    BindingCondition,
    BindingSpec,
    BindingStatus,
    ObjectReference,
)
from chartbroker.core.storage.bindings import BindingStore
from chartbroker.core.storage.unstructured import binding_to_unstructured, unstructured_to_binding
from chartbroker.core.storage.watch import FULL_API_VERSION, SERVICE_BINDING_KIND, ResourceType


class _ResourceClient:
    def __init__(self, items=None, fail: bool = False):
        self.items = items or []
        self.fail = fail
        self.created: list[dict] = []
        self.updated: list[dict] = []

    def create(self, obj):
        if self.fail:
            raise RuntimeError("apiserver said no")
        self.created.append(obj)
        return {**obj, "metadata": {**obj["metadata"], "uid": "server-uid"}}

    def update(self, obj):
        if self.fail:
            raise RuntimeError("conflict")
        self.updated.append(obj)
        return obj

    def list(self):
        if self.fail:
            raise RuntimeError("forbidden")
        return self.items

    def get(self, name):
        raise AssertionError("get must not be called")

    def delete(self, name):
        raise AssertionError("delete must not be called")


class _Watcher:
    def __init__(self, client: _ResourceClient):
        self.client = client
        self.requests: list[tuple[ResourceType, str]] = []

    def get_resource_client(self, resource_type, namespace):
        self.requests.append((resource_type, namespace))
        return self.client


def _binding(name: str = "b1") -> Binding:
    return Binding(
        name=name,
        spec=BindingSpec(
            instance_ref=ObjectReference(name="cf-i-1234"),
            parameters={"ttl": 30},
            secret_name="b1-secret",
            os_binding_id="bind-guid",
        ),
    )


def test_create_stamps_type_and_name_and_returns_input():
    client = _ResourceClient()
    watcher = _Watcher(client)
    binding = _binding()

    ret = BindingStore(watcher, "team-a").create(binding)

    assert ret is binding
    assert ret.uid == ""
    assert binding.kind == SERVICE_BINDING_KIND
    assert binding.api_version == FULL_API_VERSION
    assert watcher.requests == [(ResourceType.SERVICE_BINDING, "team-a")]
    obj = client.created[0]
    assert obj["kind"] == "ServiceBinding"
    assert obj["apiVersion"] == "catalog.k8s.io/v1alpha1"
    assert obj["metadata"]["name"] == "b1"
    assert obj["spec"]["instanceRef"] == {"name": "cf-i-1234"}
    assert obj["spec"]["parameters"] == {"ttl": 30}


def test_update_uses_adapter_namespace():
    client = _ResourceClient()
    watcher = _Watcher(client)

    ret = BindingStore(watcher, "team-b").update(_binding("b2"))

    assert ret.name == "b2"
    assert watcher.requests == [(ResourceType.SERVICE_BINDING, "team-b")]
    assert client.updated[0]["metadata"]["name"] == "b2"


@pytest.mark.parametrize("op", ["create", "update"])
def test_unserializable_binding_raises_conversion_error(op: str):
    client = _ResourceClient()
    binding = _binding()
    binding.spec.parameters = {"handle": object()}

    with pytest.raises(ConversionError):
        getattr(BindingStore(_Watcher(client), "ns"), op)(binding)

    assert client.created == client.updated == []


@pytest.mark.parametrize("op", ["create", "update"])
def test_client_failure_raises_store_error(op: str):
    with pytest.raises(StoreError):
        getattr(BindingStore(_Watcher(_ResourceClient(fail=True)), "ns"), op)(_binding())


def test_list_converts_every_item():
    items = [
        binding_to_unstructured(_binding("b1")),
        {"metadata": {"name": "b2", "namespace": "ns"}, "status": {"conditions": [{"type": "Ready", "status": "True"}]}},
    ]

    bindings = BindingStore(_Watcher(_ResourceClient(items)), "ns").list()

    assert [b.name for b in bindings] == ["b1", "b2"]
    assert bindings[0].spec.secret_name == "b1-secret"
    assert bindings[1].status.conditions == [BindingCondition(type="Ready", status="True")]


def test_list_is_all_or_nothing_on_conversion_failure():
    items = [binding_to_unstructured(_binding("ok")), {"metadata": {}}]

    with pytest.raises(ConversionError):
        BindingStore(_Watcher(_ResourceClient(items)), "ns").list()


def test_list_client_failure_raises_store_error():
    with pytest.raises(StoreError, match="forbidden"):
        BindingStore(_Watcher(_ResourceClient(fail=True)), "ns").list()


@pytest.mark.parametrize("name", ["", "b1", "anything"])
def test_get_and_delete_are_unsupported(name: str):
    store = BindingStore(_Watcher(_ResourceClient()), "ns")

    with pytest.raises(UnsupportedOperationError):
        store.get(name)
    with pytest.raises(NotImplementedError):
        store.delete(name)


def test_unstructured_round_trip_keeps_fields():
    binding = _binding()
    binding.kind = SERVICE_BINDING_KIND
    binding.api_version = FULL_API_VERSION
    binding.labels = {"app": "web"}
    binding.status = BindingStatus(
        conditions=[BindingCondition(type="Ready", status="False", reason="Pending")]
    )

    assert unstructured_to_binding(binding_to_unstructured(binding)) == binding


@pytest.mark.parametrize(
    "obj",
    [
        None,
        "not-an-object",
        {"metadata": "oops"},
        {"metadata": {"name": "b"}, "spec": {"parameters": [1, 2]}},
        {"metadata": {"name": "b"}, "status": {"conditions": [{"status": "True"}]}},
    ],
)
def test_unstructured_to_binding_rejects_malformed_objects(obj):
    with pytest.raises(ConversionError):
        unstructured_to_binding(obj)


def test_unstructured_to_binding_reads_null_strings_as_empty():
    obj = {
        "apiVersion": None,
        "metadata": {"name": "b", "namespace": None, "uid": None},
        "spec": {"instanceRef": {"name": None}, "secretName": None, "osbGuid": None},
        "status": {"conditions": [{"type": "Ready", "status": "True", "reason": None}]},
    }

    binding = unstructured_to_binding(obj)

    assert (binding.namespace, binding.uid, binding.api_version) == ("", "", "")
    assert binding.spec.instance_ref.name == ""
    assert (binding.spec.secret_name, binding.spec.os_binding_id) == ("", "")
    assert binding.status.conditions[0].reason == ""


def test_empty_parameters_survive_round_trip():
    binding = _binding()
    binding.spec.parameters = {}

    obj = binding_to_unstructured(binding)

    assert obj["spec"]["parameters"] == {}
    assert unstructured_to_binding(obj).spec.parameters == {}


def test_unset_parameters_are_omitted():
    binding = _binding()
    binding.spec.parameters = None

    assert "parameters" not in binding_to_unstructured(binding)["spec"]


@pytest.mark.parametrize("field, value", [("labels", None), ("spec", None), ("status", "oops")])
def test_malformed_binding_raises_conversion_error(field: str, value):
    binding = _binding()
    setattr(binding, field, value)

    with pytest.raises(ConversionError):
        binding_to_unstructured(binding)
