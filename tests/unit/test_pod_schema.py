"""Unit tests for the pod snapshot schemas."""

import pytest
from marshmallow import ValidationError
from kuberes.types.models import Pod, PodList, ResourceRequirements
from kuberes.types.schemas import PodListSchema, PodSchema


def pod_json(name="web-1", namespace="prod", containers=None):
    return {
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": "6f1e2c1e-0000-4000-8000-000000000001",
            "labels": {"app": "web"},
        },
        "spec": {
            "nodeName": "node-a",
            "containers": containers if containers is not None else [],
        },
        "status": {"phase": "Running"},
    }


class TestPodSchema:
    """Tests for PodSchema."""

    def test_loads_pod_model(self):
        pod = PodSchema().load(
            pod_json(
                containers=[
                    {
                        "name": "app",
                        "image": "web:1.0",
                        "resources": {
                            "requests": {"cpu": "500m", "memory": "256Mi"},
                            "limits": {"cpu": "1", "memory": "512Mi"},
                        },
                    }
                ]
            )
        )
        assert isinstance(pod, Pod)
        assert pod.name == "web-1"
        assert pod.namespace == "prod"
        assert [c.name for c in pod.containers] == ["app"]
        resources = pod.containers[0].resources
        assert isinstance(resources, ResourceRequirements)
        assert resources.request_cpu_milli == 500
        assert resources.request_memory_bytes == 268435456
        assert resources.limit_cpu_milli == 1000
        assert resources.limit_memory_bytes == 536870912

    def test_unknown_fields_dropped(self):
        pod = PodSchema().load(pod_json())
        assert not hasattr(pod, "status")
        assert not hasattr(pod.metadata, "labels")
        assert not hasattr(pod.spec, "node_name")

    def test_missing_resources_are_zero(self):
        pod = PodSchema().load(pod_json(containers=[{"name": "sidecar"}]))
        resources = pod.containers[0].resources
        assert resources.request_cpu_milli == 0
        assert resources.request_memory_bytes == 0
        assert resources.limit_cpu_milli == 0
        assert resources.limit_memory_bytes == 0

    def test_only_requests_set(self):
        pod = PodSchema().load(
            pod_json(containers=[{"name": "app", "resources": {"requests": {"cpu": "100m"}}}])
        )
        resources = pod.containers[0].resources
        assert resources.request_cpu_milli == 100
        assert resources.limit_cpu_milli == 0
        assert resources.limit_memory_bytes == 0

    def test_null_values_use_defaults(self):
        data = pod_json(containers=[{"name": "app", "resources": None}])
        pod = PodSchema().load(data)
        assert pod.containers[0].resources.request_cpu_milli == 0

    def test_missing_spec(self):
        data = pod_json()
        del data["spec"]
        pod = PodSchema().load(data)
        assert pod.containers == []

    def test_missing_namespace_is_empty(self):
        data = pod_json()
        del data["metadata"]["namespace"]
        assert PodSchema().load(data).namespace == ""

    def test_missing_metadata_raises(self):
        with pytest.raises(ValidationError):
            PodSchema().load({"spec": {"containers": []}})

    def test_container_without_name_raises(self):
        with pytest.raises(ValidationError):
            PodSchema().load(pod_json(containers=[{"image": "web:1.0"}]))


class TestPodListSchema:
    """Tests for PodListSchema."""

    def test_loads_items(self):
        pods = PodListSchema().load(
            {
                "kind": "PodList",
                "apiVersion": "v1",
                "metadata": {"resourceVersion": "12345"},
                "items": [pod_json("a", "ns1"), pod_json("b", "ns2")],
            }
        )
        assert isinstance(pods, PodList)
        assert len(pods) == 2
        assert [(p.namespace, p.name) for p in pods] == [("ns1", "a"), ("ns2", "b")]

    def test_empty_list(self):
        pods = PodListSchema().load({"kind": "PodList", "items": []})
        assert len(pods) == 0

    def test_null_items(self):
        pods = PodListSchema().load({"kind": "PodList", "items": None})
        assert list(pods) == []
