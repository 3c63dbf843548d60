"""Unit tests for the introspection REST API."""

from __future__ import annotations

from fastapi.testclient import TestClient
from hypothesis import given, settings
from hypothesis import strategies as st

from kubeinformer.api.app import create_app
from kubeinformer.declaration import ALL_NAMESPACES
from kubeinformer.informers.factory import SharedInformerFactory
from tests.helpers import RecordingHandler


def _make_factory() -> SharedInformerFactory:
    factory = SharedInformerFactory()
    informers = factory.shared_informers_for(
        "ConfigMap", "ConfigMapList", "configmaps", "", {"team-a", "team-b"}, "env=prod", 0.0, start=True
    )
    informers[0].add_event_handler(RecordingHandler())
    factory.shared_informers_for("Node", "NodeList", "nodes", "", {ALL_NAMESPACES}, None, 30.0, start=False)
    return factory


def _make_client(factory: SharedInformerFactory | None = None) -> TestClient:
    return TestClient(create_app(informer_factory=factory or _make_factory()), raise_server_exceptions=False)


class TestHealth:
    def test_health_counts_informers(self) -> None:
        resp = _make_client().get("/api/v1/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["informers"] == 3
        assert body["running"] == 2


class TestInformers:
    def test_lists_every_informer(self) -> None:
        resp = _make_client().get("/api/v1/informers")
        assert resp.status_code == 200
        items = resp.json()["informers"]
        assert [(i["kind"], i["namespace"]) for i in items] == [
            ("ConfigMap", "team-a"),
            ("ConfigMap", "team-b"),
            ("Node", None),
        ]
        assert items[0]["handlers"] == 1
        assert items[0]["label_selector"] == "env=prod"
        assert items[2]["running"] is False
        assert items[2]["resync_period"] == 30.0

    def test_filter_by_kind(self) -> None:
        resp = _make_client().get("/api/v1/informers", params={"kind": "Node"})
        items = resp.json()["informers"]
        assert len(items) == 1
        assert items[0]["resource_plural"] == "nodes"

    def test_empty_factory(self) -> None:
        resp = _make_client(SharedInformerFactory()).get("/api/v1/informers")
        assert resp.json() == {"informers": []}

    @given(kind=st.text(alphabet=st.characters(codec="utf-8", exclude_categories=("Cs",)), min_size=1, max_size=50))
    @settings(max_examples=30)
    def test_any_kind_filter_returns_json(self, kind: str) -> None:
        resp = _make_client().get("/api/v1/informers", params={"kind": kind})
        assert resp.status_code == 200
        assert isinstance(resp.json()["informers"], list)


class TestErrors:
    def test_unknown_route_uses_error_envelope(self) -> None:
        resp = _make_client().get("/api/v1/nope")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"] == "NOT_FOUND"
        assert "detail" in body

    def test_metrics_endpoint(self) -> None:
        resp = _make_client().get("/metrics")
        assert resp.status_code == 200
        assert "kubeinformer_informers_created_total" in resp.text
