"""Unit tests for namespace-set resolution."""

from __future__ import annotations

from unittest.mock import MagicMock

from hypothesis import given, settings
from hypothesis import strategies as st

from kubeinformer.declaration import ALL_NAMESPACES, AUTO
from kubeinformer.resolve.namespaces import resolve_namespaces
from kubeinformer.suppliers import SupplierRegistry
from tests.helpers import make_declaration

_namespace_names = st.from_regex(r"[a-z][a-z0-9-]{0,15}", fullmatch=True)


def _ambient(value: str = "ambient-ns") -> MagicMock:
    return MagicMock(return_value=value)


class TeamNamespaces:
    """Class-based supplier, instantiated through the registry."""

    def __call__(self) -> list[str]:
        return ["team-a", "team-b"]


# ---------------------------------------------------------------------------
# Static literals
# ---------------------------------------------------------------------------


class TestStaticNamespaces:
    def test_static_literals_are_returned_as_is(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default", "kube-system"])
        ambient = _ambient()
        assert resolve_namespaces(decl, ambient, suppliers) == {"default", "kube-system"}
        ambient.assert_not_called()

    def test_duplicate_literals_collapse(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default", "default"])
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"default"}

    @given(names=st.lists(_namespace_names, min_size=1, max_size=8))
    @settings(max_examples=50)
    def test_static_only_returns_exact_literal_set(self, names: list[str]) -> None:
        decl = make_declaration(namespaces=names)
        assert resolve_namespaces(decl, _ambient(), SupplierRegistry()) == frozenset(names)


# ---------------------------------------------------------------------------
# Supplier and fallback are unioned with the literals
# ---------------------------------------------------------------------------


class TestMergedSources:
    def test_class_supplier_is_unioned(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default"], namespaces_supplier=TeamNamespaces)
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"default", "team-a", "team-b"}

    def test_callable_supplier_is_unioned(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces_supplier=lambda: ("ops",))
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"ops"}

    def test_named_supplier_is_unioned(self, suppliers: SupplierRegistry) -> None:
        suppliers.register("tenants", lambda: ["tenant-1"])
        decl = make_declaration(namespaces_supplier="tenants")
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"tenant-1"}

    def test_supplier_returning_single_string(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces_supplier=lambda: "single")
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"single"}

    def test_fallback_namespace_is_added_to_other_sources(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(
            namespaces=["default"],
            namespaces_supplier=lambda: ["team-a"],
            namespace="monitoring",
        )
        assert resolve_namespaces(decl, _ambient(), suppliers) == {"default", "team-a", "monitoring"}

    def test_explicit_fallback_never_consults_ambient(self, suppliers: SupplierRegistry) -> None:
        ambient = _ambient()
        decl = make_declaration(namespace="monitoring")
        assert resolve_namespaces(decl, ambient, suppliers) == {"monitoring"}
        ambient.assert_not_called()


# ---------------------------------------------------------------------------
# Ambient default
# ---------------------------------------------------------------------------


class TestAmbientDefault:
    def test_auto_with_no_sources_uses_ambient(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespace=AUTO)
        assert resolve_namespaces(decl, _ambient("my-ns"), suppliers) == {"my-ns"}

    def test_empty_supplier_output_falls_back_to_ambient(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces_supplier=lambda: [])
        assert resolve_namespaces(decl, _ambient("my-ns"), suppliers) == {"my-ns"}

    def test_supplier_output_wins_over_ambient(self, suppliers: SupplierRegistry) -> None:
        ambient = _ambient()
        decl = make_declaration(namespaces_supplier=lambda: ["team-a"])
        assert resolve_namespaces(decl, ambient, suppliers) == {"team-a"}
        ambient.assert_not_called()


# ---------------------------------------------------------------------------
# ALL_NAMESPACES collapse
# ---------------------------------------------------------------------------


class TestAllNamespacesCollapse:
    def test_all_in_static_literals(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default", ALL_NAMESPACES])
        assert resolve_namespaces(decl, _ambient(), suppliers) == {ALL_NAMESPACES}

    def test_all_from_supplier(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default"], namespaces_supplier=lambda: [ALL_NAMESPACES])
        assert resolve_namespaces(decl, _ambient(), suppliers) == {ALL_NAMESPACES}

    def test_all_as_fallback_field(self, suppliers: SupplierRegistry) -> None:
        decl = make_declaration(namespaces=["default", "team-a"], namespace=ALL_NAMESPACES)
        assert resolve_namespaces(decl, _ambient(), suppliers) == {ALL_NAMESPACES}

    @given(
        static=st.lists(_namespace_names, max_size=5),
        supplied=st.lists(_namespace_names, max_size=5),
        where=st.sampled_from(["static", "supplier", "fallback"]),
    )
    @settings(max_examples=50)
    def test_all_from_any_source_is_exactly_all(self, static: list[str], supplied: list[str], where: str) -> None:
        namespace = AUTO
        if where == "static":
            static = [*static, ALL_NAMESPACES]
        elif where == "supplier":
            supplied = [*supplied, ALL_NAMESPACES]
        else:
            namespace = ALL_NAMESPACES
        decl = make_declaration(
            namespaces=static,
            namespaces_supplier=lambda: list(supplied),
            namespace=namespace,
        )
        assert resolve_namespaces(decl, _ambient(), SupplierRegistry()) == frozenset({ALL_NAMESPACES})

    @given(
        static=st.lists(_namespace_names, max_size=5),
        supplied=st.lists(_namespace_names, max_size=5),
    )
    @settings(max_examples=50)
    def test_result_is_never_empty(self, static: list[str], supplied: list[str]) -> None:
        decl = make_declaration(namespaces=static, namespaces_supplier=lambda: list(supplied))
        assert resolve_namespaces(decl, _ambient(), SupplierRegistry())
