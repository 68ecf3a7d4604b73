#!/usr/bin/env python3
"""
Unit tests for annotation-driven component discovery.
"""

import unittest
from typing import Annotated

from sample_components.normal.a import A
from sample_components.normal.b import B
from sample_components.normal.c import C

from chibi.context import (
    AmbiguousConstructorError,
    ComponentKey,
    CycleDetectedError,
    Inject,
    InvalidDescriptorError,
    StrategyKind,
    UnresolvedDependencyError,
    autowired,
    component,
    describe,
    new_container,
    scan,
)


class TestScan(unittest.TestCase):
    """Test scanning packages, mirroring the sample component packages."""

    def test_context_can_create_instances(self):
        container = new_container(scan("sample_components.normal"))

        expected = sorted(ComponentKey.get(t).name for t in (A, B, C))
        self.assertEqual(sorted(container.list_component_names()), expected)

    def test_context_creates_singletons(self):
        container = new_container(scan("sample_components.normal"))

        self.assertIs(container.get(A), container.get(A))
        self.assertIs(container.get(B).a, container.get(A))
        self.assertIs(container.get(B).c, container.get(C))
        self.assertIs(container.get(C).a, container.get(A))

    def test_strategies_follow_annotations(self):
        container = new_container(scan("sample_components.normal"))
        plan = container.plan

        assert plan is not None
        self.assertIs(plan.strategy_for(ComponentKey.get(B)).kind, StrategyKind.CONSTRUCTOR)
        self.assertIs(plan.strategy_for(ComponentKey.get(C)).kind, StrategyKind.FIELDS)

    def test_undecorated_classes_are_ignored(self):
        names = {d.key.name for d in scan("sample_components.normal")}

        self.assertNotIn("sample_components.normal.b.NotAComponent", names)
        self.assertEqual(len(names), 3)

    def test_scan_accepts_module_object(self):
        import sample_components.normal.b as module

        descriptors = scan(module)

        self.assertEqual([d.key for d in descriptors], [ComponentKey.get(B)])

    def test_context_can_detect_cycle(self):
        with self.assertRaises(CycleDetectedError):
            new_container(scan("sample_components.cycle"))

    def test_dependency_on_non_component_fails(self):
        with self.assertRaises(UnresolvedDependencyError) as ctx:
            new_container(scan("sample_components.non_component"))

        self.assertEqual(ctx.exception.key.name, "sample_components.non_component.components.B")

    def test_two_autowired_constructors_fail(self):
        with self.assertRaises(AmbiguousConstructorError):
            new_container(scan("sample_components.ambiguous"))


class TestDescribe(unittest.TestCase):
    """Test building descriptors from a single class."""

    def test_autowired_constructor_parameters_are_dependencies(self):
        descriptor = describe(B)

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(C), ComponentKey.get(A)))
        self.assertEqual(descriptor.injecting_constructors[0].parameters, descriptor.dependencies)

    def test_injected_fields_are_dependencies(self):
        descriptor = describe(C)

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(A),))
        self.assertEqual([p.attribute for p in descriptor.injection_points], ["a"])
        self.assertEqual(descriptor.injecting_constructors, [])

    def test_autowired_classmethod(self):
        @component
        class Client:
            def __init__(self, url: str):
                self.url = url

            @classmethod
            @autowired
            def create(cls, service: A):
                return cls(f"http://{type(service).__name__}")

        descriptor = describe(Client)

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(A),))
        self.assertEqual(descriptor.injecting_constructors[0].factory, Client.create)

        container = new_container([describe(A), descriptor])
        self.assertEqual(container.get(Client).url, "http://A")

    def test_autowired_staticmethod(self):
        @component
        class Gateway:
            def __init__(self, upstream: A):
                self.upstream = upstream

            @staticmethod
            @autowired
            def build(upstream: A):
                return Gateway(upstream)

        container = new_container([describe(A), describe(Gateway)])

        self.assertIs(container.get(Gateway).upstream, container.get(A))

    def test_non_inject_annotations_are_ignored(self):
        @component
        class Holder:
            name: str
            label: Annotated[str, "doc"]
            a: Annotated[A, Inject]

        self.assertEqual([p.attribute for p in describe(Holder).injection_points], ["a"])

    def test_unannotated_parameter_is_rejected(self):
        @component
        class Loose:
            @autowired
            def __init__(self, dependency):
                self.dependency = dependency

        with self.assertRaises(InvalidDescriptorError):
            describe(Loose)

    def test_unsupported_annotation_is_rejected(self):
        @component
        class Generic:
            @autowired
            def __init__(self, dependency: A | None):
                self.dependency = dependency

        with self.assertRaises(InvalidDescriptorError):
            describe(Generic)


if __name__ == "__main__":
    unittest.main()
