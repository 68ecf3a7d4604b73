#!/usr/bin/env python3
"""
Unit tests for the ComponentsDef DSL and descriptor validation.
"""

import unittest

from chibi.context import (
    ComponentDescriptor,
    ComponentKey,
    ComponentsDef,
    Constructor,
    InjectionPoint,
    InvalidDescriptorError,
    new_container,
)


class Config:
    pass


class Database:
    def __init__(self, config: Config):
        self.config = config


class Service:
    database: Database


class Repository:
    cache = None

    def __init__(self, config=None, database=None):
        self.config = config
        self.database = database


class TestComponentsDef(unittest.TestCase):
    """Test declaring components through the builder."""

    def test_make_without_dependencies(self):
        module = ComponentsDef()
        module.make(Config)

        (descriptor,) = module.descriptors

        self.assertEqual(descriptor.key, ComponentKey.get(Config))
        self.assertEqual(descriptor.dependencies, ())
        self.assertEqual(descriptor.constructors, (Constructor(Config),))

    def test_constructor_declares_dependencies(self):
        module = ComponentsDef()
        module.make(Database).constructor(Config)

        (descriptor,) = module.descriptors

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(Config),))
        self.assertEqual(len(descriptor.injecting_constructors), 1)
        self.assertEqual(descriptor.injecting_constructors[0].parameters, (ComponentKey.get(Config),))

    def test_inject_declares_dependency_and_injection_point(self):
        module = ComponentsDef()
        module.make(Service).inject("database", Database)

        (descriptor,) = module.descriptors

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(Database),))
        self.assertEqual(descriptor.injection_points, (InjectionPoint("database", ComponentKey.get(Database)),))

    def test_depends_on_keeps_first_occurrence(self):
        module = ComponentsDef()
        module.make(Service).depends_on(Config, Database, Config)

        (descriptor,) = module.descriptors

        self.assertEqual(
            descriptor.dependencies, (ComponentKey.get(Config), ComponentKey.get(Database))
        )

    def test_builders_can_be_refined_after_make(self):
        module = ComponentsDef()
        builder = module.make(Service)
        builder.inject("database", Database)

        self.assertEqual(len(module.descriptors[0].injection_points), 1)

    def test_string_component_requires_factory(self):
        module = ComponentsDef()

        with self.assertRaises(InvalidDescriptorError):
            module.make("virtual").constructor(Config)

    def test_modules_combine(self):
        first = ComponentsDef()
        first.make(Config)
        second = ComponentsDef()
        second.make(Database).constructor(Config)
        second.add(ComponentDescriptor.of(Service))

        combined = first + second

        self.assertEqual(len(combined), 3)
        self.assertEqual(
            [d.key for d in combined],
            [ComponentKey.get(Config), ComponentKey.get(Database), ComponentKey.get(Service)],
        )
        self.assertEqual(len(first), 1)

    def test_autowired_constructor_parameters_lead_dependencies(self):
        module = ComponentsDef()
        module.make(Repository).inject("cache", Database).constructor(Config, Database)

        (descriptor,) = module.descriptors

        self.assertEqual(descriptor.dependencies, (ComponentKey.get(Config), ComponentKey.get(Database)))

    def test_autowired_constructor_used_whatever_the_declaration_order(self):
        module = ComponentsDef()
        module.make(Config)
        module.make(Database).constructor(Config)
        module.make(Repository).inject("cache", Database).depends_on(Database).constructor(Config, Database)

        container = new_container(module)
        repository = container.get(Repository)

        self.assertIs(repository.config, container.get(Config))
        self.assertIs(repository.database, container.get(Database))
        self.assertIs(repository.cache, container.get(Database))


class TestComponentDescriptor(unittest.TestCase):
    """Test descriptor invariants."""

    def test_injection_point_must_be_dependency(self):
        with self.assertRaises(InvalidDescriptorError):
            ComponentDescriptor.of(Service, [], injection_points=[InjectionPoint("database", Database)])

    def test_attribute_injected_once(self):
        with self.assertRaises(InvalidDescriptorError):
            ComponentDescriptor.of(
                Service,
                [Database],
                injection_points=[InjectionPoint("database", Database), InjectionPoint("database", Database)],
            )

    def test_implicit_parameterless_constructor(self):
        descriptor = ComponentDescriptor.of(Database, [Config], constructors=[Constructor(Database, (Config,))])

        self.assertEqual(descriptor.constructors[0], Constructor(Database))
        self.assertEqual(len(descriptor.constructors), 2)

    def test_string_component_has_no_implicit_constructor(self):
        self.assertEqual(ComponentDescriptor.of("virtual").constructors, ())

    def test_invalid_key(self):
        with self.assertRaises(TypeError):
            ComponentKey.get(42)

    def test_key_names(self):
        self.assertEqual(ComponentKey.get(Config).name, f"{__name__}.Config")
        self.assertEqual(str(ComponentKey.get(Config)), "Config")
        self.assertEqual(ComponentKey.get("named").name, "named")
        self.assertEqual(ComponentKey.get(int).name, "int")


if __name__ == "__main__":
    unittest.main()
