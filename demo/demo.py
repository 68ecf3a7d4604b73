#!/usr/bin/env python3
"""
Demonstration of chibi-context.

This demo shows:
1. Declaring components with the ComponentsDef DSL
2. Constructor injection and field injection
3. Shared singletons across the object graph
4. Cycle detection
"""

import logging

from chibi.context import ComponentsDef, CycleDetectedError, new_container

# Example domain: a small web service


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        self.app_name = "shop"
        self.dsn = "postgres://localhost/shop"


class Database:
    """Database connection built from the configuration."""

    def __init__(self, config: Config):
        self.dsn = config.dsn

    def query(self, sql: str) -> str:
        return f"[{self.dsn}] {sql}"


class UserRepository:
    def __init__(self, database: Database):
        self.database = database

    def find(self, user_id: int) -> str:
        return self.database.query(f"SELECT * FROM users WHERE id = {user_id}")


class UserService:
    """Wired by field injection: no constructor arguments."""

    config: Config
    users: UserRepository

    def greet(self, user_id: int) -> str:
        return f"{self.config.app_name}: {self.users.find(user_id)}"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=== chibi-context demo ===\n")

    module = ComponentsDef()
    module.make(UserService).inject("config", Config).inject("users", UserRepository)
    module.make(UserRepository).constructor(Database)
    module.make(Database).constructor(Config)
    module.make(Config)

    container = new_container(module)

    print("1. Registered components:")
    for name in container.list_component_names():
        print(f"   {name}")

    print("\n2. Construction plan:")
    print(container.plan)

    service = container.get(UserService)
    assert service is not None
    print(f"\n3. {service.greet(42)}")

    print("\n4. Singletons are shared:")
    database = container.get(Database)
    print(f"   repository database is the container database: {service.users.database is database}")

    print("\n5. Cycle detection:")

    class Left:
        pass

    class Right:
        pass

    broken = ComponentsDef()
    broken.make(Left).constructor(Right)
    broken.make(Right).constructor(Left)
    try:
        new_container(broken)
    except CycleDetectedError as e:
        print(f"   {e}")


if __name__ == "__main__":
    main()
