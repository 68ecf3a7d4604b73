#!/usr/bin/env python3
"""
Development scripts for the chibi-context project.

Usage: python scripts.py <test|lint|typecheck|demos|readme|check>
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

PACKAGE_DIR = "src/chibi/context/"


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command through the shell and report whether it succeeded."""
    print(f"\n==> {description}: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"FAILED {description} (exit code {e.returncode})")
        return False
    except FileNotFoundError:
        print(f"FAILED {description} (command not found: {cmd[0]})")
        return False
    print(f"OK {description}")
    return True


def run_all(commands: list[tuple[list[str], str]]) -> int:
    results = [run_command(cmd, desc) for cmd, desc in commands]
    return 0 if all(results) else 1


def run_tests() -> int:
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    return run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )


def run_typecheck() -> int:
    return run_all(
        [
            (["uv", "run", "mypy", PACKAGE_DIR], "MyPy"),
            (["uv", "run", "pyright", PACKAGE_DIR], "Pyright"),
        ]
    )


def run_demos() -> int:
    demos = sorted(p for p in Path("demo").glob("*.py") if not p.name.startswith("_"))
    if not demos:
        print("No demo scripts found")
        return 0
    return run_all([(["uv", "run", "python", str(demo)], f"Demo {demo.name}") for demo in demos])


def run_readme_validation() -> int:
    """Turn README.md code blocks into tests with phmdoctest and run them."""
    generated = Path("test_readme.py")
    generated.unlink(missing_ok=True)
    try:
        if not run_command(
            ["uv", "run", "phmdoctest", "README.md", "--outfile", str(generated)], "Generate README tests"
        ):
            return 1
        return run_all([(["uv", "run", "pytest", str(generated), "-v"], "README examples")])
    finally:
        generated.unlink(missing_ok=True)


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "readme": run_readme_validation,
}


def check_all() -> int:
    failed = [name for name, command in COMMANDS.items() if command() != 0]
    print("\n" + ("All checks passed" if not failed else f"Failed checks: {', '.join(failed)}"))
    return 1 if failed else 0


if __name__ == "__main__":
    COMMANDS["check"] = check_all
    if len(sys.argv) != 2 or sys.argv[1] not in COMMANDS:
        print(f"Usage: python scripts.py <{'|'.join(COMMANDS)}>")
        sys.exit(1)
    sys.exit(COMMANDS[sys.argv[1]]())
