"""Tests for warble.extensions — registry, discovery, instantiation."""

import sys
from pathlib import Path

import pytest

from warble.app import App
from warble.errors import ExtensionError
from warble.extensions import ExtensionRegistry


class Greeter:
    def __init__(self, app: App) -> None:
        self.app = app

    def greet(self) -> str:
        return "hi"


class TestRegistry:
    def test_register_and_instantiate(self) -> None:
        registry = ExtensionRegistry()
        registry.register("greeter", Greeter)
        app = App()

        instances = registry.instantiate(app)

        assert isinstance(instances["greeter"], Greeter)
        assert instances["greeter"].app is app

    def test_registration_order(self) -> None:
        registry = ExtensionRegistry()
        registry.register("b", Greeter)
        registry.register("a", Greeter)
        assert list(registry) == ["b", "a"]

    def test_invalid_name(self) -> None:
        with pytest.raises(ExtensionError, match="Invalid extension name"):
            ExtensionRegistry().register("bad name", Greeter)

    def test_factory_must_be_callable(self) -> None:
        with pytest.raises(ExtensionError, match="not callable"):
            ExtensionRegistry().register("x", 42)  # type: ignore[arg-type]


class TestDiscover:
    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ExtensionError, match="Doesn't appear to be a directory"):
            ExtensionRegistry().discover(tmp_path / "ext")

    def test_discovers_setup_factories(self, tmp_path: Path) -> None:
        (tmp_path / "menu.py").write_text(
            "class Menu:\n"
            "    def __init__(self, app):\n"
            "        self.items = ['home']\n"
            "def setup(app):\n"
            "    return Menu(app)\n"
        )
        (tmp_path / "_private.py").write_text("raise RuntimeError('never loaded')\n")
        (tmp_path / "notes.txt").write_text("ignored")

        registry = ExtensionRegistry()
        names = registry.discover(tmp_path)

        assert names == ["menu"]
        instance = registry.instantiate(App())["menu"]
        assert instance.items == ["home"]

    def test_sorted_order(self, tmp_path: Path) -> None:
        for name in ("zeta", "alpha"):
            (tmp_path / f"{name}.py").write_text("def setup(app):\n    return 1\n")
        registry = ExtensionRegistry()
        assert registry.discover(tmp_path) == ["alpha", "zeta"]

    def test_module_without_setup(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text("x = 1\n")
        with pytest.raises(ExtensionError, match="must define a callable 'setup"):
            ExtensionRegistry().discover(tmp_path)

    def test_dataclass_extension(self, tmp_path: Path) -> None:
        (tmp_path / "badge.py").write_text(
            "from __future__ import annotations\n"
            "from dataclasses import dataclass\n"
            "\n"
            "@dataclass\n"
            "class Badge:\n"
            "    label: str = 'new'\n"
            "\n"
            "def setup(app):\n"
            "    return Badge()\n"
        )
        registry = ExtensionRegistry()

        assert registry.discover(tmp_path) == ["badge"]
        assert registry.instantiate(App())["badge"].label == "new"

    def test_failed_module_not_left_registered(self, tmp_path: Path) -> None:
        (tmp_path / "crash.py").write_text("raise ValueError('boom')\n")
        with pytest.raises(ValueError, match="boom"):
            ExtensionRegistry().discover(tmp_path)
        assert "_warble_ext_crash" not in sys.modules
