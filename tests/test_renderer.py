"""Tests for warble.rendering — fragment naming, ordering, atomic failure."""

from pathlib import Path

import pytest
from kida import Environment, FileSystemLoader

from warble.errors import FragmentNotFound
from warble.rendering.renderer import Renderer, language_prefix


@pytest.fixture
def renderer(tmp_path: Path, fragment_writer) -> Renderer:
    fragment_writer(
        tmp_path,
        {
            "a.html": "A",
            "b.html": "B",
            "c.html": "C",
            "view.html": "<{{ name }}>",
            "fr-a.html": "fa",
            "fr-view.html": "fv",
        },
    )
    env = Environment(loader=FileSystemLoader(str(tmp_path)))
    return Renderer(env, tmp_path)


class TestLanguagePrefix:
    def test_monolingual(self) -> None:
        assert language_prefix(None) == ""

    def test_language(self) -> None:
        assert language_prefix("fr") == "fr-"


class TestRender:
    def test_ordered_concatenation(self, renderer: Renderer) -> None:
        out = renderer.render("", ["a", "b"], "view", ["c"], {"name": "x"})
        assert out == "AB<x>C"

    def test_reordering_before_reorders_output(self, renderer: Renderer) -> None:
        out = renderer.render("", ["b", "a"], "view", ["c"], {"name": "x"})
        assert out == "BA<x>C"

    def test_view_only(self, renderer: Renderer) -> None:
        assert renderer.render("", [], "view", [], {"name": "y"}) == "<y>"

    def test_same_fragment_twice(self, renderer: Renderer) -> None:
        assert renderer.render("", ["a"], "view", ["a"], {"name": ""}) == "A<>A"

    def test_prefix(self, renderer: Renderer) -> None:
        assert renderer.render("fr-", ["a"], "view", [], {}) == "fafv"

    def test_missing_view(self, renderer: Renderer) -> None:
        with pytest.raises(FragmentNotFound) as exc_info:
            renderer.render("", ["a"], "missing", [], {})
        assert exc_info.value.name == "missing"
        assert exc_info.value.source.endswith("missing.html")

    def test_missing_after_fragment(self, renderer: Renderer) -> None:
        with pytest.raises(FragmentNotFound, match="'c'"):
            renderer.render("fr-", ["a"], "view", ["c"], {})

    def test_missing_fragment_renders_nothing(self, tmp_path: Path, fragment_writer) -> None:
        calls: list[str] = []

        class RecordingEnv:
            def get_template(self, name: str):
                calls.append(name)
                raise AssertionError("should not render")

        fragment_writer(tmp_path, {"a.html": "A"})
        renderer = Renderer(RecordingEnv(), tmp_path)  # type: ignore[arg-type]
        with pytest.raises(FragmentNotFound):
            renderer.render("", ["a"], "missing", [], {})
        assert calls == []

    def test_shared_scope_object(self, tmp_path: Path, fragment_writer) -> None:
        seen: list[int] = []

        class Template:
            def render(self, scope: dict) -> str:
                seen.append(id(scope))
                return ""

        class Env:
            def get_template(self, name: str) -> Template:
                return Template()

        fragment_writer(tmp_path, {"a.html": "", "v.html": "", "z.html": ""})
        scope: dict = {}
        Renderer(Env(), tmp_path).render("", ["a"], "v", ["z"], scope)  # type: ignore[arg-type]
        assert seen == [id(scope)] * 3

    def test_custom_extension(self, tmp_path: Path, fragment_writer) -> None:
        fragment_writer(tmp_path, {"page.tpl": "T"})
        env = Environment(loader=FileSystemLoader(str(tmp_path)))
        assert Renderer(env, tmp_path, ".tpl").render("", [], "page", [], {}) == "T"
