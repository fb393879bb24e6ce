"""Tests for geode.cli._resolve — App import resolution."""

import sys
import types
from pathlib import Path

import pytest

from geode.app import App
from geode.cli._resolve import resolve_app


def _factory() -> App:
    return App()


def _broken_factory() -> App:
    msg = "missing settings"
    raise RuntimeError(msg)


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a geode App on sys.modules."""
    mod = types.ModuleType("_fake_geode_app")
    mod.app = App()  # type: ignore[attr-defined]
    mod.custom = App()  # type: ignore[attr-defined]
    mod.create_app = _factory  # type: ignore[attr-defined]
    mod.broken = _broken_factory  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_geode_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_geode_app:app"), App)

    def test_custom_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_geode_app:custom"), App)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert isinstance(resolve_app("_fake_geode_app"), App)

    def test_factory_called(self) -> None:
        assert isinstance(resolve_app("_fake_geode_app:create_app"), App)

    def test_factory_error(self) -> None:
        with pytest.raises(TypeError, match="missing settings"):
            resolve_app("_fake_geode_app:broken")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_geode_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a geode\.App instance"):
            resolve_app("_fake_geode_app:not_an_app")


_CAPSULE_SOURCE = """\
from geode import App

app = App()
site = App()


def make_app():
    return App()
"""


@pytest.fixture
def _isolated_sys_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "path", list(sys.path))


@pytest.mark.usefixtures("_isolated_sys_path")
class TestResolveCapsuleScript:
    def test_script_default_attribute(self, tmp_path: Path) -> None:
        script = tmp_path / "capsule.py"
        script.write_text(_CAPSULE_SOURCE, encoding="utf-8")
        assert isinstance(resolve_app(str(script)), App)

    def test_script_named_attribute(self, tmp_path: Path) -> None:
        script = tmp_path / "index.py"
        script.write_text(_CAPSULE_SOURCE, encoding="utf-8")
        assert isinstance(resolve_app(f"{script}:site"), App)

    def test_script_factory(self, tmp_path: Path) -> None:
        script = tmp_path / "capsule.py"
        script.write_text(_CAPSULE_SOURCE, encoding="utf-8")
        assert isinstance(resolve_app(f"{script}:make_app"), App)

    def test_relative_script_from_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "capsule.py").write_text(_CAPSULE_SOURCE, encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert isinstance(resolve_app("capsule.py:app"), App)

    def test_missing_script(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Capsule script not found"):
            resolve_app(str(tmp_path / "absent.py"))

    def test_module_in_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "_geode_cwd_capsule.py").write_text(_CAPSULE_SOURCE, encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        try:
            assert isinstance(resolve_app("_geode_cwd_capsule:site"), App)
        finally:
            sys.modules.pop("_geode_cwd_capsule", None)
