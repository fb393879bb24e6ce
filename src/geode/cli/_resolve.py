"""Locate the capsule's App for ``geode routes`` and ``geode request``.

CGI capsules are usually plain scripts sitting in the server's CGI
directory, so a target may name either a script file or a module::

    capsule.py          ->  app in ./capsule.py
    cgi-bin/index.py:site
    capsule             ->  capsule.app, imported from the working directory
    mysite.capsule:make_app

A callable that is not an App is treated as a factory and called once.
"""

import importlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from geode.app import App

DEFAULT_ATTRIBUTE = "app"


def _split_target(target: str) -> tuple[str, str]:
    # rpartition: Windows drive letters put a colon in the path itself
    location, sep, attr = target.rpartition(":")
    if not sep or not attr or "/" in attr or "\\" in attr:
        return target, DEFAULT_ATTRIBUTE
    return location, attr


def _looks_like_script(location: str) -> bool:
    return location.endswith(".py") or "/" in location or os.sep in location


def _load_script(path: Path) -> ModuleType:
    """Execute a capsule script as a fresh module."""
    if not path.is_file():
        msg = f"Capsule script not found: {path}"
        raise FileNotFoundError(msg)
    module_name = f"_geode_capsule_{path.stem.replace('-', '_').replace('.', '_')}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load capsule script {path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    # Sibling imports in the script resolve against its own directory
    script_dir = str(path.resolve().parent)
    if script_dir not in sys.path:
        sys.path.insert(0, script_dir)
    spec.loader.exec_module(module)
    return module


def _import_module(name: str) -> ModuleType:
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    return importlib.import_module(name)


def resolve_app(target: str) -> App:
    """Return the App named by *target* (``path.py[:attr]`` or ``module[:attr]``).

    Raises:
        FileNotFoundError: The capsule script does not exist.
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module has no such attribute.
        TypeError: The attribute is not an App, or its factory failed.
    """
    location, attr = _split_target(target)
    if _looks_like_script(location):
        module = _load_script(Path(location))
    else:
        module = _import_module(location)

    obj = getattr(module, attr)
    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, not a geode.App instance"
        raise TypeError(msg)
    return obj
