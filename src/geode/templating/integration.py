"""Kida environment setup and app binding.

Creates a kida Environment from geode's AppConfig and binds
user-registered filters and globals. The environment is created
once when the app freezes and shared by every request.
"""

from collections.abc import Callable
from typing import Any

from kida import Environment, FileSystemLoader

from geode.config import AppConfig


def create_environment(
    config: AppConfig,
    filters: dict[str, Callable[..., Any]],
    globals_: dict[str, Any],
) -> Environment:
    """Create a kida Environment from app configuration.

    Gemtext is not HTML, so autoescaping is off unless the config
    turns it on.
    """
    env = Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )
    bind_environment(env, filters, globals_)
    return env


def bind_environment(
    env: Environment,
    filters: dict[str, Callable[..., Any]],
    globals_: dict[str, Any],
) -> None:
    """Register user filters and globals on *env*."""
    if filters:
        env.update_filters(filters)
    for name, value in globals_.items():
        env.add_global(name, value)


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a template file to string."""
    template = env.get_template(name)
    return template.render(context)


def render_string(env: Environment, source: str, context: dict[str, Any]) -> str:
    """Render a template from a source string."""
    template = env.from_string(source)
    return template.render(context)
