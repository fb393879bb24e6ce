"""Route pattern compilation.

Patterns are regular expressions matched against the whole request path.
Two conveniences are rewritten before compiling:

    /page/(?<id>\\d+)     -> /page/(?P<id>\\d+)      PCRE-style named group
    /users/{id:int}       -> /users/(?P<id>\\d+)     placeholder with converter
"""

import re

from geode.errors import ConfigurationError
from geode.routing.params import CONVERTERS

_PCRE_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?![=!])")
_PLACEHOLDER = re.compile(r"(?<!\\)\{([a-zA-Z_][a-zA-Z0-9_]*)(?::([a-zA-Z_][a-zA-Z0-9_]*))?\}")


def normalize_path(path: str) -> str:
    """Collapse leading and trailing slashes: ``"page/1/"`` -> ``"/page/1"``."""
    return "/" + path.strip("/")


def translate_pattern(pattern: str) -> str:
    """Rewrite a route pattern into Python ``re`` syntax.

    Raises ``ConfigurationError`` for an unknown placeholder converter.
    """

    def expand(match: re.Match[str]) -> str:
        name, converter = match.group(1), match.group(2) or "str"
        if converter not in CONVERTERS:
            msg = (
                f"Unsupported placeholder converter {converter!r} in route {pattern!r}. "
                f"Known converters: {', '.join(sorted(CONVERTERS))}"
            )
            raise ConfigurationError(msg)
        regex, _ = CONVERTERS[converter]
        return f"(?P<{name}>{regex})"

    source = normalize_path(pattern)
    source = _PCRE_NAMED_GROUP.sub("(?P<", source)
    return _PLACEHOLDER.sub(expand, source)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile *pattern* for anchored matching with ``fullmatch``.

    Raises ``ConfigurationError`` if the pattern is not a valid regular
    expression, so bad routes fail at registration time.
    """
    source = translate_pattern(pattern)
    try:
        return re.compile(source)
    except re.error as exc:
        msg = f"Invalid route pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc
