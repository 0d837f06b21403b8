"""URL template normalizer.

Rewrites positional path parameters (``/users/:id``) into the named,
brace-delimited form Postman expects (``/users/{id}``).
"""

import re

from pydantic import BaseModel, ConfigDict

from apidoc_postman.errors import MalformedTemplateError

SIGIL = ":"

# The identifier group is greedy, so ":identifier" is never split into ":id" + "entifier".
_TOKEN_RE = re.compile(re.escape(SIGIL) + r"([A-Za-z_][A-Za-z0-9_]*)?")


class NormalizedUrl(BaseModel):
    """A rewritten URL template and the parameter names found in it."""

    model_config = ConfigDict(frozen=True)

    template: str  # /v1/users/{id}
    names: list[str]  # ["id"]
    path: list[str]  # ["", "v1", "users", "{id}"]


def normalize_url(template: str) -> NormalizedUrl:
    """Replace every ``:name`` token in template with ``{name}``.

    Tokens are located left to right and each one is spliced out at its own
    position. Duplicate names are rewritten independently.

    Every ``:`` is read as a parameter sigil, so template must be a path.
    An absolute URL such as ``http://api.example.com/users/:id`` is rejected
    because of the ``:`` after the scheme; strip the scheme and host first.

    Raises:
        MalformedTemplateError: a ``:`` is not followed by a parameter name.
    """
    names: list[str] = []
    parts: list[str] = []
    pos = 0
    for match in _TOKEN_RE.finditer(template):
        name = match.group(1)
        if name is None:
            raise MalformedTemplateError(template, match.start())
        parts.append(template[pos:match.start()])
        parts.append("{" + name + "}")
        names.append(name)
        pos = match.end()
    parts.append(template[pos:])

    rewritten = "".join(parts)
    return NormalizedUrl(template=rewritten, names=names, path=rewritten.split("/"))
