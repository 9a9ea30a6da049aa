"""Path templating: ``/api/:id`` -> ``/api/{id}``."""

import re

PATH_PARAM = re.compile(r":([A-Za-z_][\w-]*)")


def template_path(path: str) -> str:
    """Rewrite every ``:name`` segment token into ``{name}``."""
    return PATH_PARAM.sub(r"{\1}", path)


def path_params(path: str) -> list[str]:
    """Names of the ``:name`` parameters in ``path``, in order of appearance."""
    return PATH_PARAM.findall(path)


def join_paths(*parts: str | None) -> str:
    """Join path parts with single slashes. A trailing slash is dropped."""
    joined = "/".join(p for p in parts if p is not None)
    joined = re.sub(r"/+", "/", joined)
    if len(joined) > 1:
        joined = joined.rstrip("/")
    return joined
