# src/endpoint_client/core/endpoint.py
"""
Endpoint templates and path parameter resolution.

Templates contain positional placeholders ``{0}``, ``{1}``, ... which are
filled from the arguments given to ``HTTPClient.parameters()``.
"""

import re
from enum import Enum
from typing import Union
from urllib.parse import quote

from .exceptions import UnresolvedPathParameterError

_PLACEHOLDER = re.compile(r"{(\d+)}")

# Marks left unescaped in a path segment
_UNRESERVED = "-_.!~*'()"


def encode_path_param(value: Union[str, int, float]) -> str:
    """
    Percent-encode a single path parameter.

    Example:
        >>> encode_path_param("a b/c")
        'a%20b%2Fc'
    """
    if isinstance(value, Enum):
        value = value.value
    return quote(str(value), safe=_UNRESERVED)


def resolve_url(endpoint: str, *args: str) -> str:
    """
    Fill ``{n}`` placeholders of an endpoint template.

    Arguments are substituted as is, they must be encoded beforehand.
    Surplus arguments are ignored.

    Args:
        endpoint: Endpoint template, e.g. ``"objects/{0}/action/{1}"``
        *args: Positional path parameters

    Returns:
        Resolved path

    Raises:
        UnresolvedPathParameterError: A placeholder has no matching argument

    Example:
        >>> resolve_url("objects/{0}/action/{1}", "7", "run")
        'objects/7/action/run'
    """
    template = endpoint.value if isinstance(endpoint, Enum) else endpoint

    def substitute(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if index >= len(args) or args[index] is None:
            raise UnresolvedPathParameterError(template, index)
        return str(args[index])

    return _PLACEHOLDER.sub(substitute, template)


class Endpoint(str, Enum):
    """
    Base class for endpoint enumerations.

    Example:
        >>> class Api(Endpoint):
        ...     USERS = "users"
        ...     USER = "users/{0}"
        >>> Api.USER.resolve("42")
        'users/42'
    """

    def __str__(self) -> str:
        return self.value

    def resolve(self, *args: str) -> str:
        return resolve_url(self.value, *args)
