"""
URL helpers
"""

from urllib.parse import quote, urlsplit, urlunsplit

from .errors import URLParseError
from .models import Credential

# Sub-delims kept unescaped inside userinfo; "!'()*" are escaped.
# ':' is left out so it always separates user from password.
_USERINFO_SAFE = "$&+,;="


def with_userinfo(url: str, credential: Credential) -> str:
    """Return `url` with its userinfo replaced by the credential

    Raises:
        URLParseError: When `url` is malformed or has no host
    """
    try:
        parts = urlsplit(url)
        # .port validates the port and raises ValueError when it is not numeric
        parts.port
    except ValueError as e:
        raise URLParseError(f"failed to parse URL {url}: {e}") from e

    if not parts.netloc or not parts.hostname:
        raise URLParseError(f"failed to parse URL {url}: missing host")

    host = parts.netloc.rpartition("@")[2]
    userinfo = "{}:{}".format(
        quote(credential.username, safe=_USERINFO_SAFE),
        quote(credential.password, safe=_USERINFO_SAFE),
    )
    rebuilt = urlunsplit(parts._replace(netloc=f"{userinfo}@{host}", query="", fragment=""))
    # urlunsplit drops an empty query; "http://host/?" keeps its "?"
    if parts.query or "?" in url.partition("#")[0]:
        rebuilt += "?" + parts.query
    if parts.fragment:
        rebuilt += "#" + parts.fragment
    return rebuilt


def redact_userinfo(url: str) -> str:
    """Mask the password of a URL for logging"""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if parts.password is None:
        return url
    userinfo, _, host = parts.netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:***@{host}"))
