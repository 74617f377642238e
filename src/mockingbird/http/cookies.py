"""Cookie parsing, SetCookie serialization and cookie signing.

Consolidates the read side (``parse_cookies``, used by the cookie
stage), the write side (``SetCookie``, used by the response sink) and
``CookieSigner`` for ``s:``-prefixed signed values in one module.

``itsdangerous`` backs the signer; it is only imported when a cookie
secret is configured.
"""

from dataclasses import dataclass
from urllib.parse import quote, unquote

from mockingbird.errors import ConfigurationError

SIGNED_PREFIX = "s:"

# Characters left as-is in cookie values; everything else is %-encoded
_VALUE_SAFE = "!#$&'()*+-./:<=>?@[]^_`{|}~"


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Values are %-decoded. Returns an empty dict for empty or missing
    headers; pairs without ``=`` are skipped.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            value = value.strip()
            if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            cookies[key.strip()] = unquote(value)
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive written by a handler.

    Defaults produce the minimal ``name=value; Path=/`` form.
    """

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={quote(self.value, safe=_VALUE_SAFE)}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


class CookieSigner:
    """Signs and verifies cookie values with a shared secret.

    Signed values carry the ``s:`` prefix so the cookie stage can tell
    them apart from plain cookies::

        signer = CookieSigner("s3cret")
        raw = signer.sign("alice")       # "s:alice.<signature>"
        signer.unsign(raw)               # "alice"
        signer.unsign("s:alice.forged")  # None
    """

    __slots__ = ("_signer",)

    def __init__(self, secret: str) -> None:
        try:
            from itsdangerous import Signer
        except ImportError:
            msg = (
                "Signed cookies require the 'itsdangerous' package. "
                "Install it with: pip install itsdangerous"
            )
            raise ConfigurationError(msg) from None

        if not secret:
            msg = "Cookie secret must not be empty."
            raise ConfigurationError(msg)

        self._signer = Signer(secret, salt="mockingbird.cookie")

    def sign(self, value: str) -> str:
        return SIGNED_PREFIX + self._signer.sign(value.encode("utf-8")).decode("utf-8")

    def unsign(self, raw: str) -> str | None:
        """Return the original value, or ``None`` if *raw* is not validly signed."""
        from itsdangerous import BadSignature

        if not raw.startswith(SIGNED_PREFIX):
            return None
        try:
            return self._signer.unsign(raw[len(SIGNED_PREFIX) :].encode("utf-8")).decode("utf-8")
        except (BadSignature, UnicodeDecodeError):
            return None

    def split(self, cookies: dict[str, str]) -> tuple[dict[str, str], dict[str, str]]:
        """Separate plain cookies from verified signed ones.

        Signed cookies that fail verification are dropped from both.
        """
        plain: dict[str, str] = {}
        signed: dict[str, str] = {}
        for name, raw in cookies.items():
            if not raw.startswith(SIGNED_PREFIX):
                plain[name] = raw
                continue
            value = self.unsign(raw)
            if value is not None:
                signed[name] = value
        return plain, signed
