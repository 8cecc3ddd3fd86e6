"""OAuth 1.0a HMAC-SHA1 request signing.

The signature base string is built in two passes: parameter values are
percent-encoded into ``key=value`` pairs, then the joined pair string and the
base URL are each percent-encoded once more. The signed URL re-serializes the
same sorted pairs with ``oauth_signature`` added, without the outer encoding.
"""

import base64
import hashlib
import hmac
from collections.abc import Mapping
from urllib.parse import quote, unquote

from flickr_oauth.exceptions import FlickrProtocolError

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"


def percent_encode(value: str) -> str:
    """Encode everything except the unreserved characters ``A-Za-z0-9-._~``."""
    return quote(value, safe="")


def percent_decode(value: str) -> str:
    """Decode %XX escapes. ``+`` is left alone.

    Raises:
        UnicodeDecodeError: If the escapes do not form valid UTF-8
    """
    return unquote(value, errors="strict")


def sort_params(params: Mapping[str, str]) -> list[tuple[str, str]]:
    """Order parameters by case-insensitive key."""
    return [(key, params[key]) for key in sorted(params, key=lambda k: (k.casefold(), k))]


def normalize_params(params: Mapping[str, str]) -> str:
    """Serialize parameters as sorted ``key=encoded-value`` pairs."""
    return "&".join(f"{key}={percent_encode(value)}" for key, value in sort_params(params))


def signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
    """Build the string that gets HMAC-signed."""
    return "&".join(
        [
            method.upper(),
            percent_encode(url),
            percent_encode(normalize_params(params)),
        ]
    )


def signing_key(consumer_secret: str, token_secret: str | None = None) -> str:
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"


def generate_signature(
    method: str,
    url: str,
    params: Mapping[str, str],
    *,
    consumer_secret: str,
    token_secret: str | None = None,
) -> str:
    """Generate OAuth 1.0a HMAC-SHA1 signature."""
    base_string = signature_base_string(method, url, params)
    digest = hmac.new(
        signing_key(consumer_secret, token_secret).encode(),
        base_string.encode(),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode()


def build_signed_url(
    method: str,
    url: str,
    params: Mapping[str, str],
    *,
    consumer_secret: str,
    token_secret: str | None = None,
) -> str:
    """Sign ``params`` and return ``url?<sorted params incl. oauth_signature>``."""
    signed = dict(params)
    signed["oauth_signature"] = generate_signature(
        method,
        url,
        params,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    return f"{url}?{normalize_params(signed)}"


def parse_response_params(body: bytes | str) -> dict[str, str]:
    """Parse an ``&``-joined, percent-encoded ``key=value`` response body.

    Raises:
        FlickrProtocolError: If the body is not UTF-8 or a pair lacks ``=``
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FlickrProtocolError("Could not get response string.") from e

    params: dict[str, str] = {}
    for component in body.strip().split("&"):
        if not component:
            continue
        key, sep, value = component.partition("=")
        if not sep:
            raise FlickrProtocolError(f"Malformed response parameter: {component!r}")
        try:
            params[percent_decode(key)] = percent_decode(value)
        except UnicodeDecodeError as e:
            raise FlickrProtocolError(f"Undecodable response parameter: {component!r}") from e
    return params


def extract_verifier(callback_url: str) -> str:
    """Pull the verifier out of an authorization callback URL.

    The verifier is the value of the second ``&``-delimited component,
    e.g. ``https://cb?oauth_token=T&oauth_verifier=V`` yields ``V``.
    """
    components = callback_url.split("&")
    if len(components) < 2:
        raise FlickrProtocolError(
            f"Callback URL has no verifier: {callback_url}", stage="authorize"
        )

    _, sep, verifier = components[1].partition("=")
    if not sep or not verifier:
        raise FlickrProtocolError(
            f"Callback URL has no verifier: {callback_url}", stage="authorize"
        )
    return verifier


def parse_bool(value: str | None) -> bool:
    """Interpret a response flag such as ``oauth_callback_confirmed``.

    True when the first non-blank character is ``t``, ``y`` or a digit 1-9.
    A single leading sign and any leading zeros are skipped.
    """
    if not value:
        return False
    stripped = value.strip()
    if stripped[:1] in ("+", "-"):
        stripped = stripped[1:]
    stripped = stripped.lstrip("0")
    if not stripped:
        return False
    return stripped[0].lower() in "ty123456789"
