"""Request body decoding by Content-Type.

Decoding table (media type compared case-insensitively, parameters
ignored except ``charset``):

- empty body: ``{}`` regardless of content type
- ``application/json`` and ``*/*+json``: the parsed JSON value
- ``application/x-www-form-urlencoded``: flat ``dict``; a key that
  appears once maps to a string, a repeated key to a list of strings
- ``text/*``: ``str`` decoded with the ``charset`` parameter (UTF-8 by
  default)
- anything else, including a missing content type: raw ``bytes``
"""

import codecs
import json
from typing import Any
from urllib.parse import parse_qs

from mockingbird.errors import BadRequest, UnsupportedMediaType
from mockingbird.http.headers import parse_content_type

FORM_URLENCODED = "application/x-www-form-urlencoded"


def is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def decode_body(content_type: str | None, raw: bytes) -> Any:
    """Decode *raw* according to *content_type*.

    Raises:
        BadRequest: If the body does not match its declared type.
        UnsupportedMediaType: If a ``text/*`` charset is unknown.
    """
    if not raw:
        return {}

    media_type, params = parse_content_type(content_type)
    charset = params.get("charset", "utf-8")

    if is_json(media_type):
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise BadRequest(f"Malformed JSON body: {exc}") from exc

    if media_type == FORM_URLENCODED:
        try:
            parsed = parse_qs(
                raw.decode("ascii"),
                keep_blank_values=True,
                strict_parsing=False,
                encoding=charset,
                errors="strict",
            )
        except (UnicodeDecodeError, LookupError) as exc:
            raise BadRequest(f"Malformed form body: {exc}") from exc
        return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}

    if media_type.startswith("text/"):
        try:
            codecs.lookup(charset)
        except LookupError as exc:
            raise UnsupportedMediaType(f"Unsupported charset: {charset}") from exc
        try:
            return raw.decode(charset)
        except UnicodeDecodeError as exc:
            raise BadRequest(f"Body is not valid {charset}: {exc}") from exc

    return raw
