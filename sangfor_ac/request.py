"""
Request assembly for the Sangfor AC management API.

A :class:`LogicalRequest` describes what an endpoint binding wants (path,
verb, query pairs, body fields). :class:`RequestBuilder` turns it into a
signed :class:`TransportRequest`:

* query pairs are appended to the URL in insertion order;
* GET requests carry ``random``/``md5`` in the query string;
* POST requests carry them inside the JSON body.

Verbs other than GET and POST are expressed by the binding as a ``_method``
query pair, which the builder passes through untouched.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

from .constants import (
    CONTENT_TYPE_JSON,
    FIELD_MD5,
    FIELD_RANDOM,
    HEADER_ACCEPT_LANGUAGE,
    HEADER_CONTENT_TYPE,
    LANGUAGE_CN,
    METHOD_GET,
    METHOD_POST,
)
from .exceptions import ArgumentError
from .signer import Signer


@dataclass
class LogicalRequest:
    """What an endpoint binding asks for, before signing."""

    path: str
    method: str = METHOD_GET
    query: Dict[str, str] = field(default_factory=dict)
    data: Optional[Dict[str, Any]] = None


@dataclass
class TransportRequest:
    """A fully built HTTP request, ready for :class:`~sangfor_ac.transport.Transport`."""

    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes] = None


def encode_query(query: Dict[str, str]) -> str:
    """Render query pairs as ``key=value`` joined by ``&``, keeping their order."""
    return '&'.join(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in query.items()
    )


def append_query(url: str, query: str) -> str:
    """Append an encoded query string, using ``?`` or ``&`` as appropriate."""
    if not query:
        return url
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}{query}"


class RequestBuilder:
    """
    Builds signed transport requests.

    Everything except the nonce and digest is deterministic: two builds of
    the same logical request differ only in ``random`` and ``md5``.
    """

    def __init__(self, base_url: str, secret: str, signer: Optional[Signer] = None,
                 err_lang_cn: bool = True):
        """
        Initialize builder.

        Args:
            base_url: Appliance API root, e.g. ``http://10.0.0.1:9999/v1/``
            secret: Shared secret configured on the appliance
            signer: Signer used for nonce/digest pairs
            err_lang_cn: Ask the appliance for zh-CN error messages
        """
        self.base_url = base_url
        self.secret = secret
        self.signer = signer if signer is not None else Signer()
        self.err_lang_cn = err_lang_cn

    def headers(self) -> Dict[str, str]:
        """Fixed headers sent with every request."""
        headers = {HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON}
        if self.err_lang_cn:
            headers[HEADER_ACCEPT_LANGUAGE] = LANGUAGE_CN
        return headers

    def build(self, logical: LogicalRequest) -> TransportRequest:
        """
        Build a signed request.

        Args:
            logical: Request as described by an endpoint binding

        Returns:
            TransportRequest with URL, headers and (for POST) a JSON body

        Raises:
            ArgumentError: If the verb is not GET/POST, or a GET carries body fields
        """
        method = logical.method.upper()
        if method not in (METHOD_GET, METHOD_POST):
            raise ArgumentError(
                f"unsupported HTTP method {logical.method!r}, tunnel it through _method"
            )
        if method == METHOD_GET and logical.data:
            raise ArgumentError("body fields are only sent with POST requests")

        url = append_query(self.base_url + logical.path.lstrip('/'), encode_query(logical.query))
        nonce, digest = self.signer.sign(self.secret)

        body = None
        if method == METHOD_GET:
            url = append_query(url, encode_query({FIELD_RANDOM: nonce, FIELD_MD5: digest}))
        else:
            data = dict(logical.data or {})
            data[FIELD_RANDOM] = nonce
            data[FIELD_MD5] = digest
            body = json.dumps(data, ensure_ascii=False).encode('utf-8')

        return TransportRequest(method=method, url=url, headers=self.headers(), body=body)
