from collections import namedtuple
from datetime import datetime

from ..awsutils import get_datestamp

V4_TERMINATOR = "aws4_request"


class Request(namedtuple("Request", "method path_segments query_params headers payload")):
    """
    The unsigned request as supplied by the caller. Instances are immutable.

    Keyword arguments:
    method -- the HTTP verb
    path_segments -- tuple of raw (unencoded) path segments
    query_params -- tuple of (key, value) pairs, duplicate keys are allowed
    headers -- tuple of (name, value) pairs in the order supplied by the caller
    payload -- the request body as bytes, or text which is UTF-8 encoded when signing
    """
    __slots__ = ()

    @classmethod
    def create(cls, method="GET", path_segments=(), query_params=(), headers=None, payload=b""):
        """
        Builds a Request from loosely typed input. Query parameters may be given as a mapping
        or as a sequence of pairs, headers as a mapping whose values are a string or a list
        of strings, or as a sequence of pairs. A path string is split on "/".
        """
        if isinstance(path_segments, str):
            path_segments = _split_path(path_segments)
        if hasattr(query_params, "items"):
            query_params = query_params.items()
        return cls(method, tuple(path_segments), tuple((key, value) for key, value in query_params),
                   _flatten_headers(headers), _to_payload(payload))


def _flatten_headers(headers):
    if not headers:
        return ()
    if hasattr(headers, "items"):
        headers = headers.items()
    pairs = []
    for name, value in headers:
        if isinstance(value, (list, tuple)):
            pairs.extend((name, item) for item in value)
        else:
            pairs.append((name, value))
    return tuple(pairs)


def _split_path(path):
    # only one leading and one trailing slash are dropped, empty interior segments are kept
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    if not path:
        return ()
    return path.split("/")


def _to_payload(payload):
    if payload is None:
        return b""
    if isinstance(payload, str):
        return payload
    return bytes(payload)


class CredentialScope(namedtuple("CredentialScope", "date region service")):
    """
    The date/region/service triple narrowing the validity of a derived signing key.
    The date is always the UTC day of the instant the request is signed at.
    """
    __slots__ = ()

    @classmethod
    def from_timestamp(cls, request_time, region, service):
        return cls(datetime.strptime(get_datestamp(request_time), "%Y%m%d").date(), region, service)

    @property
    def datestamp(self):
        return self.date.strftime("%Y%m%d")

    def __str__(self):
        return self.datestamp + "/" + self.region + "/" + self.service + "/" + V4_TERMINATOR


SignedRequest = namedtuple("SignedRequest", "method url headers body")


_SigningOptions = namedtuple("SigningOptions", "region service endpoint connection_timeout response_timeout "
                                               "proxy_server_name proxy_server_port debug")


class SigningOptions(_SigningOptions):
    """
    Per-call signing and transport options.

    Keyword arguments:
    region -- the region code used in the credential scope (Required)
    service -- the service code used in the credential scope (Required)
    endpoint -- the endpoint URL, derived from service and region when empty (default '')
    connection_timeout -- seconds to wait for establishing the server connection (default 1)
    response_timeout -- seconds to wait for the server response (default 3)
    proxy_server_name -- https proxy host, no proxy when None (default None)
    proxy_server_port -- https proxy port (default None)
    debug -- write a curl trace of every request to the temp directory (default False)
    """
    __slots__ = ()

    def __new__(cls, region, service, endpoint="", connection_timeout=1, response_timeout=3,
                proxy_server_name=None, proxy_server_port=None, debug=False):
        return super(SigningOptions, cls).__new__(cls, region, service, endpoint, connection_timeout,
                                                  response_timeout, proxy_server_name, proxy_server_port, debug)
