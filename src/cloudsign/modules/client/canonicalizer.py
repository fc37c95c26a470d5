from hashlib import sha256
from urllib.parse import quote

from ..logger.logger import get_logger


class InvalidInputEncodingException(ValueError):
    pass


class Canonicalizer(object):
    """
    The canonicalizer turns the parts of a request into the canonical request string
    described in the official documentation:
    http://docs.aws.amazon.com/general/latest/gr/sigv4-create-canonical-request.html

    All methods are pure, one instance can be shared between threads.
    """
    _LOGGER = get_logger(__name__)
    _UNRESERVED_CHARACTERS = "-_.~"
    _EMPTY_PATH = "/"

    def canonicalize(self, method, path_segments, query_params, headers, payload=b""):
        """
        Returns a tuple of the canonical request string and the signed headers list.
        Every text input is validated before any output is built.
        """
        method = self._to_text(method, "method")
        canonical_uri = self.build_canonical_uri(path_segments)
        canonical_querystring = self.build_canonical_querystring(query_params)
        canonical_headers = self.build_canonical_headers(headers)
        signed_headers = self.build_signed_headers(headers)
        canonical_request = "\n".join([method, canonical_uri, canonical_querystring, canonical_headers,
                                       signed_headers, self.hash_payload(payload)])
        return canonical_request, signed_headers

    def build_canonical_uri(self, path_segments):
        """ Each segment is percent-encoded twice, an empty path yields '/' """
        encoded_segments = [self.uri_encode(self.uri_encode(self.normalize_path_segment(segment)))
                            for segment in path_segments]
        if not encoded_segments:
            return self._EMPTY_PATH
        return "/" + "/".join(encoded_segments)

    def build_canonical_querystring(self, query_params):
        """ Keys and values are encoded once and sorted by key, then by value """
        encoded_pairs = [(self.uri_encode(self._to_text(key, "query key")),
                          self.uri_encode(self._to_text(value, "query value")))
                         for key, value in query_params]
        return "&".join(key + "=" + value for key, value in sorted(encoded_pairs))

    def build_canonical_headers(self, headers):
        """ Returns the sorted 'name:value1,value2\\n' lines concatenated together """
        grouped = self._group_headers(headers)
        return "".join(name + ":" + ",".join(grouped[name]) + "\n" for name in sorted(grouped))

    def build_signed_headers(self, headers):
        """ Returns semicolon delimited list of signed header names """
        return ";".join(sorted(self._group_headers(headers)))

    def hash_payload(self, payload):
        return sha256(self.encode_payload(payload)).hexdigest()

    def encode_payload(self, payload):
        """ Returns the payload as bytes, text payloads are UTF-8 encoded """
        if payload is None:
            return b""
        if isinstance(payload, str):
            return self._to_text(payload, "payload").encode("utf-8")
        return bytes(payload)

    def normalize_header_value(self, value):
        """ Trims the value and collapses internal whitespace runs into a single space """
        return " ".join(self._to_text(value, "header value").split())

    def normalize_header_name(self, name):
        return self._to_text(name, "header name").strip().lower()

    def normalize_path_segment(self, segment):
        return self._to_text(segment, "path segment")

    def uri_encode(self, text):
        """ RFC 3986 percent-encoding, only unreserved characters are left as they are """
        return quote(text, safe=self._UNRESERVED_CHARACTERS)

    def _group_headers(self, headers):
        grouped = {}
        for name, value in headers:
            grouped.setdefault(self.normalize_header_name(name), []).append(self.normalize_header_value(value))
        return grouped

    def _to_text(self, value, description):
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise self._invalid_encoding(description, e) from e
        if not isinstance(value, str):
            return str(value)
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise self._invalid_encoding(description, e) from e
        return value

    def _invalid_encoding(self, description, cause):
        msg = "The " + description + " is not valid UTF-8 text. Cause: " + str(cause)
        self._LOGGER.warning(msg)
        return InvalidInputEncodingException(msg)
