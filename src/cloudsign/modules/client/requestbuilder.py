from urllib.parse import urlsplit

from ..awsutils import get_aws_timestamp, get_request_time
from ..configuration.credentialsresolver import MissingCredentialsException
from ..logger.logger import get_logger
from .canonicalizer import Canonicalizer, InvalidInputEncodingException
from .request import CredentialScope, SignedRequest
from .result import Result
from .signer import Signer


class RequestBuilder(object):
    """
    The request builder is responsible for turning a Request into a SignedRequest ready to be
    handed over to the transport. It captures the request time once per signing attempt and
    threads that single instant through the X-Amz-Date header, the credential scope and
    the string to sign.

    Keyword arguments:
    credentials -- The AWSCredentials object containing access and secret keys
    options -- The SigningOptions object with region, service and endpoint
    clock -- callable returning the current UTC datetime (default awsutils.get_request_time)
    """
    _LOGGER = get_logger(__name__)
    HOST_HEADER = "Host"
    CONTENT_LENGTH_HEADER = "Content-Length"
    DATE_HEADER = "X-Amz-Date"
    SECURITY_TOKEN_HEADER = "X-Amz-Security-Token"
    AUTHORIZATION_HEADER = "Authorization"

    def __init__(self, credentials, options, clock=get_request_time):
        self.credentials = credentials
        self.options = options
        self.clock = clock
        self.canonicalizer = Canonicalizer()
        self.signer = Signer()

    def sign(self, request):
        """ Same as create_signed_request, but signing errors are returned as a failed Result """
        try:
            return Result.success(self.create_signed_request(request))
        except (MissingCredentialsException, InvalidInputEncodingException) as e:
            return Result.failure(e)

    def create_signed_request(self, request):
        """ Creates a ready to send request with the Authorization header attached """
        credentials = self.credentials
        if credentials is None or not credentials.is_complete():
            msg = "AWS access key or secret key is missing, cannot sign the request."
            self._LOGGER.error(msg)
            raise MissingCredentialsException(msg)
        body = self.canonicalizer.encode_payload(request.payload)
        request_time = self.clock()
        headers = self._get_standard_headers(body, request_time) + self._get_caller_headers(request)
        canonical_request, signed_headers = self.canonicalizer.canonicalize(
            request.method, request.path_segments, request.query_params, headers, body)
        self._LOGGER.debug("Signing " + str(request.method) + " request for " + self.get_host()
                           + " with signed headers: " + signed_headers)
        authorization = self._create_authorization_header(canonical_request, signed_headers, request_time)
        rendered_headers = self._render_headers(headers)
        rendered_headers[self.AUTHORIZATION_HEADER] = authorization
        return SignedRequest(request.method, self._build_url(request), rendered_headers, body)

    def _create_authorization_header(self, canonical_request, signed_headers, request_time):
        region = self.options.region
        service = self.options.service
        credential_scope = CredentialScope.from_timestamp(request_time, region, service)
        string_to_sign = self.signer.build_string_to_sign(request_time, region, service,
                                                          self.signer.hash(canonical_request))
        signing_key = self.signer.derive_signing_key(self.credentials.secret_key, credential_scope.date,
                                                     region, service)
        return self.signer.assemble_authorization_header(self.credentials.access_key, signing_key,
                                                         string_to_sign, credential_scope, signed_headers)

    def _get_standard_headers(self, body, request_time):
        headers = [(self.HOST_HEADER, self.get_host()),
                   (self.CONTENT_LENGTH_HEADER, str(len(body))),
                   (self.DATE_HEADER, get_aws_timestamp(request_time))]
        if self.credentials.token:
            headers.append((self.SECURITY_TOKEN_HEADER, self.credentials.token))
        return headers

    def _get_caller_headers(self, request):
        """ Drops caller headers which would clash with the headers computed here """
        reserved = {self.HOST_HEADER.lower(), self.CONTENT_LENGTH_HEADER.lower(), self.DATE_HEADER.lower(),
                    self.SECURITY_TOKEN_HEADER.lower(), self.AUTHORIZATION_HEADER.lower()}
        headers = []
        for name, value in request.headers:
            if self.canonicalizer.normalize_header_name(name) in reserved:
                self._LOGGER.warning("Ignoring caller supplied header '" + str(name) + "', it is computed by the signer.")
                continue
            headers.append((name, value))
        return headers

    def _render_headers(self, headers):
        """ Joins repeated headers into one comma separated value keyed by the first spelling seen """
        rendered = {}
        names = {}
        for name, value in headers:
            value = self.canonicalizer.normalize_header_value(value)
            normalized_name = self.canonicalizer.normalize_header_name(name)
            key = names.setdefault(normalized_name, self._display_name(name))
            if key in rendered:
                rendered[key] = rendered[key] + "," + value
            else:
                rendered[key] = value
        return rendered

    def _display_name(self, name):
        if isinstance(name, bytes):
            name = name.decode("utf-8")
        return str(name).strip()

    def _build_url(self, request):
        path = "/" + "/".join(self.canonicalizer.uri_encode(self.canonicalizer.normalize_path_segment(segment))
                              for segment in request.path_segments)
        querystring = self.canonicalizer.build_canonical_querystring(request.query_params)
        url = self.get_endpoint().rstrip("/") + path
        if querystring:
            url += "?" + querystring
        return url

    def get_endpoint(self):
        """ Returns the endpoint from the options or derives one from service and region """
        if self.options.endpoint:
            parts = urlsplit(self.options.endpoint)
            return parts.scheme + "://" + parts.netloc + "/"
        if self.options.region == "localhost":
            return "http://localhost/"
        return "https://" + self.get_host() + "/"

    def get_host(self):
        """ Returns the endpoint's hostname derived from the region """
        if self.options.endpoint:
            return urlsplit(self.options.endpoint).netloc
        region = self.options.region
        if region == "localhost":
            return "localhost"
        elif region.startswith("cn-"):
            return self.options.service + "." + region + ".amazonaws.com.cn"
        return self.options.service + "." + region + ".amazonaws.com"
