import re
import os
import threading

from concurrent.futures import CancelledError, ThreadPoolExecutor
from tempfile import gettempdir

from requests import RequestException
from requests.adapters import HTTPAdapter
from requests.sessions import Session

from ..awsutils import get_request_time
from ..logger.logger import get_logger
from ..plugininfo import PLUGIN_NAME, PLUGIN_VERSION
from .requestbuilder import RequestBuilder


class TransportFailureException(Exception):
    """
    Raised when the request could not be delivered or the service rejected it.
    The signer cannot tell an incorrect signature apart from any other rejection.
    """

    def __init__(self, msg, status_code=None, response=None):
        super(TransportFailureException, self).__init__(msg)
        self.status_code = status_code
        self.response = response


class ApiClient(object):
    """
    This is a simple HTTPClient wrapper which signs requests with AWS Signature Version 4
    and sends them to the configured endpoint.

    Keyword arguments:
    credentials -- the AWSCredentials object containing access_key, secret_key and optional token
    options -- the SigningOptions object with region, service, endpoint, timeouts, proxy and debug
    clock -- callable returning the current UTC datetime, passed to the RequestBuilder (default None)
    """

    _LOGGER = get_logger(__name__)
    _TOTAL_RETRIES = 1
    _LOG_FILE_MAX_SIZE = 10*1024*1024
    _TRACE_LOG_NAME = "cloudsign_request_trace_log"
    _MAX_WORKERS = 4

    def __init__(self, credentials, options, clock=None):
        self.request_builder = RequestBuilder(credentials, options, clock or get_request_time)
        self._validate_and_set_endpoint(self.request_builder.get_endpoint())
        self.timeout = (options.connection_timeout, options.response_timeout)
        self.proxy_server_name = options.proxy_server_name
        self.proxy_server_port = options.proxy_server_port
        self.debug = options.debug
        self._executor = None
        self._executor_lock = threading.Lock()
        self._prepare_session()

    def _prepare_session(self):
        self.session = Session()
        if self.proxy_server_name:
            proxy_server = self.proxy_server_name
            self._LOGGER.info("Using proxy server: " + proxy_server)
            if self.proxy_server_port:
                proxy_server = proxy_server + ":" + str(self.proxy_server_port)
                self._LOGGER.info("Using proxy server port: " + str(self.proxy_server_port))
            proxies = {'https': proxy_server}
            self.session.proxies.update(proxies)
        else:
            self._LOGGER.info("No proxy server is in use")
        self.session.mount("http://", HTTPAdapter(max_retries=self._TOTAL_RETRIES))
        self.session.mount("https://", HTTPAdapter(max_retries=self._TOTAL_RETRIES))

    def _validate_and_set_endpoint(self, endpoint):
        pattern = re.compile("http[s]?://*/")
        if pattern.match(endpoint) or "localhost" in endpoint:
            self.endpoint = endpoint
        else:
            msg = "Provided endpoint '" + endpoint + "' is not a valid URL."
            self._LOGGER.error(msg)
            raise ApiClient.InvalidEndpointException(msg)

    def call(self, request):
        """
        Signs the request and sends it. Signing errors and transport failures are raised to the caller.
        """
        signed_request = self.request_builder.create_signed_request(request)
        return self.send(signed_request)

    def call_async(self, request, on_success=None, on_error=None):
        """
        Runs call() on a worker thread and returns the Future. Exactly one of on_success(response)
        and on_error(exception) is invoked, exactly once, when the call completes. A cancelled call
        is reported to on_error with a CancelledError.
        """
        future = self._get_executor().submit(self.call, request)
        if on_success is not None or on_error is not None:
            future.add_done_callback(lambda done: self._dispatch(done, on_success, on_error))
        return future

    def _dispatch(self, future, on_success, on_error):
        if future.cancelled():
            error = CancelledError()
        else:
            error = future.exception()
        if error is None:
            if on_success is not None:
                on_success(future.result())
        elif on_error is not None:
            on_error(error)

    def send(self, signed_request):
        """
        Sends an already signed request. Headers must not be changed after signing,
        only the User-Agent is added here as it is not part of the signature.
        """
        try:
            return self._run_request(signed_request)
        except RequestException as e:
            response = getattr(e, "response", None)
            status_code = response.status_code if response is not None else None
            msg = "Could not send " + signed_request.method + " request to '" + signed_request.url + "'. [Exception: " + str(e) + "]"
            self._LOGGER.warning(msg)
            raise TransportFailureException(msg, status_code, response) from e

    def close(self):
        self.session.close()
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    def _get_executor(self):
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self._MAX_WORKERS)
            return self._executor

    def _run_request(self, signed_request):
        """
        Executes HTTP request with timeout using the signed url, headers and body.
        """
        if self.debug:
            self._trace_request(signed_request)
        headers = dict(signed_request.headers)
        headers.update(self._get_custom_headers())
        result = self.session.request(signed_request.method, signed_request.url, headers=headers,
                                      data=signed_request.body, timeout=self.timeout)
        result.raise_for_status()
        return result

    def _trace_request(self, signed_request):
        file_path = os.path.join(gettempdir(), self._TRACE_LOG_NAME)
        if os.path.isfile(file_path) and os.path.getsize(file_path) > self._LOG_FILE_MAX_SIZE:
            os.remove(file_path)
        header_flags = "".join(" -H \'" + name + ": " + value + "\'" for name, value in signed_request.headers.items())
        with open(file_path, "a") as logfile:
            logfile.write("curl -i -v --connect-timeout " + str(self.timeout[0]) + " -m " + str(self.timeout[1])
                          + " -X " + signed_request.method + header_flags
                          + " -A \"" + self._get_user_agent_header() + "\" \'" + signed_request.url + "\'")
            logfile.write("\n\n")

    def _get_custom_headers(self):
        """ Returns dictionary of HTTP headers to be attached to each request """
        return {"User-Agent": self._get_user_agent_header()}

    def _get_user_agent_header(self):
        """ Returns the project name and version used as User-Agent information """
        return PLUGIN_NAME + "/" + str(PLUGIN_VERSION)

    class InvalidEndpointException(Exception):
        pass
