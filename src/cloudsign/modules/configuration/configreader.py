from ..logger.logger import get_logger
from .readerutils import ReaderUtils


class ConfigReader(object):
    """
    The configuration reader class that is responsible for reading and parsing the signing configuration file.

    The configuration file is a simple text file in format:
    key = value
    key2 = value2

    Accepted configuration parameters:
    region -- the region code used for the credential scope
    service -- the service code used for the credential scope
    endpoint -- the endpoint URL, derived from service and region when missing
    profile -- the credentials file section holding the credentials
    credentials_path -- the path to the file with AWS access and secret keys
    aws_access_key -- static AWS access key, takes precedence over the credentials file
    aws_secret_key -- static AWS secret key, takes precedence over the credentials file
    proxy_server_name -- the https proxy used to reach the endpoint
    proxy_server_port -- the port of the https proxy
    debug -- the mode in which every request is traced to a log file
    connection_timeout -- seconds to wait for the connection to be established
    response_timeout -- seconds to wait for the server response

    Keyword arguments:
    config_path -- the path for the configuration file to be parsed (Required)
    """

    _LOGGER = get_logger(__name__)
    _DEBUG_DEFAULT_VALUE = False
    _CONNECTION_TIMEOUT_DEFAULT_VALUE = 1
    _RESPONSE_TIMEOUT_DEFAULT_VALUE = 3
    REGION_CONFIG_KEY = "region"
    SERVICE_CONFIG_KEY = "service"
    ENDPOINT_CONFIG_KEY = "endpoint"
    PROFILE_CONFIG_KEY = "profile"
    CREDENTIALS_PATH_KEY = "credentials_path"
    ACCESS_KEY_CONFIG_KEY = "aws_access_key"
    SECRET_KEY_CONFIG_KEY = "aws_secret_key"
    DEBUG_CONFIG_KEY = "debug"
    PROXY_SERVER_NAME_KEY = "proxy_server_name"
    PROXY_SERVER_PORT_KEY = "proxy_server_port"
    CONNECTION_TIMEOUT_KEY = "connection_timeout"
    RESPONSE_TIMEOUT_KEY = "response_timeout"

    def __init__(self, config_path):
        self.config_path = config_path
        self.region = ''
        self.service = ''
        self.endpoint = ''
        self.profile = ''
        self.credentials_path = ''
        self.access_key = ''
        self.secret_key = ''
        self.proxy_server_name = ''
        self.proxy_server_port = ''
        self.debug = self._DEBUG_DEFAULT_VALUE
        self.connection_timeout = self._CONNECTION_TIMEOUT_DEFAULT_VALUE
        self.response_timeout = self._RESPONSE_TIMEOUT_DEFAULT_VALUE
        try:
            self.reader_utils = ReaderUtils(config_path)
            self._parse_config_file()
        except Exception as e:
            self._LOGGER.warning("Cannot read configuration file at: " + config_path + ". Cause: " + str(e))
            raise e

    def _parse_config_file(self):
        """
        This method retrieves values from the preprocessed configuration file
        """
        self.region = self.reader_utils.get_string(self.REGION_CONFIG_KEY)
        self.service = self.reader_utils.get_string(self.SERVICE_CONFIG_KEY)
        self.endpoint = self.reader_utils.get_string(self.ENDPOINT_CONFIG_KEY)
        self.profile = self.reader_utils.get_string(self.PROFILE_CONFIG_KEY)
        self.credentials_path = self.reader_utils.get_string(self.CREDENTIALS_PATH_KEY)
        self.access_key = self.reader_utils.get_string(self.ACCESS_KEY_CONFIG_KEY)
        self.secret_key = self.reader_utils.get_string(self.SECRET_KEY_CONFIG_KEY)
        self.proxy_server_name = self.reader_utils.get_string(self.PROXY_SERVER_NAME_KEY)
        self.proxy_server_port = self.reader_utils.get_string(self.PROXY_SERVER_PORT_KEY)
        self.debug = self.reader_utils.try_get_boolean(self.DEBUG_CONFIG_KEY, self._DEBUG_DEFAULT_VALUE)
        self.connection_timeout = self.reader_utils.try_get_float(self.CONNECTION_TIMEOUT_KEY,
                                                                  self._CONNECTION_TIMEOUT_DEFAULT_VALUE)
        self.response_timeout = self.reader_utils.try_get_float(self.RESPONSE_TIMEOUT_KEY,
                                                                self._RESPONSE_TIMEOUT_DEFAULT_VALUE)
