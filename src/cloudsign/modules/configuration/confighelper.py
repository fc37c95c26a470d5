import os

from ..client.request import SigningOptions
from ..logger.logger import get_logger
from .configreader import ConfigReader
from .credentialsresolver import CredentialsResolver


class ConfigHelper(object):
    """
    The configuration helper is responsible for obtaining configuration data from number
    of sources based on predefined configuration precedence.

    The configuration precedence from highest to lowest:
    1. Configuration File
    2. Environment Variables (AWS_REGION, AWS_DEFAULT_REGION)
    3. Constructor defaults

    Credentials are resolved through the CredentialsResolver and have their own precedence.

    Keyword arguments:
    config_path -- The path to the configuration file (default None, no configuration file)
    service -- The service code used when the configuration file does not name one (default None)
    environ -- The environment mapping (default os.environ)
    """

    _LOGGER = get_logger(__name__)
    REGION_ENV_KEYS = ("AWS_REGION", "AWS_DEFAULT_REGION")

    def __init__(self, config_path=None, service=None, environ=None):
        self._config_path = config_path
        self._environ = os.environ if environ is None else environ
        self._default_service = service or ''
        self.region = ''
        self.service = ''
        self.endpoint = ''
        self.debug = False
        self.credentials = None
        self._load_configuration()

    @property
    def options(self):
        """ Returns the SigningOptions built from the loaded configuration """
        config_reader = self.config_reader
        if config_reader is None:
            return SigningOptions(self.region, self.service, self.endpoint)
        return SigningOptions(self.region, self.service, self.endpoint,
                              connection_timeout=config_reader.connection_timeout,
                              response_timeout=config_reader.response_timeout,
                              proxy_server_name=config_reader.proxy_server_name or None,
                              proxy_server_port=config_reader.proxy_server_port or None,
                              debug=self.debug)

    def _load_configuration(self):
        """ Try and load configuration based on the predefined precedence """
        self.config_reader = ConfigReader(self._config_path) if self._config_path else None
        self._load_region()
        self._load_service()
        if self.config_reader:
            self.endpoint = self.config_reader.endpoint
            self.debug = self.config_reader.debug
        self._check_configuration_integrity()
        self.credentials = CredentialsResolver(self.config_reader, self._environ).resolve()

    def _load_region(self):
        """
        Loads region from the configuration file, if such file does not exist or does not
        contain region information, then the environment is used.
        """
        if self.config_reader and self.config_reader.region:
            self.region = self.config_reader.region
            return
        for key in self.REGION_ENV_KEYS:
            if self._environ.get(key):
                self.region = self._environ[key]
                return
        self._LOGGER.warning("Region is not set in the configuration file nor in the environment.")

    def _load_service(self):
        if self.config_reader and self.config_reader.service:
            self.service = self.config_reader.service
        else:
            self.service = self._default_service

    def _check_configuration_integrity(self):
        """ Check the state of this configuration helper object to ensure that all required values are loaded """
        if not self.region:
            raise ValueError("Region is missing")
        if not self.service:
            raise ValueError("Service is missing")
