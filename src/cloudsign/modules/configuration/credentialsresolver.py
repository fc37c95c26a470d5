import os

from ..awscredentials import AWSCredentials
from ..logger.logger import get_logger
from .credentialsreader import CredentialsReader, CredentialsReaderException


class MissingCredentialsException(Exception):
    pass


class CredentialsResolver(object):
    """
    The credentials resolver finds the access key and secret key used for signing.

    The sources are checked in the following order:
    1. Environment variables AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY and AWS_SESSION_TOKEN
    2. Static keys in the configuration file (aws_access_key and aws_secret_key)
    3. The credentials file section selected by the profile name

    Keyword arguments:
    config_reader -- the ConfigReader with static keys, profile and credentials path (default None)
    environ -- the environment mapping (default os.environ)
    """

    _LOGGER = get_logger(__name__)
    ACCESS_KEY_ENV = "AWS_ACCESS_KEY_ID"
    SECRET_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
    SESSION_TOKEN_ENV = "AWS_SESSION_TOKEN"
    PROFILE_ENV = "AWS_PROFILE"
    CREDENTIALS_FILE_ENV = "AWS_SHARED_CREDENTIALS_FILE"
    _DEFAULT_CREDENTIALS_PATH = os.path.join("~", ".aws", "credentials")

    def __init__(self, config_reader=None, environ=None):
        self.config_reader = config_reader
        self.environ = os.environ if environ is None else environ

    def resolve(self):
        """ Returns AWSCredentials from the first source providing both keys """
        for source, credentials in (("environment variables", self._from_environment),
                                    ("configuration file", self._from_configuration),
                                    ("credentials file", self._from_credentials_file)):
            resolved = credentials()
            if resolved and resolved.is_complete():
                self._LOGGER.info("Using AWS credentials from " + source + ".")
                return resolved
        msg = "Cannot find AWS credentials in the environment, the configuration or the credentials file."
        self._LOGGER.error(msg)
        raise MissingCredentialsException(msg)

    def _from_environment(self):
        access_key = self.environ.get(self.ACCESS_KEY_ENV)
        secret_key = self.environ.get(self.SECRET_KEY_ENV)
        if access_key and secret_key:
            return AWSCredentials(access_key, secret_key, self.environ.get(self.SESSION_TOKEN_ENV) or None)
        return None

    def _from_configuration(self):
        if self.config_reader and self.config_reader.access_key and self.config_reader.secret_key:
            return AWSCredentials(self.config_reader.access_key, self.config_reader.secret_key)
        return None

    def _from_credentials_file(self):
        try:
            return CredentialsReader(self.get_credentials_path(), self.get_profile()).credentials
        except CredentialsReaderException as e:
            msg = "Cannot use the credentials file. Cause: " + str(e)
            self._LOGGER.error(msg)
            raise MissingCredentialsException(msg) from e

    def get_profile(self):
        if self.config_reader and self.config_reader.profile:
            return self.config_reader.profile
        return self.environ.get(self.PROFILE_ENV) or CredentialsReader.DEFAULT_PROFILE

    def get_credentials_path(self):
        if self.config_reader and self.config_reader.credentials_path:
            return self.config_reader.credentials_path
        return os.path.expanduser(self.environ.get(self.CREDENTIALS_FILE_ENV) or self._DEFAULT_CREDENTIALS_PATH)
