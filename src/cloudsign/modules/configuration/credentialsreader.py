from ..awscredentials import AWSCredentials
from .readerutils import ReaderUtils
from ..logger.logger import get_logger


class CredentialsReader(object):
    """
    The credentials file reader class that is responsible for reading and parsing file containing AWS credentials.

    Two formats are accepted. The AWS CLI format with one section per profile:
    [default]
    aws_access_key_id = value
    aws_secret_access_key = value2
    aws_session_token = value3

    and the flat format without sections:
    aws_access_key = value
    aws_secret_key = value2

    Keyword arguments:
    creds_path -- the path for the credentials file to be parsed (Required)
    profile -- the section holding the credentials (default 'default')
    """

    _LOGGER = get_logger(__name__)
    DEFAULT_PROFILE = "default"
    _ACCESS_CONFIG_KEYS = ("aws_access_key_id", "aws_access_key")
    _SECRET_CONFIG_KEYS = ("aws_secret_access_key", "aws_secret_key")
    _TOKEN_CONFIG_KEY = "aws_session_token"

    def __init__(self, creds_path, profile=DEFAULT_PROFILE):
        self.creds_path = creds_path
        self.profile = profile or self.DEFAULT_PROFILE
        self.credentials = None
        try:
            self.reader_utils = self._get_reader_utils(creds_path)
            self._parse_credentials_file()
        except (CredentialsReaderException, ValueError) as e:
            raise CredentialsReaderException(e)
        except IOError:
            self._LOGGER.warning("Cannot read AWS credentials from file: " + creds_path)

    def _get_reader_utils(self, creds_path):
        """
        Restricts reading to the profile section. Only files without any section
        are read as a whole, and only for the default profile.
        """
        reader_utils = ReaderUtils(creds_path)
        sections = reader_utils.get_sections()
        if self.profile in sections:
            return ReaderUtils(creds_path, self.profile)
        if sections or self.profile != self.DEFAULT_PROFILE:
            raise CredentialsReaderException("Profile '" + self.profile + "' not found in the credentials file.")
        return reader_utils

    def _parse_credentials_file(self):
        """
        This method retrieves values from the credentials file
        """
        access_key = self._get_first_value(self._ACCESS_CONFIG_KEYS)
        secret_key = self._get_first_value(self._SECRET_CONFIG_KEYS)
        if not access_key or not secret_key:
            raise CredentialsReaderException("Access key or secret key is missing in the credentials file.")
        token = self.reader_utils.get_string(self._TOKEN_CONFIG_KEY) or None
        self.credentials = AWSCredentials(access_key, secret_key, token)

    def _get_first_value(self, keys):
        for key in keys:
            value = self.reader_utils.get_string(key)
            if value:
                return value
        return ""


class CredentialsReaderException(Exception):
    pass
