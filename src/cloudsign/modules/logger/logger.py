import abc
import logging


def get_logger(channel=None):
    """
    Provides the default logger for the application.
    """
    return _StandardLogger(channel)


class _Logger(object, metaclass=abc.ABCMeta):
    """
    The base class for logger, all loggers have to extend this class and provide implementation for the basic logging methods.
    """

    @abc.abstractmethod
    def debug(self, msg):
        pass

    @abc.abstractmethod
    def info(self, msg):
        pass

    @abc.abstractmethod
    def warning(self, msg):
        pass

    @abc.abstractmethod
    def error(self, msg):
        pass


class _StandardLogger(_Logger):
    """
    The wrapper class for the standard library logging functionalities.
    """
    _PLUGIN = "CloudSign"

    def __init__(self, channel):
        self.channel = channel
        self.logger = logging.getLogger(channel or _StandardLogger._PLUGIN)
        self.prefix = self._build_prefix()

    def _build_prefix(self):
        """
        Creates a prefix which will be attached to each message passed through this logger.
        Format example: "[CloudSign][cloudsign.modules.client.apiclient] "
        """
        prefix = []
        if _StandardLogger._PLUGIN:
            prefix.append("[" + _StandardLogger._PLUGIN + "]")
        if self.channel:
            prefix.append("[" + self.channel + "]")
        return "".join(prefix) + " "

    def debug(self, msg):
        self.logger.debug(self.prefix + msg)

    def info(self, msg):
        self.logger.info(self.prefix + msg)

    def warning(self, msg):
        self.logger.warning(self.prefix + msg)

    def error(self, msg):
        self.logger.error(self.prefix + msg)
