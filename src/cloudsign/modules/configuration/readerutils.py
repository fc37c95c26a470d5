import re
import os

from ..logger.logger import get_logger


class ReaderUtils(object):
    """
    Reads 'key = value' entries from simple configuration files. Files may be split
    into '[section]' blocks, as AWS credentials files are; when a section is given only
    the entries of that block are considered, otherwise the first matching entry wins.

    Keyword arguments:
    path -- the path of the file to read (Required)
    section -- the name of the section to read entries from (default None, whole file)
    """

    _LOGGER = get_logger(__name__)
    _COMMENT_CHARACTERS = ('#', ';')
    _SECTION_REGEX = re.compile(r"^\[\s*(?:profile\s+)?([^\]]+?)\s*\]$")

    def __init__(self, path, section=None):
        self.path = path
        self.section = section
        if not os.path.exists(path):
            raise IOError("Configuration file does not exist at: " + path)

    def get_string(self, key):
        return self._find_value_by_key(key)

    def get_boolean(self, key):
        value = self._find_value_by_key(key)
        if value.lower() == "true":
            return True
        elif value.lower() == "false":
            return False
        raise ValueError("Provided configuration value '" + value + "' does not specify boolean value.")

    def try_get_boolean(self, key, default_value):
        try:
            return self.get_boolean(key)
        except ValueError:
            return default_value

    def get_float(self, key):
        value = self._find_value_by_key(key)
        try:
            return float(value)
        except ValueError:
            raise ValueError("Provided configuration value '" + value + "' does not specify a number.")

    def try_get_float(self, key, default_value):
        try:
            return self.get_float(key)
        except ValueError:
            return default_value

    def has_section(self, section):
        return section in self.get_sections()

    def get_sections(self):
        """ Returns the names of all [section] headers in file order """
        sections = []
        for entry in self._load_config_as_list(self.path):
            match = self._SECTION_REGEX.match(entry.strip())
            if match:
                sections.append(match.group(1))
        return sections

    def _find_value_by_key(self, key):
        current_section = None
        for entry in self._load_config_as_list(self.path):
            entry = entry.strip()
            if not entry or entry[0] in self._COMMENT_CHARACTERS:
                continue  # skip empty and commented lines
            section_match = self._SECTION_REGEX.match(entry)
            if section_match:
                current_section = section_match.group(1)
                continue
            if self.section is not None and current_section != self.section:
                continue
            try:
                entry_key, entry_value = entry.split('=', 1)
            except ValueError:
                self._LOGGER.error("Cannot read configuration entry: " + str(entry))
                raise ValueError("Invalid syntax for entry '" + entry + "'.")
            if entry_key.strip() == key:
                return self._strip_quotes(entry_value.strip()).strip()
        return ""

    def _strip_quotes(self, string):
        return re.sub(r"^'|'$|^\"|\"$", '', string)

    def _load_config_as_list(self, path):
        """
        This method reads the configuration file and generates a list of its lines
        """
        with open(path) as config_file:
            return config_file.read().split('\n')
