"""
cloudsign - AWS Signature Version 4 request signing without a vendor SDK.
"""
from .modules.plugininfo import PLUGIN_VERSION

__version__ = PLUGIN_VERSION
