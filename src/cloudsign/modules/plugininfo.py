PLUGIN_NAME = "cloudsign"
PLUGIN_VERSION = "1.0.0"
