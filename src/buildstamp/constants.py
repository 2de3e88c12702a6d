"""Constants for buildstamp."""

# Project layout
STAMP_DIR_NAME = ".buildstamp"
CONFIG_FILE = "config.toml"
HISTORY_FILE = "history.json"

# Dates in configuration (yyyy-MM-dd)
PROJECT_START_DATE_FORMAT = "%Y-%m-%d"

DEFAULT_VARIABLE_NAME = "BUILD_VERSION"
MIN_FORMAT_LENGTH = 4  # Shorter templates are flagged by `buildstamp check`

# Exit codes
EXIT_INVALID = 1
EXIT_IO_ERROR = 2
