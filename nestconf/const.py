"""
Application constants and metadata.
"""

# Application info
APP_NAME = "nestconf"
APP_VERSION = "0.1.0"

# Name used for documents that were not loaded from a named source
DEFAULT_SOURCE_NAME = "<string>"

# Default syntax markers
DEFAULT_KEY_VALUE_DELIMITER = "="
DEFAULT_SECTION_BODY_BEGIN = ":"
DEFAULT_SINGLE_LINE_COMMENT_BEGIN = "//"
DEFAULT_MULTI_LINE_COMMENT_BEGIN = "/*"
DEFAULT_MULTI_LINE_COMMENT_END = "*/"
DEFAULT_LONG_VALUE_BEGIN = '"'
DEFAULT_LONG_VALUE_END = '"'
DEFAULT_INCLUDE_BEGIN = "[include]"
