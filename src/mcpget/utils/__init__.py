# ABOUTME: Utility modules for mcp-get
# ABOUTME: Exports JSONC handling and validation functions

from mcpget.utils.jsonc import strip_jsonc
from mcpget.utils.validation import ValidationError, check_server_config, check_transport

__all__ = [
    "strip_jsonc",
    "ValidationError",
    "check_server_config",
    "check_transport",
]
