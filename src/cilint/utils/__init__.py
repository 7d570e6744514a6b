"""Shared utilities."""

from ._logging import LogFormatType, create_cli_logger, open_log_file

__all__ = ["LogFormatType", "create_cli_logger", "open_log_file"]
