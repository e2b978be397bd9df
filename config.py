"""
Configuration for the SQL formatter MCP server.

Defaults live on the dataclass; environment variables override them when the
server starts.
"""

import os
from dataclasses import dataclass


@dataclass
class ServerConfig:
    server_name: str = "sql-formatter"
    dialect: str = "auto"  # dialect used by verify_formatting when none is given
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        defaults = cls()
        return cls(
            server_name=os.getenv("SQL_FORMATTER_SERVER_NAME", defaults.server_name),
            dialect=os.getenv("SQL_FORMATTER_DIALECT", defaults.dialect),
            log_level=os.getenv("SQL_FORMATTER_LOG_LEVEL", defaults.log_level).upper(),
        )
