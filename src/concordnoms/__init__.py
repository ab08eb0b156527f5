"""ConcordNoms - Rapprochement approximatif de noms entre deux tableurs."""

from concordnoms.config import (
    ConcordNomsError,
    ConfigError,
    ConfigFileError,
    MatchCancelled,
    MatchConfig,
    ProjectConfig,
)
from concordnoms.io_tables import TableFileError

__all__ = [
    "__version__",
    "ConcordNomsError",
    "ConfigError",
    "ConfigFileError",
    "MatchCancelled",
    "MatchConfig",
    "ProjectConfig",
    "TableFileError",
]

__version__ = "0.1.0"
