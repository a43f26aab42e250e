"""
Unified test infrastructure for mustache-gen.

Modules:
- file_utils: creating and reading files byte-exactly
- cli_utils: running the CLI in a subprocess
- project_builders: sample template/data projects
"""

from .file_utils import write, read
from .cli_utils import run_cli, jload
from .project_builders import (
    GREETING_TEMPLATE, GREETING_EXPECTED, SECOND_CONTENT_TAIL, FRIENDS,
    greeting_template, greeting_expected,
    create_template, create_data, create_config, create_greeting_project,
)

__all__ = [
    # File utilities
    "write", "read",

    # CLI utilities
    "run_cli", "jload",

    # Project builders
    "GREETING_TEMPLATE", "GREETING_EXPECTED", "SECOND_CONTENT_TAIL", "FRIENDS",
    "greeting_template", "greeting_expected",
    "create_template", "create_data", "create_config", "create_greeting_project",
]
