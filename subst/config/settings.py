"""
settings.py

Application configuration for SUBST.

Features:
- Centralized application configuration using Pydantic settings
- Defaults for the command-line renderer (symbols, error mode, file pattern)
- Shared rich console

Usage:
Import appsettings for application configuration values. The rendering core
does not consult these settings; it is configured explicitly through
`RenderOptions`.
"""

from typing import Final
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from subst.models.dataModel import DEFAULT_TOKENS

# Console instance for rich output
console: Final[Console] = Console()

DEFAULT_PATTERN: Final[str] = "**/*.tmpl"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with SUBST_ prefix.

    Attributes:
        beQuiet: Suppress debug logging output
        noComplain: Suppress error reports for templates that fail to render
        tokens: Default symbol string for the command line
        throws: Default error mode for the command line
        pattern: Default glob for template files under the input directory
    """

    beQuiet: bool = False
    noComplain: bool = False

    tokens: str = DEFAULT_TOKENS
    throws: bool = False
    pattern: str = DEFAULT_PATTERN

    model_config = SettingsConfigDict(
        env_prefix="SUBST_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


# Create the application settings instance
appsettings: Final[App] = App()
