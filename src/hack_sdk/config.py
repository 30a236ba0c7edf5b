"""
Hack SDK - Assembler Configuration
==================================

Settings that change how a source file is assembled. Configuration can
come from:
- Default values (defined here)
- Environment variables
- Command-line flags (applied by the CLI on top of the above)
"""

from dataclasses import dataclass
import os

from hack_sdk.assembler.tables import VARIABLE_BASE


@dataclass
class AssemblerConfig:
    """
    Configuration for one assembler instance.

    Attributes:
        variable_base: First RAM address given to variables (default: 16)
        allow_redefinition: Let a label rebind a name that already has an
            address, last binding winning (default: False, which makes
            such a label a DuplicateSymbolError)
    """

    variable_base: int = VARIABLE_BASE
    allow_redefinition: bool = False

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_VARIABLE_BASE: First variable address (integer)
            HACKASM_ALLOW_REDEFINITION: "1", "true" or "yes" to enable

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if base := os.environ.get("HACKASM_VARIABLE_BASE"):
            try:
                value = int(base)
            except ValueError:
                value = -1
            if value >= 0:
                config.variable_base = value

        if redefinition := os.environ.get("HACKASM_ALLOW_REDEFINITION"):
            config.allow_redefinition = redefinition.strip().lower() in ("1", "true", "yes")

        return config
