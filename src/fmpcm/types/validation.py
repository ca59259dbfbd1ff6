"""Validation of the client method catalogue.

Every remote procedure in `commands.py` must be reachable through exactly one
client method, on the right capability class:

- base procedures on `BaseClient`
- extended procedures on `ExtendedClient` only, so they are unreachable before
  activation

Client methods register themselves through the `@command` decorator (see
`fmpcm.client.client`), which appends to `PENDING_COMMAND_VALIDATIONS`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .commands import BASE_COMMANDS, EXTENDED_COMMANDS

PENDING_COMMAND_VALIDATIONS: list[tuple[str, str]] = []


@dataclass
class CommandInfo:
    """Client methods found for one remote procedure.

    Attributes:
        command: The wire name of the procedure
        client_methods: Qualified names of client methods calling it
    """

    command: str
    client_methods: list[str] = field(default_factory=list)


def collect_command_registry() -> dict[str, CommandInfo]:
    """Group the registered client methods by remote procedure."""
    # client module registers its methods on import
    import fmpcm.client  # noqa: F401

    registry: dict[str, CommandInfo] = {}
    for command, qualname in PENDING_COMMAND_VALIDATIONS:
        info = registry.setdefault(command, CommandInfo(command))
        if qualname not in info.client_methods:
            info.client_methods.append(qualname)
    return registry


def validate_command_client_correspondence() -> list[str]:
    """Check the catalogue against the registered client methods.

    Returns:
        List of validation error messages, empty if all valid
    """
    errors = []
    registry = collect_command_registry()

    for command in sorted(BASE_COMMANDS | EXTENDED_COMMANDS):
        if command not in registry:
            errors.append(f"Procedure {command} has no client method")

    for command, info in registry.items():
        if command not in BASE_COMMANDS and command not in EXTENDED_COMMANDS:
            errors.append(
                f"Client method(s) {info.client_methods} call unknown procedure "
                + command
            )
            continue
        owners = {name.split(".")[0] for name in info.client_methods}
        if command in BASE_COMMANDS and owners != {"BaseClient"}:
            errors.append(
                f"Base procedure {command} must be implemented on BaseClient only, "
                + f"found on {sorted(owners)}"
            )
        if command in EXTENDED_COMMANDS and owners != {"ExtendedClient"}:
            errors.append(
                f"Extended procedure {command} must be implemented on "
                + f"ExtendedClient only, found on {sorted(owners)}"
            )
        if len(info.client_methods) > 1:
            errors.append(
                f"Procedure {command} is wrapped more than once: {info.client_methods}"
            )

    return errors


def assert_valid_command_client_correspondence():
    """Validates the catalogue and raises if invalid.

    Raises:
        AssertionError: If any validation errors are found
    """
    errors = validate_command_client_correspondence()
    if errors:
        raise AssertionError(
            "Command-client correspondence validation failed:\n"
            + "\n".join(f"- {err}" for err in errors)
        )
