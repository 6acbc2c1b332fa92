"""Command vocabulary shared with the remote certificate generator.

Frames are flat, ordered string sequences with the command token first:

    ["IMPORT_CERTIFICATE", "<service name>", "<certificate pem>"]

A reply whose first field is ``ERROR`` is a rejection; the optional second
field carries the message.
"""

from enum import StrEnum


class Command(StrEnum):
    """Command tokens understood by the certificate generator."""

    GENERATE_SELFSIGNED_CERTIFICATE = "GENERATE_SELFSIGNED_CERTIFICATE"
    GENERATE_CSR = "GENERATE_CSR"
    IMPORT_CERTIFICATE = "IMPORT_CERTIFICATE"


ERROR_SENTINEL = "ERROR"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Fixed positional argument count per command
COMMAND_ARITY: dict[Command, int] = {
    Command.GENERATE_SELFSIGNED_CERTIFICATE: 1,
    Command.GENERATE_CSR: 1,
    Command.IMPORT_CERTIFICATE: 2,
}


def build_frame(command: Command, *args: str) -> list[str]:
    """Build an outgoing frame: the command token followed by its arguments.

    Raises:
        ValueError: If the command is unknown, the argument count does not
            match, or an argument is not a string.
    """
    try:
        command = Command(command)
    except ValueError:
        valid = [c.value for c in Command]
        raise ValueError(f"Unknown command '{command}'. Valid: {valid}") from None

    expected = COMMAND_ARITY[command]
    if len(args) != expected:
        raise ValueError(f"{command} takes {expected} argument(s), got {len(args)}")

    for arg in args:
        if not isinstance(arg, str):
            raise ValueError(f"{command} arguments must be strings, got {type(arg).__name__}")

    return [command.value, *args]


def is_error_reply(reply: list[str]) -> bool:
    """Check whether a non-empty reply frame carries the error sentinel."""
    return reply[0] == ERROR_SENTINEL


def error_message(reply: list[str]) -> str:
    """Extract the message of an error reply, falling back to a generic one."""
    if len(reply) > 1:
        return reply[1]
    return UNKNOWN_ERROR_MESSAGE
