"""Actionable error catalog for deltabuild."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "command_not_found": {
        "what": "Required command not found: {command}.",
        "next": "Install {command} and make sure it is on PATH, then try again.",
    },
    "command_not_executable": {
        "what": "Command is not executable: {command}.",
        "next": "Make {command} on PATH executable (`chmod +x`) or reinstall it.",
    },
    "command_failed": {
        "what": "Command failed ({returncode}): {command}",
        "next": "Read the tool output above. The Dockerfile and image are left in place for a retry.",
    },
    "command_timeout": {
        "what": "Command timed out after {timeout}s: {command}",
        "next": "Raise `--command-timeout` or drop it to wait indefinitely.",
    },
    "identity_unresolved": {
        "what": "Could not resolve the host {kind} for id {ident}.",
        "next": "Make sure the current {kind} has an entry in the system database (`id` should print it).",
    },
    "dockerfile_write_failed": {
        "what": "Could not write {path}: {reason}",
        "next": "Check permissions and free space in the working directory.",
    },
    "workdir_not_found": {
        "what": "Working directory not found: {path}",
        "next": "Run from the delta-rs checkout or pass an existing `--workdir`.",
    },
}


def actionable_error(code: str, **kwargs: object) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
