"""Error codes for CLI exit status.

Each failure category of the publish workflow maps onto one of these codes,
which become the process exit status of `zci`.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad options, invalid config file)
    - 2: Environment error (missing credential, unresolved branch/version)
    - 4: Network error (artifact repository upload or build publish failed)
    - 5: I/O error (unreadable release directory, archive creation failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

