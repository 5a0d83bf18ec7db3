"""
Resolution of numeric user and group IDs into names.
"""

import grp
import pwd


class IdentityLookupError(LookupError):
    """Raised when a user or group ID has no corresponding name."""


class IdentityResolver:
    """
    Looks up user and group names using the host's password and group
    databases.
    """

    def username(self, uid: int) -> str:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            raise IdentityLookupError(f"unknown user ID: {uid}")

    def groupname(self, gid: int) -> str:
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            raise IdentityLookupError(f"unknown group ID: {gid}")
