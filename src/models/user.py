"""Identity of the acting user."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrentUser:
    """Current user as exposed by the auth layer.

    Only master admins may edit advanced product fields.
    """

    email: Optional[str] = None
    is_master_admin: bool = False
