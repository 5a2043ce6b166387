from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class User:
    """
    Pure domain model for User entity - no external dependencies.

    Zero values (None, "", 0) mean "not set". The id is assigned by the
    storage layer; password holds a hash once the user is persisted.
    """
    id: Optional[str] = None
    name: str = ""
    age: Optional[int] = None
    email: str = ""
    password: str = ""
    address: str = ""

    def present_fields(self) -> Dict[str, Any]:
        """Writable fields holding a non-zero value"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "id" and getattr(self, f.name)
        }
