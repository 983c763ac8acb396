# clientauth/domain/models/client_authorization_domain_model.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Dict, List, Optional


@dataclass
class ObjectMeta:
    """System bookkeeping attached to every stored resource."""
    namespace: str = ""
    uid: Optional[str] = None
    creation_timestamp: Optional[datetime] = None
    resource_version: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class ClientAuthorization:
    """Domain model for an authorization granted by a user to a client."""
    kind: ClassVar[str] = "ClientAuthorization"

    name: str = ""  # Derived from user_name and client_name
    user_name: str = ""
    client_name: str = ""
    scopes: List[str] = field(default_factory=list)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)


@dataclass
class Status:
    """Generic outcome returned by operations that have no resource to show."""
    SUCCESS: ClassVar[str] = "Success"
    FAILURE: ClassVar[str] = "Failure"

    status: str
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "Status":
        return cls(status=cls.SUCCESS, message=message)
