# clientauth/domain/models/request_context.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request scoping handed to every gateway operation.

    The namespace scopes every lookup in the registry. ``request_id`` and
    ``request_time`` are captured once so that system metadata filled in
    from a context is the same however many times it is computed.
    """
    namespace: str = ""
    user: Optional[str] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    request_time: datetime = field(default_factory=_utcnow)
