from datetime import datetime
from typing import Any, Dict, Optional

import attrs

from src.service.cinema.domain.enum.log_category import LogCategory


@attrs.define
class AuditLog:
    """Append-only record of a user or system action."""

    action: str
    category: LogCategory
    user_id: Optional[int] = None
    details: Dict[str, Any] = attrs.field(factory=dict)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
