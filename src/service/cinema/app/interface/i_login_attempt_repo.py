from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class ILoginAttemptRepo(ABC):
    """Failed login bookkeeping keyed by client IP"""

    @abstractmethod
    async def record_failure(self, *, ip_address: str, email: Optional[str]) -> None:
        pass

    @abstractmethod
    async def count_since(self, *, ip_address: str, since: datetime) -> int:
        pass

    @abstractmethod
    async def latest_attempt_at(self, *, ip_address: str) -> Optional[datetime]:
        pass

    @abstractmethod
    async def clear(self, *, ip_address: str) -> None:
        pass
