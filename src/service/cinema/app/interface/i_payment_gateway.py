"""
Payment Gateway Interface

Contract the checkout flow needs from a card processor. Delivery may be repeated,
so callers confirm bookings idempotently. A charge carrying an `idempotency_key`
already seen by the processor returns the original result instead of charging again.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, Optional

import attrs


@attrs.frozen
class PaymentResult:
    success: bool
    reference: Optional[str] = None
    reason: Optional[str] = None
    raw: Dict[str, Any] = attrs.field(factory=dict)


class IPaymentGateway(ABC):
    @abstractmethod
    async def charge(
        self,
        *,
        token: str,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> PaymentResult:
        pass
