"""
Simulated card processor.

Charges succeed with a `ch_demo_` reference unless the token is empty or listed in
PAYMENT_DECLINE_TOKENS, which lets tests and demos exercise the decline path.

Successful charges are remembered by idempotency key for the life of the process,
so a repeated request for the same booking gets the original charge back.
"""

from datetime import datetime, timezone
from decimal import Decimal
import secrets
from typing import Any, Dict, Optional

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_payment_gateway import IPaymentGateway, PaymentResult


class MockPaymentGatewayImpl(IPaymentGateway):
    def __init__(self, *, decline_tokens: list[str] | None = None) -> None:
        self.decline_tokens = set(
            settings.PAYMENT_DECLINE_TOKENS if decline_tokens is None else decline_tokens
        )
        self._charges_by_key: Dict[str, PaymentResult] = {}

    @Logger.io
    async def charge(
        self,
        *,
        token: str,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> PaymentResult:
        # No await between lookup and store: concurrent callers see one charge
        if idempotency_key and (previous := self._charges_by_key.get(idempotency_key)):
            if previous.raw.get('amount') != self._minor_units(amount):
                return PaymentResult(
                    success=False,
                    reason='Idempotency key was already used for a different amount.',
                    raw={'status': 'failed', 'failure_code': 'idempotency_error'},
                )
            Logger.base.info(f'🔁 [Payment] Replaying {previous.reference} for {idempotency_key}')
            return previous

        if not token:
            return PaymentResult(success=False, reason='Missing payment token')
        if token in self.decline_tokens:
            return PaymentResult(
                success=False,
                reason='Your card was declined.',
                raw={'status': 'failed', 'failure_code': 'card_declined'},
            )

        charge_id = f'ch_demo_{secrets.token_hex(12)}'
        result = PaymentResult(
            success=True,
            reference=charge_id,
            raw={
                'id': charge_id,
                'amount': self._minor_units(amount),
                'currency': currency,
                'status': 'succeeded',
                'created': int(datetime.now(timezone.utc).timestamp()),
                'metadata': metadata or {},
            },
        )
        if idempotency_key:
            self._charges_by_key[idempotency_key] = result
        Logger.base.info(f'💳 [Payment] Simulated charge {charge_id} for {amount} {currency}')
        return result

    @staticmethod
    def _minor_units(amount: Decimal) -> int:
        return int((Decimal(amount) * 100).to_integral_value())
