import os
import uuid

import pytest

from gcash import (
    Amount,
    BusinessFailure,
    GCashClient,
    PaymentInquiryRequest,
    PaymentRequest,
)
from gcash.models import PaymentFactor


GCASH_INTEGRATION = os.getenv("GCASH_INTEGRATION") == "1"
GCASH_PARTNER_ID = os.getenv("GCASH_PARTNER_ID", "")


@pytest.mark.asyncio
@pytest.mark.skipif(not GCASH_INTEGRATION, reason="set GCASH_INTEGRATION=1")
async def test_integration_create_and_inquire_payment():
    request_id = f"py-sdk-{uuid.uuid4().hex}"
    async with GCashClient.from_env() as client:
        created = await client.create_payment(PaymentRequest(
            partner_id=GCASH_PARTNER_ID,
            payment_order_title="SDK SMOKE",
            payment_request_id=request_id,
            payment_amount=Amount(currency="PHP", value="100"),
            payment_factor=PaymentFactor(is_cashier_payment=True),
        ))
        assert created.result is not None
        assert created.result.result_status in ("S", "A", "U")

        status = await client.inquire_payment(PaymentInquiryRequest(partner_id=GCASH_PARTNER_ID, payment_request_id=request_id))
        assert status.result is not None


@pytest.mark.asyncio
@pytest.mark.skipif(not GCASH_INTEGRATION, reason="set GCASH_INTEGRATION=1")
async def test_integration_unknown_token_is_business_failure():
    async with GCashClient.from_env() as client:
        try:
            out = await client.inquire_user_info(f"py-sdk-{uuid.uuid4().hex}")
        except BusinessFailure as exc:
            assert exc.result_status == "F"
        else:
            assert out.result.result_status == "F"
