from __future__ import annotations

import asyncio
import json
import os
import sys
import uuid

from gcash import (
    Amount,
    BusinessFailure,
    GCashClient,
    GCashError,
    PaymentInquiryRequest,
    PaymentRequest,
    RefundInquiryRequest,
    RefundRequest,
)
from gcash.models import PaymentFactor, PaymentStatus


async def run(partner_id: str) -> dict:
    request_id = uuid.uuid4().hex
    amount = Amount(currency="PHP", value="10000")
    async with GCashClient.from_env() as client:
        await client.create_payment(PaymentRequest(
            partner_id=partner_id,
            payment_order_title="SHOES",
            payment_request_id=request_id,
            payment_amount=amount,
            payment_factor=PaymentFactor(is_cashier_payment=True),
        ))
        payment = await client.inquire_payment(PaymentInquiryRequest(partner_id=partner_id, payment_request_id=request_id))
        report = {"payment_request_id": request_id, "payment_status": payment.payment_status}
        if payment.payment_status != PaymentStatus.SUCCESS:
            return report

        refund_request_id = uuid.uuid4().hex
        await client.create_refund(RefundRequest(
            partner_id=partner_id,
            refund_request_id=refund_request_id,
            payment_id=payment.payment_id,
            refund_amount=amount,
            refund_reason="customer cancelled",
        ))
        refund = await client.inquire_refund(RefundInquiryRequest(partner_id=partner_id, refund_request_id=refund_request_id))
        report["refund_status"] = refund.refund_status
        return report


def main() -> None:
    try:
        report = asyncio.run(run(os.getenv("GCASH_PARTNER_ID", "")))
    except BusinessFailure as exc:
        print(f"gateway rejected the request: {exc.result_code} {exc.message}", file=sys.stderr)
        sys.exit(1)
    except GCashError as exc:
        print(f"gateway call failed: {exc}", file=sys.stderr)
        sys.exit(2)
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
