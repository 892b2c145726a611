import asyncio
import os
import uuid

from gcash import Amount, GCashClient, PaymentRequest
from gcash.models import PaymentFactor


async def main() -> None:
    async with GCashClient.from_env() as client:
        res = await client.create_payment(PaymentRequest(
            partner_id=os.getenv("GCASH_PARTNER_ID", ""),
            payment_order_title=os.getenv("ORDER_TITLE", "SHOES"),
            payment_request_id=uuid.uuid4().hex,
            payment_amount=Amount(currency="PHP", value=os.getenv("ORDER_AMOUNT", "10000")),
            payment_factor=PaymentFactor(is_cashier_payment=True),
        ))
        if res.action_form and res.action_form.redirection_url:
            print("continue_url:", res.action_form.redirection_url)
        else:
            print("payment:", res.payment_id, res.result.result_status if res.result else None)


asyncio.run(main())
