import re
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_FRACTION_OVERFLOW = re.compile(r"(\.\d{6})\d+")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _trim_fraction(value: Any) -> Any:
    # the gateway may send nanoseconds; datetime holds microseconds
    if isinstance(value, str):
        return _FRACTION_OVERFLOW.sub(r"\1", value.strip())
    return value


NonBlank = Annotated[str, AfterValidator(_not_blank)]
Timestamp = Annotated[datetime, BeforeValidator(_trim_fraction)]


class GatewayModel(BaseModel):
    """Base for gateway data shapes.

    Fields map to camelCase JSON keys unless a field declares its own alias.
    Fields may also be populated by their Python names. Unknown keys in
    incoming payloads are ignored. The wire form is
    ``model_dump_json(by_alias=True, exclude_none=True)``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ResultStatus:
    SUCCESS = "S"
    FAIL = "F"
    UNKNOWN = "U"
    ACCEPT = "A"


class GrantType:
    AUTHORIZATION_CODE = "AUTHORIZATION_CODE"
    REFRESH_TOKEN = "REFRESH_TOKEN"


class TerminalType:
    MINI_APP = "MINI_APP"
    APP = "APP"
    WEB = "WEB"
    WAP = "WAP"
    SYSTEM = "SYSTEM"


class OsType:
    IOS = "IOS"
    ANDROID = "ANDROID"


class PaymentStatus:
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    PROCESSING = "PROCESSING"
    CANCELLED = "CANCELLED"


class RefundStatus:
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    PROCESSING = "PROCESSING"


class UserStatus:
    ACTIVE = "ACTIVE"
    FROZEN = "FROZEN"
    INACTIVE = "INACTIVE"


class LoginIdType:
    MOBILE_PHONE = "MOBILE_PHONE"
    EMAIL = "EMAIL"


class ActionFormType:
    REDIRECTION = "REDIRECTION"


# value objects


class Result(GatewayModel):
    result_code: Optional[str] = Field(None, max_length=64)
    result_status: Optional[str] = Field(None, max_length=2)
    result_message: Optional[str] = Field(None, max_length=256)


class Amount(GatewayModel):
    currency: NonBlank = Field(..., max_length=3)
    # smallest currency unit, e.g. "100" cents for 1.00 USD
    value: NonBlank = Field(..., max_length=16)


class Address(GatewayModel):
    region: NonBlank = Field(..., max_length=2)
    state: Optional[str] = Field(None, max_length=8)
    city: Optional[str] = Field(None, max_length=32)
    address1: Optional[str] = Field(None, max_length=256)
    address2: Optional[str] = Field(None, max_length=256)
    zip_code: Optional[str] = Field(None, max_length=32)


class UserName(GatewayModel):
    full_name: Optional[str] = Field(None, max_length=128)
    first_name: Optional[str] = Field(None, max_length=32)
    middle_name: Optional[str] = Field(None, max_length=32)
    last_name: Optional[str] = Field(None, max_length=32)


class ContactInfo(GatewayModel):
    contact_no: NonBlank = Field(..., max_length=64)
    contact_type: NonBlank = Field(..., max_length=32)
    extend_info: Optional[str] = Field(None, max_length=4096)


class EnvInfo(GatewayModel):
    terminal_type: Optional[str] = None
    os_type: Optional[str] = None
    user_agent: Optional[str] = Field(None, max_length=1024)
    device_token_id: Optional[str] = Field(None, max_length=128)
    client_ip: Optional[str] = Field(None, max_length=64)
    cookie_id: Optional[str] = Field(None, max_length=128)
    extend_info: Optional[str] = Field(None, max_length=4096)


class Goods(GatewayModel):
    reference_goods_id: NonBlank = Field(..., max_length=64)
    goods_name: NonBlank = Field(..., max_length=256)
    goods_category: Optional[str] = Field(None, max_length=256)
    goods_brand: Optional[str] = Field(None, max_length=32)
    goods_unit_amount: Optional[Amount] = None
    goods_quantity: Optional[str] = Field(None, max_length=32)
    goods_url: Optional[str] = Field(None, max_length=1024)
    extend_info: Optional[str] = Field(None, max_length=2048)


class Store(GatewayModel):
    reference_store_id: NonBlank = Field(..., max_length=64)
    store_name: Optional[str] = Field(None, max_length=256)
    store_mcc: Optional[str] = Field(None, alias="storeMCC", max_length=32)
    store_display_name: Optional[str] = Field(None, max_length=64)
    store_terminal_id: Optional[str] = Field(None, max_length=64)
    store_operator_id: Optional[str] = Field(None, max_length=64)
    store_address: Optional[Address] = None
    store_phone_no: Optional[str] = Field(None, max_length=16)


class Merchant(GatewayModel):
    reference_merchant_id: NonBlank = Field(..., max_length=32)
    merchant_category_code: NonBlank = Field(..., alias="merchantMCC", max_length=32)
    merchant_name: NonBlank = Field(..., max_length=256)
    merchant_display_name: Optional[str] = Field(None, max_length=64)
    merchant_address: Optional[Address] = None
    merchant_register_date: Optional[Timestamp] = None
    store: Optional[Store] = None


class Buyer(GatewayModel):
    reference_buyer_id: Optional[str] = Field(None, max_length=64)
    buyer_name: Optional[UserName] = None
    buyer_phone_no: Optional[str] = Field(None, max_length=24)
    buyer_email: Optional[str] = Field(None, max_length=64)


class Shipping(GatewayModel):
    shipping_name: UserName
    shipping_address: Address
    contact_no: NonBlank = Field(..., max_length=64)
    shipping_carrier: Optional[str] = Field(None, max_length=128)
    shipping_phone_no: Optional[str] = Field(None, max_length=16)
    shipping_fee: Optional[Amount] = None


class Order(GatewayModel):
    reference_order_id: NonBlank = Field(..., max_length=64)
    order_description: Optional[str] = Field(None, max_length=256)
    order_amount: Amount
    order_create_time: Optional[Timestamp] = None
    reference_merchant: Optional[Merchant] = None
    goods: Optional[Goods] = None
    shipping: Optional[Shipping] = None
    buyer: Optional[Buyer] = None
    extend_info: Optional[str] = Field(None, max_length=2048)


class PaymentFactor(GatewayModel):
    is_payment_evaluation: Optional[bool] = None
    is_order_code: Optional[bool] = None
    is_payment_code: Optional[bool] = None
    is_agreement_pay: Optional[bool] = None
    is_cashier_payment: Optional[bool] = None
    is_authorization_and_pay: Optional[bool] = None
    is_authorization_payment: Optional[bool] = None


class PaymentMethod(GatewayModel):
    payment_method_type: NonBlank = Field(..., max_length=64)
    payment_method_id: Optional[str] = Field(None, max_length=128)
    payment_method_meta_data: Optional[Dict[str, Any]] = None
    customer_id: Optional[str] = Field(None, max_length=64)
    extend_info: Optional[str] = Field(None, max_length=4096)


class ActionForm(GatewayModel):
    action_form_type: Optional[str] = None
    redirection_url: Optional[str] = Field(None, max_length=2048)


class OpenLoginIdInfo(GatewayModel):
    login_id: Optional[str] = Field(None, max_length=64)
    login_id_type: NonBlank
    mask_login_id: Optional[str] = Field(None, max_length=64)
    hash_login_id: Optional[str] = Field(None, max_length=256)
    extend_info: Optional[str] = Field(None, max_length=4096)


class OpenUserInfo(GatewayModel):
    user_id: Optional[str] = Field(None, max_length=64)
    status: Optional[str] = None
    nickname: Optional[str] = Field(None, alias="nickName", max_length=256)
    username: Optional[UserName] = None
    user_addresses: Optional[List[Address]] = None
    avatar: Optional[str] = Field(None, max_length=256)
    gender: Optional[str] = Field(None, max_length=32)
    birthday: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=2)
    login_id_infos: Optional[List[OpenLoginIdInfo]] = None
    contact_infos: Optional[List[ContactInfo]] = None
    extend_info: Optional[str] = Field(None, max_length=4096)


# access token


class AccessTokenRequest(GatewayModel):
    reference_client_id: Optional[str] = Field(None, max_length=128)
    grant_type: NonBlank
    # required when grant_type is AUTHORIZATION_CODE
    auth_code: Optional[str] = Field(None, max_length=32)
    # required when grant_type is REFRESH_TOKEN
    refresh_token: Optional[str] = Field(None, max_length=128)
    extend_info: Optional[str] = Field(None, max_length=4096)

    @model_validator(mode="after")
    def check_grant_credentials(self) -> "AccessTokenRequest":
        if self.grant_type == GrantType.AUTHORIZATION_CODE and not self.auth_code:
            raise ValueError("authCode is required for AUTHORIZATION_CODE grant")
        if self.grant_type == GrantType.REFRESH_TOKEN and not self.refresh_token:
            raise ValueError("refreshToken is required for REFRESH_TOKEN grant")
        return self


class AccessTokenResponse(GatewayModel):
    result: Optional[Result] = None
    access_token: Optional[str] = Field(None, max_length=128)
    access_token_expiry_time: Optional[Timestamp] = None
    refresh_token: Optional[str] = Field(None, max_length=128)
    refresh_token_expiry_time: Optional[Timestamp] = None
    customer_id: Optional[str] = Field(None, max_length=64)
    extend_info: Optional[str] = Field(None, max_length=4096)


class AccessTokenCancellationRequest(GatewayModel):
    access_token: NonBlank = Field(..., max_length=128)
    extend_info: Optional[str] = Field(None, max_length=4096)


class AccessTokenCancellationResponse(GatewayModel):
    result: Optional[Result] = None
    extend_info: Optional[str] = Field(None, max_length=4096)


# payments


class PaymentRequest(GatewayModel):
    partner_id: NonBlank = Field(..., max_length=32)
    app_id: Optional[str] = Field(None, max_length=32)
    product_code: Optional[str] = Field(None, max_length=32)
    payment_order_title: NonBlank = Field(..., max_length=256)
    # idempotency key; the gateway returns the same final result for a repeated id
    payment_request_id: NonBlank = Field(..., max_length=64)
    payment_amount: Amount
    payment_method: Optional[PaymentMethod] = None
    payment_auth_code: Optional[str] = Field(None, max_length=128)
    payment_factor: Optional[PaymentFactor] = None
    payment_expiry_time: Optional[Timestamp] = None
    payment_return_url: Optional[str] = Field(None, max_length=1024)
    payment_notify_url: Optional[str] = Field(None, max_length=1024)
    mcc: Optional[str] = Field(None, max_length=32)
    extra_params: Optional[Dict[str, str]] = None
    extend_info: Optional[str] = Field(None, max_length=4096)
    env_info: Optional[EnvInfo] = None


class PaymentResponse(GatewayModel):
    result: Optional[Result] = None
    payment_id: Optional[str] = Field(None, max_length=64)
    payment_time: Optional[Timestamp] = None
    action_form: Optional[ActionForm] = None
    extend_info: Optional[str] = Field(None, max_length=4096)


class PaymentInquiryRequest(GatewayModel):
    partner_id: NonBlank = Field(..., max_length=32)
    payment_id: Optional[str] = Field(None, max_length=64)
    payment_request_id: Optional[str] = Field(None, max_length=64)
    extend_info: Optional[str] = Field(None, max_length=4096)

    @model_validator(mode="after")
    def check_identifier(self) -> "PaymentInquiryRequest":
        if not self.payment_id and not self.payment_request_id:
            raise ValueError("paymentId or paymentRequestId is required")
        return self


class PaymentInquiryResponse(GatewayModel):
    result: Optional[Result] = None
    payment_id: Optional[str] = Field(None, max_length=64)
    payment_request_id: Optional[str] = Field(None, max_length=64)
    payment_time: Optional[Timestamp] = None
    payment_amount: Optional[Amount] = None
    payment_status: Optional[str] = None
    payment_fail_reason: Optional[str] = Field(None, max_length=256)
    extend_info: Optional[str] = Field(None, max_length=4096)


class PaymentNotificationRequest(GatewayModel):
    partner_id: NonBlank = Field(..., max_length=32)
    payment_id: NonBlank = Field(..., max_length=64)
    payment_request_id: NonBlank = Field(..., max_length=64)
    payment_amount: Amount
    payment_time: Optional[Timestamp] = None
    payment_status: NonBlank
    payment_fail_reason: Optional[str] = Field(None, max_length=256)
    extend_info: Optional[str] = Field(None, max_length=4096)


class PaymentNotificationResponse(GatewayModel):
    result: Optional[Result] = None


# refunds


class RefundRequest(GatewayModel):
    partner_id: NonBlank = Field(..., max_length=32)
    refund_request_id: NonBlank = Field(..., max_length=64)
    payment_id: NonBlank = Field(..., max_length=64)
    refund_amount: Amount
    refund_reason: Optional[str] = Field(None, max_length=256)
    extend_info: Optional[str] = Field(None, max_length=4096)


class RefundResponse(GatewayModel):
    result: Optional[Result] = None
    refund_id: Optional[str] = Field(None, max_length=64)
    refund_time: Optional[Timestamp] = None
    extend_info: Optional[str] = Field(None, max_length=4096)


class RefundInquiryRequest(GatewayModel):
    partner_id: NonBlank = Field(..., max_length=32)
    refund_id: Optional[str] = Field(None, max_length=64)
    refund_request_id: Optional[str] = Field(None, max_length=64)
    extend_info: Optional[str] = Field(None, max_length=4096)

    @model_validator(mode="after")
    def check_identifier(self) -> "RefundInquiryRequest":
        if not self.refund_id and not self.refund_request_id:
            raise ValueError("refundId or refundRequestId is required")
        return self


class RefundInquiryResponse(GatewayModel):
    result: Optional[Result] = None
    refund_id: Optional[str] = Field(None, max_length=64)
    refund_request_id: Optional[str] = Field(None, max_length=64)
    refund_amount: Optional[Amount] = None
    refund_reason: Optional[str] = Field(None, max_length=256)
    refund_time: Optional[Timestamp] = None
    refund_status: Optional[str] = None
    refund_fail_reason: Optional[str] = Field(None, max_length=256)
    extend_info: Optional[str] = Field(None, max_length=4096)


# user information


class UserInformationRequest(GatewayModel):
    access_token: NonBlank = Field(..., max_length=128)
    extend_info: Optional[str] = Field(None, max_length=4096)


class UserInformationResponse(GatewayModel):
    result: Optional[Result] = None
    user_info: Optional[OpenUserInfo] = None
