from .client import (
    APIVersion,
    GCashClient,
)
from .config import GCashConfig
from .errors import (
    ApiError,
    BusinessFailure,
    ConfigurationError,
    GatewayContractViolation,
    GCashError,
    MissingSignatureField,
    SignatureHeaderError,
    SigningError,
    TransportFault,
    UntrustedResponse,
)
from .models import (
    AccessTokenCancellationResponse,
    AccessTokenRequest,
    AccessTokenResponse,
    Amount,
    EnvInfo,
    GrantType,
    PaymentFactor,
    PaymentInquiryRequest,
    PaymentInquiryResponse,
    PaymentNotificationRequest,
    PaymentNotificationResponse,
    PaymentRequest,
    PaymentResponse,
    RefundInquiryRequest,
    RefundInquiryResponse,
    RefundRequest,
    RefundResponse,
    Result,
    UserInformationResponse,
)
from .signing import (
    KeyMaterial,
    build_canonical_message,
    decode_signature_header,
    encode_signature_header,
    sign,
    verify,
)

__all__ = [
    "APIVersion",
    "GCashClient",
    "GCashConfig",
    "ApiError",
    "BusinessFailure",
    "ConfigurationError",
    "GatewayContractViolation",
    "GCashError",
    "MissingSignatureField",
    "SignatureHeaderError",
    "SigningError",
    "TransportFault",
    "UntrustedResponse",
    "AccessTokenCancellationResponse",
    "AccessTokenRequest",
    "AccessTokenResponse",
    "Amount",
    "EnvInfo",
    "GrantType",
    "PaymentFactor",
    "PaymentInquiryRequest",
    "PaymentInquiryResponse",
    "PaymentNotificationRequest",
    "PaymentNotificationResponse",
    "PaymentRequest",
    "PaymentResponse",
    "RefundInquiryRequest",
    "RefundInquiryResponse",
    "RefundRequest",
    "RefundResponse",
    "Result",
    "UserInformationResponse",
    "KeyMaterial",
    "build_canonical_message",
    "decode_signature_header",
    "encode_signature_header",
    "sign",
    "verify",
]
