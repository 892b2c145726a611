from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from .config import GCashConfig
from .errors import (
    ApiError,
    BusinessFailure,
    GatewayContractViolation,
    MissingSignatureField,
    TransportFault,
    UntrustedResponse,
)
from .models import (
    AccessTokenCancellationRequest,
    AccessTokenCancellationResponse,
    AccessTokenRequest,
    AccessTokenResponse,
    GatewayModel,
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
    UserInformationRequest,
    UserInformationResponse,
)
from .signing import KeyMaterial, build_canonical_message, decode_signature_header, parse_signature_header

logger = logging.getLogger(__name__)
wire_logger = logging.getLogger("gcash.http")

APIVersion = "v1"
SDKVersion = "0.1.0"

ACCESS_TOKEN_PATH = "/v1/authorizations/applyToken"
ACCESS_TOKEN_CANCELLATION_PATH = "/v1/authorizations/cancelToken"
PAYMENT_PATH = "/v1/payments/pay"
PAYMENT_INQUIRY_PATH = "/v1/payments/inquiryPayment"
PAYMENT_NOTIFICATION_PATH = "/v1/payments/notifyPayment"
REFUND_PATH = "/v1/payments/refund"
REFUND_INQUIRY_PATH = "/v1/payments/inquiryRefund"
USER_INFORMATION_INQUIRY_PATH = "/v1/customers/user/inquiryUserInfoByAccessToken"

SIGNED_METHOD = "POST"

T = TypeVar("T", bound=GatewayModel)


async def _log_request(request: httpx.Request) -> None:
    wire_logger.debug(
        "--> %s %s headers=%s body=%s",
        request.method,
        request.url,
        dict(request.headers),
        request.content.decode("utf-8", "replace"),
    )


async def _log_response(response: httpx.Response) -> None:
    await response.aread()
    wire_logger.debug(
        "<-- %s %s headers=%s body=%s",
        response.status_code,
        response.request.url,
        dict(response.headers),
        response.text,
    )


class GCashClient:
    def __init__(
        self,
        config: GCashConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.keys = KeyMaterial.from_pem(config.private_key, config.public_key, config.key_version, config.algorithm)
        self.zone = config.zone
        self._owns_http = http is None
        self.http = http if http is not None else self._build_http(config, transport)

    @classmethod
    def from_env(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "GCashClient":
        return cls(GCashConfig.from_env(), transport=transport)

    @staticmethod
    def _build_http(config: GCashConfig, transport: Optional[httpx.AsyncBaseTransport]) -> httpx.AsyncClient:
        event_hooks = {"request": [_log_request], "response": [_log_response]} if config.debug else None
        return httpx.AsyncClient(timeout=config.timeout_seconds, transport=transport, event_hooks=event_hooks)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "GCashClient":
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()

    async def apply_access_token(self, request: AccessTokenRequest) -> AccessTokenResponse:
        return await self._dispatch(ACCESS_TOKEN_PATH, request, AccessTokenResponse)

    async def applyAccessToken(self, request: AccessTokenRequest) -> AccessTokenResponse:
        return await self.apply_access_token(request)

    async def cancel_access_token(self, access_token: str, extend_info: Optional[str] = None) -> AccessTokenCancellationResponse:
        request = AccessTokenCancellationRequest(access_token=access_token, extend_info=extend_info)
        return await self._dispatch(ACCESS_TOKEN_CANCELLATION_PATH, request, AccessTokenCancellationResponse)

    async def cancelAccessToken(self, access_token: str, extend_info: Optional[str] = None) -> AccessTokenCancellationResponse:
        return await self.cancel_access_token(access_token, extend_info)

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        return await self._dispatch(PAYMENT_PATH, request, PaymentResponse)

    async def createPayment(self, request: PaymentRequest) -> PaymentResponse:
        return await self.create_payment(request)

    async def inquire_payment(self, request: PaymentInquiryRequest) -> PaymentInquiryResponse:
        return await self._dispatch(PAYMENT_INQUIRY_PATH, request, PaymentInquiryResponse)

    async def inquirePayment(self, request: PaymentInquiryRequest) -> PaymentInquiryResponse:
        return await self.inquire_payment(request)

    async def notify_payment(self, request: PaymentNotificationRequest) -> PaymentNotificationResponse:
        return await self._dispatch(PAYMENT_NOTIFICATION_PATH, request, PaymentNotificationResponse)

    async def notifyPayment(self, request: PaymentNotificationRequest) -> PaymentNotificationResponse:
        return await self.notify_payment(request)

    async def create_refund(self, request: RefundRequest) -> RefundResponse:
        return await self._dispatch(REFUND_PATH, request, RefundResponse)

    async def createRefund(self, request: RefundRequest) -> RefundResponse:
        return await self.create_refund(request)

    async def inquire_refund(self, request: RefundInquiryRequest) -> RefundInquiryResponse:
        return await self._dispatch(REFUND_INQUIRY_PATH, request, RefundInquiryResponse)

    async def inquireRefund(self, request: RefundInquiryRequest) -> RefundInquiryResponse:
        return await self.inquire_refund(request)

    async def inquire_user_info(self, access_token: str, extend_info: Optional[str] = None) -> UserInformationResponse:
        request = UserInformationRequest(access_token=access_token, extend_info=extend_info)
        return await self._dispatch(USER_INFORMATION_INQUIRY_PATH, request, UserInformationResponse)

    async def inquireUserInfo(self, access_token: str, extend_info: Optional[str] = None) -> UserInformationResponse:
        return await self.inquire_user_info(access_token, extend_info)

    def _now(self) -> str:
        return datetime.now(self.zone).isoformat()

    async def _dispatch(self, path: str, request: GatewayModel, response_type: Type[T]) -> T:
        request_time = self._now()
        payload = request.model_dump_json(by_alias=True, exclude_none=True)
        message = build_canonical_message(SIGNED_METHOD, path, self.config.client_id, request_time, payload)
        headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"gcash-python-sdk/{SDKVersion} api/{APIVersion}",
            "Signature": self.keys.signature_header(message),
            "Client-Id": self.config.client_id,
            "Request-Time": request_time,
        }
        logger.debug("POST %s request_time=%s", path, request_time)
        try:
            resp = await self.http.post(self.base_url + path, content=payload.encode("utf-8"), headers=headers)
        except httpx.TransportError as exc:
            raise TransportFault(None, f"POST {path} failed: {exc}") from exc
        return self._handle_response(resp, path, response_type)

    def _handle_response(self, resp: httpx.Response, path: str, response_type: Type[T]) -> T:
        if resp.is_success:
            return self._verified_body(resp, path, response_type)
        if resp.is_error:
            raise self._to_error(resp)
        raise TransportFault(resp.status_code, f"unexpected HTTP {resp.status_code} for POST {path}")

    def _required_header(self, resp: httpx.Response, name: str) -> str:
        value = resp.headers.get(name)
        if value is None or not value.strip():
            logger.warning("%s response header is missing (status %d)", name, resp.status_code)
            raise GatewayContractViolation(name, f"{name} response header is missing")
        return value

    def _verified_body(self, resp: httpx.Response, path: str, response_type: Type[T]) -> T:
        client_id = self._required_header(resp, "Client-Id")
        response_time = self._required_header(resp, "Response-Time")
        signature_header = self._required_header(resp, "Signature")
        try:
            signature = decode_signature_header(signature_header)
        except MissingSignatureField as exc:
            logger.warning("Signature response header has no signature field")
            raise GatewayContractViolation("signature", "Signature is missing") from exc

        algorithm = parse_signature_header(signature_header).get("algorithm")
        if algorithm is not None and algorithm != self.keys.algorithm:
            logger.warning("response signed with %r, expected %r", algorithm, self.keys.algorithm)
            raise UntrustedResponse(resp.status_code, f"unexpected signature algorithm {algorithm!r}")
        if client_id != self.config.client_id:
            logger.warning("response Client-Id %r differs from configured client id", client_id)

        body = resp.content
        message = build_canonical_message(SIGNED_METHOD, path, client_id, response_time, body)
        if not self.keys.verify(message, signature):
            logger.warning("signature verification failed for POST %s (status %d)", path, resp.status_code)
            raise UntrustedResponse(resp.status_code)

        try:
            return response_type.model_validate_json(body)
        except ValidationError as exc:
            raise GatewayContractViolation("body", "failed to deserialize response payload") from exc

    def _to_error(self, resp: httpx.Response) -> ApiError:
        try:
            parsed = json.loads(resp.content) if resp.content else None
        except ValueError:
            parsed = None
        if not isinstance(parsed, dict):
            return TransportFault(resp.status_code)
        inner = parsed.get("result") if isinstance(parsed.get("result"), dict) else parsed
        status = inner.get("resultStatus") or inner.get("status")
        code = inner.get("resultCode") or inner.get("code")
        message = inner.get("resultMessage") or inner.get("message")
        if status is None and code is None and message is None:
            return TransportFault(resp.status_code)
        return BusinessFailure(
            status_code=resp.status_code,
            result_status=str(status) if status is not None else None,
            result_code=str(code) if code is not None else None,
            message=str(message) if message is not None else None,
        )
