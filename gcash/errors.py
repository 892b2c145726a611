from __future__ import annotations

from typing import Optional

BAD_GATEWAY = 502


class GCashError(Exception):
    pass


class ConfigurationError(GCashError):
    pass


class SigningError(ConfigurationError):
    pass


class SignatureHeaderError(GCashError, ValueError):
    pass


class MissingSignatureField(SignatureHeaderError):
    def __init__(self, header_value: str):
        super().__init__("signature field is missing from Signature header")
        self.header_value = header_value


class ApiError(GCashError):
    def __init__(
        self,
        status_code: Optional[int],
        message: str,
        result_status: Optional[str] = None,
        result_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.result_status = result_status
        self.result_code = result_code


class TransportFault(ApiError):
    def __init__(self, status_code: Optional[int], message: Optional[str] = None):
        if message is None:
            message = f"HTTP {status_code}" if status_code is not None else "transport failure"
        super().__init__(status_code, message)


class GatewayContractViolation(ApiError):
    def __init__(self, field: str, message: str, status_code: int = BAD_GATEWAY):
        super().__init__(status_code, message)
        self.field = field


class UntrustedResponse(ApiError):
    def __init__(self, status_code: int, message: str = "signature verification failed"):
        super().__init__(status_code, message)


class BusinessFailure(ApiError):
    def __init__(self, status_code: int, result_status: Optional[str], result_code: Optional[str], message: Optional[str]):
        super().__init__(status_code, message or f"HTTP {status_code}", result_status=result_status, result_code=result_code)
