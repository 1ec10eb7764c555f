"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends structured events to Axiom.
Logs: endpoint, method, JSON body/params, status code, duration, error reason.
Credentials and personal fields (password, token, cookie, phone) are masked.
Without Axiom credentials the same event is written to the module logger.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|cookie|credential|phone)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate long strings (e.g. review content)."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


async def _read_request_body(request: Request) -> Any:
    """JSON 본문만 읽어 마스킹합니다. 멀티파트(이미지 업로드)는 본문을 남기지 않습니다.

    Read and mask a JSON body; multipart uploads are recorded by type only.
    """
    content_type: str = request.headers.get("content-type", "")
    if content_type.startswith("multipart/"):
        return "(multipart body)"
    body_bytes: bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return mask_sensitive(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom,
    or to the module logger when Axiom is not configured.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        query_params = mask_sensitive(dict(request.query_params)) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            request_body = _truncate(await _read_request_body(request))

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = str(error_data.get("detail", error_data))[:500]
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)

            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
            if query_params:
                log_event["query_params"] = query_params
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            self._emit(log_event)

        return response

    def _emit(self, log_event: dict[str, Any]) -> None:
        """로그 이벤트 전송 — 실패해도 요청 처리는 계속됩니다.

        Ship one event; an ingest failure is logged and never breaks the request.
        """
        if self._client is None:
            logger.info(
                "%s %s -> %s (%sms)",
                log_event["method"], log_event["path"],
                log_event["status_code"], log_event["duration_ms"],
            )
            return
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception as exc:  # noqa: BLE001
            logger.warning("Axiom ingest failed: %s", exc)
