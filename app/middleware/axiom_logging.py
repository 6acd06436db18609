"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends structured logs to Axiom.
Logs: endpoint, method, actor, data (body/params), status code, error reason.
Sensitive fields (token, secret, authorization) are masked.
"""

import time
import json
import re
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from app.config import settings

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query params
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|apikey|credential)",
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


def truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate long strings (e.g. bug descriptions)."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    if isinstance(value, dict):
        return {k: truncate(v, max_len) for k, v in value.items()}
    return value


def build_log_event(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    actor: dict[str, str] | None = None,
    query_params: dict[str, Any] | None = None,
    path_params: dict[str, Any] | None = None,
    request_body: Any = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Axiom 로그 이벤트 구성 — Build one structured log event."""
    event: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }
    if actor:
        event["actor"] = actor
    if query_params:
        event["query_params"] = mask_sensitive(query_params)
    if path_params:
        event["path_params"] = path_params
    if request_body is not None:
        event["request_body"] = request_body
    if error:
        event["error"] = error
    return event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom.
    The actor (name, role) is read from request.state once the bearer token
    has been resolved by the get_current_actor dependency.
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
        # 제외 경로 또는 Axiom 미설정시 패스스루 — Skip excluded paths / pass through if unconfigured
        if request.url.path in _SKIP_PATHS or not self._client:
            return await call_next(request)

        start_time = time.time()
        # scope["state"]를 먼저 만들어 엔드포인트와 공유 — Share state dict with the endpoint
        state = request.state

        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = truncate(mask_sensitive(json.loads(body_bytes)))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

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
            actor = getattr(state, "actor", None)
            log_event = build_log_event(
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
                actor={"name": actor.name, "role": actor.role} if actor is not None else None,
                query_params=query_params,
                path_params=dict(request.path_params) if request.path_params else None,
                request_body=request_body,
                error=error_detail,
            )
            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
