"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures Axiom logging, CORS, health check, and the developer/manager routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# developer_router: 버그 작성/수정/삭제/종료 요청 (File and manage bugs)
# manager_router: 전체 조회, 승인/재오픈, 대시보드 (Review, approve, dashboard)
from app.api.developer import developer_router  # noqa: E402
from app.api.manager import manager_router  # noqa: E402
from app.api.vocabulary import router as common_router  # noqa: E402

app.include_router(developer_router, prefix="/api/v1/developer")
app.include_router(manager_router, prefix="/api/v1/manager")
app.include_router(common_router, prefix="/api/v1", tags=["Common"])
