import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.dependencies import MAX_BODY_BYTES
from app.routes import analytics, chat
from app.services.supabase_client import check_connection, close_pool

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "ivor-community"
SERVICE_DOMAIN = "Intelligence & Analytics"
SERVICE_VERSION = "1.0.0"

PORT = int(os.getenv("PORT", "3023"))
HOST = os.getenv("HOST", "0.0.0.0")
ENVIRONMENT = os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV") or "development"

PRODUCTION_ORIGINS = ["https://ivor.blkout.uk", "https://blkout.uk"]
DEVELOPMENT_ORIGINS = ["http://localhost:5181", "http://localhost:5173", "http://localhost:8080"]


SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'self'; base-uri 'self'; frame-ancestors 'self'; object-src 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def allowed_origins(environment: str = ENVIRONMENT):
    """CORS allowlist for the deployment mode"""
    if environment == "production":
        return list(PRODUCTION_ORIGINS)
    return list(DEVELOPMENT_ORIGINS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"IVOR-COMMUNITY running on port {PORT}")
    logger.info(f"Domain: {SERVICE_DOMAIN}")
    await check_connection()
    yield
    logger.info("Community intelligence domain shutting down...")
    await close_pool()


app = FastAPI(
    title="IVOR Community Intelligence",
    description="Community trend analysis, resource gap insights and chat",
    version=SERVICE_VERSION,
    lifespan=lifespan
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > MAX_BODY_BYTES:
        logger.warning(f"Rejected {request.method} {request.url.path}: body of {content_length} bytes")
        return JSONResponse(status_code=413, content={"error": "Request body too large"})
    return await call_next(request)


app.add_middleware(
  CORSMiddleware,
  allow_origins=allowed_origins(),
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)


# Registered after CORS so preflight replies carry the headers too
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "domain": SERVICE_DOMAIN,
        "version": SERVICE_VERSION,
        "features": {
            "community-analytics": "Trend analysis and insights",
            "resource-mapping": "Resource availability tracking",
            "impact-measurement": "Community impact assessment",
            "strategic-recommendations": "Data-driven recommendations",
            "risk-assessment": "Community safety analysis"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
