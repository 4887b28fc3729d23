from fastapi import FastAPI, HTTPException, Request, Security
from fastapi.security.api_key import APIKeyHeader
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from api.schedule import router as schedule_router
from api.healthcheck import router as healthcheck_router
from utils.logger import logger
import os
import secrets

load_dotenv()
# env
API_KEY = os.getenv("API_KEY")
CORS_ALLOW_ORIGINS = [o for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o]
ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h] or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 = no limit

api_key_header = APIKeyHeader(
    name="x-api-key", auto_error=False, description="Enter your API key"
)


def require_api_key(api_key: str = Security(api_key_header)):
    """
    Guard for the timetable routes.

    When API_KEY is unset every request is let through (dev mode).
    """
    if not API_KEY:
        return None
    if not api_key or not secrets.compare_digest(str(api_key), str(API_KEY)):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return api_key


app = FastAPI(
    title="Lesson Scheduler",
    version="1.0.0",
    description="Weekly lesson timetables for every class, solved with OR-Tools CP-SAT",
)

if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


# school data payloads can be large; refuse oversized bodies before parsing
@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    if MAX_BODY_BYTES > 0:
        cl = request.headers.get("content-length")
        if cl and cl.isdigit() and int(cl) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"detail": "Payload too large"})
    return await call_next(request)


# Register routers; the health check stays public
app.include_router(schedule_router, prefix="/api", dependencies=[Security(require_api_key)])
app.include_router(healthcheck_router, prefix="/api")

if not API_KEY:
    logger.warning("⚠️ API_KEY not set; timetable routes are open (dev mode).")
logger.info("📚 Lesson scheduler API ready")
