"""
FastAPI Application Entry Point

Integrates:
  - Twilio WhatsApp webhook handler
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from infra import bootstrap_adapter
from transport.twilio.webhook import router as whatsapp_router

# Setup logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Dialogflow WhatsApp adapter starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"NLU Backend: {Config.NLU_BACKEND}")
    logger.info(f"Language: {Config.LANGUAGE_CODE}")
    if not Config.validate():
        logger.warning("Webhook will answer with the apology message until configured")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Dialogflow WhatsApp adapter shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Dialogflow WhatsApp Adapter",
    description="Twilio WhatsApp webhook backed by a Dialogflow agent",
    version="1.0.0",
    lifespan=lifespan,
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# Include routers
app.include_router(whatsapp_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness probe)."""
    try:
        bootstrap_adapter()
    except Exception as e:
        return {"status": "not_ready", "reason": str(e)}
    return {"status": "ready"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Dialogflow WhatsApp Adapter",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "whatsapp_webhook": "POST /webhook/whatsapp",
            "whatsapp_health": "GET /webhook/whatsapp/health",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=Config.AGENT_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
