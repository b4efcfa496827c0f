# invitations/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from invitations.api import dependencies
from invitations.api.middleware import (
    ActorContextMiddleware,
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
)
from invitations.api.routers import health, invitations
from invitations.application.exceptions import ApplicationError, MailDeliveryError
from invitations.config.logging import configure_logging
from invitations.config.settings import get_settings
from invitations.domain.exceptions import DomainError, ErrorKind

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Populate the invitation store once at startup.
    service = await dependencies.get_invitation_service()
    logger.info("service_started", extra={"persistence_mode": settings.persistence_mode})
    yield
    service.cancel_send_all()
    await dependencies.close_clients()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> ActorContext -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(ActorContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=_STATUS_BY_KIND[exc.kind], content={"detail": exc.message})


@app.exception_handler(MailDeliveryError)
async def mail_delivery_error_handler(request, exc: MailDeliveryError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=_STATUS_BY_KIND[exc.kind], content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /invitations
app.include_router(health.router)
app.include_router(invitations.router, prefix="/invitations")
