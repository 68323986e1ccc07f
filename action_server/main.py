"""
Smart Home fulfillment server.
FastAPI application exposing the fulfillment endpoint.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request

from .config import settings
from .fulfillment import FulfillmentDispatcher
from .integration import (
    AccessTokenValidator,
    DeviceProvider,
    EchoProvider,
    HomeGraphClient,
    StaticTokenValidator,
    UserInfoTokenValidator,
)

# Configure logging
handlers = [logging.StreamHandler()]
if settings.log_file:
    handlers.append(logging.FileHandler(settings.log_file))

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers,
)
logger = logging.getLogger(__name__)


def _default_validator() -> AccessTokenValidator:
    if settings.auth_domain:
        logger.info(f"Validating access tokens against {settings.auth_domain}")
        return UserInfoTokenValidator()
    logger.info(f"Validating access tokens against {len(settings.access_tokens)} static tokens")
    return StaticTokenValidator(settings.access_tokens)


def create_app(
    validator: Optional[AccessTokenValidator] = None,
    provider: Optional[DeviceProvider] = None,
    notifier: Optional[HomeGraphClient] = None,
) -> FastAPI:
    """
    Build the fulfillment app.

    Args:
        validator: Access token validator; defaults from settings
        provider: Device provider; defaults to the in-memory EchoProvider
        notifier: HomeGraph client; created when a HomeGraph token is configured
    """
    if notifier is None and settings.homegraph_token:
        notifier = HomeGraphClient()
    if validator is None:
        validator = _default_validator()
    if provider is None:
        provider = EchoProvider(notifier=notifier)

    dispatcher = FulfillmentDispatcher(validator, provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        logger.info(f"Starting fulfillment server on {settings.fulfillment_path}")
        yield

        logger.info("Shutting down fulfillment server...")
        for client in (validator, provider, notifier):
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    app = FastAPI(
        title="Smart Home Fulfillment",
        description="Fulfillment endpoint for Smart Home Actions",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher
    app.state.notifier = notifier

    @app.post(settings.fulfillment_path)
    async def fulfillment(request: Request):
        """Handle SYNC, QUERY, EXECUTE and DISCONNECT intents."""
        return await dispatcher.handle(request)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "provider": type(provider).__name__,
            "homegraph": "configured" if notifier else "disabled",
        }

    if isinstance(provider, EchoProvider):
        @app.post("/echo/lights/{device_id}/toggle")
        async def toggle_light(device_id: str):
            """Flip a demo light as if it was switched locally."""
            if device_id not in provider.lights:
                raise HTTPException(status_code=404, detail=f"Light '{device_id}' not found")
            state = await provider.toggle_light(device_id)
            return {"id": device_id, "state": state.to_dict()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
