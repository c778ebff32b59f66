import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from loginflow.adapter.services.bcrypt_hasher import BcryptPasswordHasher
from loginflow.app.services.password_hasher import IPasswordHasher
from loginflow.app.services.settings import LoginSettings
from loginflow.app.use_cases.auth import LoginHooks

from .error import ClientError
from .utils.rendering import render_json

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


def create_app(
    ApplicationConfig,
    hooks: Optional[LoginHooks] = None,
    renderer: Optional[Callable] = None,
    hasher: Optional[IPasswordHasher] = None,
) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Login Flow API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.login_settings = LoginSettings.from_config(ApplicationConfig)
    app.state.login_hooks = hooks or LoginHooks()
    app.state.renderer = renderer or render_json
    app.state.password_hasher = hasher or BcryptPasswordHasher(ApplicationConfig.BCRYPT_ROUNDS)

    from loginflow.api.routes import health_check, login

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(login.router, prefix=ApplicationConfig.API_PREFIX, tags=["Login"])

    app.add_exception_handler(ClientError, handle_client_error)

    return app
