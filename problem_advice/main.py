"""
FastAPI application entry point.

This module initializes the FastAPI application with:
- Structured logging with request correlation IDs
- RFC 7807 problem responses for every uncaught exception
- Example routes showing the mapping

Architecture:
    - Logging configured before app creation (JSON/console)
    - Problem mapping policy is loaded from PROBLEM_* environment variables
    - Exception handlers delegate to a single ProblemAdvice on app.state
"""

import uuid

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI

from problem_advice.core.advice import ProblemAdvice
from problem_advice.core.exceptions.handlers import register_exception_handlers
from problem_advice.core.logging_config import setup_logging
from problem_advice.main_config import ProblemConfig, get_fastapi_config, get_problem_config
from problem_advice.routes import examples


def create_app(config: ProblemConfig | None = None) -> FastAPI:
    """Build the FastAPI application with problem handlers registered."""
    fastapi_config = get_fastapi_config()
    app = FastAPI(
        title=fastapi_config.title,
        description=fastapi_config.description,
        version=fastapi_config.version,
        debug=fastapi_config.debug,
    )

    # Add correlation ID middleware (adds request_id to context)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        generator=lambda: uuid.uuid4().hex[:16],
        validator=None,
        transformer=lambda x: x,
    )

    register_exception_handlers(app, ProblemAdvice.from_config(config or get_problem_config()))
    app.include_router(examples.router)
    return app


# =============================================================================
# Setup Logging (before app creation)
# =============================================================================
setup_logging()

app = create_app()

if __name__ == "__main__":
    import uvicorn

    # Use our structured logging config, disable uvicorn's default logging
    uvicorn.run(
        "problem_advice.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=None,
    )
