"""Observability configuration using Logfire.

Services log through ``logfire`` directly:

    import logfire

    with logfire.span("comment_service.create_comment", content_id=str(cid)):
        ...
        logfire.info("Comment created", comment_id=str(comment.id))

This module only sets up the exporter and the framework integrations.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from remark.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current environment.

    Records are sent to Logfire cloud when ``send_to_logfire`` is set, or
    when it is unset and a token is present. Otherwise they only go to the
    console, with verbose output in debug mode.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    config_kwargs = {
        "service_name": "remark-api",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        return result

    logfire.instrument_fastapi(
        app,
        # Auth cookies and bearer tokens stay out of the traces
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement run through the engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
