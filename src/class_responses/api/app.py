"""FastAPI application factory."""

import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from class_responses.api.models import (
    SaveResponsesRequest,
    SessionPayload,
    SubmitResponseRequest,
)
from class_responses.app_logging import configure_logging
from class_responses.containers import AppContainer
from class_responses.domain.errors import (
    AlreadySubmittedError,
    InvalidInputError,
    NoSubmissionsError,
    NotFoundError,
    StorageError,
)

PDF_MEDIA_TYPE = "application/pdf"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(StorageError)
    @app.exception_handler(OSError)
    async def storage_failure(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Storage failure", exc_info=exc, extra={"path": request.url.path}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Storage failure"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/create")
    async def create_session(request: Request) -> dict[str, str]:
        """Create a draft session and return its id."""
        state_container: AppContainer = request.app.state.container
        return {"id": state_container.session_service.create_session()}

    @app.get("/data/{session_id}", response_model=None)
    async def session_data(
        session_id: str, request: Request
    ) -> SessionPayload | JSONResponse:
        """Return the stored session state."""
        state_container: AppContainer = request.app.state.container
        try:
            session = state_container.session_service.get_session(session_id)
        except NotFoundError:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"}
            )
        return SessionPayload.from_record(session)

    @app.post("/save/{session_id}")
    async def save_responses(
        session_id: str, payload: SaveResponsesRequest, request: Request
    ) -> dict[str, bool]:
        """Replace a session's answers."""
        state_container: AppContainer = request.app.state.container
        state_container.session_service.save_responses(session_id, payload.responses)
        return {"success": True}

    @app.get("/submit/{session_id}", response_model=None)
    async def export_session(
        session_id: str, request: Request
    ) -> FileResponse | PlainTextResponse:
        """Render a session report and send it as session.pdf.

        Unknown ids get a plain-text "Not found" body with status 200.
        """
        state_container: AppContainer = request.app.state.container
        try:
            artifact = await asyncio.to_thread(
                state_container.report_service.export_session, session_id
            )
        except NotFoundError:
            return PlainTextResponse("Not found")
        return FileResponse(
            artifact.path,
            media_type=PDF_MEDIA_TYPE,
            filename=artifact.download_name,
        )

    @app.post("/submit-response/{assignment_id}", response_model=None)
    async def submit_response(
        assignment_id: str, payload: SubmitResponseRequest, request: Request
    ) -> dict[str, bool] | JSONResponse:
        """Accept one response per respondent name."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.assignment_service.submit(
                assignment_id, payload.name, payload.response
            )
        except InvalidInputError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Missing fields"},
            )
        except AlreadySubmittedError:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"error": "You already submitted"},
            )
        return {"success": True}

    @app.get("/download/{assignment_id}", response_model=None)
    async def export_assignment(
        assignment_id: str, request: Request
    ) -> FileResponse | PlainTextResponse:
        """Render the combined class report for an assignment."""
        state_container: AppContainer = request.app.state.container
        try:
            artifact = await asyncio.to_thread(
                state_container.report_service.export_assignment, assignment_id
            )
        except NoSubmissionsError:
            return PlainTextResponse("No responses yet")
        except InvalidInputError:
            logger.warning(
                "Rejected report name", extra={"assignment_id": assignment_id}
            )
            return PlainTextResponse(
                "Invalid assignment id", status_code=status.HTTP_400_BAD_REQUEST
            )
        return FileResponse(
            artifact.path,
            media_type=PDF_MEDIA_TYPE,
            filename=artifact.download_name,
        )

    return app
