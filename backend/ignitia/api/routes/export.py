import logging
import uuid

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ignitia import crud, exporter
from ignitia.api.deps import CurrentUser, SessionDep
from ignitia.core.errors import InvalidInput, NotFound
from ignitia.models import Generation
from ignitia.schemas import PitchExportRequest

router = APIRouter(prefix="/export", tags=["export"])
logger = logging.getLogger(__name__)


def _owned_generation(
    session: SessionDep, current_user: CurrentUser, generation_id: uuid.UUID
) -> Generation:
    # Someone else's record and a missing record look the same to the caller.
    generation = crud.get_generation(
        session=session, owner_id=current_user.id, generation_id=generation_id
    )
    if not generation:
        raise NotFound("Generation not found")
    return generation


@router.post("/pdf", response_class=HTMLResponse)
def export_pitch(
    payload: PitchExportRequest, session: SessionDep, current_user: CurrentUser
) -> HTMLResponse:
    """
    Render a print-ready pitch document. The browser prints it to PDF.
    """
    if payload.generation_id is None:
        raise InvalidInput("generationId required")
    generation = _owned_generation(session, current_user, payload.generation_id)
    filename = exporter.export_filename(generation.startup_name, "pitch.html")
    logger.info("Exporting pitch document for generation %s", generation.id)
    return HTMLResponse(
        exporter.render_pitch_document(generation),
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.get("/html/{id}", response_class=HTMLResponse)
def export_landing_page(
    id: uuid.UUID, session: SessionDep, current_user: CurrentUser
) -> HTMLResponse:
    generation = _owned_generation(session, current_user, id)
    filename = exporter.export_filename(generation.startup_name, "landing-page.html")
    return HTMLResponse(
        exporter.landing_page_html(generation),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
