"""SEO router for per-tour search metadata."""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.dependencies import DatabaseSession, RequiredAdmin
from ..core.identifiers import parse_object_id
from ..schemas.seo import SeoUpdateRequest, SeoUpdateResponse
from ..schemas.tour import TourDocument
from ..services.seo_service import SeoService

router = APIRouter(prefix="/api", tags=["seo"])


@router.get("/tour-packages-seo/{tour_id}")
async def get_tour_seo(
    tour_id: str,
    db: AsyncIOMotorDatabase = DatabaseSession,
) -> JSONResponse:
    """Fetch the tour whose SEO fields are being edited."""
    tour = await SeoService(db).get_seo(parse_object_id(tour_id))
    return JSONResponse(content={
        "success": True,
        "tour": TourDocument.model_validate(tour).to_json(),
    })


@router.put(
    "/tour-packages-seo/{tour_id}",
    response_model=SeoUpdateResponse,
    responses={304: {"description": "Every provided field already had that value"}},
)
async def update_tour_seo(
    tour_id: str,
    request: SeoUpdateRequest,
    db: AsyncIOMotorDatabase = DatabaseSession,
    admin: dict = RequiredAdmin,
) -> Response:
    """
    Patch the SEO fields of a tour.

    Only the fields present in the body are written. Responds 304 with no
    body when nothing would change.
    """
    object_id = parse_object_id(tour_id)
    result = await SeoService(db).update_seo(object_id, request.provided_fields())

    if not result.modified:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)

    response_data = SeoUpdateResponse(tour_id=tour_id, updated_fields=result.updated_fields)
    return JSONResponse(content=response_data.model_dump(mode="json", by_alias=True))
