"""Public catalog router for tour listings."""

from typing import Any, List

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.dependencies import DatabaseSession
from ..models.tour import TourFlag
from ..schemas.tour import ThemeSample, TourDocument
from ..services.tour_service import TourService

router = APIRouter(prefix="/api", tags=["catalog"])

SIMILAR_TOURS_LIMIT = 4
THEME_SAMPLE_LIMIT = 6


def _tours_json(tours: List[dict[str, Any]]) -> List[dict[str, Any]]:
    return [TourDocument.model_validate(tour).to_json() for tour in tours]


@router.get("/tours", response_model=List[TourDocument])
@router.get("/alltour", response_model=List[TourDocument], include_in_schema=False)
async def list_tours(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """List every tour."""
    tours = await TourService(db).list_tours()
    return JSONResponse(content=_tours_json(tours))


@router.get("/domestic-packages", response_model=List[TourDocument])
@router.get("/indian-tours", response_model=List[TourDocument])
async def list_domestic_tours(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """List tours flagged as domestic (Indian)."""
    tours = await TourService(db).list_by_flag(TourFlag.INDIAN)
    return JSONResponse(content=_tours_json(tours))


@router.get("/international-packages", response_model=List[TourDocument])
@router.get("/international-tours", response_model=List[TourDocument])
async def list_international_tours(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """List tours flagged as international."""
    tours = await TourService(db).list_by_flag(TourFlag.INTERNATIONAL)
    return JSONResponse(content=_tours_json(tours))


@router.get("/fixed-tours", response_model=List[TourDocument])
async def list_fixed_departure_tours(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """List tours with fixed departure dates."""
    tours = await TourService(db).list_by_flag(TourFlag.FIXED_DEPARTURE)
    return JSONResponse(content=_tours_json(tours))


@router.get("/similar-tours", response_model=List[TourDocument])
async def sample_fixed_departure_tours(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """Small sample of fixed-departure tours for the home page."""
    tours = await TourService(db).list_by_flag(
        TourFlag.FIXED_DEPARTURE, limit=SIMILAR_TOURS_LIMIT
    )
    return JSONResponse(content=_tours_json(tours))


@router.get("/theme-destinations", response_model=List[ThemeSample])
async def list_theme_destinations(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """One representative tour per theme."""
    samples = await TourService(db).list_one_per_theme(limit=THEME_SAMPLE_LIMIT)
    return JSONResponse(content=[
        ThemeSample.model_validate(sample).model_dump(mode="json", by_alias=True)
        for sample in samples
    ])


@router.get("/tour/{url}", response_model=TourDocument)
async def get_tour_by_url(url: str, db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """Fetch a tour by its public slug."""
    tour = await TourService(db).get_tour_by_url(url)
    return JSONResponse(content=TourDocument.model_validate(tour).to_json())


@router.get("/tour/{url}/similar", response_model=List[TourDocument])
async def list_similar_tours(url: str, db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """
    Other tours sharing the theme of the tour at ``url``.

    Returns an empty list when the base tour does not exist.
    """
    tours = await TourService(db).list_similar_by_theme(url, limit=SIMILAR_TOURS_LIMIT)
    return JSONResponse(content=_tours_json(tours))
