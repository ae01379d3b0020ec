from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from config import settings
from schemas.schemas import (
    ErrorResponse,
    FacetsResponse,
    FilterRequest,
    FilterResponse,
    HealthCheckResponse,
    SummaryResponse,
)
from services.filter_service import run_filters
from engine import occupations, streets, summarize
from utils.fetch_houses import load_houses

log = structlog.get_logger()

router = APIRouter()

# Loaded directory, replaced at startup / reload
HOUSES = []


def set_houses(houses):
    global HOUSES
    HOUSES = list(houses)


def _houses_for(request: FilterRequest):
    return request.houses if request.houses is not None else HOUSES


def _filter_response(result):
    return FilterResponse(
        status="success",
        total_houses=len(result),
        total_members=sum(len(h.members) for h in result),
        data=result,
    )


@router.get("/", response_model=HealthCheckResponse)
async def healthcheck():
    return HealthCheckResponse(
        status="ok",
        message="Directory filter engine live",
        version=settings.version,
    )


@router.post("/filter", response_model=FilterResponse)
async def filter_directory(request: FilterRequest):
    """Search box and field filters together."""
    result = run_filters(_houses_for(request), request.filters, mode="combined")
    return _filter_response(result)


@router.post("/filter/members", response_model=FilterResponse)
async def filter_members(request: FilterRequest):
    result = run_filters(_houses_for(request), request.filters, mode="members")
    return _filter_response(result)


@router.post("/filter/houses", response_model=FilterResponse)
async def filter_by_house(request: FilterRequest):
    result = run_filters(_houses_for(request), request.filters, mode="houses")
    return _filter_response(result)


@router.get("/facets", response_model=FacetsResponse)
async def facets():
    return FacetsResponse(
        status="success",
        streets=streets(HOUSES),
        occupations=occupations(HOUSES),
    )


@router.post("/summary", response_model=SummaryResponse)
async def summary(request: FilterRequest):
    result = run_filters(_houses_for(request), request.filters, mode="combined")
    return SummaryResponse(status="success", data=summarize(result))


@router.post("/admin/reload-houses", response_model=dict, responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def admin_reload_houses():
    if not settings.houses_path:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(
                status="error",
                message="No houses file configured."
            ).model_dump()
        )

    try:
        houses = load_houses(settings.houses_path)
    except (FileNotFoundError, ValueError) as e:
        log.error("Reloading houses failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                status="error",
                message="Failed to reload houses.",
                info=str(e)
            ).model_dump()
        )

    set_houses(houses)
    return {"status": "houses reloaded", "total_houses": len(houses)}
