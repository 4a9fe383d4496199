from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query

from app.schemas.traffic import ChartResponse, FormattedResponse, Service, TimeSeries
from app.services.aggregator import combine_routes
from app.services.selector import ALL_ROUTES, build_chart
from app.utils.formatting import format_bytes, format_duration

router = APIRouter(prefix="/api/traffic", tags=["traffic"])


@router.post("/chart", response_model=ChartResponse)
def chart(
    service: Service,
    route: str = Query(ALL_ROUTES),
    now: Optional[datetime] = Query(None),
):
    return build_chart(service, route, now)


@router.post("/summary", response_model=TimeSeries)
def summary(service: Service):
    return combine_routes(service.routes)


@router.get("/format/bytes", response_model=FormattedResponse)
def bytes_label(value: float = Query(..., ge=0)):
    return FormattedResponse(formatted=format_bytes(value))


@router.get("/format/duration", response_model=FormattedResponse)
def duration_label(value: Optional[float] = Query(None)):
    return FormattedResponse(formatted=format_duration(value))
