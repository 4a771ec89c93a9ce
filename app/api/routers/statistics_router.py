"""
app/api/routers/statistics_router.py

Dashboard statistics endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_statistics_service
from app.schemas.statistics import StatisticsResponse
from app.services.statistics_service import StatisticsService

router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=StatisticsResponse)
def get_statistics(
    statistics_service: StatisticsService = Depends(get_statistics_service),
) -> StatisticsResponse:
    return StatisticsResponse.model_validate(statistics_service.get_statistics())
