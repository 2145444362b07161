"""
AI insights API endpoint.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from wealthtrack.api.schemas import EntryInput, to_entries
from wealthtrack.services.advisor import AdvisorService, AIAnalysisResult, get_advisor_service

router = APIRouter()


class InsightsInput(BaseModel):
    """Input for portfolio analysis."""

    entries: List[EntryInput]


@router.post("", response_model=AIAnalysisResult)
async def analyze_portfolio(
    inputs: InsightsInput,
    advisor: AdvisorService = Depends(get_advisor_service),
):
    """Analyze the portfolio; always answers, falling back to static advice."""
    return await run_in_threadpool(advisor.analyze, to_entries(inputs.entries))
