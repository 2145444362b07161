"""
AI portfolio advisor using Google Gemini.

Falls back to a static analysis if Gemini is not configured or the call
fails for any reason.
"""

import json
import logging
from typing import List, Literal, Optional

from google import genai
from pydantic import BaseModel, Field

from wealthtrack.calculations.models import EntryType, FinancialEntry
from wealthtrack.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

FALLBACK_SUMMARY = (
    "I'm sorry, I couldn't analyze your data at this moment. "
    "Please check your connection and try again."
)
FALLBACK_SUGGESTIONS = [
    "Diversify your investments",
    "Reduce high-interest debt",
    "Maintain an emergency fund",
]

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "suggestions": {"type": "ARRAY", "items": {"type": "STRING"}},
        "riskAssessment": {"type": "STRING", "description": "Low, Medium, or High"},
    },
    "required": ["summary", "suggestions", "riskAssessment"],
}


class AIAnalysisResult(BaseModel):
    """Portfolio analysis returned to the dashboard."""

    summary: str
    suggestions: List[str] = Field(min_length=1)
    risk_assessment: Literal["Low", "Medium", "High"]


def fallback_analysis() -> AIAnalysisResult:
    """Static analysis served whenever the model cannot be reached."""
    return AIAnalysisResult(
        summary=FALLBACK_SUMMARY,
        suggestions=list(FALLBACK_SUGGESTIONS),
        risk_assessment="Medium",
    )


def summarize_entries(entries: List[FinancialEntry]) -> dict:
    """Reduce entries to the fields shared with the model."""

    def brief(entry: FinancialEntry) -> dict:
        return {"name": entry.name, "category": entry.category, "value": entry.value}

    return {
        "assets": [brief(e) for e in entries if e.type == EntryType.ASSET],
        "liabilities": [brief(e) for e in entries if e.type == EntryType.LIABILITY],
    }


def build_prompt(entries: List[FinancialEntry]) -> str:
    portfolio = summarize_entries(entries)
    return f"""
    Analyze the following financial portfolio and provide strategic advice:

    Assets: {json.dumps(portfolio["assets"])}
    Liabilities: {json.dumps(portfolio["liabilities"])}

    Please provide:
    1. A concise summary of the current financial position.
    2. Three actionable suggestions to improve net worth or reduce risk.
    3. An overall risk assessment (Low, Medium, High).
    """


def parse_analysis(text: Optional[str]) -> AIAnalysisResult:
    """
    Parse the model's JSON reply.

    Missing summary or risk label get defaults. Malformed JSON, no
    suggestions or an unknown risk label raises.
    """
    result = json.loads(text or "{}")
    return AIAnalysisResult(
        summary=result.get("summary") or "No summary available.",
        suggestions=result.get("suggestions") or [],
        risk_assessment=result.get("riskAssessment") or "Medium",
    )


class AdvisorService:
    """Portfolio advisor with Gemini integration."""

    def __init__(self, client=None):
        self.model = settings.gemini_model
        self.client = client

        if self.client is None and settings.gemini_api_key:
            self.client = genai.Client(api_key=settings.gemini_api_key)

    def analyze(self, entries: List[FinancialEntry]) -> AIAnalysisResult:
        """
        Analyze a portfolio.

        Args:
            entries: Financial entries to analyze

        Returns:
            Model analysis, or the static fallback on any failure
        """
        if not self.client:
            logger.info("Gemini not configured, serving fallback analysis")
            return fallback_analysis()

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=build_prompt(entries),
                config={
                    "response_mime_type": "application/json",
                    "response_schema": RESPONSE_SCHEMA,
                },
            )
            return parse_analysis(response.text)

        except Exception as e:
            logger.error(f"Gemini analysis error: {str(e)}")
            return fallback_analysis()


# Singleton instance
_advisor_service: Optional[AdvisorService] = None


def get_advisor_service() -> AdvisorService:
    """Get the advisor service singleton."""
    global _advisor_service
    if _advisor_service is None:
        _advisor_service = AdvisorService()
    return _advisor_service
