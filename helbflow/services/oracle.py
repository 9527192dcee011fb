# This project was developed with assistance from AI tools.
"""Advisory oracle -- best-effort LLM suggestions behind a capability interface.

The oracle is untrusted and optional. Every method either returns a validated
result or raises ``OracleError``; it never substitutes default values itself.
Fallback policy lives with the callers in ``services.advice``.
"""

import asyncio
import json
import logging
import re
from decimal import Decimal
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from ..core.config import settings
from ..inference.client import complete_task
from ..schemas.advice import BudgetAdviceItem, SpendingAnalysis
from ..schemas.disbursement import DisbursementCalculation, DisbursementCalculationRequest

logger = logging.getLogger(__name__)

# Matches ```json ... ``` or ``` ... ``` fences that LLMs often wrap around JSON.
_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)

_SYSTEM_ADVISOR = (
    "You are a financial advisor helping Kenyan university students manage "
    "their student loan money responsibly. Amounts are in KSh."
)


class OracleError(Exception):
    """The oracle could not produce a usable answer."""

    pass


class AdvisoryOracle(Protocol):
    """Capabilities the application may ask of an advisory oracle."""

    async def suggest_disbursement(
        self, profile: DisbursementCalculationRequest
    ) -> DisbursementCalculation: ...

    async def categorize_transaction(
        self, description: str, merchant_name: str | None = None
    ) -> str: ...

    async def analyze_budget(
        self,
        *,
        spending: list[dict[str, Any]],
        budgets: list[dict[str, Any]],
        monthly_income: Decimal,
    ) -> list[BudgetAdviceItem]: ...

    async def generate_tip(self, spending: list[dict[str, Any]]) -> str: ...

    async def analyze_spending_trends(
        self, transactions: list[dict[str, Any]]
    ) -> SpendingAnalysis: ...


def _strip_json_fences(raw: str) -> str:
    """Strip markdown code fences LLMs sometimes add despite response_format."""
    match = _FENCE_RE.match(raw.strip())
    return match.group(1) if match else raw.strip()


def _dumps(payload: Any) -> str:
    return json.dumps(payload, default=str)


class _AdviceList(BaseModel):
    advice: list[BudgetAdviceItem] = []


class LLMAdvisoryOracle:
    """Oracle backed by an OpenAI-compatible chat completion endpoint."""

    def __init__(self, timeout: float | None = None):
        self._timeout = timeout or settings.ORACLE_TIMEOUT_SECONDS

    async def _complete(self, task: str, prompt: str, *, json_mode: bool = False) -> str:
        messages = [
            {"role": "system", "content": _SYSTEM_ADVISOR},
            {"role": "user", "content": prompt},
        ]
        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            return await asyncio.wait_for(
                complete_task(task, messages, **kwargs),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            raise OracleError(f"Oracle timed out on '{task}'") from exc
        except Exception as exc:
            raise OracleError(f"Oracle request failed on '{task}': {exc}") from exc

    async def _complete_json(self, task: str, prompt: str, model: type[BaseModel]):
        raw = await self._complete(task, prompt, json_mode=True)
        try:
            return model.model_validate(json.loads(_strip_json_fences(raw)))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise OracleError(f"Oracle returned unusable JSON for '{task}'") from exc

    async def suggest_disbursement(
        self, profile: DisbursementCalculationRequest
    ) -> DisbursementCalculation:
        prompt = (
            "Calculate the optimal semester disbursement for a student with this profile:\n"
            f"- Course: {profile.course}\n"
            f"- Institution: {profile.institution}\n"
            f"- Region: {profile.region}\n"
            f"- Academic year: {profile.year}\n"
            f"- Semester: {profile.semester}\n\n"
            "Consider course-specific costs, regional cost of living, institution fee "
            "structures, and semester timing. Respond with a JSON object with numeric "
            "fields tuition, upkeep, books, supplies, optional accommodation, total, and a "
            "string field reasoning."
        )
        return await self._complete_json("disbursement", prompt, DisbursementCalculation)

    async def categorize_transaction(
        self, description: str, merchant_name: str | None = None
    ) -> str:
        prompt = (
            "Categorize this student transaction.\n"
            f"Description: {description}\n"
            f"Merchant: {merchant_name or 'Unknown'}\n\n"
            "Common categories: food, transport, entertainment, accommodation, books, "
            "supplies, utilities, healthcare, clothing, other.\n"
            "Return only the category name."
        )
        raw = await self._complete("categorize", prompt)
        category = raw.strip().strip(".").lower()
        if not category:
            raise OracleError("Oracle returned an empty category")
        return category

    async def analyze_budget(
        self,
        *,
        spending: list[dict[str, Any]],
        budgets: list[dict[str, Any]],
        monthly_income: Decimal,
    ) -> list[BudgetAdviceItem]:
        prompt = (
            f"Monthly income: KSh {monthly_income}\n"
            f"Spending: {_dumps(spending)}\n"
            f"Budget allocations: {_dumps(budgets)}\n\n"
            "Advise on overspending categories, budget adherence, savings opportunities, "
            "and smart spending. Respond with a JSON object {\"advice\": [...]} where each "
            "item has category, message, type (warning, tip or alert), and suggestedAction."
        )
        result = await self._complete_json("budget_advice", prompt, _AdviceList)
        return result.advice

    async def generate_tip(self, spending: list[dict[str, Any]]) -> str:
        prompt = (
            "Based on this student's spending pattern, give one concise, actionable "
            f"financial tip:\n{_dumps(spending)}"
        )
        tip = (await self._complete("financial_tip", prompt)).strip()
        if not tip:
            raise OracleError("Oracle returned an empty tip")
        return tip

    async def analyze_spending_trends(
        self, transactions: list[dict[str, Any]]
    ) -> SpendingAnalysis:
        prompt = (
            f"Analyze these student transactions for spending trends:\n{_dumps(transactions)}\n\n"
            "Respond with a JSON object with overspendingCategories (list), "
            "savingsOpportunities (list), recommendations (list), and predictedSpending "
            "(number, next month's total)."
        )
        return await self._complete_json("spending_trends", prompt, SpendingAnalysis)


class DisabledOracle:
    """Oracle used when ORACLE_ENABLED is false; every call fails fast."""

    async def _fail(self, *args: Any, **kwargs: Any):
        raise OracleError("Advisory oracle is disabled")

    suggest_disbursement = _fail
    categorize_transaction = _fail
    analyze_budget = _fail
    generate_tip = _fail
    analyze_spending_trends = _fail


def get_advisory_oracle() -> AdvisoryOracle:
    """FastAPI dependency returning the configured oracle."""
    if not settings.ORACLE_ENABLED:
        return DisabledOracle()
    return LLMAdvisoryOracle()


def log_oracle_status() -> None:
    """Log whether the advisory oracle is active. Call at startup."""
    if settings.ORACLE_ENABLED:
        logger.info(
            "Advisory oracle enabled (timeout=%.0fs); fallbacks apply on failure",
            settings.ORACLE_TIMEOUT_SECONDS,
        )
    else:
        logger.warning("Advisory oracle disabled -- all AI suggestions use static fallbacks")
