"""Document analysis service HTTP client for extracting credit data and goals"""

import httpx
from dataclasses import dataclass
from typing import List, Optional
from fico_simulator.domain.models import CreditProfile, Goal
from fico_simulator.domain.parsing import parse_analysis_response
from fico_simulator.domain.exceptions import AnalysisServiceError
from fico_simulator.infrastructure.observability.metrics import analysis_latency_histogram
from fico_simulator.config import settings


@dataclass
class AnalysisResult:
    """Parsed output of one document analysis"""

    profile: CreditProfile
    goals: List[Goal]


class AnalysisClient:
    """Client for the external credit-report analysis service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.analysis_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def analyze_document(self, content: str, mime_type: str) -> AnalysisResult:
        """
        Submit a credit report and parse the extracted credit data and goals.

        Args:
            content: Report text, or a data URL for PDFs
            mime_type: MIME type of the report, e.g. "text/plain" or "application/pdf"

        Raises:
            AnalysisServiceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with analysis_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/api/analyze",
                        json={"content": content, "mimeType": mime_type},
                    )
                response.raise_for_status()
                data = response.json()

                if not isinstance(data, dict) or "credit_data" not in data:
                    raise AnalysisServiceError("Analysis response is missing credit_data")

                profile, goals = parse_analysis_response(data)
                return AnalysisResult(profile=profile, goals=goals)

            except httpx.TimeoutException as e:
                raise AnalysisServiceError(f"Analysis service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AnalysisServiceError(f"Analysis service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AnalysisServiceError(f"Analysis service unreachable: {e}") from e
            except ValueError as e:
                raise AnalysisServiceError(f"Invalid analysis response: {e}") from e
