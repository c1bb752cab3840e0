"""Turns free-form model output into a validated AnalysisResult."""

import json
from collections.abc import Callable
from datetime import datetime, timezone

from contract_analyzer.analysis.defaults import fallback_analysis
from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.analysis.validator import build_analysis
from contract_analyzer.logging.logger import Log


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def extract_json_object(text: str) -> str | None:
    """Return the first balanced {...} substring of text, or None.

    Scanning starts at the first '{' and tracks brace depth. Braces inside
    JSON string literals are ignored. If the first object never closes the
    result is None; no later candidate is tried.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


class ResponseInterpreter:
    """Parses model output into the analysis schema; never raises."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def interpret(self, raw_text: str) -> AnalysisResult:
        processed_at = self._clock()

        candidate = extract_json_object(raw_text or "")
        if candidate is None:
            Log.warning("No JSON object found in model response, using fallback analysis")
            return fallback_analysis(processed_at)

        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError) as exc:
            Log.warning(f"Failed to parse model response JSON, using fallback analysis: {exc}")
            return fallback_analysis(processed_at)

        if not isinstance(parsed, dict):
            Log.warning("Model response JSON is not an object, using fallback analysis")
            return fallback_analysis(processed_at)

        try:
            result = build_analysis(parsed, processed_at)
        except Exception as exc:  # noqa: BLE001
            Log.exception(f"Unexpected error mapping model response, using fallback: {exc}")
            return fallback_analysis(processed_at)

        Log.info(
            f"Interpreted model response: {len(result.key_terms)} key terms, "
            f"{len(result.risk_assessment.risks)} risks, "
            f"{len(result.clause_analysis)} clauses"
        )
        return result
