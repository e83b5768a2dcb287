"""Documentation completeness scoring.

Checks a project and its endpoints for blocking issues (-10 points each) and
advisory warnings (-2 points each), starting from 100.
"""

import re

from api_doc_builder.parser.base import ApiEndpoint, Project, Record

PATH_PARAM_RE = re.compile(r"{([^}]+)}")

ISSUE_PENALTY = 10
WARNING_PENALTY = 2


class DocStatistics(Record):
    total_endpoints: int
    endpoints_with_description: int
    endpoints_with_examples: int
    endpoints_with_tags: int


class ValidationReport(Record):
    score: int
    status: str  # excellent / good / fair / poor
    issues: list[str]
    warnings: list[str]
    statistics: DocStatistics


def validate(project: Project, endpoints: list[ApiEndpoint]) -> ValidationReport:
    """Score the documentation of a project."""
    issues: list[str] = []
    warnings: list[str] = []

    if not project.description:
        warnings.append("Project description is missing")
    if not project.base_url:
        warnings.append("Base URL is not set")

    for endpoint in endpoints:
        _check_endpoint(endpoint, issues, warnings)

    score = max(0, 100 - ISSUE_PENALTY * len(issues) - WARNING_PENALTY * len(warnings))
    return ValidationReport(
        score=score,
        status=score_status(score),
        issues=issues,
        warnings=warnings,
        statistics=_statistics(endpoints),
    )


def score_status(score: int) -> str:
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "fair"
    return "poor"


def _check_endpoint(endpoint: ApiEndpoint, issues: list[str], warnings: list[str]) -> None:
    label = f"{endpoint.method} {endpoint.path}"

    if not endpoint.summary.strip():
        issues.append(f"{label}: Summary is missing")
    if not endpoint.responses:
        issues.append(f"{label}: No responses defined")

    if not endpoint.description:
        warnings.append(f"{label}: Description is missing")
    if not endpoint.tags:
        warnings.append(f"{label}: No tags assigned")

    path_params = PATH_PARAM_RE.findall(endpoint.path)
    declared = [p for p in endpoint.parameters if p.location == "path"]
    if len(path_params) != len(declared):
        issues.append(f"{label}: Path parameter count mismatch")

    if endpoint.request_body is not None and endpoint.request_body.example is None:
        warnings.append(f"{label}: Request body example is missing")
    for response in endpoint.responses:
        if response.example is None:
            warnings.append(f"{label}: Response {response.status_code} example is missing")


def _has_example(endpoint: ApiEndpoint) -> bool:
    if endpoint.request_body is not None and endpoint.request_body.example is not None:
        return True
    return any(r.example is not None for r in endpoint.responses)


def _statistics(endpoints: list[ApiEndpoint]) -> DocStatistics:
    return DocStatistics(
        total_endpoints=len(endpoints),
        endpoints_with_description=sum(1 for e in endpoints if e.description),
        endpoints_with_examples=sum(1 for e in endpoints if _has_example(e)),
        endpoints_with_tags=sum(1 for e in endpoints if e.tags),
    )
