"""Merge imported candidates into an existing endpoint list, skipping duplicates."""

import logging

from pydantic import BaseModel

from api_doc_builder.parser.base import ApiEndpoint

logger = logging.getLogger(__name__)


class ImportSummary(BaseModel):
    total: int
    imported_endpoints: int
    skipped_duplicates: int
    endpoints: list[ApiEndpoint]  # newly accepted candidates only


def merge_candidates(
    existing: list[ApiEndpoint], candidates: list[ApiEndpoint]
) -> ImportSummary:
    """Accept every candidate whose (method, path) is not taken yet.

    Candidates are checked one by one, so a repeated endpoint inside the same
    batch is also skipped. Accepted candidates are ordered after the existing
    endpoints.
    """
    seen = {endpoint.key for endpoint in existing}
    next_order = max((endpoint.order for endpoint in existing), default=-1) + 1

    accepted: list[ApiEndpoint] = []
    for candidate in candidates:
        if candidate.key in seen:
            logger.debug("Skipping duplicate endpoint %s %s", *candidate.key)
            continue
        seen.add(candidate.key)
        accepted.append(candidate.model_copy(update={"order": next_order}))
        next_order += 1

    return ImportSummary(
        total=len(candidates),
        imported_endpoints=len(accepted),
        skipped_duplicates=len(candidates) - len(accepted),
        endpoints=accepted,
    )
