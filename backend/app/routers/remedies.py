"""
Remedy browsing and symptom search endpoints.

Reads are public.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zencure.db import get_db
from zencure.services import remedy_service

from ..dependencies import Pagination, get_pagination
from ..schemas import (
    KeywordsRequest,
    RemedyListResponse,
    RemedyResponse,
    ScoredRemedyResponse,
)

router = APIRouter(prefix="/remedies", tags=["remedies"])


@router.get("", response_model=RemedyListResponse)
def list_remedies(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    """List remedies, best rated first."""
    page = remedy_service.list_remedies(db, page=pagination.page, limit=pagination.limit)
    return RemedyListResponse(
        remedies=[RemedyResponse.model_validate(remedy) for remedy in page.items],
        page=page.page,
        pages=page.pages,
        total=page.total,
    )


@router.post("/search", response_model=list[RemedyResponse])
def search_remedies(payload: KeywordsRequest, db: Session = Depends(get_db)):
    """Remedies with a symptom named exactly as one of the keywords, best rated first."""
    remedies = remedy_service.search_remedies(db, payload.keywords)
    return [RemedyResponse.model_validate(remedy) for remedy in remedies]


@router.post("/query", response_model=list[ScoredRemedyResponse])
def query_remedies(payload: KeywordsRequest, db: Session = Depends(get_db)):
    """Matching remedies ranked by relevance score, highest first."""
    results = remedy_service.query_remedies(db, payload.keywords)
    return [
        ScoredRemedyResponse(
            **RemedyResponse.model_validate(result.remedy).model_dump(),
            calculated_relevance_score=result.calculated_relevance_score,
            relevance_breakdown=result.breakdown.to_dict(),
        )
        for result in results
    ]


@router.get("/{remedy_id}", response_model=RemedyResponse)
def get_remedy(remedy_id: str, db: Session = Depends(get_db)):
    return RemedyResponse.model_validate(remedy_service.get_remedy(db, remedy_id))
