"""Symbol database inspection routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from findit.db import get_database
from findit.models import CategoriesOut, CategoryOut, SimilarityOut, SymbolLookupOut, SymbolOut
from findit.similarity import are_similar

router = APIRouter(prefix="/api/v1/symbols", tags=["symbols"])


@router.get("/categories", response_model=CategoriesOut)
async def list_categories():
    """Public categories with their symbol counts, in database order."""
    categories = [
        CategoryOut(name=name, count=count)
        for name, count in get_database().public_categories()
    ]
    return CategoriesOut(categories=categories, total=len(categories))


@router.get("/lookup/{name}", response_model=SymbolLookupOut)
async def lookup(name: str):
    entry = get_database().find_by_name(name)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No symbol named '{name}'")
    return SymbolLookupOut(
        name=name,
        symbol=SymbolOut(
            symbol=entry.symbol,
            category=entry.category,
            names=list(entry.names),
            keywords=list(entry.keywords),
            aliases=list(entry.aliases),
        ),
    )


@router.get("/similar", response_model=SimilarityOut)
async def similar(a: str = Query(..., min_length=1), b: str = Query(..., min_length=1)):
    """Whether two symbols are too alike to appear in the same round."""
    return SimilarityOut(a=a, b=b, similar=are_similar(get_database(), a, b))
