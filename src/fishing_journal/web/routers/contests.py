"""Contest routes."""

from datetime import date

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...config import settings
from ...db.repositories import ContestRepository
from ...models.contest import ContestEntry
from ...services.browse import unique_catches, unique_locations, view
from ...services.entry_builder import ContestDraft, ContestSaveError, EntryBuilder
from ...services.stats import summarize

router = APIRouter(tags=["contests"])


def get_repository(request: Request) -> ContestRepository:
    """Get the contest repository from app state."""
    return request.app.state.repository


def get_contests(request: Request) -> tuple[ContestEntry, ...]:
    """Get the latest contest snapshot from app state."""
    return request.app.state.contests


def contest_to_json(contest: ContestEntry) -> dict:
    """Serialize a stored contest for API responses."""
    data = contest.to_dict()
    data["id"] = contest.id
    data["created_at"] = contest.created_at.isoformat() if contest.created_at else None
    return data


@router.get("/contests")
async def list_contests(
    request: Request,
    location: str = "",
    catch: str = "",
    page: int = 1,
):
    """Filtered, paginated contests plus the available filter choices."""
    contests = get_contests(request)
    current = view(contests, location, catch, page, settings.page_size)

    return {
        "items": [contest_to_json(c) for c in current.items],
        "page": current.page,
        "total_pages": current.total_pages,
        "total_items": current.total_items,
        "locations": unique_locations(contests),
        "catches": unique_catches(contests),
    }


@router.get("/contests/{contest_id}")
async def get_contest(request: Request, contest_id: int):
    """A single contest."""
    contest = await get_repository(request).get(contest_id)
    if not contest:
        return JSONResponse(status_code=404, content={"error": "Contest not found"})
    return contest_to_json(contest)


@router.post("/contests", status_code=201)
async def create_contest(request: Request, payload: dict):
    """Normalize and store a submitted contest."""
    builder = EntryBuilder(get_repository(request))
    builder.load(ContestDraft.from_dict(payload, date.today()))

    try:
        stored = await builder.submit()
    except ContestSaveError as e:
        return JSONResponse(status_code=503, content={"error": e.message})

    return contest_to_json(stored)


@router.get("/stats")
async def get_stats(request: Request):
    """Dashboard statistics, or null when no contest is recorded."""
    summary = summarize(get_contests(request))
    return summary.to_dict() if summary else None
