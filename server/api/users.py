import math

from fastapi import APIRouter, Query

from core.clock import iso_now
from core.models.users import FiltersResponse, HealthResponse, PaginationInfo, UsersResponse
from server.api.dependencies import UsersDep
from server.utils.mock_data import filter_users, get_top_hobbies_and_nationalities

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=UsersResponse)
async def list_users(
    users: UsersDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    search: str = "",
    nationality: str = "",
    hobbies: str = "",
) -> UsersResponse:
    """Paginated, filterable list of the mock users."""
    filtered = filter_users(users, search=search, nationality=nationality, hobbies=hobbies)

    start = (page - 1) * limit
    total_pages = math.ceil(len(filtered) / limit)

    return UsersResponse(
        data=filtered[start : start + limit],
        pagination=PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_items=len(filtered),
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )


@router.get("/filters", response_model=FiltersResponse, response_model_exclude_none=True)
async def get_filters(users: UsersDep) -> FiltersResponse:
    top_hobbies, top_nationalities = get_top_hobbies_and_nationalities(users)
    return FiltersResponse(top_hobbies=top_hobbies, top_nationalities=top_nationalities)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(timestamp=iso_now())
