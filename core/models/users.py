from pydantic import BaseModel, Field

from core.models.base import CamelModel


class User(BaseModel):
    id: int
    avatar: str
    first_name: str
    last_name: str
    age: int
    nationality: str
    hobbies: list[str] = Field(default_factory=list)


class PaginationInfo(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool


class UsersResponse(CamelModel):
    data: list[User] = Field(default_factory=list)
    pagination: PaginationInfo


class FilterItem(BaseModel):
    hobby: str | None = None
    nationality: str | None = None
    count: int


class FiltersResponse(CamelModel):
    top_hobbies: list[FilterItem] = Field(default_factory=list)
    top_nationalities: list[FilterItem] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
