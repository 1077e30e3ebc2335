from pydantic import BaseModel, ConfigDict


class AccountResponse(BaseModel):
    id: int
    username: str
    credits: int
    is_admin: bool

    model_config = ConfigDict(from_attributes=True)


class AdminStatsResponse(BaseModel):
    users: int
    films: int
    available_films: int
    active_rentals: int
    reviews: int
