"""City directory API routes - thin layer delegating to use cases.
Only handles HTTP concerns; failures propagate to the exception handlers."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from city_directory.api.v1.schemas.city_schemas import (
    AddCityRequestSchema,
    CitySchema,
    DeleteCityRequestSchema,
    ErrorResponseSchema,
    FriendRequestSchema,
    MessageResponseSchema,
)
from city_directory.application.use_cases.create_or_replace_city import CreateOrReplaceCityUseCase
from city_directory.application.use_cases.delete_city import DeleteCityUseCase
from city_directory.application.use_cases.get_neighbour import GetNeighbourUseCase
from city_directory.application.use_cases.list_cities import ListCitiesUseCase
from city_directory.application.use_cases.update_friends import AddFriendUseCase, RemoveFriendUseCase
from city_directory.core.dependencies import (
    get_add_friend_use_case,
    get_create_or_replace_city_use_case,
    get_delete_city_use_case,
    get_list_cities_use_case,
    get_neighbour_use_case,
    get_remove_friend_use_case,
)
from city_directory.domain.exceptions import InvalidCityError

router = APIRouter(tags=["cities"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponseSchema},
    404: {"model": ErrorResponseSchema},
    502: {"model": ErrorResponseSchema},
}


def _require_city(city: Optional[str]) -> str:
    if not city:
        raise InvalidCityError("Missing 'city' query parameter")
    return city


@router.get(
    "/getFriends",
    response_model=List[CitySchema],
    response_model_exclude_none=True,
    responses={502: {"model": ErrorResponseSchema}},
)
async def list_cities(use_case: ListCitiesUseCase = Depends(get_list_cities_use_case)):
    """List every city with its friends and neighbour."""
    records = await use_case.execute()
    return [CitySchema(id=r.id, friends=r.friends, neighbour=r.neighbour) for r in records]


@router.post("/addCity", response_model=MessageResponseSchema, responses=ERROR_RESPONSES)
async def add_city(
    body: AddCityRequestSchema,
    use_case: CreateOrReplaceCityUseCase = Depends(get_create_or_replace_city_use_case),
):
    """
    Create a city, or replace it if the id is taken.

    The stored document holds only ``friends``; a previous neighbour is dropped.
    """
    await use_case.execute(body.cityName, body.friends)
    return MessageResponseSchema(message="City successfully added!")


@router.get("/getNeighbourDetail", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
async def get_neighbour_detail(
    city: Optional[str] = Query(None),
    use_case: GetNeighbourUseCase = Depends(get_neighbour_use_case),
):
    """Return the city's neighbour id as the plain response body."""
    neighbour = await use_case.execute(_require_city(city))
    return PlainTextResponse(neighbour)


@router.post(
    "/addFriend",
    response_model=MessageResponseSchema,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponseSchema}},
)
async def add_friend(
    body: FriendRequestSchema,
    city: Optional[str] = Query(None),
    use_case: AddFriendUseCase = Depends(get_add_friend_use_case),
):
    await use_case.execute(_require_city(city), body.newFriend)
    return MessageResponseSchema(message="New friend successfully added!")


@router.post(
    "/removeFriend",
    response_model=MessageResponseSchema,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponseSchema}},
)
async def remove_friend(
    body: FriendRequestSchema,
    city: Optional[str] = Query(None),
    use_case: RemoveFriendUseCase = Depends(get_remove_friend_use_case),
):
    """Remove every occurrence of ``newFriend`` from the city's friends."""
    await use_case.execute(_require_city(city), body.newFriend)
    return MessageResponseSchema(message="Friend successfully removed!")


@router.api_route(
    "/deleteCity",
    methods=["POST", "DELETE"],
    response_model=MessageResponseSchema,
    responses=ERROR_RESPONSES,
)
async def delete_city(
    body: DeleteCityRequestSchema,
    use_case: DeleteCityUseCase = Depends(get_delete_city_use_case),
):
    await use_case.execute(body.chosenCity)
    return MessageResponseSchema(message="City successfully deleted")
