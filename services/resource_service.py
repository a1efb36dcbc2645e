"""
回應組裝服務：把 Game / Door 轉成帶 links 的 API 回應

純轉換邏輯，不涉及狀態轉換
"""
from typing import List

from fastapi import Request

from models import Game, Door
from schemas import Link, GameResponse, DoorResponse, DoorsResponse


def _link(request: Request, rel: str, route_name: str, **path_params) -> Link:
    return Link(rel=rel, href=str(request.url_for(route_name, **path_params)))


def game_location(request: Request, game: Game) -> str:
    """新遊戲的絕對 URI（建立遊戲時放在 Location header）"""
    return str(request.url_for("show_game", game_id=game.id))


def game_to_resource(request: Request, game: Game) -> GameResponse:
    return GameResponse(
        id=game.id,
        status=game.status,
        links=[
            _link(request, "self", "show_game", game_id=game.id),
            _link(request, "doors", "show_doors", game_id=game.id),
        ],
    )


def door_to_resource(request: Request, door: Door) -> DoorResponse:
    return DoorResponse(
        id=door.id,
        status=door.status,
        content=door.visible_content,
        links=[
            _link(request, "self", "transition_door", game_id=door.game_id, door_id=door.id),
        ],
    )


def doors_to_resource(request: Request, game: Game) -> DoorsResponse:
    doors: List[DoorResponse] = [door_to_resource(request, door) for door in game.doors]
    return DoorsResponse(
        doors=doors,
        links=[_link(request, "self", "show_doors", game_id=game.id)],
    )
