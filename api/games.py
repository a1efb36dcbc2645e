"""
Game API Endpoints

職責：
1. 建立 / 查詢 / 刪除遊戲
2. 查詢門
3. 轉換門的狀態

錯誤對應：
- GameNotFound / DoorNotFound -> 404
- IllegalTransition -> 409
- InvalidArgument -> 400
- 其他 -> 500
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session
import logging

from database import get_db
from models import DoorStatus
from schemas import GameResponse, DoorsResponse, StatusResponse
from core.game_repository import GameRepository
from core.exceptions import GameNotFound, DoorNotFound, IllegalTransition, InvalidArgument
from services.resource_service import game_location, game_to_resource, doors_to_resource

router = APIRouter(prefix="/games", tags=["games"])
logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Any:
    """
    讀取 request body 的 JSON

    body 不是合法 JSON（或是空的）時返回 None，交給 DoorStatus.parse 回報 InvalidArgument
    """
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("", status_code=201)
def create_game(request: Request, db: Session = Depends(get_db)):
    """
    建立新遊戲

    返回：
        201，body 為空，Location header 指向新遊戲
    """
    try:
        game = GameRepository.create(db)
        return Response(status_code=201, headers={"Location": game_location(request, game)})

    except Exception as e:
        logger.error(f"Failed to create game: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{game_id}", response_model=GameResponse)
def show_game(game_id: int, request: Request, db: Session = Depends(get_db)):
    """
    取得遊戲資訊

    返回：
        - id
        - status: 遊戲階段
        - links: self、doors
    """
    try:
        game = GameRepository.retrieve(db, game_id)
        return game_to_resource(request, game)

    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get game {game_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.delete("/{game_id}", response_model=StatusResponse)
def destroy_game(game_id: int, db: Session = Depends(get_db)):
    """刪除遊戲（門一起刪除）"""
    try:
        GameRepository.remove(db, game_id)
        return StatusResponse(status="ok")

    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to remove game {game_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{game_id}/doors", response_model=DoorsResponse)
def show_doors(game_id: int, request: Request, db: Session = Depends(get_db)):
    """
    取得遊戲內所有的門

    注意：
        門打開前 content 一律是 UNKNOWN
    """
    try:
        game = GameRepository.retrieve(db, game_id)
        return doors_to_resource(request, game)

    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get doors of game {game_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{game_id}/doors/{door_id}", response_model=StatusResponse)
def transition_door(
    game_id: int,
    door_id: int,
    payload: Any = Depends(read_json_body),
    db: Session = Depends(get_db)
):
    """
    轉換門的狀態

    Body 範例：
        {"status": "SELECTED"}
        {"status": "OPENED"}

    流程：
    1. 解析目標狀態
    2. 交給 GameRepository.transition()（內含 row lock 與狀態機驗證）
    """
    try:
        # 1. 解析目標狀態
        status = DoorStatus.parse(payload)

        # 2. 轉換
        GameRepository.transition(db, game_id, door_id, status)
        return StatusResponse(status="ok")

    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (GameNotFound, DoorNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IllegalTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to transition door {door_id} of game {game_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")
