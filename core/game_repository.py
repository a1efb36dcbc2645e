"""
Game Repository：管理 Game 的完整生命週期

職責：
1. 建立 Game（含 3 扇 Door）
2. 查詢 Game
3. 刪除 Game
4. 轉換門的狀態

原則：
- 所有狀態變更經過 GameStateMachine
- 資料結構優先：先找到 Game 與 Door，再做轉換
"""
from sqlalchemy.orm import Session
import logging

from models import Game, Door, DoorStatus, GameStatus
from core.state_machine import GameStateMachine
from core.locks import with_game_lock
from core.exceptions import GameNotFound, DoorNotFound
from services.door_service import generate_door_contents
from database import transactional

logger = logging.getLogger(__name__)


class GameRepository:
    """Game 生命週期管理器"""

    @staticmethod
    @transactional
    def create(db: Session) -> Game:
        """
        建立新遊戲

        流程：
        1. 建立 Game（AWAITING_INITIAL_SELECTION）
        2. 依洗牌後的內容建立 3 扇 CLOSED 的門

        參數：
            db: SQLAlchemy Session

        返回：
            新的 Game

        注意：
            - 使用 @transactional，自動處理 commit/rollback
        """
        game = Game(status=GameStatus.AWAITING_INITIAL_SELECTION)
        for content in generate_door_contents():
            game.doors.append(Door(status=DoorStatus.CLOSED, content=content))

        db.add(game)
        db.flush()  # 取得 game.id 與 door.id

        logger.info(f"Created game {game.id} with doors {[door.id for door in game.doors]}")
        return game

    @staticmethod
    def retrieve(db: Session, game_id: int) -> Game:
        """
        透過 id 取得 Game

        異常：
            GameNotFound: Game 不存在
        """
        game = db.query(Game).filter(Game.id == game_id).first()
        if not game:
            raise GameNotFound(game_id)
        return game

    @staticmethod
    @transactional
    def remove(db: Session, game_id: int) -> None:
        """
        刪除 Game（門會跟著刪除）

        異常：
            GameNotFound: Game 不存在
        """
        game = db.query(Game).filter(Game.id == game_id).first()
        if not game:
            raise GameNotFound(game_id)

        db.delete(game)
        logger.info(f"Removed game {game_id}")

    @staticmethod
    @transactional
    def transition(db: Session, game_id: int, door_id: int, status: DoorStatus) -> Game:
        """
        轉換遊戲內某扇門的狀態

        流程：
        1. 取得並鎖定 Game
        2. 找到屬於這個 Game 的 Door
        3. 透過 GameStateMachine 轉換

        參數：
            db: SQLAlchemy Session
            game_id: Game id
            door_id: Door id
            status: 目標狀態

        返回：
            更新後的 Game

        異常：
            GameNotFound: Game 不存在
            DoorNotFound: Door 不存在或不屬於這個 Game
            IllegalTransition: 轉換不合法（transaction 會 rollback，狀態不變）
        """
        # 1. 取得並鎖定 Game
        game = with_game_lock(game_id, db).first()
        if not game:
            raise GameNotFound(game_id)

        # 2. 找到門
        door = game.get_door(door_id)
        if door is None:
            raise DoorNotFound(game_id, door_id)

        logger.info(
            f"Transitioning door {door_id} of game {game_id}: {door.status.value} -> {status.value}"
        )

        # 3. 狀態轉換
        return GameStateMachine.transition(game, door, status)
