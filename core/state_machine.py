"""
狀態機：集中管理 Door 與 Game 的所有狀態轉換

Door 狀態圖：
    CLOSED -> SELECTED -> OPENED
    CLOSED ---------------> OPENED

Game 狀態圖：
    AWAITING_INITIAL_SELECTION --(選門)--> AWAITING_FINAL_SELECTION --(開門)--> WON / LOST

原則：
- 所有狀態變更都必須經過這裡，其他地方不直接改 status
- 先驗證，全部合法之後才修改，非法轉換不會留下半套狀態
"""
import logging
from typing import Dict, List

from models import Game, Door, GameStatus, DoorStatus
from core.exceptions import IllegalTransition
from services.door_service import choose_door_to_reveal

logger = logging.getLogger(__name__)


class DoorStateMachine:
    """單一扇門的狀態轉換表"""

    VALID_TRANSITIONS: Dict[DoorStatus, List[DoorStatus]] = {
        DoorStatus.CLOSED: [DoorStatus.SELECTED, DoorStatus.OPENED],
        DoorStatus.SELECTED: [DoorStatus.OPENED],
        DoorStatus.OPENED: [],  # terminal
    }

    @classmethod
    def can_transition(cls, current: DoorStatus, target: DoorStatus) -> bool:
        return target in cls.VALID_TRANSITIONS.get(current, [])

    @classmethod
    def validate(cls, door: Door, target: DoorStatus) -> None:
        """
        異常：
            IllegalTransition: 目前狀態不允許轉到 target
        """
        if not cls.can_transition(door.status, target):
            allowed = [s.value for s in cls.VALID_TRANSITIONS.get(door.status, [])]
            raise IllegalTransition(
                f"Cannot transition door {door.id} from {door.status.value} to {target.value} "
                f"(allowed: {allowed})"
            )


class GameStateMachine:
    """Game 層的轉換規則：決定在哪個遊戲階段可以對門做什麼"""

    # 遊戲階段 -> 這個階段唯一接受的門狀態
    EXPECTED_DOOR_STATUS: Dict[GameStatus, DoorStatus] = {
        GameStatus.AWAITING_INITIAL_SELECTION: DoorStatus.SELECTED,
        GameStatus.AWAITING_FINAL_SELECTION: DoorStatus.OPENED,
    }

    @classmethod
    def transition(cls, game: Game, door: Door, target: DoorStatus) -> Game:
        """
        對 game 內的 door 執行狀態轉換

        流程：
        1. 檢查遊戲階段是否接受這個目標狀態
        2. 檢查門本身的狀態轉換是否合法
        3. 套用轉換
           - 選門：主持人打開另一扇非獎品的門，進入最終選擇
           - 開門：依門內容決定 WON / LOST

        參數：
            game: Game（呼叫者負責確認 door 屬於 game）
            door: Door
            target: 目標狀態

        返回：
            更新後的 Game

        異常：
            IllegalTransition: 遊戲已結束、階段不對、或門的轉換不合法
        """
        expected = cls.EXPECTED_DOOR_STATUS.get(game.status)
        if expected is None:
            raise IllegalTransition(f"Game {game.id} is already over ({game.status.value})")

        if target != expected:
            raise IllegalTransition(
                f"Game {game.id} is {game.status.value}, "
                f"expected a transition to {expected.value}, got {target.value}"
            )

        DoorStateMachine.validate(door, target)

        if target == DoorStatus.SELECTED:
            cls._select(game, door)
        else:
            cls._open(game, door)

        return game

    @staticmethod
    def _select(game: Game, door: Door) -> None:
        door.status = DoorStatus.SELECTED

        revealed = choose_door_to_reveal(game.doors)
        if revealed is not None:
            revealed.status = DoorStatus.OPENED
            logger.info(f"Game {game.id}: door {door.id} selected, host opened door {revealed.id}")

        game.status = GameStatus.AWAITING_FINAL_SELECTION

    @staticmethod
    def _open(game: Game, door: Door) -> None:
        door.status = DoorStatus.OPENED
        game.status = GameStatus.WON if door.is_prize else GameStatus.LOST
        logger.info(f"Game {game.id}: door {door.id} opened, game {game.status.value}")
