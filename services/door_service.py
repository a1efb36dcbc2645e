"""
門服務：決定門的內容與主持人要打開的門

純計算邏輯，不涉及狀態轉換
"""
import random
from typing import List, Optional

from models import Door, DoorContent, DoorStatus

DOOR_COUNT = 3
CONSOLATION_PRIZES = [DoorContent.JUICER, DoorContent.SMALL_FURRY_ANIMAL]


def generate_door_contents() -> List[DoorContent]:
    """
    生成一個遊戲的門內容（已洗牌）

    規則：
    - 固定 DOOR_COUNT 扇門
    - 恰好一扇是 BICYCLE（獎品），其他輪流使用 CONSOLATION_PRIZES

    範例：
        [JUICER, BICYCLE, SMALL_FURRY_ANIMAL]
    """
    contents = [DoorContent.BICYCLE] + [
        CONSOLATION_PRIZES[i % len(CONSOLATION_PRIZES)] for i in range(DOOR_COUNT - 1)
    ]
    random.shuffle(contents)
    return contents


def choose_door_to_reveal(doors: List[Door]) -> Optional[Door]:
    """
    主持人在玩家選門之後要打開的門

    候選條件：
    - 不是玩家選的門（status != SELECTED）
    - 不是獎品

    玩家選中獎品時會有兩扇候選，隨機挑一扇

    返回：
        Door，沒有候選時返回 None
    """
    candidates = [
        door for door in doors
        if door.status == DoorStatus.CLOSED and not door.is_prize
    ]
    if not candidates:
        return None
    return random.choice(candidates)
