"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理
"""


class DoorsGameException(Exception):
    """所有遊戲異常的基類"""
    pass


# ============ Game 相關異常 ============

class GameNotFound(DoorsGameException):
    """遊戲不存在"""
    def __init__(self, game_id):
        self.game_id = game_id
        super().__init__(f"Game {game_id} does not exist")


# ============ Door 相關異常 ============

class DoorNotFound(DoorsGameException):
    """門不存在，或不屬於這個遊戲"""
    def __init__(self, game_id, door_id):
        self.game_id = game_id
        self.door_id = door_id
        super().__init__(f"Door {door_id} does not exist in game {game_id}")


# ============ 狀態轉換異常 ============

class IllegalTransition(DoorsGameException):
    """非法的狀態轉換"""
    pass


# ============ Request 相關異常 ============

class InvalidArgument(DoorsGameException, ValueError):
    """Request 內容格式錯誤（例如 status 欄位缺少或無法解析）"""
    pass
