"""
並發控制工具

提供 Database-level 的鎖定機制，防止兩個請求同時轉換同一個遊戲的門

PostgreSQL 使用 SELECT ... FOR UPDATE；SQLite 會忽略 FOR UPDATE（整個資料庫寫入本來就是序列化的）
"""
from sqlalchemy.orm import Session, Query

from models import Game


def with_game_lock(game_id: int, db: Session) -> Query:
    """
    鎖定一個 Game（行級鎖）

    使用場景：
    - 轉換門的狀態時（同時會改 Game.status）

    範例：
        game = with_game_lock(game_id, db).first()
        if not game:
            raise GameNotFound(game_id)

    參數：
        game_id: Game 的 id
        db: SQLAlchemy Session

    返回：
        Query object（需要呼叫 .first() 來取得結果）

    注意：
        - 必須在 transaction 內使用（確保有 commit 或 rollback）
    """
    return db.query(Game).filter(
        Game.id == game_id
    ).with_for_update(nowait=False)
