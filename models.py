"""
SQLAlchemy Models

Game 擁有固定 3 扇 Door，Door 隨 Game 建立與刪除
"""
import enum

from sqlalchemy import Column, Integer, ForeignKey, Enum
from sqlalchemy.orm import relationship

from database import Base
from core.exceptions import InvalidArgument


class GameStatus(str, enum.Enum):
    AWAITING_INITIAL_SELECTION = "AWAITING_INITIAL_SELECTION"
    AWAITING_FINAL_SELECTION = "AWAITING_FINAL_SELECTION"
    WON = "WON"
    LOST = "LOST"


class DoorStatus(str, enum.Enum):
    CLOSED = "CLOSED"
    SELECTED = "SELECTED"
    OPENED = "OPENED"

    @classmethod
    def parse(cls, payload) -> "DoorStatus":
        """
        從 request body 解析目標狀態

        範例：
            {"status": "selected"} -> DoorStatus.SELECTED

        異常：
            InvalidArgument: body 不是物件、缺少 status、或狀態不存在
        """
        if not isinstance(payload, dict) or "status" not in payload:
            raise InvalidArgument("Payload is malformed: expected an object with a 'status' key")

        raw = payload["status"]
        if not isinstance(raw, str):
            raise InvalidArgument(f"Door status must be a string, got {raw!r}")

        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise InvalidArgument(f"'{raw}' is not a valid door status")


class DoorContent(str, enum.Enum):
    BICYCLE = "BICYCLE"
    JUICER = "JUICER"
    SMALL_FURRY_ANIMAL = "SMALL_FURRY_ANIMAL"
    UNKNOWN = "UNKNOWN"  # 只用於回應，門打開前不揭露內容


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(Enum(GameStatus), nullable=False, default=GameStatus.AWAITING_INITIAL_SELECTION)

    doors = relationship(
        "Door",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Door.id"
    )

    def get_door(self, door_id: int):
        for door in self.doors:
            if door.id == door_id:
                return door
        return None


class Door(Base):
    __tablename__ = "doors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(DoorStatus), nullable=False, default=DoorStatus.CLOSED)
    content = Column(Enum(DoorContent), nullable=False)

    game = relationship("Game", back_populates="doors")

    @property
    def visible_content(self) -> DoorContent:
        if self.status == DoorStatus.OPENED:
            return self.content
        return DoorContent.UNKNOWN

    @property
    def is_prize(self) -> bool:
        return self.content == DoorContent.BICYCLE
