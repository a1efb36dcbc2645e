"""
Pydantic Schemas：API 的 response 格式
"""
from typing import List

from pydantic import BaseModel

from models import GameStatus, DoorStatus, DoorContent


class Link(BaseModel):
    rel: str
    href: str


class GameResponse(BaseModel):
    id: int
    status: GameStatus
    links: List[Link]


class DoorResponse(BaseModel):
    id: int
    status: DoorStatus
    content: DoorContent
    links: List[Link]


class DoorsResponse(BaseModel):
    doors: List[DoorResponse]
    links: List[Link]


class StatusResponse(BaseModel):
    status: str
