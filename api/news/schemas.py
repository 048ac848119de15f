"""
Pydantic schemas for news endpoints.

`Post` keeps snake_case attributes but goes over the wire under the keys
the web client reads (`ID`, `Title`, `Content`, `PubTime`, `Link`).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(default=0, alias="ID")
    title: str = Field(default="", alias="Title")
    content: str = Field(default="", alias="Content")
    pub_time: int = Field(default=0, alias="PubTime")
    link: str = Field(default="", alias="Link")


class NewsPage(BaseModel):
    data: list[Post] = Field(default_factory=list)
    page: int
    limit: int
    total: int
    total_pages: int
