"""
Template selector types.

Closed sets of identifiers the CLI accepts for vector databases, backend
frameworks and data sources.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TemplateVectorDB(StrEnum):
    """Vector databases a generated backend can be wired to."""

    NONE = "none"
    MONGO = "mongo"
    PG = "pg"
    PINECONE = "pinecone"
    MILVUS = "milvus"


class TemplateFramework(StrEnum):
    """Application frameworks with a bundled template."""

    NEXTJS = "nextjs"
    EXPRESS = "express"
    FASTAPI = "fastapi"


class TemplateDataSourceType(StrEnum):
    """Kinds of data source a generated app can ingest."""

    FILE = "file"
    WEB = "web"
    DB = "db"


class TemplateDataSource(BaseModel):
    """
    A data source selected for the generated app.

    Attributes:
        type: Kind of source
        config: Source-specific settings (paths, URLs, queries)
    """

    type: TemplateDataSourceType
    config: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
