"""
Environment file generation for scaffolded projects.

Builds the ordered list of variables a generated backend or frontend needs
and renders it into ``.env`` text:

- render_env_vars: pure rendering of EnvVar entries
- get_vector_db_envs: variables for the selected vector database
- build_backend_env_vars / build_frontend_env_vars: assembly policy
- create_backend_env_file / create_frontend_env_file: render and write
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from .types import TemplateDataSource, TemplateFramework, TemplateVectorDB

logger = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_APP_PORT = "8000"
DEFAULT_CHAT_API = "http://localhost:8000/api/chat"
TSI_API_BASE_URL = "https://llm-server.llmhub.t-systems.net/v2"

_CONNECTION_URI_HINT = (
    "For generating a connection URI, see "
    "https://docs.timescale.com/use-timescale/latest/services/create-a-service"
)

_SYSTEM_PROMPT_DESCRIPTION = """Custom system prompt.
Example:
SYSTEM_PROMPT="
We have provided context information below.
---------------------
{context_str}
---------------------
Given this information, please answer the question: {query_str}
\""""


@dataclass(frozen=True)
class EnvVar:
    """
    One entry of a ``.env`` file.

    Attributes:
        name: Variable name; entries without one only contribute a comment
        description: Comment text, may span several lines
        value: Literal value; when missing the variable is written commented out
    """

    name: str | None = None
    description: str | None = None
    value: str | None = None


class BackendEnvOptions(BaseModel):
    """Options that shape the backend ``.env`` file."""

    openai_key: str | None = None
    llama_cloud_key: str | None = None
    vector_db: TemplateVectorDB | str | None = None
    model: str | None = None
    embedding_model: str | None = None
    framework: TemplateFramework | str | None = None
    data_sources: list[TemplateDataSource] = Field(default_factory=list)
    port: int | None = Field(default=None, ge=1, le=65535)


class FrontendEnvOptions(BaseModel):
    """Options that shape the frontend ``.env`` file."""

    custom_api_path: str | None = None
    model: str | None = None


def render_env_vars(env_vars: Iterable[EnvVar]) -> str:
    """
    Render env entries into ``.env`` file content.

    Entries are rendered in order. Descriptions become ``# `` comment lines
    (one per embedded newline); a named entry becomes ``NAME=value`` or, with
    no value, the placeholder ``# NAME=``. Each named entry is followed by a
    blank line.

    Args:
        env_vars: Entries to render

    Returns:
        File content, empty when no entry has a name or description

    Examples:
        render_env_vars([EnvVar(name="MODEL", value="gpt-4")])
        # -> "MODEL=gpt-4\\n\\n"
    """
    content = ""
    for env in env_vars:
        if env.description:
            content += "# " + env.description.replace("\n", "\n# ") + "\n"
        if env.name:
            if env.value:
                content += f"{env.name}={env.value}\n\n"
            else:
                content += f"# {env.name}=\n\n"
    return content


def get_vector_db_envs(vector_db: TemplateVectorDB | str | None) -> list[EnvVar]:
    """
    Get the variables a vector database integration needs.

    Unknown identifiers, and ``none``, yield an empty list.
    """
    match vector_db:
        case TemplateVectorDB.MONGO:
            return [
                EnvVar(
                    name="MONGO_URI",
                    description=f"{_CONNECTION_URI_HINT}\nThe MongoDB connection URI.",
                ),
                EnvVar(name="MONGODB_DATABASE"),
                EnvVar(name="MONGODB_VECTORS"),
                EnvVar(name="MONGODB_VECTOR_INDEX"),
            ]
        case TemplateVectorDB.PG:
            return [
                EnvVar(
                    name="PG_CONNECTION_STRING",
                    description=f"{_CONNECTION_URI_HINT}\nThe PostgreSQL connection string.",
                ),
            ]
        case TemplateVectorDB.PINECONE:
            return [
                EnvVar(
                    name="PINECONE_API_KEY",
                    description="Configuration for Pinecone vector store\nThe Pinecone API key.",
                ),
                EnvVar(name="PINECONE_ENVIRONMENT"),
                EnvVar(name="PINECONE_INDEX_NAME"),
            ]
        case TemplateVectorDB.MILVUS:
            return [
                EnvVar(
                    name="MILVUS_ADDRESS",
                    description="The address of the Milvus server. Eg: http://localhost:19530",
                    value="http://localhost:19530",
                ),
                EnvVar(
                    name="MILVUS_COLLECTION",
                    description="The name of the Milvus collection to store the vectors.",
                    value="llamacollection",
                ),
                EnvVar(
                    name="MILVUS_USERNAME",
                    description="The username to access the Milvus server.",
                ),
                EnvVar(
                    name="MILVUS_PASSWORD",
                    description="The password to access the Milvus server.",
                ),
            ]
        case _:
            return []


def build_backend_env_vars(opts: BackendEnvOptions) -> list[EnvVar]:
    """
    Assemble the backend variables for the selected framework and vector database.

    The base set (model, T-Systems credentials and endpoints, Llama Cloud key)
    comes first, then the vector database block, then framework extras:
    host/port and retrieval tuning for FastAPI, a client-visible model name
    for Next.js.

    Args:
        opts: Backend options collected by the caller

    Returns:
        Ordered list of EnvVar entries
    """
    model = opts.model or DEFAULT_MODEL
    env_vars = [
        EnvVar(
            name="MODEL",
            description="The name of LLM model to use.",
            value=model,
        ),
        EnvVar(
            name="TSI_API_KEY",
            description="The T-Systems API key to use.",
            value=opts.openai_key,
        ),
        EnvVar(
            name="TSI_API_BASE_URL",
            description="The T-Systems API base URL.",
            value=TSI_API_BASE_URL,
        ),
        EnvVar(
            name="TSI_EMBED_API_BASE_URL",
            description="The T-Systems embedding API base URL.",
            value=TSI_API_BASE_URL,
        ),
        EnvVar(
            name="LLAMA_CLOUD_API_KEY",
            description="The Llama Cloud API key.",
            value=opts.llama_cloud_key,
        ),
    ]
    if opts.vector_db:
        env_vars.extend(get_vector_db_envs(opts.vector_db))

    if opts.framework == TemplateFramework.FASTAPI:
        env_vars.extend(
            [
                EnvVar(
                    name="APP_HOST",
                    description="The address to start the backend app.",
                    value="0.0.0.0",
                ),
                EnvVar(
                    name="APP_PORT",
                    description="The port to start the backend app.",
                    value=str(opts.port) if opts.port else DEFAULT_APP_PORT,
                ),
                EnvVar(
                    name="EMBEDDING_MODEL",
                    description="Name of the embedding model to use.",
                    value=opts.embedding_model,
                ),
                EnvVar(
                    name="EMBEDDING_DIM",
                    description="Dimension of the embedding model to use.",
                ),
                EnvVar(
                    name="LLM_TEMPERATURE",
                    description="Temperature for sampling from the model.",
                ),
                EnvVar(
                    name="LLM_MAX_TOKENS",
                    description="Maximum number of tokens to generate.",
                ),
                EnvVar(
                    name="TOP_K",
                    description="The number of similar embeddings to return when retrieving documents.",
                    value="3",
                ),
                EnvVar(
                    name="SYSTEM_PROMPT",
                    description=_SYSTEM_PROMPT_DESCRIPTION,
                ),
            ]
        )
    elif opts.framework == TemplateFramework.NEXTJS:
        env_vars.append(
            EnvVar(
                name="NEXT_PUBLIC_MODEL",
                description="The LLM model to use (hardcode to front-end artifact).",
                value=model,
            )
        )
    else:
        env_vars.append(EnvVar())

    return env_vars


def build_frontend_env_vars(opts: FrontendEnvOptions) -> list[EnvVar]:
    """Assemble the variables for a standalone Next.js frontend."""
    return [
        EnvVar(
            name="MODEL",
            description="The OpenAI model to use.",
            value=opts.model,
        ),
        EnvVar(
            name="NEXT_PUBLIC_MODEL",
            description="The OpenAI model to use (hardcode to front-end artifact).",
            value=opts.model,
        ),
        EnvVar(
            name="NEXT_PUBLIC_CHAT_API",
            description="The backend API for chat endpoint.",
            value=opts.custom_api_path or DEFAULT_CHAT_API,
        ),
    ]


def write_env_file(root: Path, env_vars: Iterable[EnvVar]) -> Path:
    """
    Render env entries and write them to ``root/.env``.

    Any existing file is overwritten; nothing is merged or backed up.

    Args:
        root: Project directory (must exist)
        env_vars: Entries to render

    Returns:
        Path of the written file
    """
    path = Path(root) / ENV_FILE_NAME
    path.write_text(render_env_vars(env_vars), encoding="utf-8")
    return path


def create_backend_env_file(root: Path, opts: BackendEnvOptions) -> Path:
    """
    Write the backend ``.env`` file into root.

    Args:
        root: Backend project directory
        opts: Backend options

    Returns:
        Path of the written file
    """
    path = write_env_file(root, build_backend_env_vars(opts))
    logger.info("Created '%s' file. Please check the settings.", ENV_FILE_NAME)
    return path


def create_frontend_env_file(root: Path, opts: FrontendEnvOptions) -> Path:
    """Write the frontend ``.env`` file into root."""
    path = write_env_file(root, build_frontend_env_vars(opts))
    logger.debug("Wrote frontend env file %s", path)
    return path
