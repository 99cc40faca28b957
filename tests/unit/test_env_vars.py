"""Tests for .env rendering and assembly."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tsi_scaffold.core.env_vars import (
    BackendEnvOptions,
    EnvVar,
    FrontendEnvOptions,
    build_backend_env_vars,
    build_frontend_env_vars,
    create_backend_env_file,
    create_frontend_env_file,
    get_vector_db_envs,
    render_env_vars,
)
from tsi_scaffold.core.types import TemplateFramework, TemplateVectorDB


class TestRenderEnvVars:
    """Tests for render_env_vars."""

    def test_empty_sequence(self) -> None:
        assert render_env_vars([]) == ""

    def test_entries_without_name_or_description_render_nothing(self) -> None:
        """Value alone is not enough to produce output."""
        assert render_env_vars([EnvVar(), EnvVar(value="orphan")]) == ""

    def test_name_with_value(self) -> None:
        assert render_env_vars([EnvVar(name="X", value="Y")]) == "X=Y\n\n"

    def test_name_without_value_is_commented_placeholder(self) -> None:
        content = render_env_vars([EnvVar(name="X")])
        assert content == "# X=\n\n"
        assert "X=" not in content.splitlines()

    def test_empty_value_counts_as_missing(self) -> None:
        assert render_env_vars([EnvVar(name="X", value="")]) == "# X=\n\n"

    def test_multiline_description(self) -> None:
        """Each description line becomes its own comment."""
        content = render_env_vars([EnvVar(description="a\nb")])
        assert content == "# a\n# b\n"

    def test_description_precedes_assignment(self) -> None:
        content = render_env_vars([EnvVar(name="PORT", description="The port.", value="8000")])
        assert content == "# The port.\nPORT=8000\n\n"

    def test_order_and_duplicates_preserved(self) -> None:
        content = render_env_vars(
            [
                EnvVar(name="B", value="1"),
                EnvVar(name="A", value="2"),
                EnvVar(name="B", value="3"),
            ]
        )
        assert content == "B=1\n\nA=2\n\nB=3\n\n"
        assert content.index("B=1") < content.index("A=2") < content.index("B=3")

    def test_accepts_generators(self) -> None:
        content = render_env_vars(EnvVar(name=n, value="v") for n in ("ONE", "TWO"))
        assert content == "ONE=v\n\nTWO=v\n\n"


class TestVectorDBEnvs:
    """Tests for get_vector_db_envs."""

    def test_mongo(self) -> None:
        names = [e.name for e in get_vector_db_envs(TemplateVectorDB.MONGO)]
        assert names == ["MONGO_URI", "MONGODB_DATABASE", "MONGODB_VECTORS", "MONGODB_VECTOR_INDEX"]

    def test_pg(self) -> None:
        envs = get_vector_db_envs(TemplateVectorDB.PG)
        assert [e.name for e in envs] == ["PG_CONNECTION_STRING"]
        assert envs[0].description is not None
        assert envs[0].description.endswith("The PostgreSQL connection string.")

    def test_pinecone(self) -> None:
        names = [e.name for e in get_vector_db_envs(TemplateVectorDB.PINECONE)]
        assert names == ["PINECONE_API_KEY", "PINECONE_ENVIRONMENT", "PINECONE_INDEX_NAME"]

    def test_milvus_has_defaults(self) -> None:
        envs = {e.name: e.value for e in get_vector_db_envs(TemplateVectorDB.MILVUS)}
        assert envs["MILVUS_ADDRESS"] == "http://localhost:19530"
        assert envs["MILVUS_COLLECTION"] == "llamacollection"
        assert envs["MILVUS_USERNAME"] is None
        assert envs["MILVUS_PASSWORD"] is None

    def test_plain_string_identifier(self) -> None:
        assert [e.name for e in get_vector_db_envs("pg")] == ["PG_CONNECTION_STRING"]

    @pytest.mark.parametrize("vector_db", [TemplateVectorDB.NONE, "chroma", None])
    def test_unknown_identifiers_map_to_empty(self, vector_db) -> None:
        assert get_vector_db_envs(vector_db) == []


class TestBackendEnvVars:
    """Tests for build_backend_env_vars."""

    def test_base_set_with_defaults(self) -> None:
        env_vars = build_backend_env_vars(BackendEnvOptions())
        by_name = {e.name: e for e in env_vars if e.name}

        assert [e.name for e in env_vars[:5]] == [
            "MODEL",
            "TSI_API_KEY",
            "TSI_API_BASE_URL",
            "TSI_EMBED_API_BASE_URL",
            "LLAMA_CLOUD_API_KEY",
        ]
        assert by_name["MODEL"].value == "gpt-3.5-turbo"
        assert by_name["TSI_API_KEY"].value is None
        assert by_name["TSI_API_BASE_URL"].value == "https://llm-server.llmhub.t-systems.net/v2"

    def test_keys_are_filled_in(self) -> None:
        content = render_env_vars(
            build_backend_env_vars(
                BackendEnvOptions(openai_key="sk-test", llama_cloud_key="llx-test", model="m1")
            )
        )
        assert "TSI_API_KEY=sk-test\n" in content
        assert "LLAMA_CLOUD_API_KEY=llx-test\n" in content
        assert "MODEL=m1\n" in content

    def test_vector_db_block_follows_base_set(self) -> None:
        env_vars = build_backend_env_vars(BackendEnvOptions(vector_db=TemplateVectorDB.PG))
        names = [e.name for e in env_vars]
        assert names.index("PG_CONNECTION_STRING") == names.index("LLAMA_CLOUD_API_KEY") + 1

    def test_fastapi_extras(self) -> None:
        content = render_env_vars(
            build_backend_env_vars(
                BackendEnvOptions(
                    framework=TemplateFramework.FASTAPI,
                    port=9001,
                    embedding_model="text-embedding-3-large",
                )
            )
        )
        assert "APP_HOST=0.0.0.0\n" in content
        assert "APP_PORT=9001\n" in content
        assert "EMBEDDING_MODEL=text-embedding-3-large\n" in content
        assert "# EMBEDDING_DIM=\n" in content
        assert "TOP_K=3\n" in content
        assert "# SYSTEM_PROMPT=\n" in content
        assert "# Given this information, please answer the question: {query_str}\n" in content
        assert "NEXT_PUBLIC_MODEL" not in content

    def test_fastapi_default_port(self) -> None:
        content = render_env_vars(build_backend_env_vars(BackendEnvOptions(framework="fastapi")))
        assert "APP_PORT=8000\n" in content

    def test_nextjs_gets_public_model(self) -> None:
        content = render_env_vars(
            build_backend_env_vars(BackendEnvOptions(framework=TemplateFramework.NEXTJS))
        )
        assert "NEXT_PUBLIC_MODEL=gpt-3.5-turbo\n" in content
        assert "APP_PORT" not in content

    def test_express_has_only_base_set(self) -> None:
        env_vars = build_backend_env_vars(BackendEnvOptions(framework=TemplateFramework.EXPRESS))
        content = render_env_vars(env_vars)
        assert "APP_PORT" not in content
        assert "NEXT_PUBLIC_MODEL" not in content
        assert content.endswith("# LLAMA_CLOUD_API_KEY=\n\n")

    def test_data_sources_do_not_change_output(self) -> None:
        without = build_backend_env_vars(BackendEnvOptions())
        with_sources = build_backend_env_vars(
            BackendEnvOptions(data_sources=[{"type": "file", "config": {"path": "data"}}])
        )
        assert render_env_vars(without) == render_env_vars(with_sources)

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BackendEnvOptions(port=70000)


class TestFrontendEnvVars:
    """Tests for build_frontend_env_vars."""

    def test_defaults(self) -> None:
        content = render_env_vars(build_frontend_env_vars(FrontendEnvOptions()))
        assert "# MODEL=\n" in content
        assert "# NEXT_PUBLIC_MODEL=\n" in content
        assert "NEXT_PUBLIC_CHAT_API=http://localhost:8000/api/chat\n" in content

    def test_custom_api_path_and_model(self) -> None:
        content = render_env_vars(
            build_frontend_env_vars(
                FrontendEnvOptions(custom_api_path="https://api.example.com/chat", model="m2")
            )
        )
        assert "MODEL=m2\n" in content
        assert "NEXT_PUBLIC_MODEL=m2\n" in content
        assert "NEXT_PUBLIC_CHAT_API=https://api.example.com/chat\n" in content


class TestEnvFileWriting:
    """Tests for create_backend_env_file / create_frontend_env_file."""

    def test_backend_file_written(self, tmp_path: Path) -> None:
        path = create_backend_env_file(tmp_path, BackendEnvOptions(openai_key="k"))
        assert path == tmp_path / ".env"
        assert "TSI_API_KEY=k\n" in path.read_text()

    def test_existing_file_is_overwritten(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("OLD=1\n")
        create_frontend_env_file(tmp_path, FrontendEnvOptions(model="m"))
        content = (tmp_path / ".env").read_text()
        assert "OLD=1" not in content
        assert "MODEL=m\n" in content

    def test_missing_root_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            create_backend_env_file(tmp_path / "missing", BackendEnvOptions())

    def test_logs_creation(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="tsi_scaffold.core.env_vars"):
            create_backend_env_file(tmp_path, BackendEnvOptions())
        assert "Created '.env' file. Please check the settings." in caplog.text
