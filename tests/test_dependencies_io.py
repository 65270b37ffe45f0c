"""Tests for dependency manifest schema and loading."""

import json

import pytest
from pydantic import ValidationError

from raftdeps.backends.cmake import CMakeBackend
from raftdeps.config import Settings
from raftdeps.dependencies.io import (
    ManifestError,
    create_dependency,
    load_dependencies,
    load_manifest,
)
from raftdeps.dependencies.models import CMakeDependency, RepositoryDependency
from raftdeps.dependencies.schema import (
    DependencyDescriptor,
    DependencySchema,
    ManifestSchema,
)
from raftdeps.types import DependencyKind
from raftdeps.vcs import GitRepository

MANIFEST_YAML = """\
dependencies:
  - name: zlib
    repository:
      uri: https://github.com/madler/zlib.git
      branch: v1.3.1
    patches:
      - patches/zlib-fix.patch
    config_options:
      ZLIB_BUILD_EXAMPLES: false
      FOO: bar
  - name: catch2-headers
    kind: repository
    repository:
      uri: https://github.com/catchorg/Catch2.git
"""


@pytest.fixture
def manifest_file(tmp_path):
    path = tmp_path / "raft.yaml"
    path.write_text(MANIFEST_YAML)
    return path


class TestDependencyDescriptor:
    """Tests for DependencyDescriptor validation."""

    def test_minimal(self):
        descriptor = DependencyDescriptor(name="zlib")
        assert descriptor.config_options == {}

    def test_config_values_kept_verbatim(self):
        descriptor = DependencyDescriptor(
            name="zlib", config_options={"FOO": "bar", "SHARED": True, "LEVEL": 3}
        )
        assert descriptor.config_options == {"FOO": "bar", "SHARED": True, "LEVEL": 3}
        assert descriptor.config_options["SHARED"] is True

    @pytest.mark.parametrize("name", ["", "..", "a/b", "has space"])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            DependencyDescriptor(name=name)

    @pytest.mark.parametrize("name", ["zlib", "libc++", "boost.asio", "open-ssl_3"])
    def test_valid_names(self, name):
        assert DependencyDescriptor(name=name).name == name

    def test_invalid_option_key(self):
        with pytest.raises(ValidationError):
            DependencyDescriptor(name="zlib", config_options={"A=B": "x"})

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            DependencyDescriptor(name="zlib", version="1.0")


class TestManifestSchema:
    """Tests for ManifestSchema validation."""

    def test_defaults_to_cmake(self):
        dep = DependencySchema(name="zlib", repository={"uri": "u"})
        assert dep.kind == DependencyKind.CMAKE
        assert dep.patches == []

    def test_descriptor_extraction(self):
        dep = DependencySchema(
            name="zlib", repository={"uri": "u"}, config_options={"FOO": "bar"}
        )
        descriptor = dep.descriptor()
        assert type(descriptor) is DependencyDescriptor
        assert descriptor.config_options == {"FOO": "bar"}

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate dependency names: zlib"):
            ManifestSchema(
                dependencies=[
                    {"name": "zlib", "repository": {"uri": "a"}},
                    {"name": "zlib", "repository": {"uri": "b"}},
                ]
            )

    def test_get(self):
        manifest = ManifestSchema(
            dependencies=[{"name": "zlib", "repository": {"uri": "a"}}]
        )
        assert manifest.get("zlib").name == "zlib"
        assert manifest.get("png") is None

    def test_empty_patch_rejected(self):
        with pytest.raises(ValidationError):
            DependencySchema(name="zlib", repository={"uri": "u"}, patches=[" "])


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_yaml(self, manifest_file):
        manifest = load_manifest(manifest_file)

        assert [d.name for d in manifest.dependencies] == ["zlib", "catch2-headers"]
        zlib = manifest.dependencies[0]
        assert zlib.repository.branch == "v1.3.1"
        assert zlib.config_options == {"ZLIB_BUILD_EXAMPLES": False, "FOO": "bar"}
        assert manifest.dependencies[1].kind == DependencyKind.REPOSITORY

    def test_json(self, tmp_path):
        path = tmp_path / "raft.json"
        path.write_text(
            json.dumps({"dependencies": [{"name": "zlib", "repository": {"uri": "u"}}]})
        )
        assert load_manifest(path).dependencies[0].name == "zlib"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "raft.yaml"
        path.write_text("")
        assert load_manifest(path).dependencies == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            load_manifest(tmp_path / "raft.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "raft.yaml"
        path.write_text("- zlib\n")
        with pytest.raises(ManifestError, match="Expected a mapping"):
            load_manifest(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "raft.yaml"
        path.write_text("dependencies: [\n")
        with pytest.raises(ManifestError, match="Cannot parse"):
            load_manifest(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "raft.yaml"
        path.write_bytes(b"\xff\xfedependencies: []\n")
        with pytest.raises(ManifestError, match="Cannot"):
            load_manifest(path)

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read manifest") as exc_info:
            load_manifest(tmp_path)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "raft.yaml"
        path.write_text("dependencies:\n  - name: zlib\n")
        with pytest.raises(ManifestError, match="Invalid manifest") as exc_info:
            load_manifest(path)
        assert exc_info.value.code == "manifest_error"


class TestCreateDependency:
    """Tests for create_dependency and load_dependencies."""

    def test_cmake_dependency(self, tmp_path):
        schema = DependencySchema(
            name="zlib",
            repository={"uri": "https://example.com/zlib.git", "branch": "v1"},
            patches=["patches/a.patch", "patches/b.patch"],
        )

        dependency = create_dependency(schema, tmp_path)

        assert isinstance(dependency, CMakeDependency)
        assert dependency.name == "zlib"
        assert dependency.repository == GitRepository(
            uri="https://example.com/zlib.git", branch="v1"
        )
        assert dependency.patches == (
            tmp_path / "patches" / "a.patch",
            tmp_path / "patches" / "b.patch",
        )
        assert dependency.backend == CMakeBackend()

    def test_repository_dependency(self, tmp_path):
        schema = DependencySchema(
            name="headers", kind="repository", repository={"uri": "u"}
        )
        assert isinstance(create_dependency(schema, tmp_path), RepositoryDependency)

    def test_settings_select_tools(self, tmp_path):
        settings = Settings(
            git_executable="git2", cmake_executable="cmake3", cmake_generator="Ninja"
        )
        schema = DependencySchema(name="zlib", repository={"uri": "u"})

        dependency = create_dependency(schema, tmp_path, settings)

        assert dependency.repository.git == "git2"
        assert dependency.backend == CMakeBackend(cmake="cmake3", generator="Ninja")

    def test_load_dependencies_resolves_patches_from_manifest_dir(self, manifest_file):
        dependencies = load_dependencies(manifest_file)

        assert [d.name for d in dependencies] == ["zlib", "catch2-headers"]
        assert dependencies[0].patches == (
            manifest_file.parent / "patches" / "zlib-fix.patch",
        )
        assert dependencies[0].descriptor.config_options["FOO"] == "bar"
