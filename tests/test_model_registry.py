# =============================================================================
# File: test_model_registry.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Tests for model directory discovery and registration."""

import os

import pytest

from app.exceptions import InvalidInputError, ModelNotAvailable, UnsafePathError
from app.services.model_registry import (
    ArtifactRole,
    ModelRegistry,
    classify_file,
    inspect_directory,
    parse_pair_name,
    select_artifacts,
)
from tests.fakes import DEFAULT_FILES, write_model_dir


class TestParsePairName:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("en-zh", ("en", "zh")),
            ("enzh", ("en", "zh")),
            ("EN-JA", ("en", "ja")),
            ("en-zh_tw", ("en", "zh-Hant")),
        ],
    )
    def test_valid_names(self, name, expected):
        assert parse_pair_name(name) == expected

    @pytest.mark.parametrize("name", ["enz", "english", "en-", "-zh", "en-en", "e1zh", ""])
    def test_invalid_names(self, name):
        assert parse_pair_name(name) is None


class TestClassifyFile:
    @pytest.mark.parametrize(
        "filename, role, priority",
        [
            ("model.bin", ArtifactRole.WEIGHTS, 0),
            ("lex.bin", ArtifactRole.LEXICON, 0),
            ("srcvocab.spm", ArtifactRole.SOURCE_VOCAB, 0),
            ("trgvocab.spm", ArtifactRole.TARGET_VOCAB, 0),
            ("vocab.spm", ArtifactRole.SHARED_VOCAB, 0),
            ("model.enzh.intgemm8.bin", ArtifactRole.WEIGHTS, 1),
            ("model.intgemm.alphas.bin", ArtifactRole.WEIGHTS, 1),
            ("lex.50.50.enzh.s2t.bin", ArtifactRole.LEXICON, 1),
            ("srcvocab.enzh.spm", ArtifactRole.SOURCE_VOCAB, 1),
            ("vocab.enzh.spm", ArtifactRole.SHARED_VOCAB, 1),
            ("model.enzh.bin", ArtifactRole.WEIGHTS, 2),
            ("lex.enzh.s2t.bin", ArtifactRole.LEXICON, 2),
            ("something.s2t.bin", ArtifactRole.LEXICON, 3),
        ],
    )
    def test_classification(self, filename, role, priority):
        assert classify_file(filename) == (role, priority)

    @pytest.mark.parametrize("filename", ["README.md", "model.txt", "notes.spm", "config.yml"])
    def test_unrelated_files(self, filename):
        assert classify_file(filename) is None


class TestSelectArtifacts:
    def test_complete_set(self):
        chosen, missing = select_artifacts(DEFAULT_FILES)
        assert missing == []
        assert chosen[ArtifactRole.WEIGHTS] == "model.enzh.intgemm8.bin"
        assert chosen[ArtifactRole.LEXICON] == "lex.50.50.enzh.s2t.bin"

    def test_exact_name_beats_pattern(self):
        chosen, _ = select_artifacts(["model.bin", "model.enzh.intgemm8.bin"])
        assert chosen[ArtifactRole.WEIGHTS] == "model.bin"

    def test_shared_vocab_fills_both_roles(self):
        chosen, missing = select_artifacts(
            ["model.bin", "lex.bin", "vocab.enzh.spm"]
        )
        assert missing == []
        assert chosen[ArtifactRole.SOURCE_VOCAB] == "vocab.enzh.spm"
        assert chosen[ArtifactRole.TARGET_VOCAB] == "vocab.enzh.spm"

    def test_single_direction_vocab_is_reused(self):
        chosen, missing = select_artifacts(["model.bin", "lex.bin", "srcvocab.spm"])
        assert missing == []
        assert chosen[ArtifactRole.TARGET_VOCAB] == "srcvocab.spm"

    def test_missing_roles_reported(self):
        _, missing = select_artifacts(["model.bin"])
        assert ArtifactRole.LEXICON in missing
        assert ArtifactRole.SOURCE_VOCAB in missing
        assert ArtifactRole.TARGET_VOCAB in missing
        assert ArtifactRole.WEIGHTS not in missing


class TestInspectDirectory:
    def test_missing_files_named_in_error(self, tmp_path):
        directory = write_model_dir(tmp_path, "en-zh", files=["model.bin"])
        with pytest.raises(ModelNotAvailable) as exc_info:
            inspect_directory(str(directory))
        assert "Missing required files" in exc_info.value.message
        assert "lex.s2t.bin" in exc_info.value.message

    def test_unreadable_directory(self, tmp_path):
        with pytest.raises(ModelNotAvailable):
            inspect_directory(str(tmp_path / "does-not-exist"))

    def test_paths_are_absolute_to_directory(self, tmp_path):
        directory = write_model_dir(tmp_path, "en-zh")
        paths = inspect_directory(str(directory))
        assert paths[ArtifactRole.WEIGHTS] == os.path.join(
            str(directory), "model.enzh.intgemm8.bin"
        )


class TestModelRegistry:
    def test_scan_registers_valid_directories(self, make_models_dir):
        root = make_models_dir("en-zh", "zhen", "EN-JA")
        registry = ModelRegistry(str(root))
        descriptors = registry.scan()
        assert {d.key for d in descriptors} == {"en-zh", "zh-en", "en-ja"}
        assert [d.key for d in registry.list()] == ["en-ja", "en-zh", "zh-en"]
        assert registry.has("zh-en")
        assert registry.lookup("zh-en").source_lang == "zh"

    def test_scan_skips_invalid_directories(self, make_models_dir):
        root = make_models_dir("en-zh")
        write_model_dir(root, "de-en", files=["model.bin"])
        write_model_dir(root, "readme")
        (root / "notes.txt").write_text("not a directory")
        registry = ModelRegistry(str(root))
        descriptors = registry.scan()
        assert {d.key for d in descriptors} == {"en-zh"}
        assert not registry.has("de-en")

    def test_scan_missing_root_is_empty(self, tmp_path):
        registry = ModelRegistry(str(tmp_path / "nowhere"))
        assert registry.scan() == set()
        assert registry.size() == 0

    def test_scan_does_not_read_artifacts(self, make_models_dir):
        registry = ModelRegistry(str(make_models_dir("en-zh")))
        registry.scan()
        assert not registry.lookup("en-zh").is_loaded

    def test_load_artifacts_caches_bytes(self, make_models_dir):
        registry = ModelRegistry(str(make_models_dir("en-zh")))
        registry.scan()
        descriptor = registry.lookup("en-zh")
        bundle = descriptor.load_artifacts()
        assert descriptor.is_loaded
        assert bundle.weights == b"en-zh:model.enzh.intgemm8.bin"
        assert bundle.total_bytes > 0
        assert descriptor.load_artifacts() is bundle

    def test_load_artifacts_unreadable_file(self, make_models_dir):
        root = make_models_dir("en-zh")
        registry = ModelRegistry(str(root))
        registry.scan()
        os.remove(root / "en-zh" / "model.enzh.intgemm8.bin")
        with pytest.raises(ModelNotAvailable):
            registry.lookup("en-zh").load_artifacts()

    def test_register_defaults_to_models_dir(self, make_models_dir):
        root = make_models_dir("en-de")
        registry = ModelRegistry(str(root))
        descriptor = registry.register("en", "de")
        assert descriptor.key == "en-de"
        assert descriptor.is_loaded
        assert registry.has("en-de")

    def test_register_explicit_directory_and_normalized_codes(self, tmp_path):
        directory = write_model_dir(tmp_path / "elsewhere", "custom")
        registry = ModelRegistry(
            str(tmp_path / "models"), allowed_dirs=[str(tmp_path / "elsewhere")]
        )
        descriptor = registry.register("EN_us", "zh-CN", str(directory))
        assert descriptor.key == "en-zh"
        assert descriptor.artifact_dir == str(directory.resolve())

    def test_register_rejects_directory_outside_allowed_roots(self, tmp_path):
        directory = write_model_dir(tmp_path / "elsewhere", "custom")
        (tmp_path / "models").mkdir()
        registry = ModelRegistry(str(tmp_path / "models"))
        with pytest.raises(UnsafePathError):
            registry.register("en", "zh", str(directory))
        with pytest.raises(UnsafePathError):
            registry.register("en", "zh", str(tmp_path / "models" / ".." / "elsewhere" / "custom"))
        assert not registry.has("en-zh")

    @pytest.mark.parametrize("source, target", [("", "en"), ("_", "en"), ("en", "en-US"), ("../..", "en")])
    def test_register_rejects_malformed_codes(self, tmp_path, source, target):
        registry = ModelRegistry(str(tmp_path))
        with pytest.raises(InvalidInputError):
            registry.register(source, target)
        assert registry.size() == 0

    def test_register_is_idempotent(self, make_models_dir):
        registry = ModelRegistry(str(make_models_dir("en-zh")))
        registry.scan()
        first = registry.lookup("en-zh")
        assert registry.register("en", "zh") is first
        assert registry.size() == 1

    def test_register_invalid_directory(self, tmp_path):
        registry = ModelRegistry(str(tmp_path))
        with pytest.raises(ModelNotAvailable):
            registry.register("en", "fr")
        assert not registry.has("en-fr")

    def test_preload_reads_every_descriptor(self, make_models_dir):
        registry = ModelRegistry(str(make_models_dir("en-zh", "zh-en")))
        registry.scan()
        assert registry.preload() == 2
        assert all(d.is_loaded for d in registry.list())

    def test_to_dict(self, make_models_dir):
        registry = ModelRegistry(str(make_models_dir("en-zh")))
        registry.scan()
        assert registry.lookup("en-zh").to_dict() == {"key": "en-zh", "from": "en", "to": "zh"}
