"""Tests for manifest validation, writing, and run ID generation."""

import json
import re
from dataclasses import replace

import pytest

from hamdata.config import ANCHOR_CONFIG, DatasetConfig, GraphConfig
from hamdata.results import (
    build_manifest,
    generate_run_id,
    load_manifest,
    validate_manifest,
    write_manifest,
)

STATS = {
    "candidates": 12,
    "filtered": 0,
    "discarded_full": 2,
    "restarts": 1,
    "oracle_seconds": 0.01,
    "elapsed_seconds": 0.02,
}
FILES = {"hamiltonian": "hamiltonian_graphs.json"}


class TestValidateManifest:
    @pytest.fixture
    def valid_manifest(self):
        return build_manifest(ANCHOR_CONFIG, dict(STATS), FILES)

    def test_built_manifest_is_valid(self, valid_manifest):
        assert validate_manifest(valid_manifest) == []

    def test_missing_fields(self):
        errors = validate_manifest({"schema_version": "1.0"})
        assert any("Missing required" in e for e in errors)

    def test_missing_stats_fields(self, valid_manifest):
        del valid_manifest["stats"]["restarts"]
        errors = validate_manifest(valid_manifest)
        assert any("restarts" in e for e in errors)

    def test_bad_timestamp(self, valid_manifest):
        valid_manifest["timestamp"] = "yesterday"
        errors = validate_manifest(valid_manifest)
        assert any("ISO 8601" in e for e in errors)

    def test_tags_must_be_list(self, valid_manifest):
        valid_manifest["tags"] = "a,b"
        assert any("tags" in e for e in validate_manifest(valid_manifest))

    def test_metadata_hashes(self, valid_manifest):
        meta = valid_manifest["metadata"]
        assert set(meta) == {"code_hash", "config_hash", "dataset_config_hash"}
        assert meta["config_hash"] != meta["dataset_config_hash"]


class TestWriteManifest:
    def test_write_and_load(self, tmp_path):
        manifest = build_manifest(ANCHOR_CONFIG, dict(STATS), FILES)
        path = write_manifest(manifest, tmp_path)
        assert path.name == "manifest.json"
        assert load_manifest(path) == json.loads(json.dumps(manifest))

    def test_write_invalid_raises(self, tmp_path):
        with pytest.raises(ValueError, match="validation failed"):
            write_manifest({"schema_version": "1.0"}, tmp_path)
        assert not (tmp_path / "manifest.json").exists()

    def test_load_invalid_raises(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps({"schema_version": 1}))
        with pytest.raises(ValueError):
            load_manifest(path)


class TestRunId:
    def test_format(self):
        run_id = generate_run_id(ANCHOR_CONFIG)
        assert re.match(
            r"^n8_m12_degree_floor_q100_s42_\d{8}_\d{6}$", run_id
        ), run_id

    def test_bernoulli_uses_probability(self):
        cfg = DatasetConfig(
            graph=GraphConfig(
                node_count=11, target_edge_count=None, mode="bernoulli"
            ),
        )
        assert generate_run_id(cfg).startswith("n11_p50_bernoulli_")

    def test_seed_in_id(self):
        assert "_s7_" in generate_run_id(replace(ANCHOR_CONFIG, seed=7))
