"""
Tests for JSON snapshot persistence
"""
import json
import os
from pathlib import Path

from conftest import make_seed
from huntboard.core.competition import Competition
from huntboard.main import build_competition
from huntboard.models import Settings
from huntboard.seed_loader import load_seed
from huntboard.services.persistence import SnapshotWriter, load_snapshot, save_snapshot


ROOT = Path(__file__).parent.parent
TEAMS_PATH = str(ROOT / "data" / "teams.json")
CHALLENGES_PATH = str(ROOT / "data" / "challenges.json")


def _seed_from_files():
    return load_seed(TEAMS_PATH, CHALLENGES_PATH)


def test_snapshot_restores_mutations(tmp_path, competition):
    """A saved snapshot brings back the mutated state"""
    competition.toggle_completion("C", "C2")
    competition.add_personal_points("D", "d1", 4)
    path = tmp_path / "snapshot.json"

    assert save_snapshot(str(path), competition.snapshot())
    restored = load_snapshot(str(path))
    assert restored.to_wire() == competition.snapshot().to_wire()


def test_missing_or_corrupt_snapshot_is_ignored(tmp_path):
    """Unusable snapshots return None"""
    assert load_snapshot(None) is None
    assert load_snapshot(str(tmp_path / "missing.json")) is None

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert load_snapshot(str(corrupt)) is None

    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"teams": [], "challenges": []}), encoding="utf-8")
    assert load_snapshot(str(empty)) is None


def test_inconsistent_snapshot_is_ignored(tmp_path):
    """A snapshot breaking the accounting invariant is not restored"""
    seed = make_seed()
    seed.teams[0].points = 1000
    path = tmp_path / "snapshot.json"
    save_snapshot(str(path), seed)
    assert load_snapshot(str(path)) is None


def test_build_competition_prefers_snapshot(tmp_path):
    """Startup restores the snapshot, reset goes back to the seed"""
    source = Competition(_seed_from_files)
    source.toggle_completion("red", "c-photo-fountain")
    path = tmp_path / "snapshot.json"
    save_snapshot(str(path), source.snapshot())

    settings = Settings(
        teams_path=TEAMS_PATH,
        challenges_path=CHALLENGES_PATH,
        snapshot_path=str(path),
    )
    competition = build_competition(settings)
    assert competition.snapshot().find_team("red").points == 10

    competition.reset()
    assert competition.snapshot().find_team("red").points == 0


def test_save_snapshot_reports_failure(tmp_path):
    """An unwritable location returns False instead of raising"""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert not save_snapshot(str(blocker / "snapshot.json"), make_seed())


def test_failed_write_removes_temp_file(tmp_path, monkeypatch):
    """A failure after the temp file exists leaves no stray file behind"""
    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)
    path = tmp_path / "snapshot.json"

    assert not save_snapshot(str(path), make_seed())
    assert not path.exists()
    assert list(tmp_path.glob(".snapshot-*")) == []


def test_writer_drops_older_snapshot(tmp_path, competition):
    """A save that finishes late never overwrites a newer snapshot"""
    path = tmp_path / "snapshot.json"
    writer = SnapshotWriter(str(path))

    older_version, older = competition.store.versioned()
    competition.toggle_completion("C", "C2")
    newer_version, newer = competition.store.versioned()
    assert newer_version > older_version

    assert writer.write(newer_version, newer)
    assert not writer.write(older_version, older)
    assert writer.written_version == newer_version
    assert load_snapshot(str(path)).find_team("C").points == 20


def test_writer_keeps_version_after_failed_write(tmp_path):
    """A failed save does not advance the written version"""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    writer = SnapshotWriter(str(blocker / "snapshot.json"))

    assert not writer.write(3, make_seed())
    assert writer.written_version == -1
