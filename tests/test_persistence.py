"""Tests for draft snapshots and persistence gateways."""

import json

import pytest

from onboarding.wizard import (
    DraftSnapshot,
    InMemoryGateway,
    JsonFileGateway,
    PersistenceError,
    WizardController,
)


@pytest.fixture
def snapshot():
    return DraftSnapshot(
        current_step_id="B",
        completed_step_ids=["A"],
        wizard_data={"A": {"name": "x", "note": None}},
        saved_at="2026-03-01T09:30:00",
    )


class TestDraftSnapshot:
    """Tests for the wire shape."""

    def test_camel_case_keys(self, snapshot):
        assert snapshot.to_dict() == {
            "currentStepId": "B",
            "completedStepIds": ["A"],
            "wizardData": {"A": {"name": "x", "note": None}},
            "savedAt": "2026-03-01T09:30:00",
        }

    def test_saved_at_omitted_when_unset(self):
        data = DraftSnapshot(current_step_id="A").to_dict()
        assert "savedAt" not in data

    def test_from_dict(self):
        snapshot = DraftSnapshot.from_dict({"currentStepId": "A", "completedStepIds": ["A", "A"]})

        assert snapshot.current_step_id == "A"
        assert snapshot.completed_step_ids == ["A"]
        assert snapshot.wizard_data == {}


class TestInMemoryGateway:
    """Tests for the in-memory adapter."""

    def test_empty(self):
        gateway = InMemoryGateway()
        assert gateway.load() is None
        assert not gateway.has_draft()

    def test_save_load_clear(self, snapshot):
        gateway = InMemoryGateway()
        gateway.save(snapshot)

        assert gateway.load() == snapshot
        assert gateway.has_draft()

        gateway.clear()
        assert gateway.load() is None
        assert len(gateway.saved) == 1

    def test_saved_copies_are_isolated(self, snapshot):
        gateway = InMemoryGateway()
        gateway.save(snapshot)

        snapshot.wizard_data["A"]["name"] = "changed"

        assert gateway.load().wizard_data["A"]["name"] == "x"


class TestJsonFileGateway:
    """Tests for the JSON file adapter."""

    def test_missing_file(self, tmp_path):
        gateway = JsonFileGateway(tmp_path / "draft.json")

        assert gateway.load() is None
        assert not gateway.has_draft()
        assert gateway.get_draft_info() is None

    def test_save_writes_camel_case_json(self, tmp_path, snapshot):
        path = tmp_path / "nested" / "draft.json"
        JsonFileGateway(path).save(snapshot)

        with open(path) as f:
            data = json.load(f)
        assert data["currentStepId"] == "B"
        assert data["wizardData"]["A"]["note"] is None

    def test_round_trip(self, tmp_path, snapshot):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        gateway.save(snapshot)

        assert gateway.load() == snapshot

    def test_clear(self, tmp_path, snapshot):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        gateway.save(snapshot)
        gateway.clear()

        assert not gateway.path.exists()
        gateway.clear()

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "draft.json"
        path.write_text("{not json")

        with pytest.raises(PersistenceError):
            JsonFileGateway(path).load()

    def test_wrong_shape_raises(self, tmp_path):
        path = tmp_path / "draft.json"
        path.write_text(json.dumps({"wizardData": {}}))

        with pytest.raises(PersistenceError):
            JsonFileGateway(path).load()

    def test_unserializable_data_raises(self, tmp_path):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        snapshot = DraftSnapshot(current_step_id="A", wizard_data={"A": {"when": object()}})

        with pytest.raises(PersistenceError):
            gateway.save(snapshot)

    def test_failed_save_keeps_previous_draft(self, tmp_path, snapshot):
        """An unserializable snapshot must not clobber the stored draft."""
        gateway = JsonFileGateway(tmp_path / "draft.json")
        gateway.save(snapshot)
        bad = DraftSnapshot(current_step_id="C", wizard_data={"C": {"when": object()}})

        with pytest.raises(PersistenceError):
            gateway.save(bad)

        assert gateway.load() == snapshot
        assert not (tmp_path / "draft.json.tmp").exists()

    def test_failed_autosave_keeps_resumable_draft(self, tmp_path, abc_steps):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        controller = WizardController(abc_steps, gateway=gateway)
        controller.complete_step("A", {"name": "x"})

        assert controller.complete_step("B", {"when": object()})

        resumed = WizardController(abc_steps, restored_state=gateway.load())
        assert resumed.current_step_id == "B"
        assert resumed.completed_step_ids == {"A"}

    def test_draft_info(self, tmp_path, snapshot):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        gateway.save(snapshot)

        info = gateway.get_draft_info()
        assert info["current_step_id"] == "B"
        assert info["completed_steps"] == 1
        assert info["saved_at"] == "2026-03-01T09:30:00"

    def test_draft_info_on_corrupt_file(self, tmp_path):
        path = tmp_path / "draft.json"
        path.write_text("[]")

        assert JsonFileGateway(path).get_draft_info() is None

    def test_controller_resumes_from_file(self, tmp_path, abc_steps):
        gateway = JsonFileGateway(tmp_path / "draft.json")
        controller = WizardController(abc_steps, gateway=gateway)
        controller.complete_step("A", {"name": "x"})

        resumed = WizardController(abc_steps, restored_state=gateway.load())

        assert resumed.current_step_id == "B"
        assert dict(resumed.wizard_data) == {"A": {"name": "x"}}
