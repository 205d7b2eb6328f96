import json

from apexe.audit import AuditManager


def _entries(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_audit_manager_creates_file(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("cli.git.status", {}, "success", 0, 10)
    assert path.exists()


def test_audit_manager_appends_jsonl(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("cli.git.status", {}, "success", 0, 10)
    mgr.log_execution("cli.git.commit", {"m": "hi"}, "error", 1, 25)
    entries = _entries(path)
    assert len(entries) == 2
    assert [e["module_id"] for e in entries] == ["cli.git.status", "cli.git.commit"]


def test_audit_manager_entry_format(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("cli.git.push", {"branch": "main"}, "success", 0, 42)

    entry = json.loads(path.read_text(encoding="utf-8").strip())
    assert entry["module_id"] == "cli.git.push"
    assert entry["status"] == "success"
    assert entry["exit_code"] == 0
    assert entry["duration_ms"] == 42
    assert isinstance(entry["timestamp"], str)
    assert isinstance(entry["input_hash"], str)
    assert len(entry["input_hash"]) == 64


def test_audit_manager_log_path(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    assert mgr.log_path() == path


def test_audit_input_hash_hides_input(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("cli.git.commit", {"m": "hidden-message"}, "success", 0, 1)
    assert "hidden-message" not in path.read_text(encoding="utf-8")


def test_audit_same_input_same_hash_within_logger(tmp_path):
    path = tmp_path / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("a", {"x": 1, "y": 2}, "success", 0, 1)
    mgr.log_execution("a", {"y": 2, "x": 1}, "success", 0, 1)
    mgr.log_execution("a", {"x": 3}, "success", 0, 1)
    hashes = [e["input_hash"] for e in _entries(path)]
    assert hashes[0] == hashes[1]
    assert hashes[0] != hashes[2]


def test_audit_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "audit.jsonl"
    mgr = AuditManager(path)
    mgr.log_execution("cli.ls", {}, "success", 0, 3)
    assert len(_entries(path)) == 1