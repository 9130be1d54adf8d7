import pytest

from shipper.discovery import discover_files
from shipper.exceptions import PatternError

def test_no_matches_is_empty(inbox):
    assert discover_files(str(inbox / "*.json"), 5) == []

def test_returns_all_when_under_limit(write_json, inbox):
    for i in range(3):
        write_json(f"file{i}.json", {"key": "value"})
    files = discover_files(str(inbox / "*.json"), 5)
    assert [p.rsplit("/", 1)[-1] for p in files] == ["file0.json", "file1.json", "file2.json"]

def test_truncates_to_max_in_discovery_order(write_json, inbox):
    for i in range(10):
        write_json(f"file{i:02d}.json", {"n": i})
    files = discover_files(str(inbox / "*.json"), 5)
    assert len(files) == 5
    assert [p.rsplit("/", 1)[-1] for p in files] == [f"file{i:02d}.json" for i in range(5)]

def test_exactly_max_files(write_json, inbox):
    for i in range(5):
        write_json(f"f{i}.json", {})
    assert len(discover_files(str(inbox / "*.json"), 5)) == 5

def test_only_matching_regular_files(write_json, inbox):
    write_json("a.json", {})
    write_json("b.txt", "not json")
    (inbox / "dir.json").mkdir()
    files = discover_files(str(inbox / "*.json"), 5)
    assert [p.rsplit("/", 1)[-1] for p in files] == ["a.json"]

@pytest.mark.parametrize("pattern", ["", "/tmp/[abc", "/tmp/foo[!", "/tmp/x\x00.json"])
def test_bad_pattern_raises(pattern):
    with pytest.raises(PatternError):
        discover_files(pattern, 5)

def test_bracket_class_is_valid(write_json, inbox):
    write_json("a1.json", {})
    write_json("b1.json", {})
    files = discover_files(str(inbox / "[a]*.json"), 5)
    assert [p.rsplit("/", 1)[-1] for p in files] == ["a1.json"]

def test_wildcard_matches_dot_files(write_json, inbox):
    write_json(".a.json", {})
    write_json("b.json", {})
    files = discover_files(str(inbox / "*.json"), 5)
    assert [p.rsplit("/", 1)[-1] for p in files] == [".a.json", "b.json"]
