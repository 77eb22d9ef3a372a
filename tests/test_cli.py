import hashlib
import json
import os
from pathlib import Path

import pytest

from Tree_Digest.__main__ import main
from Tree_Digest.cli import hash_tree as hash_tree_cli
from Tree_Digest.output.reader import read_hashes


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)


# ----------------------------
# Settings
# ----------------------------

def test_load_settings_defaults(tmp_path: Path):
    settings = hash_tree_cli.load_settings(tmp_path)

    assert settings == hash_tree_cli.DEFAULT_SETTINGS
    assert settings is not hash_tree_cli.DEFAULT_SETTINGS


def test_load_settings_merges_sections(tmp_path: Path):
    settings_path = tmp_path / ".tree_digest" / "settings.json"
    settings_path.parent.mkdir()
    settings_path.write_text(json.dumps({"hash": {"algorithm": "md5"}, "extra": 1}))

    settings = hash_tree_cli.load_settings(tmp_path)

    assert settings["hash"] == {"algorithm": "md5", "buffer_size": 8192}
    assert settings["output"]["relative_paths"] is False
    assert settings["extra"] == 1


def test_load_settings_explicit_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        hash_tree_cli.load_settings(settings_path=tmp_path / "nope.json")


def test_load_settings_invalid_json(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")

    with pytest.raises(ValueError):
        hash_tree_cli.load_settings(settings_path=bad)


def test_load_settings_scalar_section(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"hash": "md5"}))

    with pytest.raises(ValueError, match="section 'hash' must be an object"):
        hash_tree_cli.load_settings(settings_path=bad)


def test_apply_overrides_ignores_none():
    settings = hash_tree_cli.load_settings()

    hash_tree_cli.apply_overrides(settings, algorithm="sha256", buffer_size=None, timeout=5.0)

    assert settings["hash"] == {"algorithm": "sha256", "buffer_size": 8192}
    assert settings["run"]["timeout"] == 5.0


@pytest.mark.asyncio
async def test_run_writes_to_stream(tmp_path: Path, make_tree):
    import io

    root = make_tree(tmp_path / "input", {"f": "f"})
    stream = io.StringIO()

    settings = hash_tree_cli.load_settings(tmp_path)
    settings["output"]["relative_paths"] = True

    entries = await hash_tree_cli.run(root=root, settings=settings, stream=stream)

    assert len(entries) == 2
    assert stream.getvalue().splitlines() == [
        f"input/f: {entries[0].digest}",
        f"input: {entries[1].digest}",
    ]


# ----------------------------
# Command line
# ----------------------------

def test_main_prints_hashes(tmp_path: Path, capsys):
    f = tmp_path / "file"
    f.write_bytes(b"text to be written to file")

    assert main([str(f)]) == 0

    out = capsys.readouterr().out
    assert out == f"{f}: {hashlib.sha512(b'text to be written to file').hexdigest()}\n"


def test_main_writes_output_file(tmp_path: Path, make_tree):
    root = make_tree(tmp_path / "input", {"a": "a", "sub/b": "b"})
    output = tmp_path / "out" / "hashes.txt"

    assert main([str(root), "-a", "sha256", "-b", "16", "-o", str(output)]) == 0

    hashes = read_hashes(output)
    assert hashes[root / "a"] == hashlib.sha256(b"a").hexdigest()
    assert len(hashes) == 4


def test_main_uses_settings_file(tmp_path: Path, capsys):
    (tmp_path / "f").write_bytes(b"x")
    settings = tmp_path / "custom.json"
    settings.write_text(json.dumps({"hash": {"algorithm": "md5"}}))

    assert main([str(tmp_path / "f"), "--settings", str(settings)]) == 0

    out = capsys.readouterr().out
    assert out.strip().endswith(hashlib.md5(b"x").hexdigest())


def test_main_rejects_scalar_settings_section(tmp_path: Path, capsys):
    (tmp_path / "f").write_bytes(b"x")
    settings = tmp_path / "custom.json"
    settings.write_text(json.dumps({"output": True}))

    assert main([str(tmp_path / "f"), "--settings", str(settings)]) == 1

    assert "must be an object" in capsys.readouterr().err


def test_main_prints_undecodable_name(tmp_path: Path, capsysbinary):
    root = tmp_path / "input"
    root.mkdir()
    try:
        (root / os.fsdecode(b"caf\xe9")).write_bytes(b"x")
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects names that are not valid UTF-8")

    assert main([str(root)]) == 0

    out = capsysbinary.readouterr().out
    digest = hashlib.sha512(b"x").hexdigest().encode()
    assert os.fsencode(root) + b"/caf\xe9: " + digest + b"\n" in out


def test_main_missing_root(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing")]) == 1

    err = capsys.readouterr().err
    assert "not found" in err


def test_main_unsupported_algorithm(tmp_path: Path, capsys):
    assert main([str(tmp_path), "-a", "no-such-hash"]) == 1

    assert "no-such-hash" in capsys.readouterr().err


def test_main_failed_run_writes_nothing(tmp_path: Path, make_tree, monkeypatch):
    from Tree_Digest.core.errors import UnreadableFile
    from Tree_Digest.core.walker import TreeHasher

    root = make_tree(tmp_path / "input", {"a": "a"})
    output = tmp_path / "hashes.txt"

    def failing(self, path):
        raise UnreadableFile(path, "Input/output error")

    monkeypatch.setattr(TreeHasher, "_on_file", failing)

    assert main([str(root), "-o", str(output)]) == 1
    assert not output.exists()


def test_main_requires_root():
    with pytest.raises(SystemExit) as info:
        main([])

    assert info.value.code == 2


def test_main_lists_algorithms(capsys):
    assert main(["--list-algorithms"]) == 0

    names = capsys.readouterr().out.split()
    assert "sha512" in names
