"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from bsonwire import encode
from bsonwire.cli.main import main


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "bsonwire.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "bsonwire: Binary Document Codec" in result.stdout
    assert "--dump" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "bsonwire.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "bsonwire 0.1.0" in result.stdout


def test_cli_demo() -> None:
    """Test CLI --demo round trip."""
    result = subprocess.run(
        [sys.executable, "-m", "bsonwire.cli.main", "--demo"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "Decoded:" in result.stdout
    assert '"hello": "world"' in result.stdout
    assert "Round trip OK" in result.stdout


def test_cli_dump_file(tmp_path: Path) -> None:
    """Test CLI --dump with a file of concatenated documents."""
    path = tmp_path / "docs.bson"
    path.write_bytes(encode({"hello": "world"}) + encode({"BSON": ["awesome", 5.05, 1986]}))

    result = subprocess.run(
        [sys.executable, "-m", "bsonwire.cli.main", "--dump", str(path)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "2 documents in" in result.stdout
    assert '"hello": "world"' in result.stdout
    assert "1986" in result.stdout


def test_cli_dump_missing_file() -> None:
    """Test CLI --dump with missing file."""
    result = subprocess.run(
        [sys.executable, "-m", "bsonwire.cli.main", "--dump", "nonexistent.bson"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 1
    assert "Error" in result.stderr or "not found" in result.stderr.lower()


def test_cli_dump_corrupt_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --dump with a truncated document."""
    path = tmp_path / "broken.bson"
    path.write_bytes(encode({"hello": "world"})[:-3])

    assert main(["--dump", str(path)]) == 1
    assert "Error decoding" in capsys.readouterr().err


def test_cli_no_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with no command prints help."""
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_cli_dump_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --dump with a directory instead of a file."""
    assert main(["--dump", str(tmp_path)]) == 1
    assert "Error" in capsys.readouterr().err
