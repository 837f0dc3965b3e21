"""
Tests for AtomicWriter.
"""

from __future__ import annotations

import pytest

from toml_rpc_codegen.pipeline import AtomicWriter, GeneratedCodeError


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_creates_file(self, tmp_path):
        """Test writing a new file."""
        path = tmp_path / "out.rs"
        AtomicWriter().write(path, "pub struct A {}\n", "rust")
        assert path.read_text() == "pub struct A {}\n"

    def test_write_replaces_file(self, tmp_path):
        """Test that an existing file is replaced."""
        path = tmp_path / "out.py"
        path.write_text("old = 1\n")
        AtomicWriter().write(path, "new = 2\n", "python")
        assert path.read_text() == "new = 2\n"

    def test_invalid_python_is_not_written(self, tmp_path):
        """Test that invalid Python fails validation and leaves no files."""
        path = tmp_path / "out.py"
        with pytest.raises(GeneratedCodeError, match="not valid"):
            AtomicWriter().write(path, "class Broken(\n", "python")
        assert list(tmp_path.iterdir()) == []

    def test_unbalanced_rust_is_not_written(self, tmp_path):
        """Test the Rust structural check."""
        path = tmp_path / "out.rs"
        path.write_text("pub struct Old {}\n")
        with pytest.raises(GeneratedCodeError, match="unbalanced braces"):
            AtomicWriter().write(path, "pub struct A {\n", "rust")
        assert path.read_text() == "pub struct Old {}\n"
        assert [p.name for p in tmp_path.iterdir()] == ["out.rs"]

    def test_validation_can_be_skipped(self, tmp_path):
        """Test writing without validation."""
        path = tmp_path / "out.py"
        AtomicWriter().write(path, "class Broken(\n", "python", validate=False)
        assert path.read_text() == "class Broken(\n"

    def test_custom_validator(self, tmp_path):
        """Test that a custom validator replaces the default one."""
        seen = []
        writer = AtomicWriter(validate_rust=seen.append)
        writer.write(tmp_path / "out.rs", "{", "rust")
        assert seen == ["{"]

    def test_write_if_not_exists(self, tmp_path):
        """Test that existing files are not overwritten."""
        path = tmp_path / "out.rs"
        writer = AtomicWriter()
        writer.write_if_not_exists(path, "pub struct A {}\n", "rust")
        with pytest.raises(FileExistsError):
            writer.write_if_not_exists(path, "pub struct B {}\n", "rust")
        assert path.read_text() == "pub struct A {}\n"

    def test_missing_directory(self, tmp_path):
        """Test that the target directory is not created."""
        with pytest.raises(OSError):
            AtomicWriter().write(tmp_path / "missing" / "out.rs", "", "rust")


if __name__ == "__main__":
    pytest.main([__file__])
