import os

import pytest

from darmogen.pipeline import OutputValidationError
from darmogen.pipeline.writer import AtomicWriter, validate_dart

VALID = "class User extends Model {\n  String name;\n}\n"


class TestValidateDart:
    """Test cases for structural validation of generated Dart"""

    def test_valid(self):
        validate_dart(VALID)
        validate_dart("import 'a.dart';\n\nabstract class A {}\n")

    def test_no_class(self):
        with pytest.raises(OutputValidationError, match="no class declaration"):
            validate_dart("import 'a.dart';\n")

    def test_unbalanced_braces(self):
        with pytest.raises(OutputValidationError, match="unbalanced braces"):
            validate_dart("class User {\n")

    def test_braces_in_line_comments_are_ignored(self):
        validate_dart("/// {@template user}\n" + VALID)
        validate_dart("  // closes }\n" + VALID)
        with pytest.raises(OutputValidationError, match="1 open, 0 close"):
            validate_dart("// }\nclass User {\n")


class TestAtomicWriter:
    """Test cases for atomic writes"""

    def test_write_creates_directories(self, tmp_path):
        target = tmp_path / "models" / "users" / "user.dart"
        AtomicWriter().write(target, VALID)

        assert target.read_text() == VALID
        assert os.listdir(target.parent) == ["user.dart"]

    def test_overwrite(self, tmp_path):
        target = tmp_path / "user.dart"
        target.write_text("old")
        AtomicWriter().write(target, VALID)

        assert target.read_text() == VALID

    def test_invalid_content_keeps_previous_file(self, tmp_path):
        target = tmp_path / "user.dart"
        target.write_text(VALID)

        with pytest.raises(OutputValidationError):
            AtomicWriter().write(target, "class Broken {")

        assert target.read_text() == VALID
        assert os.listdir(tmp_path) == ["user.dart"]

    def test_skip_validation(self, tmp_path):
        target = tmp_path / "notes.txt"
        AtomicWriter().write(target, "plain text", validate=False)
        assert target.read_text() == "plain text"

    def test_failed_replace_removes_temporary_file(self, tmp_path, monkeypatch):
        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError, match="disk full"):
            AtomicWriter().write(tmp_path / "user.dart", VALID)

        assert os.listdir(tmp_path) == []
