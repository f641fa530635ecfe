"""Tests for opencode_dotenv.path_guard"""

import pytest

from opencode_dotenv.path_guard import PathGuard, expand_path, resolve

HOME = "/home/tester"
CWD = "/work/project"


class TestResolve:
    """Tests for the sandbox check"""

    def test_accepts_path_under_home(self):
        """Test {home}/some/path is accepted unchanged"""
        assert resolve(f"{HOME}/some/path", HOME, CWD) == f"{HOME}/some/path"

    def test_accepts_path_under_cwd(self):
        """Test {cwd}/subdir/file is accepted"""
        assert resolve(f"{CWD}/subdir/file", HOME, CWD) == f"{CWD}/subdir/file"

    def test_expands_tilde(self):
        """Test a leading ~ is replaced by the home directory"""
        assert resolve("~/.config/opencode/.env", HOME, CWD) == f"{HOME}/.config/opencode/.env"

    def test_relative_path_anchored_at_cwd(self):
        """Test relative paths resolve against cwd"""
        assert resolve(".env.local", HOME, CWD) == f"{CWD}/.env.local"
        assert resolve("./config/../.env", HOME, CWD) == f"{CWD}/.env"

    def test_normalizes_redundant_segments(self):
        """Test duplicate separators and dot segments are collapsed"""
        assert resolve(f"{HOME}//a/./b/", HOME, CWD) == f"{HOME}/a/b"

    @pytest.mark.parametrize(
        "raw",
        [
            "/etc/passwd",
            "~/../../../etc/passwd",
            "../../../etc/passwd",
            f"{CWD}/../../etc/shadow",
            "/tmp/.env",
        ],
    )
    def test_rejects_paths_outside_roots(self, raw):
        """Test traversal and absolute paths outside both roots are refused"""
        assert resolve(raw, HOME, CWD) is None

    @pytest.mark.parametrize("raw", [None, 42, ["~/.env"], {"path": "~/.env"}])
    def test_rejects_non_string(self, raw):
        """Test non-string input returns None"""
        assert resolve(raw, HOME, CWD) is None

    def test_tilde_only_replaced_at_start(self):
        """Test a ~ elsewhere in the path is left alone"""
        assert resolve("dir/~/x", HOME, CWD) == f"{CWD}/dir/~/x"

    def test_prefix_test_is_string_based(self):
        """Test a sibling directory sharing the home prefix is accepted"""
        # Plain prefix comparison, no canonicalization
        assert resolve(f"{HOME}-other/.env", HOME, CWD) == f"{HOME}-other/.env"

    def test_tilde_without_slash_joins_home(self):
        """Test ~foo is home with foo appended, not another user's home"""
        assert resolve("~foo", HOME, CWD) == f"{HOME}foo"


class TestExpandPath:
    """Tests for expand_path"""

    def test_absolute_path_unchanged(self):
        """Test an absolute path ignores cwd"""
        assert expand_path("/etc/passwd", HOME, CWD) == "/etc/passwd"

    def test_traversal_normalized(self):
        """Test .. climbs above home"""
        assert expand_path("~/../../../etc/passwd", HOME, CWD) == "/etc/passwd"


class TestPathGuard:
    """Tests for the bound PathGuard object"""

    def test_bound_roots(self):
        """Test PathGuard uses the roots it was built with"""
        guard = PathGuard(HOME, CWD)
        assert guard.resolve("~/.env") == f"{HOME}/.env"
        assert guard.is_allowed(".env")
        assert not guard.is_allowed("/etc/passwd")
