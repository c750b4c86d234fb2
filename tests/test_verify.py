"""
Tests for installation verification.
"""

import pytest

from src.core.errors import VerificationError
from src.core.services.verify import query_version, verify_installation


class TestQueryVersion:
    def test_reads_first_line(self, make_exe, make_context):
        make_exe("rustc", 'echo "rustc 1.82.0 (f6e511eec 2024-10-15)"; echo extra')
        assert query_version("rustc", make_context()) == "rustc 1.82.0 (f6e511eec 2024-10-15)"

    def test_failing_query_is_empty(self, make_exe, make_context):
        make_exe("rustc", 'echo "broken" >&2; exit 1')
        assert query_version("rustc", make_context()) == ""

    def test_missing_binary_is_empty(self, make_context):
        assert query_version("rustc", make_context()) == ""


class TestVerifyInstallation:
    def test_both_present(self, make_exe, make_context):
        make_exe("rustc", 'echo "rustc 1.82.0"')
        make_exe("cargo", 'echo "cargo 1.82.0"')
        report = verify_installation(make_context())
        assert report.rustc_version == "rustc 1.82.0"
        assert report.cargo_version == "cargo 1.82.0"
        assert report.to_dict() == {"rustc": "rustc 1.82.0", "cargo": "cargo 1.82.0"}

    def test_version_failure_does_not_abort(self, make_exe, make_context):
        make_exe("rustc", "exit 1")
        make_exe("cargo", 'echo "cargo 1.82.0"')
        report = verify_installation(make_context())
        assert report.rustc_version == ""
        assert report.cargo_version == "cargo 1.82.0"

    def test_both_missing(self, make_context):
        with pytest.raises(VerificationError, match="Rust components not found"):
            verify_installation(make_context())

    def test_one_missing(self, make_exe, make_context):
        make_exe("rustc", 'echo "rustc 1.82.0"')
        with pytest.raises(VerificationError, match="cargo"):
            verify_installation(make_context())

    def test_found_in_cargo_bin(self, make_exe, make_context, home):
        cargo_bin = home / ".cargo" / "bin"
        make_exe("rustc", 'echo "rustc 1.82.0"', directory=cargo_bin)
        make_exe("cargo", 'echo "cargo 1.82.0"', directory=cargo_bin)
        ctx = make_context()
        with pytest.raises(VerificationError):
            verify_installation(ctx)
        assert verify_installation(ctx.with_path_prefix(ctx.cargo_bin)).cargo_version
