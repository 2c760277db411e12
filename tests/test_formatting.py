"""Tests for splitting empty tag pairs onto two lines."""

import logging
from pathlib import Path

from nuget_version_updater.formatting import normalize_empty_tag_pairs, split_empty_tag_pairs


class TestSplitEmptyTagPairs:
    """Tests for the line-level transformation."""

    def test_splits_pair_keeping_indent(self):
        """Test an empty pair becomes open and close tag lines."""
        lines, replaced = split_empty_tag_pairs(["    <FileUpgradeFlags></FileUpgradeFlags>"])

        assert replaced == 1
        assert lines == ["    <FileUpgradeFlags>", "    </FileUpgradeFlags>"]

    def test_splits_pair_with_attributes(self):
        """Test attributes on the open tag are kept."""
        lines, replaced = split_empty_tag_pairs(['  <Compile Include="a.cs"></Compile>'])

        assert replaced == 1
        assert lines == ['  <Compile Include="a.cs">', "  </Compile>"]

    def test_leaves_other_lines_alone(self):
        """Test elements with content, self-closing tags and comments pass through."""
        original = [
            "<Project>",
            "  <Version>1.0.0</Version>",
            '  <PackageReference Include="Foo" Version="1.0.0" />',
            "  <Empty/></Empty>",
            "  <!-- comment -->",
            "</Project>",
        ]
        lines, replaced = split_empty_tag_pairs(original)

        assert replaced == 0
        assert lines == original

    def test_mismatched_pair_is_logged_and_kept(self, caplog):
        """Test a pair whose names differ is passed through with a warning."""
        lines, replaced = split_empty_tag_pairs(["  <Alpha></Beta>", "  <Gamma></Gamma>"])

        assert replaced == 1
        assert lines == ["  <Alpha></Beta>", "  <Gamma>", "  </Gamma>"]
        assert "Unbalanced XML tag pair: <Alpha></Beta>" in caplog.text
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_byte_order_mark_kept_before_opening_tag(self):
        """Test a line starting with a byte order mark is still split."""
        lines, replaced = split_empty_tag_pairs(["\ufeff<Project></Project>"])

        assert replaced == 1
        assert lines == ["\ufeff<Project>", "</Project>"]


class TestNormalizeEmptyTagPairs:
    """Tests for the in-place file pass."""

    def test_rewrites_file_with_crlf(self, temp_dir: Path):
        """Test the file is replaced and every line ends with CRLF."""
        path = temp_dir / "App.csproj"
        path.write_bytes(b"<Project>\r\n  <A></A>\r\n</Project>\r\n")

        assert normalize_empty_tag_pairs(path) is True
        assert path.read_bytes() == b"<Project>\r\n  <A>\r\n  </A>\r\n</Project>\r\n"

    def test_unchanged_file_is_left_alone(self, temp_dir: Path):
        """Test nothing is replaced when no pair is found."""
        path = temp_dir / "App.csproj"
        original = b"<Project>\n  <A>x</A>\n</Project>"
        path.write_bytes(original)

        assert normalize_empty_tag_pairs(path) is False
        assert path.read_bytes() == original

    def test_no_temporary_files_left(self, temp_dir: Path):
        """Test the temporary file is gone whether or not it was used."""
        changed = temp_dir / "Changed.csproj"
        changed.write_text("<Project>\n  <A></A>\n</Project>\n", encoding="utf-8")
        same = temp_dir / "Same.csproj"
        same.write_text("<Project />\n", encoding="utf-8")

        normalize_empty_tag_pairs(changed)
        normalize_empty_tag_pairs(same)

        assert sorted(p.name for p in temp_dir.iterdir()) == ["Changed.csproj", "Same.csproj"]

    def test_keeps_byte_order_mark(self, temp_dir: Path):
        """Test a UTF-8 BOM at the start of the file survives."""
        path = temp_dir / "App.csproj"
        path.write_bytes(b"\xef\xbb\xbf<Project>\r\n  <A></A>\r\n</Project>\r\n")

        assert normalize_empty_tag_pairs(path) is True
        assert path.read_bytes().startswith(b"\xef\xbb\xbf<Project>\r\n  <A>\r\n")

    def test_pair_on_first_line_after_byte_order_mark(self, temp_dir: Path):
        """Test an empty root pair right after a UTF-8 BOM is split."""
        path = temp_dir / "App.csproj"
        path.write_bytes(b"\xef\xbb\xbf<Project></Project>\r\n")

        assert normalize_empty_tag_pairs(path) is True
        assert path.read_bytes() == b"\xef\xbb\xbf<Project>\r\n</Project>\r\n"

    def test_missing_file_is_logged(self, temp_dir: Path, caplog):
        """Test I/O errors are logged instead of raised."""
        path = temp_dir / "Missing.csproj"

        assert normalize_empty_tag_pairs(path) is False
        assert "Error updating XML tag formatting in file" in caplog.text
        assert not path.exists()
