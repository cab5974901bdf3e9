import sys

import pytest

from pm2md.errors import DestinationError, DestinationExistsError
from pm2md.generator.destination import (
    Destination,
    create_unique_file_name,
    format_file_name,
    resolve_destination,
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCreateUniqueFileName:
    def test_unused_name_is_unchanged(self, workdir):
        assert create_unique_file_name("README", ".md") == "README.md"

    def test_existing_name_gets_suffix(self, workdir):
        (workdir / "README.md").write_text("x")
        assert create_unique_file_name("README", ".md") == "README(1).md"

    def test_empty_extension(self, workdir):
        (workdir / "LICENSE").write_text("x")
        assert create_unique_file_name("LICENSE", "") == "LICENSE(1)"

    def test_first_free_suffix_is_used(self, workdir):
        for name in ("a.md", "a(1).md", "a(2).md"):
            (workdir / name).write_text("x")
        assert create_unique_file_name("a", ".md") == "a(3).md"

    def test_gaps_are_not_filled_past_first_free(self, workdir):
        for name in ("a.md", "a(2).md"):
            (workdir / name).write_text("x")
        assert create_unique_file_name("a", ".md") == "a(1).md"

    def test_does_not_create_file(self, workdir):
        create_unique_file_name("new", ".txt")
        assert not (workdir / "new.txt").exists()

    @pytest.mark.parametrize("ext", ["md", ".", "a"])
    def test_invalid_extension(self, workdir, ext):
        with pytest.raises(ValueError):
            create_unique_file_name("README", ext)


class TestFormatFileName:
    def test_plain_name_is_unchanged(self):
        assert format_file_name("Users API") == "Users API"

    def test_illegal_characters_removed(self):
        assert format_file_name('Users API: v1/beta <"test">?*|') == "Users API v1beta test"

    def test_whitespace_collapsed_and_trimmed(self):
        assert format_file_name("  My\t\tAPI \n") == "My API"

    def test_surrounding_dots_trimmed(self):
        assert format_file_name("..hidden.") == "hidden"

    def test_only_illegal_characters(self):
        assert format_file_name("???") == ""


class TestResolveDestination:
    def test_stdout(self, workdir):
        destination = resolve_destination("-", "Users", replace=False)
        assert destination.name == "-"
        assert destination.is_stdout
        assert destination.sink is sys.stdout

    def test_generated_name(self, workdir):
        with resolve_destination("", "Users API", replace=False) as destination:
            destination.sink.write("# Users")
        assert destination.name == "Users API.md"
        assert (workdir / "Users API.md").read_text(encoding="utf-8") == "# Users"

    def test_generated_name_is_unique(self, workdir):
        (workdir / "Users API.md").write_text("old")
        with resolve_destination("", "Users API", replace=False) as destination:
            pass
        assert destination.name == "Users API(1).md"
        assert (workdir / "Users API.md").read_text() == "old"

    def test_generated_name_fallback(self, workdir):
        with resolve_destination("", "///", replace=False) as destination:
            pass
        assert destination.name == "collection.md"

    def test_given_name_is_created(self, workdir):
        with resolve_destination("docs.md", "Users", replace=False) as destination:
            destination.sink.write("hello")
        assert destination.name == "docs.md"
        assert (workdir / "docs.md").read_text() == "hello"

    def test_existing_file_requires_confirmation(self, workdir):
        (workdir / "docs.md").write_text("keep me")
        with pytest.raises(DestinationExistsError, match="--replace"):
            resolve_destination("docs.md", "Users", replace=False)
        assert (workdir / "docs.md").read_text() == "keep me"

    def test_existing_file_replaced_when_confirmed(self, workdir):
        (workdir / "docs.md").write_text("a much longer old content")
        with resolve_destination("docs.md", "Users", replace=True) as destination:
            destination.sink.write("new")
        assert (workdir / "docs.md").read_text() == "new"

    def test_unwritable_location(self, workdir):
        with pytest.raises(DestinationError):
            resolve_destination(str(workdir / "missing" / "docs.md"), "Users", replace=False)


class TestDestinationCleanup:
    def test_file_deleted_when_block_raises(self, workdir):
        with pytest.raises(RuntimeError):
            with resolve_destination("docs.md", "Users", replace=False) as destination:
                destination.sink.write("partial")
                raise RuntimeError("boom")
        assert destination.sink.closed
        assert not (workdir / "docs.md").exists()

    def test_file_kept_and_closed_on_success(self, workdir):
        with resolve_destination("docs.md", "Users", replace=False) as destination:
            destination.sink.write("done")
        assert destination.sink.closed
        assert (workdir / "docs.md").exists()

    def test_stdout_is_not_closed(self, capsys):
        with pytest.raises(RuntimeError):
            with Destination(name="-", sink=sys.stdout):
                sys.stdout.write("partial")
                raise RuntimeError("boom")
        assert not sys.stdout.closed
        assert capsys.readouterr().out == "partial"
