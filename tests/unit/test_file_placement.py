"""Tests for profile file placement."""

from devprofile.modules.file_placement import FilePlacer


class TestFilePlacer:
    def test_copies_file_to_home_destination(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (base_dir / "a.txt").write_text("exact content\n")

        result = FilePlacer(base_dir, paths).place({"a.txt": "~/b.txt"})

        assert (paths.home / "b.txt").read_text() == "exact content\n"
        assert result.copied == [(base_dir / "a.txt", paths.home / "b.txt")]
        assert result.skipped == []

    def test_creates_intermediate_directories(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        (base_dir / "ssh").mkdir(parents=True)
        (base_dir / "ssh" / "config").write_text("Host *\n")

        FilePlacer(base_dir, paths).place({"ssh/config": "~/.ssh/config"})

        assert (paths.home / ".ssh" / "config").read_text() == "Host *\n"

    def test_overwrites_existing_destination(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (base_dir / "npmrc").write_text("fund=false\n")
        (paths.home / ".npmrc").write_text("old\n")

        FilePlacer(base_dir, paths).place({"npmrc": "~/.npmrc"})

        assert (paths.home / ".npmrc").read_text() == "fund=false\n"

    def test_missing_source_is_skipped_and_others_still_copied(self, tmp_path, paths, caplog):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (base_dir / "present.txt").write_text("here")

        result = FilePlacer(base_dir, paths).place(
            {"absent.txt": "~/absent.txt", "present.txt": "~/present.txt"}
        )

        assert result.skipped == ["absent.txt"]
        assert (paths.home / "present.txt").read_text() == "here"
        assert not (paths.home / "absent.txt").exists()
        assert "Source file not found" in caplog.text

    def test_source_outside_profile_is_skipped(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (tmp_path / "secret.txt").write_text("nope")

        result = FilePlacer(base_dir, paths).place({"../secret.txt": "~/secret.txt"})

        assert result.skipped == ["../secret.txt"]
        assert not (paths.home / "secret.txt").exists()

    def test_symlinked_source_is_followed(self, tmp_path, paths):
        shared = tmp_path / "dotfiles"
        shared.mkdir()
        (shared / "gitconfig").write_text("[core]\n\teditor = nvim\n")
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (base_dir / "gitconfig").symlink_to(shared / "gitconfig")

        result = FilePlacer(base_dir, paths).place({"gitconfig": "~/.gitconfig"})

        assert result.skipped == []
        assert (paths.home / ".gitconfig").read_text() == "[core]\n\teditor = nvim\n"
        assert not (paths.home / ".gitconfig").is_symlink()

    def test_absolute_source_is_skipped(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (tmp_path / "outside.txt").write_text("nope")

        result = FilePlacer(base_dir, paths).place({str(tmp_path / "outside.txt"): "~/o.txt"})

        assert result.skipped == [str(tmp_path / "outside.txt")]

    def test_directory_source_is_skipped(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        (base_dir / "dir").mkdir(parents=True)

        result = FilePlacer(base_dir, paths).place({"dir": "~/dir"})

        assert result.skipped == ["dir"]

    def test_absolute_destination_is_used_as_is(self, tmp_path, paths):
        base_dir = tmp_path / "profile"
        base_dir.mkdir()
        (base_dir / "a.txt").write_text("x")
        destination = tmp_path / "elsewhere" / "a.txt"

        FilePlacer(base_dir, paths).place({"a.txt": str(destination)})

        assert destination.read_text() == "x"

    def test_no_files_is_noop(self, tmp_path, paths):
        result = FilePlacer(tmp_path, paths).place({})
        assert result.copied == []
        assert result.skipped == []
