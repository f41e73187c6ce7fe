"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest

from .. import main as cli_main
from ..main import build_config, create_parser, main


def make_file(root: Path, relative: str, size: int = 10) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


class TestMain:
    """Test cases for the CLI entry point."""

    @pytest.fixture
    def movie_dir(self, tmp_path: Path) -> Path:
        root = tmp_path / "movies"
        make_file(root, "Drama/Titanic (1997).mkv", size=2048)
        make_file(root, "Drama/Director's Cut/Heat (1995).mkv")
        make_file(root, "Drama/Old/Titanic (1997).mkv")
        make_file(root, "Comedy/Airplane! (1980).avi")
        make_file(root, "Comedy/notes.txt")
        return root

    def test_no_arguments_prints_help(self, capsys) -> None:
        """Test that running without --scan prints help and fails."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_scan_text_output(self, movie_dir: Path, capsys) -> None:
        """Test the text report."""
        assert main(["--scan", str(movie_dir), "--log-level", "ERROR"]) == 0

        out = capsys.readouterr().out
        assert "Movie rips found: 3" in out
        assert "Duplicates skipped: 1" in out
        assert "Titanic (1997) [.mkv] Drama" in out
        assert "Airplane! (1980) [.avi] Comedy" in out
        assert "Comedy: 1" in out
        assert "Drama: 2" in out

    def test_scan_detailed_output(self, movie_dir: Path, capsys) -> None:
        """Test that the detailed report shows folders and duplicates."""
        assert main(["--scan", str(movie_dir), "--detailed", "--log-level", "ERROR"]) == 0

        out = capsys.readouterr().out
        assert "Folder: Director's Cut" in out
        assert "DUPLICATES" in out

    def test_scan_json_output(self, movie_dir: Path, capsys) -> None:
        """Test JSON output of the scan result."""
        assert main(["--scan", str(movie_dir), "--output-format", "json", "--log-level", "ERROR"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [rip["title"] for rip in data["rips"]] == ["Airplane!", "Heat", "Titanic"]
        assert data["rips"][1]["parent_folder"] == "Director's Cut"
        assert len(data["duplicates"]) == 1

    def test_scan_with_genre_and_extension_overrides(self, movie_dir: Path, capsys) -> None:
        """Test that --genres and --extensions replace the defaults."""
        args = [
            "--scan", str(movie_dir),
            "--genres", "Comedy",
            "--extensions", "avi",
            "--output-format", "json",
            "--log-level", "ERROR",
        ]
        assert main(args) == 0

        data = json.loads(capsys.readouterr().out)
        assert [rip["title"] for rip in data["rips"]] == ["Airplane!"]

    def test_scan_merge_duplicates(self, tmp_path: Path, capsys) -> None:
        """Test that --merge-duplicates merges genres of duplicates."""
        make_file(tmp_path, "Comedy/Heat (1995).mkv")
        make_file(tmp_path, "Drama/Heat (1995).mkv")

        args = ["--scan", str(tmp_path), "--merge-duplicates", "--output-format", "json",
                "--log-level", "ERROR"]
        assert main(args) == 0

        data = json.loads(capsys.readouterr().out)
        assert sorted(data["rips"][0]["genres"]) == ["Comedy", "Drama"]

    def test_scan_with_config_file(self, movie_dir: Path, tmp_path: Path, capsys) -> None:
        """Test loading genres from a JSON configuration file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"genres": ["Comedy"]}))

        args = ["--scan", str(movie_dir), "--config", str(config_file), "--output-format", "json",
                "--log-level", "ERROR"]
        assert main(args) == 0

        data = json.loads(capsys.readouterr().out)
        titanic = next(rip for rip in data["rips"] if rip["title"] == "Titanic")
        # Drama is not a genre here; the last genre seen, Comedy, is still in effect
        assert titanic["genres"] == ["Comedy"]
        assert titanic["parent_folder"] == "Drama"

    def test_scan_invalid_directory(self, tmp_path: Path, capsys) -> None:
        """Test that a missing directory exits with an error."""
        assert main(["--scan", str(tmp_path / "missing"), "--log-level", "ERROR"]) == 1

        assert "does not exist or is not a directory" in capsys.readouterr().out

    def test_scan_invalid_config_file(self, movie_dir: Path, tmp_path: Path, capsys) -> None:
        """Test that a bad configuration file exits with an error."""
        config_file = tmp_path / "config.json"
        config_file.write_text("not json")

        args = ["--scan", str(movie_dir), "--config", str(config_file), "--log-level", "ERROR"]
        assert main(args) == 1

        assert "Invalid configuration" in capsys.readouterr().out

    def test_parser_defaults(self) -> None:
        """Test argument defaults."""
        args = create_parser().parse_args(["--scan", "/movies"])

        assert args.scan == Path("/movies")
        assert args.log_level is None
        assert args.output_format == "text"
        assert not args.merge_duplicates
        assert args.genres is None

    def test_config_file_log_level_applied(self, movie_dir: Path, tmp_path: Path, monkeypatch) -> None:
        """Test that the log level from the config file is used when no flag is given."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"log_level": "DEBUG"}))
        levels = []
        monkeypatch.setattr(cli_main, "setup_logging", levels.append)

        args = create_parser().parse_args(["--scan", str(movie_dir), "--config", str(config_file)])
        assert build_config(args).log_level == "DEBUG"

        assert main(["--scan", str(movie_dir), "--config", str(config_file)]) == 0
        assert levels == ["DEBUG"]

    def test_log_level_flag_overrides_config_file(
        self, movie_dir: Path, tmp_path: Path, monkeypatch
    ) -> None:
        """Test that --log-level takes precedence over the config file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"log_level": "DEBUG"}))
        levels = []
        monkeypatch.setattr(cli_main, "setup_logging", levels.append)

        args = ["--scan", str(movie_dir), "--config", str(config_file), "--log-level", "ERROR"]
        assert main(args) == 0
        assert levels == ["ERROR"]

    def test_log_level_defaults_to_info(self, movie_dir: Path, monkeypatch) -> None:
        """Test that without flag or config file the log level is INFO."""
        levels = []
        monkeypatch.setattr(cli_main, "setup_logging", levels.append)

        assert main(["--scan", str(movie_dir)]) == 0
        assert levels == ["INFO"]
