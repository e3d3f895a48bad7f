from pathlib import Path

import pytest

from printprep.paths import check_output_pattern, describe_path, expand_inputs, output_path


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_expand_inputs_globs_and_sorts(tmp_path: Path) -> None:
    _touch(tmp_path / "b.jpg")
    _touch(tmp_path / "a.jpg")
    _touch(tmp_path / "c.png")

    files = expand_inputs([str(tmp_path / "*.jpg")])
    assert [file.name for file in files] == ["a.jpg", "b.jpg"]


def test_expand_inputs_deduplicates_and_skips_directories(tmp_path: Path) -> None:
    _touch(tmp_path / "a.jpg")
    (tmp_path / "folder.jpg").mkdir()

    files = expand_inputs([str(tmp_path / "*.jpg"), str(tmp_path / "a.jpg")])
    assert [file.name for file in files] == ["a.jpg"]


def test_expand_inputs_keeps_pattern_order(tmp_path: Path) -> None:
    _touch(tmp_path / "a.jpg")
    _touch(tmp_path / "sub" / "z.jpg")

    files = expand_inputs([str(tmp_path / "sub" / "*.jpg"), str(tmp_path / "*.jpg")])
    assert [file.name for file in files] == ["z.jpg", "a.jpg"]


def test_expand_inputs_without_matches_fails(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No input files"):
        expand_inputs([str(tmp_path / "*.jpg")])


def test_output_path_replaces_placeholder() -> None:
    assert output_path(Path("photos/img-001.jpg"), "out/*-print.png") == Path("out/img-001-print.png")
    assert output_path(Path("photos/img-001.jpg"), "out/single.jpg") == Path("out/single.jpg")


def test_check_output_pattern() -> None:
    many = [Path("a.jpg"), Path("b.jpg"), Path("c.jpg")]
    check_output_pattern("out/*.jpg", many)
    check_output_pattern("out/single.jpg", [Path("a.jpg")])

    with pytest.raises(ValueError, match="placeholder"):
        check_output_pattern("out/single.jpg", many[:2])
    with pytest.raises(ValueError, match="extension"):
        check_output_pattern("out/*", many[:1])


def test_check_output_pattern_rejects_colliding_outputs() -> None:
    files = [Path("2023/img.jpg"), Path("2024/img.jpg")]

    with pytest.raises(ValueError, match="both be written to"):
        check_output_pattern("out/*.jpg", files)
    check_output_pattern("out/*.jpg", [Path("2023/img.jpg"), Path("2024/img-2.jpg")])


def test_describe_path(tmp_path: Path) -> None:
    path = Path("photos") / "img.jpg"
    assert describe_path(path) == "img.jpg"
    assert describe_path(path, full=True) == str(path)
    assert describe_path(path, absolute=True) == str(path.absolute())
